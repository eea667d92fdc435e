"""Bearer token header parsing."""

from __future__ import annotations


class MissingAuthTokenError(PermissionError):
    """Raised when a bearer token is required but not provided."""


class InvalidAuthTokenError(PermissionError):
    """Raised when bearer token header or persisted token is invalid."""


def extract_bearer_token(authorization_header: str | None) -> str:
    """Extract opaque token from standard `Authorization: Bearer <token>` header."""

    if authorization_header is None or not authorization_header.strip():
        raise MissingAuthTokenError("missing bearer token")

    parts = authorization_header.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise InvalidAuthTokenError("invalid bearer token header")

    return parts[1]


class InvalidCredentialsError(PermissionError):
    """Raised for any failed login; never says which credential was wrong."""

    def __init__(self) -> None:
        super().__init__("invalid email or password")
