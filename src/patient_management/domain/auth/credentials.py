"""Shared normalization and validation helpers for login credential inputs."""

from __future__ import annotations

from pydantic import EmailStr, TypeAdapter, ValidationError

MIN_PASSWORD_LENGTH = 8

FieldError = tuple[str, str]

_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


def normalize_user_email(*, email: str) -> str:
    """Normalize one user email and reject blank values."""

    normalized = email.strip().lower()
    if not normalized:
        raise ValueError("email cannot be blank")
    return normalized


def is_valid_email(value: str) -> bool:
    """Return whether `value` is shaped like an email address."""

    try:
        _EMAIL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_login_request(*, email: object, password: object) -> list[FieldError]:
    """Return `(field, message)` pairs for every invalid login field, in field order."""

    errors: list[FieldError] = []

    if not isinstance(email, str) or not email.strip():
        errors.append(("email", "Email is Required."))
    elif not is_valid_email(email.strip()):
        errors.append(("email", "Please Enter a Valid Email Address."))

    if not isinstance(password, str) or not password.strip():
        errors.append(("password", "Password is Required."))
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(
            ("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters Long.")
        )

    return errors
