"""Opaque bearer token issuing and hashing."""

from __future__ import annotations

import hashlib
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

DEFAULT_TOKEN_TTL = timedelta(hours=10)


@dataclass(frozen=True)
class IssuedToken:
    """Freshly issued token; only `token_hash` is ever persisted."""

    token: str
    token_hash: str
    expires_at: datetime


def _default_token_factory() -> str:
    return secrets.token_urlsafe(32)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class OpaqueTokenService:
    """Issue random bearer tokens and derive their storage hashes."""

    def __init__(
        self,
        *,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        token_factory: Callable[[], str] = _default_token_factory,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._token_ttl = token_ttl
        self._token_factory = token_factory
        self._now = now

    def issue_token(self) -> IssuedToken:
        """Generate one token with its sha256 hash and expiry."""

        token = self._token_factory()
        return IssuedToken(
            token=token,
            token_hash=self.hash_token(token),
            expires_at=self._now() + self._token_ttl,
        )

    def hash_token(self, token: str) -> str:
        """Return deterministic hex digest used for token lookup."""

        return hashlib.sha256(token.encode("utf-8")).hexdigest()
