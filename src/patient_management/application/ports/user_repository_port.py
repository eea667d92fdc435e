"""Port for user lookups used by authentication services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """User persistence model."""

    user_id: UUID
    email: str
    password_hash: str
    created_at: datetime


class UserRepositoryPort(Protocol):
    """User repository contract."""

    async def get_by_id(self, *, user_id: UUID) -> UserRecord | None:
        """Return user by id or None."""

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        """Return user by normalized email or None."""
