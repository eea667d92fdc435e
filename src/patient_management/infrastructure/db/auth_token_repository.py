"""SQLAlchemy adapter for opaque auth token persistence."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from uuid import UUID

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from patient_management.application.ports.auth_token_repository_port import (
    AuthTokenCreateInput,
    AuthTokenRecord,
    AuthTokenRepositoryPort,
)
from patient_management.infrastructure.db.metadata import auth_tokens


class SqlAlchemyAuthTokenRepository(AuthTokenRepositoryPort):
    """Auth token repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_token(self, payload: AuthTokenCreateInput) -> AuthTokenRecord:
        """Persist a token hash row and return the inserted token record."""

        statement = sa.insert(auth_tokens).values(
            user_id=payload.user_id,
            token_hash=payload.token_hash,
            expires_at=payload.expires_at,
        ).returning(*auth_tokens.c)

        async with self._session_factory() as session:
            result = await session.execute(statement)
            await session.commit()

        return _to_auth_token_record(result.mappings().one())

    async def get_active_by_hash(self, *, token_hash: str) -> AuthTokenRecord | None:
        """Return token by hash when not revoked and not expired."""

        statement = sa.select(*auth_tokens.c).where(
            auth_tokens.c.token_hash == token_hash,
            auth_tokens.c.revoked_at.is_(None),
        ).limit(1)

        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            return None
        record = _to_auth_token_record(row)
        if record.expires_at <= datetime.now(tz=UTC):
            return None
        return record


def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive datetimes for timezone-aware columns.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _to_auth_token_record(row: sa.RowMapping) -> AuthTokenRecord:
    raw_user_id = row["user_id"]
    user_id = raw_user_id if isinstance(raw_user_id, UUID) else UUID(str(raw_user_id))
    revoked_at = cast(datetime | None, row["revoked_at"])
    return AuthTokenRecord(
        id=int(row["id"]),
        user_id=user_id,
        token_hash=cast(str, row["token_hash"]),
        issued_at=_as_utc(cast(datetime, row["issued_at"])),
        expires_at=_as_utc(cast(datetime, row["expires_at"])),
        revoked_at=_as_utc(revoked_at) if revoked_at is not None else None,
    )
