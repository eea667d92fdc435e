"""SQLAlchemy adapter for patient record persistence."""

from __future__ import annotations

from datetime import date
from typing import Any, cast
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from patient_management.application.ports.patient_repository_port import (
    PatientCreateInput,
    PatientRecord,
    PatientRepositoryPort,
    PatientUpdateInput,
)
from patient_management.domain.patients.errors import EmailAlreadyExistsError
from patient_management.infrastructure.db.metadata import patients


class SqlAlchemyPatientRepository(PatientRepositoryPort):
    """Patient repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_patients(self) -> list[PatientRecord]:
        """Return all patients ordered by name, then id for stable output."""

        statement = sa.select(*patients.c).order_by(patients.c.name, patients.c.id)

        async with self._session_factory() as session:
            result = await session.execute(statement)

        return [_to_patient_record(row) for row in result.mappings().all()]

    async def get_by_id(self, *, patient_id: UUID) -> PatientRecord | None:
        statement = sa.select(*patients.c).where(patients.c.id == patient_id).limit(1)

        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            return None
        return _to_patient_record(row)

    async def exists_by_email(
        self,
        *,
        email: str,
        exclude_patient_id: UUID | None = None,
    ) -> bool:
        """Return whether `email` is used by a patient other than `exclude_patient_id`."""

        statement = sa.select(patients.c.id).where(patients.c.email == email)
        if exclude_patient_id is not None:
            statement = statement.where(patients.c.id != exclude_patient_id)

        async with self._session_factory() as session:
            result = await session.execute(statement.limit(1))

        return result.first() is not None

    async def create_patient(self, payload: PatientCreateInput) -> PatientRecord:
        statement = sa.insert(patients).values(
            id=uuid4(),
            name=payload.name,
            email=payload.email,
            address=payload.address,
            date_of_birth=payload.date_of_birth,
            registered_date=payload.registered_date,
        ).returning(*patients.c)

        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                await session.commit()
            except IntegrityError as error:
                await session.rollback()
                if _is_duplicate_email_error(error):
                    raise EmailAlreadyExistsError(email=payload.email) from error
                raise

        return _to_patient_record(result.mappings().one())

    async def update_patient(
        self,
        *,
        patient_id: UUID,
        payload: PatientUpdateInput,
    ) -> PatientRecord | None:
        statement = (
            sa.update(patients)
            .where(patients.c.id == patient_id)
            .values(
                name=payload.name,
                email=payload.email,
                address=payload.address,
                date_of_birth=payload.date_of_birth,
            )
            .returning(*patients.c)
        )

        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                await session.commit()
            except IntegrityError as error:
                await session.rollback()
                if _is_duplicate_email_error(error):
                    raise EmailAlreadyExistsError(email=payload.email) from error
                raise

        row = result.mappings().first()
        if row is None:
            return None
        return _to_patient_record(row)

    async def delete_patient(self, *, patient_id: UUID) -> bool:
        statement = sa.delete(patients).where(patients.c.id == patient_id)

        async with self._session_factory() as session:
            result = cast(CursorResult[Any], await session.execute(statement))
            await session.commit()

        return int(result.rowcount or 0) > 0


def _is_duplicate_email_error(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "uq_patients_email" in message or "patients.email" in message

def _to_patient_record(row: sa.RowMapping) -> PatientRecord:
    raw_patient_id = row["id"]
    patient_id = (
        raw_patient_id if isinstance(raw_patient_id, UUID) else UUID(str(raw_patient_id))
    )
    return PatientRecord(
        patient_id=patient_id,
        name=cast(str, row["name"]),
        email=cast(str, row["email"]),
        address=cast(str, row["address"]),
        date_of_birth=cast(date, row["date_of_birth"]),
        registered_date=cast(date, row["registered_date"]),
    )
