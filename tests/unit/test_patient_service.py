from __future__ import annotations

from dataclasses import replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from patient_management.application.ports.patient_repository_port import (
    PatientCreateInput,
    PatientRecord,
    PatientUpdateInput,
)
from patient_management.application.services.patient_service import PatientService
from patient_management.domain.patients.errors import (
    EmailAlreadyExistsError,
    PatientNotFoundError,
)


class InMemoryPatientRepository:
    def __init__(self) -> None:
        self.rows: dict[UUID, PatientRecord] = {}

    async def list_patients(self) -> list[PatientRecord]:
        return sorted(self.rows.values(), key=lambda record: record.name)

    async def get_by_id(self, *, patient_id: UUID) -> PatientRecord | None:
        return self.rows.get(patient_id)

    async def exists_by_email(
        self,
        *,
        email: str,
        exclude_patient_id: UUID | None = None,
    ) -> bool:
        return any(
            record.email == email and record.patient_id != exclude_patient_id
            for record in self.rows.values()
        )

    async def create_patient(self, payload: PatientCreateInput) -> PatientRecord:
        record = PatientRecord(
            patient_id=uuid4(),
            name=payload.name,
            email=payload.email,
            address=payload.address,
            date_of_birth=payload.date_of_birth,
            registered_date=payload.registered_date,
        )
        self.rows[record.patient_id] = record
        return record

    async def update_patient(
        self,
        *,
        patient_id: UUID,
        payload: PatientUpdateInput,
    ) -> PatientRecord | None:
        existing = self.rows.get(patient_id)
        if existing is None:
            return None
        updated = replace(
            existing,
            name=payload.name,
            email=payload.email,
            address=payload.address,
            date_of_birth=payload.date_of_birth,
        )
        self.rows[patient_id] = updated
        return updated

    async def delete_patient(self, *, patient_id: UUID) -> bool:
        return self.rows.pop(patient_id, None) is not None


def _create_input(*, name: str = "John Doe", email: str = "john@example.com") -> PatientCreateInput:
    return PatientCreateInput(
        name=name,
        email=email,
        address="123 Main St",
        date_of_birth=date(1985, 6, 15),
        registered_date=date(2024, 1, 10),
    )


def _update_input(*, email: str) -> PatientUpdateInput:
    return PatientUpdateInput(
        name="John Updated",
        email=email,
        address="456 Oak Ave",
        date_of_birth=date(1985, 6, 15),
    )


@pytest.mark.asyncio
async def test_create_and_list_patients() -> None:
    service = PatientService(patients=InMemoryPatientRepository())

    created = await service.create_patient(payload=_create_input())

    assert created.email == "john@example.com"
    assert await service.list_patients() == [created]


@pytest.mark.asyncio
async def test_create_with_existing_email_raises() -> None:
    service = PatientService(patients=InMemoryPatientRepository())
    await service.create_patient(payload=_create_input())

    with pytest.raises(EmailAlreadyExistsError) as exc_info:
        await service.create_patient(payload=_create_input(name="Other"))

    assert exc_info.value.email == "john@example.com"


@pytest.mark.asyncio
async def test_update_keeps_own_email_but_rejects_anothers() -> None:
    service = PatientService(patients=InMemoryPatientRepository())
    john = await service.create_patient(payload=_create_input())
    await service.create_patient(payload=_create_input(name="Jane", email="jane@example.com"))

    updated = await service.update_patient(
        patient_id=john.patient_id,
        payload=_update_input(email="john@example.com"),
    )
    assert updated.name == "John Updated"
    assert updated.registered_date == date(2024, 1, 10)

    with pytest.raises(EmailAlreadyExistsError):
        await service.update_patient(
            patient_id=john.patient_id,
            payload=_update_input(email="jane@example.com"),
        )


@pytest.mark.asyncio
async def test_update_unknown_patient_raises_not_found() -> None:
    service = PatientService(patients=InMemoryPatientRepository())
    missing_id = uuid4()

    with pytest.raises(PatientNotFoundError) as exc_info:
        await service.update_patient(
            patient_id=missing_id,
            payload=_update_input(email="x@example.com"),
        )

    assert exc_info.value.patient_id == missing_id


@pytest.mark.asyncio
async def test_delete_removes_patient_and_second_delete_raises() -> None:
    service = PatientService(patients=InMemoryPatientRepository())
    created = await service.create_patient(payload=_create_input())

    await service.delete_patient(patient_id=created.patient_id)

    assert await service.list_patients() == []
    with pytest.raises(PatientNotFoundError):
        await service.delete_patient(patient_id=created.patient_id)
