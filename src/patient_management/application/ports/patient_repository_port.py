"""Port for patient record persistence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class PatientRecord:
    """Patient persistence model."""

    patient_id: UUID
    name: str
    email: str
    address: str
    date_of_birth: date
    registered_date: date


@dataclass(frozen=True)
class PatientCreateInput:
    """Input payload for inserting one patient."""

    name: str
    email: str
    address: str
    date_of_birth: date
    registered_date: date


@dataclass(frozen=True)
class PatientUpdateInput:
    """Input payload for replacing the editable fields of one patient."""

    name: str
    email: str
    address: str
    date_of_birth: date


class PatientRepositoryPort(Protocol):
    """Patient repository contract."""

    async def list_patients(self) -> list[PatientRecord]:
        """Return all patients ordered by name."""

    async def get_by_id(self, *, patient_id: UUID) -> PatientRecord | None:
        """Return patient by id or None."""

    async def exists_by_email(
        self,
        *,
        email: str,
        exclude_patient_id: UUID | None = None,
    ) -> bool:
        """Return whether any other patient already uses `email`."""

    async def create_patient(self, payload: PatientCreateInput) -> PatientRecord:
        """Persist one patient; raise EmailAlreadyExistsError when the email is taken."""

    async def update_patient(
        self,
        *,
        patient_id: UUID,
        payload: PatientUpdateInput,
    ) -> PatientRecord | None:
        """Update one patient and return it, or None when missing.

        Raises EmailAlreadyExistsError when the new email is taken.
        """

    async def delete_patient(self, *, patient_id: UUID) -> bool:
        """Delete one patient and return whether a row was removed."""
