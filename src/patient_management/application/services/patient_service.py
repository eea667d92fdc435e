"""Application service for patient record use-cases."""

from __future__ import annotations

import logging
from uuid import UUID

from patient_management.application.ports.patient_repository_port import (
    PatientCreateInput,
    PatientRecord,
    PatientRepositoryPort,
    PatientUpdateInput,
)
from patient_management.domain.patients.errors import (
    EmailAlreadyExistsError,
    PatientNotFoundError,
)

logger = logging.getLogger(__name__)


class PatientService:
    """Expose patient listing and lifecycle operations."""

    def __init__(self, *, patients: PatientRepositoryPort) -> None:
        self._patients = patients

    async def list_patients(self) -> list[PatientRecord]:
        return await self._patients.list_patients()

    async def create_patient(self, *, payload: PatientCreateInput) -> PatientRecord:
        """Create one patient, rejecting duplicate emails."""

        if await self._patients.exists_by_email(email=payload.email):
            raise EmailAlreadyExistsError(email=payload.email)

        created = await self._patients.create_patient(payload)
        logger.info("patient_created patient_id=%s", created.patient_id)
        return created

    async def update_patient(
        self,
        *,
        patient_id: UUID,
        payload: PatientUpdateInput,
    ) -> PatientRecord:
        """Replace editable fields of one patient."""

        existing = await self._patients.get_by_id(patient_id=patient_id)
        if existing is None:
            raise PatientNotFoundError(patient_id=patient_id)

        if await self._patients.exists_by_email(
            email=payload.email,
            exclude_patient_id=patient_id,
        ):
            raise EmailAlreadyExistsError(email=payload.email)

        updated = await self._patients.update_patient(patient_id=patient_id, payload=payload)
        if updated is None:  # pragma: no cover - row removed between read and write.
            raise PatientNotFoundError(patient_id=patient_id)
        logger.info("patient_updated patient_id=%s", patient_id)
        return updated

    async def delete_patient(self, *, patient_id: UUID) -> None:
        """Delete one patient or raise when it does not exist."""

        deleted = await self._patients.delete_patient(patient_id=patient_id)
        if not deleted:
            raise PatientNotFoundError(patient_id=patient_id)
        logger.info("patient_deleted patient_id=%s", patient_id)
