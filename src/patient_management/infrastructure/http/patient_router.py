"""FastAPI router for patient record endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Response

from patient_management.application.dto.patient_models import (
    PatientCreateRequest,
    PatientResponse,
    PatientUpdateRequest,
)
from patient_management.application.services.patient_service import PatientService


def build_patient_router(*, patient_service: PatientService) -> APIRouter:
    """Build router exposing patient list/create/update/delete endpoints."""

    router = APIRouter(prefix="/patients", tags=["patients"])

    @router.get("", response_model=list[PatientResponse])
    async def list_patients() -> list[PatientResponse]:
        records = await patient_service.list_patients()
        return [PatientResponse.from_record(record) for record in records]

    @router.post("", response_model=PatientResponse)
    async def create_patient(payload: PatientCreateRequest) -> PatientResponse:
        record = await patient_service.create_patient(payload=payload.to_create_input())
        return PatientResponse.from_record(record)

    @router.put("/{patient_id}", response_model=PatientResponse)
    async def update_patient(
        patient_id: UUID,
        payload: PatientUpdateRequest,
    ) -> PatientResponse:
        record = await patient_service.update_patient(
            patient_id=patient_id,
            payload=payload.to_update_input(),
        )
        return PatientResponse.from_record(record)

    @router.delete("/{patient_id}", status_code=204)
    async def delete_patient(patient_id: UUID) -> Response:
        await patient_service.delete_patient(patient_id=patient_id)
        return Response(status_code=204)

    return router
