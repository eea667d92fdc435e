"""Pydantic models for patient-api request and response bodies."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from patient_management.application.ports.patient_repository_port import (
    PatientCreateInput,
    PatientRecord,
    PatientUpdateInput,
)


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON keys and rejecting unknown fields."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PatientUpdateRequest(CamelModel):
    """HTTP request model for replacing patient fields; `registeredDate` is ignored."""

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    address: str = Field(min_length=1)
    date_of_birth: date
    registered_date: date | None = None

    def to_update_input(self) -> PatientUpdateInput:
        return PatientUpdateInput(
            name=self.name.strip(),
            email=str(self.email),
            address=self.address.strip(),
            date_of_birth=self.date_of_birth,
        )


class PatientCreateRequest(PatientUpdateRequest):
    """HTTP request model for registering a new patient."""

    registered_date: date

    def to_create_input(self) -> PatientCreateInput:
        return PatientCreateInput(
            name=self.name.strip(),
            email=str(self.email),
            address=self.address.strip(),
            date_of_birth=self.date_of_birth,
            registered_date=self.registered_date,
        )


class PatientResponse(CamelModel):
    """HTTP response model for one patient."""

    id: UUID
    name: str
    email: str
    address: str
    date_of_birth: date

    @classmethod
    def from_record(cls, record: PatientRecord) -> PatientResponse:
        return cls(
            id=record.patient_id,
            name=record.name,
            email=record.email,
            address=record.address,
            date_of_birth=record.date_of_birth,
        )
