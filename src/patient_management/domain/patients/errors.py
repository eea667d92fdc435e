"""Domain errors raised by patient record use-cases."""

from __future__ import annotations

from uuid import UUID


class EmailAlreadyExistsError(ValueError):
    """Raised when a patient email is already owned by another record."""

    def __init__(self, *, email: str) -> None:
        super().__init__(f"a patient with this email already exists: {email}")
        self.email = email


class PatientNotFoundError(LookupError):
    """Raised when a target patient cannot be found."""

    def __init__(self, *, patient_id: UUID) -> None:
        super().__init__(f"patient not found with id: {patient_id}")
        self.patient_id = patient_id
