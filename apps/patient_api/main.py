"""patient-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from patient_management.application.services.patient_service import PatientService
from patient_management.config.settings import load_settings
from patient_management.infrastructure.db.patient_repository import SqlAlchemyPatientRepository
from patient_management.infrastructure.db.session import create_session_factory
from patient_management.infrastructure.http.exception_handlers import (
    register_patient_exception_handlers,
)
from patient_management.infrastructure.http.patient_router import build_patient_router
from patient_management.infrastructure.logging import configure_logging

PATIENT_API_HOST = "0.0.0.0"
PATIENT_API_PORT = 4000


def build_patient_service(database_url: str) -> PatientService:
    """Build patient service with SQLAlchemy-backed repository."""

    session_factory = create_session_factory(database_url)
    return PatientService(patients=SqlAlchemyPatientRepository(session_factory))


def create_app(
    *,
    patient_service: PatientService | None = None,
    database_url: str | None = None,
) -> FastAPI:
    """Create FastAPI app for patient record routes."""

    if patient_service is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)
        patient_service = build_patient_service(database_url or settings.database_url)

    app = FastAPI(title="patient-api")
    register_patient_exception_handlers(app)
    app.include_router(build_patient_router(patient_service=patient_service))
    return app


def run_asgi_server(*, host: str = PATIENT_API_HOST, port: int = PATIENT_API_PORT) -> None:
    """Run patient-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.patient_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run patient-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
