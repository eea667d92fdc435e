"""Exception-to-JSON-response mapping for the HTTP apps."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from patient_management.domain.auth.credentials import FieldError
from patient_management.domain.auth.hash_record import MalformedHashError
from patient_management.domain.patients.errors import (
    EmailAlreadyExistsError,
    PatientNotFoundError,
)
from patient_management.infrastructure.http.auth_guard import (
    InvalidAuthTokenError,
    InvalidCredentialsError,
    MissingAuthTokenError,
)

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


class FieldValidationError(ValueError):
    """Raised by handlers that validate request fields explicitly."""

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("request field validation failed")
        self.errors = errors


def field_errors_body(errors: Iterable[FieldError]) -> dict[str, str]:
    """Collapse `(field, message)` pairs into a body keeping the first message per field."""

    body: dict[str, str] = {}
    for field, message in errors:
        body.setdefault(field, message)
    return body


def _request_validation_field_errors(exc: RequestValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _LOCATION_PREFIXES:
            location = location[1:]
        field = ".".join(location) or "body"
        errors.append((field, str(error.get("msg", "invalid value"))))
    return errors


def register_validation_handlers(app: FastAPI) -> None:
    """Map framework and explicit validation failures to 400 `{field: message}` bodies."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        _ = request
        body = field_errors_body(_request_validation_field_errors(exc))
        return JSONResponse(status_code=400, content=body)

    @app.exception_handler(FieldValidationError)
    async def handle_field_validation(
        request: Request,
        exc: FieldValidationError,
    ) -> JSONResponse:
        _ = request
        return JSONResponse(status_code=400, content=field_errors_body(exc.errors))


def register_patient_exception_handlers(app: FastAPI) -> None:
    """Map patient domain errors to generic 400 message bodies."""

    register_validation_handlers(app)

    @app.exception_handler(EmailAlreadyExistsError)
    async def handle_email_already_exists(
        request: Request,
        exc: EmailAlreadyExistsError,
    ) -> JSONResponse:
        _ = request
        logger.warning("patient_email_already_exists detail=%s", exc)
        return JSONResponse(status_code=400, content={"message": "Email Already Exists"})

    @app.exception_handler(PatientNotFoundError)
    async def handle_patient_not_found(
        request: Request,
        exc: PatientNotFoundError,
    ) -> JSONResponse:
        _ = request
        logger.warning("patient_not_found detail=%s", exc)
        return JSONResponse(status_code=400, content={"message": "Patient Not Found"})


def register_auth_exception_handlers(app: FastAPI) -> None:
    """Map auth failures; malformed stored hashes are internal errors, never wrong passwords."""

    register_validation_handlers(app)

    @app.exception_handler(MalformedHashError)
    async def handle_malformed_hash(
        request: Request,
        exc: MalformedHashError,
    ) -> JSONResponse:
        logger.error("malformed_password_hash path=%s reason=%s", request.url.path, exc.reason)
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(
        request: Request,
        exc: InvalidCredentialsError,
    ) -> JSONResponse:
        _ = request, exc
        return JSONResponse(status_code=401, content={"message": "Invalid email or password"})

    @app.exception_handler(MissingAuthTokenError)
    async def handle_missing_token(
        request: Request,
        exc: MissingAuthTokenError,
    ) -> JSONResponse:
        _ = request
        return JSONResponse(status_code=401, content={"message": str(exc)})

    @app.exception_handler(InvalidAuthTokenError)
    async def handle_invalid_token(
        request: Request,
        exc: InvalidAuthTokenError,
    ) -> JSONResponse:
        _ = request
        return JSONResponse(status_code=401, content={"message": str(exc)})
