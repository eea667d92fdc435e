"""FastAPI router for login and bearer token validation."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Header

from patient_management.application.dto.auth_models import (
    LoginResponse,
    TokenValidationResponse,
)
from patient_management.application.services.auth_service import AuthOutcome, AuthService
from patient_management.domain.auth.credentials import validate_login_request
from patient_management.infrastructure.http.auth_guard import (
    InvalidAuthTokenError,
    InvalidCredentialsError,
    extract_bearer_token,
)
from patient_management.infrastructure.http.exception_handlers import FieldValidationError


def build_auth_router(*, auth_service: AuthService) -> APIRouter:
    """Build router exposing `/login` and `/validate`."""

    router = APIRouter(tags=["auth"])

    @router.post("/login", response_model=LoginResponse)
    async def login(payload: Annotated[dict[str, Any], Body()]) -> LoginResponse:
        email = payload.get("email")
        password = payload.get("password")
        errors = validate_login_request(email=email, password=password)
        if errors:
            raise FieldValidationError(errors)
        assert isinstance(email, str) and isinstance(password, str)

        result = await auth_service.login(email=email, password=password)
        if result.outcome is not AuthOutcome.SUCCESS or result.token is None:
            raise InvalidCredentialsError()

        return LoginResponse(token=result.token.token, expires_at=result.token.expires_at)

    @router.get("/validate", response_model=TokenValidationResponse)
    async def validate(
        authorization: Annotated[str | None, Header()] = None,
    ) -> TokenValidationResponse:
        token = extract_bearer_token(authorization)
        user = await auth_service.validate_token(token=token)
        if user is None:
            raise InvalidAuthTokenError("invalid or expired auth token")
        return TokenValidationResponse(valid=True)

    return router
