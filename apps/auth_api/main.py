"""auth-api entrypoint and HTTP route wiring."""

from __future__ import annotations

from datetime import timedelta

import uvicorn
from fastapi import FastAPI

from patient_management.application.ports.auth_token_repository_port import (
    AuthTokenRepositoryPort,
)
from patient_management.application.ports.password_hasher_port import PasswordHasherPort
from patient_management.application.ports.user_repository_port import UserRepositoryPort
from patient_management.application.services.auth_service import AuthService
from patient_management.config.settings import load_settings
from patient_management.infrastructure.db.auth_token_repository import (
    SqlAlchemyAuthTokenRepository,
)
from patient_management.infrastructure.db.session import create_session_factory
from patient_management.infrastructure.db.user_repository import SqlAlchemyUserRepository
from patient_management.infrastructure.http.auth_router import build_auth_router
from patient_management.infrastructure.http.exception_handlers import (
    register_auth_exception_handlers,
)
from patient_management.infrastructure.logging import configure_logging
from patient_management.infrastructure.security.password_hasher import BcryptPasswordHasher
from patient_management.infrastructure.security.token_service import OpaqueTokenService

AUTH_API_HOST = "0.0.0.0"
AUTH_API_PORT = 4005


def build_auth_service(
    database_url: str,
    *,
    password_hasher: PasswordHasherPort,
    token_service: OpaqueTokenService,
    users: UserRepositoryPort | None = None,
    auth_tokens: AuthTokenRepositoryPort | None = None,
) -> AuthService:
    """Build authentication service with SQLAlchemy-backed dependencies."""

    session_factory = create_session_factory(database_url)
    return AuthService(
        users=users or SqlAlchemyUserRepository(session_factory),
        auth_tokens=auth_tokens or SqlAlchemyAuthTokenRepository(session_factory),
        password_hasher=password_hasher,
        token_service=token_service,
    )


def create_app(
    *,
    auth_service: AuthService | None = None,
    database_url: str | None = None,
) -> FastAPI:
    """Create FastAPI app for login and token validation routes."""

    if auth_service is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)
        auth_service = build_auth_service(
            database_url or settings.database_url,
            password_hasher=BcryptPasswordHasher(cost=settings.password_hash_cost),
            token_service=OpaqueTokenService(
                token_ttl=timedelta(seconds=settings.auth_token_ttl_seconds),
            ),
        )

    app = FastAPI(title="auth-api")
    register_auth_exception_handlers(app)
    app.include_router(build_auth_router(auth_service=auth_service))
    return app


def run_asgi_server(*, host: str = AUTH_API_HOST, port: int = AUTH_API_PORT) -> None:
    """Run auth-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.auth_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run auth-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
