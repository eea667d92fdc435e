"""Application authentication service for credential verification and token issuing."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum

from patient_management.application.ports.auth_token_repository_port import (
    AuthTokenCreateInput,
    AuthTokenRepositoryPort,
)
from patient_management.application.ports.password_hasher_port import PasswordHasherPort
from patient_management.application.ports.user_repository_port import (
    UserRecord,
    UserRepositoryPort,
)
from patient_management.domain.auth.credentials import normalize_user_email
from patient_management.domain.auth.hash_record import MalformedHashError
from patient_management.infrastructure.security.token_service import (
    IssuedToken,
    OpaqueTokenService,
)

_TIMING_DUMMY_PASSWORD = "timing-equalization-placeholder"

logger = logging.getLogger(__name__)


class AuthOutcome(StrEnum):
    """Supported authentication outcomes."""

    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class AuthResult:
    """Authentication result model."""

    outcome: AuthOutcome
    user: UserRecord | None = None


@dataclass(frozen=True)
class LoginResult:
    """Login result carrying the issued token on success."""

    outcome: AuthOutcome
    token: IssuedToken | None = None


class AuthService:
    """Authenticate credentials and manage opaque session tokens."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        auth_tokens: AuthTokenRepositoryPort,
        password_hasher: PasswordHasherPort,
        token_service: OpaqueTokenService,
    ) -> None:
        self._users = users
        self._auth_tokens = auth_tokens
        self._password_hasher = password_hasher
        self._token_service = token_service
        self._dummy_password_hash = password_hasher.hash_password(_TIMING_DUMMY_PASSWORD)

    async def authenticate(self, *, email: str, password: str) -> AuthResult:
        """Authenticate credentials; unknown email and wrong password are indistinguishable."""

        try:
            normalized_email = normalize_user_email(email=email)
        except ValueError:
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        user = await self._users.get_by_email(email=normalized_email)
        if user is None:
            # Spend the same hashing work as a real check so timing does not reveal the account.
            # The dummy follows the last stored hash checked, so it tracks the stored cost.
            await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=password,
                password_hash=self._dummy_password_hash,
            )
            logger.info("login_failed reason=invalid_credentials")
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        try:
            is_valid = await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=password,
                password_hash=user.password_hash,
            )
        except MalformedHashError as exc:
            logger.error(
                "stored_password_hash_malformed user_id=%s reason=%s",
                user.user_id,
                exc.reason,
            )
            raise

        self._dummy_password_hash = user.password_hash

        if not is_valid:
            logger.info("login_failed user_id=%s reason=invalid_credentials", user.user_id)
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        logger.info("login_success user_id=%s", user.user_id)
        return AuthResult(outcome=AuthOutcome.SUCCESS, user=user)

    async def login(self, *, email: str, password: str) -> LoginResult:
        """Authenticate and, on success, persist and return a fresh opaque token."""

        result = await self.authenticate(email=email, password=password)
        if result.outcome is not AuthOutcome.SUCCESS or result.user is None:
            return LoginResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        issued = self._token_service.issue_token()
        await self._auth_tokens.create_token(
            AuthTokenCreateInput(
                user_id=result.user.user_id,
                token_hash=issued.token_hash,
                expires_at=issued.expires_at,
            )
        )
        return LoginResult(outcome=AuthOutcome.SUCCESS, token=issued)

    async def validate_token(self, *, token: str) -> UserRecord | None:
        """Resolve an opaque token to its user, or None when invalid or expired."""

        token_hash = self._token_service.hash_token(token)
        token_record = await self._auth_tokens.get_active_by_hash(token_hash=token_hash)
        if token_record is None:
            return None
        return await self._users.get_by_id(user_id=token_record.user_id)
