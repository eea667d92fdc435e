"""Bcrypt password hasher adapter."""

from __future__ import annotations

import bcrypt

from patient_management.application.ports.password_hasher_port import PasswordHasherPort
from patient_management.domain.auth.hash_record import MAX_COST, MIN_COST
from patient_management.infrastructure.security.credential_verifier import (
    MAX_CANDIDATE_BYTES,
    CredentialVerifier,
)

DEFAULT_COST = 12


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt at a fixed work factor."""

    def __init__(
        self,
        *,
        cost: int = DEFAULT_COST,
        verifier: CredentialVerifier | None = None,
    ) -> None:
        if not MIN_COST <= cost <= MAX_COST:
            raise ValueError(f"bcrypt cost must be between {MIN_COST} and {MAX_COST}")
        self._cost = cost
        self._verifier = verifier or CredentialVerifier()

    def hash_password(self, password: str) -> str:
        encoded = password.encode("utf-8")[:MAX_CANDIDATE_BYTES]
        salt = bcrypt.gensalt(rounds=self._cost, prefix=b"2b")
        return bcrypt.hashpw(encoded, salt).decode("ascii")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        return self._verifier.verify(password.encode("utf-8"), password_hash)
