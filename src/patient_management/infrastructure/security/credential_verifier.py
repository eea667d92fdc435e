"""Constant-time verification of plaintext candidates against stored bcrypt hashes."""

from __future__ import annotations

import hmac
import logging

import bcrypt

from patient_management.domain.auth.hash_record import HashRecord, parse_hash_record

# bcrypt consumes at most 72 bytes of key material.
MAX_CANDIDATE_BYTES = 72

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """Stateless bcrypt verifier; safe to share across threads and tasks."""

    def verify(self, candidate: bytes, stored_hash: str) -> bool:
        """Return whether `candidate` matches `stored_hash`.

        Raises `MalformedHashError` when `stored_hash` cannot be parsed. A
        non-matching candidate is a normal `False` result.
        """

        record = parse_hash_record(encoded=stored_hash)
        derived = self.derive_digest(candidate, record)
        if derived is None:
            return False
        return hmac.compare_digest(derived, record.digest)

    def derive_digest(self, candidate: bytes, record: HashRecord) -> bytes | None:
        """Derive the digest for `candidate` under the record's version, cost and salt."""

        try:
            hashed = bcrypt.hashpw(
                bytes(candidate[:MAX_CANDIDATE_BYTES]),
                record.setting().encode("ascii"),
            )
        except ValueError:
            logger.debug("credential_candidate_rejected_by_backend cost=%s", record.cost)
            return None
        return parse_hash_record(encoded=hashed.decode("ascii")).digest
