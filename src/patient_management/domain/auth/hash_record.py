"""Strict codec for stored bcrypt password hash strings."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from enum import StrEnum

MIN_COST = 4
MAX_COST = 31
SALT_BYTES = 16
DIGEST_BYTES = 23
SALT_CHARS = 22
DIGEST_CHARS = 31

_BCRYPT_ALPHABET = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
_STANDARD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_TO_STANDARD = str.maketrans(_BCRYPT_ALPHABET, _STANDARD_ALPHABET)
_FROM_STANDARD = str.maketrans(_STANDARD_ALPHABET, _BCRYPT_ALPHABET)
_PAYLOAD_PATTERN = re.compile(r"[./A-Za-z0-9]+")
_COST_PATTERN = re.compile(r"[0-9]{2}")


class HashVersion(StrEnum):
    """Supported bcrypt version markers."""

    V2A = "2a"
    V2B = "2b"
    V2Y = "2y"


@dataclass(frozen=True)
class MalformedHashError(ValueError):
    """Stored hash string is structurally invalid; `reason` is machine-readable."""

    reason: str

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True)
class HashRecord:
    """Parsed stored password hash."""

    version: HashVersion
    cost: int
    salt: bytes
    digest: bytes

    def setting(self) -> str:
        """Return the `$<version>$<cost>$<salt>` prefix consumed by bcrypt."""

        return f"${self.version.value}${self.cost:02d}${_encode_bcrypt_b64(self.salt)}"

    def encode(self) -> str:
        """Return canonical 60-character stored form."""

        return self.setting() + _encode_bcrypt_b64(self.digest)


def parse_hash_record(*, encoded: str) -> HashRecord:
    """Parse one stored hash string, raising `MalformedHashError` on any defect."""

    if not encoded:
        raise MalformedHashError("empty_hash")

    parts = encoded.split("$")
    if len(parts) != 4 or parts[0] != "":
        raise MalformedHashError("wrong_field_count")
    _, version_raw, cost_raw, payload = parts

    try:
        version = HashVersion(version_raw)
    except ValueError as exc:
        raise MalformedHashError("unknown_version") from exc

    if not _COST_PATTERN.fullmatch(cost_raw):
        raise MalformedHashError("non_numeric_cost")
    cost = int(cost_raw)
    if not MIN_COST <= cost <= MAX_COST:
        raise MalformedHashError("cost_out_of_range")

    if len(payload) != SALT_CHARS + DIGEST_CHARS:
        raise MalformedHashError("wrong_payload_length")
    if not _PAYLOAD_PATTERN.fullmatch(payload):
        raise MalformedHashError("invalid_alphabet")

    salt = _decode_bcrypt_b64(payload[:SALT_CHARS], expected_length=SALT_BYTES)
    digest = _decode_bcrypt_b64(payload[SALT_CHARS:], expected_length=DIGEST_BYTES)
    return HashRecord(version=version, cost=cost, salt=salt, digest=digest)


def _encode_bcrypt_b64(raw: bytes) -> str:
    """Encode bytes with the unpadded bcrypt base64 alphabet."""

    return base64.b64encode(raw).decode("ascii").rstrip("=").translate(_FROM_STANDARD)


def _decode_bcrypt_b64(text: str, *, expected_length: int) -> bytes:
    """Decode one bcrypt base64 field and require its canonical form."""

    standard = text.translate(_TO_STANDARD)
    padded = standard + "=" * (-len(standard) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except binascii.Error as exc:
        raise MalformedHashError("invalid_alphabet") from exc

    if len(raw) != expected_length:
        raise MalformedHashError("wrong_payload_length")
    # Trailing pad bits must be zero so the stored text round-trips exactly.
    if _encode_bcrypt_b64(raw) != text:
        raise MalformedHashError("non_canonical_encoding")
    return raw
