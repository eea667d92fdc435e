from __future__ import annotations

import pytest

from patient_management.domain.auth.hash_record import (
    DIGEST_BYTES,
    SALT_BYTES,
    HashRecord,
    HashVersion,
    MalformedHashError,
    parse_hash_record,
)

KNOWN_HASH = "$2b$12$7hoRZfJrRKD2nIm2vHLs7OBETy.LWenXXMLKf99W8M4PUwO6KB7fu"


def test_parse_known_hash_extracts_version_cost_salt_and_digest() -> None:
    record = parse_hash_record(encoded=KNOWN_HASH)

    assert record.version is HashVersion.V2B
    assert record.cost == 12
    assert len(record.salt) == SALT_BYTES
    assert len(record.digest) == DIGEST_BYTES


def test_encode_reproduces_stored_string_exactly() -> None:
    record = parse_hash_record(encoded=KNOWN_HASH)

    assert record.encode() == KNOWN_HASH
    assert record.setting() == KNOWN_HASH[:29]


@pytest.mark.parametrize("version", ["2a", "2b", "2y"])
def test_all_supported_version_markers_parse(version: str) -> None:
    encoded = KNOWN_HASH.replace("$2b$", f"${version}$", 1)

    record = parse_hash_record(encoded=encoded)

    assert record.version.value == version
    assert record.encode() == encoded


def test_record_built_from_bytes_parses_back_to_equal_record() -> None:
    record = HashRecord(
        version=HashVersion.V2Y,
        cost=4,
        salt=bytes(range(SALT_BYTES)),
        digest=bytes(range(100, 100 + DIGEST_BYTES)),
    )

    encoded = record.encode()

    assert len(encoded) == 60
    assert parse_hash_record(encoded=encoded) == record


@pytest.mark.parametrize(
    ("encoded", "reason"),
    [
        ("", "empty_hash"),
        (KNOWN_HASH[:40], "wrong_payload_length"),
        ("$2b$12", "wrong_field_count"),
        ("2b$12$" + KNOWN_HASH[7:], "wrong_field_count"),
        (KNOWN_HASH + "$extra", "wrong_field_count"),
        (KNOWN_HASH.replace("$2b$", "$2x$", 1), "unknown_version"),
        (KNOWN_HASH.replace("$2b$", "$3$", 1), "unknown_version"),
        (KNOWN_HASH.replace("$12$", "$ab$", 1), "non_numeric_cost"),
        (KNOWN_HASH.replace("$12$", "$1$", 1), "non_numeric_cost"),
        (KNOWN_HASH.replace("$12$", "$03$", 1), "cost_out_of_range"),
        (KNOWN_HASH.replace("$12$", "$32$", 1), "cost_out_of_range"),
        (KNOWN_HASH[:-1] + "!", "invalid_alphabet"),
        (KNOWN_HASH[:-1] + "v", "non_canonical_encoding"),
    ],
)
def test_structurally_invalid_hashes_raise_with_reason(encoded: str, reason: str) -> None:
    with pytest.raises(MalformedHashError) as exc_info:
        parse_hash_record(encoded=encoded)

    assert exc_info.value.reason == reason
    assert isinstance(exc_info.value, ValueError)
