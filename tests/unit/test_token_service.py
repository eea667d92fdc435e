from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from patient_management.infrastructure.http.auth_guard import (
    InvalidAuthTokenError,
    MissingAuthTokenError,
    extract_bearer_token,
)
from patient_management.infrastructure.security.token_service import OpaqueTokenService


def test_issue_token_hashes_and_sets_expiry() -> None:
    now = datetime(2026, 2, 15, 12, 0, tzinfo=UTC)
    service = OpaqueTokenService(
        token_ttl=timedelta(minutes=30),
        token_factory=lambda: "fixed-token",
        now=lambda: now,
    )

    issued = service.issue_token()

    assert issued.token == "fixed-token"
    assert issued.token_hash == service.hash_token("fixed-token")
    assert len(issued.token_hash) == 64
    assert issued.expires_at == now + timedelta(minutes=30)


def test_default_tokens_are_random() -> None:
    service = OpaqueTokenService()

    assert service.issue_token().token != service.issue_token().token


def test_extract_bearer_token_accepts_case_insensitive_scheme() -> None:
    assert extract_bearer_token("bearer abc123") == "abc123"
    assert extract_bearer_token("  Bearer abc123  ") == "abc123"


@pytest.mark.parametrize("header", [None, "", "   "])
def test_missing_header_raises_missing_token(header: str | None) -> None:
    with pytest.raises(MissingAuthTokenError):
        extract_bearer_token(header)


@pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer a b", "token"])
def test_malformed_header_raises_invalid_token(header: str) -> None:
    with pytest.raises(InvalidAuthTokenError):
        extract_bearer_token(header)
