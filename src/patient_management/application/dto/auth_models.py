"""Pydantic models for auth-api login and token validation contracts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


class LoginResponse(StrictModel):
    """HTTP response model for successful login."""

    token: str
    expires_at: datetime


class TokenValidationResponse(StrictModel):
    """HTTP response model for bearer token validation."""

    valid: bool
