"""Pydantic request/response schemas and domain values."""

from gatekeep.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    TokenResponse,
    UpdateProfileRequest,
)
from gatekeep.schemas.health import HealthResponse
from gatekeep.schemas.user import UserPublic, UserRecord

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenClaims",
    "TokenResponse",
    "UpdateProfileRequest",
    "UserPublic",
    "UserRecord",
]
