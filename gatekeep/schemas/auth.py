"""Request/response schemas for auth endpoints, and typed token claims."""

from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from gatekeep.core.passwords import BCRYPT_MAX_BYTES

USERNAME_MAX_LEN = 255
NAME_MAX_LEN = 255
ROLE_MAX_LEN = 32
PASSWORD_MIN_LEN = 8

DEFAULT_ROLE = "user"


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return v


class RegisterRequest(BaseModel):
    """New account details."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Display name")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, description="Password")
    role: str = Field(default=DEFAULT_ROLE, min_length=1, max_length=ROLE_MAX_LEN, description="Role")

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class UpdateProfileRequest(BaseModel):
    """Mutable profile fields; omitted fields are left unchanged."""

    username: str | None = Field(default=None, min_length=1, max_length=USERNAME_MAX_LEN)
    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)
    role: str | None = Field(default=None, min_length=1, max_length=ROLE_MAX_LEN)


class TokenResponse(BaseModel):
    """JWT access token returned after registration or login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class TokenClaims(BaseModel):
    """Claims carried by an access token. Validated when a token is decoded."""

    user_id: UUID
    username: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    iss: str
    iat: int
    exp: int
    jti: str = Field(..., min_length=1)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=UTC)
