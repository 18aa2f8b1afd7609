"""User domain value and its public projection."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator


class UserPublic(BaseModel):
    """User as returned to callers (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    name: str
    role: str
    created_at: datetime
    created_by: UUID
    updated_at: datetime | None = None
    updated_by: UUID | None = None
    deleted_at: datetime | None = None
    deleted_by: UUID | None = None


class UserRecord(BaseModel):
    """
    Full user record as read from or written to the store.

    A record is soft-deleted iff both deleted_at and deleted_by are set;
    having only one of the two is rejected. Records are immutable; replace()
    derives a changed copy and validates it again.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    username: str
    name: str
    password_hash: str
    role: str
    created_at: datetime
    created_by: UUID
    updated_at: datetime | None = None
    updated_by: UUID | None = None
    deleted_at: datetime | None = None
    deleted_by: UUID | None = None

    @model_validator(mode="after")
    def check_deleted_pair(self) -> "UserRecord":
        if (self.deleted_at is None) != (self.deleted_by is None):
            raise ValueError("deleted_at and deleted_by must be set together")
        return self

    def replace(self, **changes: object) -> "UserRecord":
        return UserRecord.model_validate({**self.model_dump(), **changes})

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None and self.deleted_by is not None

    def to_public(self) -> UserPublic:
        return UserPublic.model_validate(self.model_dump(exclude={"password_hash"}))
