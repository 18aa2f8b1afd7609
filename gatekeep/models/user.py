"""ORM model for user accounts."""

from sqlalchemy import CheckConstraint, Column, DateTime, String, Uuid

from gatekeep.models.base import Base


class User(Base):
    """
    User account row. Rows are never removed; deletion is a soft delete.

    deleted_at and deleted_by are set together or not at all.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "(deleted_at IS NULL) = (deleted_by IS NULL)",
            name="deleted_pair",
        ),
    )

    id = Column(Uuid, primary_key=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), nullable=False)
    created_by = Column(Uuid, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    updated_by = Column(Uuid, nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    deleted_by = Column(Uuid, nullable=True)
