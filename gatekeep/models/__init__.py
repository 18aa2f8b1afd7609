"""SQLAlchemy ORM models."""

from gatekeep.models.base import Base
from gatekeep.models.user import User

__all__ = ["Base", "User"]
