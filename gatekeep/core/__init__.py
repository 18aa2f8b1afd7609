"""Core app configuration, database and credential primitives."""

from gatekeep.core.config import get_settings, settings
from gatekeep.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
