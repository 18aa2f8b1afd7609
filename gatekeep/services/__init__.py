"""Credential services."""

from gatekeep.services.credentials import CredentialService
from gatekeep.services.user_store import UserStore

__all__ = ["CredentialService", "UserStore"]
