"""Credential service: registration, login and profile changes."""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from gatekeep.core.errors import NotFound, Unauthorized, ValidationFailed
from gatekeep.core.passwords import PasswordHasher
from gatekeep.core.tokens import TokenService, utcnow
from gatekeep.schemas.auth import RegisterRequest, TokenClaims, UpdateProfileRequest
from gatekeep.schemas.user import UserPublic, UserRecord
from gatekeep.services.user_store import UserStore

logger = logging.getLogger(__name__)

# Same message for unknown user, deleted user and wrong password.
INVALID_CREDENTIALS = "Invalid username or password."

# Verified against when the username does not exist so both paths cost one bcrypt check.
_DUMMY_PASSWORD = "gatekeep-dummy-password"


def _require(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationFailed(f"{field} is required.")
    return value


class CredentialService:
    """Orchestrates UserStore, PasswordHasher and TokenService per request."""

    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self._clock = clock
        self._dummy_hash: str | None = None

    def register(self, request: RegisterRequest) -> str:
        """
        Create an account and return an access token for it.

        Raises ValidationFailed for blank fields and Conflict when the username
        is taken. The stored record itself is never returned.
        """
        username = _require(request.username, "username")
        name = _require(request.name, "name")
        password = _require(request.password, "password")
        role = _require(request.role, "role")

        user_id = uuid.uuid4()
        user = UserRecord(
            id=user_id,
            username=username,
            name=name,
            password_hash=self.hasher.hash(password),
            role=role,
            created_at=self._clock(),
            created_by=user_id,
        )
        self.store.create(user)
        logger.info("Registered user id=%s username=%s role=%s", user.id, user.username, user.role)
        return self.tokens.issue(user.id, user.username, user.role)

    def login(self, username: str, password: str) -> str:
        """
        Check credentials and return an access token.

        Unknown, deleted and wrong-password logins all raise the same Unauthorized.
        """
        try:
            user = self.store.resolve_by_username(username)
        except NotFound:
            user = None

        if user is None or user.is_deleted:
            # Keep timing close to the wrong-password path.
            self.hasher.verify(password, self._get_dummy_hash())
            logger.info("Login failed for username=%s", username)
            raise Unauthorized(INVALID_CREDENTIALS)

        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed for username=%s", username)
            raise Unauthorized(INVALID_CREDENTIALS)

        logger.info("Login succeeded for user id=%s", user.id)
        return self.tokens.issue(user.id, user.username, user.role)

    def authenticate(self, token: str) -> TokenClaims:
        """Validate a raw bearer token (scheme already stripped) and return its claims."""
        return self.tokens.validate(token)

    def get_profile(self, user_id: UUID) -> UserPublic:
        """Return the public view of an active user. Raises NotFound."""
        return self._resolve_active(user_id).to_public()

    def update_profile(
        self,
        user_id: UUID,
        request: UpdateProfileRequest,
        acting_user_id: UUID,
    ) -> UserPublic:
        """
        Apply the given profile fields and stamp updated_at/updated_by.

        Raises NotFound if the user is absent, deleted, or disappears before the
        write, and Conflict if a new username is taken.
        """
        current = self._resolve_active(user_id)
        changes: dict[str, object] = {}
        for field in ("username", "name", "role"):
            value = getattr(request, field)
            if value is not None:
                changes[field] = _require(value, field)

        updated = current.replace(
            **changes,
            updated_at=self._clock(),
            updated_by=acting_user_id,
        )
        self.store.update(updated)
        logger.info(
            "Updated user id=%s by=%s fields=%s", user_id, acting_user_id, sorted(changes)
        )
        return updated.to_public()

    def delete_account(self, user_id: UUID, acting_user_id: UUID) -> UserPublic:
        """Soft delete: stamp deleted_at/deleted_by together through the update path."""
        current = self._resolve_active(user_id)
        now = self._clock()
        deleted = current.replace(
            updated_at=now,
            updated_by=acting_user_id,
            deleted_at=now,
            deleted_by=acting_user_id,
        )
        self.store.update(deleted)
        logger.info("Deleted user id=%s by=%s", user_id, acting_user_id)
        return deleted.to_public()

    def _resolve_active(self, user_id: UUID) -> UserRecord:
        user = self.store.resolve_by_id(user_id)
        if user.is_deleted:
            raise NotFound("user")
        return user

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(_DUMMY_PASSWORD)
        return self._dummy_hash
