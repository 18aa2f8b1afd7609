"""Transactional persistence of user records: uniqueness enforcement and soft delete."""

import logging
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from gatekeep.core.errors import Conflict, NotFound, StoreError
from gatekeep.models import User
from gatekeep.schemas.user import UserRecord

logger = logging.getLogger(__name__)

# Columns an update overwrites; id and created_* never change after create.
MUTABLE_FIELDS = (
    "username",
    "name",
    "role",
    "updated_at",
    "updated_by",
    "deleted_at",
    "deleted_by",
)


def _conflict_from_integrity_error(e: IntegrityError) -> Conflict | None:
    """Map a unique-constraint violation to the key it concerns, if recognisable."""
    detail = str(e.orig).lower()
    if "username" in detail:
        return Conflict("username")
    if "pk_users" in detail or "users.id" in detail:
        return Conflict("id")
    return None


def _to_record(row: User) -> UserRecord:
    """Convert a row to a UserRecord. Raises StoreError if the stored row is invalid."""
    try:
        return UserRecord.model_validate(row)
    except ValidationError as e:
        logger.exception("Stored user record is invalid: id=%s", row.id)
        raise StoreError("Stored user record is invalid.") from e


class UserStore:
    """
    Users table access. Every multi-step write runs in one transaction; the
    unique index on username and the primary key back up the existence checks
    when two writers race.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        read_session_factory: sessionmaker[Session] | None = None,
    ) -> None:
        self._write = session_factory
        self._read = read_session_factory or session_factory

    def create(self, user: UserRecord) -> None:
        """Insert a new user. Raises Conflict("id") or Conflict("username")."""
        try:
            with self._write.begin() as session:
                if session.get(User, user.id) is not None:
                    raise Conflict("id")
                if self._username_taken(session, user.username):
                    raise Conflict("username")
                session.add(User(**user.model_dump()))
                session.flush()
        except Conflict as e:
            logger.warning("Create rejected: %s already exists (username=%s)", e.field, user.username)
            raise
        except IntegrityError as e:
            conflict = _conflict_from_integrity_error(e)
            if conflict is None:
                logger.exception("Create failed on constraint for user id=%s", user.id)
                raise StoreError("Could not create user.") from e
            logger.warning(
                "Create lost race: %s already exists (username=%s)", conflict.field, user.username
            )
            raise conflict from e
        except SQLAlchemyError as e:
            logger.exception("Create failed for user id=%s", user.id)
            raise StoreError("Could not create user.") from e

    def resolve_by_id(self, user_id: UUID) -> UserRecord:
        """Return the user with this id, deleted or not. Raises NotFound."""
        try:
            with self._read() as session:
                row = session.get(User, user_id)
                if row is None:
                    raise NotFound("user")
                return _to_record(row)
        except SQLAlchemyError as e:
            logger.exception("Lookup failed for user id=%s", user_id)
            raise StoreError("Could not read user.") from e

    def resolve_by_username(self, username: str) -> UserRecord:
        """Return the user with this username, deleted or not. Raises NotFound."""
        try:
            with self._read() as session:
                row = session.query(User).filter(User.username == username).first()
                if row is None:
                    raise NotFound("user")
                return _to_record(row)
        except SQLAlchemyError as e:
            logger.exception("Lookup failed for username=%s", username)
            raise StoreError("Could not read user.") from e

    def update(self, user: UserRecord) -> None:
        """
        Overwrite the mutable fields of an existing user.

        Raises NotFound if the id does not exist and Conflict("username") if the
        new username belongs to another row.
        """
        try:
            with self._write.begin() as session:
                row = session.get(User, user.id, with_for_update=True)
                if row is None:
                    raise NotFound("user")
                if row.username != user.username and self._username_taken(
                    session, user.username, exclude_id=user.id
                ):
                    raise Conflict("username")
                for field in MUTABLE_FIELDS:
                    setattr(row, field, getattr(user, field))
                session.flush()
        except Conflict as e:
            logger.warning("Update rejected: %s already exists (username=%s)", e.field, user.username)
            raise
        except IntegrityError as e:
            conflict = _conflict_from_integrity_error(e)
            if conflict is None:
                logger.exception("Update failed on constraint for user id=%s", user.id)
                raise StoreError("Could not update user.") from e
            raise conflict from e
        except SQLAlchemyError as e:
            logger.exception("Update failed for user id=%s", user.id)
            raise StoreError("Could not update user.") from e

    @staticmethod
    def _username_taken(session: Session, username: str, exclude_id: UUID | None = None) -> bool:
        query = session.query(User.id).filter(User.username == username)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None
