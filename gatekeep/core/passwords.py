"""Password hashing and verification (bcrypt)."""

import logging

import bcrypt

from gatekeep.core.errors import HashingError

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """One-way salted hashing of credentials. The salt is embedded in the hash."""

    rounds = BCRYPT_ROUNDS

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Raises HashingError on failure."""
        pw_bytes = plain_password.encode("utf-8")
        if len(pw_bytes) > BCRYPT_MAX_BYTES:
            raise HashingError(f"Password exceeds {BCRYPT_MAX_BYTES} bytes.")
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")
        except (ValueError, TypeError, OSError) as e:
            logger.exception("Password hashing failed")
            raise HashingError("Password hashing failed.") from e

    def verify(self, plain_password: str, hashed: str | None) -> bool:
        """
        Verify a plain password against a stored hash in constant time.

        Returns False on mismatch and for empty or malformed stored hashes.
        """
        if not hashed:
            return False
        pw_bytes = plain_password.encode("utf-8")
        if len(pw_bytes) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            logger.warning("Stored password hash is malformed")
            return False
