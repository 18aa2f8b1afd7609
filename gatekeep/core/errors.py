"""Error kinds raised by the credential core.

Store, hashing and token components raise the most specific kind they can;
the transport layer maps each kind to a status code (see gatekeep.api.errors).
"""


class CredentialError(Exception):
    """Base class for every failure the core reports to its callers."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailed(CredentialError):
    """Malformed or missing input. Not retryable without changing the input."""


class Conflict(CredentialError):
    """A unique key (id or username) is already taken."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"A user with this {field} already exists.")


class NotFound(CredentialError):
    """No record matches the given key."""

    def __init__(self, resource: str = "user", message: str | None = None) -> None:
        self.resource = resource
        super().__init__(message or f"{resource.capitalize()} not found.")


class Unauthorized(CredentialError):
    """Bad credentials. Never says whether the username or the password was wrong."""


class TokenInvalid(CredentialError):
    """Token signature, structure or claims could not be verified."""


class TokenExpired(CredentialError):
    """Token signature is valid but its validity window has passed."""


class StoreError(CredentialError):
    """The relational store failed for a reason other than a conflict or a miss."""


class HashingError(CredentialError):
    """Password hashing could not be completed."""


class SigningError(CredentialError):
    """Token could not be signed (missing or empty secret)."""
