"""Map core error kinds to HTTP responses."""

import logging

from fastapi import HTTPException, status

from gatekeep.core.errors import (
    Conflict,
    CredentialError,
    NotFound,
    TokenExpired,
    TokenInvalid,
    Unauthorized,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[CredentialError], int] = {
    ValidationFailed: status.HTTP_400_BAD_REQUEST,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    TokenInvalid: status.HTTP_401_UNAUTHORIZED,
    TokenExpired: status.HTTP_401_UNAUTHORIZED,
    NotFound: status.HTTP_404_NOT_FOUND,
    Conflict: status.HTTP_409_CONFLICT,
}

INTERNAL_ERROR_DETAIL = "Internal server error."


def to_http_exception(error: CredentialError) -> HTTPException:
    """Build the HTTPException for a core error; infrastructure failures become an opaque 500."""
    status_code = STATUS_BY_ERROR.get(type(error))
    if status_code is None:
        logger.error("Unhandled %s: %s", type(error).__name__, error.message)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return HTTPException(status_code=status_code, detail=error.message, headers=headers)
