"""FastAPI dependencies: credential service wiring and bearer-token auth."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gatekeep.api.errors import to_http_exception
from gatekeep.core.config import get_settings
from gatekeep.core.database import get_read_session_factory, get_session_factory
from gatekeep.core.errors import CredentialError
from gatekeep.core.passwords import PasswordHasher
from gatekeep.core.tokens import TokenService
from gatekeep.schemas.auth import TokenClaims
from gatekeep.services.credentials import CredentialService
from gatekeep.services.user_store import UserStore

security = HTTPBearer(auto_error=False)


@lru_cache
def get_credential_service() -> CredentialService:
    """Build the service once per process from settings; holds no per-request state."""
    settings = get_settings()
    store = UserStore(get_session_factory(), get_read_session_factory())
    tokens = TokenService(settings.JWT_SECRET.get_secret_value())
    return CredentialService(store, PasswordHasher(), tokens)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[CredentialService, Depends(get_credential_service)],
) -> TokenClaims:
    """Dependency: require a valid Bearer JWT and return its claims. Raises 401 otherwise."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return service.authenticate(credentials.credentials)
    except CredentialError as e:
        raise to_http_exception(e) from e
