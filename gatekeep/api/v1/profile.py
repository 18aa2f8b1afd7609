"""Profile endpoints for the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends

from gatekeep.api.deps import get_credential_service, get_current_claims
from gatekeep.api.errors import to_http_exception
from gatekeep.core.errors import CredentialError
from gatekeep.schemas.auth import TokenClaims, UpdateProfileRequest
from gatekeep.schemas.user import UserPublic
from gatekeep.services.credentials import CredentialService

router = APIRouter()


@router.get("", response_model=UserPublic)
def get_profile(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[CredentialService, Depends(get_credential_service)],
) -> UserPublic:
    try:
        return service.get_profile(claims.user_id)
    except CredentialError as e:
        raise to_http_exception(e) from e


@router.put("", response_model=UserPublic)
def update_profile(
    body: UpdateProfileRequest,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[CredentialService, Depends(get_credential_service)],
) -> UserPublic:
    """
    Update name, username or role of the token's user.
    Tokens issued before the change keep their old username and role until they expire.
    """
    try:
        return service.update_profile(claims.user_id, body, acting_user_id=claims.user_id)
    except CredentialError as e:
        raise to_http_exception(e) from e


@router.delete("", response_model=UserPublic)
def delete_profile(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    service: Annotated[CredentialService, Depends(get_credential_service)],
) -> UserPublic:
    """Soft delete the token's user. Login is refused afterwards."""
    try:
        return service.delete_account(claims.user_id, acting_user_id=claims.user_id)
    except CredentialError as e:
        raise to_http_exception(e) from e
