"""Registration, login and token validation endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from gatekeep.api.deps import get_credential_service, get_current_claims
from gatekeep.api.errors import to_http_exception
from gatekeep.core.errors import CredentialError
from gatekeep.schemas.auth import LoginRequest, RegisterRequest, TokenClaims, TokenResponse
from gatekeep.services.credentials import CredentialService

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[CredentialService, Depends(get_credential_service)],
) -> TokenResponse:
    """Create an account; returns a JWT access token for it (409 if the username is taken)."""
    try:
        token = service.register(body)
    except CredentialError as e:
        raise to_http_exception(e) from e
    return TokenResponse(access_token=token, token_type="bearer")


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    service: Annotated[CredentialService, Depends(get_credential_service)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    try:
        token = service.login(body.username, body.password)
    except CredentialError as e:
        raise to_http_exception(e) from e
    return TokenResponse(access_token=token, token_type="bearer")


@router.get("/validate", response_model=TokenClaims)
def validate(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> TokenClaims:
    """Return the claims of the presented bearer token."""
    return claims
