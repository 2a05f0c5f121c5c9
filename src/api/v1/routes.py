"""
API v1 routes.

Defines REST endpoints for the credential registration API.
"""

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from src.api.dependencies import get_credential_service
from src.api.models import CredentialResponse, ErrorResponse, LookupRequest, RegisterRequest
from src.domain.credentials import CredentialService

router = APIRouter(tags=["v1"])


@router.post(
    "/save_credentials",
    response_model=CredentialResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid email or weak password"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
        500: {"model": ErrorResponse, "description": "Hashing or database failure"},
    },
    summary="Register a credential",
    description="Store an email/password pair. The password is bcrypt-hashed "
    "and never returned; the response carries a redacted secret.",
)
async def save_credentials(
    request_data: RegisterRequest,
    service: CredentialService = Depends(get_credential_service),
) -> CredentialResponse:
    """
    Register a new credential.

    - **email**: Email address (normalized to lowercase, trimmed)
    - **password**: 8+ characters with uppercase, lowercase and digit
    """
    # bcrypt and the database call block; keep them off the event loop
    view = await run_in_threadpool(
        service.register, request_data.email, request_data.password.get_secret_value()
    )
    return CredentialResponse.from_view(view)


@router.post(
    "/get_by_email",
    response_model=CredentialResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid email"},
        404: {"model": ErrorResponse, "description": "User not found"},
        500: {"model": ErrorResponse, "description": "Database failure"},
    },
    summary="Look up a credential by email",
    description="Return the redacted credential stored for an email. "
    "Matching ignores case and surrounding whitespace.",
)
async def get_by_email(
    request_data: LookupRequest,
    service: CredentialService = Depends(get_credential_service),
) -> CredentialResponse:
    """Look up a credential by email."""
    view = await run_in_threadpool(service.lookup, request_data.email)
    return CredentialResponse.from_view(view)
