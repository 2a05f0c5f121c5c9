"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Email and password rules are enforced by the domain layer, so the request
models only check shape.
"""

from typing import Any

from pydantic import BaseModel, Field, SecretStr

from src.domain.ports import CredentialView


class RegisterRequest(BaseModel):
    """Request model for credential registration."""

    email: str = Field(..., description="Email address to register")
    password: SecretStr = Field(
        ...,
        description="Password: 8+ characters with an uppercase letter, a lowercase letter and a digit",
    )


class LookupRequest(BaseModel):
    """Request model for credential lookup by email."""

    email: str = Field(..., description="Email address to look up")


class CredentialResponse(BaseModel):
    """Redacted credential returned by both endpoints."""

    email: str
    secret: str

    @classmethod
    def from_view(cls, view: CredentialView) -> "CredentialResponse":
        return cls(email=view.email, secret=view.secret)


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Stable error code")
    message: str
    details: dict[str, Any] | None = None
