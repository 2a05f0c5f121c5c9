"""
Error rendering - ClassifiedError to HTTP response.

Maps each ErrorKind to one status code and serializes the error body
as {"error": code, "message": text, "details": {...}}, omitting details
when there are none.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import ClassifiedError, CredentialError, ErrorKind

logger = logging.getLogger(__name__)

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.HASHING_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(kind: ErrorKind) -> int:
    """HTTP status code for an error kind."""
    return _STATUS_BY_KIND[kind]


def error_body(error: ClassifiedError) -> dict:
    body = {"error": error.kind.code, "message": error.message}
    if error.details is not None:
        body["details"] = error.details
    return body


def error_response(error: ClassifiedError) -> JSONResponse:
    return JSONResponse(status_code=status_for(error.kind), content=error_body(error))


async def credential_error_handler(request: Request, exc: CredentialError) -> JSONResponse:
    return error_response(exc.error)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Report malformed request bodies as VALIDATION_ERROR.

    Only location and message are kept; pydantic's "input" field would
    echo the submitted password.
    """
    problems = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    error = ClassifiedError(ErrorKind.VALIDATION, "Invalid request body", {"errors": problems})
    return error_response(error)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CredentialError, credential_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
