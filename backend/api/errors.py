"""
Error responses for the reference backend.

Every failure is returned as ``{"message": ..., "error": ...}``, the body
shape the console reads its error text from.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional

from shared.exceptions import (
    AdminConsoleError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str
    error: Optional[str] = None


def status_for(exc: AdminConsoleError) -> int:
    """HTTP status for an application error."""
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ValidationError):
        return 400
    return 500


async def handle_app_error(request: Request, exc: AdminConsoleError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=exc.message, error=exc.code).model_dump(),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(message="Invalid request body", error="VALIDATION_ERROR").model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AdminConsoleError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
