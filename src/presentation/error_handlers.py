"""
Exception handlers mapping domain and application errors to HTTP responses.

Decision: Routes stay free of try/except blocks. Every error kind is
translated to a status code in this one module, and every JSON error
body has the shape {"detail": {"error": ..., "message": ...}}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.application.exceptions import UnexpectedError
from src.domain.exceptions import (
    AuthenticationError,
    SubscriberValidationError,
    SubscriptionTokenNotFoundError,
)
from src.presentation.dependencies import PUBLISH_REALM

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    error: str,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: object,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": {"error": error, "message": message, **extra}},
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors and return 400 Bad Request.

    Decision: We use 400 instead of FastAPI's default 422 so that a
    missing form field, a missing query parameter and a malformed JSON
    body all look the same to clients.
    """
    error_messages = [f"{err['loc'][-1]}: {err['msg']}" for err in exc.errors()]
    logger.debug(f"Request validation failed on {request.url.path}: {error_messages}")

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "ValidationError",
        "Request validation failed",
        errors=error_messages,
    )


async def subscriber_validation_handler(
    request: Request, exc: SubscriberValidationError
) -> JSONResponse:
    logger.debug(f"Rejected subscriber data: {exc}")
    return _error_response(status.HTTP_400_BAD_REQUEST, type(exc).__name__, str(exc))


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    # Already logged at WARNING where it was raised.
    return _error_response(
        status.HTTP_401_UNAUTHORIZED,
        type(exc).__name__.removesuffix("Error"),
        str(exc),
        headers={"WWW-Authenticate": f'Basic realm="{PUBLISH_REALM}"'},
    )


async def unknown_token_handler(
    request: Request, exc: SubscriptionTokenNotFoundError
) -> JSONResponse:
    logger.warning("Confirmation attempted with an unknown subscription token")
    return _error_response(status.HTTP_401_UNAUTHORIZED, "UnknownSubscriptionToken", str(exc))


async def unexpected_error_handler(request: Request, exc: UnexpectedError) -> JSONResponse:
    """
    Log the full cause chain and hide it from the client.
    """
    logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalError",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SubscriberValidationError, subscriber_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AuthenticationError, authentication_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SubscriptionTokenNotFoundError, unknown_token_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UnexpectedError, unexpected_error_handler)  # type: ignore[arg-type]
