#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.

Every error response has the shape ``{"success": false, "message": ...}``.
The raw exception text is added as ``error`` only when the app runs in
development mode.
"""

import logging
from typing import Any, Dict, Optional
from fastapi import Request
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import (
    CareerGenieError,
    DecodeError,
    LLMExtractionError,
    PersistenceError,
    ResumeAccessDeniedError,
    ResumeNotFoundError,
)

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for web-layer errors."""
    pass


class AuthenticationError(ServiceException):
    """Raised when the bearer token is missing or fails verification."""
    pass


class UserRateLimitExceeded(ServiceException):
    """Raised when a user exceeds the per-user AI request budget."""

    def __init__(self, retry_after_seconds: float):
        super().__init__("AI rate limit exceeded")
        self.retry_after_seconds = retry_after_seconds


# (error class, status code, public message); None keeps str(exc)
_ERROR_MAP = (
    (DecodeError, 400, None),
    (ResumeNotFoundError, 404, None),
    (ResumeAccessDeniedError, 403, "Access denied"),
    (LLMExtractionError, 500, "AI request failed"),
    (PersistenceError, 500, "Failed to store resume"),
)

# Route-specific public messages for LLMExtractionError
_AI_FAILURE_MESSAGES = {
    "/api/resume/parse": "Failed to parse resume with AI",
    "/api/ai/analyze-resume": "Failed to analyze resume",
    "/api/ai/cover-letter": "Failed to generate cover letter",
    "/api/ai/interview-questions": "Failed to generate interview questions",
    "/api/ai/skill-gap-analysis": "Failed to analyze skill gap",
    "/api/ai/chat": "Failed to process AI chat",
}


def _show_details(request: Request) -> bool:
    return bool(getattr(request.app.state, "show_error_details", False))


def error_response(
    request: Request,
    status_code: int,
    message: str,
    exc: Optional[BaseException] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if exc is not None and _show_details(request):
        content["error"] = str(exc)
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def domain_exception_handler(
    request: Request,
    exc: CareerGenieError
) -> JSONResponse:
    """
    Handle pipeline and persistence errors.

    Args:
        request: The FastAPI request.
        exc: The application error.

    Returns:
        JSONResponse with the mapped status code.
    """
    for error_class, status_code, message in _ERROR_MAP:
        if isinstance(exc, error_class):
            break
    else:
        status_code, message = 500, "Internal server error"

    if isinstance(exc, LLMExtractionError):
        message = _AI_FAILURE_MESSAGES.get(request.url.path, message)

    if status_code >= 500:
        logger.error(f"{exc.__class__.__name__} in {request.url.path}: {exc}", exc_info=exc)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return error_response(request, status_code, message or str(exc), exc)


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle web-layer exceptions (authentication, per-user rate limiting).
    """
    if isinstance(exc, AuthenticationError):
        return error_response(request, 401, str(exc), exc.__cause__)

    if isinstance(exc, UserRateLimitExceeded):
        return error_response(
            request,
            429,
            str(exc),
            extra={"retryAfterSeconds": round(exc.retry_after_seconds, 1)},
        )

    logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    return error_response(request, 500, "Internal server error", exc)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return error_response(request, exc.status_code, str(exc.detail))


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Report malformed requests (missing fields, bad types) as 400.
    """
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {errors[0].get('msg', '')}".strip()
    return error_response(request, 400, message, exc)


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    return error_response(request, 500, "Internal server error", exc)


def register_exception_handlers(app) -> None:
    app.add_exception_handler(CareerGenieError, domain_exception_handler)
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
