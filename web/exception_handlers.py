"""RFC 7807 Problem Details exception handlers for FastAPI."""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException

from clinic.core.exceptions import (
    ClinicApiError,
    ClinicError,
    NotFoundError,
    SessionNotFoundError,
    WizardStateError,
)

_ERROR_TYPES = {
    400: "urn:clinic:error:bad-request",
    404: "urn:clinic:error:not-found",
    405: "urn:clinic:error:method-not-allowed",
    409: "urn:clinic:error:conflict",
    422: "urn:clinic:error:validation",
    500: "urn:clinic:error:internal-server",
    502: "urn:clinic:error:bad-gateway",
    503: "urn:clinic:error:service-unavailable",
}

_ERROR_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Validation Error",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}


def _problem(request: Request, status_code: int, detail: str, **extra) -> JSONResponse:
    content = {
        "type": _ERROR_TYPES.get(status_code, f"urn:clinic:error:http-{status_code}"),
        "title": _ERROR_TITLES.get(status_code, "Error"),
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
    }
    content.update(extra)
    return JSONResponse(
        status_code=status_code, content=content, media_type="application/problem+json"
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Convert FastAPI HTTPException to RFC 7807 Problem Details format."""
    status_code = exc.status_code
    content = {
        "type": _ERROR_TYPES.get(status_code, f"urn:clinic:error:http-{status_code}"),
        "title": _ERROR_TITLES.get(status_code, "Error"),
        "status": status_code,
        "detail": exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        "instance": request.url.path,
    }

    headers = getattr(exc, "headers", None) or {}

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers,
        media_type="application/problem+json",
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert Pydantic validation errors to RFC 7807 format."""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        errors[field] = error["msg"]

    return _problem(request, 422, "Request validation failed", errors=errors)


async def clinic_exception_handler(request: Request, exc: ClinicError) -> JSONResponse:
    """Map the clinic error hierarchy onto problem responses."""
    if isinstance(exc, (SessionNotFoundError, NotFoundError)):
        status_code = 404
    elif isinstance(exc, WizardStateError):
        status_code = 409
    elif isinstance(exc, ClinicApiError):
        status_code = 503 if exc.recoverable else 502
    else:
        status_code = 500

    if status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")

    return _problem(
        request,
        status_code,
        exc.message,
        error=exc.__class__.__name__,
        recoverable=exc.recoverable,
        details=exc.details,
    )
