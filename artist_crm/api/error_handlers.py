"""Error Handlers — every failure leaves the API in the same {"error": {...}} envelope.

Invariants:
    - CrmError → its own http_status and to_response() body
    - RequestValidationError → 400 VALIDATION_ERROR, one detail per invalid field
    - HTTPException (unknown route, wrong method, missing upload) → same envelope
    - Anything else → 500 INTERNAL_ERROR, details only in the log

Design Decisions:
    - Domain errors under 500 are logged at warning: they are client mistakes
    - Rate-limited Outlook calls forward Retry-After to the caller
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from artist_crm.core.errors import CrmError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie", "form"}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CrmError, handle_crm_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)


def error_envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity, **extra,
) -> dict:
    return {"error": {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
        **extra,
    }}


async def handle_crm_error(request: Request, exc: CrmError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "entity": exc.context.entity,
            "entity_id": exc.context.entity_id,
        },
    )
    headers = None
    if exc.context.retry_after_ms:
        headers = {"Retry-After": str(max(1, exc.context.retry_after_ms // 1000))}
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


def field_path(loc: tuple) -> str:
    """('body', 'firstName') -> 'firstName'; nested items joined with dots."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_PREFIXES and len(parts) > 1:
        parts = parts[1:]
    return ".".join(parts)


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {"field": field_path(e["loc"]), "message": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    logger.warning(
        f"Validation error on {request.url.path}: "
        + ", ".join(d["field"] for d in details),
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    category = (
        ErrorCategory.RESOURCE_NOT_FOUND
        if exc.status_code == status.HTTP_404_NOT_FOUND
        else ErrorCategory.VALIDATION
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(
            f"HTTP_{exc.status_code}", str(exc.detail), category, ErrorSeverity.WARNING,
        ),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
