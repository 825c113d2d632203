"""Exception → HTTP translation.

Every handler answers with the ErrorResponse shape. Domain errors get their
status from STATUS_CODES by error code; unmapped codes are a 400.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from motor_market.domain.errors import DomainError, ValidationError
from motor_market.entrypoints.http.error_responses import ErrorResponse

logger = logging.getLogger(__name__)

HTTP_422 = 422  # HTTP_422_UNPROCESSABLE_CONTENT (renamed across Starlette versions)

STATUS_CODES: dict[str, int] = {
    "VALIDATION_ERROR": HTTP_422,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "REMOTE_FETCH_FAILED": status.HTTP_503_SERVICE_UNAVAILABLE,
    "STORAGE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Path segments FastAPI prefixes to validation locations
_LOCATION_PREFIXES = ("body", "query", "path", "header")


def _error_response(
    status_code: int,
    detail: str,
    code: str,
    errors: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    body = ErrorResponse(detail=detail, code=code, errors=errors)  # type: ignore[arg-type]
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _request_info(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Map a DomainError to its status code.

    5xx errors are logged at ERROR with the chained cause (a datastore or
    filesystem failure) as the traceback; client errors at INFO.
    """
    status_code = STATUS_CODES.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    if status_code >= 500:
        logger.error(
            "Request failed with %s",
            exc.error_code,
            exc_info=exc.__cause__ or exc,
            extra={"error_code": exc.error_code, "context": exc.context, **_request_info(request)},
        )
    else:
        logger.info(
            "Request rejected with %s",
            exc.error_code,
            extra={"error_code": exc.error_code, **_request_info(request)},
        )

    errors = exc.errors if isinstance(exc, ValidationError) else None
    return _error_response(status_code, exc.message, exc.error_code, errors)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and typed parameters FastAPI itself rejected."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in _LOCATION_PREFIXES),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]

    logger.info(
        "Request validation failed",
        extra={"fields": [error["field"] for error in errors], **_request_info(request)},
    )

    return _error_response(HTTP_422, "Invalid request parameters", "VALIDATION_ERROR", errors)


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.info("Value error: %s", exc, extra=_request_info(request))
    return _error_response(HTTP_422, str(exc), "INVALID_VALUE")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort. Full traceback in the log, nothing internal in the response."""
    logger.error(
        "Unhandled %s",
        type(exc).__name__,
        exc_info=exc,
        extra=_request_info(request),
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred", "INTERNAL_ERROR"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app. Call once per app."""
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
