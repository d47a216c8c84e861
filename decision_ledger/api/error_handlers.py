"""Error Handlers — map ledger, validation and unexpected failures to the error envelope.

Invariants:
    - Every response body has the LedgerError.to_response() shape, including
      context.operation (the route's operation name when the error carries none)
    - 4xx LedgerErrors log at WARNING, everything else at ERROR
    - RequestValidationError → 400 VALIDATION_ERROR with field-level details
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details

Design Decisions:
    - Validation and catch-all failures are wrapped in a LedgerError so the three
      handlers share one envelope and one set of log fields
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from decision_ledger.core.errors import (
    ErrorCategory, ErrorSeverity, LedgerError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        return _respond(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ]
        error = LedgerError(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, http_status=status.HTTP_400_BAD_REQUEST,
        )
        return _respond(request, error, details=details)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        error = LedgerError(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        return _respond(request, error, cause=exc)


def _respond(
    request: Request,
    error: LedgerError,
    details: list[dict] | None = None,
    cause: Exception | None = None,
) -> JSONResponse:
    """Log the error with its ledger fields and render the envelope."""
    if error.context.operation is None:
        error.context.operation = _route_operation(request)

    log = logger.warning if error.http_status < 500 else logger.error
    log(
        f"{error.code} on {request.method} {request.url.path}: "
        f"{cause if cause is not None else error.message}",
        extra={
            "error_code": error.code,
            "path": request.url.path,
            "operation": error.context.operation,
            "actor_id": error.context.actor_id,
            "recipient_id": error.context.recipient_id,
        },
        exc_info=cause,
    )

    body = error.to_response()
    if details is not None:
        body["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=body)


def _route_operation(request: Request) -> str:
    """Endpoint name of the matched route (e.g. list_liked_you), else the path."""
    route = request.scope.get("route")
    return getattr(route, "name", None) or request.url.path
