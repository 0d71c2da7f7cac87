"""Error Handlers — global exception handlers for the gateway API.

Invariants:
    - GatewayError → structured JSON with error code, message, severity
    - RequestValidationError → same envelope plus field-level details
    - Exception (catch-all) → same envelope, never leaks internal details
    - Every envelope carries the active deployment type when the lifespan has run

Design Decisions:
    - Validation and catch-all errors are rendered through GatewayError.to_response()
      so the frontend parses a single error shape
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from agent_gateway.core.errors import (
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    GatewayError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_gateway_error_handler(app: FastAPI) -> None:
    """Register configuration/auth/backend error handler."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """Handle all gateway configuration/auth/backend errors."""
        logger.error(
            f"GatewayError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "deployment_type": exc.context.deployment_type,
                "status_code": exc.context.status_code,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Reject malformed frontend requests before anything is proxied."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        error = GatewayError(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, _request_context(request), 400,
        )
        return JSONResponse(
            status_code=error.http_status,
            content=_with_details(error.to_response(), exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        error = GatewayError(
            "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, _request_context(request), 500,
        )
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _request_context(request: Request) -> ErrorContext:
    """ErrorContext tagged with the deployment type resolved at startup, if any."""
    config = getattr(request.app.state, "endpoint_config", None)
    return ErrorContext(
        deployment_type=config.deployment_type.value if config else None,
    )


def _with_details(body: dict, exc: RequestValidationError) -> dict:
    """Attach Pydantic field errors to the envelope."""
    body["error"]["details"] = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return body
