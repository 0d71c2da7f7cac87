"""Error Hierarchy — typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Configuration errors are fatal at startup; authentication errors are per-request
    - to_response() produces the REST envelope used by the global handlers
    - No credentials or tokens ever appear in messages

Design Decisions:
    - Single hierarchy with GatewayError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields travel with the exception
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deployment_type: str | None = None
    endpoint: str | None = None
    status_code: int | None = None
    debug_info: dict[str, Any] | None = None


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "deployment_type": self.context.deployment_type,
                    "endpoint": self.context.endpoint,
                    "status_code": self.context.status_code,
                },
            }
        }


# ─── Configuration Errors (fatal at startup) ────────────────────

class ConfigurationError(GatewayError):
    """Deployment configuration is unusable."""
    def __init__(
        self,
        message: str,
        code: str = "CONFIGURATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class MissingEndpointError(ConfigurationError):
    """Required endpoint variable absent for the selected deployment type."""
    def __init__(
        self, variable: str, deployment_type: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.deployment_type = deployment_type
        super().__init__(
            f"{variable} must be set for {deployment_type} deployment",
            "MISSING_ENDPOINT", ctx,
        )
        self.variable = variable


class SessionsUrlError(ConfigurationError):
    """Agent Engine URL does not have the reasoningEngines resource shape."""
    def __init__(self, url: str | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.endpoint = url
        super().__init__(
            "Could not construct sessions API URL",
            "SESSIONS_URL_UNPARSEABLE", ctx,
        )
        self.url = url


# ─── Runtime Errors (per request) ───────────────────────────────

class AuthenticationError(GatewayError):
    """Bearer token could not be acquired from the credential exchange."""
    def __init__(self, cause: str, context: ErrorContext | None = None):
        super().__init__(
            f"Authentication failed: {cause}",
            "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.cause = cause


class BackendAPIError(GatewayError):
    """Outbound call to the agent backend failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        category = (
            ErrorCategory.TIMEOUT if api_error_type == "timeout"
            else ErrorCategory.EXTERNAL_API
        )
        super().__init__(
            f"Agent backend error ({api_error_type}): {message}",
            "BACKEND_API_ERROR", category,
            ErrorSeverity.ERROR, ctx, 504 if api_error_type == "timeout" else 502,
        )
        self.api_error_type = api_error_type
        self.status_code = status_code


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidSessionPathError(GatewayError):
    """Session path would leave the sessions collection or alter the query."""
    def __init__(self, session_path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid session path: {session_path!r}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.session_path = session_path
