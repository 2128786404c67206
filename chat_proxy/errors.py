"""
Client-facing error taxonomy.

Every error the API reports on purpose derives from ProxyError. The class
carries the HTTP status and the human-readable title rendered in the
``{"error": ..., "message": ...}`` response body; ``kind`` is the
machine-readable name (the class name).
"""
from typing import Any, Dict, Optional


class ProxyError(Exception):
    """Base class for errors rendered as JSON error responses.

    Attributes:
        message: User-facing description.
        status_code: HTTP status to respond with.
        extra: Additional context (upstream status, payload, ...), never rendered.
    """

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str, status_code: Optional[int] = None, **extra: Any):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


# Validation / configuration

class InvalidRequest(ProxyError):
    status_code = 400
    error = "Invalid request"


class InvalidMessage(ProxyError):
    status_code = 400
    error = "Invalid message"


class ConfigurationError(ProxyError):
    status_code = 500
    error = "Server configuration error"


# Upstream failures

class UnexpectedUpstreamFormat(ProxyError):
    status_code = 500
    error = "Unexpected upstream response"


class AuthenticationFailed(ProxyError):
    status_code = 401
    error = "Authentication failed"


class PaymentRequired(ProxyError):
    status_code = 402
    error = "Payment required"


class ModelNotFound(ProxyError):
    status_code = 404
    error = "Model not found"


class RateLimitExceeded(ProxyError):
    status_code = 429
    error = "Rate limit exceeded"


class BadRequest(ProxyError):
    status_code = 400
    error = "Bad request"


class GatewayTimeout(ProxyError):
    status_code = 504
    error = "Gateway timeout"


class ServiceUnavailable(ProxyError):
    status_code = 503
    error = "Service unavailable"


class UpstreamError(ProxyError):
    """Upstream returned a status with no dedicated mapping; status is mirrored."""

    status_code = 502
    error = "OpenRouter API error"


class InternalError(ProxyError):
    status_code = 500
    error = "Internal server error"


# Account store

class AccountNotFound(ProxyError):
    status_code = 404
    error = "Account not found"


class AccountExists(ProxyError):
    status_code = 409
    error = "Account already exists"
