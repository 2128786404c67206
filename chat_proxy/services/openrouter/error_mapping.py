"""
Maps upstream call failures to client-facing errors.

Used both by the single chat path (the result is raised as the response) and
by each compare leg (the result is embedded in that leg's ModelResult).
"""
from typing import Callable, Dict

from chat_proxy.errors import (
    AuthenticationFailed,
    BadRequest,
    GatewayTimeout,
    InternalError,
    ModelNotFound,
    PaymentRequired,
    ProxyError,
    RateLimitExceeded,
    ServiceUnavailable,
    UpstreamError,
)
from chat_proxy.services.openrouter.client import UpstreamNetworkError, UpstreamStatusError

_STATUS_MAP: Dict[int, Callable[[UpstreamStatusError], ProxyError]] = {
    401: lambda e: AuthenticationFailed("Invalid OpenRouter API key", upstream_status=401),
    402: lambda e: PaymentRequired(
        "Insufficient credits on OpenRouter account", upstream_status=402
    ),
    404: lambda e: ModelNotFound("The specified model is not available", upstream_status=404),
    429: lambda e: RateLimitExceeded("Too many requests to OpenRouter API", upstream_status=429),
    400: lambda e: BadRequest(
        e.upstream_message or "OpenRouter rejected the request", upstream_status=400
    ),
}


def classify_error(exc: BaseException) -> ProxyError:
    """
    Convert any failure raised while serving a chat request into a ProxyError.

    Args:
        exc: The exception raised by the upstream call or surrounding code.

    Returns:
        ProxyError whose status_code/error/message form the client response.
    """
    if isinstance(exc, ProxyError):
        return exc

    if isinstance(exc, UpstreamStatusError):
        factory = _STATUS_MAP.get(exc.status_code)
        if factory is not None:
            return factory(exc)
        return UpstreamError(
            exc.upstream_message or "Unknown error occurred",
            status_code=exc.status_code,
            upstream_status=exc.status_code,
        )

    if isinstance(exc, UpstreamNetworkError):
        if exc.timed_out:
            return GatewayTimeout("OpenRouter API request timed out")
        return ServiceUnavailable("Unable to reach OpenRouter API")

    return InternalError(str(exc) or "An unexpected error occurred")
