from .client import (
    Completion,
    OpenRouterClient,
    UpstreamCallError,
    UpstreamNetworkError,
    UpstreamStatusError,
)
from .error_mapping import classify_error

__all__ = [
    "Completion",
    "OpenRouterClient",
    "UpstreamCallError",
    "UpstreamNetworkError",
    "UpstreamStatusError",
    "classify_error",
]
