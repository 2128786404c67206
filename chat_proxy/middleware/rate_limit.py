"""
Rate limiting middleware.
Throttles requests per client address on a path prefix.
"""
import logging
import math
from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from chat_proxy.utils.rate_limiter import RateLimiter
from chat_proxy.utils.request_utils import get_client_ip

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests with 429 once a client exhausts its quota."""

    def __init__(
        self,
        app,
        limiter: RateLimiter,
        path_prefix: str = "/api/",
        trust_forwarded: bool = False,
    ):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix
        self.trust_forwarded = trust_forwarded

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = get_client_ip(request, trust_forwarded=self.trust_forwarded)
        if not self.limiter.hit(client_ip):
            retry_after = math.ceil(self.limiter.retry_after(client_ip))
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "Too many requests, please try again later.",
                    "message": f"Limit of {self.limiter.max_requests} requests per "
                    f"{int(self.limiter.window_seconds // 60)} minutes reached",
                },
                headers={"Retry-After": str(retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(self.limiter.remaining(client_ip))
        return response
