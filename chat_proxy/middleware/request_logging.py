"""
Request logging middleware.
Logs HTTP requests and responses for monitoring and debugging.
"""
import json
import logging
import time
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from chat_proxy.utils.request_utils import get_client_ip

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = {"password", "token", "secret", "api_key", "apikey", "authorization"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    def __init__(self, app, ignore_paths: tuple = (), trust_forwarded: bool = False):
        super().__init__(app)
        self.trust_forwarded = trust_forwarded
        self.ignore_paths = ignore_paths or (
            "/health",
            "/docs",
            "/openapi.json",
            "/redoc",
            "/favicon.ico",
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.ignore_paths:
            return await call_next(request)

        start_time = time.time()
        client_ip = get_client_ip(request, trust_forwarded=self.trust_forwarded)

        request_log = {
            "type": "request",
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": client_ip,
            "user_agent": request.headers.get("user-agent"),
            "timestamp": start_time,
        }

        # Log request body for write requests (for debugging)
        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            body = await self._get_request_body(request)
            if body:
                request_log["body"] = body

        logger.info(json.dumps(request_log, default=str))

        response = await call_next(request)

        process_time = time.time() - start_time

        response_log = {
            "type": "response",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
            "client_ip": client_ip,
            "timestamp": time.time(),
        }

        # Log level based on status code
        if response.status_code >= 500:
            logger.error(json.dumps(response_log))
        elif response.status_code >= 400:
            logger.warning(json.dumps(response_log))
        else:
            logger.info(json.dumps(response_log))

        response.headers["X-Process-Time"] = str(process_time)

        return response

    async def _get_request_body(self, request: Request) -> Optional[dict]:
        """
        Safely extract and parse request body.
        Returns None if body cannot be read or parsed.
        """
        try:
            if hasattr(request.state, "body"):
                body_bytes = request.state.body
            else:
                # Read body and cache it for downstream handlers
                body_bytes = await request.body()
                request.state.body = body_bytes

            if not body_bytes:
                return None

            body_data = json.loads(body_bytes.decode("utf-8"))

            if isinstance(body_data, dict):
                return {
                    k: "***REDACTED***" if k.lower() in SENSITIVE_FIELDS else v
                    for k, v in body_data.items()
                }

            return body_data

        except Exception:
            # Don't fail request if body parsing fails
            return None
