"""
Error handling middleware.
Centralizes error handling and response formatting.
"""
import json
import logging
import traceback
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from postgrest import APIError as PostgrestError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from chat_proxy.errors import ProxyError

logger = logging.getLogger(__name__)


async def _get_request_body(request: Request) -> Optional[dict]:
    """
    Safely extract request body for error logging.
    """
    try:
        if hasattr(request.state, "body"):
            body_bytes = request.state.body
        else:
            body_bytes = await request.body()
            request.state.body = body_bytes

        if not body_bytes:
            return None

        return json.loads(body_bytes.decode("utf-8"))
    except Exception:
        return None


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for centralized error handling and logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            response = await call_next(request)
            return response

        except ValidationError as e:
            # Request bodies are validated earlier (400); this is a server-side model fault
            body = await _get_request_body(request)

            logger.error(
                "Response model validation error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "errors": e.errors(),
                    "request_body": body,
                },
                exc_info=True,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "message": "The server produced an invalid response",
                },
            )

        except PostgrestError as e:
            body = await _get_request_body(request)

            logger.error(
                "Supabase API error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": str(e),
                    "code": getattr(e, "code", None),
                    "request_body": body,
                },
                exc_info=True,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Database error",
                    "message": "A database error occurred. Please try again later.",
                },
            )

        except Exception as e:
            body = await _get_request_body(request)
            tb_str = traceback.format_exc()

            from chat_proxy.config.settings import get_settings

            try:
                is_production = get_settings().is_production
            except Exception:
                is_production = True  # Default to production mode for safety

            logger.error(
                "Unhandled error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "request_body": body,
                },
                exc_info=True,
            )

            # Don't expose internal errors in production
            if is_production:
                message = "An unexpected error occurred"
            else:
                message = f"{type(e).__name__}: {str(e)}"

            response_content = {
                "error": "Internal server error",
                "message": message,
            }
            if not is_production:
                response_content["traceback"] = tb_str

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=response_content,
            )


# ============================================================================
# Exception handlers
# ============================================================================


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "message": "Request body could not be parsed or is missing required fields",
            "details": jsonable_errors(exc),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Not found",
                "message": "Endpoint not found",
                "path": request.url.path,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Strip non-serializable context (e.g. exception instances) from errors."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProxyError, proxy_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
