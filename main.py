"""
Roblox AI Chatbot Proxy Server
FastAPI application forwarding chat requests to OpenRouter.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_proxy.api.routers import api_router, root_router
from chat_proxy.config.settings import Settings, get_settings
from chat_proxy.middleware.error_handling import ErrorHandlingMiddleware, register_exception_handlers
from chat_proxy.middleware.rate_limit import RateLimitMiddleware
from chat_proxy.middleware.request_logging import RequestLoggingMiddleware
from chat_proxy.utils.rate_limiter import RateLimiter


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    settings: Settings = app.state.settings
    logging.info(f"Starting {settings.app_name} (environment: {settings.environment})")

    if not settings.has_api_key:
        logging.warning("OPENROUTER_API_KEY not set! Chat and compare requests will fail.")
    else:
        logging.info(f"OpenRouter configured, default model: {settings.default_model}")
    logging.info("Endpoints: POST /api/chat (single model), POST /api/compare (multiple models)")

    yield

    logging.info("Shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Proxy between Roblox game clients and the OpenRouter chat API",
        version=settings.version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings

    # Custom middleware, last added runs first
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=RateLimiter(
            max_requests=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        path_prefix="/api/",
        trust_forwarded=settings.trust_forwarded_headers,
    )
    app.add_middleware(
        RequestLoggingMiddleware, trust_forwarded=settings.trust_forwarded_headers
    )

    # CORS wraps everything so 429/500 responses carry CORS headers too
    # and preflight requests never reach the rate limiter
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    app.include_router(root_router)
    app.include_router(api_router, prefix="/api")

    return app


configure_logging(get_settings().log_level)
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=get_settings().is_local,
    )
