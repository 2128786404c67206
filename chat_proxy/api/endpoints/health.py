"""
Health check endpoints.
Simple endpoints for monitoring application health and status.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from chat_proxy.config.settings import Settings, get_settings

router = APIRouter(tags=["health"])


class ServiceInfoResponse(BaseModel):
    """Liveness/info payload served at the root."""

    status: str
    message: str
    endpoints: Dict[str, str]
    timestamp: datetime


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str
    environment: str
    api_key_configured: bool


@router.get("/", response_model=ServiceInfoResponse)
async def service_info(settings: Settings = Depends(get_settings)):
    """Liveness check listing the public endpoints."""
    return ServiceInfoResponse(
        status="online",
        message=settings.app_name,
        endpoints={
            "health": "GET /",
            "chat": "POST /api/chat",
            "compare": "POST /api/compare",
            "models": "GET /api/models",
        },
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        version=settings.version,
        environment=settings.environment,
        api_key_configured=settings.has_api_key,
    )
