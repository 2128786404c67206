"""
LLM chat endpoints.

Single-model chat, multi-model compare and the model listing.
"""
from typing import Any, Optional

import httpx
from fastapi import APIRouter, Body, Depends, status

from chat_proxy.api.models import (
    ChatResponse,
    CompareResponse,
    ErrorResponse,
    ModelsResponse,
)
from chat_proxy.config.settings import Settings, get_settings
from chat_proxy.controllers.chat_controller import ChatController

# ============================================================================
# Dependency Injection
# ============================================================================


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for OpenRouter calls; None means the real network."""
    return None


def get_chat_controller(
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> ChatController:
    """Dependency injection for ChatController."""
    return ChatController(settings, transport=transport)


# ============================================================================
# Router
# ============================================================================

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request or message"},
    401: {"model": ErrorResponse, "description": "Upstream authentication failed"},
    402: {"model": ErrorResponse, "description": "Upstream credits exhausted"},
    404: {"model": ErrorResponse, "description": "Model not found"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Configuration or internal error"},
    503: {"model": ErrorResponse, "description": "Upstream unreachable"},
    504: {"model": ErrorResponse, "description": "Upstream timed out"},
}


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/models", response_model=ModelsResponse)
async def list_models(controller: ChatController = Depends(get_chat_controller)):
    """Default model and the models offered to clients."""
    return controller.list_models()


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def chat(
    body: Any = Body(None),
    controller: ChatController = Depends(get_chat_controller),
):
    """
    Single-model chat.

    Body: ``{messages, model?, max_tokens?, temperature?}``. Upstream failures
    are mapped to the matching client status code.
    """
    return await controller.chat(body)


@router.post(
    "/compare",
    response_model=CompareResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses={
        400: ERROR_RESPONSES[400],
        500: ERROR_RESPONSES[500],
    },
)
async def compare(
    body: Any = Body(None),
    controller: ChatController = Depends(get_chat_controller),
):
    """
    Send one conversation to up to five models at once.

    Always 200 once validation passes; each entry of ``results`` reports its
    own success or failure.
    """
    return await controller.compare(body)
