"""
Request and response models for the chat and compare endpoints.

Incoming bodies are checked by ``services.validation``; these models hold the
normalized result and shape the responses.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant", "system"]


class ChatMessage(BaseModel):
    """A single conversation turn."""

    role: Role
    content: str = Field(..., min_length=1)


class ChatRequest(BaseModel):
    """Normalized single-model chat request.

    - messages: conversation in chronological order
    - model: OpenRouter model identifier (defaults from settings)
    - max_tokens / temperature: already clamped to the configured bounds
    """

    messages: List[ChatMessage] = Field(..., min_length=1)
    model: str
    max_tokens: int
    temperature: float


class CompareRequest(BaseModel):
    """Normalized compare request: same conversation sent to several models."""

    messages: List[ChatMessage] = Field(..., min_length=1)
    models: List[str] = Field(..., min_length=1)
    max_tokens: int
    temperature: float


class ChatResponse(BaseModel):
    success: bool = True
    message: str
    model: str
    usage: Dict[str, Any] = Field(default_factory=dict)
    finish_reason: Optional[str] = None


class ModelResult(BaseModel):
    """Outcome of one leg of a compare request.

    On failure ``message`` describes the error, ``error_type`` holds the
    client-facing status code and ``error`` the error title.
    """

    model_config = ConfigDict(frozen=True)

    model: str
    success: bool
    message: str
    usage: Dict[str, Any] = Field(default_factory=dict)
    finish_reason: Optional[str] = None
    error_type: Optional[int] = None
    error: Optional[str] = None


class CompareResponse(BaseModel):
    success: bool = True
    results: List[ModelResult]
    timestamp: datetime


class ModelsResponse(BaseModel):
    current: str
    available: List[str]
