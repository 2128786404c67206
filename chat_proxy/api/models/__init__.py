from .account import Account, AccountCreate, AccountDeleted
from .chat import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    CompareRequest,
    CompareResponse,
    ModelResult,
    ModelsResponse,
)
from .error import ErrorResponse

__all__ = [
    "Account",
    "AccountCreate",
    "AccountDeleted",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "CompareRequest",
    "CompareResponse",
    "ErrorResponse",
    "ModelResult",
    "ModelsResponse",
]
