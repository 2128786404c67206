"""
Request validation and parameter normalization.

Pure functions: they look only at the raw JSON body and the settings they are
given, and either return a normalized request model or raise InvalidRequest /
InvalidMessage. Nothing here touches the network.
"""
import math
from typing import Any, Dict, List

from chat_proxy.api.models.chat import ChatMessage, ChatRequest, CompareRequest
from chat_proxy.config.settings import Settings
from chat_proxy.errors import InvalidMessage, InvalidRequest

VALID_ROLES = ("user", "assistant", "system")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid numeric parameter
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_object(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return body


def validate_messages(raw: Any) -> List[ChatMessage]:
    """
    Validate the conversation and return it as ChatMessage models, order preserved.

    Raises:
        InvalidRequest: If messages is missing, not a list, or empty.
        InvalidMessage: If any entry lacks role/content or has an unknown role.
    """
    if not raw or not isinstance(raw, list):
        raise InvalidRequest("Messages array is required")

    messages = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise InvalidMessage(f"Message at index {index} must be an object")

        role = item.get("role")
        content = item.get("content")
        if not role or content is None:
            raise InvalidMessage(
                f"Message at index {index} must have 'role' and 'content' fields"
            )
        if role not in VALID_ROLES:
            raise InvalidMessage(
                f"Message at index {index} has invalid role '{role}'. "
                f"Must be one of: {', '.join(VALID_ROLES)}"
            )
        if not isinstance(content, str) or not content:
            raise InvalidMessage(
                f"Message at index {index} must have non-empty text content"
            )
        messages.append(ChatMessage(role=role, content=content))

    return messages


def normalize_max_tokens(value: Any, settings: Settings) -> int:
    """Default when absent or non-positive, then clamp to the configured ceiling."""
    if value is None:
        return settings.default_max_tokens
    if not _is_number(value) or math.isnan(value):
        raise InvalidRequest("max_tokens must be a number")
    if math.isinf(value):
        return settings.max_tokens_limit if value > 0 else settings.default_max_tokens
    tokens = int(value)
    if tokens <= 0:
        return settings.default_max_tokens
    return min(tokens, settings.max_tokens_limit)


def normalize_temperature(value: Any, settings: Settings) -> float:
    """Default when absent, then clamp to [0, 2]."""
    if value is None:
        return settings.default_temperature
    if not _is_number(value):
        raise InvalidRequest("temperature must be a number")
    if math.isnan(value):
        return settings.default_temperature
    return min(max(float(value), 0.0), 2.0)


def normalize_model(value: Any, settings: Settings) -> str:
    if value is None or value == "":
        return settings.default_model
    if not isinstance(value, str):
        raise InvalidRequest("model must be a string")
    return value


def validate_models(raw: Any, settings: Settings) -> List[str]:
    """
    Validate the compare model list.

    Raises:
        InvalidRequest: If models is missing, empty, too long, or has non-string entries.
    """
    if not raw or not isinstance(raw, list):
        raise InvalidRequest("Models array is required for compare mode")
    if len(raw) > settings.max_compare_models:
        raise InvalidRequest(
            f"A maximum of {settings.max_compare_models} models can be compared at once"
        )
    for index, model in enumerate(raw):
        if not isinstance(model, str) or not model:
            raise InvalidRequest(f"Model at index {index} must be a non-empty string")
    return list(raw)


def validate_chat_request(body: Any, settings: Settings) -> ChatRequest:
    """Validate and normalize a POST /api/chat body."""
    body = _require_object(body)
    messages = validate_messages(body.get("messages"))
    return ChatRequest(
        messages=messages,
        model=normalize_model(body.get("model"), settings),
        max_tokens=normalize_max_tokens(body.get("max_tokens"), settings),
        temperature=normalize_temperature(body.get("temperature"), settings),
    )


def validate_compare_request(body: Any, settings: Settings) -> CompareRequest:
    """Validate and normalize a POST /api/compare body."""
    body = _require_object(body)
    messages = validate_messages(body.get("messages"))
    models = validate_models(body.get("models"), settings)
    return CompareRequest(
        messages=messages,
        models=models,
        max_tokens=normalize_max_tokens(body.get("max_tokens"), settings),
        temperature=normalize_temperature(body.get("temperature"), settings),
    )
