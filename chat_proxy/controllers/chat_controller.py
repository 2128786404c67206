"""
Chat controller.

Handles single-model chat and multi-model compare requests against OpenRouter.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from chat_proxy.api.models.chat import (
    ChatResponse,
    CompareResponse,
    ModelResult,
    ModelsResponse,
)
from chat_proxy.config.settings import Settings
from chat_proxy.errors import ConfigurationError
from chat_proxy.services.openrouter import Completion, OpenRouterClient, classify_error
from chat_proxy.services.validation import validate_chat_request, validate_compare_request
from chat_proxy.utils.fanout import Outcome, SettledTaskGroup

logger = logging.getLogger(__name__)


class ChatController:
    """Controller for chat and compare operations."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: Configuration (API key, default model, bounds, timeout)
            transport: Optional httpx transport, used by tests to fake OpenRouter
        """
        self.settings = settings
        self.client = OpenRouterClient(settings, transport=transport)

    def _require_api_key(self) -> None:
        if not self.settings.has_api_key:
            raise ConfigurationError("OpenRouter API key not configured")

    def list_models(self) -> ModelsResponse:
        return ModelsResponse(
            current=self.settings.default_model,
            available=list(self.settings.available_models),
        )

    async def chat(self, body: Any) -> ChatResponse:
        """
        Forward a conversation to a single model.

        Raises:
            InvalidRequest / InvalidMessage: Body failed validation
            ConfigurationError: No API key configured
            ProxyError: Classified upstream failure
        """
        request = validate_chat_request(body, self.settings)
        self._require_api_key()

        logger.info(
            f"Chat request - Model: {request.model}, Messages: {len(request.messages)}"
        )
        try:
            completion = await self.client.complete(
                request.messages, request.model, request.max_tokens, request.temperature
            )
        except Exception as e:
            error = classify_error(e)
            logger.warning(f"Chat request failed: {error.kind} ({error.status_code}): {error.message}")
            if error is e:
                raise
            raise error from e

        logger.info("Chat response sent successfully")
        return ChatResponse(
            message=completion.message,
            model=request.model,
            usage=completion.usage,
            finish_reason=completion.finish_reason,
        )

    async def compare(self, body: Any) -> CompareResponse:
        """
        Send the same conversation to every requested model concurrently.

        Every model gets its own result; a failing model is reported in its
        slot and never fails the whole request. Results follow the order of
        the requested models.

        Raises:
            InvalidRequest / InvalidMessage: Body failed validation
            ConfigurationError: No API key configured
        """
        request = validate_compare_request(body, self.settings)
        self._require_api_key()

        logger.info(
            f"Compare request - Models: {', '.join(request.models)}, "
            f"Messages: {len(request.messages)}"
        )

        group: SettledTaskGroup[Completion] = SettledTaskGroup()
        for model in request.models:
            group.spawn(
                self.client.complete(
                    request.messages, model, request.max_tokens, request.temperature
                )
            )
        outcomes = await group.join()

        results = [
            self._to_result(model, outcome)
            for model, outcome in zip(request.models, outcomes)
        ]
        failed = sum(1 for r in results if not r.success)
        logger.info(f"Compare responses sent ({len(results) - failed} ok, {failed} failed)")

        return CompareResponse(
            results=results,
            timestamp=datetime.now(timezone.utc),
        )

    @staticmethod
    def _to_result(model: str, outcome: Outcome[Completion]) -> ModelResult:
        if outcome.ok:
            completion = outcome.value
            return ModelResult(
                model=model,
                success=True,
                message=completion.message,
                usage=completion.usage,
                finish_reason=completion.finish_reason,
            )

        error = classify_error(outcome.error)
        logger.warning(f"Compare leg failed for {model}: {error.kind}: {error.message}")
        return ModelResult(
            model=model,
            success=False,
            message=error.message or "Request failed",
            error_type=error.status_code,
            error=error.error,
        )
