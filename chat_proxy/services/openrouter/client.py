"""
OpenRouter chat-completions client.

One call to ``complete`` is exactly one POST to the upstream service. Failures
are raised as-is for the caller to classify (see ``error_mapping``); nothing
is retried here.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import httpx

from chat_proxy.api.models.chat import ChatMessage
from chat_proxy.config.settings import Settings
from chat_proxy.errors import UnexpectedUpstreamFormat

logger = logging.getLogger(__name__)


class UpstreamCallError(Exception):
    """Raised when the upstream call itself fails (before classification)."""


class UpstreamStatusError(UpstreamCallError):
    """Upstream answered with an HTTP error status."""

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"OpenRouter returned HTTP {status_code}")

    @property
    def upstream_message(self) -> Optional[str]:
        """The ``error.message`` field of the upstream payload, if any."""
        if isinstance(self.payload, dict):
            error = self.payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if isinstance(error, str) and error:
                return error
        return None


class UpstreamNetworkError(UpstreamCallError):
    """No response was received from upstream."""

    def __init__(self, message: str, timed_out: bool = False):
        self.timed_out = timed_out
        super().__init__(message)


@dataclass(frozen=True)
class Completion:
    message: str
    usage: Dict[str, Any] = field(default_factory=dict)
    finish_reason: Optional[str] = None


class OpenRouterClient:
    """Client for the OpenRouter chat-completions endpoint."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.openrouter_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._settings.app_url,
            "X-Title": self._settings.app_title,
        }

    @staticmethod
    def build_payload(
        messages: Sequence[ChatMessage], model: str, max_tokens: int, temperature: float
    ) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> Completion:
        """
        Send one chat-completion request.

        Returns:
            Completion with the reply text, usage record and finish reason.

        Raises:
            UpstreamStatusError: Upstream responded with status >= 400.
            UpstreamNetworkError: Timeout or connection failure.
            UnexpectedUpstreamFormat: 2xx response without a reply.
        """
        payload = self.build_payload(messages, model, max_tokens, temperature)
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.upstream_timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    self._settings.openrouter_url, json=payload, headers=self._headers()
                )
        except httpx.TimeoutException as e:
            raise UpstreamNetworkError(f"OpenRouter request timed out: {e}", timed_out=True)
        except httpx.RequestError as e:
            raise UpstreamNetworkError(f"Unable to reach OpenRouter: {e}")

        if resp.status_code >= 400:
            try:
                error_payload: Any = resp.json()
            except ValueError:
                error_payload = resp.text
            logger.error(f"OpenRouter error for model {model}: {resp.status_code} {error_payload}")
            raise UpstreamStatusError(resp.status_code, error_payload)

        try:
            data = resp.json()
        except ValueError:
            raise UnexpectedUpstreamFormat("Unexpected response format from OpenRouter")
        return self._parse_response(data)

    @staticmethod
    def _parse_response(data: Any) -> Completion:
        choices: List[Any] = data.get("choices") if isinstance(data, dict) else None
        if not choices or not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise UnexpectedUpstreamFormat("Unexpected response format from OpenRouter")

        choice = choices[0]
        message = choice.get("message")
        if not isinstance(message, dict) or "content" not in message:
            raise UnexpectedUpstreamFormat("Unexpected response format from OpenRouter")

        content = message.get("content")
        usage = data.get("usage") or {}
        finish_reason = choice.get("finish_reason")
        if (
            not isinstance(content, (str, type(None)))
            or not isinstance(usage, dict)
            or not isinstance(finish_reason, (str, type(None)))
        ):
            raise UnexpectedUpstreamFormat("Unexpected response format from OpenRouter")

        return Completion(
            message=content or "",
            usage=usage,
            finish_reason=finish_reason,
        )
