"""
Shared fixtures: test settings, a fake OpenRouter behind httpx.MockTransport,
a fake Supabase client, and a TestClient wired to all of them.
"""
import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from chat_proxy.api.endpoints.chat import get_upstream_transport
from chat_proxy.config.database import get_supabase
from chat_proxy.config.settings import Settings, get_settings
from main import create_app

Behaviour = Union[httpx.Response, Exception, Callable[[httpx.Request], Any]]


def make_settings(**overrides) -> Settings:
    values = dict(
        openrouter_api_key="test-key",
        default_model="openai/gpt-4o-mini",
        environment="test",
        upstream_timeout=5.0,
        rate_limit_requests=1000,
        rate_limit_window_seconds=900,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


def completion_body(content: Any = "Hello!", finish_reason: str = "stop") -> Dict[str, Any]:
    return {
        "id": "gen-1",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


class FakeOpenRouter:
    """Answers chat-completion requests per model and records every call."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.requests: List[httpx.Request] = []
        self.behaviours: Dict[str, Behaviour] = {}

    def on(self, model: str, behaviour: Behaviour) -> None:
        self.behaviours[model] = behaviour

    async def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append(payload)
        self.requests.append(request)

        behaviour = self.behaviours.get(payload["model"])
        if behaviour is None:
            return httpx.Response(200, json=completion_body(f"Reply from {payload['model']}"))
        if isinstance(behaviour, Exception):
            raise behaviour
        if isinstance(behaviour, httpx.Response):
            return behaviour
        result = behaviour(request)
        if hasattr(result, "__await__"):
            result = await result
        return result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class FakeTable:
    """Minimal stand-in for the supabase query builder."""

    def __init__(self, rows: List[Dict[str, Any]]):
        self.rows = rows
        self._op = "select"
        self._payload = None
        self._filters = []
        self._limit = None

    def select(self, *columns):
        self._op = "select"
        return self

    def insert(self, record):
        self._op = "insert"
        self._payload = record
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def execute(self):
        matched = [r for r in self.rows if all(r.get(c) == v for c, v in self._filters)]
        if self._op == "insert":
            row = dict(self._payload, id=len(self.rows) + 1)
            self.rows.append(row)
            data = [row]
        elif self._op == "delete":
            for row in matched:
                self.rows.remove(row)
            data = matched
        else:
            data = matched[: self._limit] if self._limit else matched
        return SimpleNamespace(data=data)


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}

    def table(self, name: str) -> FakeTable:
        return FakeTable(self.tables.setdefault(name, []))


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def upstream() -> FakeOpenRouter:
    return FakeOpenRouter()


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


def build_app(settings: Settings, upstream: FakeOpenRouter, supabase: FakeSupabase = None):
    application = create_app(settings)
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_upstream_transport] = lambda: upstream.transport
    application.dependency_overrides[get_supabase] = lambda: supabase or FakeSupabase()
    return application


@pytest.fixture
def app(settings, upstream, supabase):
    return build_app(settings, upstream, supabase)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_messages() -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": "You are a helpful NPC."},
        {"role": "user", "content": "Where is the shop?"},
    ]
