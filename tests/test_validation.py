import pytest

from chat_proxy.errors import InvalidMessage, InvalidRequest
from chat_proxy.services.validation import (
    validate_chat_request,
    validate_compare_request,
)

from .conftest import make_settings

SETTINGS = make_settings(default_model="openai/gpt-4o-mini")
MESSAGES = [{"role": "user", "content": "hi"}]


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"messages": None},
        {"messages": []},
        {"messages": "hello"},
        {"messages": {"role": "user", "content": "hi"}},
    ],
)
def test_missing_or_empty_conversation_is_invalid_request(body):
    with pytest.raises(InvalidRequest):
        validate_chat_request(body, SETTINGS)
    with pytest.raises(InvalidRequest):
        validate_compare_request({**body, "models": ["a"]}, SETTINGS)


@pytest.mark.parametrize("body", [None, [], "messages", 42])
def test_non_object_body_is_invalid_request(body):
    with pytest.raises(InvalidRequest):
        validate_chat_request(body, SETTINGS)


@pytest.mark.parametrize("role", ["tool", "developer", "USER", "", None, 3])
def test_unknown_role_is_invalid_message(role):
    body = {"messages": [{"role": "user", "content": "ok"}, {"role": role, "content": "x"}]}
    with pytest.raises(InvalidMessage) as exc_info:
        validate_chat_request(body, SETTINGS)
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize(
    "message",
    [
        {"content": "no role"},
        {"role": "user"},
        {"role": "user", "content": ""},
        {"role": "user", "content": 12},
        "just a string",
    ],
)
def test_malformed_message_is_invalid_message(message):
    with pytest.raises(InvalidMessage) as exc_info:
        validate_chat_request({"messages": [message]}, SETTINGS)
    assert "index 0" in exc_info.value.message


def test_conversation_order_is_preserved_and_extra_keys_dropped():
    body = {
        "messages": [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "one", "name": "player1"},
            {"role": "assistant", "content": "two"},
            {"role": "user", "content": "three"},
        ]
    }
    request = validate_chat_request(body, SETTINGS)
    assert [m.content for m in request.messages] == ["be brief", "one", "two", "three"]
    assert [m.role for m in request.messages] == ["system", "user", "assistant", "user"]


def test_defaults_applied():
    request = validate_chat_request({"messages": MESSAGES}, SETTINGS)
    assert request.model == "openai/gpt-4o-mini"
    assert request.max_tokens == 1000
    assert request.temperature == 0.7


def test_empty_model_falls_back_to_default():
    request = validate_chat_request({"messages": MESSAGES, "model": ""}, SETTINGS)
    assert request.model == "openai/gpt-4o-mini"


@pytest.mark.parametrize(
    "max_tokens, expected",
    [(999999, 4000), (4000, 4000), (1, 1), (250, 250), (0, 1000), (-5, 1000), (512.9, 512)],
)
def test_max_tokens_normalization(max_tokens, expected):
    request = validate_chat_request({"messages": MESSAGES, "max_tokens": max_tokens}, SETTINGS)
    assert request.max_tokens == expected


@pytest.mark.parametrize(
    "temperature, expected",
    [(5, 2.0), (-1, 0.0), (0, 0.0), (2, 2.0), (1.3, 1.3), (None, 0.7)],
)
def test_temperature_clamped(temperature, expected):
    request = validate_chat_request({"messages": MESSAGES, "temperature": temperature}, SETTINGS)
    assert request.temperature == pytest.approx(expected)


@pytest.mark.parametrize(
    "field, value",
    [("max_tokens", "lots"), ("max_tokens", True), ("temperature", "hot"), ("model", 7)],
)
def test_wrong_parameter_types_are_invalid_request(field, value):
    with pytest.raises(InvalidRequest):
        validate_chat_request({"messages": MESSAGES, field: value}, SETTINGS)


def test_limits_follow_settings():
    settings = make_settings(max_tokens_limit=256, default_max_tokens=64, default_temperature=0.2)
    request = validate_chat_request({"messages": MESSAGES, "max_tokens": 1000}, settings)
    assert request.max_tokens == 256
    request = validate_chat_request({"messages": MESSAGES}, settings)
    assert request.max_tokens == 64
    assert request.temperature == pytest.approx(0.2)


@pytest.mark.parametrize("models", [None, [], "openai/gpt-4o", ["a", "b", "c", "d", "e", "f"]])
def test_compare_rejects_bad_model_lists(models):
    with pytest.raises(InvalidRequest):
        validate_compare_request({"messages": MESSAGES, "models": models}, SETTINGS)


@pytest.mark.parametrize("models", [["a", ""], ["a", None], [{"id": "a"}]])
def test_compare_rejects_bad_model_entries(models):
    with pytest.raises(InvalidRequest):
        validate_compare_request({"messages": MESSAGES, "models": models}, SETTINGS)


@pytest.mark.parametrize("count", [1, 2, 3, 4, 5])
def test_compare_accepts_up_to_five_models(count):
    models = [f"vendor/model-{i}" for i in range(count)]
    request = validate_compare_request(
        {"messages": MESSAGES, "models": models, "max_tokens": 10_000, "temperature": -3},
        SETTINGS,
    )
    assert request.models == models
    assert request.max_tokens == 4000
    assert request.temperature == 0.0


def test_compare_validates_messages_before_models():
    with pytest.raises(InvalidMessage):
        validate_compare_request(
            {"messages": [{"role": "robot", "content": "x"}], "models": []}, SETTINGS
        )
