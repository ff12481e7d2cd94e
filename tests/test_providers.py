"""Tests for provider request shaping, normalization and one-shot transport."""

import json

import httpx
import pytest

from chemgpt_core.brain.providers import ProviderClient, build_request, normalize_response
from chemgpt_core.brain.registry import ModelRegistry
from chemgpt_core.errors import TransportError
from chemgpt_core.schema import AnthropicRequest, GenerateStructureIntent, GoogleRequest, OpenAIRequest

REGISTRY = ModelRegistry()
INTENT = GenerateStructureIntent(prompt="aspirin")


def test_openai_request_shape() -> None:
    request = build_request(REGISTRY.get("gpt-4o"), "sk-test", INTENT)

    assert isinstance(request, OpenAIRequest)
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.endpoint == "https://api.openai.com/v1/chat/completions"
    assert request.body["model"] == "gpt-4o"
    assert [m["role"] for m in request.body["messages"]] == ["system", "user"]
    assert request.body["temperature"] == 0.7
    assert request.body["max_tokens"] == 1000


def test_anthropic_request_shape() -> None:
    request = build_request(REGISTRY.get("claude-3-opus-20240229"), "ak-test", INTENT)

    assert isinstance(request, AnthropicRequest)
    assert request.headers["x-api-key"] == "ak-test"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert "Authorization" not in request.headers
    assert request.body["system"]
    assert [m["role"] for m in request.body["messages"]] == ["user"]
    assert request.body["max_tokens"] == 1000
    assert "temperature" not in request.body


def test_google_request_shape() -> None:
    request = build_request(REGISTRY.get("gemini-1.5-pro"), "gk-test", INTENT)

    assert isinstance(request, GoogleRequest)
    assert request.endpoint.endswith(":generateContent?key=gk-test")
    assert "gk-test" not in json.dumps(request.headers)
    parts = request.body["contents"][0]["parts"]
    assert len(parts) == 1
    assert "\n\n" in parts[0]["text"]
    assert request.body["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 1000}


def test_normalize_first_completion_per_provider() -> None:
    assert normalize_response({"choices": [{"message": {"content": "a"}}, {"message": {"content": "b"}}]}, "openai") == "a"
    assert normalize_response({"content": [{"type": "text", "text": "c"}]}, "anthropic") == "c"
    assert normalize_response({"candidates": [{"content": {"parts": [{"text": "d"}]}}]}, "google") == "d"


@pytest.mark.parametrize(
    ("raw", "provider"),
    [
        ({}, "openai"),
        ({"choices": []}, "openai"),
        ({"choices": [{"message": {"content": None}}]}, "openai"),
        ({"content": "not-a-list"}, "anthropic"),
        ({"candidates": [{"content": {}}]}, "google"),
        (None, "google"),
    ],
)
def test_normalize_degrades_to_empty_string(raw: object, provider: str) -> None:
    assert normalize_response(raw, provider) == ""


@pytest.mark.anyio
async def test_send_posts_json_once() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    request = build_request(REGISTRY.get("gpt-4o-mini"), "sk-test", INTENT)
    client = ProviderClient(transport=httpx.MockTransport(handler))

    payload = await client.send(request)

    assert normalize_response(payload, "openai") == "ok"
    assert len(calls) == 1
    assert calls[0].headers["Authorization"] == "Bearer sk-test"
    assert json.loads(calls[0].content)["model"] == "gpt-4o-mini"


@pytest.mark.anyio
async def test_send_raises_transport_error_on_non_2xx_without_retry() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(429, text="rate limited")

    request = build_request(REGISTRY.get("claude-3-haiku-20240307"), "ak-test", INTENT)
    client = ProviderClient(transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError) as excinfo:
        await client.send(request)

    assert calls["count"] == 1
    assert excinfo.value.status_code == 429
    assert "rate limited" in str(excinfo.value)
    assert "anthropic API error: 429" in str(excinfo.value)


@pytest.mark.anyio
async def test_send_wraps_network_failures() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    request = build_request(REGISTRY.get("gemini-1.5-flash"), "gk-test", INTENT)
    client = ProviderClient(transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError) as excinfo:
        await client.send(request)

    assert excinfo.value.status_code == 0
    assert "connection refused" in str(excinfo.value)


@pytest.mark.anyio
async def test_send_rejects_invalid_json() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    request = build_request(REGISTRY.get("gpt-4o"), "sk-test", INTENT)
    client = ProviderClient(transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError):
        await client.send(request)
