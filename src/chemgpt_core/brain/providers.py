# src/chemgpt_core/brain/providers.py
"""Per-provider request shaping, one-shot transport and response normalization."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from chemgpt_core.brain.prompts import build_system_prompt, build_user_prompt
from chemgpt_core.errors import TransportError
from chemgpt_core.logging_utils import log_event
from chemgpt_core.schema.intent import Intent
from chemgpt_core.schema.model import ModelDescriptor
from chemgpt_core.schema.request import (
    AnthropicRequest,
    GoogleRequest,
    OpenAIRequest,
    ProviderRequest,
)

TEMPERATURE = 0.7
MAX_TOKENS = 1000
ANTHROPIC_VERSION = "2023-06-01"


def build_request(model: ModelDescriptor, api_key: str, intent: Intent) -> ProviderRequest:
    system_prompt = build_system_prompt(intent.kind)
    user_message = build_user_prompt(intent)

    if model.provider == "openai":
        return OpenAIRequest(
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            body={
                "model": model.id,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                "temperature": TEMPERATURE,
                "max_tokens": MAX_TOKENS,
            },
            endpoint=model.endpoint,
        )
    if model.provider == "anthropic":
        return AnthropicRequest(
            headers={
                "Content-Type": "application/json",
                "x-api-key": api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
            body={
                "model": model.id,
                "max_tokens": MAX_TOKENS,
                "system": system_prompt,
                "messages": [{"role": "user", "content": user_message}],
            },
            endpoint=model.endpoint,
        )
    if model.provider == "google":
        return GoogleRequest(
            headers={"Content-Type": "application/json"},
            body={
                "contents": [{"parts": [{"text": f"{system_prompt}\n\n{user_message}"}]}],
                "generationConfig": {
                    "temperature": TEMPERATURE,
                    "maxOutputTokens": MAX_TOKENS,
                },
            },
            endpoint=str(httpx.URL(model.endpoint, params={"key": api_key})),
        )
    raise ValueError(f"Unsupported provider: {model.provider}")


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _get(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key)
    return None


def normalize_response(raw: Any, provider: str) -> str:
    """
    Extract the first completion text from a provider payload.
    Missing or ill-typed fields degrade to an empty string.
    """
    if provider == "openai":
        text = _get(_get(_first(_get(raw, "choices")), "message"), "content")
    elif provider == "anthropic":
        text = _get(_first(_get(raw, "content")), "text")
    elif provider == "google":
        candidate = _first(_get(raw, "candidates"))
        text = _get(_first(_get(_get(candidate, "content"), "parts")), "text")
    else:
        raise ValueError(f"Unsupported provider: {provider}")
    return text if isinstance(text, str) else ""


class ProviderClient:
    """
    Sends a ProviderRequest once. Non-2xx and network failures raise
    TransportError; nothing is retried.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout_seconds = max(1.0, float(timeout_seconds))
        self._transport = transport

    async def send(self, request: ProviderRequest) -> Any:
        timeout = httpx.Timeout(self._timeout_seconds)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(request.endpoint, headers=request.headers, json=request.body)
        except httpx.RequestError as exc:
            raise TransportError(
                status_code=0,
                message=f"{request.provider} API request failed: {type(exc).__name__}: {exc}",
                payload={"error": str(exc)},
            ) from exc

        logger.debug(
            log_event(
                "provider.response",
                provider=request.provider,
                status=response.status_code,
                bytes=len(response.content),
            )
        )

        if response.status_code < 200 or response.status_code >= 300:
            raise TransportError(
                status_code=response.status_code,
                message=(
                    f"{request.provider} API error: {response.status_code} "
                    f"{response.reason_phrase} - {response.text}"
                ),
                payload=response.text,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                status_code=response.status_code,
                message=f"{request.provider} API returned invalid JSON",
                payload=response.text,
            ) from exc
