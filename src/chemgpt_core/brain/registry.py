# src/chemgpt_core/brain/registry.py
from __future__ import annotations

from typing import Iterable

from chemgpt_core.errors import UnknownModelError
from chemgpt_core.schema.model import ModelDescriptor

DEFAULT_MODEL_ID = "gpt-3.5-turbo"

OPENAI_CHAT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_MESSAGES_ENDPOINT = "https://api.anthropic.com/v1/messages"
GOOGLE_GENERATE_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

DEFAULT_MODELS: tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        id="gpt-4o",
        name="GPT-4o",
        provider="openai",
        endpoint=OPENAI_CHAT_ENDPOINT,
        description="マルチモーダル対応、画像と化学構造の統合分析に最適",
    ),
    ModelDescriptor(
        id="gpt-4o-mini",
        name="GPT-4o Mini",
        provider="openai",
        endpoint=OPENAI_CHAT_ENDPOINT,
        description="高速・低コスト、基本的な化学構造生成に最適",
    ),
    ModelDescriptor(
        id="gpt-4-turbo",
        name="GPT-4 Turbo",
        provider="openai",
        endpoint=OPENAI_CHAT_ENDPOINT,
        description="高性能で高速、複雑な化学分析に最適",
    ),
    ModelDescriptor(
        id="gpt-3.5-turbo",
        name="GPT-3.5 Turbo",
        provider="openai",
        endpoint=OPENAI_CHAT_ENDPOINT,
        description="コスト効率が良く、日常的な化学構造生成に最適",
    ),
    ModelDescriptor(
        id="o1-preview",
        name="O1 Preview",
        provider="openai",
        endpoint=OPENAI_CHAT_ENDPOINT,
        description="推論特化モデル、複雑な化学反応メカニズム解析に特化",
    ),
    ModelDescriptor(
        id="o1-mini",
        name="O1 Mini",
        provider="openai",
        endpoint=OPENAI_CHAT_ENDPOINT,
        description="推論特化型コンパクト版、効率的な反応予測",
    ),
    ModelDescriptor(
        id="claude-3-5-sonnet-20241022",
        name="Claude 3.5 Sonnet",
        provider="anthropic",
        endpoint=ANTHROPIC_MESSAGES_ENDPOINT,
        description="Anthropicの高性能モデル、詳細な化学分析に最適",
    ),
    ModelDescriptor(
        id="claude-3-opus-20240229",
        name="Claude 3 Opus",
        provider="anthropic",
        endpoint=ANTHROPIC_MESSAGES_ENDPOINT,
        description="高性能モデル、複雑な化学構造解析に最適",
    ),
    ModelDescriptor(
        id="claude-3-haiku-20240307",
        name="Claude 3 Haiku",
        provider="anthropic",
        endpoint=ANTHROPIC_MESSAGES_ENDPOINT,
        description="高速で効率的、基本的な化学タスクに最適",
    ),
    ModelDescriptor(
        id="gemini-1.5-pro",
        name="Gemini 1.5 Pro",
        provider="google",
        endpoint=GOOGLE_GENERATE_ENDPOINT.format(model="gemini-1.5-pro-latest"),
        description="Googleの高性能モデル、複雑な化学分析に最適",
    ),
    ModelDescriptor(
        id="gemini-1.5-flash",
        name="Gemini 1.5 Flash",
        provider="google",
        endpoint=GOOGLE_GENERATE_ENDPOINT.format(model="gemini-1.5-flash-latest"),
        description="高速レスポンス、リアルタイム対話に最適",
    ),
)


class ModelRegistry:
    """Static catalogue of selectable models. Read-only after construction."""

    def __init__(self, models: Iterable[ModelDescriptor] = DEFAULT_MODELS) -> None:
        self._models: dict[str, ModelDescriptor] = {}
        for model in models:
            self._models[model.id] = model

    def list_models(self) -> list[ModelDescriptor]:
        return list(self._models.values())

    def contains(self, model_id: str) -> bool:
        return model_id in self._models

    def get(self, model_id: str) -> ModelDescriptor:
        try:
            return self._models[model_id]
        except KeyError:
            raise UnknownModelError(model_id) from None

    def resolve_default(self, preferred: str | None) -> str:
        """Return `preferred` if registered, otherwise a registered fallback id."""
        candidate = (preferred or "").strip()
        if candidate in self._models:
            return candidate
        if DEFAULT_MODEL_ID in self._models:
            return DEFAULT_MODEL_ID
        return next(iter(self._models))


model_registry = ModelRegistry()
