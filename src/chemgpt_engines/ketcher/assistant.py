from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import httpx
from loguru import logger

from chemgpt_core.brain.mock import mock_reply
from chemgpt_core.brain.parser import StructureParser
from chemgpt_core.brain.providers import ProviderClient, build_request, normalize_response
from chemgpt_core.brain.registry import ModelRegistry, model_registry
from chemgpt_core.brain.suggestions import suggest
from chemgpt_core.config import Settings, get_settings
from chemgpt_core.errors import ConfigurationError
from chemgpt_core.logging_utils import log_event
from chemgpt_core.schema.intent import (
    DEFAULT_ANALYSIS_QUESTION,
    AnalyzeStructureIntent,
    GeneralChemistryIntent,
    GenerateStructureIntent,
    Intent,
    PredictReactionIntent,
)
from chemgpt_core.schema.model import ModelDescriptor
from chemgpt_core.schema.response import UnifiedResult
from chemgpt_core.schema.structure import ChemicalStructure

FAILURE_MESSAGE = "AI サービスでエラーが発生しました。しばらくしてからもう一度お試しください。"
FAILURE_SUGGESTIONS = ("別の質問をする", "サポートに連絡")


@dataclass
class AssistantSession:
    """Per-session state. `current_model_id` has a single writer: `switch_model`."""

    current_model_id: str


class ChemAssistant:
    """
    Façade over prompt building, provider dispatch and reply parsing.

    Every public operation returns a UnifiedResult; failures are converted
    to `success=False` here and never propagate to the caller.
    """

    def __init__(
        self,
        session: AssistantSession | None = None,
        *,
        registry: ModelRegistry = model_registry,
        settings_factory: Callable[[], Settings] = get_settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._registry = registry
        self._settings_factory = settings_factory
        self._transport = transport
        if session is None:
            session = AssistantSession(
                current_model_id=registry.resolve_default(settings_factory().CHEMGPT_DEFAULT_MODEL)
            )
        elif not registry.contains(session.current_model_id):
            session.current_model_id = registry.resolve_default(session.current_model_id)
        self.session = session

    # --- model selection ---

    def list_models(self) -> list[ModelDescriptor]:
        return self._registry.list_models()

    @property
    def current_model(self) -> ModelDescriptor:
        return self._registry.get(self.session.current_model_id)

    def switch_model(self, model_id: str) -> bool:
        """Select `model_id`; unknown ids are ignored and return False."""
        if not self._registry.contains(model_id):
            logger.debug(log_event("assistant.model.switch_ignored", model=model_id))
            return False
        self.session.current_model_id = model_id
        logger.info(log_event("assistant.model.switched", model=model_id))
        return True

    # --- operations ---

    async def generate_structure(self, prompt: str) -> UnifiedResult:
        return await self._run(lambda: GenerateStructureIntent(prompt=prompt))

    async def analyze_structure(self, structure_text: str, question: str | None = None) -> UnifiedResult:
        return await self._run(
            lambda: AnalyzeStructureIntent(
                structure=structure_text,
                question=question or DEFAULT_ANALYSIS_QUESTION,
            )
        )

    async def ask_question(self, question: str, context: str | None = None) -> UnifiedResult:
        return await self._run(lambda: GeneralChemistryIntent(question=question, context=context))

    async def predict_reaction(self, reactants: Sequence[str], conditions: str | None = None) -> UnifiedResult:
        return await self._run(
            lambda: PredictReactionIntent(reactants=list(reactants), conditions=conditions or "")
        )

    # --- internals ---

    async def _run(self, build_intent: Callable[[], Intent]) -> UnifiedResult:
        t0 = time.perf_counter()
        kind = "unknown"
        model_id = self.session.current_model_id
        try:
            intent = build_intent()
            kind = intent.kind
            raw_text, carried = await self._dispatch(intent)
            result = self._compose(raw_text, intent, carried)
        except Exception as error:  # noqa: BLE001
            logger.exception(
                log_event(
                    "assistant.turn.failed",
                    kind=kind,
                    model=model_id,
                    elapsed=f"{time.perf_counter() - t0:.2f}s",
                    error=str(error),
                )
            )
            return self._failure(error)

        logger.info(
            log_event(
                "assistant.turn.done",
                kind=kind,
                model=model_id,
                elapsed=f"{time.perf_counter() - t0:.2f}s",
                structures=len(result.structures),
                chars=len(result.message),
            )
        )
        return result

    async def _dispatch(self, intent: Intent) -> tuple[str, list[ChemicalStructure]]:
        """Return the raw reply text and any structures delivered with it."""
        settings = self._settings_factory()
        if settings.CHEMGPT_USE_MOCK_AI:
            logger.debug(log_event("assistant.dispatch.mock", kind=intent.kind))
            reply = await mock_reply(intent, delay_seconds=settings.CHEMGPT_MOCK_DELAY_SECONDS)
            return reply.text, list(reply.structures)

        model = self.current_model
        api_key = settings.api_key_for(model.provider)
        if not api_key:
            raise ConfigurationError(f"API key not found for {model.provider}")

        request = build_request(model, api_key, intent)
        logger.info(
            log_event("assistant.dispatch.live", kind=intent.kind, provider=model.provider, model=model.id)
        )
        client = ProviderClient(
            timeout_seconds=settings.CHEMGPT_REQUEST_TIMEOUT,
            transport=self._transport,
        )
        raw = await client.send(request)
        return normalize_response(raw, model.provider), []

    @staticmethod
    def _compose(
        raw_text: str,
        intent: Intent,
        carried: Sequence[ChemicalStructure] = (),
    ) -> UnifiedResult:
        structures = list(carried)
        if intent.kind == "generate_structure":
            structures.extend(StructureParser.extract(raw_text))
        message = StructureParser.sanitize(raw_text)
        return UnifiedResult(
            message=message,
            structures=structures,
            suggestions=suggest(message, intent, structures),
            success=True,
        )

    @staticmethod
    def _failure(error: Any) -> UnifiedResult:
        return UnifiedResult(
            message=FAILURE_MESSAGE,
            structures=[],
            suggestions=list(FAILURE_SUGGESTIONS),
            success=False,
            error=str(error),
        )
