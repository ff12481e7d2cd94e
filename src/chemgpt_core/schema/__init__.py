"""Pydantic models shared by the prompt, provider, parsing and canvas layers."""

from chemgpt_core.schema.intent import (
    AnalyzeStructureIntent,
    GeneralChemistryIntent,
    GenerateStructureIntent,
    Intent,
    IntentKind,
    PredictReactionIntent,
)
from chemgpt_core.schema.model import ModelDescriptor, Provider
from chemgpt_core.schema.request import (
    AnthropicRequest,
    GoogleRequest,
    OpenAIRequest,
    ProviderRequest,
)
from chemgpt_core.schema.response import CanvasActivationResult, UnifiedResult
from chemgpt_core.schema.structure import ChemicalStructure

__all__ = [
    "AnalyzeStructureIntent",
    "AnthropicRequest",
    "CanvasActivationResult",
    "ChemicalStructure",
    "GeneralChemistryIntent",
    "GenerateStructureIntent",
    "GoogleRequest",
    "Intent",
    "IntentKind",
    "ModelDescriptor",
    "OpenAIRequest",
    "PredictReactionIntent",
    "Provider",
    "ProviderRequest",
    "UnifiedResult",
]
