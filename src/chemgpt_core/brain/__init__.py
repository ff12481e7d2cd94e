"""LLM orchestration (Brain): model catalogue, prompts, provider adapters and parsing."""

from chemgpt_core.brain.parser import StructureParser
from chemgpt_core.brain.providers import ProviderClient, build_request, normalize_response
from chemgpt_core.brain.registry import ModelRegistry, model_registry

__all__ = [
    "ModelRegistry",
    "ProviderClient",
    "StructureParser",
    "build_request",
    "model_registry",
    "normalize_response",
]
