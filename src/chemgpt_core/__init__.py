"""
chemgpt-core: chemistry assistant orchestration.

Provider-neutral LLM access for structure generation and chemistry Q&A:
Intent → Prompt → Provider → Parse (structures, sanitized text, suggestions).
"""

from chemgpt_core.brain import ModelRegistry, StructureParser
from chemgpt_core.schema import ChemicalStructure, UnifiedResult

__version__ = "0.1.0"
__all__ = ["ChemicalStructure", "ModelRegistry", "StructureParser", "UnifiedResult"]
