"""Ketcher engine: assistant façade, canvas activation bridge and HTTP routes."""

from .assistant import AssistantSession, ChemAssistant
from .canvas import CanvasActivationBridge, resolve_input_format

__all__ = [
    "AssistantSession",
    "CanvasActivationBridge",
    "ChemAssistant",
    "resolve_input_format",
]
