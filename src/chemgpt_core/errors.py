from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ChemGPTError(Exception):
    """Base class for assistant failures surfaced at the orchestrator boundary."""


class ConfigurationError(ChemGPTError):
    """A credential required by the active provider is missing. Never retried."""


class UnknownModelError(ChemGPTError, KeyError):
    def __init__(self, model_id: str) -> None:
        super().__init__(model_id)
        self.model_id = model_id

    def __str__(self) -> str:
        return f"Unknown model: {self.model_id}"


@dataclass(eq=False)
class TransportError(ChemGPTError):
    status_code: int
    message: str
    payload: Any = None

    def __str__(self) -> str:
        if self.status_code:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class MockDataError(ChemGPTError):
    """Canned mock data failed validation."""
