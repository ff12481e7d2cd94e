from typing import List, Optional

from pydantic import BaseModel, Field

from chemgpt_core.schema.structure import ChemicalStructure


class UnifiedResult(BaseModel):
    """
    The single shape every orchestrator operation returns.
    On failure `structures` is empty and `suggestions` are recovery hints only.
    """
    message: str = Field(description="Sanitized text shown in the transcript.")
    structures: List[ChemicalStructure] = Field(default_factory=list)
    suggestions: List[str] = Field(
        default_factory=list,
        description="Follow-up prompts offered to the user, at most four.",
    )
    success: bool = Field(default=True)
    error: Optional[str] = Field(
        default=None,
        description="Raw technical error, retained for diagnostics only.",
    )


class CanvasActivationResult(BaseModel):
    success: bool
    added_structures: int = 0
    error: Optional[str] = None
