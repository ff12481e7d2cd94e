"""Intent models: one per supported chat operation, discriminated on `kind`."""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

IntentKind = Literal[
    "generate_structure",
    "analyze_structure",
    "general_chemistry",
    "predict_reaction",
]

DEFAULT_ANALYSIS_QUESTION = "この化合物について教えてください"


class GenerateStructureIntent(BaseModel):
    kind: Literal["generate_structure"] = "generate_structure"
    prompt: str


class AnalyzeStructureIntent(BaseModel):
    kind: Literal["analyze_structure"] = "analyze_structure"
    structure: str
    question: str = DEFAULT_ANALYSIS_QUESTION


class GeneralChemistryIntent(BaseModel):
    kind: Literal["general_chemistry"] = "general_chemistry"
    question: str
    context: Optional[str] = None


class PredictReactionIntent(BaseModel):
    kind: Literal["predict_reaction"] = "predict_reaction"
    reactants: List[str] = Field(default_factory=list)
    conditions: str = ""


Intent = Annotated[
    Union[
        GenerateStructureIntent,
        AnalyzeStructureIntent,
        GeneralChemistryIntent,
        PredictReactionIntent,
    ],
    Field(discriminator="kind"),
]
