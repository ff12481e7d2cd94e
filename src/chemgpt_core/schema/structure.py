"""ChemicalStructure: an encoded structure extracted from model output for the editor."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

StructureFormat = Literal["smiles", "ket", "inchi", "molfile"]
StructureAction = Literal["add", "replace"]


class ChemicalStructure(BaseModel):
    """
    A structure handed from a model reply to the Canvas Activation Bridge.
    Frozen: the result owns it until the bridge consumes it.
    """

    model_config = ConfigDict(frozen=True)

    format: StructureFormat = Field(default="smiles", description="Encoding of `data`.")
    data: str = Field(..., description="The structure encoding, e.g. a SMILES string.")
    label: Optional[str] = Field(default=None, description="Compound name shown to the user.")
    action: StructureAction = Field(default="add", description="How the editor should place it.")
