from typing import Literal

from pydantic import BaseModel, ConfigDict

Provider = Literal["openai", "anthropic", "google"]


class ModelDescriptor(BaseModel):
    """A selectable model bound to its provider and HTTP endpoint."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    provider: Provider
    endpoint: str
    description: str
