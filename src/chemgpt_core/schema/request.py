# src/chemgpt_core/schema/request.py
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, Field


class _BaseProviderRequest(BaseModel):
    """
    An outbound provider call, built and consumed within one dispatch.
    """
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Dict[str, Any] = Field(default_factory=dict)
    endpoint: str = Field(..., description="Fully resolved URL, query string included.")


class OpenAIRequest(_BaseProviderRequest):
    provider: Literal["openai"] = "openai"


class AnthropicRequest(_BaseProviderRequest):
    provider: Literal["anthropic"] = "anthropic"


class GoogleRequest(_BaseProviderRequest):
    provider: Literal["google"] = "google"


ProviderRequest = Annotated[
    Union[OpenAIRequest, AnthropicRequest, GoogleRequest],
    Field(discriminator="provider"),
]
