from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Header, Request
from loguru import logger
from pydantic import BaseModel, Field

from chemgpt_core.logging_utils import log_event
from chemgpt_core.schema.model import ModelDescriptor
from chemgpt_core.schema.response import UnifiedResult

from .assistant import ChemAssistant

ASSISTANT_TAG = "ChemGPT-Assistant"
DEFAULT_SESSION_ID = "default"
MAX_SESSIONS = 256

router = APIRouter(tags=[ASSISTANT_TAG])


class GenerateRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=4000)


class AnalyzeRequest(BaseModel):
    structure: str = Field(..., min_length=1)
    question: str | None = None


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=12000)
    context: str | None = None


class PredictRequest(BaseModel):
    reactants: list[str] = Field(..., min_length=1)
    conditions: str | None = None


class SwitchModelRequest(BaseModel):
    model_id: str


class ModelsResponse(BaseModel):
    current: str
    models: list[ModelDescriptor]


class SwitchModelResponse(BaseModel):
    switched: bool
    current: str


def _session_registry(request: Request) -> dict[str, ChemAssistant]:
    sessions = getattr(request.app.state, "assistants", None)
    if sessions is None:
        sessions = {}
        request.app.state.assistants = sessions
    return sessions


def get_assistant(
    request: Request,
    x_session_id: str | None = Header(default=None),
) -> ChemAssistant:
    session_id = (x_session_id or "").strip() or DEFAULT_SESSION_ID
    sessions = _session_registry(request)
    assistant = sessions.get(session_id)
    if assistant is None:
        if len(sessions) >= MAX_SESSIONS:
            evicted = next(iter(sessions))
            sessions.pop(evicted, None)
            logger.info(log_event("assistant.session.evicted", session=evicted))
        factory: Any = getattr(request.app.state, "assistant_factory", None) or ChemAssistant
        assistant = factory()
        sessions[session_id] = assistant
        logger.info(
            log_event(
                "assistant.session.created",
                session=session_id,
                model=assistant.session.current_model_id,
            )
        )
    return assistant


@router.get("/models", response_model=ModelsResponse)
async def list_models(assistant: ChemAssistant = Depends(get_assistant)) -> ModelsResponse:
    return ModelsResponse(current=assistant.session.current_model_id, models=assistant.list_models())


@router.put("/models/current", response_model=SwitchModelResponse)
async def switch_model(
    payload: SwitchModelRequest,
    assistant: ChemAssistant = Depends(get_assistant),
) -> SwitchModelResponse:
    switched = assistant.switch_model(payload.model_id)
    return SwitchModelResponse(switched=switched, current=assistant.session.current_model_id)


@router.post("/generate", response_model=UnifiedResult)
async def generate_structure(
    payload: GenerateRequest,
    assistant: ChemAssistant = Depends(get_assistant),
) -> UnifiedResult:
    return await assistant.generate_structure(payload.prompt)


@router.post("/analyze", response_model=UnifiedResult)
async def analyze_structure(
    payload: AnalyzeRequest,
    assistant: ChemAssistant = Depends(get_assistant),
) -> UnifiedResult:
    return await assistant.analyze_structure(payload.structure, payload.question)


@router.post("/ask", response_model=UnifiedResult)
async def ask_question(
    payload: AskRequest,
    assistant: ChemAssistant = Depends(get_assistant),
) -> UnifiedResult:
    return await assistant.ask_question(payload.question, payload.context)


@router.post("/predict", response_model=UnifiedResult)
async def predict_reaction(
    payload: PredictRequest,
    assistant: ChemAssistant = Depends(get_assistant),
) -> UnifiedResult:
    return await assistant.predict_reaction(payload.reactants, payload.conditions)
