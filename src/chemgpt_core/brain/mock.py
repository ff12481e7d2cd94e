# src/chemgpt_core/brain/mock.py
"""
Canned replies used instead of live provider calls when mock mode is on.

Replies are raw model text in the same shape a compliant provider returns,
so they go through the normal extraction/sanitizing pipeline. Entries may
also carry ready-made structures (the reaction product, for instance).
"""

from __future__ import annotations

import asyncio
from typing import Any, List

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from chemgpt_core.errors import MockDataError
from chemgpt_core.logging_utils import log_event
from chemgpt_core.schema.intent import Intent
from chemgpt_core.schema.structure import ChemicalStructure


class CannedReply(BaseModel):
    text: str = Field(..., min_length=1)
    # Delivered alongside the text rather than parsed out of it.
    structures: List[ChemicalStructure] = Field(default_factory=list)


def _structure_reply(summary: str, name: str, smiles: str, details: str) -> dict[str, Any]:
    block = f'```json\n{{"compound_name": "{name}", "smiles": "{smiles}"}}\n```'
    return {"text": f"{summary}\n\n{block}\n\n{details}"}


# Matched by exact substring against the generate prompt, in insertion order.
KNOWN_COMPOUNDS: dict[str, dict[str, Any]] = {
    "アスピリン": _structure_reply(
        "アスピリン（アセチルサリチル酸）の構造を生成しました。この化合物は解熱・鎮痛・抗炎症作用を持つ代表的なNSAIDです。",
        "アスピリン",
        "CC(=O)OC1=CC=CC=C1C(=O)O",
        "分子式はC9H8O4、分子量は180.16 g/molです。エステル基とカルボキシル基を持ちます。",
    ),
    "カフェイン": _structure_reply(
        "カフェイン（1,3,7-トリメチルキサンチン）の構造を生成しました。中枢神経刺激作用を持つアルカロイドです。",
        "カフェイン",
        "CN1C=NC2=C1C(=O)N(C(=O)N2C)C",
        "分子式はC8H10N4O2、分子量は194.19 g/molです。",
    ),
    "ベンゼン": _structure_reply(
        "ベンゼンの構造を生成しました。最も基本的な芳香族炭化水素で、有機溶媒としても使われてきました。",
        "ベンゼン",
        "C1=CC=CC=C1",
        "分子式はC6H6、分子量は78.11 g/molです。発がん性があるため取り扱いに注意してください。",
    ),
    "エタノール": _structure_reply(
        "エタノールの構造を生成しました。ヒドロキシ基を持つ代表的なアルコールで、溶媒や消毒に用いられます。",
        "エタノール",
        "CCO",
        "分子式はC2H6O、分子量は46.07 g/molです。引火性が高いため火気に注意してください。",
    ),
}

NEED_MORE_DETAIL_TEMPLATE = (
    "「{prompt}」について化学構造を検索しています。具体的な化合物名を教えていただけますか？"
)

CANNED_BY_KIND: dict[str, dict[str, Any]] = {
    "analyze_structure": {
        "text": "この化合物はベンゼン環を含む芳香族化合物です。分子量は約180で、酸性の性質を示します。",
    },
    "general_chemistry": {
        "text": "「{question}」についてお答えします。化学に関するご質問でしたら、より具体的にお聞かせください。",
    },
    "predict_reaction": {
        "text": "反応予測を実行しました。主生成物として酢酸（CC(=O)O）が予想されます。エステルの加水分解による置換反応と考えられます。",
        "structures": [
            {"format": "smiles", "data": "CC(=O)O", "label": "生成物1", "action": "add"},
        ],
    },
}


def _select_entry(intent: Intent) -> tuple[str, dict[str, Any]]:
    if intent.kind == "generate_structure":
        prompt = intent.prompt or ""
        for keyword, entry in KNOWN_COMPOUNDS.items():
            if keyword in prompt:
                return keyword, entry
        return "need_more_detail", {"text": NEED_MORE_DETAIL_TEMPLATE.format(prompt=prompt or "不明")}

    entry = CANNED_BY_KIND.get(intent.kind)
    if entry is None:
        raise MockDataError(f"No canned reply for intent kind: {intent.kind}")
    if intent.kind == "general_chemistry":
        question = intent.question or "不明"
        return intent.kind, {**entry, "text": str(entry.get("text", "")).format(question=question)}
    return intent.kind, entry


async def mock_reply(intent: Intent, *, delay_seconds: float = 0.8) -> CannedReply:
    """Return the validated canned reply for `intent` after an artificial delay."""
    key, entry = _select_entry(intent)
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)

    try:
        reply = CannedReply.model_validate(entry)
    except ValidationError as exc:
        raise MockDataError(f"Invalid canned reply '{key}': {exc}") from exc

    logger.debug(
        log_event(
            "mock.reply",
            kind=intent.kind,
            key=key,
            chars=len(reply.text),
            structures=len(reply.structures),
        )
    )
    return reply
