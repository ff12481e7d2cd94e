# src/chemgpt_core/brain/suggestions.py
from __future__ import annotations

from typing import Sequence

from chemgpt_core.schema.intent import Intent
from chemgpt_core.schema.structure import ChemicalStructure

MAX_SUGGESTIONS = 4
MAX_CATEGORY_SUGGESTIONS = 2
MAX_KEYWORD_SUGGESTIONS = 2

# (trigger terms, suggestion templates) scanned case-insensitively.
CATEGORY_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("薬", "医薬", "drug", "pharmaceutical"), ("{name}の副作用は？", "{name}の作用機序は？")),
    (("有機溶媒", "溶媒", "solvent"), ("{name}の沸点は？", "{name}の毒性について")),
    (("触媒", "catalyst"), ("{name}を使った反応例", "{name}の触媒活性")),
)

GENERATED_TEMPLATES = (
    "{name}の反応性について教えて",
    "{name}の合成方法は？",
    "{name}の類似化合物を表示",
)
ANALYSIS_SUGGESTIONS = (
    "類似構造の化合物は？",
    "この構造の合成方法は？",
    "この化合物の用途は？",
)
GENERIC_SUGGESTIONS = (
    "関連する化合物を表示",
    "この内容について詳しく",
    "実例を教えて",
)
KEYWORD_TEMPLATE = "{keyword}について詳しく"

CHEMICAL_KEYWORDS = (
    "ベンゼン環",
    "カルボニル基",
    "ヒドロキシ基",
    "アミノ基",
    "カルボキシル基",
    "エステル基",
    "エーテル基",
    "アルデヒド基",
    "ケトン基",
    "ニトロ基",
    "芳香族",
    "脂肪族",
    "不飽和",
    "立体異性体",
    "エナンチオマー",
    "酸化反応",
    "還元反応",
    "付加反応",
    "置換反応",
    "脱離反応",
)


def extract_chemical_keywords(text: str, limit: int = MAX_KEYWORD_SUGGESTIONS) -> list[str]:
    return [term for term in CHEMICAL_KEYWORDS if term in text][:limit]


def _category_suggestions(text: str, name: str) -> list[str]:
    lowered = text.lower()
    hits: list[str] = []
    for triggers, templates in CATEGORY_RULES:
        if any(trigger.lower() in lowered for trigger in triggers):
            hits.extend(template.format(name=name) for template in templates)
    return hits[:MAX_CATEGORY_SUGGESTIONS]


def suggest(text: str, intent: Intent, structures: Sequence[ChemicalStructure]) -> list[str]:
    """Derive 3–4 follow-up prompts from the sanitized reply. Never raises."""
    text = text or ""
    suggestions: list[str]

    if intent.kind == "generate_structure" and structures:
        name = structures[0].label or getattr(intent, "prompt", "") or "この化合物"
        suggestions = [template.format(name=name) for template in GENERATED_TEMPLATES]
        suggestions.extend(_category_suggestions(text, name))
    elif intent.kind == "analyze_structure":
        suggestions = list(ANALYSIS_SUGGESTIONS)
    else:
        suggestions = list(GENERIC_SUGGESTIONS)

    for keyword in extract_chemical_keywords(text):
        suggestions.append(KEYWORD_TEMPLATE.format(keyword=keyword))

    return suggestions[:MAX_SUGGESTIONS]
