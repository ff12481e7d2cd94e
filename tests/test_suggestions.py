"""Tests for the follow-up suggestion heuristic."""

import pytest

from chemgpt_core.brain.suggestions import suggest
from chemgpt_core.schema import (
    AnalyzeStructureIntent,
    ChemicalStructure,
    GenerateStructureIntent,
    PredictReactionIntent,
)
from chemgpt_core.schema.intent import GeneralChemistryIntent

ASPIRIN = ChemicalStructure(data="CC(=O)OC1=CC=CC=C1C(=O)O", label="アスピリン")


def test_generated_structure_templates_use_first_label() -> None:
    suggestions = suggest("説明文", GenerateStructureIntent(prompt="aspirin"), [ASPIRIN])

    assert suggestions == [
        "アスピリンの反応性について教えて",
        "アスピリンの合成方法は？",
        "アスピリンの類似化合物を表示",
    ]


def test_category_hits_add_one_more_within_cap() -> None:
    suggestions = suggest("代表的な医薬品です。", GenerateStructureIntent(prompt="x"), [ASPIRIN])

    assert len(suggestions) == 4
    assert suggestions[3] == "アスピリンの副作用は？"


def test_category_keywords_match_case_insensitively() -> None:
    suggestions = suggest("A common CATALYST.", GenerateStructureIntent(prompt="x"), [ASPIRIN])
    assert suggestions[3] == "アスピリンを使った反応例"


def test_analysis_suggestions_are_fixed() -> None:
    suggestions = suggest("", AnalyzeStructureIntent(structure="CCO"), [])
    assert suggestions == ["類似構造の化合物は？", "この構造の合成方法は？", "この化合物の用途は？"]


def test_generate_without_structures_uses_generic_prompts() -> None:
    suggestions = suggest("", GenerateStructureIntent(prompt="???"), [])
    assert suggestions == ["関連する化合物を表示", "この内容について詳しく", "実例を教えて"]


def test_keyword_hits_are_appended() -> None:
    suggestions = suggest("芳香族のエステル基を持つ", GeneralChemistryIntent(question="q"), [])
    assert suggestions[3] == "エステル基について詳しく"
    assert len(suggestions) == 4


@pytest.mark.parametrize(
    ("intent", "structures"),
    [
        (GenerateStructureIntent(prompt="x"), [ASPIRIN]),
        (GenerateStructureIntent(prompt="x"), []),
        (AnalyzeStructureIntent(structure="CCO"), []),
        (GeneralChemistryIntent(question="q"), []),
        (PredictReactionIntent(reactants=["CCO"]), []),
    ],
)
@pytest.mark.parametrize(
    "text",
    ["", "医薬 溶媒 触媒 ベンゼン環 カルボニル基 芳香族", "plain english answer"],
)
def test_length_is_always_three_or_four(intent, structures, text: str) -> None:
    assert 3 <= len(suggest(text, intent, structures)) <= 4
