"""Tests for structure extraction and message sanitizing."""

import pytest

from chemgpt_core.brain.parser import StructureParser


def test_single_fenced_block_is_extracted_and_stripped() -> None:
    text = 'intro ```json\n{"compound_name":"X","smiles":"C"}\n```\ntail'

    structures = StructureParser.extract(text)

    assert len(structures) == 1
    assert structures[0].label == "X"
    assert structures[0].data == "C"
    assert structures[0].format == "smiles"
    assert structures[0].action == "add"
    assert StructureParser.sanitize(text) == "intro\n\ntail"


def test_malformed_blocks_fall_back_to_legacy_markers() -> None:
    text = (
        "Here you go.\n"
        '```json\n{"compound_name": "Ethanol"}\n```\n'
        '```json\n{"smiles": "CCO"}\n```\n'
        "Foo: CCO\n"
    )

    structures = StructureParser.extract(text)

    assert [(s.label, s.data) for s in structures] == [("Foo", "CCO")]


def test_valid_fenced_block_suppresses_legacy_markers() -> None:
    text = (
        "Legacy: CCCC\n"
        '```json\n{"compound_name": "Benzene", "smiles": "c1ccccc1"}\n```'
    )

    structures = StructureParser.extract(text)

    assert [(s.label, s.data) for s in structures] == [("Benzene", "c1ccccc1")]


def test_invalid_block_does_not_affect_siblings() -> None:
    text = (
        '```json\n{"compound_name": "A", "smiles": "C"}\n```\n'
        '```json\n{"compound_name": "B", "smiles": null}\n```\n'
        '```json\n{"compound_name": "  ", "smiles": "N"}\n```\n'
        '```json\n{"compound_name": "D", "smiles": "O"}\n```'
    )

    structures = StructureParser.extract(text)

    assert [(s.label, s.data) for s in structures] == [("A", "C"), ("D", "O")]


def test_fields_are_trimmed() -> None:
    text = '```json\n{"compound_name": "  Water ", "smiles": " O  "}\n```'

    structure = StructureParser.extract(text)[0]

    assert structure.label == "Water"
    assert structure.data == "O"


def test_bare_fence_without_language_tag_is_accepted() -> None:
    text = '```\n{"compound_name": "Methane", "smiles": "C"}\n```'
    assert [s.label for s in StructureParser.extract(text)] == ["Methane"]


def test_duplicate_encodings_are_kept_in_order() -> None:
    text = (
        '```json\n{"compound_name": "Ethanol", "smiles": "CCO"}\n```\n'
        '```json\n{"compound_name": "Ethyl alcohol", "smiles": "CCO"}\n```'
    )

    structures = StructureParser.extract(text)

    assert [s.data for s in structures] == ["CCO", "CCO"]
    assert [s.label for s in structures] == ["Ethanol", "Ethyl alcohol"]


def test_format_keyword_labels_get_synthesized_names() -> None:
    text = "概要です。\nSMILES: CC(=O)OC1=CC=CC=C1C(=O)O\nSMILES: CCO\n"

    structures = StructureParser.extract(text)

    assert [s.label for s in structures] == ["structure 1", "structure 2"]
    assert structures[0].data == "CC(=O)OC1=CC=CC=C1C(=O)O"


def test_prose_and_urls_are_not_markers() -> None:
    text = "分子量: 180.16 g/mol\nhttps://example.com/aspirin\nNo structure here."
    assert StructureParser.extract(text) == []


def test_no_markup_yields_no_structures() -> None:
    assert StructureParser.extract("") == []
    assert StructureParser.extract("Just a friendly answer.") == []


def test_sanitize_removes_legacy_markers_and_collapses_newlines() -> None:
    text = "Top\n\n\n\nSMILES: CCO\n\n\nBottom  "
    assert StructureParser.sanitize(text) == "Top\n\nBottom"


def test_sanitize_keeps_non_json_code_fences() -> None:
    text = "Run this:\n```python\nprint('hi')\n```"
    assert "print('hi')" in StructureParser.sanitize(text)


@pytest.mark.parametrize(
    "text",
    [
        'intro ```json\n{"compound_name":"X","smiles":"C"}\n```\ntail',
        "Top\n\n\n\nSMILES: CCO\n\n\nBottom",
        "```\nFoo: CCO\n{\"compound_name\": \"A\", \"smiles\": \"C\"}\n```\nafter",
        "  plain text with no markup  ",
        "",
    ],
)
def test_sanitize_is_idempotent(text: str) -> None:
    once = StructureParser.sanitize(text)
    assert StructureParser.sanitize(once) == once


def test_accepted_records_are_never_blank() -> None:
    text = (
        '```json\n{"compound_name": "", "smiles": "C"}\n```\n'
        '```json\n{"compound_name": "A", "smiles": "   "}\n```\n'
        '```json\n{"compound_name": "B", "smiles": "N"}\n```'
    )
    for structure in StructureParser.extract(text):
        assert structure.data.strip()
        assert structure.label and structure.label.strip()


def test_nearly_valid_json_is_repaired() -> None:
    text = (
        '```json\n{"compound_name": "Water", "smiles": "O",}\n```\n'
        "```json\n{'compound_name': 'Methane', 'smiles': 'C'}\n```"
    )

    structures = StructureParser.extract(text)

    assert [(s.label, s.data) for s in structures] == [("Water", "O"), ("Methane", "C")]


ORIGINAL_FORMAT_REPLY = (
    "アスピリンの構造です。\n"
    "SMILES: CC(=O)OC1=CC=CC=C1C(=O)O\n"
    "【化学的特徴】\n"
    "- 分子式: C9H8O4\n"
    "* 分子量: 180.16\n"
    "1. 融点: 135\n"
    "解熱鎮痛薬です。"
)


def test_bulleted_property_lines_are_not_structures() -> None:
    structures = StructureParser.extract(ORIGINAL_FORMAT_REPLY)

    assert [(s.label, s.data) for s in structures] == [("structure 1", "CC(=O)OC1=CC=CC=C1C(=O)O")]


def test_sanitize_keeps_property_lines() -> None:
    message = StructureParser.sanitize(ORIGINAL_FORMAT_REPLY)

    assert "SMILES" not in message
    assert "- 分子式: C9H8O4" in message
    assert "* 分子量: 180.16" in message
    assert "1. 融点: 135" in message


@pytest.mark.parametrize(
    "text",
    [
        "エタノールの性質:\n沸点: 78.37\npH: 7\n以上",
        "分子式: C2H6O\n分子量(g/mol): 46.07\nMolecular formula: C2H6O",
    ],
)
def test_property_values_survive_and_are_not_extracted(text: str) -> None:
    assert StructureParser.extract(text) == []
    assert StructureParser.sanitize(text) == text


def test_inline_smiles_marker_followed_by_prose() -> None:
    text = "アスピリンです。\nSMILES: CC(=O)OC1=CC=CC=C1C(=O)O（アセチルサリチル酸）\n以上。"

    structures = StructureParser.extract(text)
    message = StructureParser.sanitize(text)

    assert [s.data for s in structures] == ["CC(=O)OC1=CC=CC=C1C(=O)O"]
    assert "SMILES" not in message
    assert "CC(=O)OC1" not in message
    assert "（アセチルサリチル酸）" in message


def test_inline_smiles_marker_trims_trailing_punctuation() -> None:
    text = "Ethanol (SMILES: CCO) is an alcohol. Its SMILES: CC(C)O."

    assert [s.data for s in StructureParser.extract(text)] == ["CCO", "CC(C)O"]


@pytest.mark.parametrize(
    ("text", "label"),
    [
        ("アスピリンのSMILESは次の通りです。SMILES: CCO", "structure 1"),
        ("アスピリンのSMILES: CC(=O)OC1=CC=CC=C1C(=O)O", "アスピリン"),
        ("Ethanol structure: CCO", "Ethanol"),
        ("Here it is. Caffeine: CN1C=NC2=C1C(=O)N(C(=O)N2C)C", "Caffeine"),
    ],
)
def test_marker_labels_drop_prose_and_format_words(text: str, label: str) -> None:
    assert [s.label for s in StructureParser.extract(text)] == [label]
