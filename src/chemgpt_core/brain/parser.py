# src/chemgpt_core/brain/parser.py
import json
import re
from typing import List, NamedTuple, Optional

import json_repair
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from chemgpt_core.logging_utils import log_event
from chemgpt_core.schema.structure import ChemicalStructure

# A ```json (or bare ```) fence whose body is a JSON object.
FENCED_BLOCK_PATTERN = re.compile(
    r"[ \t]*```[ \t]*(?:json)?[ \t]*\r?\n?\s*(\{.*?\})\s*```[ \t]*",
    re.DOTALL | re.IGNORECASE,
)

_ENCODING_TOKEN = r"[A-Za-z0-9@+\-\[\]()=#$\\.%*][A-Za-z0-9@+\-\[\]()=#$/\\.%*]*"

# One `label: encoding` marker per line, the encoding being the last thing on it.
LEGACY_MARKER_PATTERN = re.compile(
    r"^[ \t]*([^\s:：`{][^:：\n`]{0,60}?)[ \t]*[:：][ \t]*(" + _ENCODING_TOKEN + r")[ \t]*$",
    re.MULTILINE,
)

# `SMILES: encoding` anywhere in a line, followed by anything.
INLINE_SMILES_PATTERN = re.compile(
    r"(?<![A-Za-z0-9])SMILES[ \t]*[:：][ \t]*(" + _ENCODING_TOKEN + r")",
    re.IGNORECASE,
)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")

# Labels that name the encoding rather than the compound.
_FORMAT_KEYWORDS = {"smiles", "inchi", "molfile", "ket", "structure", "構造", "構造式"}
_TRAILING_FORMAT_KEYWORD = re.compile(
    r"(?:^|(?<=[\sの_\-]))(?:smiles|inchi|molfile|ket|structure|構造式|構造)$",
    re.IGNORECASE,
)
_SENTENCE_BREAK = re.compile(r"[。．！？!?]|\.\s")

# List items (`- `, `* `, `・`, `1.`) are prose, not markers.
_LIST_BULLET = re.compile(r"^(?:[-*+・•●]|\d+[.)．])")

# Property lines look like markers but carry values, not structures.
_PROPERTY_KEYS = {
    "分子式", "組成式", "化学式", "分子量", "式量", "沸点", "融点", "密度", "溶解度",
    "引火点", "収率", "温度", "圧力", "ph", "pka", "logp", "cas", "cas番号", "mw",
    "formula", "molecular formula", "molecular weight", "boiling point",
    "melting point", "density", "solubility", "yield", "temperature", "pressure",
}
_UNIT_SUFFIX = re.compile(r"\s*[（(].*$")


class StructureBlock(BaseModel):
    """The two-key record the generate prompt asks the model to emit."""

    model_config = ConfigDict(extra="ignore")

    compound_name: str
    smiles: str

    @field_validator("compound_name", "smiles")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be empty")
        return stripped


class Marker(NamedTuple):
    start: int
    end: int
    label: Optional[str]
    data: str


class StructureParser:
    """
    Extraction of ChemicalStructure records from free-form model text, with
    two strategies: fenced JSON blocks, then legacy `label: encoding` markers.
    """

    @classmethod
    def extract(cls, text: str) -> List[ChemicalStructure]:
        """Unified entry point. Tier 2 runs only when tier 1 accepts nothing."""
        records = cls._from_fenced_blocks(text)
        if records:
            return cls._to_structures(records)

        remainder = FENCED_BLOCK_PATTERN.sub("\n", text or "")
        return cls._to_structures(cls._from_legacy_markers(remainder))

    @classmethod
    def sanitize(cls, text: str) -> str:
        """Strip structured markup so it never reaches the visible transcript."""
        cleaned = text or ""
        previous = None
        # Removing one kind of markup can expose the other; repeat until stable.
        while cleaned != previous:
            previous = cleaned
            cleaned = FENCED_BLOCK_PATTERN.sub("\n\n", cleaned)
            for marker in reversed(cls.scan_markers(cleaned)):
                cleaned = cleaned[: marker.start] + cleaned[marker.end :]
        cleaned = _EXCESS_NEWLINES.sub("\n\n", cleaned)
        return cleaned.strip()

    @classmethod
    def scan_markers(cls, text: str) -> List[Marker]:
        """Accepted legacy markers in text order; line markers win over inline ones."""
        markers: List[Marker] = []
        for match in LEGACY_MARKER_PATTERN.finditer(text):
            raw_label = match.group(1).strip()
            data = cls._trim_token(match.group(2))
            if not cls._is_structure_marker(raw_label, data):
                continue
            markers.append(Marker(match.start(), match.end(), cls._clean_label(raw_label), data))

        taken = [(marker.start, marker.end) for marker in markers]
        for match in INLINE_SMILES_PATTERN.finditer(text):
            if any(start <= match.start() < end for start, end in taken):
                continue
            data = cls._trim_token(match.group(1))
            if not cls._looks_like_encoding(data):
                continue
            end = match.start(1) + len(data)
            markers.append(Marker(match.start(), end, None, data))

        return sorted(markers, key=lambda marker: marker.start)

    @classmethod
    def _from_fenced_blocks(cls, text: str) -> List[tuple[Optional[str], str]]:
        records: List[tuple[Optional[str], str]] = []
        for index, match in enumerate(FENCED_BLOCK_PATTERN.finditer(text or "")):
            try:
                block = StructureBlock.model_validate(cls._load_block(match.group(1), index))
            except (ValueError, ValidationError) as exc:
                logger.warning(
                    log_event(
                        "parser.fenced_block.skipped",
                        block=index,
                        error=f"{type(exc).__name__}: {exc}",
                    )
                )
                continue
            records.append((block.compound_name, block.smiles))
        return records

    @staticmethod
    def _load_block(body: str, index: int) -> object:
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            repaired = json_repair.loads(body)
            logger.debug(log_event("parser.fenced_block.repaired", block=index))
            return repaired

    @classmethod
    def _from_legacy_markers(cls, text: str) -> List[tuple[Optional[str], str]]:
        records = [(marker.label, marker.data) for marker in cls.scan_markers(text)]
        if records:
            logger.info(log_event("parser.legacy_markers.used", count=len(records)))
        return records

    @classmethod
    def _is_structure_marker(cls, label: str, data: str) -> bool:
        if _LIST_BULLET.match(label):
            return False
        if _UNIT_SUFFIX.sub("", label).strip().lower() in _PROPERTY_KEYS:
            return False
        return cls._looks_like_encoding(data)

    @staticmethod
    def _looks_like_encoding(data: str) -> bool:
        # Every SMILES names at least one atom; bare numbers are values.
        return bool(data) and any(ch.isalpha() for ch in data)

    @staticmethod
    def _trim_token(token: str) -> str:
        token = token.strip().rstrip(".,")
        while token.endswith(")") and token.count(")") > token.count("("):
            token = token[:-1]
        return token

    @staticmethod
    def _clean_label(label: str) -> Optional[str]:
        """Keep the last sentence of the label, minus a trailing format keyword."""
        label = _SENTENCE_BREAK.split(label)[-1].strip()
        if label.lower() in _FORMAT_KEYWORDS:
            return None
        label = _TRAILING_FORMAT_KEYWORD.sub("", label).rstrip(" \tの_-")
        return label or None

    @staticmethod
    def _to_structures(records: List[tuple[Optional[str], str]]) -> List[ChemicalStructure]:
        return [
            ChemicalStructure(
                format="smiles",
                data=data,
                label=label or f"structure {index}",
                action="add",
            )
            for index, (label, data) in enumerate(records, start=1)
        ]
