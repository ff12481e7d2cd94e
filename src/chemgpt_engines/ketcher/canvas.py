"""
Canvas Activation Bridge.

Replays the editor's "paste" gesture for accepted structures: prime the
clipboard, then dispatch a fragment load so the editor arms its placement
tool for the user's next click. Placement itself belongs to the editor.
"""

from __future__ import annotations

import inspect
from typing import Any, Sequence

from loguru import logger

from chemgpt_core.logging_utils import log_event
from chemgpt_core.protocols.editor import KetcherEditor
from chemgpt_core.schema.response import CanvasActivationResult
from chemgpt_core.schema.structure import ChemicalStructure

SMILES_MIME = "chemical/x-daylight-smiles"

# Structure format tag -> editor exchange-format identifier.
INPUT_FORMATS: dict[str, str] = {
    "smiles": SMILES_MIME,
    "mol": "chemical/x-mdl-molfile",
    "molfile": "chemical/x-mdl-molfile",
    "sdf": "chemical/x-mdl-sdfile",
    "rxn": "chemical/x-mdl-rxnfile",
    "ket": "chemical/x-indigo-ket",
    "cml": "chemical/x-cml",
    "inchi": "chemical/x-inchi",
}

NO_STRUCTURE_ADDED_MESSAGE = "No structure could be added to the canvas."


def resolve_input_format(format_tag: str | None) -> str:
    return INPUT_FORMATS.get((format_tag or "").strip().lower(), SMILES_MIME)


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class CanvasActivationBridge:
    def __init__(self, editor: KetcherEditor) -> None:
        self._editor = editor

    async def add_structures_to_canvas(
        self,
        structures: Sequence[ChemicalStructure],
    ) -> CanvasActivationResult:
        if not structures:
            return CanvasActivationResult(success=True, added_structures=0)

        added = 0
        last_error: str | None = None
        for index, structure in enumerate(structures, start=1):
            input_format = resolve_input_format(structure.format)
            try:
                await _resolve(self._editor.copy_prime())
                command = await _resolve(
                    self._editor.load(structure.data, fragment=True, input_format=input_format)
                )
                await _resolve(self._editor.dispatch(command))
            except Exception as exc:  # noqa: BLE001
                last_error = f"{type(exc).__name__}: {exc}"
                logger.warning(
                    log_event(
                        "canvas.structure.failed",
                        index=index,
                        label=structure.label,
                        format=input_format,
                        error=last_error,
                    )
                )
                continue
            added += 1
            logger.info(
                log_event(
                    "canvas.structure.armed",
                    index=index,
                    label=structure.label,
                    format=input_format,
                )
            )

        if added == 0:
            return CanvasActivationResult(
                success=False,
                added_structures=0,
                error=last_error or NO_STRUCTURE_ADDED_MESSAGE,
            )
        return CanvasActivationResult(success=True, added_structures=added)

    def get_current_structure_as_ket(self) -> str | None:
        """
        Best-effort synchronous read of the canvas.

        Returns None ("unavailable") when the editor accessor is asynchronous
        or fails; it never blocks waiting on the editor.
        """
        try:
            value = self._editor.get_exchange_format()
        except Exception as exc:  # noqa: BLE001
            logger.warning(log_event("canvas.read.failed", error=f"{type(exc).__name__}: {exc}"))
            return None

        if inspect.isawaitable(value):
            close = getattr(value, "close", None)
            if callable(close):
                close()
            logger.debug(log_event("canvas.read.unavailable", reason="async_accessor"))
            return None
        return value if isinstance(value, str) and value else None

    async def fetch_current_structure_as_ket(self) -> str | None:
        """Read the canvas, awaiting the editor accessor when it is asynchronous."""
        try:
            value = await _resolve(self._editor.get_exchange_format())
        except Exception as exc:  # noqa: BLE001
            logger.warning(log_event("canvas.read.failed", error=f"{type(exc).__name__}: {exc}"))
            return None
        return value if isinstance(value, str) and value else None
