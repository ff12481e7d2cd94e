"""Protocols for external collaborators consumed only at their boundary."""

from chemgpt_core.protocols.editor import KetcherEditor

__all__ = ["KetcherEditor"]
