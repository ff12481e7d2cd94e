"""Editor protocol: the host structure editor's command surface, consumed at its boundary."""

from typing import Any, Awaitable, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class KetcherEditor(Protocol):
    """
    Interface for the structure editor that owns the canvas.

    Implementations wrap whatever transport reaches the real editor
    (an embedded widget, a browser bridge). Any method may return an
    awaitable; the Canvas Activation Bridge awaits it.
    """

    def copy_prime(self) -> Any:
        """Prime the editor clipboard so the next load behaves like a paste."""
        ...

    def load(self, data: str, *, fragment: bool, input_format: str) -> Any:
        """
        Build a dispatchable load command.

        Args:
            data: Encoded structure.
            fragment: When true the editor arms its placement tool instead of
                replacing the document.
            input_format: The editor's exchange-format identifier.
        """
        ...

    def dispatch(self, command: Any) -> Any:
        """Send a command built by `load` to the editor."""
        ...

    def get_exchange_format(self) -> Union[Optional[str], Awaitable[Optional[str]]]:
        """Serialize the current canvas (KET), or None when unavailable."""
        ...
