"""Tests for Protocol compliance (KetcherEditor)."""

from chemgpt_core.protocols import KetcherEditor


def test_editor_protocol() -> None:
    """A minimal implementation satisfies the KetcherEditor protocol."""

    class StubEditor:
        def copy_prime(self) -> None:
            return None

        def load(self, data: str, *, fragment: bool, input_format: str) -> dict:
            return {"data": data, "fragment": fragment, "input_format": input_format}

        def dispatch(self, command: dict) -> None:
            return None

        def get_exchange_format(self) -> str:
            return "{}"

    assert isinstance(StubEditor(), KetcherEditor)


def test_incomplete_editor_is_rejected() -> None:
    class NoDispatch:
        def copy_prime(self) -> None:
            return None

        def load(self, data: str, *, fragment: bool, input_format: str) -> dict:
            return {}

    assert not isinstance(NoDispatch(), KetcherEditor)
