"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides scripted search backends for resolver tests.
"""

import logging
import os
import sys
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local sourceref package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from sourceref.backend.models import ObjectSummary  # noqa: E402

SearchHandler = Callable[[str, int], list[ObjectSummary]]


class ScriptedBackend:
    """Search backend answering from a handler and recording every call."""

    def __init__(self, handler: SearchHandler) -> None:
        self._handler = handler
        self.calls: list[tuple[str, int]] = []

    async def search(self, term: str, max_results: int) -> list[ObjectSummary]:
        self.calls.append((term, max_results))
        return self._handler(term, max_results)


def summary(uri: str, name: str, object_type: str | None = None) -> ObjectSummary:
    return ObjectSummary(uri=uri, name=name, object_type=object_type)


@pytest.fixture
def scripted_backend() -> Callable[[SearchHandler], ScriptedBackend]:
    """Factory for ScriptedBackend instances."""
    return ScriptedBackend


@pytest.fixture
def object_summary() -> Callable[..., ObjectSummary]:
    """Factory for ObjectSummary records: object_summary(uri, name, type)."""
    return summary


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Undo configure_logging() calls made by CLI and logging tests."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Remove SOURCEREF__* variables inherited from the developer's shell."""
    for key in list(os.environ):
        if key.upper().startswith("SOURCEREF__"):
            monkeypatch.delenv(key, raising=False)
    yield monkeypatch
