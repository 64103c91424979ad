"""ADT gateway boundary: records, capabilities, and adapters."""

from sourceref.backend.http import HttpAdtBackend
from sourceref.backend.memory import InMemoryBackend
from sourceref.backend.models import (
    ObjectSummary,
    SourceDocument,
    SourceUpdate,
    SourceUpdateResult,
)
from sourceref.backend.protocol import AdtBackend, SearchBackend, SourceBackend

__all__ = [
    "AdtBackend",
    "HttpAdtBackend",
    "InMemoryBackend",
    "ObjectSummary",
    "SearchBackend",
    "SourceBackend",
    "SourceDocument",
    "SourceUpdate",
    "SourceUpdateResult",
]
