"""Capabilities the resolver and the source session consume."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sourceref.backend.models import (
    ObjectSummary,
    SourceDocument,
    SourceUpdate,
    SourceUpdateResult,
)


@runtime_checkable
class SearchBackend(Protocol):
    """Fuzzy object search.

    Must return a possibly-empty list truncated to ``max_results``. Any
    raised exception is treated as a backend failure by the resolver.
    """

    async def search(self, term: str, max_results: int) -> list[ObjectSummary]: ...


@runtime_checkable
class SourceBackend(Protocol):
    """Source read/write for resolved objects."""

    async def read_source(self, object_uri: str) -> SourceDocument: ...

    async def write_source(self, update: SourceUpdate) -> SourceUpdateResult: ...


class AdtBackend(SearchBackend, SourceBackend, Protocol):
    """Search plus source access, as offered by a full ADT gateway."""
