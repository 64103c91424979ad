"""Deterministic in-process backend over a fixed object catalog.

Backs the CLI's --fixture option and offline use. Search is a
case-insensitive substring match on the object name, in catalog order,
truncated to max_results.

Fixture format (YAML):

    objects:
      - uri: /sap/bc/adt/oo/classes/zcl_demo
        name: ZCL_DEMO
        object_type: CLAS/OC
        package: ZDEMO
        source: |
          CLASS zcl_demo DEFINITION ...
"""

from __future__ import annotations

import hashlib
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sourceref.backend.models import (
    ObjectSummary,
    SourceDocument,
    SourceUpdate,
    SourceUpdateResult,
)
from sourceref.core.errors import BackendError, ConfigError


def _etag_for(source: str) -> str:
    return hashlib.sha256(source.encode("utf-8")).hexdigest()[:16]


@dataclass
class _StoredSource:
    source: str
    etag: str


class InMemoryBackend:
    """Search and source access over an in-memory catalog.

    ``calls`` keeps the most recent ``(term, max_results)`` searches, at most
    ``max_recorded_calls`` of them, for assertions in tests.
    """

    def __init__(
        self,
        objects: list[ObjectSummary] | None = None,
        sources: dict[str, str] | None = None,
        *,
        max_recorded_calls: int = 1000,
    ) -> None:
        self._objects = list(objects or [])
        self._sources = {
            uri: _StoredSource(source=text, etag=_etag_for(text))
            for uri, text in (sources or {}).items()
        }
        self.calls: deque[tuple[str, int]] = deque(maxlen=max_recorded_calls)

    @classmethod
    def from_yaml(cls, path: Path) -> InMemoryBackend:
        """Load a fixture catalog.

        Raises:
            ConfigError: On unreadable YAML or malformed entries.
        """
        try:
            with path.open() as f:
                data: Any = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError.parse_error(str(path), str(e)) from e

        entries = data.get("objects", []) if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ConfigError.parse_error(str(path), "'objects' must be a list")

        objects: list[ObjectSummary] = []
        sources: dict[str, str] = {}
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ConfigError.parse_error(str(path), f"objects[{index}] must be a mapping")
            try:
                summary = ObjectSummary.model_validate(entry)
            except ValidationError as e:
                raise ConfigError.parse_error(str(path), f"objects[{index}]: {e}") from e
            objects.append(summary)
            if isinstance(entry.get("source"), str):
                sources[summary.uri] = entry["source"]
        return cls(objects, sources)

    async def search(self, term: str, max_results: int) -> list[ObjectSummary]:
        self.calls.append((term, max_results))
        needle = term.strip().upper()
        if not needle:
            return []
        hits = [entry for entry in self._objects if needle in entry.name.upper()]
        return hits[:max_results]

    async def read_source(self, object_uri: str) -> SourceDocument:
        stored = self._sources.get(object_uri)
        if stored is None:
            raise BackendError.request_failed(
                "read_source", f"no source for {object_uri}", status_code=404
            )
        return SourceDocument(object_uri=object_uri, source=stored.source, etag=stored.etag)

    async def write_source(self, update: SourceUpdate) -> SourceUpdateResult:
        stored = self._sources.get(update.object_uri)
        if stored is not None and update.etag is not None and update.etag != stored.etag:
            raise BackendError.request_failed(
                "write_source", "etag mismatch", status_code=412, object_uri=update.object_uri
            )
        etag = _etag_for(update.source)
        self._sources[update.object_uri] = _StoredSource(source=update.source, etag=etag)
        return SourceUpdateResult(object_uri=update.object_uri, status_code=200, etag=etag)
