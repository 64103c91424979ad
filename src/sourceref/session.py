"""Source session: open, reload and save one object at a time.

Routes a reference, resolves ADT objects, reads their source and writes it
back with the last known etag. Every awaited step is checked against a
request generation, so a slow open that finishes after a newer one raises
StaleRequestError instead of replacing the newer state.

Workspace paths are routed but not read; file I/O belongs to the caller.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass, replace
from typing import TypeVar

from sourceref.backend.models import SourceUpdate
from sourceref.backend.protocol import AdtBackend
from sourceref.config.models import SearchConfig
from sourceref.core.errors import SessionError
from sourceref.core.logging import get_logger, set_request_id
from sourceref.refs.normalize import base_name
from sourceref.refs.routing import RefKind, route_ref
from sourceref.resolver.engine import SourceRefResolver
from sourceref.resolver.generation import RequestGeneration
from sourceref.resolver.models import ResolvedBy

log = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OpenedSource:
    """What the session currently shows.

    ``source`` and ``etag`` are None for workspace paths.
    """

    kind: RefKind
    object_uri: str
    display_name: str
    language: str
    source: str | None = None
    etag: str | None = None
    resolved_by: ResolvedBy | None = None


class SourceSession:
    def __init__(
        self,
        backend: AdtBackend,
        config: SearchConfig | None = None,
        *,
        generation: RequestGeneration | None = None,
    ) -> None:
        self._backend = backend
        self._resolver = SourceRefResolver(backend, config)
        self._generation = generation or RequestGeneration()
        self._current: OpenedSource | None = None

    @property
    def current(self) -> OpenedSource | None:
        return self._current

    async def open(self, ref: str) -> OpenedSource:
        """Open a reference, superseding any request still in flight.

        Raises:
            ResolverError: The reference could not be pinned to one object.
            BackendError: Reading the source failed.
            StaleRequestError: A newer request started while this one awaited.
        """
        token = self._generation.begin()
        set_request_id()
        route = route_ref(ref)

        if route.kind is RefKind.WORKSPACE_PATH:
            opened = OpenedSource(
                kind=route.kind,
                object_uri=route.normalized_ref,
                display_name=base_name(route.normalized_ref),
                language=route.display_language,
            )
            self._current = opened
            return opened

        resolved = await self._await_current(token, self._resolver.resolve(route.normalized_ref))
        document = await self._await_current(
            token, self._backend.read_source(resolved.object_uri)
        )

        opened = OpenedSource(
            kind=route.kind,
            object_uri=resolved.object_uri,
            display_name=resolved.display_name,
            language=route.display_language,
            source=document.source,
            etag=document.etag,
            resolved_by=resolved.resolved_by,
        )
        self._current = opened
        log.info("source_opened", object_uri=opened.object_uri, resolved_by=resolved.resolved_by)
        return opened

    async def reload(self) -> OpenedSource:
        current = self._require_structured()
        token = self._generation.begin()
        set_request_id()

        document = await self._await_current(
            token, self._backend.read_source(current.object_uri)
        )

        reloaded = replace(current, source=document.source, etag=document.etag)
        self._current = reloaded
        return reloaded

    async def save(self, source: str) -> OpenedSource:
        """Write source back, sending the etag of the last read or save."""
        current = self._require_structured()
        token = self._generation.begin()
        set_request_id()

        update = SourceUpdate(object_uri=current.object_uri, source=source, etag=current.etag)
        result = await self._await_current(token, self._backend.write_source(update))

        saved = replace(current, source=source, etag=result.etag)
        self._current = saved
        log.info("source_saved", object_uri=saved.object_uri, status_code=result.status_code)
        return saved

    async def _await_current(self, token: int, step: Awaitable[T]) -> T:
        """Await one step of request ``token``.

        Once the token is superseded the step ends in StaleRequestError, whether
        it returned or raised.
        """
        try:
            result = await step
        except Exception:
            self._generation.ensure_current(token)
            raise
        self._generation.ensure_current(token)
        return result

    def _require_structured(self) -> OpenedSource:
        if self._current is None:
            raise SessionError.nothing_open()
        if self._current.kind is not RefKind.STRUCTURED_OBJECT:
            raise SessionError.not_editable(self._current.object_uri)
        return self._current
