"""Tests for SourceSession open/reload/save."""

import asyncio

import pytest

from sourceref.backend.memory import InMemoryBackend
from sourceref.backend.models import ObjectSummary, SourceDocument, SourceUpdate, SourceUpdateResult
from sourceref.core.errors import (
    BackendError,
    ErrorCode,
    ResolverError,
    SessionError,
    StaleRequestError,
)
from sourceref.refs.routing import RefKind
from sourceref.resolver.generation import RequestGeneration
from sourceref.resolver.models import ResolvedBy
from sourceref.session import SourceSession

CLASS_URI = "/sap/bc/adt/oo/classes/zcl_demo"


def _catalog() -> InMemoryBackend:
    return InMemoryBackend(
        [
            ObjectSummary(uri=CLASS_URI, name="ZCL_DEMO", object_type="CLAS/OC"),
            ObjectSummary(
                uri="/sap/bc/adt/oo/classes/zcl_demo_helper",
                name="ZCL_DEMO_HELPER",
                object_type="CLAS/OC",
            ),
        ],
        sources={CLASS_URI: "CLASS zcl_demo DEFINITION PUBLIC.\nENDCLASS.\n"},
    )


class _InterruptingBackend(InMemoryBackend):
    """Starts a newer request while a source read is in flight."""

    def __init__(self, generation: RequestGeneration) -> None:
        catalog = _catalog()
        super().__init__(catalog._objects, {CLASS_URI: "REPORT x."})
        self._generation = generation

    async def read_source(self, object_uri: str) -> SourceDocument:
        document = await super().read_source(object_uri)
        self._generation.begin()
        return document


class _GatedSearchBackend(InMemoryBackend):
    """Holds every search until ``release`` is set."""

    def __init__(self) -> None:
        catalog = _catalog()
        super().__init__(catalog._objects, {CLASS_URI: "REPORT x."})
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def search(self, term: str, max_results: int) -> list[ObjectSummary]:
        self.entered.set()
        await self.release.wait()
        return await super().search(term, max_results)


class _FailingAfterNewerBackend(InMemoryBackend):
    """Once armed, starts a newer request and then fails the read or write."""

    def __init__(self, generation: RequestGeneration) -> None:
        catalog = _catalog()
        super().__init__(catalog._objects, {CLASS_URI: "REPORT x."})
        self._generation = generation
        self.armed = False

    async def read_source(self, object_uri: str) -> SourceDocument:
        if self.armed:
            self._generation.begin()
            raise BackendError.request_failed("read_source", "connection reset")
        return await super().read_source(object_uri)

    async def write_source(self, update: SourceUpdate) -> SourceUpdateResult:
        if self.armed:
            self._generation.begin()
            raise BackendError.request_failed("write_source", "connection reset")
        return await super().write_source(update)


class TestOpen:
    @pytest.mark.asyncio
    async def test_given_abapgit_file_when_open_then_resolved_and_read(self) -> None:
        # Given
        session = SourceSession(_catalog())

        # When
        opened = await session.open("zcl_demo.clas.abap")

        # Then
        assert opened.kind is RefKind.STRUCTURED_OBJECT
        assert opened.object_uri == CLASS_URI
        assert opened.display_name == "ZCL_DEMO"
        assert opened.language == "abap"
        assert opened.resolved_by is ResolvedBy.SEARCH
        assert opened.source is not None
        assert opened.source.startswith("CLASS zcl_demo")
        assert session.current == opened

    @pytest.mark.asyncio
    async def test_given_adt_uri_when_open_then_no_search(self) -> None:
        backend = _catalog()
        session = SourceSession(backend)

        opened = await session.open(CLASS_URI)

        assert opened.resolved_by is ResolvedBy.URI
        assert not backend.calls

    @pytest.mark.asyncio
    async def test_given_workspace_path_when_open_then_descriptor_without_io(self) -> None:
        # Given
        backend = _catalog()
        session = SourceSession(backend)

        # When
        opened = await session.open("a\\web\\panel.tsx")

        # Then
        assert opened.kind is RefKind.WORKSPACE_PATH
        assert opened.object_uri == "a/web/panel.tsx"
        assert opened.display_name == "panel.tsx"
        assert opened.language == "typescript"
        assert opened.source is None
        assert not backend.calls

    @pytest.mark.asyncio
    async def test_given_unknown_object_when_open_then_resolver_error_and_state_kept(
        self,
    ) -> None:
        session = SourceSession(_catalog())
        first = await session.open(CLASS_URI)

        with pytest.raises(ResolverError) as exc_info:
            await session.open("zmissing.prog.abap")

        assert exc_info.value.code is ErrorCode.NOT_FOUND
        assert session.current == first

    @pytest.mark.asyncio
    async def test_given_newer_request_during_read_when_open_then_stale(self) -> None:
        # Given
        generation = RequestGeneration()
        session = SourceSession(_InterruptingBackend(generation), generation=generation)

        # When / Then
        with pytest.raises(StaleRequestError):
            await session.open(CLASS_URI)

        assert session.current is None

    @pytest.mark.asyncio
    async def test_given_superseded_open_when_resolution_fails_then_stale_not_resolver_error(
        self,
    ) -> None:
        # Given
        backend = _GatedSearchBackend()
        session = SourceSession(backend)
        older = asyncio.create_task(session.open("zmissing.prog.abap"))
        await backend.entered.wait()

        # When
        newer = await session.open(CLASS_URI)
        backend.release.set()

        # Then
        with pytest.raises(StaleRequestError):
            await older
        assert session.current == newer


class TestSaveAndReload:
    @pytest.mark.asyncio
    async def test_given_open_object_when_save_then_etag_advances(self) -> None:
        # Given
        backend = _catalog()
        session = SourceSession(backend)
        opened = await session.open(CLASS_URI)

        # When
        saved = await session.save("CLASS zcl_demo DEFINITION FINAL.\nENDCLASS.\n")

        # Then
        assert saved.etag != opened.etag
        reloaded = await session.reload()
        assert reloaded.source == "CLASS zcl_demo DEFINITION FINAL.\nENDCLASS.\n"
        assert reloaded.etag == saved.etag

    @pytest.mark.asyncio
    async def test_given_nothing_open_when_save_then_session_error(self) -> None:
        with pytest.raises(SessionError) as exc_info:
            await SourceSession(_catalog()).save("x")

        assert exc_info.value.code is ErrorCode.NOTHING_OPEN

    @pytest.mark.asyncio
    async def test_given_workspace_file_when_reload_then_not_editable(self) -> None:
        session = SourceSession(_catalog())
        await session.open("README.md")

        with pytest.raises(SessionError) as exc_info:
            await session.reload()

        assert exc_info.value.code is ErrorCode.NOT_EDITABLE

    @pytest.mark.asyncio
    async def test_given_superseded_reload_when_read_fails_then_stale(self) -> None:
        # Given
        generation = RequestGeneration()
        backend = _FailingAfterNewerBackend(generation)
        session = SourceSession(backend, generation=generation)
        opened = await session.open(CLASS_URI)
        backend.armed = True

        # When / Then
        with pytest.raises(StaleRequestError):
            await session.reload()
        assert session.current == opened

    @pytest.mark.asyncio
    async def test_given_superseded_save_when_write_fails_then_stale(self) -> None:
        generation = RequestGeneration()
        backend = _FailingAfterNewerBackend(generation)
        session = SourceSession(backend, generation=generation)
        await session.open(CLASS_URI)
        backend.armed = True

        with pytest.raises(StaleRequestError):
            await session.save("REPORT y.")

    @pytest.mark.asyncio
    async def test_given_current_request_when_read_fails_then_backend_error(self) -> None:
        backend = _FailingAfterNewerBackend(RequestGeneration())
        session = SourceSession(backend)
        await session.open(CLASS_URI)
        backend.armed = True

        with pytest.raises(BackendError):
            await session.reload()
