"""HTTP adapter for an ADT gateway exposing search and source endpoints.

Endpoints (paths configurable via BackendConfig):
- GET  {search_path}?query=<term>&max_results=<n>  -> [ObjectSummary, ...]
- GET  {source_path}?object_uri=<uri>              -> SourceDocument
- PUT  {source_path}  {object_uri, source, etag}   -> SourceUpdateResult

Transport and HTTP failures raise BackendError; the resolver wraps those as
search_failed. Retries and cancellation are left to the caller.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from sourceref.backend.models import (
    ObjectSummary,
    SourceDocument,
    SourceUpdate,
    SourceUpdateResult,
)
from sourceref.config.models import BackendConfig
from sourceref.core.errors import BackendError
from sourceref.core.logging import get_logger

log = get_logger(__name__)


def _default_headers(config: BackendConfig) -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if config.sap_client:
        headers["sap-client"] = config.sap_client
    if config.sap_language:
        headers["sap-language"] = config.sap_language
    return headers


class HttpAdtBackend:
    """Async gateway client. Use as an async context manager or call aclose()."""

    def __init__(
        self,
        config: BackendConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or BackendConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_sec,
            verify=self._config.verify_tls,
            headers=_default_headers(self._config),
        )

    async def __aenter__(self) -> HttpAdtBackend:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def search(self, term: str, max_results: int) -> list[ObjectSummary]:
        payload = await self._request(
            "search",
            "GET",
            self._config.search_path,
            params={"query": term, "max_results": max_results},
        )
        if not isinstance(payload, list):
            raise BackendError.invalid_response("search", "expected a JSON array")
        try:
            results = [ObjectSummary.model_validate(entry) for entry in payload]
        except ValidationError as e:
            raise BackendError.invalid_response("search", str(e)) from e
        # Gateways are not trusted to honor the cap
        return results[:max_results]

    async def read_source(self, object_uri: str) -> SourceDocument:
        payload = await self._request(
            "read_source",
            "GET",
            self._config.source_path,
            params={"object_uri": object_uri},
        )
        try:
            return SourceDocument.model_validate(payload)
        except ValidationError as e:
            raise BackendError.invalid_response("read_source", str(e)) from e

    async def write_source(self, update: SourceUpdate) -> SourceUpdateResult:
        payload = await self._request(
            "write_source",
            "PUT",
            self._config.source_path,
            json=update.model_dump(),
        )
        try:
            return SourceUpdateResult.model_validate(payload)
        except ValidationError as e:
            raise BackendError.invalid_response("write_source", str(e)) from e

    async def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> Any:
        log.debug("backend_request", operation=operation, method=method, path=path)
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise BackendError.request_failed(operation, str(e) or type(e).__name__) from e

        if response.is_error:
            raise BackendError.request_failed(
                operation,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text[:500],
            )

        try:
            return response.json()
        except ValueError as e:
            raise BackendError.invalid_response(operation, "body is not JSON") from e
