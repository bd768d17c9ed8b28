"""HTTP client for a statically published schema corpus."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from schemadiff.adapters.http_resilience import ResilientClient
from schemadiff.domain.model import MalformedEntityError
from schemadiff.domain.ports.fetching import (
    EntityDocumentError,
    EntityFetchError,
    EntityNotFoundError,
    IndexFetchError,
)

from .schema import CorpusIndexDocument
from .translator import parse_entity_document

if TYPE_CHECKING:
    from collections.abc import Callable

    from schemadiff.config.corpus import CorpusConfig
    from schemadiff.config.http_resilience import ResilienceConfig
    from schemadiff.domain.model import Entity

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class StaticCorpusClient:
    """Fetch the corpus index and entity documents over HTTP.

    Use as an async context manager; one underlying HTTP client is shared by
    every request made inside the block.
    """

    def __init__(
        self,
        *,
        config: CorpusConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or _default_client_factory
        self._client: ResilientClient | None = None
        self._index: dict[str, list[str]] | None = None
        self._index_lock = asyncio.Lock()

    async def __aenter__(self) -> StaticCorpusClient:
        self._client = self._client_factory(self._config.resilience)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    @property
    def client(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("StaticCorpusClient must be used as an async context manager")
        return self._client

    def entity_url(self, version: str, name: str) -> str:
        return f"{self._config.base_url}{quote(version)}/{quote(name)}.json"

    async def fetch_index(self) -> dict[str, list[str]]:
        async with self._index_lock:
            if self._index is None:
                self._index = await self._load_index()
            return self._index

    async def fetch_entity_names(self, version: str) -> list[str]:
        index = await self.fetch_index()
        try:
            return list(index[version])
        except KeyError:
            raise IndexFetchError(f"Unknown version: {version}") from None

    async def fetch_entity(self, version: str, name: str) -> Entity:
        url = self.entity_url(version, name)
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as exc:
            raise EntityFetchError(
                f"Request for {url} failed: {exc}", version=version, name=name
            ) from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise EntityNotFoundError(
                f"{name} is not published under {version}", version=version, name=name
            )
        if response.is_error:
            raise EntityFetchError(
                f"Unexpected status {response.status_code} for {url}", version=version, name=name
            )

        try:
            return parse_entity_document(response.content)
        except MalformedEntityError as exc:
            raise EntityDocumentError(
                f"{version}/{name}: {exc}", version=version, name=name
            ) from exc

    async def _load_index(self) -> dict[str, list[str]]:
        url = f"{self._config.base_url}{self._config.index_filename}"
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise IndexFetchError(f"Failed to fetch corpus index {url}: {exc}") from exc

        try:
            index = CorpusIndexDocument.model_validate_json(response.content).root
        except ValidationError as exc:
            raise IndexFetchError(f"Malformed corpus index {url}") from exc
        log.debug("Loaded corpus index with %s versions", len(index))
        return index

