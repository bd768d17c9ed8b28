"""Ports for fetching versioned schema documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from schemadiff.domain.model import Entity


class EntityFetchError(RuntimeError):
    """Raised when one entity document of one version cannot be obtained."""

    def __init__(self, message: str, *, version: str, name: str) -> None:
        super().__init__(message)
        self.version = version
        self.name = name


class EntityNotFoundError(EntityFetchError):
    """The entity is not published under the requested version."""


class EntityDocumentError(EntityFetchError):
    """The entity document was fetched but is not a well-formed entity."""


class IndexFetchError(RuntimeError):
    """Raised when the corpus index cannot be loaded."""


@runtime_checkable
class EntityFetcher(Protocol):
    """Port for loading one entity snapshot by version and name."""

    async def fetch_entity(self, version: str, name: str) -> Entity: ...


@runtime_checkable
class EntityIndexFetcher(Protocol):
    """Port for loading the version -> entity-name index."""

    async def fetch_index(self) -> dict[str, list[str]]: ...

    async def fetch_entity_names(self, version: str) -> list[str]: ...


__all__ = [
    "EntityDocumentError",
    "EntityFetchError",
    "EntityFetcher",
    "EntityIndexFetcher",
    "EntityNotFoundError",
    "IndexFetchError",
]
