"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import (
    EntityDocumentError,
    EntityFetcher,
    EntityFetchError,
    EntityIndexFetcher,
    EntityNotFoundError,
    IndexFetchError,
)

__all__ = [
    "EntityDocumentError",
    "EntityFetchError",
    "EntityFetcher",
    "EntityIndexFetcher",
    "EntityNotFoundError",
    "IndexFetchError",
]
