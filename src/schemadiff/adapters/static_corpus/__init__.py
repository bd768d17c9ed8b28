"""Static JSON schema corpus adapter."""

from __future__ import annotations

from .client import StaticCorpusClient
from .schema import CorpusIndexDocument, PropertyDocument, SchemaDocument
from .translator import parse_entity_document, translate_schema
from .versions import latest_pair, sort_versions

__all__ = [
    "CorpusIndexDocument",
    "PropertyDocument",
    "SchemaDocument",
    "StaticCorpusClient",
    "latest_pair",
    "parse_entity_document",
    "sort_versions",
    "translate_schema",
]
