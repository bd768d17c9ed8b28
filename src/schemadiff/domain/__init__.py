"""Version-to-version change engine for schema corpora."""

from __future__ import annotations

from .comparison import (
    EntityComparator,
    EntityDiff,
    MetaChange,
    PropertyChange,
    compare_entities,
    properties_equal,
)
from .model import Entity, MalformedEntityError, Property, PropertyMetaKey
from .reconciliation import (
    ComparisonFailure,
    CorpusChangeSet,
    FailureKind,
    NamePartition,
    partition_names,
    reconcile,
    reconcile_async,
)

__all__ = [
    "ComparisonFailure",
    "CorpusChangeSet",
    "Entity",
    "EntityComparator",
    "EntityDiff",
    "FailureKind",
    "MalformedEntityError",
    "MetaChange",
    "NamePartition",
    "Property",
    "PropertyChange",
    "PropertyMetaKey",
    "compare_entities",
    "partition_names",
    "properties_equal",
    "reconcile",
    "reconcile_async",
]
