"""Schema corpus domain model: entities and their typed properties.

Entities are immutable snapshots of one published version. Metadata is an
open string-keyed bag; a handful of keys carry meaning for display.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Final

type Meta = Mapping[str, str]


class PropertyMetaKey(StrEnum):
    DATATYPE = "Datatype"
    OBJECT_NAME = "Object Name"
    IS_REPEATED = "Is Repeated"


IS_REPEATED_DEFAULT: Final[str] = "No"
DATATYPE_FALLBACK: Final[str] = "N/A"


class MalformedEntityError(ValueError):
    """Raised when an entity or property snapshot is not well-formed."""


def _frozen_meta(value: object, *, owner: str) -> Meta:
    if not isinstance(value, Mapping):
        raise MalformedEntityError(f"{owner}: meta must be a mapping, got {type(value).__name__}")
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise MalformedEntityError(f"{owner}: meta entries must map str to str ({key!r})")
    return MappingProxyType(dict(value))


@dataclass(frozen=True, slots=True, kw_only=True)
class Property:
    """One named property of an entity.

    ``is_complex`` marks properties whose value references another entity;
    the referenced entity is named by the ``Object Name`` meta key.
    """

    name: str
    is_complex: bool = False
    meta: Meta = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise MalformedEntityError("Property name must be a string")
        if not isinstance(self.is_complex, bool):
            raise MalformedEntityError(f"Property {self.name!r}: is_complex must be a boolean")
        object.__setattr__(self, "meta", _frozen_meta(self.meta, owner=f"Property {self.name!r}"))

    @property
    def datatype(self) -> str | None:
        return self.meta.get(PropertyMetaKey.DATATYPE)

    @property
    def object_name(self) -> str | None:
        return self.meta.get(PropertyMetaKey.OBJECT_NAME)

    @property
    def repeated_label(self) -> str:
        """Display view of ``Is Repeated``; absent means ``"No"``."""
        return self.meta.get(PropertyMetaKey.IS_REPEATED, IS_REPEATED_DEFAULT)

    @property
    def type_label(self) -> str:
        """Referenced entity for complex properties, else the datatype."""
        if self.is_complex and self.object_name:
            return self.object_name
        return self.datatype or DATATYPE_FALLBACK


@dataclass(frozen=True, slots=True, kw_only=True)
class Entity:
    """A named schema document published under one version."""

    name: str
    meta: Meta
    properties: Mapping[str, Property]

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise MalformedEntityError("Entity name must be a string")
        owner = f"Entity {self.name!r}"
        object.__setattr__(self, "meta", _frozen_meta(self.meta, owner=owner))
        if not isinstance(self.properties, Mapping):
            raise MalformedEntityError(f"{owner}: properties must be a mapping")
        for key, prop in self.properties.items():
            if not isinstance(prop, Property):
                raise MalformedEntityError(f"{owner}: property {key!r} is not a Property")
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
