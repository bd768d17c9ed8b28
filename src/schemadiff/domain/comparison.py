"""Field-level comparison of two snapshots of one entity.

Three dimensions are compared independently and always in full:

1) the entity's own display name
2) the flat metadata map (exact string comparison)
3) the property collection (structural equality per property)

The result is a read-only :class:`EntityDiff`. Comparison never raises for
well-formed entities; identical snapshots yield an empty diff.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .model import Entity, Meta, Property


@dataclass(frozen=True, slots=True)
class MetaChange:
    old_value: str
    new_value: str


@dataclass(frozen=True, slots=True)
class PropertyChange:
    old: Property
    new: Property


def _empty[V]() -> Mapping[str, V]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True, kw_only=True)
class EntityDiff:
    """Changes between an old and a new snapshot of one entity."""

    has_changes: bool = False
    added_properties: Mapping[str, Property] = field(default_factory=_empty)
    deleted_properties: Mapping[str, Property] = field(default_factory=_empty)
    modified_properties: Mapping[str, PropertyChange] = field(default_factory=_empty)
    added_meta: Mapping[str, str] = field(default_factory=_empty)
    deleted_meta: Mapping[str, str] = field(default_factory=_empty)
    modified_meta: Mapping[str, MetaChange] = field(default_factory=_empty)
    name_changed: bool = False
    old_name: str | None = None
    new_name: str | None = None

    @property
    def change_count(self) -> int:
        return (
            len(self.added_properties)
            + len(self.deleted_properties)
            + len(self.modified_properties)
            + len(self.added_meta)
            + len(self.deleted_meta)
            + len(self.modified_meta)
            + int(self.name_changed)
        )


def meta_equal(old: Meta, new: Meta) -> bool:
    if old.keys() != new.keys():
        return False
    return all(old[key] == new[key] for key in old)


def properties_equal(old: Property, new: Property) -> bool:
    """Structural equality: name, complexity flag and every meta entry."""

    if old is new:
        return True
    return (
        old.name == new.name
        and old.is_complex == new.is_complex
        and meta_equal(old.meta, new.meta)
    )


def _diff_meta(
    old: Meta, new: Meta
) -> tuple[dict[str, str], dict[str, str], dict[str, MetaChange]]:
    added: dict[str, str] = {}
    deleted: dict[str, str] = {}
    modified: dict[str, MetaChange] = {}
    for key in sorted(new):
        if key not in old:
            added[key] = new[key]
        elif old[key] != new[key]:
            modified[key] = MetaChange(old_value=old[key], new_value=new[key])
    for key in sorted(old):
        if key not in new:
            deleted[key] = old[key]
    return added, deleted, modified


def _diff_properties(
    old: Mapping[str, Property], new: Mapping[str, Property]
) -> tuple[dict[str, Property], dict[str, Property], dict[str, PropertyChange]]:
    added: dict[str, Property] = {}
    deleted: dict[str, Property] = {}
    modified: dict[str, PropertyChange] = {}
    for key in sorted(new):
        if key not in old:
            added[key] = new[key]
        elif not properties_equal(old[key], new[key]):
            modified[key] = PropertyChange(old=old[key], new=new[key])
    for key in sorted(old):
        if key not in new:
            deleted[key] = old[key]
    return added, deleted, modified


def compare_entities(old: Entity, new: Entity) -> EntityDiff:
    """Compare two snapshots of one entity and return the full field-level diff."""

    name_changed = old.name != new.name
    added_meta, deleted_meta, modified_meta = _diff_meta(old.meta, new.meta)
    added_props, deleted_props, modified_props = _diff_properties(
        old.properties, new.properties
    )

    has_changes = name_changed or any(
        (added_meta, deleted_meta, modified_meta, added_props, deleted_props, modified_props)
    )

    return EntityDiff(
        has_changes=has_changes,
        added_properties=MappingProxyType(added_props),
        deleted_properties=MappingProxyType(deleted_props),
        modified_properties=MappingProxyType(modified_props),
        added_meta=MappingProxyType(added_meta),
        deleted_meta=MappingProxyType(deleted_meta),
        modified_meta=MappingProxyType(modified_meta),
        name_changed=name_changed,
        old_name=old.name,
        new_name=new.name,
    )


class EntityComparator:
    """Callable wrapper around :func:`compare_entities` for injection points."""

    def __call__(self, old: Entity, new: Entity) -> EntityDiff:
        return compare_entities(old, new)
