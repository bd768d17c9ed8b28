"""Plain-text and JSON rendering of change reports."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schemadiff.app import EntityComparison, VersionComparison, VersionSummary
    from schemadiff.domain.comparison import EntityDiff
    from schemadiff.domain.model import Property

_INDENT = "  "


def _property_line(key: str, prop: Property) -> str:
    label = f"{key} ({prop.name})" if key != prop.name else key
    return f"{label}: {prop.type_label}, repeated={prop.repeated_label}"


def _section(title: str, lines: list[str]) -> list[str]:
    if not lines:
        return []
    return [f"{title} ({len(lines)}):", *(f"{_INDENT}{line}" for line in lines)]


def render_entity_diff(diff: EntityDiff) -> list[str]:
    if not diff.has_changes:
        return ["No changes."]

    lines: list[str] = []
    if diff.name_changed:
        lines.append(f"Renamed: {diff.old_name} -> {diff.new_name}")
    lines += _section(
        "Added meta", [f"{key}: {value}" for key, value in diff.added_meta.items()]
    )
    lines += _section(
        "Deleted meta", [f"{key}: {value}" for key, value in diff.deleted_meta.items()]
    )
    lines += _section(
        "Modified meta",
        [
            f"{key}: {change.old_value!r} -> {change.new_value!r}"
            for key, change in diff.modified_meta.items()
        ],
    )
    lines += _section(
        "Added properties",
        [_property_line(key, prop) for key, prop in diff.added_properties.items()],
    )
    lines += _section(
        "Deleted properties",
        [_property_line(key, prop) for key, prop in diff.deleted_properties.items()],
    )
    modified: list[str] = []
    for key, change in diff.modified_properties.items():
        modified.append(f"{key}:")
        modified.append(f"{_INDENT}- {_property_line(change.old.name, change.old)}")
        modified.append(f"{_INDENT}+ {_property_line(change.new.name, change.new)}")
    if modified:
        lines.append(f"Modified properties ({len(diff.modified_properties)}):")
        lines += [f"{_INDENT}{line}" for line in modified]
    return lines


def render_entity_comparison(comparison: EntityComparison) -> str:
    header = f"{comparison.name}: {comparison.from_version} -> {comparison.to_version}"
    return "\n".join([header, *render_entity_diff(comparison.diff)])


def render_version_comparison(comparison: VersionComparison) -> str:
    changes = comparison.changes
    lines = [f"Changes from {comparison.from_version} to {comparison.to_version}"]
    if not changes.has_changes:
        lines.append("No changes.")
    lines += _section("Added", changes.sorted_added())
    lines += _section("Removed", changes.sorted_removed())
    lines += _section("Modified", changes.sorted_modified())
    lines += _section(
        "Skipped",
        [
            f"{name} [{failure.kind}]: {failure.message}"
            for name, failure in changes.sorted_skipped()
        ],
    )
    return "\n".join(lines)


def render_versions(versions: list[VersionSummary]) -> str:
    if not versions:
        return "No versions published."
    return "\n".join(f"{item.version}\t{item.entity_count}" for item in versions)


def _property_payload(prop: Property) -> dict[str, object]:
    return {"Name": prop.name, "IsComplex": prop.is_complex, "Meta": dict(prop.meta)}


def entity_diff_payload(diff: EntityDiff) -> dict[str, object]:
    """JSON-ready mapping using the corpus' field names."""

    return {
        "HasChanges": diff.has_changes,
        "AddedProperties": {k: _property_payload(v) for k, v in diff.added_properties.items()},
        "DeletedProperties": {
            k: _property_payload(v) for k, v in diff.deleted_properties.items()
        },
        "ModifiedProperties": {
            k: {"old": _property_payload(c.old), "new": _property_payload(c.new)}
            for k, c in diff.modified_properties.items()
        },
        "AddedMeta": dict(diff.added_meta),
        "DeletedMeta": dict(diff.deleted_meta),
        "ModifiedMeta": {
            k: {"oldValue": c.old_value, "newValue": c.new_value}
            for k, c in diff.modified_meta.items()
        },
        "NameChanged": diff.name_changed,
        "OldName": diff.old_name,
        "NewName": diff.new_name,
    }


def version_comparison_payload(comparison: VersionComparison) -> dict[str, object]:
    changes = comparison.changes
    return {
        "fromVersion": comparison.from_version,
        "toVersion": comparison.to_version,
        "addedSchemas": changes.sorted_added(),
        "removedSchemas": changes.sorted_removed(),
        "modifiedSchemas": changes.sorted_modified(),
        "skippedSchemas": {
            name: {"kind": str(failure.kind), "message": failure.message}
            for name, failure in changes.sorted_skipped()
        },
    }


def to_json(payload: object) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)
