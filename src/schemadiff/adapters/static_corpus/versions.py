"""Ordering of published version identifiers for listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def _version_key(version: str) -> tuple[int, float, str]:
    # ids look like "v12": a one-character prefix followed by a number
    try:
        return (0, -float(version[1:]), version)
    except ValueError:
        return (1, 0.0, version)


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Newest first by numeric suffix; non-numeric ids follow in lexical order."""

    return sorted(versions, key=_version_key)


def latest_pair(versions: Iterable[str]) -> tuple[str, str] | None:
    """Return ``(previous, latest)`` or ``None`` when fewer than two versions exist."""

    ordered = sort_versions(versions)
    if len(ordered) < 2:
        return None
    return ordered[1], ordered[0]
