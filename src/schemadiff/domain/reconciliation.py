"""Corpus-level reconciliation of two versions' entity-name lists.

Names present only in the target version are *added*, names present only in
the source version are *removed*. Names present in both are compared one by
one through an injected compare callable; those whose diff reports changes
are *modified*.

A comparison that fails never aborts the run. The failing name is left out
of ``modified`` and recorded under ``skipped`` with the failure kind, so a
caller can tell expected absence from a broken document.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from schemadiff.domain.comparison import EntityDiff
from schemadiff.domain.model import MalformedEntityError
from schemadiff.domain.ports.fetching import EntityDocumentError, EntityNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

log = getLogger(__name__)


class FailureKind(StrEnum):
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ComparisonFailure:
    """Why a common entity could not be compared."""

    kind: FailureKind
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> ComparisonFailure:
        if isinstance(exc, EntityNotFoundError):
            kind = FailureKind.NOT_FOUND
        elif isinstance(exc, EntityDocumentError | MalformedEntityError):
            kind = FailureKind.MALFORMED
        else:
            kind = FailureKind.ERROR
        return cls(kind=kind, message=str(exc) or type(exc).__name__)


type ComparisonOutcome = EntityDiff | ComparisonFailure
type CompareFn = Callable[[str], ComparisonOutcome]
type AsyncCompareFn = Callable[[str], Awaitable[ComparisonOutcome]]


@dataclass(frozen=True, slots=True)
class NamePartition:
    """Membership split of two name lists; ``common`` follows the old order."""

    added: tuple[str, ...]
    removed: tuple[str, ...]
    common: tuple[str, ...]


def _unique(names: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(names))


def partition_names(old_names: Sequence[str], new_names: Sequence[str]) -> NamePartition:
    old_set = set(old_names)
    new_set = set(new_names)
    return NamePartition(
        added=_unique(name for name in new_names if name not in old_set),
        removed=_unique(name for name in old_names if name not in new_set),
        common=_unique(name for name in old_names if name in new_set),
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class CorpusChangeSet:
    """Names added, removed and modified between two versions."""

    added: frozenset[str] = frozenset()
    removed: frozenset[str] = frozenset()
    modified: frozenset[str] = frozenset()
    skipped: Mapping[str, ComparisonFailure] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.modified)

    def sorted_added(self) -> list[str]:
        return sorted(self.added)

    def sorted_removed(self) -> list[str]:
        return sorted(self.removed)

    def sorted_modified(self) -> list[str]:
        return sorted(self.modified)

    def sorted_skipped(self) -> list[tuple[str, ComparisonFailure]]:
        return sorted(self.skipped.items())


def _record_outcome(
    name: str,
    outcome: ComparisonOutcome,
    *,
    modified: set[str],
    skipped: dict[str, ComparisonFailure],
) -> None:
    if not isinstance(outcome, EntityDiff | ComparisonFailure):
        outcome = ComparisonFailure(
            kind=FailureKind.ERROR,
            message=f"Comparison returned {type(outcome).__name__} instead of a diff",
        )
    if isinstance(outcome, ComparisonFailure):
        skipped[name] = outcome
        if outcome.kind is FailureKind.NOT_FOUND:
            log.info("Skipping %s: %s", name, outcome.message)
        else:
            log.warning("Skipping %s (%s): %s", name, outcome.kind, outcome.message)
        return
    if outcome.has_changes:
        modified.add(name)


def _build_change_set(
    partition: NamePartition,
    *,
    modified: set[str],
    skipped: dict[str, ComparisonFailure],
) -> CorpusChangeSet:
    change_set = CorpusChangeSet(
        added=frozenset(partition.added),
        removed=frozenset(partition.removed),
        modified=frozenset(modified),
        skipped=MappingProxyType(skipped),
    )
    log.info(
        "Reconciled corpus: added=%s, removed=%s, modified=%s, skipped=%s",
        len(change_set.added),
        len(change_set.removed),
        len(change_set.modified),
        len(change_set.skipped),
    )
    return change_set


def _safe_compare(compare: CompareFn, name: str) -> ComparisonOutcome:
    try:
        return compare(name)
    except Exception as exc:  # noqa: BLE001
        return ComparisonFailure.from_exception(exc)


def reconcile(
    old_names: Sequence[str],
    new_names: Sequence[str],
    compare: CompareFn,
) -> CorpusChangeSet:
    """Classify every name across two versions, comparing common names in order."""

    partition = partition_names(old_names, new_names)
    modified: set[str] = set()
    skipped: dict[str, ComparisonFailure] = {}
    for name in partition.common:
        _record_outcome(name, _safe_compare(compare, name), modified=modified, skipped=skipped)
    return _build_change_set(partition, modified=modified, skipped=skipped)


async def reconcile_async(
    old_names: Sequence[str],
    new_names: Sequence[str],
    compare: AsyncCompareFn,
    *,
    concurrency: int | None = None,
) -> CorpusChangeSet:
    """Like :func:`reconcile`, but runs all common comparisons concurrently.

    ``concurrency`` bounds the number of comparisons in flight; ``None`` fans
    out to every common name at once.
    """

    if concurrency is not None and concurrency < 1:
        raise ValueError("concurrency must be a positive integer")

    partition = partition_names(old_names, new_names)
    semaphore = asyncio.Semaphore(concurrency) if concurrency is not None else None

    async def run(name: str) -> ComparisonOutcome:
        try:
            if semaphore is None:
                return await compare(name)
            async with semaphore:
                return await compare(name)
        except Exception as exc:  # noqa: BLE001
            return ComparisonFailure.from_exception(exc)

    log.debug("Comparing %s common entities", len(partition.common))
    outcomes = await asyncio.gather(*(run(name) for name in partition.common))

    modified: set[str] = set()
    skipped: dict[str, ComparisonFailure] = {}
    for name, outcome in zip(partition.common, outcomes, strict=True):
        _record_outcome(name, outcome, modified=modified, skipped=skipped)
    return _build_change_set(partition, modified=modified, skipped=skipped)
