from __future__ import annotations

import asyncio

import pytest

from schemadiff.domain.comparison import EntityDiff, compare_entities
from schemadiff.domain.model import MalformedEntityError
from schemadiff.domain.ports.fetching import EntityDocumentError, EntityNotFoundError
from schemadiff.domain.reconciliation import (
    ComparisonFailure,
    CorpusChangeSet,
    FailureKind,
    partition_names,
    reconcile,
    reconcile_async,
)
from tests.helpers.entities import make_entity

OLD = ["A", "B", "C"]
NEW = ["B", "C", "D"]

UNCHANGED = EntityDiff()
CHANGED = compare_entities(make_entity("X"), make_entity("Y"))


def test_partition_names() -> None:
    partition = partition_names(OLD, NEW)

    assert partition.added == ("D",)
    assert partition.removed == ("A",)
    assert partition.common == ("B", "C")


def test_partition_collapses_duplicates_and_keeps_old_order() -> None:
    partition = partition_names(["C", "B", "C", "A"], ["B", "C", "C", "E", "E"])

    assert partition.common == ("C", "B")
    assert partition.added == ("E",)
    assert partition.removed == ("A",)


def test_reconcile_classifies_modified() -> None:
    calls: list[str] = []

    def compare(name: str) -> EntityDiff:
        calls.append(name)
        return CHANGED if name == "C" else UNCHANGED

    changes = reconcile(OLD, NEW, compare)

    assert calls == ["B", "C"]
    assert changes.added == {"D"}
    assert changes.removed == {"A"}
    assert changes.modified == {"C"}
    assert not changes.skipped


def test_reconcile_tolerates_failing_comparison() -> None:
    def compare(name: str) -> EntityDiff:
        if name == "C":
            raise RuntimeError("boom")
        return CHANGED

    changes = reconcile(OLD, NEW, compare)

    assert changes.added == {"D"}
    assert changes.removed == {"A"}
    assert changes.modified == {"B"}
    assert changes.skipped["C"] == ComparisonFailure(kind=FailureKind.ERROR, message="boom")


def test_reconcile_accepts_returned_failures() -> None:
    failure = ComparisonFailure(kind=FailureKind.MALFORMED, message="bad json")

    changes = reconcile(OLD, NEW, lambda name: failure if name == "B" else UNCHANGED)

    assert changes.modified == frozenset()
    assert dict(changes.skipped) == {"B": failure}


def test_reconcile_treats_missing_outcome_as_error() -> None:
    changes = reconcile(OLD, NEW, lambda name: None if name == "B" else CHANGED)  # type: ignore[arg-type,return-value]

    assert changes.modified == {"C"}
    assert changes.skipped["B"].kind is FailureKind.ERROR
    assert "NoneType" in changes.skipped["B"].message


def test_reconcile_async_treats_missing_outcome_as_error() -> None:
    async def compare(name: str) -> EntityDiff | None:
        return None if name == "C" else UNCHANGED

    changes = asyncio.run(reconcile_async(OLD, NEW, compare))  # type: ignore[arg-type]

    assert changes.modified == frozenset()
    assert changes.skipped["C"].kind is FailureKind.ERROR


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (EntityNotFoundError("gone", version="v2", name="B"), FailureKind.NOT_FOUND),
        (EntityDocumentError("bad", version="v2", name="B"), FailureKind.MALFORMED),
        (MalformedEntityError("no Meta"), FailureKind.MALFORMED),
        (KeyError("B"), FailureKind.ERROR),
    ],
)
def test_failure_kind_from_exception(error: Exception, kind: FailureKind) -> None:
    assert ComparisonFailure.from_exception(error).kind is kind


def test_name_lands_in_at_most_one_bucket() -> None:
    changes = reconcile(["A", "B"], ["B", "C"], lambda _name: CHANGED)

    buckets = [changes.added, changes.removed, changes.modified]
    for name in {"A", "B", "C"}:
        assert sum(name in bucket for bucket in buckets) == 1


def test_change_set_sorted_views() -> None:
    changes = CorpusChangeSet(
        added=frozenset({"b", "a"}),
        modified=frozenset({"z", "m"}),
    )

    assert changes.sorted_added() == ["a", "b"]
    assert changes.sorted_modified() == ["m", "z"]
    assert changes.sorted_removed() == []
    assert changes.has_changes is True
    assert CorpusChangeSet().has_changes is False


def test_reconcile_async_runs_comparisons_concurrently() -> None:
    names = [f"E{i}" for i in range(6)]
    in_flight = 0
    peak = 0

    async def compare(name: str) -> EntityDiff:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return CHANGED if name == "E3" else UNCHANGED

    changes = asyncio.run(reconcile_async(names, names, compare))

    assert peak == len(names)
    assert changes.modified == {"E3"}


def test_reconcile_async_respects_concurrency_limit() -> None:
    names = [f"E{i}" for i in range(6)]
    in_flight = 0
    peak = 0

    async def compare(_name: str) -> EntityDiff:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return UNCHANGED

    asyncio.run(reconcile_async(names, names, compare, concurrency=2))

    assert peak == 2


def test_reconcile_async_tolerates_failures() -> None:
    async def compare(name: str) -> EntityDiff:
        if name == "C":
            raise EntityNotFoundError("missing", version="v2", name=name)
        return UNCHANGED if name == "B" else CHANGED

    changes = asyncio.run(reconcile_async(OLD, NEW, compare))

    assert changes.added == {"D"}
    assert changes.removed == {"A"}
    assert changes.modified == frozenset()
    assert changes.skipped["C"].kind is FailureKind.NOT_FOUND


def test_reconcile_async_rejects_non_positive_concurrency() -> None:
    async def compare(_name: str) -> EntityDiff:
        return UNCHANGED

    with pytest.raises(ValueError, match="concurrency"):
        asyncio.run(reconcile_async(OLD, NEW, compare, concurrency=0))
