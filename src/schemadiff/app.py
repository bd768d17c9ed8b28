"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from schemadiff.adapters.static_corpus import (
    StaticCorpusClient,
    latest_pair,
    parse_entity_document,
    sort_versions,
)
from schemadiff.config import get_corpus_config
from schemadiff.domain.comparison import compare_entities
from schemadiff.domain.reconciliation import reconcile_async

if TYPE_CHECKING:
    from collections.abc import Callable

    from schemadiff.adapters.http_resilience import ResilientClient
    from schemadiff.config.corpus import CorpusConfig
    from schemadiff.config.http_resilience import ResilienceConfig
    from schemadiff.domain.comparison import EntityDiff
    from schemadiff.domain.ports.fetching import EntityFetcher
    from schemadiff.domain.reconciliation import CorpusChangeSet

type ClientFactory = Callable[[ResilienceConfig], ResilientClient]

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VersionSummary:
    version: str
    entity_count: int


@dataclass(frozen=True, slots=True)
class VersionComparison:
    from_version: str
    to_version: str
    changes: CorpusChangeSet


@dataclass(frozen=True, slots=True)
class EntityComparison:
    from_version: str
    to_version: str
    name: str
    diff: EntityDiff


def _check_pair(from_version: str, to_version: str) -> None:
    if from_version == to_version:
        raise ValueError(f"Cannot compare version {from_version} with itself")


async def compare_entity_async(
    fetcher: EntityFetcher,
    name: str,
    *,
    from_version: str,
    to_version: str,
) -> EntityDiff:
    """Fetch both snapshots of ``name`` concurrently and diff them.

    If either fetch fails the other is cancelled and the first error is
    raised unwrapped.
    """

    try:
        async with asyncio.TaskGroup() as group:
            old_task = group.create_task(fetcher.fetch_entity(from_version, name))
            new_task = group.create_task(fetcher.fetch_entity(to_version, name))
    except ExceptionGroup as errors:
        raise errors.exceptions[0]  # noqa: B904
    return compare_entities(old_task.result(), new_task.result())


def list_versions(
    *,
    config: CorpusConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> list[VersionSummary]:
    """List published versions, newest first."""

    effective_config = config or get_corpus_config()

    async def run() -> list[VersionSummary]:
        async with StaticCorpusClient(
            config=effective_config, client_factory=client_factory
        ) as corpus:
            index = await corpus.fetch_index()
        return [VersionSummary(version, len(index[version])) for version in sort_versions(index)]

    return asyncio.run(run())


def compare_versions(
    from_version: str | None = None,
    to_version: str | None = None,
    *,
    config: CorpusConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> VersionComparison:
    """Reconcile two published versions; defaults to the two newest."""

    effective_config = config or get_corpus_config()

    async def run() -> VersionComparison:
        async with StaticCorpusClient(
            config=effective_config, client_factory=client_factory
        ) as corpus:
            source, target = from_version, to_version
            if source is None or target is None:
                pair = latest_pair(await corpus.fetch_index())
                if pair is None:
                    raise ValueError("The corpus needs at least two versions to compare")
                source = source or pair[0]
                target = target or pair[1]
            _check_pair(source, target)

            old_names, new_names = await asyncio.gather(
                corpus.fetch_entity_names(source),
                corpus.fetch_entity_names(target),
            )
            log.info(
                "Comparing %s (%s entities) with %s (%s entities)",
                source,
                len(old_names),
                target,
                len(new_names),
            )

            async def compare(name: str) -> EntityDiff:
                return await compare_entity_async(
                    corpus, name, from_version=source, to_version=target
                )

            changes = await reconcile_async(
                old_names,
                new_names,
                compare,
                concurrency=effective_config.concurrency,
            )
        return VersionComparison(from_version=source, to_version=target, changes=changes)

    return asyncio.run(run())


def compare_entity_versions(
    from_version: str,
    to_version: str,
    name: str,
    *,
    config: CorpusConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> EntityComparison:
    """Field-level diff of one entity between two published versions."""

    _check_pair(from_version, to_version)
    effective_config = config or get_corpus_config()

    async def run() -> EntityDiff:
        async with StaticCorpusClient(
            config=effective_config, client_factory=client_factory
        ) as corpus:
            return await compare_entity_async(
                corpus, name, from_version=from_version, to_version=to_version
            )

    diff = asyncio.run(run())
    return EntityComparison(
        from_version=from_version, to_version=to_version, name=name, diff=diff
    )


def compare_entity_files(old_path: Path | str, new_path: Path | str) -> EntityComparison:
    """Field-level diff of two entity documents on disk."""

    old_file, new_file = Path(old_path), Path(new_path)
    old_entity = parse_entity_document(old_file.read_bytes())
    new_entity = parse_entity_document(new_file.read_bytes())
    return EntityComparison(
        from_version=str(old_file),
        to_version=str(new_file),
        name=new_entity.name,
        diff=compare_entities(old_entity, new_entity),
    )
