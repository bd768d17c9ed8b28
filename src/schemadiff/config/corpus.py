"""Static schema corpus configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .env import optional_positive_int, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

CORPUS_TIMEOUT_SECONDS = 15.0
INDEX_FILENAME = "_index.json"
HTTP_CACHE_MODES: Final[tuple[str, ...]] = ("memory", "sqlite", "off")


@dataclass(frozen=True, slots=True)
class CorpusConfig:
    """Where the corpus lives and how hard to hit it."""

    base_url: str
    resilience: ResilienceConfig
    concurrency: int | None = None
    index_filename: str = INDEX_FILENAME


def get_cache_config() -> CacheConfig | None:
    """Read ``SCHEMADIFF_HTTP_CACHE``: ``memory`` (default), ``sqlite`` or ``off``."""

    mode = (os.getenv("SCHEMADIFF_HTTP_CACHE") or "memory").strip().lower()
    if mode not in HTTP_CACHE_MODES:
        allowed = ", ".join(HTTP_CACHE_MODES)
        raise ConfigurationError(f"SCHEMADIFF_HTTP_CACHE must be one of {allowed}, got {mode!r}")
    if mode == "off":
        return None
    if mode == "sqlite":
        return CacheConfig(enabled=True, backend="sqlite")
    return CacheConfig(enabled=True, backend="memory")


def get_corpus_config(*, resilience: ResilienceConfig | None = None) -> CorpusConfig:
    values = require_env_vars(("SCHEMADIFF_BASE_URL",))
    base_url = values["SCHEMADIFF_BASE_URL"].rstrip("/") + "/"
    return CorpusConfig(
        base_url=base_url,
        concurrency=optional_positive_int("SCHEMADIFF_CONCURRENCY"),
        resilience=resilience
        or ResilienceConfig(
            name="corpus",
            base_url=base_url,
            timeout_seconds=CORPUS_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            cache=get_cache_config(),
        ),
    )
