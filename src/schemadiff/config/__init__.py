"""Application configuration helpers."""

from __future__ import annotations

from .corpus import CorpusConfig, get_cache_config, get_corpus_config
from .env import optional_positive_int, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "CorpusConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_cache_config",
    "get_corpus_config",
    "get_storage_config",
    "optional_positive_int",
    "require_env_vars",
]
