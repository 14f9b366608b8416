"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from tsearch.core.settings.loader import get_search_settings

    settings = get_search_settings()  # First call: loads and validates
    settings = get_search_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    get_search_settings.cache_clear()

    Or override with custom values:
    settings = TSearchSettings(dictionary="simple")
"""

from __future__ import annotations

from functools import lru_cache

from .logs import LoggingSettings
from .search import TSearchSettings


@lru_cache(maxsize=1)
def get_search_settings() -> TSearchSettings:
    """Get cached full-text search settings.

    Returns:
        Validated and frozen TSearchSettings instance.
    """
    return TSearchSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear every cached settings instance."""
    get_search_settings.cache_clear()
    get_logging_settings.cache_clear()
