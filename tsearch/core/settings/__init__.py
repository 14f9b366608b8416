"""Pydantic Settings v2 configuration.

Settings are read from environment variables (and an optional .env file)
and exposed through LRU-cached loaders:

    from tsearch.core.settings import get_search_settings

    settings = get_search_settings()
    print(settings.dictionary)
"""

from __future__ import annotations

from .loader import clear_all_caches, get_logging_settings, get_search_settings
from .logs import LoggingSettings
from .search import TSearchSettings

__all__ = [
    "LoggingSettings",
    "TSearchSettings",
    "clear_all_caches",
    "get_logging_settings",
    "get_search_settings",
]
