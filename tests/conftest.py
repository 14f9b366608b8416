"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolate cached settings from the environment
    - Search Fixtures: entities, fields and weights shared by search tests
"""

from __future__ import annotations

import os

import pytest

from tsearch.core.database.search import FieldReference, SearchEntity
from tsearch.core.settings import TSearchSettings, clear_all_caches

# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test against default settings.

    Removes TSEARCH_/LOG_ variables inherited from the environment and
    clears the cached settings before and after the test.
    """
    for name in list(os.environ):
        if name.upper().startswith(("TSEARCH_", "LOG_")):
            monkeypatch.delenv(name, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def search_settings() -> TSearchSettings:
    """Default search settings."""
    return TSearchSettings()


# ============================================================================
# Search Fixtures
# ============================================================================


@pytest.fixture
def article_entity() -> SearchEntity:
    """Articles with a tags relation and an author relation."""
    return SearchEntity(
        name="Article",
        table="articles",
        primary_key="id",
        relation_tables={"tags": "tags", "author": "users"},
    )


@pytest.fixture
def article_fields() -> list[FieldReference]:
    """Title and body of the article itself."""
    return [FieldReference("title"), FieldReference("body")]
