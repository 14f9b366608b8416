"""Full-text search settings.

Provides the search defaults that can be loaded from environment
variables with TSEARCH_ prefix.

Features controlled:
- Default text search configuration (dictionary)
- Default operator joining query words
- ts_headline highlight markup
- Debug logging of compiled SQL fragments
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

OPERATOR_NAMES = ("and", "or", "not")


class TSearchSettings(BaseSettings):
    """Full-text search configuration settings.

    Environment variables use TSEARCH_ prefix.
    Example: TSEARCH_DICTIONARY=simple, TSEARCH_OPERATOR=or
    """

    # ──────────────────────────────────────────────────────────────
    # Query compilation
    # ──────────────────────────────────────────────────────────────

    dictionary: str = Field(
        default="english",
        min_length=1,
        description="PostgreSQL text search configuration (english, simple, spanish, ...)",
    )

    operator: str = Field(
        default="and",
        description="Operator joining the words of a search query (and|or|not)",
    )

    # ──────────────────────────────────────────────────────────────
    # Highlighting
    # ──────────────────────────────────────────────────────────────

    headline_start_sel: str = Field(
        default="<mark>",
        description="Markup inserted before each match by ts_headline",
    )

    headline_stop_sel: str = Field(
        default="</mark>",
        description="Markup inserted after each match by ts_headline",
    )

    # ──────────────────────────────────────────────────────────────
    # Diagnostics
    # ──────────────────────────────────────────────────────────────

    log_compiled_queries: bool = Field(
        default=False,
        description="Log compiled search SQL at DEBUG level (contains user search text)",
    )

    @field_validator("operator", mode="before")
    @classmethod
    def _normalize_operator(cls, v: object) -> str:
        """Lowercase the operator and reject unknown names."""
        value = str(v).strip().lower()
        if value not in OPERATOR_NAMES:
            msg = f"operator must be one of {', '.join(OPERATOR_NAMES)}, got {v!r}"
            raise ValueError(msg)
        return value

    model_config = SettingsConfigDict(
        env_prefix="TSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )


__all__ = ["TSearchSettings"]
