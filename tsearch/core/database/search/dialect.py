"""Dialect-specific quoting for generated search fragments.

Every identifier and literal embedded in a compiled search expression is
routed through SearchDialect. Identifier quoting is delegated to the
SQLAlchemy dialect's identifier preparer, so names are only quoted where
the dialect requires it (mixed case, reserved words, special characters).

Usage:
    from tsearch.core.database.search.dialect import get_dialect

    dialect = get_dialect()
    dialect.qualify("articles", "title")  # 'articles.title'
    dialect.quote_literal("it's")  # "'it''s'"
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.dialects import postgresql

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect


class SearchDialect:
    """Quoting service for one SQLAlchemy dialect.

    Args:
        dialect: SQLAlchemy dialect instance (PostgreSQL if omitted)
        standard_conforming_strings: Whether the server treats backslashes
            in ordinary string literals literally (PostgreSQL default since
            9.1). When False, literals are emitted as escape strings.
    """

    def __init__(
        self,
        dialect: Dialect | None = None,
        *,
        standard_conforming_strings: bool = True,
    ) -> None:
        self.dialect = dialect if dialect is not None else postgresql.dialect()
        self.standard_conforming_strings = standard_conforming_strings
        self._preparer = self.dialect.identifier_preparer

    @property
    def name(self) -> str:
        return self.dialect.name

    def quote_identifier(self, name: str) -> str:
        """Quote a single identifier if the dialect requires it."""
        return self._preparer.quote(name)

    def quote_table(self, name: str, schema: str | None = None) -> str:
        """Quote a table reference.

        Dotted names (``schema.table``) are quoted part by part.
        """
        quoted = ".".join(self._preparer.quote(part) for part in name.split("."))
        if schema:
            return f"{self._preparer.quote_schema(schema)}.{quoted}"
        return quoted

    def qualify(self, table: str, column: str, schema: str | None = None) -> str:
        """Column reference qualified with its table."""
        return f"{self.quote_table(table, schema)}.{self.quote_identifier(column)}"

    def quote_literal(self, value: str) -> str:
        """Quote a string literal.

        Single quotes are doubled. NUL characters are dropped since
        PostgreSQL text cannot hold them.
        """
        value = value.replace("\x00", "")
        if not self.standard_conforming_strings:
            return self.quote_escape_literal(value)
        return "'{}'".format(value.replace("'", "''"))

    def quote_escape_literal(self, value: str) -> str:
        """Quote a string as an ``E'...'`` escape string literal."""
        value = value.replace("\x00", "").replace("\\", "\\\\").replace("'", "''")
        return f"E'{value}'"

    def __repr__(self) -> str:
        return f"SearchDialect({self.name!r})"


@lru_cache(maxsize=1)
def get_dialect() -> SearchDialect:
    """Get the cached PostgreSQL search dialect."""
    return SearchDialect()


__all__ = ["SearchDialect", "get_dialect"]
