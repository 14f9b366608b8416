"""Statement filter base for SQLAlchemy queries.

Filters work directly with SQLAlchemy statements without hiding the query.
They're utility helpers, not an abstraction layer.

Usage:
    from sqlalchemy import select
    from tsearch.core.database.search import tsearch_scope

    stmt = select(Article)
    stmt = tsearch_scope(Article, fields=["title", "body"])("python").apply(stmt)

    result = await session.execute(stmt)
    articles = result.scalars().all()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import Select


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


__all__ = ["StatementFilter"]
