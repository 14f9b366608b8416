"""Ranking and grouping strategy.

A search over the entity alone ranks each row directly:

    ORDER BY ts_rank_cd(<vector>, <query>, 4), articles.id ASC

Once a relation is joined, one entity row can appear several times (one
per matching related row). Those duplicates are grouped on the primary
key and their ranks summed:

    GROUP BY articles.id
    ORDER BY SUM(ts_rank_cd(<vector>, <query>, 8)) DESC, articles.id ASC

The trailing primary key keeps the order total, so rows of equal
relevance paginate consistently.
"""

from __future__ import annotations

from tsearch.core.database.search.dialect import SearchDialect, get_dialect
from tsearch.core.database.search.expressions import (
    vector_rank,
    vector_search_condition,
    vector_sum_rank,
)
from tsearch.core.database.search.types import (
    CompiledQueryTerm,
    RankMode,
    SearchPlan,
    SearchVectorExpression,
)


class RankAndGroupingStrategy:
    """Choose between simple and aggregate ranking."""

    def __init__(self, dialect: SearchDialect | None = None) -> None:
        self.dialect = dialect or get_dialect()

    @staticmethod
    def select_mode(joined_relations_present: bool) -> RankMode:
        if joined_relations_present:
            return RankMode.AGGREGATE
        return RankMode.SIMPLE

    def plan(
        self,
        vector: SearchVectorExpression,
        query: CompiledQueryTerm,
        *,
        joined_relations_present: bool,
        primary_key: str,
        table: str,
        schema: str | None = None,
    ) -> SearchPlan:
        """Build predicate, ordering and grouping for one search.

        Args:
            vector: Weighted search vector
            query: Compiled query term
            joined_relations_present: Whether any searched field lives in a
                joined relation
            primary_key: Primary key column of the searched entity
            table: Table of the searched entity
            schema: Optional schema of the table

        Returns:
            SearchPlan for the host query builder
        """
        mode = self.select_mode(joined_relations_present)
        key = self.dialect.qualify(table, primary_key, schema)

        if mode is RankMode.AGGREGATE:
            relevance = vector_sum_rank(vector.sql, query.sql)
            group_by: str | None = key
        else:
            relevance = vector_rank(vector.sql, query.sql)
            group_by = None

        return SearchPlan(
            predicate=vector_search_condition(vector.sql, query.sql),
            order=(relevance, f"{key} ASC"),
            group_by=group_by,
            mode=mode,
            vector=vector,
            query=query,
        )


__all__ = ["RankAndGroupingStrategy"]
