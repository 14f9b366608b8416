"""PostgreSQL full-text search compilation.

Turns free search text and a set of weighted columns into the SQL
fragments of a ranked full-text search:

Core Components:
- QueryTextCompiler: Escape user text into a prefix-matching to_tsquery
- WeightedVectorAssembler: Combine weighted columns into one tsvector
- RankAndGroupingStrategy: Simple rank, or summed rank grouped on the
  primary key when joined relations can duplicate rows
- SearchInvocationCoordinator: Produce a SearchPlan for one search call

Host Integration:
- Searchable / SearchableMixin: Entity metadata for SQLAlchemy models
- tsearch_scope / TSearchFilter: Apply a plan to a select statement

Expression Builders:
- to_tsvector, setweight, to_tsquery, ts_headline
- search_condition, rank, sum_rank (plain text columns)
- vector_search_condition, vector_rank, vector_sum_rank (tsvector expressions)

Usage:
    from tsearch.core.database.search import tsearch_scope

    search_articles = tsearch_scope(
        Article,
        fields=["title", "body", {"tags": "name"}],
        weights={"title": "A", "body": "B"},
    )
    stmt = search_articles("quick fox").apply(select(Article))

    # Or without SQLAlchemy models
    from tsearch.core.database.search import (
        FieldReference,
        SearchEntity,
        SearchInvocationCoordinator,
    )

    coordinator = SearchInvocationCoordinator(
        SearchEntity(name="Article", table="articles"),
        [FieldReference("title"), FieldReference("body")],
        weights={"title": "A", "body": "B"},
    )
    plan = coordinator.plan("quick fox")
"""

from tsearch.core.database.search.types import (
    DEFAULT_DICTIONARY,
    DEFAULT_OPERATOR,
    DEFAULT_WEIGHT,
    OPERATOR_DICTIONARY,
    CompiledQueryTerm,
    FieldReference,
    RankMode,
    SearchEntity,
    SearchOperator,
    SearchPlan,
    SearchVectorExpression,
    WeightCode,
    WeightTable,
)
from tsearch.core.database.search.dialect import SearchDialect, get_dialect
from tsearch.core.database.search.expressions import (
    RANK_NORMALIZATION,
    SUM_RANK_NORMALIZATION,
    rank,
    search_condition,
    setweight,
    sum_rank,
    to_tsquery,
    to_tsvector,
    ts_headline,
    vector_rank,
    vector_search_condition,
    vector_sum_rank,
)
from tsearch.core.database.search.querytext import (
    TSEARCH_OPERATORS,
    QueryTextCompiler,
    compile_query,
    escape,
    lookup_operator_symbol,
    to_querytext,
)
from tsearch.core.database.search.vector import WeightedVectorAssembler
from tsearch.core.database.search.ranking import RankAndGroupingStrategy
from tsearch.core.database.search.coordinator import (
    SearchInvocationCoordinator,
    plan_search,
)
from tsearch.core.database.search.filters import (
    TSearchFilter,
    TSearchScope,
    normalize_fields,
    tsearch_scope,
)
from tsearch.core.database.search.mixins import Searchable, SearchableMixin

__all__ = [
    "DEFAULT_DICTIONARY",
    "DEFAULT_OPERATOR",
    "DEFAULT_WEIGHT",
    "OPERATOR_DICTIONARY",
    "RANK_NORMALIZATION",
    "SUM_RANK_NORMALIZATION",
    "TSEARCH_OPERATORS",
    "CompiledQueryTerm",
    "FieldReference",
    "QueryTextCompiler",
    "RankAndGroupingStrategy",
    "RankMode",
    "SearchDialect",
    "SearchEntity",
    "SearchInvocationCoordinator",
    "SearchOperator",
    "SearchPlan",
    "SearchVectorExpression",
    "Searchable",
    "SearchableMixin",
    "TSearchFilter",
    "TSearchScope",
    "WeightCode",
    "WeightTable",
    "WeightedVectorAssembler",
    "compile_query",
    "escape",
    "get_dialect",
    "lookup_operator_symbol",
    "normalize_fields",
    "plan_search",
    "rank",
    "search_condition",
    "setweight",
    "sum_rank",
    "to_querytext",
    "to_tsquery",
    "to_tsvector",
    "ts_headline",
    "tsearch_scope",
    "vector_rank",
    "vector_search_condition",
    "vector_sum_rank",
]
