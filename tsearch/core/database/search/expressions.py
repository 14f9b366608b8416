"""Literal SQL builders for PostgreSQL full-text search.

These return SQL strings rather than SQLAlchemy expressions so the
generated fragments stay bit-exact with what PostgreSQL receives:

    to_tsvector('english', coalesce(articles.title::text,''))
    setweight(<vector>, 'A')
    to_tsquery('english', 'quick&fox:*')
    <vector> @@ <query>
    ts_rank_cd(<vector>, <query>, 4)
    SUM(ts_rank_cd(<vector>, <query>, 8)) DESC

Two families of helpers exist, as in SQL:
- vector_*: operate on an existing tsvector expression or column
- search_condition / rank / sum_rank: take a plain text column and wrap
  it with to_tsvector first

``query`` arguments accept a CompiledQueryTerm or an already rendered
to_tsquery string.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tsearch.core.database.search.dialect import SearchDialect, get_dialect
from tsearch.core.database.search.types import DEFAULT_DICTIONARY, WeightCode
from tsearch.core.database.validation import validate_identifier

if TYPE_CHECKING:
    from tsearch.core.database.search.types import CompiledQueryTerm

# ts_rank_cd normalization: divide by the mean harmonic distance between extents
RANK_NORMALIZATION = 4
# Aggregate ranking doubles the constant (divide by unique words instead)
SUM_RANK_NORMALIZATION = RANK_NORMALIZATION * 2

VECTOR_CONCAT = " || "

DEFAULT_HEADLINE_START_SEL = "<mark>"
DEFAULT_HEADLINE_STOP_SEL = "</mark>"


def to_tsvector(
    column: str,
    dictionary: str = DEFAULT_DICTIONARY,
    *,
    dialect: SearchDialect | None = None,
) -> str:
    """Vectorize a column, treating NULL as empty text."""
    dialect = dialect or get_dialect()
    return f"to_tsvector({dialect.quote_literal(dictionary)}, coalesce({column}::text,''))"


def setweight(
    vector: str,
    weight: WeightCode | str,
    *,
    dialect: SearchDialect | None = None,
) -> str:
    """Label every lexeme of a vector with a weight class.

    Raises:
        InvalidWeightError: If weight is not A-D
    """
    dialect = dialect or get_dialect()
    code = WeightCode.parse(weight)
    return f"setweight({vector}, {dialect.quote_literal(code.value)})"


def to_tsquery(
    querytext: str,
    dictionary: str = DEFAULT_DICTIONARY,
    *,
    dialect: SearchDialect | None = None,
) -> str:
    """Wrap a quoted query literal in to_tsquery."""
    dialect = dialect or get_dialect()
    return f"to_tsquery({dialect.quote_literal(dictionary)}, {querytext})"


def vector_search_condition(vector: str, query: CompiledQueryTerm | str) -> str:
    """Match condition for a tsvector expression."""
    return f"{vector} @@ {query}"


def vector_rank(vector: str, query: CompiledQueryTerm | str) -> str:
    """Cover density rank of a single row."""
    return f"ts_rank_cd({vector}, {query}, {RANK_NORMALIZATION})"


def vector_sum_rank(vector: str, query: CompiledQueryTerm | str) -> str:
    """Summed rank over grouped rows, highest first."""
    return f"SUM(ts_rank_cd({vector}, {query}, {SUM_RANK_NORMALIZATION})) DESC"


def search_condition(
    column: str,
    query: CompiledQueryTerm | str,
    dictionary: str = DEFAULT_DICTIONARY,
    *,
    dialect: SearchDialect | None = None,
) -> str:
    """Match condition for a plain text column."""
    return vector_search_condition(to_tsvector(column, dictionary, dialect=dialect), query)


def rank(
    column: str,
    query: CompiledQueryTerm | str,
    dictionary: str = DEFAULT_DICTIONARY,
    *,
    dialect: SearchDialect | None = None,
) -> str:
    return vector_rank(to_tsvector(column, dictionary, dialect=dialect), query)


def sum_rank(
    column: str,
    query: CompiledQueryTerm | str,
    dictionary: str = DEFAULT_DICTIONARY,
    *,
    dialect: SearchDialect | None = None,
) -> str:
    return vector_sum_rank(to_tsvector(column, dictionary, dialect=dialect), query)


def ts_headline(
    column: str,
    query: CompiledQueryTerm | str,
    alias: str | None = "headline",
    *,
    start_sel: str = DEFAULT_HEADLINE_START_SEL,
    stop_sel: str = DEFAULT_HEADLINE_STOP_SEL,
    dialect: SearchDialect | None = None,
) -> str:
    """Highlighted excerpt of a column for the given query.

    Args:
        column: Column reference to excerpt
        query: Query whose matches are highlighted
        alias: Output column name, or None to omit the AS clause
        start_sel: Markup inserted before each match
        stop_sel: Markup inserted after each match
        dialect: Quoting dialect

    Returns:
        ``ts_headline(<col>, <query>, E'StartSel=<mark>, StopSel=</mark>') AS headline``

    Raises:
        IdentifierValidationError: If alias is not a valid identifier
    """
    dialect = dialect or get_dialect()
    options = dialect.quote_escape_literal(f"StartSel={start_sel}, StopSel={stop_sel}")
    expression = f"ts_headline({column}, {query}, {options})"
    if alias is None:
        return expression
    validate_identifier(alias, identifier_type="alias")
    return f"{expression} AS {dialect.quote_identifier(alias)}"


__all__ = [
    "RANK_NORMALIZATION",
    "SUM_RANK_NORMALIZATION",
    "VECTOR_CONCAT",
    "rank",
    "search_condition",
    "setweight",
    "sum_rank",
    "to_tsquery",
    "to_tsvector",
    "ts_headline",
    "vector_rank",
    "vector_search_condition",
    "vector_sum_rank",
]
