"""Turn free text into a prefix-matching tsquery.

User text is never parsed as tsquery syntax. Instead every operator
character is escaped and whitespace is replaced with a single operator, so
any input yields a valid query:

    "  cat   dog  "   ->  cat&dog:*
    "rock & roll"     ->  rock&\\&&roll:*
    "'hello world"    ->  hello&world:*
    "Sto:lo"          ->  Sto\\:lo:*

The steps run in a fixed order; colons are escaped after the operator
alphabet, and leading quotes are dropped after escaping.

Usage:
    from tsearch.core.database.search.querytext import QueryTextCompiler

    term = QueryTextCompiler().compile("quick fox")
    str(term)  # "to_tsquery('english', 'quick&fox:*')"
"""

from __future__ import annotations

import re
from typing import Any

from tsearch.core.database.search import expressions
from tsearch.core.database.search.dialect import SearchDialect, get_dialect
from tsearch.core.database.search.types import (
    DEFAULT_DICTIONARY,
    PREFIX_MATCH,
    CompiledQueryTerm,
    SearchOperator,
)

TSEARCH_OPERATORS = ("!", "&", "|", "(", ")", "\\")

_OPERATOR_CHARACTERS = re.compile("([" + re.escape("".join(TSEARCH_OPERATORS)) + "])")
# Quotes at the start of a word; word-internal quotes (it's) are kept
_LEADING_QUOTES = re.compile(r"(\A|\s)'+")
_SPACE_RUNS = re.compile(" +")
_WHITESPACE = re.compile(r"\s")


def escape(query_string: str) -> str:
    """Escape tsquery operators in user text.

    Backslash-escapes ``! & | ( ) \\`` and ``:``, then removes single
    quotes from the beginning of every word.
    """
    query_string = _OPERATOR_CHARACTERS.sub(r"\\\1", query_string)
    query_string = query_string.replace(":", "\\:")
    return _LEADING_QUOTES.sub(r"\1", query_string)


def lookup_operator_symbol(operator: Any) -> str:
    """Symbol for an operator name, AND when operator is None.

    Raises:
        UnknownOperatorError: If the name is not and/or/not
    """
    return SearchOperator.parse(operator).symbol


def to_querytext(text: str, operator: Any = None) -> str:
    """Escaped, operator-joined query text with prefix matching.

    The result is not yet quoted as a SQL literal.
    """
    symbol = lookup_operator_symbol(operator)
    query_string = _SPACE_RUNS.sub(" ", escape(text).strip())
    return _WHITESPACE.sub(symbol, query_string) + PREFIX_MATCH


class QueryTextCompiler:
    """Compile search text into a to_tsquery expression.

    Stateless apart from the quoting dialect; one instance can serve any
    number of concurrent searches.
    """

    def __init__(self, dialect: SearchDialect | None = None) -> None:
        self.dialect = dialect or get_dialect()

    def compile(
        self,
        text: str,
        operator: Any = None,
        dictionary: str = DEFAULT_DICTIONARY,
    ) -> CompiledQueryTerm:
        """Compile text into a query term.

        Args:
            text: Raw user search text; any string is accepted
            operator: and/or/not (case-insensitive), AND when None
            dictionary: PostgreSQL text search configuration

        Returns:
            CompiledQueryTerm wrapping ``to_tsquery('<dict>', '<text>:*')``

        Raises:
            UnknownOperatorError: If operator is not and/or/not
        """
        querytext = to_querytext(text, operator)
        sql = expressions.to_tsquery(
            self.dialect.quote_literal(querytext),
            dictionary,
            dialect=self.dialect,
        )
        return CompiledQueryTerm(querytext=querytext, dictionary=dictionary, sql=sql)


def compile_query(
    text: str,
    operator: Any = None,
    dictionary: str = DEFAULT_DICTIONARY,
) -> CompiledQueryTerm:
    """Compile text with the default PostgreSQL dialect."""
    return QueryTextCompiler().compile(text, operator, dictionary)


__all__ = [
    "TSEARCH_OPERATORS",
    "QueryTextCompiler",
    "compile_query",
    "escape",
    "lookup_operator_symbol",
    "to_querytext",
]
