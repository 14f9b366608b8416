"""Unit tests for search text compilation."""

from __future__ import annotations

import pytest

from tsearch.core.database.exceptions import UnknownOperatorError
from tsearch.core.database.search.dialect import SearchDialect
from tsearch.core.database.search.querytext import (
    TSEARCH_OPERATORS,
    QueryTextCompiler,
    compile_query,
    escape,
    lookup_operator_symbol,
    to_querytext,
)
from tsearch.core.database.search.types import SearchOperator

# ──────────────────────────────────────────────────────────────
# Test escape
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestEscape:
    """Tests for tsquery operator escaping."""

    @pytest.mark.parametrize("character", TSEARCH_OPERATORS)
    def test_operator_characters_are_escaped(self, character):
        """Every operator character gets a single backslash in front."""
        assert escape(f"a{character}b") == f"a\\{character}b"

    def test_colon_is_escaped(self):
        """Colons are escaped separately (e.g. Sto:lo)."""
        assert escape("Sto:lo") == "Sto\\:lo"

    def test_backslash_is_escaped_once(self):
        """A backslash is doubled, not escaped again by the colon pass."""
        assert escape("a\\:b") == "a\\\\\\:b"

    def test_repeated_operators(self):
        """Adjacent operators are each escaped."""
        assert escape("!!") == "\\!\\!"
        assert escape("(a|b)") == "\\(a\\|b\\)"

    def test_leading_quotes_removed(self):
        """Quotes at the start of the text are removed."""
        assert escape("'hello") == "hello"
        assert escape("'''hello") == "hello"

    def test_quotes_at_word_start_removed(self):
        """Quotes after whitespace are removed, the whitespace is kept."""
        assert escape("don't 'stop") == "don't stop"
        assert escape("a\t'b") == "a\tb"

    def test_word_internal_quote_kept(self):
        """Contractions keep their quote."""
        assert escape("it's") == "it's"
        assert escape("rock'n'roll") == "rock'n'roll"

    def test_quote_after_escaped_operator_kept(self):
        """Only whitespace or the start of the text precedes a stripped quote."""
        assert escape("('x") == "\\('x"

    def test_plain_text_unchanged(self):
        """Text without special characters passes through."""
        assert escape("quick brown fox") == "quick brown fox"


# ──────────────────────────────────────────────────────────────
# Test operators
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestOperatorLookup:
    """Tests for operator symbol lookup."""

    def test_default_is_and(self):
        """None resolves to the AND symbol."""
        assert lookup_operator_symbol(None) == "&"

    @pytest.mark.parametrize(
        ("operator", "symbol"),
        [
            ("and", "&"),
            ("or", "|"),
            ("not", "!"),
            ("AND", "&"),
            ("Or", "|"),
            (SearchOperator.NOT, "!"),
        ],
    )
    def test_known_operators(self, operator, symbol):
        """Operator names resolve case-insensitively."""
        assert lookup_operator_symbol(operator) == symbol

    @pytest.mark.parametrize("operator", ["xor", "", "&", "andd", 1])
    def test_unknown_operator_raises(self, operator):
        """Unknown operator names raise instead of defaulting."""
        with pytest.raises(UnknownOperatorError) as exc_info:
            lookup_operator_symbol(operator)

        assert exc_info.value.operator == operator
        assert "operator" in exc_info.value.details


# ──────────────────────────────────────────────────────────────
# Test to_querytext
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestToQuerytext:
    """Tests for escaped, operator-joined query text."""

    def test_single_word(self):
        """A single word gets the prefix suffix."""
        assert to_querytext("fox") == "fox:*"

    def test_words_joined_with_and(self):
        """Default operator joins words with &."""
        assert to_querytext("quick fox") == "quick&fox:*"

    def test_whitespace_normalization(self):
        """Surrounding whitespace is trimmed and space runs collapsed."""
        assert to_querytext("  cat   dog  ") == "cat&dog:*"

    def test_other_whitespace_becomes_operator(self):
        """Tabs and newlines are replaced by the operator too."""
        assert to_querytext("cat\tdog") == "cat&dog:*"
        assert to_querytext("cat\ndog") == "cat&dog:*"

    def test_or_operator(self):
        assert to_querytext("cat dog", "or") == "cat|dog:*"

    def test_not_operator(self):
        assert to_querytext("cat dog", "NOT") == "cat!dog:*"

    def test_escaped_operator_between_words(self):
        """User supplied operators stay escaped words."""
        assert to_querytext("rock & roll") == "rock&\\&&roll:*"

    def test_leading_quote_stripped(self):
        """A leading quote does not reach the query."""
        assert to_querytext("'hello") == "hello:*"

    def test_contraction_kept(self):
        assert to_querytext("it's") == "it's:*"

    def test_quoted_words(self):
        """Quotes at the start of every word are stripped."""
        assert to_querytext("''quoted 'words") == "quoted&words:*"

    def test_blank_text_is_empty_term(self):
        """Blank text compiles to the bare prefix suffix."""
        assert to_querytext("   ") == ":*"
        assert to_querytext("") == ":*"

    def test_unknown_operator_raises_for_any_text(self):
        """Operator resolution fails even for empty text."""
        with pytest.raises(UnknownOperatorError):
            to_querytext("", "xor")


# ──────────────────────────────────────────────────────────────
# Test QueryTextCompiler
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestQueryTextCompiler:
    """Tests for to_tsquery compilation."""

    def test_compile_default(self):
        """Compiled query uses the english dictionary and AND."""
        term = QueryTextCompiler().compile("quick fox")

        assert term.sql == "to_tsquery('english', 'quick&fox:*')"
        assert term.querytext == "quick&fox:*"
        assert term.dictionary == "english"
        assert str(term) == term.sql

    def test_compile_dictionary(self):
        """Dictionary is embedded as a quoted literal."""
        term = QueryTextCompiler().compile("fox", dictionary="simple")

        assert term.sql == "to_tsquery('simple', 'fox:*')"

    def test_dictionary_is_quoted(self):
        """A quote in the dictionary name cannot close the literal."""
        term = QueryTextCompiler().compile("fox", dictionary="english'); --")

        assert term.sql == "to_tsquery('english''); --', 'fox:*')"

    def test_single_quote_is_doubled(self):
        """Word-internal quotes are doubled in the SQL literal."""
        term = compile_query("it's")

        assert term.sql == "to_tsquery('english', 'it''s:*')"

    def test_injection_attempt_stays_in_literal(self):
        """Quotes, operators and colons are all neutralized."""
        term = compile_query("x') OR 1=1; --")

        assert term.querytext == "x'\\)&OR&1=1;&--:*"
        assert term.sql == "to_tsquery('english', 'x''\\)&OR&1=1;&--:*')"

    def test_escape_string_dialect(self):
        """Without standard conforming strings backslashes are doubled."""
        compiler = QueryTextCompiler(SearchDialect(standard_conforming_strings=False))

        term = compiler.compile("a:b")

        assert term.querytext == "a\\:b:*"
        assert term.sql == "to_tsquery(E'english', E'a\\\\:b:*')"

    def test_compile_is_deterministic(self):
        """Compiling the same input twice gives identical output."""
        compiler = QueryTextCompiler()

        first = compiler.compile("  (quick) | 'brown fox: ", "or", "english")
        second = compiler.compile("  (quick) | 'brown fox: ", "or", "english")

        assert first == second
        assert first.sql == second.sql

    def test_empty_term(self):
        """Blank text produces an empty term."""
        assert compile_query("  ").is_empty is True
        assert compile_query("''").is_empty is True
        assert compile_query("fox").is_empty is False

    def test_unknown_operator(self):
        with pytest.raises(UnknownOperatorError):
            compile_query("fox", operator="near")
