"""Tests for the search CLI commands."""

from __future__ import annotations

import click
import pytest
from click.testing import CliRunner

from tsearch import __version__
from tsearch.cli.commands.search import parse_fields
from tsearch.cli.main import cli
from tsearch.core.database.search import FieldReference

TITLE = "setweight(to_tsvector('english', coalesce(articles.title::text,'')), 'A')"
BODY = "setweight(to_tsvector('english', coalesce(articles.body::text,'')), 'B')"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.mark.unit
class TestParseFields:
    def test_columns_and_weights(self):
        entity, fields, weights = parse_fields("articles", ("title=A", "body"), (), ())

        assert entity.table == "articles"
        assert fields == [FieldReference("title"), FieldReference("body")]
        assert weights == {"title": "A"}

    def test_relation_fields(self):
        entity, fields, weights = parse_fields(
            "articles",
            ("title",),
            ("tags.name=C", "author.name"),
            ("author=users",),
            primary_key="article_id",
        )

        assert fields == [
            FieldReference("title"),
            FieldReference("name", "tags"),
            FieldReference("name", "author"),
        ]
        assert weights == {"tags": {"name": "C"}}
        assert dict(entity.relation_tables) == {"author": "users", "tags": "tags"}
        assert entity.primary_key == "article_id"

    def test_relation_field_needs_column(self):
        with pytest.raises(click.BadParameter):
            parse_fields("articles", (), ("tags",), ())


@pytest.mark.unit
class TestCli:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_search(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "search" in result.output


@pytest.mark.unit
class TestCompileCommand:
    def test_compile(self, runner):
        result = runner.invoke(cli, ["search", "compile", "quick fox"])

        assert result.exit_code == 0
        assert result.output.strip() == "to_tsquery('english', 'quick&fox:*')"

    def test_compile_raw(self, runner):
        result = runner.invoke(cli, ["search", "compile", "rock & roll", "--raw", "-o", "or"])

        assert result.exit_code == 0
        assert result.output.strip() == "rock|\\&|roll:*"

    def test_compile_uses_configured_defaults(self, runner, monkeypatch):
        monkeypatch.setenv("TSEARCH_DICTIONARY", "simple")

        result = runner.invoke(cli, ["search", "compile", "fox"])

        assert result.output.strip() == "to_tsquery('simple', 'fox:*')"

    def test_compile_blank_text(self, runner):
        result = runner.invoke(cli, ["search", "compile", "  "])

        assert result.exit_code == 0
        assert "No searchable words" in result.output
        assert "to_tsquery" not in result.output

    def test_compile_text_without_words(self, runner):
        result = runner.invoke(cli, ["search", "compile", "''", "--raw"])

        assert result.exit_code == 0
        assert "No searchable words" in result.output
        assert ":*" not in result.output

    def test_compile_unknown_operator(self, runner):
        result = runner.invoke(cli, ["search", "compile", "fox", "-o", "xor"])

        assert result.exit_code == 1
        assert "TSearch operator not found" in result.output


@pytest.mark.unit
class TestVectorCommand:
    def test_vector(self, runner):
        result = runner.invoke(
            cli,
            ["search", "vector", "-t", "articles", "-f", "title=A", "-f", "body=B"],
        )

        assert result.exit_code == 0
        assert result.output.strip() == f"{TITLE} || {BODY}"

    def test_vector_relation_table(self, runner):
        result = runner.invoke(
            cli,
            ["search", "vector", "-t", "articles", "-r", "author.name=D", "--relation", "author=users"],
        )

        assert result.exit_code == 0
        assert "coalesce(users.name::text,'')), 'D')" in result.output

    def test_vector_invalid_weight(self, runner):
        result = runner.invoke(cli, ["search", "vector", "-t", "articles", "-f", "title=Z"])

        assert result.exit_code == 1
        assert "Invalid TSearch weight: Z for articles" in result.output

    def test_vector_without_fields(self, runner):
        result = runner.invoke(cli, ["search", "vector", "-t", "articles"])

        assert result.exit_code == 1
        assert "At least one searchable field is required" in result.output

    def test_vector_empty_column(self, runner):
        result = runner.invoke(cli, ["search", "vector", "-t", "articles", "-f", "=A"])

        assert result.exit_code == 1
        assert "Empty column name not allowed" in result.output

    def test_vector_quotes_column(self, runner):
        result = runner.invoke(cli, ["search", "vector", "-t", "articles", "-f", "first name=B"])

        assert result.exit_code == 0
        assert "coalesce(articles.\"first name\"::text,'')), 'B')" in result.output

    def test_vector_bad_relation_field(self, runner):
        result = runner.invoke(cli, ["search", "vector", "-t", "articles", "-r", "tags"])

        assert result.exit_code == 2
        assert "RELATION.COLUMN" in result.output


@pytest.mark.unit
class TestPlanCommand:
    def test_simple_plan(self, runner):
        result = runner.invoke(
            cli,
            ["search", "plan", "quick fox", "-t", "articles", "-f", "title=A", "-f", "body=B"],
        )

        assert result.exit_code == 0
        assert 'Search Plan: "quick fox"' in result.output
        assert "Mode: simple" in result.output
        assert f"{TITLE} || {BODY} @@ to_tsquery('english', 'quick&fox:*')" in result.output
        assert "GROUP BY" not in result.output
        assert result.output.rstrip().endswith("articles.id ASC")

    def test_aggregate_plan(self, runner):
        result = runner.invoke(
            cli,
            ["search", "plan", "fox", "-t", "articles", "-f", "title", "-r", "tags.name=C", "-k", "article_id"],
        )

        assert result.exit_code == 0
        assert "Mode: aggregate" in result.output
        assert "GROUP BY" in result.output
        assert "SUM(ts_rank_cd(" in result.output
        assert result.output.rstrip().endswith("articles.article_id ASC")

    def test_blank_text(self, runner):
        result = runner.invoke(cli, ["search", "plan", "  ", "-t", "articles", "-f", "title"])

        assert result.exit_code == 0
        assert "No searchable words" in result.output
        assert "WHERE" not in result.output

    def test_unknown_operator(self, runner):
        result = runner.invoke(
            cli,
            ["search", "plan", "fox", "-t", "articles", "-f", "title", "-o", "xor"],
        )

        assert result.exit_code == 1
        assert "TSearch operator not found" in result.output
