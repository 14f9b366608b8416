"""Full-text search CLI commands.

Commands for inspecting the SQL generated for a search:
- search compile: Compile search text into a to_tsquery expression
- search vector: Build the weighted search vector for a set of fields
- search plan: Show predicate, ordering and grouping of a full search
"""

import sys

import click

from tsearch.cli.utils import error, fragment, header, info, section
from tsearch.core.database.exceptions import SearchConfigurationError
from tsearch.core.database.search import (
    FieldReference,
    QueryTextCompiler,
    SearchEntity,
    SearchInvocationCoordinator,
    WeightedVectorAssembler,
)
from tsearch.core.database.validation import IdentifierValidationError
from tsearch.core.settings import get_search_settings

NO_SEARCHABLE_WORDS = "No searchable words, the query is left unfiltered"

_field_options = [
    click.option("--table", "-t", required=True, help="Table of the searched entity"),
    click.option(
        "--field",
        "-f",
        "fields",
        multiple=True,
        help="Searchable column, optionally weighted: COLUMN[=WEIGHT]",
    ),
    click.option(
        "--relation-field",
        "-r",
        "relation_fields",
        multiple=True,
        help="Column of a joined relation: RELATION.COLUMN[=WEIGHT]",
    ),
    click.option(
        "--relation",
        "relations",
        multiple=True,
        help="Table of a joined relation: RELATION=TABLE (default: relation name)",
    ),
    click.option("--dictionary", "-d", default=None, help="Text search configuration"),
]


def field_options(command):
    """Attach the shared field declaration options to a command."""
    for option in reversed(_field_options):
        command = option(command)
    return command


def parse_fields(
    table: str,
    fields: tuple[str, ...],
    relation_fields: tuple[str, ...],
    relations: tuple[str, ...],
    primary_key: str = "id",
) -> tuple[SearchEntity, list[FieldReference], dict]:
    """Turn CLI declarations into an entity, field list and weight mapping."""
    references: list[FieldReference] = []
    weights: dict = {}

    for declaration in fields:
        column, _, weight = declaration.partition("=")
        references.append(FieldReference(column))
        if weight:
            weights[column] = weight

    relation_tables: dict[str, str] = {}
    for declaration in relations:
        relation, _, relation_table = declaration.partition("=")
        relation_tables[relation] = relation_table or relation

    for declaration in relation_fields:
        target, _, weight = declaration.partition("=")
        relation, _, column = target.partition(".")
        if not column:
            msg = f"Relation field must be RELATION.COLUMN, got {target!r}"
            raise click.BadParameter(msg, param_hint="--relation-field")
        references.append(FieldReference(column, relation))
        relation_tables.setdefault(relation, relation)
        if weight:
            weights.setdefault(relation, {})[column] = weight

    entity = SearchEntity(
        name=table,
        table=table,
        primary_key=primary_key,
        relation_tables=relation_tables,
    )
    return entity, references, weights


@click.group(name="search")
def search() -> None:
    """Full-text search commands.

    Inspect the PostgreSQL full-text search SQL generated for search
    text and field configurations.
    """


@search.command(name="compile")
@click.argument("text")
@click.option("--operator", "-o", default=None, help="Operator joining words (and|or|not)")
@click.option("--dictionary", "-d", default=None, help="Text search configuration")
@click.option("--raw", is_flag=True, help="Print the escaped query text before quoting")
def compile_command(text: str, operator: str | None, dictionary: str | None, raw: bool) -> None:
    """Compile search text into a to_tsquery expression."""
    settings = get_search_settings()
    try:
        term = QueryTextCompiler().compile(
            text,
            operator if operator is not None else settings.operator,
            dictionary or settings.dictionary,
        )
    except SearchConfigurationError as e:
        error(str(e))
        sys.exit(1)

    if term.is_empty:
        info(NO_SEARCHABLE_WORDS)
        return

    click.echo(term.querytext if raw else term.sql)


@search.command()
@field_options
def vector(
    table: str,
    fields: tuple[str, ...],
    relation_fields: tuple[str, ...],
    relations: tuple[str, ...],
    dictionary: str | None,
) -> None:
    """Build the weighted search vector for a set of fields."""
    settings = get_search_settings()
    try:
        entity, references, weights = parse_fields(table, fields, relation_fields, relations)
        expression = WeightedVectorAssembler().assemble(
            references,
            weights,
            entity,
            dictionary or settings.dictionary,
        )
    except (SearchConfigurationError, IdentifierValidationError) as e:
        error(str(e))
        sys.exit(1)

    click.echo(expression.sql)


@search.command()
@click.argument("text")
@field_options
@click.option("--primary-key", "-k", default="id", help="Primary key column")
@click.option("--operator", "-o", default=None, help="Operator joining words (and|or|not)")
def plan(
    text: str,
    table: str,
    fields: tuple[str, ...],
    relation_fields: tuple[str, ...],
    relations: tuple[str, ...],
    dictionary: str | None,
    primary_key: str,
    operator: str | None,
) -> None:
    """Show the SQL fragments of a full search."""
    try:
        entity, references, weights = parse_fields(
            table,
            fields,
            relation_fields,
            relations,
            primary_key=primary_key,
        )
        search_plan = SearchInvocationCoordinator(
            entity,
            references,
            weights,
            operator=operator,
            dictionary=dictionary,
        ).plan(text)
    except (SearchConfigurationError, IdentifierValidationError) as e:
        error(str(e))
        sys.exit(1)

    header(f'Search Plan: "{text}"')
    if search_plan is None:
        info(NO_SEARCHABLE_WORDS)
        return

    info(f"Mode: {search_plan.mode}")
    section("WHERE")
    fragment(search_plan.predicate)
    if search_plan.group_by is not None:
        section("GROUP BY")
        fragment(search_plan.group_by)
    section("ORDER BY")
    fragment(",\n".join(search_plan.order))
