"""Full-text search statement filters.

Applies a SearchPlan to a SQLAlchemy select:
- LEFT OUTER JOIN every searched relation once
- WHERE <vector> @@ <query>
- GROUP BY the primary key when relations are joined
- ORDER BY relevance, then primary key

Fields are declared as column names for the model itself and as
``{relation: column}`` / ``{relation: [columns]}`` mappings for related
models:

    from tsearch.core.database.search import tsearch_scope

    search_articles = tsearch_scope(
        Article,
        fields=["title", "body", {"tags": "name"}],
        weights={"title": "A", "body": "B", "tags": {"name": "C"}},
        operator="and",
    )

    stmt = search_articles("python tutorial").apply(select(Article))
    results = await session.scalars(stmt)

Blank search text leaves the statement unchanged.

Generated fragments are embedded with literal_column rather than text():
text() would parse the escaped ``\\:`` sequences in search text as bind
parameter escapes and strip their backslash.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import Boolean, Select, literal_column

from tsearch.core.database.exceptions import SearchConfigurationError
from tsearch.core.database.filters import StatementFilter
from tsearch.core.database.search.coordinator import SearchInvocationCoordinator
from tsearch.core.database.search.expressions import ts_headline
from tsearch.core.database.search.types import FieldReference

if TYPE_CHECKING:
    from tsearch.core.database.search.dialect import SearchDialect
    from tsearch.core.database.search.mixins import Searchable
    from tsearch.core.database.search.types import SearchPlan, WeightTable
    from tsearch.core.settings import TSearchSettings

logger = logging.getLogger(__name__)


def normalize_fields(fields: Any) -> tuple[FieldReference, ...]:
    """Flatten field declarations into FieldReferences, keeping order.

    Accepts column names, FieldReference instances, ``{relation: column}``
    and ``{relation: [columns]}`` mappings, and (nested) lists of these.
    """
    if isinstance(fields, (str, FieldReference, Mapping)):
        fields = [fields]

    references: list[FieldReference] = []
    for declaration in fields:
        if isinstance(declaration, FieldReference):
            references.append(declaration)
        elif isinstance(declaration, Mapping):
            for relation, columns in declaration.items():
                if isinstance(columns, str):
                    columns = [columns]
                references.extend(FieldReference(str(column), str(relation)) for column in columns)
        elif isinstance(declaration, Iterable) and not isinstance(declaration, str):
            references.extend(normalize_fields(list(declaration)))
        else:
            references.append(FieldReference(str(declaration)))
    return tuple(references)


class TSearchScope:
    """Reusable search configuration for one model.

    Field declarations are normalized and partitioned once; calling the
    scope with search text returns a TSearchFilter.

    Args:
        model: Model class implementing Searchable
        fields: Field declarations (see normalize_fields)
        weights: Nested weight mapping or WeightTable
        operator: and/or/not, configured default when None
        dictionary: Text search configuration, configured default when None
        dialect: Quoting dialect
        settings: Search settings

    Raises:
        EmptyFieldSetError: If no fields are declared
    """

    def __init__(
        self,
        model: type[Searchable],
        fields: Any,
        weights: WeightTable | Mapping[str, Any] | None = None,
        *,
        operator: Any = None,
        dictionary: str | None = None,
        dialect: SearchDialect | None = None,
        settings: TSearchSettings | None = None,
    ) -> None:
        self.model = model
        self.coordinator = SearchInvocationCoordinator(
            model.search_entity(),
            normalize_fields(fields),
            weights,
            operator=operator,
            dictionary=dictionary,
            dialect=dialect,
            settings=settings,
        )

    @property
    def fields(self) -> tuple[FieldReference, ...]:
        return self.coordinator.fields

    def plan(self, text: str | None) -> SearchPlan | None:
        """Plan a search, logging configuration errors before raising them."""
        try:
            return self.coordinator.plan(text)
        except SearchConfigurationError as e:
            logger.warning(
                "Full-text search misconfigured for %s: %s",
                self.coordinator.entity.name,
                e,
                extra={"entity": self.coordinator.entity.name},
            )
            raise

    def __call__(self, text: str | None) -> TSearchFilter:
        return TSearchFilter(self, text)

    def apply(self, statement: Select[Any], text: str | None) -> Select[Any]:
        return TSearchFilter(self, text).apply(statement)


class TSearchFilter(StatementFilter):
    """Full-text search filter with relevance ranking.

    Example:
        stmt = TSearchFilter(scope, "python tutorial").apply(select(Article))

    Attributes:
        scope: Search configuration
        text: User search text
    """

    def __init__(self, scope: TSearchScope, text: str | None) -> None:
        self.scope = scope
        self.text = text

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply search filter, grouping and ranking to statement.

        If the text is empty or only whitespace, returns the statement
        unchanged.
        """
        plan = self.scope.plan(self.text)
        if plan is None:
            return statement

        for relation in self.scope.coordinator.relations:
            statement = statement.outerjoin(getattr(self.scope.model, relation))

        statement = statement.where(literal_column(plan.predicate, Boolean))

        # Joined rows duplicate the entity, collapse them on the primary key
        if plan.group_by is not None:
            statement = statement.group_by(literal_column(plan.group_by))

        return statement.order_by(*(literal_column(expression) for expression in plan.order))

    def with_headline(
        self,
        statement: Select[Any],
        column: str,
        column_name: str = "headline",
    ) -> Select[Any]:
        """Add a highlighted excerpt of a column to the query.

        Without search text the plain column value is returned under the
        same name.

        Args:
            statement: SQLAlchemy select statement
            column: Column of the searched model to excerpt
            column_name: Name for the headline column

        Returns:
            Statement with headline column added
        """
        coordinator = self.scope.coordinator
        locator = coordinator.assembler.column_locator(FieldReference(column), coordinator.entity)

        plan = self.scope.plan(self.text)
        if plan is None:
            return statement.add_columns(literal_column(locator).label(column_name))

        settings = coordinator.settings
        headline = ts_headline(
            locator,
            plan.query,
            alias=None,
            start_sel=settings.headline_start_sel,
            stop_sel=settings.headline_stop_sel,
            dialect=coordinator.compiler.dialect,
        )
        return statement.add_columns(literal_column(headline).label(column_name))


def tsearch_scope(
    model: type[Searchable],
    *,
    fields: Any,
    weights: WeightTable | Mapping[str, Any] | None = None,
    operator: Any = None,
    dictionary: str | None = None,
) -> TSearchScope:
    """Create a reusable full-text search scope for a model."""
    return TSearchScope(
        model,
        fields,
        weights,
        operator=operator,
        dictionary=dictionary,
    )


__all__ = [
    "TSearchFilter",
    "TSearchScope",
    "normalize_fields",
    "tsearch_scope",
]
