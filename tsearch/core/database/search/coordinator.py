"""Search invocation coordinator.

Ties the query compiler, vector assembler and ranking strategy together
for one search call:

    text --QueryTextCompiler------> CompiledQueryTerm --+
    fields --WeightedVectorAssembler--> vector ---------+--> RankAndGroupingStrategy --> SearchPlan

Usage:
    coordinator = SearchInvocationCoordinator(
        SearchEntity(name="Article", table="articles"),
        [FieldReference("title"), FieldReference("body")],
        weights={"title": "A", "body": "B"},
    )
    plan = coordinator.plan("quick fox")
    plan.predicate  # '<vector> @@ to_tsquery(...)'

The coordinator performs no I/O; the plan is handed to a statement filter
(see tsearch.core.database.search.filters) which applies it to a query.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tsearch.core.database.exceptions import EmptyFieldSetError
from tsearch.core.database.search.querytext import QueryTextCompiler
from tsearch.core.database.search.ranking import RankAndGroupingStrategy
from tsearch.core.database.search.types import FieldReference, SearchEntity, WeightTable
from tsearch.core.database.search.vector import WeightedVectorAssembler
from tsearch.core.settings import get_search_settings

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from tsearch.core.database.search.dialect import SearchDialect
    from tsearch.core.database.search.types import SearchPlan
    from tsearch.core.settings import TSearchSettings

logger = logging.getLogger(__name__)


class SearchInvocationCoordinator:
    """Produce search plans for one entity and field configuration.

    Args:
        entity: Searched entity metadata
        fields: Searchable fields in declaration order
        weights: Weight table or nested weight mapping
        operator: Operator name; the configured default when None
        dictionary: Text search configuration; the configured default when None
        dialect: Quoting dialect (PostgreSQL when omitted)
        settings: Search settings (cached settings when omitted)

    Raises:
        EmptyFieldSetError: If no fields are given
    """

    def __init__(
        self,
        entity: SearchEntity,
        fields: Sequence[FieldReference],
        weights: WeightTable | Mapping[str, Any] | None = None,
        *,
        operator: Any = None,
        dictionary: str | None = None,
        dialect: SearchDialect | None = None,
        settings: TSearchSettings | None = None,
    ) -> None:
        if not fields:
            raise EmptyFieldSetError(entity.name)

        self.settings = settings or get_search_settings()
        self.entity = entity
        self.fields: tuple[FieldReference, ...] = tuple(fields)
        self.same_entity_fields = tuple(f for f in self.fields if f.relation is None)
        self.relation_fields = tuple(f for f in self.fields if f.relation is not None)
        self.weights = WeightTable.coerce(weights)
        self.operator = operator if operator is not None else self.settings.operator
        self.dictionary = dictionary or self.settings.dictionary

        self.compiler = QueryTextCompiler(dialect)
        self.assembler = WeightedVectorAssembler(dialect)
        self.strategy = RankAndGroupingStrategy(dialect)

    @property
    def joined_relations_present(self) -> bool:
        return bool(self.relation_fields)

    @property
    def relations(self) -> tuple[str, ...]:
        """Named relations to join, in order of first declaration."""
        names: list[str] = []
        for field in self.relation_fields:
            if field.relation not in names:
                names.append(field.relation)  # type: ignore[arg-type]
        return tuple(names)

    def plan(self, text: str | None) -> SearchPlan | None:
        """Plan one search.

        Args:
            text: User search text

        Returns:
            SearchPlan, or None when the text is blank or contains no
            searchable words (the host should leave its query unfiltered)

        Raises:
            UnknownOperatorError: If the configured operator is not and/or/not
            InvalidWeightError: If a configured weight is not A-D
        """
        if text is None or not text.strip():
            return None

        query = self.compiler.compile(text, self.operator, self.dictionary)
        if query.is_empty:
            return None

        vector = self.assembler.assemble(self.fields, self.weights, self.entity, self.dictionary)
        plan = self.strategy.plan(
            vector,
            query,
            joined_relations_present=self.joined_relations_present,
            primary_key=self.entity.primary_key,
            table=self.entity.table,
            schema=self.entity.schema,
        )

        if self.settings.log_compiled_queries:
            logger.debug(
                "Planned %s search on %s: %s",
                plan.mode,
                self.entity.name,
                plan.predicate,
                extra={"entity": self.entity.name, "mode": str(plan.mode)},
            )
        return plan


def plan_search(
    text: str | None,
    entity: SearchEntity,
    fields: Sequence[FieldReference],
    weights: WeightTable | Mapping[str, Any] | None = None,
    *,
    operator: Any = None,
    dictionary: str | None = None,
) -> SearchPlan | None:
    """One-shot helper around SearchInvocationCoordinator.plan."""
    coordinator = SearchInvocationCoordinator(
        entity,
        fields,
        weights,
        operator=operator,
        dictionary=dictionary,
    )
    return coordinator.plan(text)


__all__ = ["SearchInvocationCoordinator", "plan_search"]
