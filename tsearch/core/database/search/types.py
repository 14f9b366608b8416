"""Value types for full-text search compilation.

This module provides:
- WeightCode: The four PostgreSQL weight classes (A, B, C, D)
- SearchOperator: Operators used to join query terms (and, or, not)
- FieldReference: One searchable column and its owning relation
- WeightTable: Two-tier weight lookup with an explicit default
- SearchEntity: Table metadata of the searched entity
- CompiledQueryTerm, SearchVectorExpression, SearchPlan: compiled output

Everything here is immutable once constructed. The constant tables are
read-only mappings built at import time.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from tsearch.core.database.exceptions import (
    InvalidWeightError,
    SearchConfigurationError,
    UnknownOperatorError,
)
from tsearch.core.database.validation import (
    validate_qualified_identifier,
    validate_quoted_identifier,
)

DEFAULT_DICTIONARY = "english"
PREFIX_MATCH = ":*"

WEIGHT_PATTERN = re.compile(r"[A-Da-d]")


class WeightCode(StrEnum):
    """PostgreSQL weight class of a vector.

    A is the highest weight (e.g. title), D the lowest (e.g. metadata).
    """

    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @classmethod
    def parse(
        cls,
        value: Any,
        *,
        field: str | None = None,
        entity: str | None = None,
    ) -> WeightCode:
        """Validate and canonicalize a weight code.

        Args:
            value: Weight as given by the caller ("a", "B", WeightCode.C, ...)
            field: Column the weight belongs to, for error messages
            entity: Searched entity name, for error messages

        Returns:
            Uppercase WeightCode

        Raises:
            InvalidWeightError: If value is not one of A, B, C, D (any case)
        """
        if isinstance(value, WeightCode):
            return value
        if not isinstance(value, str) or not WEIGHT_PATTERN.fullmatch(value):
            raise InvalidWeightError(value, field=field, entity=entity)
        return cls(value.upper())


# Weight applied to any field missing from the weight table
DEFAULT_WEIGHT = WeightCode.A


class SearchOperator(StrEnum):
    """Operator joining the words of a search query."""

    AND = "and"
    OR = "or"
    NOT = "not"

    @property
    def symbol(self) -> str:
        """tsquery symbol for this operator."""
        return OPERATOR_DICTIONARY[self]

    @classmethod
    def parse(cls, value: Any) -> SearchOperator:
        """Resolve an operator name case-insensitively.

        ``None`` resolves to DEFAULT_OPERATOR.

        Raises:
            UnknownOperatorError: If the name is not and/or/not
        """
        if value is None:
            return DEFAULT_OPERATOR
        if isinstance(value, SearchOperator):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnknownOperatorError(value) from None


OPERATOR_DICTIONARY: Mapping[SearchOperator, str] = MappingProxyType(
    {
        SearchOperator.AND: "&",
        SearchOperator.OR: "|",
        SearchOperator.NOT: "!",
    },
)
DEFAULT_OPERATOR = SearchOperator.AND


@dataclass(frozen=True, slots=True)
class FieldReference:
    """One searchable column.

    Attributes:
        column: Column name. For the primary entity this may be a
            pre-qualified reference such as ``taggings.label`` which is
            used verbatim.
        relation: Name of the joined relation owning the column, or None
            for the primary entity itself.
    """

    column: str
    relation: str | None = None

    def __post_init__(self) -> None:
        if self.relation is None and "." in self.column:
            validate_qualified_identifier(self.column)
        else:
            validate_quoted_identifier(self.column, identifier_type="column")
        if self.relation is not None:
            validate_quoted_identifier(self.relation, identifier_type="relation")

    @property
    def is_primary(self) -> bool:
        """Whether the column belongs to the searched entity itself."""
        return self.relation is None

    @property
    def is_prequalified(self) -> bool:
        """Whether the column already names its table."""
        return self.relation is None and "." in self.column

    @property
    def label(self) -> str:
        """Human-readable name used in error messages."""
        if self.relation is None:
            return self.column
        return f"{self.relation}.{self.column}"


class WeightTable:
    """Read-only weight lookup for field references.

    Weights are given as a nested mapping: primary-entity columns map
    directly to a weight, named relations map to a mapping of their own
    columns::

        WeightTable({"title": "A", "body": "B", "tags": {"name": "C"}})

    FieldReference keys are accepted too and land in the same tiers::

        WeightTable({FieldReference("body"): "B", FieldReference("name", "tags"): "C"})

    Any field without an entry resolves to DEFAULT_WEIGHT.
    """

    __slots__ = ("_weights",)

    def __init__(self, weights: Mapping[str | FieldReference, Any] | None = None) -> None:
        tiers: dict[str, Any] = {}
        for key, value in (weights or {}).items():
            if isinstance(key, FieldReference):
                if key.relation is None:
                    tiers[key.column] = value
                else:
                    _relation_tier(tiers, key.relation, key.label)[key.column] = value
            elif isinstance(key, str):
                if isinstance(value, Mapping):
                    _relation_tier(tiers, key, key).update(value)
                else:
                    tiers[key] = value
            else:
                raise InvalidWeightError(value, field=repr(key))
        self._weights: Mapping[str, Any] = MappingProxyType(
            {
                key: MappingProxyType(value) if isinstance(value, dict) else value
                for key, value in tiers.items()
            },
        )

    @classmethod
    def coerce(cls, weights: WeightTable | Mapping[str | FieldReference, Any] | None) -> WeightTable:
        """Return weights as a WeightTable, wrapping plain mappings."""
        if isinstance(weights, WeightTable):
            return weights
        return cls(weights)

    def resolve(self, field: FieldReference, *, entity: str | None = None) -> WeightCode:
        """Resolve the weight of a field.

        Primary-entity columns are looked up by column name, relation
        columns by relation name and then column name.

        Raises:
            InvalidWeightError: If the configured weight is not A-D
        """
        if field.relation is None:
            weight = self._weights.get(field.column, DEFAULT_WEIGHT)
        else:
            relation_weights = self._weights.get(field.relation, {})
            if not isinstance(relation_weights, Mapping):
                raise InvalidWeightError(relation_weights, field=field.label, entity=entity)
            weight = relation_weights.get(field.column, DEFAULT_WEIGHT)
        return WeightCode.parse(weight, field=field.label, entity=entity)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict copy of the table."""
        return {
            key: dict(value) if isinstance(value, Mapping) else value
            for key, value in self._weights.items()
        }

    def __repr__(self) -> str:
        return f"WeightTable({self.to_dict()!r})"


def _relation_tier(tiers: dict[str, Any], relation: str, label: str) -> dict[str, Any]:
    tier = tiers.setdefault(relation, {})
    if not isinstance(tier, dict):
        raise InvalidWeightError(tier, field=label)
    return tier


@dataclass(frozen=True, slots=True)
class SearchEntity:
    """Table metadata for the searched entity.

    Attributes:
        name: Entity name used in diagnostics (usually the model class name)
        table: Table name of the entity
        primary_key: Primary key column, used for grouping and tie-breaking
        schema: Optional schema of the table
        relation_tables: Table name for each named relation that can be
            joined, e.g. ``{"tags": "tags", "author": "users"}``
    """

    name: str
    table: str
    primary_key: str = "id"
    schema: str | None = None
    relation_tables: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        validate_quoted_identifier(self.table, identifier_type="table")
        validate_quoted_identifier(self.primary_key, identifier_type="column")
        if self.schema is not None:
            validate_quoted_identifier(self.schema, identifier_type="schema")
        object.__setattr__(self, "relation_tables", MappingProxyType(dict(self.relation_tables)))

    def relation_table(self, relation: str) -> str:
        """Table name of a named relation.

        Raises:
            SearchConfigurationError: If the entity has no such relation
        """
        try:
            return self.relation_tables[relation]
        except KeyError:
            raise SearchConfigurationError(
                f"{self.name} has no relation named {relation!r}",
                details={"entity": self.name, "relation": relation},
            ) from None


@dataclass(frozen=True, slots=True)
class CompiledQueryTerm:
    """Compiled tsquery for one search invocation.

    Attributes:
        querytext: Escaped, operator-joined text including the ``:*``
            suffix, before literal quoting
        dictionary: Text search configuration
        sql: Final ``to_tsquery(...)`` expression
    """

    querytext: str
    dictionary: str
    sql: str

    @property
    def is_empty(self) -> bool:
        """Whether no search words survived normalization."""
        return self.querytext == PREFIX_MATCH

    def __str__(self) -> str:
        return self.sql


@dataclass(frozen=True, slots=True)
class SearchVectorExpression:
    """Weighted, concatenated tsvector over all searchable fields."""

    sql: str
    fields: tuple[FieldReference, ...]
    dictionary: str

    def __str__(self) -> str:
        return self.sql


class RankMode(StrEnum):
    """Ranking strategy of a search plan."""

    SIMPLE = "simple"
    AGGREGATE = "aggregate"


@dataclass(frozen=True, slots=True)
class SearchPlan:
    """SQL fragments handed to the host query builder.

    Attributes:
        predicate: ``<vector> @@ <query>`` match condition
        order: Order expressions, relevance first then primary key ascending
        group_by: Grouping key when joined relations may duplicate rows
        mode: Ranking strategy that produced the plan
        vector: Vector expression used in the fragments
        query: Query term used in the fragments
    """

    predicate: str
    order: tuple[str, ...]
    group_by: str | None
    mode: RankMode
    vector: SearchVectorExpression
    query: CompiledQueryTerm

    @property
    def requires_grouping(self) -> bool:
        return self.group_by is not None


__all__ = [
    "DEFAULT_DICTIONARY",
    "DEFAULT_OPERATOR",
    "DEFAULT_WEIGHT",
    "OPERATOR_DICTIONARY",
    "PREFIX_MATCH",
    "CompiledQueryTerm",
    "FieldReference",
    "RankMode",
    "SearchEntity",
    "SearchOperator",
    "SearchPlan",
    "SearchVectorExpression",
    "WeightCode",
    "WeightTable",
]
