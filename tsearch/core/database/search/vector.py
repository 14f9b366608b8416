"""Weighted search vector assembly.

Builds one tsvector expression out of several text columns, possibly
spread over joined relations:

    setweight(to_tsvector('english', coalesce(articles.title::text,'')), 'A') ||
    setweight(to_tsvector('english', coalesce(articles.body::text,'')), 'B') ||
    setweight(to_tsvector('english', coalesce(tags.name::text,'')), 'A')

Fields are emitted in declaration order so the generated SQL is stable
across calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tsearch.core.database.exceptions import EmptyFieldSetError
from tsearch.core.database.search.dialect import SearchDialect, get_dialect
from tsearch.core.database.search.expressions import VECTOR_CONCAT, setweight, to_tsvector
from tsearch.core.database.search.types import (
    DEFAULT_DICTIONARY,
    FieldReference,
    SearchEntity,
    SearchVectorExpression,
    WeightTable,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


class WeightedVectorAssembler:
    """Combine field references into one weighted search vector."""

    def __init__(self, dialect: SearchDialect | None = None) -> None:
        self.dialect = dialect or get_dialect()

    def column_locator(self, field: FieldReference, entity: SearchEntity) -> str:
        """Table-qualified reference to a field's column.

        Pre-qualified primary-entity columns (``join_table.column``) are
        used verbatim, which allows referencing a table that is already
        joined without joining it a second time.
        """
        if field.is_prequalified:
            return field.column
        if field.relation is None:
            return self.dialect.qualify(entity.table, field.column, entity.schema)
        return self.dialect.qualify(entity.relation_table(field.relation), field.column)

    def assemble(
        self,
        fields: Sequence[FieldReference],
        weights: WeightTable | Mapping[str, Any] | None,
        entity: SearchEntity,
        dictionary: str = DEFAULT_DICTIONARY,
    ) -> SearchVectorExpression:
        """Build the weighted vector for a list of fields.

        Args:
            fields: Searchable fields in declaration order
            weights: Weight lookup; missing fields get weight A
            entity: Searched entity, used to qualify columns
            dictionary: PostgreSQL text search configuration

        Returns:
            Vector expression concatenating every field with ``||``

        Raises:
            EmptyFieldSetError: If fields is empty
            InvalidWeightError: If a configured weight is not A-D
        """
        if not fields:
            raise EmptyFieldSetError(entity.name)

        table = WeightTable.coerce(weights)
        seen: set[FieldReference] = set()
        ordered: list[FieldReference] = []
        parts: list[str] = []

        for field in fields:
            # Repeated declarations contribute once, at their first position
            if field in seen:
                continue
            seen.add(field)
            ordered.append(field)

            weight = table.resolve(field, entity=entity.name)
            vector = to_tsvector(
                self.column_locator(field, entity),
                dictionary,
                dialect=self.dialect,
            )
            parts.append(setweight(vector, weight, dialect=self.dialect))

        return SearchVectorExpression(
            sql=VECTOR_CONCAT.join(parts),
            fields=tuple(ordered),
            dictionary=dictionary,
        )


__all__ = ["WeightedVectorAssembler"]
