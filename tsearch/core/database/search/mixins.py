"""Full-text search capability for SQLAlchemy models.

Any class exposing ``search_entity()`` satisfies the Searchable protocol.
SearchableMixin implements it for declarative models by reading the
mapper, and adds class-level search configuration:

    class Article(Base, SearchableMixin):
        __tablename__ = "articles"
        __tsearch_fields__ = ["title", "body", {"tags": "name"}]
        __tsearch_weights__ = {"title": "A", "body": "B", "tags": {"name": "C"}}
        __tsearch_dictionary__ = "english"

        id: Mapped[int] = mapped_column(primary_key=True)
        title: Mapped[str] = mapped_column(String(255))
        body: Mapped[str] = mapped_column(Text)
        tags: Mapped[list[Tag]] = relationship(secondary=article_tags)

    stmt = Article.tsearch("python tutorial")
    results = await session.scalars(stmt)

Weight classes (A, B, C, D) affect ranking:
- A: Highest weight (e.g., title); also used for fields without a weight
- B: High weight (e.g., subtitle)
- C: Normal weight (e.g., body)
- D: Low weight (e.g., metadata)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select

from tsearch.core.database.search.filters import TSearchScope
from tsearch.core.database.search.types import SearchEntity

if TYPE_CHECKING:
    from sqlalchemy import Select, Table


@runtime_checkable
class Searchable(Protocol):
    """Protocol for entities that can be searched.

    Implementations describe their table, primary key and joinable
    relations; the search core never looks them up elsewhere.
    """

    @classmethod
    def search_entity(cls) -> SearchEntity:
        """Table metadata of the entity."""
        ...


def _table_name(table: Table) -> str:
    if table.schema:
        return f"{table.schema}.{table.name}"
    return table.name


class SearchableMixin:
    """Mixin that adds full-text search to a declarative model.

    Optional configuration:
    - __tsearch_fields__: Field declarations searched by tsearch()
    - __tsearch_weights__: Nested mapping of fields to weight classes
    - __tsearch_operator__: and/or/not, the configured default when None
    - __tsearch_dictionary__: Text search configuration, the configured
      default when None

    Only single-column primary keys are supported; the first primary key
    column is used for grouping and ordering.
    """

    __tsearch_fields__: ClassVar[Any] = ()
    __tsearch_weights__: ClassVar[Mapping[str, Any]] = {}
    __tsearch_operator__: ClassVar[str | None] = None
    __tsearch_dictionary__: ClassVar[str | None] = None

    @classmethod
    def search_entity(cls) -> SearchEntity:
        """Build search metadata from the SQLAlchemy mapper."""
        mapper = sa_inspect(cls)
        table = mapper.local_table
        return SearchEntity(
            name=cls.__name__,
            table=table.name,
            primary_key=mapper.primary_key[0].name,
            schema=table.schema,
            relation_tables={
                relationship.key: _table_name(relationship.mapper.local_table)
                for relationship in mapper.relationships
            },
        )

    @classmethod
    def tsearch_scope(
        cls,
        fields: Any = None,
        weights: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> TSearchScope:
        """Search scope over the class-level or the given configuration.

        Args:
            fields: Field declarations, __tsearch_fields__ when None
            weights: Weight mapping, __tsearch_weights__ when None
            **options: operator / dictionary overrides

        Raises:
            EmptyFieldSetError: If no fields are declared
        """
        return TSearchScope(
            cls,
            fields if fields is not None else cls.__tsearch_fields__,
            weights if weights is not None else cls.__tsearch_weights__,
            operator=options.get("operator", cls.__tsearch_operator__),
            dictionary=options.get("dictionary", cls.__tsearch_dictionary__),
        )

    @classmethod
    def tsearch(cls, text: str | None, statement: Select[Any] | None = None) -> Select[Any]:
        """Filter and rank a select of this model by search text.

        Args:
            text: User search text; blank text returns the statement unchanged
            statement: Statement to filter, ``select(cls)`` when omitted
        """
        if statement is None:
            statement = select(cls)
        return cls.tsearch_scope()(text).apply(statement)


__all__ = ["Searchable", "SearchableMixin"]
