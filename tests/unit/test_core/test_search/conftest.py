"""Declarative models for search filter tests."""

import pytest
from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from tsearch.core.database.search import SearchableMixin


class Base(DeclarativeBase):
    pass


article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", ForeignKey("articles.id"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id"), primary_key=True),
)


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(64))


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(128))


class Article(Base, SearchableMixin):
    __tablename__ = "articles"
    __tsearch_fields__ = ["title", "body"]
    __tsearch_weights__ = {"title": "A", "body": "B", "tags": {"name": "C"}}

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    body: Mapped[str] = mapped_column(Text)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"))

    tags: Mapped[list[Tag]] = relationship(secondary=article_tags)
    author: Mapped[User] = relationship()


class Note(Base, SearchableMixin):
    """Searchable model in a schema, without class-level fields."""

    __tablename__ = "notes"
    __table_args__ = {"schema": "archive"}

    note_id: Mapped[int] = mapped_column(primary_key=True)
    content: Mapped[str] = mapped_column(Text)


class Recipe(Base, SearchableMixin):
    """Searchable model whose names need quoting."""

    __tablename__ = "receitas"
    __tsearch_fields__ = ["título"]

    codigo: Mapped[int] = mapped_column("código", primary_key=True)
    titulo: Mapped[str] = mapped_column("título", Text)


def _render(statement) -> str:
    sql = str(statement.compile(dialect=postgresql.dialect()))
    return " ".join(sql.split())


@pytest.fixture
def article_model() -> type[Article]:
    return Article


@pytest.fixture
def render():
    """Render a statement as PostgreSQL SQL on one line."""
    return _render


@pytest.fixture
def note_model() -> type[Note]:
    return Note


@pytest.fixture
def recipe_model() -> type[Recipe]:
    return Recipe
