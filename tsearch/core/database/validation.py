"""Identifier checks for generated search fragments.

Names that the dialect quotes (tables, columns, relations, schemas) only
need to be non-empty and free of NUL characters. Names embedded verbatim
(pre-qualified ``table.column`` references, aliases) are restricted to plain
PostgreSQL identifiers. User search text never goes through here: it is
escaped and quoted as a literal instead.

Example:
    from tsearch.core.database.validation import (
        validate_identifier,
        validate_qualified_identifier,
        validate_quoted_identifier,
    )

    validate_quoted_identifier("título", identifier_type="column")  # 'título'
    validate_identifier("title", identifier_type="column")  # 'title'
    validate_qualified_identifier("taggings.label")  # 'taggings.label'
"""

from __future__ import annotations

import re

# Unquoted PostgreSQL identifier: letter or underscore first, then
# letters, digits, underscores or dollar signs
VALID_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_$]*")
# NAMEDATALEN - 1
MAX_IDENTIFIER_LENGTH = 63

# Statement keywords rejected where a name is not quoted as an identifier
# (schemas, aliases) unless explicitly allowed
RESERVED_KEYWORDS = frozenset(
    {
        "alter",
        "create",
        "delete",
        "drop",
        "exec",
        "execute",
        "from",
        "grant",
        "insert",
        "join",
        "revoke",
        "schema",
        "select",
        "table",
        "truncate",
        "union",
        "update",
        "where",
    },
)


class IdentifierValidationError(ValueError):
    """Name that cannot be embedded in a search fragment."""


def validate_identifier(
    name: str,
    *,
    identifier_type: str = "identifier",
    allow_reserved: bool = False,
) -> str:
    """Check a single table, column, relation or alias name.

    Args:
        name: Name to check
        identifier_type: Kind of name, used in error messages
        allow_reserved: Accept statement keywords (quoted later by the dialect)

    Returns:
        The name, unchanged

    Raises:
        IdentifierValidationError: If the name is empty, too long, contains
            characters outside the identifier alphabet, or is a reserved
            keyword while allow_reserved is False

    Example:
        >>> validate_identifier("articles", identifier_type="table")
        'articles'
        >>> validate_identifier("title; --", identifier_type="column")
        Traceback (most recent call last):
        IdentifierValidationError: Invalid column name: ...
    """
    if not name:
        raise IdentifierValidationError(f"Empty {identifier_type} name not allowed")

    if len(name) > MAX_IDENTIFIER_LENGTH:
        msg = f"{identifier_type} name {name[:16]!r}... is longer than {MAX_IDENTIFIER_LENGTH} characters"
        raise IdentifierValidationError(msg)

    if VALID_IDENTIFIER.fullmatch(name) is None:
        msg = (
            f"Invalid {identifier_type} name: {name!r} must start with a letter or underscore "
            "and contain only letters, digits, underscores or dollar signs"
        )
        raise IdentifierValidationError(msg)

    if not allow_reserved and name.lower() in RESERVED_KEYWORDS:
        msg = f"{name!r} is a reserved keyword and cannot be used as {identifier_type} name"
        raise IdentifierValidationError(msg)

    return name


def validate_quoted_identifier(name: str, *, identifier_type: str = "identifier") -> str:
    """Check a name that is always quoted by the dialect before use.

    Any non-empty name without NUL characters is accepted, e.g.
    ``título``, ``first name`` or ``title-2``.

    Raises:
        IdentifierValidationError: If the name is empty or contains NUL
    """
    if not name:
        raise IdentifierValidationError(f"Empty {identifier_type} name not allowed")
    if "\x00" in name:
        raise IdentifierValidationError(f"{identifier_type} name {name!r} contains a NUL character")
    return name


def validate_qualified_identifier(
    name: str,
    *,
    identifier_type: str = "column",
) -> str:
    """Check a dotted reference such as ``tags.name``.

    Every part must be a valid identifier; the reference is returned
    unchanged so it can be embedded verbatim.

    Raises:
        IdentifierValidationError: If any part is invalid
    """
    for part in name.split("."):
        validate_identifier(part, identifier_type=identifier_type, allow_reserved=True)
    return name


__all__ = [
    "MAX_IDENTIFIER_LENGTH",
    "IdentifierValidationError",
    "validate_identifier",
    "validate_qualified_identifier",
    "validate_quoted_identifier",
]
