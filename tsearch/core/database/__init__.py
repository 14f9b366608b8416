"""Database layer: full-text search compilation and statement filters."""

from tsearch.core.database.exceptions import (
    EmptyFieldSetError,
    InvalidWeightError,
    RepositoryError,
    SearchConfigurationError,
    UnknownOperatorError,
)
from tsearch.core.database.filters import StatementFilter
from tsearch.core.database.validation import (
    IdentifierValidationError,
    validate_identifier,
    validate_qualified_identifier,
    validate_quoted_identifier,
)

__all__ = [
    "EmptyFieldSetError",
    "IdentifierValidationError",
    "InvalidWeightError",
    "RepositoryError",
    "SearchConfigurationError",
    "StatementFilter",
    "UnknownOperatorError",
    "validate_identifier",
    "validate_qualified_identifier",
    "validate_quoted_identifier",
]
