"""Search configuration exceptions.

Custom exceptions raised while compiling full-text search expressions.
They provide better error messages and typing than a bare ValueError and
carry the offending values in ``details`` for diagnostics.

All of them stem from code or configuration, never from user search text:
callers typically map them to a 4xx/bad-request response.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for database-layer operations.

    Raised when an operation fails due to programming errors,
    configuration issues, or unexpected states.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class SearchConfigurationError(RepositoryError):
    """Invalid full-text search configuration.

    Deterministic given its inputs, so it is never retried.
    """


class UnknownOperatorError(SearchConfigurationError):
    """Operator name outside of and/or/not."""

    def __init__(self, operator: Any):
        """Initialize unknown operator error.

        Args:
            operator: The operator value that failed to resolve
        """
        self.operator = operator
        super().__init__(
            "TSearch operator not found, expected one of 'and', 'or', 'not'",
            details={"operator": operator},
        )


class InvalidWeightError(SearchConfigurationError):
    """Weight code outside of A, B, C, D.

    Attributes:
        weight: The rejected weight value
        field: Column the weight was configured for
        entity: Name of the searched entity
    """

    def __init__(self, weight: Any, field: str | None = None, entity: str | None = None):
        """Initialize invalid weight error.

        Args:
            weight: The rejected weight value
            field: Column the weight was configured for (if known)
            entity: Searched entity name (if known)
        """
        self.weight = weight
        self.field = field
        self.entity = entity

        message = f"Invalid TSearch weight: {weight}"
        if entity:
            message = f"{message} for {entity}"
        message = (
            f"{message}. Weights must be 'A', 'B', 'C', or 'D' "
            "(see Postgres: Text Search Ranking documentation)"
        )

        details: dict[str, Any] = {"weight": weight}
        if field is not None:
            details["field"] = field
        if entity is not None:
            details["entity"] = entity
        super().__init__(message, details=details)

    def __repr__(self) -> str:
        """Repr for debugging."""
        return (
            f"InvalidWeightError(weight={self.weight!r}, field={self.field!r}, "
            f"entity={self.entity!r})"
        )


class EmptyFieldSetError(SearchConfigurationError):
    """No searchable fields were configured."""

    def __init__(self, entity: str | None = None):
        """Initialize empty field set error.

        Args:
            entity: Searched entity name (if known)
        """
        self.entity = entity
        details = {"entity": entity} if entity else {}
        super().__init__("At least one searchable field is required", details=details)


__all__ = [
    "EmptyFieldSetError",
    "InvalidWeightError",
    "RepositoryError",
    "SearchConfigurationError",
    "UnknownOperatorError",
]
