"""CLI utilities for formatting output."""

from tsearch.cli.utils.formatters import (
    error,
    fragment,
    header,
    info,
    section,
)

__all__ = [
    "error",
    "fragment",
    "header",
    "info",
    "section",
]
