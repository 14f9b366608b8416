"""PostgreSQL full-text search query compiler."""

__version__ = "0.1.0"
