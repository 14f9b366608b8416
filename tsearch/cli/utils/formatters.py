"""Output helpers for the search CLI."""

import click

SECTION_WIDTH = 60


def error(message: str) -> None:
    """Print an error message in red on stderr."""
    click.secho(f"✗ {message}", fg="red", err=True)


def info(message: str) -> None:
    """Print an info message in blue."""
    click.secho(f"ℹ {message}", fg="blue")


def header(message: str) -> None:
    """Print a header message in cyan bold."""
    click.secho(f"\n{message}", fg="cyan", bold=True)


def section(title: str) -> None:
    """Print an SQL clause heading between rules."""
    rule = "=" * SECTION_WIDTH
    click.secho(f"\n{rule}", dim=True)
    click.secho(title, bold=True)
    click.secho(rule, dim=True)


def fragment(sql: str) -> None:
    """Print a generated SQL fragment in yellow."""
    click.secho(sql, fg="yellow")
