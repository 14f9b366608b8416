"""Main CLI entry point for tsearch commands."""

import click

from tsearch import __version__
from tsearch.cli.commands import search
from tsearch.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="tsearch")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """tsearch CLI - PostgreSQL full-text search query compiler.

    \b
    Command Groups:
      search     Compile search text, vectors and ranking plans

    \b
    Quick Start:
      tsearch search compile "quick fox"
      tsearch search vector -t articles -f title=A -f body=B
      tsearch search plan "quick fox" -t articles -f title -r tags.name
    """
    ctx.ensure_object(dict)


cli.add_command(search.search)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
