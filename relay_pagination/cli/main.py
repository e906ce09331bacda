"""Main CLI entry point for relay-pagination developer commands."""

import click

from relay_pagination import __version__
from relay_pagination.cli.commands import cursor
from relay_pagination.infra.logging.config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="relay-pagination")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Relay pagination CLI - inspect cursors and the filters they produce.

    \b
    Quick Start:
      relay-pagination cursor encode 20 2
      relay-pagination cursor decode MjAvMg== --fields 2
      relay-pagination cursor explain MjAvMg== --order-by v --direction desc
    """
    setup_logging()
    ctx.ensure_object(dict)


cli.add_command(cursor.cursor)


if __name__ == "__main__":
    cli()
