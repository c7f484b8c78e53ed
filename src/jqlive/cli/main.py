"""jqlive CLI main entry point with global options."""

import logging

import click

from ..context import JqliveContext
from ..home import resolve_home

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: int) -> None:
    """WARNING by default, INFO with -v, DEBUG with -vv."""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("jqlive").setLevel(level)


@click.group()
@click.option(
    "--home", type=click.Path(), help="jqlive home directory (overrides $JQLIVE_HOME)"
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity.")
@click.pass_context
def cli(ctx, home, verbose):
    """jqlive - interactive jq playground with live results."""
    configure_logging(verbose)
    ctx.ensure_object(JqliveContext)
    ctx.obj.paths = resolve_home(home)


# Register commands at module level so tests can import cli with commands attached
from .commands.run import run
from .commands.settings import settings
from .commands.ui import ui
from .commands.which import which

cli.add_command(run)
cli.add_command(settings)
cli.add_command(ui)
cli.add_command(which)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
