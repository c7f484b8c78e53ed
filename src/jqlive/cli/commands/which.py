"""Which command - show the jq binary jqlive will run."""

import click

from ...context import pass_context
from .helpers import require_jq


@click.command()
@pass_context
def which(ctx):
    """Print the path of the resolved jq binary."""
    click.echo(require_jq(ctx)[0])
