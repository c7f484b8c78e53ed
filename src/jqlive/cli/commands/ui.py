"""UI command - open the interactive jq panel."""

import logging

import click

from ...context import pass_context
from ...pipeline import QueryPipeline
from .helpers import load_settings, read_document

logger = logging.getLogger(__name__)


@click.command()
@click.argument("source", required=False)
@click.option("-q", "--query", default=".", show_default=True, help="Initial jq query.")
@pass_context
def ui(ctx, source, query):
    """Open the interactive panel, optionally preloaded with SOURCE.

    SOURCE is a JSON file or '-' for stdin. Results update as you type; when
    jq cannot be found the panel still opens and reports it in the status
    line.
    """
    from ...ui import JsonQueryApp

    store = load_settings(ctx)
    command = ctx.jq_command()
    if command is not None:
        logger.info("Initialized jq: %s", command[0])

    document = read_document(source)
    pipeline = QueryPipeline.from_settings(
        store,
        command=command,
        home_bin=ctx.paths.bin_dir if ctx.paths else None,
        document=document,
        query=query,
    )
    JsonQueryApp(pipeline).run()
