"""Run command - evaluate a jq query once through the execution pipeline."""

import asyncio
import sys

import click

from ...context import pass_context
from ...models import Indentation
from ...pipeline import QueryPipeline
from ...settings import SettingsStore
from .helpers import load_settings, read_document, require_jq

INDENT_CHOICES = {
    "two": Indentation.TWO_SPACES,
    "four": Indentation.FOUR_SPACES,
    "tab": Indentation.ONE_TAB,
    "minified": Indentation.MINIFIED,
}

INVOCATION_FAILURE_EXIT = 2


async def evaluate(store: SettingsStore, command, document: str, query: str):
    """Run one request and return (result, output_text, error_text)."""
    async with QueryPipeline.from_settings(
        store, command=command, document=document, query=query
    ) as pipeline:
        result = await pipeline.run_once()
        return result, pipeline.output.output_text, pipeline.output.error_text


@click.command()
@click.argument("query")
@click.argument("source", required=False)
@click.option(
    "--indent",
    type=click.Choice(sorted(INDENT_CHOICES)),
    default=None,
    help="Output indentation (defaults to the indentationMode setting).",
)
@click.option(
    "--sort-keys/--no-sort-keys",
    default=None,
    help="Sort object keys (defaults to the sortKeys setting).",
)
@pass_context
def run(ctx, query, source, indent, sort_keys):
    """Evaluate QUERY against the JSON in SOURCE and print the result.

    SOURCE is a file path or '-' for stdin; when omitted, stdin is read if
    it is not a terminal. Options given here apply to this run only and are
    not saved.

    Examples:
        jqlive run '.name' data.json

        curl -s https://api.github.com/repos/jqlang/jq | jqlive run '.stargazers_count'

        jqlive run --indent minified --sort-keys '.' data.json
    """
    store = load_settings(ctx)
    command = require_jq(ctx)

    if source is None and not sys.stdin.isatty():
        source = "-"
    document = read_document(source)

    overrides = {}
    if indent is not None:
        overrides["indentation_mode"] = INDENT_CHOICES[indent]
    if sort_keys is not None:
        overrides["sort_keys"] = sort_keys
    one_shot = SettingsStore(settings=store.settings.model_copy(update=overrides))

    result, output, error = asyncio.run(evaluate(one_shot, command, document, query))

    if result is None or result.invocation_failed:
        click.echo(error or "Error while running jq", err=True)
        sys.exit(INVOCATION_FAILURE_EXIT)

    if result.succeeded:
        click.echo(output)
    if error:
        click.echo(error, err=True)
    if not result.succeeded:
        sys.exit(result.exit_code or 1)
