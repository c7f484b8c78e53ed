"""Shared helpers for CLI commands."""

import sys
from typing import Optional

import click

from ...errors import SettingsError
from ...context import JqliveContext
from ...settings import SettingsStore


def read_document(source: Optional[str]) -> str:
    """Read JSON text from a file path, '-' for stdin, or nothing."""
    if source is None:
        return ""
    if source == "-":
        return sys.stdin.read()
    with click.open_file(source, "r", encoding="utf-8") as f:
        return f.read()


def load_settings(ctx: JqliveContext) -> SettingsStore:
    """Load the settings store, exiting with a message if it is broken."""
    try:
        return ctx.settings
    except SettingsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def require_jq(ctx: JqliveContext) -> list:
    """Return the jq argv prefix or exit with install instructions."""
    command = ctx.jq_command()
    if command is None:
        click.echo("Error: jq not found.", err=True)
        click.echo("", err=True)
        click.echo("Options:", err=True)
        click.echo("  1. Install jq: https://jqlang.org/download/", err=True)
        click.echo("  2. Point jqlive at a binary:", err=True)
        click.echo("     jqlive settings set jqPath /path/to/jq", err=True)
        click.echo("     (or export JQLIVE_JQ=/path/to/jq)", err=True)
        sys.exit(1)
    return command
