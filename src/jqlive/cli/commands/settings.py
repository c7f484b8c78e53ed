"""Settings commands - inspect and change persisted panel settings."""

import json
import sys

import click

from ...context import pass_context
from ...errors import SettingsError
from ...settings import SETTING_KEYS
from .helpers import load_settings


@click.group()
def settings():
    """Show or change jqlive settings."""


@settings.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@pass_context
def show(ctx, as_json):
    """Show the active settings and where they are stored."""
    store = load_settings(ctx)
    data = store.settings.model_dump(by_alias=True, mode="json")

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"Settings file: {store.path}")
    for key, value in data.items():
        click.echo(f"  {key}: {value if value is not None else '-'}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(SETTING_KEYS)))
@click.argument("value")
@pass_context
def set_(ctx, key, value):
    """Set KEY to VALUE and save it.

    VALUE is read as JSON when possible, so 'true', '4.5' and 'null' become
    a boolean, a number and "unset".

    Examples:
        jqlive settings set indentationMode Minified

        jqlive settings set sortKeys true

        jqlive settings set timeoutSeconds null
    """
    store = load_settings(ctx)
    try:
        store.set(key, value)
    except SettingsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"{key} = {json.dumps(store.settings.model_dump(mode='json')[SETTING_KEYS[key]])}")
