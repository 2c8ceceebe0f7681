"""localstorage CLI - Item commands."""

import json
from typing import Any, Optional

import click
import yaml

from localstorage.engines.file import FileStorage
from localstorage.local_storage import LocalStorage


def _storage(ctx: click.Context) -> LocalStorage:
    return ctx.obj["storage"]


def _parse_value(text: str) -> Any:
    """Parse text as JSON, falling back to the plain string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


@click.command("get")
@click.argument("key")
@click.option("--default", "default_text", help="Value (JSON) to print if the key is missing or unreadable")
@click.option("--format", "output_format", type=click.Choice(["json", "yaml", "raw"]), default="json")
@click.pass_context
def get(ctx: click.Context, key: str, default_text: Optional[str], output_format: str):
    """Print the value stored for KEY."""
    storage = _storage(ctx)

    if default_text is None:
        value = storage.get(key)
        if value is None:
            raise click.ClickException(f"No value stored for key: {key}")
    else:
        value = storage.get(key, _parse_value(default_text))

    if output_format == "yaml":
        click.echo(yaml.safe_dump(value, default_flow_style=False, allow_unicode=True).rstrip())
    elif output_format == "raw" and isinstance(value, str):
        click.echo(value)
    else:
        click.echo(json.dumps(value, indent=2, ensure_ascii=False))


@click.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--string", "as_string", is_flag=True, help="Store VALUE as a string even if it is valid JSON")
@click.pass_context
def set_(ctx: click.Context, key: str, value: str, as_string: bool):
    """Store VALUE under KEY. VALUE is parsed as JSON when possible."""
    parsed = value if as_string else _parse_value(value)
    if not _storage(ctx).set(key, parsed):
        raise click.ClickException(f"Failed to store key: {key}")
    click.echo(f"Stored {key}")


@click.command("remove")
@click.argument("key")
@click.pass_context
def remove(ctx: click.Context, key: str):
    """Remove KEY."""
    if not _storage(ctx).remove(key):
        raise click.ClickException(f"Failed to remove key: {key}")
    click.echo(f"Removed {key}")


@click.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear(ctx: click.Context, yes: bool):
    """Remove all keys."""
    storage = _storage(ctx)
    if not yes:
        click.confirm(f"Remove all {storage.length} stored keys?", abort=True)
    if not storage.clear():
        raise click.ClickException("Failed to clear storage")
    click.echo("Cleared storage")


@click.command("length")
@click.pass_context
def length(ctx: click.Context):
    """Print the number of stored keys."""
    click.echo(_storage(ctx).length)


@click.command("info")
@click.pass_context
def info(ctx: click.Context):
    """Show which storage engine is in use."""
    storage = _storage(ctx)
    engine = storage.engine

    click.echo(f"Engine:   {type(engine).__name__}")
    click.echo(f"Fallback: {'yes' if storage.using_fallback else 'no'}")
    if isinstance(engine, FileStorage):
        click.echo(f"Path:     {engine.path}")
    click.echo(f"Items:    {storage.length}")
