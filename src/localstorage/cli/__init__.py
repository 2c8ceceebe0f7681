"""
localstorage CLI - Inspect and edit stored values from the shell.

Commands:
    localstorage get      Print the value stored for a key
    localstorage set      Store a value (JSON or plain string)
    localstorage remove   Remove a key
    localstorage clear    Remove all keys
    localstorage length   Print the number of stored keys
    localstorage info     Show which storage engine is in use
"""

import logging
from typing import Optional

import click

from localstorage.config import LocalStorageConfig, get_config
from localstorage.local_storage import LocalStorage

from .items import clear, get, info, length, remove, set_


@click.group()
@click.version_option(package_name="localstorage")
@click.option("--path", "storage_path", type=click.Path(dir_okay=False), help="Storage file (overrides LOCALSTORAGE_STORAGE_PATH)")
@click.option("--memory", is_flag=True, help="Use the in-memory engine only")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, storage_path: Optional[str], memory: bool, verbose: bool):
    """localstorage - JSON key/value storage with in-memory fallback."""
    config = LocalStorageConfig(storage_path=storage_path) if storage_path else get_config()
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if memory:
        storage = LocalStorage(host=None)
    else:
        storage = LocalStorage(config=config)

    ctx.obj = {"storage": storage, "config": config}


main.add_command(get)
main.add_command(set_)
main.add_command(remove)
main.add_command(clear)
main.add_command(length)
main.add_command(info)


if __name__ == "__main__":
    main()
