"""
Main CLI entry point for cacher.

Provides commands for inspecting and managing a SQLite cache store.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from cacher import __version__
from cacher.cli.output import print_error, print_info, print_stats, print_success
from cacher.core.config import DB_PATH_ENV
from cacher.core.exceptions import CacherError


@click.group()
@click.version_option(version=__version__, prog_name="cacher")
@click.option(
    "--db",
    "db_path",
    envvar=DB_PATH_ENV,
    type=click.Path(dir_okay=False, path_type=Path),
    help="SQLite cache file (default: ~/.cacher/cache.db).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, db_path: Optional[Path], verbose: bool) -> None:
    """cacher - cache-aside storage for entity finds.

    Inspect and purge the cached find results kept in a SQLite cache store.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db_path


@cli.command()
@click.option("--clear", is_flag=True, help="Clear all cached data.")
@click.option("--stats", is_flag=True, help="Show cache statistics.")
@click.option("--cleanup", is_flag=True, help="Remove expired entries.")
@click.option("--purge", "entity", type=str, help="Remove every cached read of ENTITY.")
@click.pass_context
def cache(
    ctx: click.Context,
    clear: bool,
    stats: bool,
    cleanup: bool,
    entity: Optional[str],
) -> None:
    """Manage the cache store.

    \b
    Examples:
        cacher cache --stats          # Show cache statistics
        cacher cache --clear          # Clear all cached data
        cacher cache --cleanup        # Remove only expired entries
        cacher cache --purge Post     # Drop cached reads of Post
    """
    from cacher.stores.sqlite import SQLiteCacheStore

    if not (clear or stats or cleanup or entity):
        click.echo(ctx.get_help())
        return

    try:
        store = SQLiteCacheStore(db_path=ctx.obj.get("db_path"))

        if clear:
            count = store.clear()
            print_success(f"Cache cleared. Removed {count} entries.")
        elif cleanup:
            count = store.cleanup()
            print_success(f"Cleanup complete. Removed {count} expired entries.")
        elif entity:
            count = store.purge_all(entity)
            if count:
                print_success(f"Purged {count} cached reads of {entity}.")
            else:
                print_info(f"No cached reads of {entity}.")
        else:
            print_stats(store.stats())

    except CacherError as e:
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    cli()
