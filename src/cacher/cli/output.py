"""
Rich terminal output helpers for CLI.
"""

from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

# Console instance for all output
console = Console()


def print_stats(stats: dict[str, Any]) -> None:
    """Print cache statistics as returned by ``SQLiteCacheStore.stats``."""
    table = Table(
        title="Cache Statistics",
        box=box.ROUNDED,
        show_header=False,
    )
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")

    table.add_row("Database", stats["db_path"])
    table.add_row("Size", f"{stats['db_size_bytes'] / 1024:.1f} KB")
    table.add_row("Total entries", str(stats["total_entries"]))
    table.add_row("Valid entries", str(stats["valid_entries"]))
    table.add_row("Expired entries", str(stats["expired_entries"]))

    console.print()
    console.print(table)

    by_entity = stats["entries_by_entity"]
    if by_entity:
        entities = Table(box=box.SIMPLE, header_style="bold cyan")
        entities.add_column("Entity", style="cyan")
        entities.add_column("Entries", justify="right")
        for entity, count in by_entity.items():
            entities.add_row(entity, str(count))
        console.print(entities)

    console.print("[dim]To drop all cached reads, use: cacher cache --clear[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[cyan]Info:[/] {message}")
