"""Rich formatting helpers for the Retro CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_fatal(message: str, console: Console) -> None:
    """Display a terminal failure."""
    console.print(f"[red]FATAL:[/red] {escape(message)}", highlight=False)


def format_insert_summary(data: dict[str, int], console: Console, *, limit: int = 10) -> None:
    """Display the stored keys, lowest values first."""
    console.print(f"Stored [green]{len(data)}[/green] values.")
    if not data:
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Value", justify="right", style="cyan")
    table.add_column("Key", style="yellow")

    for key, value in sorted(data.items(), key=lambda kv: kv[1])[:limit]:
        table.add_row(str(value), escape(key))

    console.print(table)
    if len(data) > limit:
        console.print(f"[dim]... {len(data) - limit} more[/dim]")


def format_network_summary(server_id: str, version: str, calls: list[str], console: Console) -> None:
    console.print(f"Server [yellow]{escape(server_id)}[/yellow] version [green]{escape(version)}[/green]")
    console.print(
        f"  get_server calls: {calls.count('get_server')}, "
        f"use_server calls: {calls.count('use_server')}",
        highlight=False,
    )
