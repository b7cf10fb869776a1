"""Rich terminal output formatters."""

from typing import Any, Sequence

from rich.console import Console
from rich.table import Table


def format_success(console: Console, message: str) -> None:
    """Display success message in green."""
    console.print(f"[green]{message}[/green]")


def format_error(console: Console, message: str, hint: str | None = None) -> None:
    """Display error message in red with optional hint."""
    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {hint}")


def format_table(
    console: Console,
    title: str,
    columns: Sequence[str],
    rows: Sequence[Sequence[str]],
) -> None:
    """Display data as a table, one row per entry."""
    table = Table(title=title)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def format_key_value(console: Console, data: dict[str, Any]) -> None:
    """Display key-value pairs, aligned; missing values print as a dash."""
    width = max((len(k) for k in data), default=0)
    for key, value in data.items():
        console.print(f"[cyan]{key.ljust(width)}[/cyan]: {'-' if value is None else value}")
