"""Show the current tmux location."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import format_key_value, json_output
from src.notify import SessionDirectory

console = Console()


def current_command(
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the current tmux session, window and pane."""
    coordinates = asyncio.run(SessionDirectory().get_current_coordinates())

    if json_flag:
        json_output(console, {"current": coordinates})
        return

    if coordinates is None:
        console.print("Not in a tmux session")
        return
    console.print("[bold]Current tmux location[/bold]")
    format_key_value(
        console,
        {
            "Session": coordinates.session,
            "Window": coordinates.window,
            "Pane": coordinates.pane,
        },
    )
