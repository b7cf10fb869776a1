"""List tmux sessions."""

import asyncio

import typer
from rich.console import Console

from src.cli.output import json_output
from src.notify import SessionDirectory

console = Console()


def sessions_command(
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List available tmux sessions."""
    sessions = asyncio.run(SessionDirectory().list_sessions())

    if json_flag:
        json_output(console, {"sessions": sessions})
        return

    if not sessions:
        console.print("No tmux sessions found")
        return
    console.print("Available tmux sessions:")
    for name in sessions:
        console.print(f"  {name}")
