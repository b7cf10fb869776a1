"""Show which terminal would receive focus on click."""

import asyncio
import os

import typer
from rich.console import Console

from src.cli.output import format_table, json_output
from src.notify import TerminalResolver

console = Console()

MARKER_VARIABLES = (
    "CURSOR_TRACE_ID",
    "VSCODE_IPC_HOOK_CLI",
    "VSCODE_REMOTE",
    "VSCODE_PID",
    "ALACRITTY_WINDOW_ID",
    "ALACRITTY_SOCKET",
    "TERM_PROGRAM",
    "TMUX",
    "TMUX_PANE",
)


def terminal_command(
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Detect the terminal emulator hosting this shell."""
    environ = dict(os.environ)
    terminal = asyncio.run(TerminalResolver(environ=environ).resolve())
    markers = {name: environ.get(name) for name in MARKER_VARIABLES}

    if json_flag:
        json_output(console, {"terminal": terminal, "environment": markers})
        return

    format_table(
        console,
        "Environment markers",
        ["Variable", "Value"],
        [(name, value or "Not set") for name, value in markers.items()],
    )
    console.print(f"[cyan]Detected terminal:[/cyan] {terminal.value}")
