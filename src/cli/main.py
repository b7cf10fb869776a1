"""Main CLI entry point for macos-notify."""

import logging

import typer
from rich.console import Console

from src.cli.commands.click import click_command
from src.cli.commands.current import current_command
from src.cli.commands.send import send_command
from src.cli.commands.sessions import sessions_command
from src.cli.commands.terminal import terminal_command
from src.notify import ConfigurationError, load_config

app = typer.Typer(
    name="macos-notify",
    help="macOS notifications that return you to your terminal and tmux pane",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


@app.callback()
def setup(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging"),
) -> None:
    """Configure logging for every command."""
    try:
        level = load_config().log_level
    except ConfigurationError:
        level = "WARNING"
    logging.basicConfig(level="DEBUG" if verbose else level, format=LOG_FORMAT)


@app.command("send")
def send(
    message: str = typer.Option(None, "-m", "--message", help="Notification message"),
    title: str = typer.Option(None, "-t", "--title", help="Notification title"),
    session: str = typer.Option(None, "-s", "--session", help="tmux session name"),
    window: str = typer.Option(None, "-w", "--window", help="tmux window number"),
    pane: str = typer.Option(None, "-p", "--pane", help="tmux pane number"),
    sound: str = typer.Option(None, "--sound", help="Notification sound"),
    current_tmux: bool = typer.Option(False, "--current-tmux", help="Use current tmux location"),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Send a notification."""
    send_command(message, title, session, window, pane, sound, current_tmux, json_flag)


@app.command("sessions")
def sessions(
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List available tmux sessions."""
    sessions_command(json_flag)


@app.command("current")
def current(
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the current tmux location."""
    current_command(json_flag)


@app.command("terminal")
def terminal(
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the detected terminal emulator."""
    terminal_command(json_flag)


@app.command("click", hidden=True)
def click(
    payload: str = typer.Argument(..., help="Notification payload"),
) -> None:
    """Handle a notification click."""
    click_command(payload)


def main() -> None:
    """Entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    main()
