"""Send a notification."""

import asyncio
from typing import Optional

import typer
from rich.console import Console

from src.cli.output import format_error, format_success, json_output
from src.cli.utils import validate_message_content, validate_target_part
from src.notify import (
    CommandError,
    ConfigurationError,
    NotificationRequest,
    SessionDirectory,
    SessionNotFoundError,
    SpawnError,
    build_dispatcher,
    load_config,
)
from src.notify.sessions import resolve_target

console = Console()


async def _send_notification(
    message: str,
    title: Optional[str],
    sound: Optional[str],
    session: Optional[str],
    window: Optional[str],
    pane: Optional[str],
    current_tmux: bool,
) -> NotificationRequest:
    """Resolve the tmux target and dispatch one notification."""
    config = load_config()
    dispatcher = build_dispatcher(config)
    if config.resolve_title and not title:
        dispatcher.schedule_default_title()

    coordinates = await resolve_target(
        SessionDirectory(), session, window, pane, use_current=current_tmux,
    )
    return await dispatcher.send(message, title=title, sound=sound, coordinates=coordinates)


def send_command(
    message: str = typer.Option(None, "--message", "-m", help="Notification message"),
    title: str = typer.Option(None, "--title", "-t", help="Notification title"),
    session: str = typer.Option(None, "--session", "-s", help="tmux session name"),
    window: str = typer.Option(None, "--window", "-w", help="tmux window number"),
    pane: str = typer.Option(None, "--pane", "-p", help="tmux pane number"),
    sound: str = typer.Option(None, "--sound", help="Notification sound"),
    current_tmux: bool = typer.Option(
        False, "--current-tmux", help="Use current tmux location"
    ),
    json_flag: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Send a notification that returns to this terminal when clicked."""
    try:
        content = validate_message_content(message)
        session = validate_target_part(session, "session")
        window = validate_target_part(window, "window")
        pane = validate_target_part(pane, "pane")
    except ValueError as e:
        format_error(console, str(e))
        raise typer.Exit(code=2)

    try:
        request = asyncio.run(
            _send_notification(content, title, sound, session, window, pane, current_tmux)
        )
    except SessionNotFoundError as e:
        format_error(console, str(e))
        if e.available:
            console.print("\nAvailable sessions:")
            for name in e.available:
                console.print(f"  {name}")
        raise typer.Exit(code=1)
    except ConfigurationError as e:
        format_error(console, str(e), hint="Run 'brew install terminal-notifier'")
        raise typer.Exit(code=1)
    except (CommandError, SpawnError) as e:
        format_error(console, f"Failed to send notification: {e}")
        raise typer.Exit(code=3)

    if json_flag:
        json_output(
            console,
            {
                "status": "sent",
                "title": request.title,
                "message": request.message,
                "terminal": request.terminal,
                "target": request.coordinates.target if request.coordinates else None,
            },
        )
    else:
        format_success(console, "Notification sent successfully")
        if request.coordinates:
            console.print(f"[cyan]tmux:[/cyan] {request.coordinates.target}")
