"""Handle a notification click."""

import asyncio
import logging

import typer

from src.notify import ClickRouter

logger = logging.getLogger(__name__)


def click_command(
    payload: str = typer.Argument(..., help="Payload embedded at send time"),
) -> None:
    """Focus the terminal and tmux target recorded in a notification."""
    try:
        asyncio.run(ClickRouter().handle(payload))
    except Exception:
        # terminal-notifier ignores the exit status; the log is all we have.
        logger.exception("Click handling failed")
