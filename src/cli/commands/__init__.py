"""CLI commands."""

from . import (
    click,
    current,
    send,
    sessions,
    terminal,
)

__all__ = [
    "click",
    "current",
    "send",
    "sessions",
    "terminal",
]
