"""Input validation utilities for CLI commands."""

from typing import Optional


def validate_message_content(content: Optional[str]) -> str:
    """Validate and return message content. Raises ValueError if invalid."""
    if not content or not content.strip():
        raise ValueError("Message is required (-m option)")
    if len(content) > 65536:
        raise ValueError("Message cannot exceed 65536 characters")
    return content


def validate_target_part(value: Optional[str], name: str) -> Optional[str]:
    """Validate a tmux session, window or pane name.

    ``:`` and ``.`` separate the parts of a tmux target, so they cannot
    appear inside one part.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if ":" in value or "." in value:
        raise ValueError(f"{name.capitalize()} cannot contain ':' or '.'")
    return value
