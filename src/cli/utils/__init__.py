"""CLI utilities."""

from .validation import validate_message_content, validate_target_part

__all__ = [
    "validate_message_content",
    "validate_target_part",
]
