"""Terminal-aware macOS notifications with tmux integration."""
from src.notify.click import ClickRouter
from src.notify.config import NotifyConfig, load_config
from src.notify.dispatcher import NotificationDispatcher, build_dispatcher, find_notifier
from src.notify.errors import (
    CommandError,
    ConfigurationError,
    NotifyError,
    PayloadError,
    SessionNotFoundError,
    SpawnError,
    ValidationError,
)
from src.notify.models import (
    ActiveClientInfo,
    ClickPayload,
    NotificationRequest,
    TerminalType,
    WorkspaceCoordinates,
)
from src.notify.runner import run_command
from src.notify.sessions import SessionDirectory
from src.notify.terminal import TerminalResolver
from src.notify.title import TitleResolver

__all__ = [
    "ClickRouter",
    "NotifyConfig",
    "load_config",
    "NotificationDispatcher",
    "build_dispatcher",
    "find_notifier",
    "CommandError",
    "ConfigurationError",
    "NotifyError",
    "PayloadError",
    "SessionNotFoundError",
    "SpawnError",
    "ValidationError",
    "ActiveClientInfo",
    "ClickPayload",
    "NotificationRequest",
    "TerminalType",
    "WorkspaceCoordinates",
    "run_command",
    "SessionDirectory",
    "TerminalResolver",
    "TitleResolver",
]
