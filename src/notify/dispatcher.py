"""Notification dispatch through terminal-notifier.

Each send resolves the hosting terminal afresh and launches a separate,
detached terminal-notifier process.  The click command handed to
terminal-notifier carries the resolved terminal and tmux coordinates,
so several notifications can be in flight at once, each restoring its
own context when clicked.
"""
import asyncio
import logging
import os
import shlex
import shutil
import sys
from typing import Optional, Sequence

from src.notify.config import DEFAULT_SOUND, DEFAULT_TITLE, NotifyConfig
from src.notify.errors import ConfigurationError, ValidationError
from src.notify.models import NotificationRequest, TerminalType, WorkspaceCoordinates
from src.notify.runner import CommandRunner, run_command
from src.notify.terminal import TerminalResolver
from src.notify.title import TitleResolver

logger = logging.getLogger(__name__)

NOTIFIER_NAME = "terminal-notifier"
NOTIFIER_PATHS = (
    "/opt/homebrew/bin/terminal-notifier",
    "/usr/local/bin/terminal-notifier",
)


def find_notifier(custom_path: Optional[str] = None) -> Optional[str]:
    """Locate terminal-notifier; an explicit path is trusted as given."""
    if custom_path:
        return custom_path
    for path in NOTIFIER_PATHS:
        if os.path.exists(path):
            return path
    return shutil.which(NOTIFIER_NAME)


def default_click_command() -> list[str]:
    """Command that terminal-notifier runs on click, minus the payload."""
    return [sys.executable, "-m", "src.cli.main", "click"]


class NotificationDispatcher:
    """Sends notifications whose click re-focuses the originating terminal."""

    def __init__(
        self,
        notifier_path: Optional[str] = None,
        resolver: Optional[TerminalResolver] = None,
        run: CommandRunner = run_command,
        default_title: str = DEFAULT_TITLE,
        default_sound: str = DEFAULT_SOUND,
        click_command: Optional[Sequence[str]] = None,
        title_resolver: Optional[TitleResolver] = None,
    ) -> None:
        self._notifier_path = notifier_path
        self._run = run
        self._resolver = resolver or TerminalResolver(run=run)
        self._default_title = default_title
        self._default_sound = default_sound
        self._click_command = list(click_command or default_click_command())
        self._title_resolver = title_resolver or TitleResolver(run=run)
        self._title_task: Optional[asyncio.Task] = None

    @property
    def notifier_path(self) -> Optional[str]:
        return self._notifier_path

    @property
    def default_title(self) -> str:
        return self._default_title

    def schedule_default_title(self) -> asyncio.Task:
        """Start deriving the default title in the background.

        Sends issued before the task finishes use the literal default.
        Must be called from a running event loop.
        """
        if self._title_task is None:
            self._title_task = asyncio.create_task(self.refresh_default_title())
        return self._title_task

    async def refresh_default_title(self) -> None:
        try:
            name = await self._title_resolver.resolve()
        except Exception:
            logger.debug("Default title lookup failed", exc_info=True)
            return
        if name:
            self._default_title = name

    def build_request(
        self,
        message: str,
        title: Optional[str],
        sound: Optional[str],
        coordinates: Optional[WorkspaceCoordinates],
        terminal: TerminalType,
    ) -> NotificationRequest:
        return NotificationRequest(
            title=title or self._default_title,
            message=message,
            sound=sound or self._default_sound,
            terminal=terminal,
            coordinates=coordinates,
        )

    def build_arguments(self, request: NotificationRequest) -> list[str]:
        """terminal-notifier argv (without the executable) for ``request``."""
        execute = shlex.join([*self._click_command, request.payload.encode()])
        return [
            "-title", request.title,
            "-message", request.message,
            "-sound", request.sound,
            "-execute", execute,
        ]

    async def send(
        self,
        message: str,
        title: Optional[str] = None,
        sound: Optional[str] = None,
        coordinates: Optional[WorkspaceCoordinates] = None,
    ) -> NotificationRequest:
        """Resolve the hosting terminal and post one notification.

        Raises:
            ValidationError: If ``message`` is empty.
            ConfigurationError: If terminal-notifier cannot be found.
            SpawnError: If terminal-notifier cannot be launched.
            CommandError: If terminal-notifier exits with an error.
        """
        if not message:
            raise ValidationError("Message is required")
        if not self._notifier_path:
            raise ConfigurationError(
                f"{NOTIFIER_NAME} not found. Install it with "
                "'brew install terminal-notifier' or set MACOS_NOTIFY_NOTIFIER_PATH."
            )

        terminal = await self._resolver.resolve()
        request = self.build_request(message, title, sound, coordinates, terminal)
        logger.info(
            "Sending notification terminal=%s target=%s",
            terminal.value,
            request.coordinates.target if request.coordinates else None,
        )
        await self._run(self._notifier_path, self.build_arguments(request), detached=True)
        return request


def build_dispatcher(config: NotifyConfig, run: CommandRunner = run_command) -> NotificationDispatcher:
    """Build a dispatcher from loaded configuration."""
    return NotificationDispatcher(
        notifier_path=find_notifier(config.notifier_path),
        run=run,
        default_title=config.default_title,
        default_sound=config.default_sound,
    )
