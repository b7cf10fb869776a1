"""Click handling for posted notifications.

terminal-notifier runs ``macos-notify click <payload>`` when a
notification is clicked.  The handler brings the terminal recorded at
send time to the front and, if tmux coordinates were recorded, switches
the tmux client to them after a short delay.

There is nobody to report to at this point, so every failure is logged
and absorbed.  A failed tmux switch leaves the terminal activated.
"""
import asyncio
import logging
import os
import shutil
from enum import Enum
from typing import Optional, Sequence

from src.notify.errors import NotifyError, PayloadError
from src.notify.models import ClickPayload, TerminalType, WorkspaceCoordinates
from src.notify.runner import CommandRunner, run_command

logger = logging.getLogger(__name__)

SWITCH_DELAY = 0.5
EXIT_GRACE = 0.5

OSASCRIPT = "/usr/bin/osascript"
PGREP = "/usr/bin/pgrep"

APPLICATION_NAMES = {
    TerminalType.VSCODE: "Visual Studio Code",
    TerminalType.CURSOR: "Cursor",
    TerminalType.ITERM2: "iTerm",
    TerminalType.TERMINAL: "Terminal",
    TerminalType.ALACRITTY: "Alacritty",
}
# Process names an application runs under, matched exactly by pgrep -x.
PROCESS_NAMES = {
    "Visual Studio Code": ("Code", "Electron"),
    "Cursor": ("Cursor",),
    "iTerm": ("iTerm2",),
    "Terminal": ("Terminal",),
    "Alacritty": ("alacritty",),
}
FALLBACK_APPLICATIONS = ("Alacritty", "iTerm", "Terminal")
DEFAULT_APPLICATION = "Terminal"

TMUX_PATHS = ("/opt/homebrew/bin/tmux", "/usr/local/bin/tmux", "/usr/bin/tmux")


class ClickState(Enum):
    IDLE = "idle"
    ACTIVATING = "activating"
    DONE = "done"


def find_tmux(paths: Sequence[str] = TMUX_PATHS) -> Optional[str]:
    for path in paths:
        if os.path.exists(path):
            return path
    return shutil.which("tmux")


class ClickRouter:
    """Activates the recorded terminal and restores the tmux target."""

    def __init__(
        self,
        run: CommandRunner = run_command,
        tmux_paths: Sequence[str] = TMUX_PATHS,
        switch_delay: float = SWITCH_DELAY,
        exit_grace: float = EXIT_GRACE,
    ) -> None:
        self._run = run
        self._tmux_paths = tuple(tmux_paths)
        self._switch_delay = switch_delay
        self._exit_grace = exit_grace
        self.state = ClickState.IDLE

    async def handle(self, raw_payload: str) -> None:
        """Handle one click; never raises for command failures."""
        self.state = ClickState.ACTIVATING
        try:
            payload = ClickPayload.decode(raw_payload)
        except PayloadError as e:
            logger.warning("%s", e)
            payload = ClickPayload()

        await self.activate(payload.terminal)
        coordinates = payload.coordinates
        if coordinates is not None:
            await asyncio.sleep(self._switch_delay)
            await self.switch(coordinates)

        await asyncio.sleep(self._exit_grace)
        self.state = ClickState.DONE

    async def activate(self, terminal: TerminalType) -> str:
        """Bring ``terminal`` (or a running fallback) to the front."""
        app = await self.choose_application(terminal)
        try:
            await self._run(OSASCRIPT, ["-e", f'tell application "{app}" to activate'])
        except NotifyError as e:
            logger.debug("Activating %s failed: %s", app, e)
        return app

    async def choose_application(self, terminal: TerminalType) -> str:
        preferred = APPLICATION_NAMES.get(terminal)
        if preferred and await self._is_running(preferred):
            return preferred
        for app in FALLBACK_APPLICATIONS:
            if await self._is_running(app):
                return app
        return DEFAULT_APPLICATION

    async def switch(self, coordinates: WorkspaceCoordinates) -> bool:
        tmux = find_tmux(self._tmux_paths)
        if not tmux:
            logger.debug("tmux not found, skipping switch to %s", coordinates.target)
            return False
        try:
            await self._run(tmux, ["switch-client", "-t", coordinates.target])
        except NotifyError as e:
            logger.debug("tmux switch-client to %s failed: %s", coordinates.target, e)
            return False
        return True

    async def _is_running(self, app: str) -> bool:
        for name in PROCESS_NAMES.get(app, (app,)):
            try:
                await self._run(PGREP, ["-x", name])
            except NotifyError:
                continue
            return True
        return False
