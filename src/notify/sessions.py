"""tmux session queries."""
import logging
from typing import Optional

from src.notify.errors import NotifyError, SessionNotFoundError
from src.notify.models import WorkspaceCoordinates
from src.notify.runner import CommandRunner, run_command

logger = logging.getLogger(__name__)


class SessionDirectory:
    """Reads tmux sessions and the caller's current location.

    tmux not running (or not installed) is an expected condition, so
    failures degrade to empty results instead of raising.
    """

    def __init__(self, tmux: str = "tmux", run: CommandRunner = run_command) -> None:
        self._tmux = tmux
        self._run = run

    async def list_sessions(self) -> list[str]:
        """Session names in the order tmux reports them."""
        try:
            output = await self._run(
                self._tmux, ["list-sessions", "-F", "#{session_name}"]
            )
        except NotifyError as e:
            logger.debug("tmux list-sessions failed: %s", e)
            return []
        return [line for line in output.strip().split("\n") if line]

    async def session_exists(self, name: str) -> bool:
        return name in await self.list_sessions()

    async def get_current_coordinates(self) -> Optional[WorkspaceCoordinates]:
        """Current session, window and pane, or None unless all three resolve."""
        try:
            session = await self._display("#{session_name}")
            window = await self._display("#{window_index}")
            pane = await self._display("#{pane_index}")
            if not (window and pane):
                raise ValueError("tmux returned an empty window or pane index")
            return WorkspaceCoordinates(session=session, window=window, pane=pane)
        except (NotifyError, ValueError) as e:
            logger.debug("Could not read current tmux location: %s", e)
            return None

    async def _display(self, fmt: str) -> str:
        output = await self._run(self._tmux, ["display-message", "-p", fmt])
        return output.strip()


async def resolve_target(
    directory: SessionDirectory,
    session: Optional[str] = None,
    window: Optional[str] = None,
    pane: Optional[str] = None,
    use_current: bool = False,
) -> Optional[WorkspaceCoordinates]:
    """Pick the tmux target for a notification from one source only.

    With ``use_current`` the caller's own tmux location is used and the
    explicit values are ignored.  An explicitly named session must exist.

    Raises:
        SessionNotFoundError: If the named session is not running.
    """
    if use_current:
        return await directory.get_current_coordinates()

    coordinates = WorkspaceCoordinates.from_parts(session, window, pane)
    if coordinates is not None and not await directory.session_exists(coordinates.session):
        raise SessionNotFoundError(coordinates.session, await directory.list_sessions())
    return coordinates
