"""MCP tool definitions and handlers.

Handlers return plain text.  Errors are reported as ``Error: ...`` text
rather than raised, so the calling agent sees them as tool output.
"""
import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from src.notify import (
    NotificationDispatcher,
    NotifyError,
    SessionDirectory,
    SessionNotFoundError,
)
from src.notify.sessions import resolve_target
from src.server.arguments import SendNotificationArgs

logger = logging.getLogger(__name__)

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "send_notification",
        "description": "Send a macOS notification with optional tmux integration",
        "inputSchema": {
            "type": "object",
            "properties": {
                "message": {"type": "string", "description": "The notification message"},
                "title": {"type": "string", "description": "The notification title (default: repository name)"},
                "sound": {"type": "string", "description": 'The notification sound (default: "Glass")'},
                "session": {"type": "string", "description": "tmux session name"},
                "window": {"type": "string", "description": "tmux window number"},
                "pane": {"type": "string", "description": "tmux pane number"},
                "useCurrent": {"type": "boolean", "description": "Use current tmux location"},
            },
            "required": ["message"],
        },
    },
    {
        "name": "list_tmux_sessions",
        "description": "List available tmux sessions",
        "inputSchema": {"type": "object", "properties": {}},
    },
    {
        "name": "get_current_tmux_info",
        "description": "Get current tmux session information",
        "inputSchema": {"type": "object", "properties": {}},
    },
]


def _first_error(e: PydanticValidationError) -> str:
    errors = e.errors()
    if not errors:
        return str(e)
    msg = errors[0].get("msg", str(e))
    return msg.removeprefix("Value error, ")


class NotifyTools:
    """Dispatches MCP tool calls to the notification pipeline."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        directory: Optional[SessionDirectory] = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._directory = directory or SessionDirectory()

    async def call(self, name: str, arguments: Optional[dict[str, Any]]) -> str:
        try:
            if name == "send_notification":
                return await self.send_notification(arguments or {})
            if name == "list_tmux_sessions":
                return await self.list_tmux_sessions()
            if name == "get_current_tmux_info":
                return await self.get_current_tmux_info()
            return f"Error: Unknown tool: {name}"
        except NotifyError as e:
            logger.warning("Tool %s failed: %s", name, e)
            return f"Error: {e}"

    async def send_notification(self, arguments: dict[str, Any]) -> str:
        try:
            args = SendNotificationArgs.model_validate(arguments)
        except PydanticValidationError as e:
            return f"Error: {_first_error(e)}"

        try:
            coordinates = await resolve_target(
                self._directory, args.session, args.window, args.pane,
                use_current=args.use_current,
            )
        except SessionNotFoundError as e:
            return (
                f"Error: Session '{e.session}' does not exist. "
                f"Available sessions: {', '.join(e.available)}"
            )

        await self._dispatcher.send(
            args.message, title=args.title, sound=args.sound, coordinates=coordinates,
        )
        suffix = f" (tmux: {coordinates.session})" if coordinates else ""
        return f'Notification sent: "{args.message}"{suffix}'

    async def list_tmux_sessions(self) -> str:
        sessions = await self._directory.list_sessions()
        if not sessions:
            return "No tmux sessions found"
        return "Available tmux sessions:\n" + "\n".join(f"- {s}" for s in sessions)

    async def get_current_tmux_info(self) -> str:
        info = await self._directory.get_current_coordinates()
        if info is None:
            return "Not in a tmux session"
        return (
            "Current tmux location:\n"
            f"- Session: {info.session}\n"
            f"- Window: {info.window}\n"
            f"- Pane: {info.pane}"
        )
