"""Tests for the MCP tool handlers."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.notify import (
    CommandError,
    ConfigurationError,
    NotificationRequest,
    TerminalType,
    WorkspaceCoordinates,
)
from src.server.arguments import SendNotificationArgs
from src.server.tools import TOOL_DEFINITIONS, NotifyTools


@pytest.fixture
def dispatcher() -> MagicMock:
    mock = MagicMock()
    mock.send = AsyncMock(
        return_value=NotificationRequest(title="t", message="m", sound="Glass", terminal=TerminalType.ITERM2)
    )
    return mock


@pytest.fixture
def directory() -> MagicMock:
    mock = MagicMock()
    mock.list_sessions = AsyncMock(return_value=["dev", "work"])
    mock.session_exists = AsyncMock(side_effect=lambda name: name in ("dev", "work"))
    mock.get_current_coordinates = AsyncMock(return_value=WorkspaceCoordinates("dev", "1", "0"))
    return mock


@pytest.fixture
def tools(dispatcher, directory) -> NotifyTools:
    return NotifyTools(dispatcher, directory)


class TestToolDefinitions:
    def test_tool_names(self) -> None:
        assert [t["name"] for t in TOOL_DEFINITIONS] == [
            "send_notification",
            "list_tmux_sessions",
            "get_current_tmux_info",
        ]

    def test_message_required(self) -> None:
        schema = TOOL_DEFINITIONS[0]["inputSchema"]
        assert schema["required"] == ["message"]
        assert schema["properties"]["useCurrent"]["type"] == "boolean"


class TestSendNotificationArgs:
    def test_alias_and_coercion(self) -> None:
        args = SendNotificationArgs.model_validate({"message": "hi", "window": 1, "useCurrent": True})
        assert args.window == "1"
        assert args.use_current is True

    def test_empty_strings_are_absent(self) -> None:
        args = SendNotificationArgs.model_validate({"message": "hi", "session": "", "title": ""})
        assert args.session is None
        assert args.title is None


class TestSendNotification:
    @pytest.mark.asyncio
    async def test_plain_send(self, tools, dispatcher) -> None:
        text = await tools.call("send_notification", {"message": "Build finished"})

        assert text == 'Notification sent: "Build finished"'
        dispatcher.send.assert_awaited_once_with(
            "Build finished", title=None, sound=None, coordinates=None,
        )

    @pytest.mark.asyncio
    async def test_explicit_target(self, tools, dispatcher) -> None:
        text = await tools.call(
            "send_notification", {"message": "done", "session": "dev", "window": "2", "sound": "Hero"},
        )

        assert text == 'Notification sent: "done" (tmux: dev)'
        kwargs = dispatcher.send.await_args.kwargs
        assert kwargs["coordinates"] == WorkspaceCoordinates("dev", "2")
        assert kwargs["sound"] == "Hero"

    @pytest.mark.asyncio
    async def test_use_current(self, tools, dispatcher) -> None:
        text = await tools.call(
            "send_notification", {"message": "done", "session": "ignored", "useCurrent": True},
        )

        assert text == 'Notification sent: "done" (tmux: dev)'
        assert dispatcher.send.await_args.kwargs["coordinates"] == WorkspaceCoordinates("dev", "1", "0")

    @pytest.mark.asyncio
    async def test_unknown_session(self, tools, dispatcher) -> None:
        text = await tools.call("send_notification", {"message": "done", "session": "nope"})

        assert text == "Error: Session 'nope' does not exist. Available sessions: dev, work"
        dispatcher.send.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["   ", "\n\t"])
    async def test_whitespace_message_rejected(self, tools, dispatcher, message) -> None:
        text = await tools.call("send_notification", {"message": message})

        assert text == "Error: Message is required"
        dispatcher.send.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [{}, {"message": ""}, None])
    async def test_missing_message(self, tools, dispatcher, arguments) -> None:
        text = await tools.call("send_notification", arguments)

        assert text == "Error: Message is required"
        dispatcher.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_dispatch_errors_reported_as_text(self, tools, dispatcher) -> None:
        dispatcher.send.side_effect = ConfigurationError("terminal-notifier not found")

        text = await tools.call("send_notification", {"message": "done"})

        assert text == "Error: terminal-notifier not found"

    @pytest.mark.asyncio
    async def test_notifier_failure_reported_as_text(self, tools, dispatcher) -> None:
        dispatcher.send.side_effect = CommandError("terminal-notifier", [], 1, stderr="boom")

        text = await tools.call("send_notification", {"message": "done"})

        assert text.startswith("Error: Command failed: terminal-notifier")


class TestSessionTools:
    @pytest.mark.asyncio
    async def test_list_sessions(self, tools) -> None:
        text = await tools.call("list_tmux_sessions", {})
        assert text == "Available tmux sessions:\n- dev\n- work"

    @pytest.mark.asyncio
    async def test_no_sessions(self, tools, directory) -> None:
        directory.list_sessions.return_value = []
        assert await tools.call("list_tmux_sessions", {}) == "No tmux sessions found"

    @pytest.mark.asyncio
    async def test_current_info(self, tools) -> None:
        text = await tools.call("get_current_tmux_info", {})
        assert text == "Current tmux location:\n- Session: dev\n- Window: 1\n- Pane: 0"

    @pytest.mark.asyncio
    async def test_not_in_tmux(self, tools, directory) -> None:
        directory.get_current_coordinates.return_value = None
        assert await tools.call("get_current_tmux_info", {}) == "Not in a tmux session"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, tools) -> None:
        assert await tools.call("reboot", {}) == "Error: Unknown tool: reboot"
