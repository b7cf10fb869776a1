"""Tests for tmux session queries."""
import pytest

from src.notify.errors import SessionNotFoundError, SpawnError
from src.notify.models import WorkspaceCoordinates
from src.notify.sessions import SessionDirectory, resolve_target

LIST_SESSIONS = ("list-sessions", "-F", "#{session_name}")


def _with_current(runner, session="dev", window="1", pane="0"):
    runner.add("tmux", ["display-message", "-p", "#{session_name}"], f"{session}\n")
    runner.add("tmux", ["display-message", "-p", "#{window_index}"], f"{window}\n")
    runner.add("tmux", ["display-message", "-p", "#{pane_index}"], f"{pane}\n")
    return runner


class TestListSessions:
    @pytest.mark.asyncio
    async def test_returns_sessions_in_reported_order(self, fake_runner) -> None:
        fake_runner.add("tmux", LIST_SESSIONS, "work\ndev\n\nmisc\n")
        directory = SessionDirectory(run=fake_runner)
        assert await directory.list_sessions() == ["work", "dev", "misc"]

    @pytest.mark.asyncio
    async def test_query_failure_returns_empty(self, fake_runner) -> None:
        directory = SessionDirectory(run=fake_runner)
        assert await directory.list_sessions() == []

    @pytest.mark.asyncio
    async def test_missing_tmux_returns_empty(self, fake_runner) -> None:
        fake_runner.add("tmux", LIST_SESSIONS, SpawnError("tmux", "No such file"))
        directory = SessionDirectory(run=fake_runner)
        assert await directory.list_sessions() == []

    @pytest.mark.asyncio
    async def test_custom_tmux_executable(self, fake_runner) -> None:
        fake_runner.add("/opt/homebrew/bin/tmux", LIST_SESSIONS, "main\n")
        directory = SessionDirectory(tmux="/opt/homebrew/bin/tmux", run=fake_runner)
        assert await directory.list_sessions() == ["main"]


class TestSessionExists:
    @pytest.mark.asyncio
    async def test_existing_session(self, fake_runner) -> None:
        fake_runner.add("tmux", LIST_SESSIONS, "work\ndev\n")
        assert await SessionDirectory(run=fake_runner).session_exists("dev") is True

    @pytest.mark.asyncio
    async def test_false_when_no_sessions(self, fake_runner) -> None:
        assert await SessionDirectory(run=fake_runner).session_exists("x") is False


class TestGetCurrentCoordinates:
    @pytest.mark.asyncio
    async def test_all_three_resolved(self, fake_runner) -> None:
        _with_current(fake_runner, "dev", "2", "1")
        coords = await SessionDirectory(run=fake_runner).get_current_coordinates()
        assert coords == WorkspaceCoordinates(session="dev", window="2", pane="1")

    @pytest.mark.asyncio
    async def test_queries_run_in_order(self, fake_runner) -> None:
        _with_current(fake_runner)
        await SessionDirectory(run=fake_runner).get_current_coordinates()
        formats = [call[3] for call in fake_runner.calls]
        assert formats == ["#{session_name}", "#{window_index}", "#{pane_index}"]

    @pytest.mark.asyncio
    async def test_any_failure_returns_none(self, fake_runner) -> None:
        fake_runner.add("tmux", ["display-message", "-p", "#{session_name}"], "dev\n")
        fake_runner.add("tmux", ["display-message", "-p", "#{window_index}"], "1\n")
        coords = await SessionDirectory(run=fake_runner).get_current_coordinates()
        assert coords is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("window, pane", [("", "0"), ("1", ""), ("  ", "0")])
    async def test_empty_index_returns_none(self, fake_runner, window, pane) -> None:
        _with_current(fake_runner, "dev", window, pane)
        assert await SessionDirectory(run=fake_runner).get_current_coordinates() is None

    @pytest.mark.asyncio
    async def test_outside_tmux_returns_none(self, fake_runner) -> None:
        assert await SessionDirectory(run=fake_runner).get_current_coordinates() is None


class TestResolveTarget:
    @pytest.mark.asyncio
    async def test_no_session_means_no_target(self, fake_runner) -> None:
        directory = SessionDirectory(run=fake_runner)
        assert await resolve_target(directory) is None
        assert fake_runner.calls == []

    @pytest.mark.asyncio
    async def test_explicit_session_validated(self, fake_runner) -> None:
        fake_runner.add("tmux", LIST_SESSIONS, "dev\n")
        directory = SessionDirectory(run=fake_runner)
        coords = await resolve_target(directory, "dev", "1")
        assert coords == WorkspaceCoordinates(session="dev", window="1")

    @pytest.mark.asyncio
    async def test_missing_session_raises_with_available(self, fake_runner) -> None:
        fake_runner.add("tmux", LIST_SESSIONS, "work\nmisc\n")
        directory = SessionDirectory(run=fake_runner)
        with pytest.raises(SessionNotFoundError) as exc_info:
            await resolve_target(directory, "dev")
        assert exc_info.value.available == ["work", "misc"]
        assert "Session 'dev' does not exist" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_pane_without_window_truncated(self, fake_runner) -> None:
        fake_runner.add("tmux", LIST_SESSIONS, "dev\n")
        directory = SessionDirectory(run=fake_runner)
        coords = await resolve_target(directory, "dev", None, "3")
        assert coords == WorkspaceCoordinates(session="dev")

    @pytest.mark.asyncio
    async def test_use_current_ignores_explicit_values(self, fake_runner) -> None:
        _with_current(fake_runner, "main", "0", "2")
        directory = SessionDirectory(run=fake_runner)
        coords = await resolve_target(directory, "other", "9", "9", use_current=True)
        assert coords == WorkspaceCoordinates(session="main", window="0", pane="2")
        assert ("tmux", *LIST_SESSIONS) not in fake_runner.calls

    @pytest.mark.asyncio
    async def test_use_current_outside_tmux(self, fake_runner) -> None:
        directory = SessionDirectory(run=fake_runner)
        assert await resolve_target(directory, use_current=True) is None
