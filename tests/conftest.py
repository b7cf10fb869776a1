"""Shared fixtures: a scripted stand-in for the command runner."""
from typing import Callable, Optional, Sequence, Union
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.notify import CommandError, TerminalType

Response = Union[str, BaseException]


class FakeRunner:
    """Replays scripted command output keyed on ``(program, *args)``.

    Unscripted commands fail with a non-zero exit, the same way a missing
    tmux server or an unknown pid would.
    """

    def __init__(self, handler: Optional[Callable[[tuple], Optional[Response]]] = None) -> None:
        self.responses: dict[tuple, Response] = {}
        self.calls: list[tuple] = []
        self.detached: list[tuple] = []
        self._handler = handler

    def add(self, program: str, args: Sequence[str], result: Response) -> "FakeRunner":
        self.responses[(program, *args)] = result
        return self

    async def __call__(self, program: str, args: Sequence[str], *, detached: bool = False) -> str:
        key = (program, *args)
        self.calls.append(key)
        if detached:
            self.detached.append(key)
        result = self.responses.get(key)
        if result is None and self._handler is not None:
            result = self._handler(key)
        if result is None:
            raise CommandError(program, args, 1, stderr="unscripted command")
        if isinstance(result, BaseException):
            raise result
        return result

    def called(self, program: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == program]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def stub_resolver() -> MagicMock:
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value=TerminalType.ITERM2)
    return resolver


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    return FakeRunner
