"""Data model for notifications and their click payload."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError, field_validator

from src.notify.errors import PayloadError


class TerminalType(Enum):
    """Terminal application hosting the caller."""
    VSCODE = "VSCode"
    CURSOR = "Cursor"
    ITERM2 = "iTerm2"
    TERMINAL = "Terminal"
    ALACRITTY = "alacritty"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class WorkspaceCoordinates:
    """A tmux target: session, optionally window, optionally pane.

    A pane without a window is not a legal target.  Use :meth:`from_parts`
    to normalize loose user input.
    """

    session: str
    window: Optional[str] = None
    pane: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.session:
            raise ValueError("Session is required for workspace coordinates")
        if self.pane is not None and self.window is None:
            raise ValueError("Pane requires a window")

    @classmethod
    def from_parts(
        cls,
        session: Optional[str],
        window: Optional[str] = None,
        pane: Optional[str] = None,
    ) -> Optional["WorkspaceCoordinates"]:
        """Build coordinates, dropping trailing fields that lack a parent."""
        if not session:
            return None
        window = window or None
        pane = (pane or None) if window is not None else None
        return cls(session=session, window=window, pane=pane)

    @property
    def target(self) -> str:
        """tmux target string, e.g. ``dev:1.0``."""
        target = self.session
        if self.window is not None:
            target += f":{self.window}"
            if self.pane is not None:
                target += f".{self.pane}"
        return target


@dataclass(frozen=True)
class ActiveClientInfo:
    """The most recently active tmux client of a session."""
    tty: str
    session: str
    activity: int


class ClickPayload(BaseModel):
    """Data carried by a notification to its click handler."""

    model_config = ConfigDict(frozen=True)

    terminal: TerminalType = TerminalType.UNKNOWN
    session: Optional[str] = None
    window: Optional[str] = None
    pane: Optional[str] = None

    @field_validator("terminal", mode="before")
    @classmethod
    def coerce_terminal(cls, v: object) -> object:
        if isinstance(v, TerminalType):
            return v
        try:
            return TerminalType(v)
        except ValueError:
            return TerminalType.UNKNOWN

    @classmethod
    def build(
        cls, terminal: TerminalType, coordinates: Optional[WorkspaceCoordinates],
    ) -> "ClickPayload":
        if coordinates is None:
            return cls(terminal=terminal)
        return cls(
            terminal=terminal,
            session=coordinates.session,
            window=coordinates.window,
            pane=coordinates.pane,
        )

    @property
    def coordinates(self) -> Optional[WorkspaceCoordinates]:
        return WorkspaceCoordinates.from_parts(self.session, self.window, self.pane)

    def encode(self) -> str:
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def decode(cls, raw: str) -> "ClickPayload":
        try:
            return cls.model_validate_json(raw)
        except PydanticValidationError as e:
            raise PayloadError(f"Invalid click payload: {e}") from e


@dataclass(frozen=True)
class NotificationRequest:
    """One notification, fully resolved and ready for the notifier."""

    title: str
    message: str
    sound: str
    terminal: TerminalType = TerminalType.UNKNOWN
    coordinates: Optional[WorkspaceCoordinates] = None

    @property
    def payload(self) -> ClickPayload:
        return ClickPayload.build(self.terminal, self.coordinates)
