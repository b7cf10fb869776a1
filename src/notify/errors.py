"""Exception types for the notification pipeline."""
from typing import Sequence


class NotifyError(Exception):
    """Base exception for all notification errors."""
    pass


class CommandError(NotifyError):
    """External command exited with a non-zero status."""
    def __init__(self, program: str, args: Sequence[str], exit_code: int | None,
                 stderr: str = "", stdout: str = "") -> None:
        super().__init__(f"Command failed: {program} {' '.join(args)}\n{stderr}".rstrip())
        self.program = program
        self.args_list = list(args)
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout


class SpawnError(NotifyError):
    """External command could not be launched at all."""
    def __init__(self, program: str, reason: str) -> None:
        super().__init__(f"Failed to launch {program}: {reason}")
        self.program = program
        self.reason = reason


class ConfigurationError(NotifyError):
    """Notifier executable or configuration file is unusable."""
    pass


class ValidationError(NotifyError):
    """Caller-supplied notification input is invalid."""
    pass


class PayloadError(NotifyError):
    """Click payload could not be decoded."""
    pass


class SessionNotFoundError(NotifyError):
    """A named tmux session does not exist."""
    def __init__(self, session: str, available: list[str]) -> None:
        super().__init__(f"Session '{session}' does not exist")
        self.session = session
        self.available = available
