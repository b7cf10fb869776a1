"""Detection of the terminal application hosting the current process.

Resolution runs an ordered chain of strategies and takes the first
conclusive answer:

1. environment markers set by specific terminals and IDEs,
2. the most recently active tmux client (only inside tmux),
3. a walk up the process tree.

A strategy returns ``None`` when it cannot decide.  Lookup failures
anywhere in the chain are inconclusive, never fatal: the worst outcome
is ``TerminalType.UNKNOWN``.
"""
import logging
import os
from typing import Awaitable, Callable, Mapping, Optional

from src.notify.errors import NotifyError
from src.notify.models import ActiveClientInfo, TerminalType
from src.notify.runner import CommandRunner, run_command

logger = logging.getLogger(__name__)

MAX_PROCESS_DEPTH = 10

# Substring of a process command name -> terminal.  Order matters:
# Cursor ships a "Cursor Helper", VS Code a "Code Helper".
PROCESS_NAME_TABLE: tuple[tuple[str, TerminalType], ...] = (
    ("Cursor", TerminalType.CURSOR),
    ("Code", TerminalType.VSCODE),
    ("code-insiders", TerminalType.VSCODE),
    ("iTerm2", TerminalType.ITERM2),
    ("Terminal", TerminalType.TERMINAL),
    ("alacritty", TerminalType.ALACRITTY),
)

TERM_PROGRAM_VALUES = {
    "iTerm.app": TerminalType.ITERM2,
    "Apple_Terminal": TerminalType.TERMINAL,
    "alacritty": TerminalType.ALACRITTY,
}

Strategy = Callable[[], Awaitable[Optional[TerminalType]]]


def match_process_name(command: str) -> Optional[TerminalType]:
    """Map a process command name to a terminal, first table hit wins."""
    for needle, terminal in PROCESS_NAME_TABLE:
        if needle in command:
            return terminal
    return None


def detect_from_environment(environ: Mapping[str, str]) -> Optional[TerminalType]:
    """Check terminal-specific environment variables, most specific first."""
    if environ.get("CURSOR_TRACE_ID"):
        return TerminalType.CURSOR

    ipc_hook = environ.get("VSCODE_IPC_HOOK_CLI")
    if ipc_hook:
        if "Cursor" in ipc_hook:
            return TerminalType.CURSOR
        return TerminalType.VSCODE

    if environ.get("VSCODE_REMOTE") or environ.get("VSCODE_PID"):
        return TerminalType.VSCODE

    if environ.get("ALACRITTY_WINDOW_ID") or environ.get("ALACRITTY_SOCKET"):
        return TerminalType.ALACRITTY

    term_program = environ.get("TERM_PROGRAM")
    if term_program:
        return TERM_PROGRAM_VALUES.get(term_program)

    return None


def select_active_client(clients: list[ActiveClientInfo]) -> Optional[ActiveClientInfo]:
    """Client with the latest activity; on a tie the first listed wins."""
    active: Optional[ActiveClientInfo] = None
    for client in clients:
        if active is None or client.activity > active.activity:
            active = client
    return active


def _parse_clients(output: str) -> list[ActiveClientInfo]:
    clients = []
    for line in output.strip().split("\n"):
        if not line:
            continue
        parts = line.split("|")
        if len(parts) < 3:
            continue
        try:
            activity = int(parts[2])
        except ValueError:
            activity = 0
        clients.append(ActiveClientInfo(tty=parts[0], session=parts[1], activity=activity))
    return clients


class TerminalResolver:
    """Resolves the hosting terminal from an environment snapshot.

    Args:
        environ: Read-only environment mapping. Defaults to a copy of
            ``os.environ`` taken at construction.
        run: Command runner used for every OS query.
        pid: Process to start the process-tree walk from.
        tmux: tmux executable.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        run: CommandRunner = run_command,
        pid: Optional[int] = None,
        tmux: str = "tmux",
    ) -> None:
        self._environ = dict(os.environ) if environ is None else environ
        self._run = run
        self._pid = os.getpid() if pid is None else pid
        self._tmux = tmux

    @property
    def strategies(self) -> tuple[Strategy, ...]:
        return (
            self._from_environment,
            self._from_tmux_client,
            self._from_process_tree,
        )

    async def resolve(self) -> TerminalType:
        for strategy in self.strategies:
            try:
                terminal = await strategy()
            except NotifyError as e:
                logger.debug("Strategy %s inconclusive: %s", strategy.__name__, e)
                continue
            except Exception:
                logger.warning("Strategy %s failed unexpectedly", strategy.__name__, exc_info=True)
                continue
            if terminal is not None:
                logger.debug("Terminal resolved by %s: %s", strategy.__name__, terminal.value)
                return terminal
        return TerminalType.UNKNOWN

    async def _from_environment(self) -> Optional[TerminalType]:
        return detect_from_environment(self._environ)

    # -- tmux active client ------------------------------------------------

    async def _from_tmux_client(self) -> Optional[TerminalType]:
        if not self._environ.get("TMUX"):
            return None

        client = await self.get_active_client()
        if client is not None:
            terminal = await self._detect_from_tty(client.tty)
            if terminal is not None:
                return terminal

        terminal = await self._detect_from_client_termname()
        if terminal is not None:
            return terminal
        return await self._detect_from_global_environment()

    async def get_active_client(self) -> Optional[ActiveClientInfo]:
        """Most recently active client attached to the caller's session."""
        if not self._environ.get("TMUX_PANE"):
            return None
        try:
            session = (await self._run(
                self._tmux, ["display-message", "-p", "#{session_name}"]
            )).strip()
            if not session:
                return None
            output = await self._run(self._tmux, [
                "list-clients", "-t", session,
                "-F", "#{client_tty}|#{client_session}|#{client_activity}",
            ])
        except NotifyError as e:
            logger.debug("tmux client lookup failed: %s", e)
            return None
        return select_active_client(_parse_clients(output))

    async def _detect_from_tty(self, tty: str) -> Optional[TerminalType]:
        """Match the processes holding the client's TTY open."""
        try:
            output = await self._run("lsof", [tty])
        except NotifyError as e:
            logger.debug("lsof %s failed: %s", tty, e)
            return None

        for line in output.strip().split("\n")[1:]:
            parts = line.split()
            if len(parts) < 2:
                continue
            try:
                command = (await self._run("ps", ["-p", parts[1], "-o", "comm="])).strip()
            except NotifyError:
                continue
            terminal = match_process_name(command)
            if terminal is not None:
                return terminal
        return None

    async def _detect_from_client_termname(self) -> Optional[TerminalType]:
        try:
            termname = await self._run(
                self._tmux, ["display-message", "-p", "#{client_termname}"]
            )
        except NotifyError as e:
            logger.debug("tmux client_termname failed: %s", e)
            return None
        if "iterm" in termname or "iTerm" in termname:
            return TerminalType.ITERM2
        if "Apple_Terminal" in termname:
            return TerminalType.TERMINAL
        return None

    async def _detect_from_global_environment(self) -> Optional[TerminalType]:
        try:
            output = await self._run(
                self._tmux, ["show-environment", "-g", "TERM_PROGRAM"]
            )
        except NotifyError as e:
            logger.debug("tmux show-environment failed: %s", e)
            return None
        if "TERM_PROGRAM=iTerm.app" in output:
            return TerminalType.ITERM2
        if "TERM_PROGRAM=Apple_Terminal" in output:
            return TerminalType.TERMINAL
        return None

    # -- process tree ------------------------------------------------------

    async def _from_process_tree(self) -> Optional[TerminalType]:
        pid = self._pid
        for _ in range(MAX_PROCESS_DEPTH):
            try:
                output = await self._run("ps", ["-p", str(pid), "-o", "ppid=,comm="])
            except NotifyError as e:
                logger.debug("ps for pid %s failed: %s", pid, e)
                return None

            parts = output.strip().split(None, 1)
            command = parts[1] if len(parts) > 1 else ""
            terminal = match_process_name(command)
            if terminal is not None:
                return terminal

            try:
                ppid = int(parts[0]) if parts else 0
            except ValueError:
                return None
            if ppid in (0, 1):
                return None
            pid = ppid
        return None
