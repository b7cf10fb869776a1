"""External command execution.

Every OS query in the pipeline (tmux, ps, lsof, git, osascript) goes
through :func:`run_command`.  Callers decide whether a failure is fatal
or just means "try the next strategy".
"""
import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from src.notify.errors import CommandError, SpawnError

logger = logging.getLogger(__name__)

CommandRunner = Callable[..., Awaitable[str]]


async def run_command(
    program: str, args: Sequence[str], *, detached: bool = False,
) -> str:
    """Run ``program`` with ``args`` and return its stdout.

    Uses ``create_subprocess_exec`` so arguments are never interpreted by a
    shell.  With ``detached`` the child gets its own session so it outlives
    the caller's process group.

    Raises:
        SpawnError: If the program cannot be launched.
        CommandError: If the program exits with a non-zero status.
    """
    logger.debug("Running %s %s", program, " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            program, *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=detached,
        )
    except OSError as e:
        raise SpawnError(program, str(e)) from e

    stdout, stderr = await proc.communicate()
    out = stdout.decode(errors="replace") if stdout else ""
    err = stderr.decode(errors="replace") if stderr else ""
    if proc.returncode != 0:
        raise CommandError(program, args, proc.returncode, stderr=err, stdout=out)
    return out
