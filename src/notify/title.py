"""Default notification title derived from the git repository."""
import logging
import posixpath
import re
from typing import Optional

from src.notify.errors import NotifyError
from src.notify.runner import CommandRunner, run_command

logger = logging.getLogger(__name__)

# https://github.com/user/repo.git and git@github.com:user/repo.git
REMOTE_URL_PATTERN = re.compile(r"[/:]([\w-]+)/([\w-]+?)(\.git)?$")


def repo_name_from_url(url: str) -> Optional[str]:
    match = REMOTE_URL_PATTERN.search(url.strip())
    return match.group(2) if match else None


class TitleResolver:
    """Best-effort repository name lookup; returns None on any failure."""

    def __init__(self, run: CommandRunner = run_command) -> None:
        self._run = run

    async def resolve(self) -> Optional[str]:
        try:
            remote_url = await self._remote_url()
            if remote_url:
                name = repo_name_from_url(remote_url)
                if name:
                    return name
            return await self._toplevel_name()
        except NotifyError as e:
            logger.debug("Could not derive title from git: %s", e)
            return None

    async def _remote_url(self) -> str:
        try:
            output = await self._run("git", ["config", "--get", "remote.origin.url"])
        except NotifyError:
            # No remote configured; the repository root may still exist.
            return ""
        return output.strip()

    async def _toplevel_name(self) -> Optional[str]:
        root = (await self._run("git", ["rev-parse", "--show-toplevel"])).strip()
        return posixpath.basename(root.rstrip("/")) or None
