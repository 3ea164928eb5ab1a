"""Git branch switching and path restoration for the GHES sync."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

from ..logging import get_logger
from ..process import CommandResult, run_command

logger = get_logger("git.branch")


class BranchSync:
    """Wraps the git commands used to move content between branches."""

    def __init__(
        self,
        repo_path: Path | str,
        *,
        runner: Callable[..., CommandResult] | None = None,
        timeout: float | None = None,
    ) -> None:
        self.repo_path = Path(repo_path)
        self._runner = runner or run_command
        self._timeout = timeout

    def switch(self, branch: str) -> None:
        """Check out ``branch`` in the working tree."""
        logger.debug("git checkout %s", branch)
        self._git(["checkout", branch])

    def restore(self, source_branch: str, paths: Sequence[str]) -> bool:
        """Restore ``paths`` from ``source_branch``; returns False when nothing was requested."""
        if not paths:
            return False
        logger.debug("Restoring %d paths from %s", len(paths), source_branch)
        self._git(["checkout", source_branch, "--", *paths])
        return True

    def _git(self, args: Sequence[str]) -> CommandResult:
        return self._runner("git", list(args), cwd=self.repo_path, timeout=self._timeout)


__all__ = ["BranchSync"]
