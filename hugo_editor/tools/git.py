"""Git operations against the site repository."""

import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from hugo_editor.core.models import ExternalToolError

logger = logging.getLogger(__name__)

COMMIT_MESSAGE_FORMAT = "Auto-publish: %Y-%m-%d %H:%M:%S"


class GitRepository:
    """Thin wrapper around the git CLI for the site's working tree."""

    def __init__(self, repo_dir: Path, remote: str = "origin"):
        """Initialize GitRepository.

        Args:
            repo_dir: Working tree the commands run in
            remote: Remote that push targets
        """
        self.repo_dir = Path(repo_dir)
        self.remote = remote

    def has_changes(self) -> bool:
        """Whether the working tree has anything to commit."""
        output = self._git(["status", "--porcelain"])
        return bool(output.strip())

    def commit(self, message: Optional[str] = None) -> str:
        """Stage everything and commit it.

        Args:
            message: Commit message (default: timestamped auto-publish message)

        Returns:
            The commit message used
        """
        if message is None:
            message = datetime.now().strftime(COMMIT_MESSAGE_FORMAT)
        self._git(["add", "."])
        self._git(["commit", "-m", message])
        logger.info("Created git commit: %s", message)
        return message

    def current_branch(self) -> str:
        return self._git(["rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def push(self) -> str:
        """Push the current branch to the configured remote.

        Returns:
            The branch that was pushed
        """
        branch = self.current_branch()
        logger.info("Pushing branch %s to %s", branch, self.remote)
        self._git(["push", self.remote, branch])
        logger.info("Successfully pushed changes to remote")
        return branch

    def _git(self, args: List[str]) -> str:
        command = ["git"] + args
        logger.debug("Running %s in %s", " ".join(command), self.repo_dir)
        try:
            result = subprocess.run(
                command,
                cwd=self.repo_dir,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise ExternalToolError(
                f"git {args[0]} failed: {stderr or f'exit status {e.returncode}'}",
                command=" ".join(command),
                returncode=e.returncode,
                stderr=stderr,
            ) from e
        except OSError as e:
            raise ExternalToolError(
                f"Failed to run git: {e}",
                command=" ".join(command),
            ) from e
        return result.stdout
