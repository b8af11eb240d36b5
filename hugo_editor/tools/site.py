"""Hugo process management: the preview server and the publish build."""

import logging
import shlex
import signal
import subprocess
from pathlib import Path
from typing import List, Optional

from hugo_editor.core.models import ExternalToolError

logger = logging.getLogger(__name__)


def split_command(command: str) -> List[str]:
    """Split a configured command line into arguments.

    Raises:
        ExternalToolError: If the command is empty or cannot be parsed
    """
    try:
        parts = shlex.split(command)
    except ValueError as e:
        raise ExternalToolError(f"Invalid command {command!r}: {e}", command=command) from e
    if not parts:
        raise ExternalToolError("Invalid command: empty", command=command)
    return parts


class SiteBuilder:
    """Owns the long-lived preview server and runs one-shot build commands.

    The preview server holds Hugo's output directory, so it is stopped while
    a publish build runs and started again afterwards.
    """

    def __init__(self, site_dir: Path, server_command: str = "hugo server -D", stop_timeout: float = 10.0):
        """Initialize SiteBuilder.

        Args:
            site_dir: Hugo site root, the working directory for all commands
            server_command: Command line for the preview server
            stop_timeout: Seconds to wait after SIGINT before killing the server
        """
        self.site_dir = Path(site_dir)
        self.server_command = server_command
        self.stop_timeout = stop_timeout
        self._process: Optional[subprocess.Popen] = None

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> None:
        """Start the preview server. Does nothing if it is already running."""
        if self.is_running:
            return

        args = split_command(self.server_command)
        logger.info("Starting Hugo server with command: %s", self.server_command)
        try:
            self._process = subprocess.Popen(args, cwd=self.site_dir)
        except OSError as e:
            raise ExternalToolError(
                f"Failed to start Hugo server: {e}",
                command=self.server_command,
            ) from e

    def stop(self) -> None:
        """Stop the preview server: SIGINT, bounded wait, then kill."""
        process = self._process
        if process is None:
            return
        self._process = None
        if process.poll() is not None:
            return

        logger.info("Stopping Hugo server...")
        try:
            process.send_signal(signal.SIGINT)
        except OSError as e:
            logger.warning("Failed to interrupt Hugo server, killing it: %s", e)
            process.kill()
            process.wait()
            return

        try:
            process.wait(timeout=self.stop_timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Hugo server ignored SIGINT for %.0fs, killing it", self.stop_timeout)
            process.kill()
            process.wait()

    def run(self, command: str) -> None:
        """Run a one-shot command in the site directory and wait for it.

        Raises:
            ExternalToolError: If the command cannot be started or exits non-zero
        """
        args = split_command(command)
        logger.info("Running command: %s", command)
        try:
            returncode = subprocess.run(args, cwd=self.site_dir).returncode
        except OSError as e:
            raise ExternalToolError(f"Failed to run {command!r}: {e}", command=command) from e
        if returncode != 0:
            raise ExternalToolError(
                f"Command {command!r} exited with status {returncode}",
                command=command,
                returncode=returncode,
            )

    def rebuild(self, command: str) -> None:
        """Run the publish command with the preview server stopped.

        A preview server that was started before is restarted whether or not
        the command succeeded. A failed restart is logged, not raised: the
        outcome of the publish command is what the caller gets.
        """
        was_started = self._process is not None
        try:
            self.stop()
        except OSError as e:
            logger.warning("Failed to stop Hugo server: %s", e)

        try:
            self.run(command)
        finally:
            if was_started:
                self._restart()

    def _restart(self) -> None:
        logger.info("Restarting Hugo server...")
        try:
            self.start()
        except ExternalToolError as e:
            logger.error("Failed to restart Hugo server: %s", e)
