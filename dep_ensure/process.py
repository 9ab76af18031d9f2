"""The `dep ensure` build process.

This module handles:
- Running ``dep ensure`` in the application workspace
- Pointing dep at the cache layer through ``DEPCACHEDIR``
- Capturing output and enforcing an optional timeout
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path

from dep_ensure.logs import Emitter

logger = logging.getLogger(__name__)


class BuildProcessError(Exception):
    """Raised when `dep ensure` fails."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        code: str = "build_error",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.code = code


class DepEnsureProcess:
    """Build process that runs ``dep ensure``.

    Args:
        dep_path: The dep executable.
        depcachedir: Cache directory handed to dep via ``DEPCACHEDIR``.
        timeout: Timeout in seconds (None = no timeout).
        emitter: Where to write dep's output when it fails.
    """

    def __init__(
        self,
        dep_path: str = "dep",
        depcachedir: Path | None = None,
        timeout: int | None = None,
        emitter: Emitter | None = None,
    ) -> None:
        self.dep_path = dep_path
        self.depcachedir = depcachedir
        self.timeout = timeout
        self.emitter = emitter

    def command(self) -> list[str]:
        """Return the command line to execute."""
        return [self.dep_path, "ensure"]

    def environment(self) -> dict[str, str]:
        """Return the environment for the dep subprocess."""
        env = dict(os.environ)
        if self.depcachedir is not None:
            env["DEPCACHEDIR"] = str(self.depcachedir)
        return env

    def execute(self, workspace: Path) -> None:
        """Run ``dep ensure`` in the workspace.

        Args:
            workspace: Application source directory.

        Raises:
            BuildProcessError: If dep cannot start, times out, or exits
                non-zero.
        """
        cmd = self.command()
        cmd_str = shlex.join(cmd)
        logger.debug("Executing: %s", cmd_str)
        logger.debug("Working directory: %s", workspace)

        try:
            result = subprocess.run(
                cmd,
                cwd=workspace,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout,
                env=self.environment(),
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            error_message = f"dep ensure timed out after {self.timeout} seconds"
            logger.debug(error_message)
            raise BuildProcessError(
                error_message,
                exit_code=-1,
                code="build_timeout",
            ) from e
        except OSError as e:
            error_message = f"failed to execute '{cmd_str}': {e}"
            logger.debug(error_message)
            raise BuildProcessError(
                error_message,
                exit_code=None,
                code="execution_error",
            ) from e

        if result.returncode != 0:
            if self.emitter is not None and result.stdout:
                self.emitter.detail(result.stdout)
            error_message = (
                f"failed to execute '{cmd_str}': exit status {result.returncode}"
            )
            logger.debug(error_message)
            raise BuildProcessError(error_message, exit_code=result.returncode)

        logger.debug("dep ensure output:\n%s", result.stdout)


__all__ = ["BuildProcessError", "DepEnsureProcess"]
