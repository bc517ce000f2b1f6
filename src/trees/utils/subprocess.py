"""Subprocess execution with fully captured output.

This module runs an external command to completion and hands back exit code,
stdout and stderr as a single immutable result. A non-zero exit is data, not
an exception: only a failure to launch the process at all is raised.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from trees.errors import ProcessLaunchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Snapshot of one finished subprocess invocation."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """Execute commands and capture their output.

    Provides:
    - argv-only execution (no shell interpolation)
    - separate capture of stdout and stderr
    - optional deadline with kill-on-expiry
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        """Initialize a process runner.

        Args:
            timeout: Maximum execution time in seconds. ``None`` waits forever.
        """
        self.timeout = timeout

    def run(
        self,
        command: str,
        arguments: Sequence[str],
        cwd: Optional[Path] = None,
    ) -> ProcessResult:
        """Run a command to completion.

        Args:
            command: Executable to run
            arguments: Arguments passed to the executable
            cwd: Working directory for the subprocess

        Returns:
            ProcessResult with exit code and decoded output

        Raises:
            ProcessLaunchError: If the executable cannot be started, or if the
                deadline elapsed and the process was killed
        """
        argv = [command, *arguments]
        logger.debug(f"Running: {' '.join(argv)} (cwd={cwd})")

        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            # subprocess.run kills the child before re-raising
            raise ProcessLaunchError(
                f"{' '.join(argv)} timed out after {e.timeout} seconds"
            ) from e
        except FileNotFoundError as e:
            if cwd is not None and not Path(cwd).is_dir():
                raise ProcessLaunchError(f"Working directory does not exist: {cwd}") from e
            raise ProcessLaunchError(f"{command} is not installed or not in PATH") from e
        except OSError as e:
            raise ProcessLaunchError(f"Could not execute {command}: {e}") from e

        logger.debug(f"Exited with code {completed.returncode}: {' '.join(argv)}")
        return ProcessResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


def run_process(
    command: str,
    arguments: Sequence[str],
    cwd: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> ProcessResult:
    """Convenience function to run a command once.

    Args:
        command: Executable to run
        arguments: Arguments passed to the executable
        cwd: Working directory for the subprocess
        timeout: Maximum execution time in seconds

    Returns:
        ProcessResult for the finished process
    """
    return ProcessRunner(timeout=timeout).run(command, arguments, cwd)
