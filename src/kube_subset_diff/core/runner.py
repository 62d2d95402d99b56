"""Subprocess wrapper with error handling."""

from __future__ import annotations

import subprocess

from kube_subset_diff.config import DEFAULT_TIMEOUT
from kube_subset_diff.observability.logging import get_logger

log = get_logger("runner")


class RunError(Exception):
    """Raised when a subprocess exits with non-zero status or cannot run."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Command {cmd!r} failed (exit {returncode}): {stderr.strip()}"
        )


def run(cmd: list[str], timeout: int = DEFAULT_TIMEOUT, stdin: str | None = None) -> str:
    """Run subprocess, capture stdout, raise RunError on any failure."""
    log.debug("running command", cmd=cmd, timeout=timeout)
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=stdin,
        )
    except subprocess.TimeoutExpired as e:
        raise RunError(cmd, -1, f"timed out after {timeout}s") from e
    except FileNotFoundError as e:
        # Same status a shell reports for a missing executable
        raise RunError(cmd, 127, f"executable not found: {cmd[0]}") from e
    if result.returncode != 0:
        raise RunError(cmd, result.returncode, result.stderr)
    return result.stdout
