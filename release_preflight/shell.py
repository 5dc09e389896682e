"""Shell utilities.

Thin wrappers around subprocess calls to git and npm, plus output
formatting helpers.
"""

from __future__ import annotations

import subprocess
from typing import Optional

from .models import PreflightError


def _run(cmd: list[str], timeout: Optional[float]) -> str:
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, check=True, timeout=timeout
        )
    except FileNotFoundError as exc:
        raise PreflightError(f"`{cmd[0]}` is not installed or not on PATH.") from exc
    return result.stdout.strip()


def git(*args: str, timeout: Optional[float] = None) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "ls-remote", "origin", "HEAD").
        timeout: Seconds before TimeoutExpired is raised.

    Returns:
        Stripped stdout from the git command.

    Raises:
        CalledProcessError: On non-zero exit.
        PreflightError: If git is not installed.
    """
    return _run(["git", *args], timeout)


def npm(*args: str, timeout: Optional[float] = None) -> str:
    """Run an npm command and return stdout. See git() for arguments."""
    return _run(["npm", *args], timeout)


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
