"""Git operations used by the preflight checks."""

from __future__ import annotations

import re
import subprocess

from .models import PreflightError
from .shell import git
from .versions import parse_version

MIN_GIT_VERSION = "2.11.0"

_GIT_VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


def git_version() -> str:
    """Return the installed git version as "X.Y.Z".

    Platform suffixes like "2.39.2.windows.1" or "(Apple Git-143)" are
    dropped.
    """
    output = git("version")
    match = _GIT_VERSION_RE.search(output)
    if not match:
        raise PreflightError(f"Could not determine git version from `{output}`")
    return ".".join(match.groups())


def verify_recent_git_version() -> None:
    """Fail if git is older than MIN_GIT_VERSION."""
    installed = git_version()
    if parse_version(installed) < parse_version(MIN_GIT_VERSION):
        raise PreflightError(f"Please upgrade to git>={MIN_GIT_VERSION} or newer.")


def _git_failure(exc: subprocess.CalledProcessError, fallback: str) -> PreflightError:
    message = (exc.stderr or "").strip().replace("fatal:", "Git fatal error:")
    return PreflightError(message or fallback)


def verify_remote_is_valid() -> None:
    """Fail if the origin remote cannot be reached."""
    try:
        git("ls-remote", "origin", "HEAD")
    except subprocess.CalledProcessError as exc:
        raise _git_failure(exc, "Git remote `origin` is not valid.") from exc


def fetch() -> None:
    try:
        git("fetch")
    except subprocess.CalledProcessError as exc:
        raise _git_failure(exc, "Could not fetch from the git remote.") from exc


def tag_exists_on_remote(tag_name: str) -> bool:
    """Return True if tag_name resolves after a fetch.

    `git rev-parse --quiet --verify` exits non-zero without output when the
    ref is missing; any other failure is propagated.
    """
    try:
        rev = git("rev-parse", "--quiet", "--verify", f"refs/tags/{tag_name}")
    except subprocess.CalledProcessError as exc:
        if not (exc.stdout or "").strip() and not (exc.stderr or "").strip():
            return False
        raise
    return bool(rev)


def verify_tag_does_not_exist_on_remote(tag_name: str) -> None:
    if tag_exists_on_remote(tag_name):
        raise PreflightError(f"Git tag `{tag_name}` already exists.")
