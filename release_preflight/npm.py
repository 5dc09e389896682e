"""npm operations used by the preflight checks.

Each function shells out to the npm CLI and translates failures into
PreflightError where a user-facing message exists.
"""

from __future__ import annotations

import json
import subprocess
from typing import Optional

from .models import PackageManifest, PreflightError
from .shell import npm

PING_TIMEOUT = 15
DEFAULT_TAG_PREFIX = "v"


def check_connection() -> None:
    """Ping the default registry, giving up after PING_TIMEOUT seconds."""
    try:
        npm("ping", timeout=PING_TIMEOUT)
    except subprocess.TimeoutExpired as exc:
        raise PreflightError("Connection to npm registry timed out") from exc
    except subprocess.CalledProcessError as exc:
        raise PreflightError("Connection to npm registry failed") from exc


def npm_version() -> str:
    """Return the version of the npm CLI itself."""
    output = npm("version", "--json")
    try:
        return json.loads(output)["npm"]
    except (json.JSONDecodeError, KeyError, TypeError) as exc:
        raise PreflightError(
            f"Could not determine npm version from `npm version --json`: {output}"
        ) from exc


def username() -> str:
    """Return the user npm is logged in as."""
    try:
        return npm("whoami")
    except subprocess.CalledProcessError as exc:
        if "ENEEDAUTH" in (exc.stderr or ""):
            raise PreflightError(
                "You must be logged in. Use `npm login` and try again."
            ) from exc
        raise PreflightError(
            "Authentication error. Use `npm whoami` to troubleshoot."
        ) from exc


def collaborators(manifest: PackageManifest) -> Optional[dict[str, str]]:
    """Look up who may publish the package.

    Returns:
        Map of username → permissions (e.g. "read-write"), or None when the
        package has not been published yet.
    """
    try:
        output = npm("access", "ls-collaborators", manifest.name)
    except subprocess.CalledProcessError as exc:
        # Package does not exist yet
        if "code E404" in (exc.stderr or ""):
            return None
        raise

    if not output:
        return None
    return json.loads(output)


def tag_version_prefix() -> str:
    """Return npm's configured git tag prefix, falling back to "v" if npm fails."""
    try:
        prefix = npm("config", "get", "tag-version-prefix")
    except (subprocess.CalledProcessError, PreflightError):
        return DEFAULT_TAG_PREFIX
    return prefix
