"""Configuration loading.

Settings live in an optional .release-preflight.toml next to package.json.
It is parsed with tomlkit, like the rest of the project's TOML handling.

Example:
    tag = "next"
    tag-prefix = "release-"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .models import PreflightError, RunOptions

CONFIG_FILENAME = ".release-preflight.toml"

# TOML key → RunOptions field
_KEYS = {"tag": "tag", "tag-prefix": "tag_prefix"}


def load_config(package_dir: Path) -> dict[str, Any]:
    """Load settings from package_dir/.release-preflight.toml.

    Returns an empty dict when the file does not exist.

    Raises:
        PreflightError: If the file is not valid TOML or has unknown keys.
    """
    path = package_dir / CONFIG_FILENAME
    if not path.exists():
        return {}

    try:
        doc = tomlkit.parse(path.read_text())
    except TOMLKitError as exc:
        raise PreflightError(f"Invalid TOML in {path}: {exc}") from exc

    unknown = sorted(set(doc.keys()) - set(_KEYS))
    if unknown:
        raise PreflightError(f"Unknown keys in {path}: {', '.join(unknown)}")

    return {_KEYS[key]: str(value) for key, value in doc.items()}


def resolve_options(
    package_dir: Path,
    *,
    tag: Optional[str] = None,
    tag_prefix: Optional[str] = None,
) -> RunOptions:
    """Merge config file settings with command-line overrides."""
    settings = load_config(package_dir)
    if tag is not None:
        settings["tag"] = tag
    if tag_prefix is not None:
        settings["tag_prefix"] = tag_prefix
    return RunOptions(**settings)
