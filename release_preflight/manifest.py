"""package.json loading."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from .models import PackageManifest, PreflightError


def load_manifest(package_dir: Path) -> PackageManifest:
    """Read package.json from package_dir.

    Raises:
        PreflightError: If the file is missing, not JSON, or lacks a name
            or version.
    """
    path = package_dir / "package.json"
    if not path.exists():
        raise PreflightError(f"No package.json found in {package_dir}")

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise PreflightError(f"Invalid JSON in {path}: {exc}") from exc

    try:
        return PackageManifest.model_validate(data)
    except ValidationError as exc:
        raise PreflightError(f"Invalid package.json at {path}:\n{exc}") from exc
