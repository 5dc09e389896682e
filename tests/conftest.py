"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from release_preflight.models import PackageManifest


@pytest.fixture(autouse=True)
def _clear_test_run_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests control test-run mode explicitly."""
    monkeypatch.delenv("PREFLIGHT_ENV", raising=False)


@pytest.fixture
def manifest() -> PackageManifest:
    """A public package on the default registry."""
    return PackageManifest(name="my-package", version="1.2.0")


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    """Create a temporary package directory with a package.json."""
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "my-package", "version": "1.2.0", "license": "MIT"})
    )
    return tmp_path
