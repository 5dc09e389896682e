"""Tests for release_preflight.manifest."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from release_preflight.manifest import load_manifest
from release_preflight.models import PreflightError


class TestLoadManifest:
    def test_loads_package_json(self, package_dir: Path) -> None:
        manifest = load_manifest(package_dir)
        assert manifest.name == "my-package"
        assert manifest.version == "1.2.0"
        assert manifest.private is False

    def test_reads_private_and_publish_config(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(
            json.dumps(
                {
                    "name": "@scope/internal",
                    "version": "0.1.0",
                    "private": True,
                    "publishConfig": {"registry": "https://npm.example.com"},
                }
            )
        )

        manifest = load_manifest(tmp_path)

        assert manifest.private is True
        assert manifest.is_external_registry is True

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(PreflightError, match="No package.json found"):
            load_manifest(tmp_path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{not json")
        with pytest.raises(PreflightError, match="Invalid JSON"):
            load_manifest(tmp_path)

    def test_missing_version(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"name": "my-package"}')
        with pytest.raises(PreflightError, match="Invalid package.json"):
            load_manifest(tmp_path)

    @pytest.mark.parametrize("version", ["1.2", "latest", ""])
    def test_version_must_be_semver(self, tmp_path: Path, version: str) -> None:
        (tmp_path / "package.json").write_text(
            json.dumps({"name": "my-package", "version": version})
        )
        with pytest.raises(PreflightError, match="not a valid semver version"):
            load_manifest(tmp_path)
