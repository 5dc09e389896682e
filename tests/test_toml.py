"""Tests for release_preflight.toml."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_preflight.models import PreflightError, RunOptions
from release_preflight.toml import CONFIG_FILENAME, load_config, resolve_options


class TestLoadConfig:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_config(tmp_path) == {}

    def test_reads_keys(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            '# release settings\ntag = "next"\ntag-prefix = "release-"\n'
        )
        assert load_config(tmp_path) == {"tag": "next", "tag_prefix": "release-"}

    def test_unknown_keys(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('tag = "next"\nregistry = "x"\n')
        with pytest.raises(PreflightError, match="Unknown keys.*registry"):
            load_config(tmp_path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("tag = \n")
        with pytest.raises(PreflightError, match="Invalid TOML"):
            load_config(tmp_path)


class TestResolveOptions:
    def test_defaults(self, tmp_path: Path) -> None:
        assert resolve_options(tmp_path) == RunOptions()

    def test_config_used(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('tag = "beta"\n')
        assert resolve_options(tmp_path) == RunOptions(tag="beta")

    def test_flags_override_config(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('tag = "beta"\ntag-prefix = "v"\n')

        options = resolve_options(tmp_path, tag="next", tag_prefix="")

        assert options == RunOptions(tag="next", tag_prefix="")
