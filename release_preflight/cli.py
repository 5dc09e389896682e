"""CLI entry point for release-preflight."""

from __future__ import annotations

from pathlib import Path

import click

from release_preflight.checks import build_checklist, run_checklist
from release_preflight.manifest import load_manifest
from release_preflight.models import PreflightError
from release_preflight.toml import resolve_options


@click.group()
@click.version_option(package_name="release-preflight")
def cli() -> None:
    """Pre-publish checks for npm packages."""


@cli.command()
@click.argument("version")
@click.option("--tag", default=None, help="Dist-tag to publish under.")
@click.option(
    "--tag-prefix",
    default=None,
    help="Git tag prefix. Defaults to npm's tag-version-prefix.",
)
@click.option(
    "--package-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory containing package.json.",
)
def check(
    version: str, tag: str | None, tag_prefix: str | None, package_dir: Path
) -> None:
    """Run the prerequisite checks for publishing VERSION.

    VERSION is major, minor, patch, premajor, preminor, prepatch,
    prerelease, or an explicit semver version.
    """
    try:
        manifest = load_manifest(package_dir)
        options = resolve_options(package_dir, tag=tag, tag_prefix=tag_prefix)
        context = run_checklist(build_checklist(version, manifest, options))
    except PreflightError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo()
    click.echo(f"✓ Ready to publish {manifest.name} {manifest.version} → {context.new_version}")
