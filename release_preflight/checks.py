"""Preflight checklist: ping → npm → auth → git → remote → version → tag.

Builds the ordered list of checks run before publishing a package:
1. Ping the npm registry
2. Check the npm CLI is recent enough
3. Verify the logged in user may publish the package
4. Check the git CLI is recent enough
5. Check the git remote is reachable
6. Validate the requested version and compute the new version
7. Refuse pre-releases without an explicit dist-tag
8. Make sure the release tag does not already exist

Order matters: check 6 sets ``context.new_version`` which checks 7 and 8
read. The first failing check aborts the run.
"""

from __future__ import annotations

import os
import subprocess

from . import git, npm
from .models import (
    Check,
    Checklist,
    PackageManifest,
    PreflightContext,
    PreflightError,
    RunOptions,
)
from .shell import step
from .versions import (
    SEMVER_INCREMENTS,
    is_lower_than_or_equal,
    is_prerelease,
    is_valid_input,
    new_version_from,
    parse_version,
)

MIN_NPM_VERSION = "6.8.0"
TEST_RUN_ENV = "PREFLIGHT_ENV"


def is_test_run() -> bool:
    return os.environ.get(TEST_RUN_ENV) == "test"


def skip_registry(context: PreflightContext) -> bool:
    """Private and external-registry packages never touch the default registry."""
    manifest = context.manifest
    return manifest.private or manifest.is_external_registry


def skip_authorization(context: PreflightContext) -> bool:
    return is_test_run() or skip_registry(context)


def ping_registry(context: PreflightContext) -> None:
    npm.check_connection()


def check_npm_version(context: PreflightContext) -> None:
    if parse_version(npm.npm_version()) < parse_version(MIN_NPM_VERSION):
        raise PreflightError(f"Please upgrade to npm@{MIN_NPM_VERSION} or newer")


def verify_user_can_publish(context: PreflightContext) -> None:
    """Require write permission on the package.

    Unpublished packages have no collaborators yet, so there is nothing to
    verify.
    """
    user = npm.username()

    collaborators = npm.collaborators(context.manifest)
    if collaborators is None:
        return

    permissions = collaborators.get(user)
    if not permissions or "write" not in permissions:
        raise PreflightError(
            "You do not have write permissions required to publish this package."
        )


def verify_git_version(context: PreflightContext) -> None:
    git.verify_recent_git_version()


def verify_git_remote(context: PreflightContext) -> None:
    git.verify_remote_is_valid()


def validate_version(context: PreflightContext) -> None:
    """Compute the new version and store it on the context."""
    if not is_valid_input(context.request):
        raise PreflightError(
            f"Version should be either {', '.join(SEMVER_INCREMENTS)}, "
            "or a valid semver version."
        )

    current = context.manifest.version
    new_version = new_version_from(current, context.request)

    if is_lower_than_or_equal(new_version, current):
        raise PreflightError(
            f"New version `{new_version}` should be higher than current version `{current}`"
        )

    context.new_version = new_version


def check_prerelease(context: PreflightContext) -> None:
    new_version = context.require_new_version()
    if (
        not context.manifest.private
        and is_prerelease(new_version)
        and not context.options.tag
    ):
        raise PreflightError(
            "You must specify a dist-tag using --tag when publishing a pre-release "
            'version. This prevents accidentally tagging unstable versions as "latest". '
            "https://docs.npmjs.com/cli/dist-tag"
        )


def tag_prefix_for(options: RunOptions) -> str:
    """Return the git tag prefix, preferring an explicit option over npm config."""
    if options.tag_prefix is not None:
        return options.tag_prefix
    return npm.tag_version_prefix()


def check_tag_existence(context: PreflightContext) -> None:
    new_version = context.require_new_version()
    git.fetch()
    tag = f"{tag_prefix_for(context.options)}{new_version}"
    git.verify_tag_does_not_exist_on_remote(tag)


def build_checklist(
    request: str, manifest: PackageManifest, options: RunOptions | None = None
) -> Checklist:
    """Build the ordered preflight checklist.

    Nothing runs at build time; ``request`` is validated by the
    "Validate version" check, not here.

    Args:
        request: Increment keyword (e.g. "minor") or explicit version.
        manifest: The package being published.
        options: Run options; defaults to no dist-tag and npm's tag prefix.
    """
    context = PreflightContext(
        request=request, manifest=manifest, options=options or RunOptions()
    )
    checks = [
        Check(title="Ping npm registry", skip=skip_registry, action=ping_registry),
        Check(title="Check npm version", action=check_npm_version),
        Check(
            title="Verify user is authenticated",
            skip=skip_authorization,
            action=verify_user_can_publish,
        ),
        Check(title="Verify git version is recent", action=verify_git_version),
        Check(title="Check git remote", action=verify_git_remote),
        Check(title="Validate version", action=validate_version),
        Check(title="Check for pre-release version", action=check_prerelease),
        Check(title="Check git tag existence", action=check_tag_existence),
    ]
    return Checklist(context=context, checks=checks)


def run_checklist(checklist: Checklist) -> PreflightContext:
    """Run checks in order, stopping at the first failure.

    Returns:
        The context, with ``new_version`` set.

    Raises:
        PreflightError: From the first failing check. A command that exits
            non-zero without a dedicated message is reported with the check
            title and its stderr.
    """
    step("Prerequisite checks")

    context = checklist.context
    for check in checklist.checks:
        if check.should_skip(context):
            print(f"  ↓ {check.title} [skipped]")
            continue
        try:
            check.action(context)
        except subprocess.CalledProcessError as exc:
            print(f"  ✖ {check.title}")
            detail = (exc.stderr or "").strip() or str(exc)
            raise PreflightError(f"{check.title} failed: {detail}") from exc
        except Exception:
            print(f"  ✖ {check.title}")
            raise
        print(f"  ✓ {check.title}")

    return context
