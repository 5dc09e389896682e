"""Version parsing and bumping utilities.

Bump requests are either one of SEMVER_INCREMENTS or an explicit version.
Increments follow npm's rules, so bumping a pre-release with ``patch``
finalises it instead of skipping a patch number.
"""

from __future__ import annotations

import semver

SEMVER_INCREMENTS = (
    "major",
    "minor",
    "patch",
    "premajor",
    "preminor",
    "prepatch",
    "prerelease",
)


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    A leading "v" is accepted ("v1.2.3" → "1.2.3").

    Raises:
        ValueError: If the string is not valid semver.
    """
    return semver.Version.parse(version_str.strip().removeprefix("v"))


def is_valid_version(version_str: str) -> bool:
    try:
        parse_version(version_str)
    except ValueError:
        return False
    return True


def is_valid_input(request: str) -> bool:
    """Return True for an increment keyword or a valid explicit version."""
    return request in SEMVER_INCREMENTS or is_valid_version(request)


def is_prerelease(version_str: str) -> bool:
    return parse_version(version_str).prerelease is not None


def _increment_prerelease(prerelease: str) -> str:
    """Increment the last numeric identifier, or append ".0" if there is none.

    Examples:
        "0" → "1"
        "beta.1" → "beta.2"
        "beta" → "beta.0"
    """
    parts = prerelease.split(".")
    for i in range(len(parts) - 1, -1, -1):
        if parts[i].isdigit():
            parts[i] = str(int(parts[i]) + 1)
            return ".".join(parts)
    return ".".join([*parts, "0"])


def increment(version: semver.Version, release_type: str) -> semver.Version:
    """Apply an increment keyword to a version.

    Build metadata is always dropped.

    Raises:
        ValueError: If release_type is not one of SEMVER_INCREMENTS.
    """
    pre = version.prerelease
    if release_type == "major":
        if pre and version.minor == 0 and version.patch == 0:
            return version.finalize_version()
        return version.bump_major()
    if release_type == "minor":
        if pre and version.patch == 0:
            return version.finalize_version()
        return version.bump_minor()
    if release_type == "patch":
        if pre:
            return version.finalize_version()
        return version.bump_patch()
    if release_type == "premajor":
        return version.bump_major().replace(prerelease="0")
    if release_type == "preminor":
        return version.bump_minor().replace(prerelease="0")
    if release_type == "prepatch":
        return version.bump_patch().replace(prerelease="0")
    if release_type == "prerelease":
        if not pre:
            return version.bump_patch().replace(prerelease="0")
        return semver.Version(
            version.major,
            version.minor,
            version.patch,
            prerelease=_increment_prerelease(pre),
        )
    raise ValueError(f"Unknown release type: {release_type}")


def new_version_from(current: str, request: str) -> str:
    """Compute the version a bump request produces from the current version.

    Examples:
        ("1.2.0", "minor") → "1.3.0"
        ("2.0.0", "prerelease") → "2.0.1-0"
        ("1.2.0", "v1.4.0") → "1.4.0"
    """
    if request in SEMVER_INCREMENTS:
        return str(increment(parse_version(current), request))
    return str(parse_version(request))


def is_lower_than_or_equal(version_str: str, other: str) -> bool:
    """Return True if version_str <= other by semver precedence."""
    return parse_version(version_str).compare(parse_version(other)) <= 0
