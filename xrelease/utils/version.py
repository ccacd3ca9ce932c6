"""Semantic version parsing and bumping.

Version strings follow MAJOR.MINOR.PATCH, optionally followed by a
``-prerelease`` and/or ``+build`` suffix. Git tags carry a ``v`` prefix.
"""

import re
from typing import Literal, get_args

from xrelease.exceptions import VersionError

BumpType = Literal["major", "minor", "patch"]

BUMP_TYPES: tuple[str, ...] = get_args(BumpType)

# MAJOR.MINOR.PATCH with optional leading 'v', prerelease and build metadata
SEMVER_PATTERN = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

TAG_PREFIX = "v"


def _match(version_str: str) -> re.Match[str]:
    if not version_str or not version_str.strip():
        raise VersionError(
            "Empty version string",
            details="Version string cannot be empty or whitespace",
            fix_hint="Provide a valid semantic version (e.g., '1.2.3')",
        )

    match = SEMVER_PATTERN.match(version_str.strip())
    if not match:
        raise VersionError(
            f"Invalid version format: '{version_str}'",
            details="Version must follow semantic versioning: MAJOR.MINOR.PATCH",
            fix_hint="Use format like '1.2.3'",
        )
    return match


def bump_version(current: str, bump_type: BumpType | str) -> str:
    """Compute the next version according to semantic versioning rules.

    The targeted component is incremented and lower components reset to zero.
    A prerelease version is promoted to its release instead when the bump does
    not need to go further (``1.2.3-rc.1`` patch -> ``1.2.3``,
    ``1.3.0-rc.1`` minor -> ``1.3.0``, ``2.0.0-rc.1`` major -> ``2.0.0``).
    Build metadata is dropped.

    Args:
        current: Current version string (e.g., '1.2.3')
        bump_type: One of 'major', 'minor', 'patch'

    Returns:
        New version string without prefix

    Raises:
        VersionError: If current version or bump_type is invalid

    Examples:
        >>> bump_version('1.2.3', 'patch')
        '1.2.4'
        >>> bump_version('1.2.3', 'minor')
        '1.3.0'
        >>> bump_version('1.2.3', 'major')
        '2.0.0'
    """
    if bump_type not in BUMP_TYPES:
        raise VersionError(
            f"Invalid bump type: '{bump_type}'",
            details=f"Bump type must be one of: {', '.join(BUMP_TYPES)}",
            fix_hint="Use --major, --minor or --patch",
        )

    match = _match(current)
    major, minor, patch = int(match.group(1)), int(match.group(2)), int(match.group(3))
    prerelease = match.group(4)

    if bump_type == "major":
        if prerelease and minor == 0 and patch == 0:
            return f"{major}.0.0"
        return f"{major + 1}.0.0"
    if bump_type == "minor":
        if prerelease and patch == 0:
            return f"{major}.{minor}.0"
        return f"{major}.{minor + 1}.0"
    if prerelease:
        return f"{major}.{minor}.{patch}"
    return f"{major}.{minor}.{patch + 1}"


def tag_name(version: str) -> str:
    """Return the git tag name for a version.

    Examples:
        >>> tag_name('1.2.3')
        'v1.2.3'
    """
    return f"{TAG_PREFIX}{version}"


__all__ = [
    "bump_version",
    "tag_name",
    "BumpType",
    "BUMP_TYPES",
    "SEMVER_PATTERN",
    "TAG_PREFIX",
]
