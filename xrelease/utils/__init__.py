"""Utility modules for the xrelease tool."""

from xrelease.utils.shell import ShellError, run, run_shell, strip_ansi
from xrelease.utils.version import (
    BUMP_TYPES,
    SEMVER_PATTERN,
    TAG_PREFIX,
    BumpType,
    bump_version,
    tag_name,
)

__all__ = [
    # Shell utilities
    "run",
    "run_shell",
    "strip_ansi",
    "ShellError",
    # Version utilities
    "bump_version",
    "tag_name",
    "BumpType",
    "BUMP_TYPES",
    "SEMVER_PATTERN",
    "TAG_PREFIX",
]
