"""Branch guard: releases may only be cut from allowed branches."""

import re
from pathlib import Path

from xrelease.config.models import XreleaseConfig
from xrelease.exceptions import BranchNotAllowedError
from xrelease.git.queries import get_current_branch


def get_allowed_branches(
    config: XreleaseConfig, override_branch: str | None = None
) -> list[str]:
    """Resolve the allowed branch patterns.

    Precedence: explicit override, then release.branches (when non-empty),
    then release.branch.
    """
    if override_branch:
        return [override_branch]
    if config.release.branches:
        return list(config.release.branches)
    return [config.release.branch or "main"]


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    # '*' stays inside one path segment
    parts = (re.escape(chunk) for chunk in pattern.split("*"))
    return re.compile("[^/]*".join(parts))


def branch_matches(branch: str, pattern: str) -> bool:
    """Match a branch against a pattern.

    Patterns containing '*' are globs (case-sensitive) where '*' never
    crosses a '/'; anything else must be equal to the branch name.
    """
    if "*" in pattern:
        return _glob_to_regex(pattern).fullmatch(branch) is not None
    return branch == pattern


def check_branch(
    config: XreleaseConfig,
    override_branch: str | None = None,
    cwd: Path | None = None,
) -> str:
    """Verify the current branch is allowed to release.

    Args:
        config: Release configuration
        override_branch: Branch given on the command line (replaces config)
        cwd: Repository directory

    Returns:
        The current branch name

    Raises:
        GitError: If the current branch cannot be determined
        BranchNotAllowedError: If no allowed pattern matches
    """
    allowed = get_allowed_branches(config, override_branch)
    current = get_current_branch(cwd)

    if any(branch_matches(current, pattern) for pattern in allowed):
        return current

    quoted = ", ".join(f"'{pattern}'" for pattern in allowed)
    raise BranchNotAllowedError(
        f"Release must be created from one of these branches: {quoted}. "
        f"Current branch is '{current}'",
        fix_hint=f"git checkout {allowed[0]}" if "*" not in allowed[0] else None,
    )
