"""Git state query operations.

Read-only git operations for inspecting repository state. All functions use
xrelease.utils.shell.run() for command execution and raise GitError on
failures, with git's own output in the error details.
"""

from pathlib import Path

from xrelease.exceptions import GitError
from xrelease.utils.shell import ShellError, run


def _raw_message(error: ShellError) -> str:
    return error.stderr or error.stdout or str(error)


def get_current_branch(cwd: Path | None = None) -> str:
    """Get the name of the current git branch.

    Uses 'git rev-parse --abbrev-ref HEAD', which yields "HEAD" on a
    detached checkout.

    Args:
        cwd: Working directory (defaults to current directory)

    Returns:
        Current branch name (e.g., "main", "hotfix/1.2")

    Raises:
        GitError: If git cannot determine the branch
    """
    try:
        result = run(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd, check=True)
    except ShellError as e:
        raise GitError(
            "Failed to get current branch name",
            details=_raw_message(e),
            fix_hint="Ensure you are in a git repository with at least one commit",
        ) from e
    return result.stdout.strip()


def get_latest_tag(cwd: Path | None = None) -> str | None:
    """Get the most recent git tag reachable from HEAD.

    Args:
        cwd: Working directory (defaults to current directory)

    Returns:
        Most recent tag name (e.g., "v1.0.12"), or None if no tags exist
    """
    result = run(["git", "describe", "--tags", "--abbrev=0"], cwd=cwd, check=False)
    if result.returncode == 0:
        return result.stdout.strip() or None
    # No tags exist - this is not an error
    return None


def get_commit_log(since: str | None = None, cwd: Path | None = None) -> list[str]:
    """Get one-line commit summaries, excluding merge commits.

    Args:
        since: Tag or ref to start after (None = entire history)
        cwd: Working directory (defaults to current directory)

    Returns:
        Lines in 'git log --oneline' format ("<short-sha> <subject>"), newest first

    Raises:
        GitError: If git log fails
    """
    cmd = ["git", "log", "--oneline", "--no-merges", "--no-decorate"]
    if since:
        cmd.append(f"{since}..HEAD")

    try:
        result = run(cmd, cwd=cwd, check=True)
    except ShellError as e:
        target = f"since '{since}'" if since else "for the repository"
        raise GitError(
            f"Failed to read commit log {target}",
            details=_raw_message(e),
            fix_hint="Ensure the repository has at least one commit",
        ) from e

    return [line for line in result.stdout.splitlines() if line.strip()]
