"""Git state modification operations.

Git operations that modify repository state. All functions use
xrelease.utils.shell.run() for command execution and raise GitError on
failures. Nothing here retries or undoes earlier operations.
"""

from pathlib import Path

from xrelease.exceptions import GitError
from xrelease.utils.shell import ShellError, run


def stage_all(cwd: Path | None = None) -> None:
    """Stage every change in the working tree ('git add .').

    Raises:
        GitError: If staging fails
    """
    try:
        run(["git", "add", "."], cwd=cwd, check=True)
    except ShellError as e:
        raise GitError(
            "Failed to stage changes",
            details=str(e),
            fix_hint="Run 'git status' to inspect the working tree",
        ) from e


def commit(message: str, cwd: Path | None = None) -> None:
    """Commit the staged changes.

    Raises:
        GitError: If commit fails or there is nothing to commit
    """
    try:
        run(["git", "commit", "-m", message], cwd=cwd, check=True)
    except ShellError as e:
        raise GitError(
            "Failed to create git commit",
            details=str(e),
            fix_hint="Ensure you have changes staged. Run 'git status' to check.",
        ) from e


def tag(name: str, message: str, cwd: Path | None = None) -> None:
    """Create an annotated git tag.

    Args:
        name: Tag name (e.g., "v1.0.12")
        message: Tag annotation message
        cwd: Working directory (defaults to current directory)

    Raises:
        GitError: If tag creation fails or tag already exists
    """
    try:
        run(["git", "tag", "-a", name, "-m", message], cwd=cwd, check=True)
    except ShellError as e:
        raise GitError(
            f"Failed to create git tag '{name}'",
            details=str(e),
            fix_hint=f"Ensure tag '{name}' doesn't already exist. Run 'git tag -d {name}' to delete it first.",
        ) from e


def push(cwd: Path | None = None) -> None:
    """Push the current branch to its upstream ('git push').

    Args:
        cwd: Working directory (defaults to current directory)

    Raises:
        GitError: If push fails
    """
    try:
        run(["git", "push"], cwd=cwd, check=True, timeout=None)
    except ShellError as e:
        raise GitError(
            "Failed to push current branch",
            details=str(e),
            fix_hint="Ensure the branch has an upstream and you have push access.",
        ) from e


def push_tag(tag: str, cwd: Path | None = None) -> None:
    """Push a single tag to origin.

    Raises:
        GitError: If push fails or tag doesn't exist
    """
    try:
        run(["git", "push", "origin", f"refs/tags/{tag}"], cwd=cwd, check=True, timeout=None)
    except ShellError as e:
        raise GitError(
            f"Failed to push tag '{tag}' to remote 'origin'",
            details=str(e),
            fix_hint="Ensure remote 'origin' exists and you have push access.",
        ) from e
