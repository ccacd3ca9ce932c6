"""GitHub Releases publisher.

Creates GitHub releases using the gh CLI tool with its own authentication.

Features:
- Verifies gh is installed and authenticated before doing anything
- Replaces an existing release for the same tag
- Uses the generated changelog section as release notes, or lets GitHub
  generate them
- Uploads release assets matched by glob patterns
"""

import glob
from pathlib import Path

from xrelease.exceptions import GitHubAuthError, GitHubCLIMissingError, GitHubReleaseError
from xrelease.utils.shell import ShellError, run
from xrelease.utils.version import tag_name


def ensure_gh_installed(cwd: Path | None = None) -> None:
    """Check that the gh CLI can be executed.

    Raises:
        GitHubCLIMissingError: If `gh --version` fails
    """
    result = run(["gh", "--version"], cwd=cwd, check=False)
    if result.returncode != 0:
        raise GitHubCLIMissingError(
            "GitHub CLI (gh) is not installed",
            details=(result.stderr or "").strip() or None,
            fix_hint="Install it from https://cli.github.com",
        )


def ensure_gh_authenticated(cwd: Path | None = None) -> None:
    """Check that the gh CLI is logged in.

    Raises:
        GitHubAuthError: If `gh auth status` fails
    """
    result = run(["gh", "auth", "status"], cwd=cwd, check=False)
    if result.returncode != 0:
        raise GitHubAuthError(
            "Not authenticated with GitHub CLI",
            details=(result.stderr or "").strip() or None,
            fix_hint="Run: gh auth login",
        )


def release_exists(tag: str, cwd: Path | None = None) -> bool:
    """Check whether a GitHub release exists for a tag."""
    result = run(["gh", "release", "view", tag], cwd=cwd, check=False)
    return result.returncode == 0


def delete_release(tag: str, cwd: Path | None = None) -> None:
    """Delete the GitHub release for a tag (the git tag itself is kept).

    Raises:
        GitHubReleaseError: If deletion fails
    """
    try:
        run(["gh", "release", "delete", tag, "--yes"], cwd=cwd)
    except ShellError as e:
        raise GitHubReleaseError(
            f"Failed to delete existing GitHub release {tag}",
            details=str(e),
        ) from e


def expand_assets(patterns: list[str], project_root: Path) -> list[str]:
    """Expand asset glob patterns relative to the project root.

    Args:
        patterns: Glob patterns (``**`` is allowed)
        project_root: Directory patterns are resolved against

    Returns:
        Sorted, de-duplicated list of matching paths relative to project_root
    """
    matches: set[str] = set()
    for pattern in patterns:
        matches.update(glob.glob(pattern, root_dir=project_root, recursive=True))
    return sorted(matches)


def create_release(
    tag: str,
    notes: str | None = None,
    assets: list[str] | None = None,
    cwd: Path | None = None,
) -> str:
    """Run `gh release create` for a tag.

    Args:
        tag: Tag name (e.g., "v1.2.3")
        notes: Release notes; when empty GitHub generates them
        assets: Files to upload
        cwd: Working directory

    Returns:
        gh's output (normally the release URL)

    Raises:
        GitHubReleaseError: If gh fails
    """
    cmd = ["gh", "release", "create", tag, "--title", tag]
    if notes:
        cmd.extend(["--notes", notes])
    else:
        cmd.append("--generate-notes")
    cmd.extend(assets or [])

    try:
        result = run(cmd, cwd=cwd, timeout=None)
    except ShellError as e:
        raise GitHubReleaseError(
            f"Failed to create GitHub release: {e.stderr or e.stdout or e}",
            details=str(e),
        ) from e
    return result.stdout.strip()


def publish_release(
    version: str,
    notes: str | None,
    asset_patterns: list[str],
    project_root: Path,
) -> str:
    """Create (or recreate) the GitHub release for a version.

    Order: probe gh, probe auth, delete any existing release, create.

    Args:
        version: Version being released
        notes: Release notes (None to let GitHub generate them)
        asset_patterns: Glob patterns of files to attach
        project_root: Project root directory

    Returns:
        gh's output (normally the release URL)

    Raises:
        GitHubCLIMissingError: gh is not installed
        GitHubAuthError: gh is not authenticated
        GitHubReleaseError: Deleting or creating the release failed
    """
    ensure_gh_installed(project_root)
    ensure_gh_authenticated(project_root)

    tag = tag_name(version)
    if release_exists(tag, project_root):
        delete_release(tag, project_root)

    assets = expand_assets(asset_patterns, project_root)
    return create_release(tag, notes=notes, assets=assets, cwd=project_root)
