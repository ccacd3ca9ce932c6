"""Version bump of the project manifest (package.json)."""

from pathlib import Path

from xrelease.ecosystems.nodejs import NodeJSEcosystem
from xrelease.utils.version import BumpType, bump_version


def bump_project_version(
    kind: BumpType | str = "patch",
    project_root: Path | None = None,
) -> str:
    """Increment the manifest version and persist it.

    Args:
        kind: major, minor or patch
        project_root: Directory containing package.json (defaults to cwd)

    Returns:
        The new version string

    Raises:
        NoVersionFieldError: If package.json has no version
        VersionError: If the version is not semver or kind is unknown
        EcosystemError: If package.json cannot be read or written
    """
    ecosystem = NodeJSEcosystem(project_root or Path.cwd())
    current = ecosystem.get_version()
    new_version = bump_version(current, kind)
    ecosystem.set_version(new_version)
    return new_version
