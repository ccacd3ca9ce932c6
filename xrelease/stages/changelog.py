"""Changelog generation from the commit history since the latest tag.

The new section is prepended to CHANGELOG.md under a single
``# Changelog`` heading and returned for use as release notes.
"""

import re
from datetime import date, datetime, timezone
from pathlib import Path

from xrelease.config.models import ChangelogTemplate
from xrelease.exceptions import ChangelogWriteFailedError
from xrelease.git.queries import get_commit_log, get_latest_tag

CHANGELOG_FILE = "CHANGELOG.md"
CHANGELOG_HEADING = "# Changelog\n\n"

CONVENTIONAL_PATTERN = re.compile(
    r"^(?:[0-9a-f]{7,40} )?(feat|fix|docs|style|refactor|test|chore)(\([^)]+\))?: (.+)$"
)
HASH_PREFIX_PATTERN = re.compile(r"^[0-9a-f]{7,40} ")


def strip_hash(line: str) -> str:
    return HASH_PREFIX_PATTERN.sub("", line, count=1)


def format_commit(line: str, template: ChangelogTemplate = "conventional") -> str:
    """Render one 'git log --oneline' line as a bullet.

    Conventional commits become '* <type>: <message>' (scope dropped);
    everything else is the subject without its hash.
    """
    if template == "conventional":
        match = CONVENTIONAL_PATTERN.match(line)
        if match:
            return f"* {match.group(1)}: {match.group(3)}"
    return f"* {strip_hash(line)}"


def build_section(
    version: str,
    commits: list[str],
    template: ChangelogTemplate = "conventional",
    today: date | None = None,
) -> str:
    """Build a changelog section.

    Returns:
        "## [<version>] - <YYYY-MM-DD>\\n\\n<bullets>\\n\\n"
    """
    day = today or datetime.now(timezone.utc).date()
    header = f"## [{version}] - {day.isoformat()}\n\n"
    if not commits:
        return header + "* No changes\n\n"
    body = "\n".join(format_commit(line, template) for line in commits)
    return f"{header}{body}\n\n"


def prepend_section(section: str, existing: str | None) -> str:
    """Place section directly under the heading, keeping older entries."""
    rest = existing or ""
    if rest.startswith(CHANGELOG_HEADING):
        rest = rest[len(CHANGELOG_HEADING) :]
    return CHANGELOG_HEADING + section + rest


def generate_changelog(
    version: str,
    template: ChangelogTemplate = "conventional",
    cwd: Path | None = None,
    today: date | None = None,
) -> str:
    """Generate a section for version and prepend it to CHANGELOG.md.

    Args:
        version: Version being released
        template: "conventional" or "simple"
        cwd: Repository directory (defaults to cwd)
        today: Date for the header (defaults to the current UTC date)

    Returns:
        The generated section

    Raises:
        GitError: If the commit log cannot be read
        ChangelogWriteFailedError: If the changelog file cannot be written
    """
    root = cwd or Path.cwd()
    since = get_latest_tag(root)
    commits = get_commit_log(since, root)
    section = build_section(version, commits, template, today)

    changelog_path = root / CHANGELOG_FILE
    existing = changelog_path.read_text(encoding="utf-8") if changelog_path.exists() else None

    try:
        changelog_path.write_text(prepend_section(section, existing), encoding="utf-8")
    except FileNotFoundError as e:
        raise ChangelogWriteFailedError(
            "Failed to update changelog file",
            details=str(e),
        ) from e

    return section
