"""Rewrites version strings in configured files.

Each entry names a file, a regular expression locating the version-bearing
text, and a template for the replacement. Templates may reference
``${version}`` and capture groups ``${1}``, ``${2}`` ...
"""

import re
from collections.abc import Sequence
from pathlib import Path

from xrelease.config.models import VersionFileConfig
from xrelease.exceptions import FileUpdateError

PLACEHOLDER_PATTERN = re.compile(r"\$\{(version|\d+)\}")


def render_template(template: str, match: re.Match[str], version: str) -> str:
    """Expand placeholders in a single pass.

    Substituted text is never re-scanned, so a version or group value that
    itself looks like a placeholder is inserted literally.

    Raises:
        FileUpdateError: If ${N} refers to a group the pattern does not have
    """

    def substitute(placeholder: re.Match[str]) -> str:
        key = placeholder.group(1)
        if key == "version":
            return version
        index = int(key)
        if index > match.re.groups:
            raise FileUpdateError(
                f"Template references group ${{{index}}} but the pattern has "
                f"{match.re.groups} group(s)",
                details=f"Template: {template}",
            )
        return match.group(index) or ""

    return PLACEHOLDER_PATTERN.sub(substitute, template)


def update_version_in_file(
    path: str | Path,
    pattern: str,
    template: str,
    version: str,
    cwd: Path | None = None,
) -> bool:
    """Replace the first match of pattern in a file with the rendered template.

    Only the matched span changes; line endings and all other bytes are kept.
    A pattern with no match leaves the content as it was.

    Args:
        path: File path, relative to cwd unless absolute
        pattern: Regular expression
        template: Replacement template
        version: New version
        cwd: Base directory for relative paths (defaults to cwd)

    Returns:
        True if a match was replaced, False if the pattern did not match

    Raises:
        FileNotFoundError: If the file does not exist
        FileUpdateError: If the pattern is invalid or the template is unsatisfiable
    """
    file_path = Path(path)
    if not file_path.is_absolute():
        file_path = (cwd or Path.cwd()) / file_path

    with open(file_path, encoding="utf-8", newline="") as f:
        content = f.read()

    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise FileUpdateError(f"Invalid pattern '{pattern}'", details=str(e)) from e

    match = regex.search(content)
    if match:
        replacement = render_template(template, match, version)
        content = content[: match.start()] + replacement + content[match.end() :]

    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(content)

    return match is not None


def update_version_files(
    files: Sequence[VersionFileConfig],
    version: str,
    cwd: Path | None = None,
) -> list[str]:
    """Apply every configured file update in order.

    Returns:
        Paths whose pattern did not match (left unchanged)

    Raises:
        FileUpdateError: "Failed to update version in <path>: <msg>"
    """
    unmatched: list[str] = []
    for entry in files:
        try:
            matched = update_version_in_file(
                entry.path, entry.pattern, entry.template, version, cwd
            )
        except FileUpdateError as e:
            raise FileUpdateError(
                f"Failed to update version in {entry.path}: {e.message}",
                details=e.details,
            ) from e
        except OSError as e:
            raise FileUpdateError(
                f"Failed to update version in {entry.path}: {e.strerror or e}",
                details=str(e),
            ) from e
        if not matched:
            unmatched.append(entry.path)
    return unmatched
