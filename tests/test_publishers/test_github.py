"""Unit tests for xrelease.publishers.github.

The gh CLI is never executed; `run` is patched with a fake that records
every command and answers according to a table of canned results.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from xrelease.exceptions import GitHubAuthError, GitHubCLIMissingError, GitHubReleaseError
from xrelease.publishers.github import expand_assets, publish_release
from xrelease.utils.shell import ShellError


class FakeGh:
    """Stand-in for utils.shell.run that records gh invocations."""

    def __init__(self, failing: dict[tuple[str, ...], str] | None = None) -> None:
        self.failing = failing or {}
        self.calls: list[list[str]] = []

    def __call__(self, cmd: list[str], cwd: Path | None = None, check: bool = True, **_: object):
        self.calls.append(list(cmd))
        for prefix, stderr in self.failing.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                if check:
                    raise ShellError(" ".join(cmd), 1, "", stderr)
                return subprocess.CompletedProcess(cmd, 1, "", stderr)
        return subprocess.CompletedProcess(cmd, 0, "https://github.com/o/r/releases/tag/v1", "")

    def subcommands(self) -> list[str]:
        return [" ".join(c[1:3]) for c in self.calls]


def test_creates_release_with_notes(temp_dir: Path) -> None:
    fake = FakeGh(failing={("gh", "release", "view"): "release not found"})

    with patch("xrelease.publishers.github.run", fake):
        url = publish_release("1.2.0", "## [1.2.0]\n\n* feat: x\n\n", [], temp_dir)

    assert url == "https://github.com/o/r/releases/tag/v1"
    assert fake.subcommands() == ["--version", "auth status", "release view", "release create"]
    create = fake.calls[-1]
    assert create[:6] == ["gh", "release", "create", "v1.2.0", "--title", "v1.2.0"]
    assert create[6:8] == ["--notes", "## [1.2.0]\n\n* feat: x\n\n"]


def test_existing_release_is_replaced(temp_dir: Path) -> None:
    """An existing release is viewed, deleted, then created again."""
    fake = FakeGh()

    with patch("xrelease.publishers.github.run", fake):
        publish_release("1.2.0", None, [], temp_dir)

    assert fake.subcommands() == [
        "--version",
        "auth status",
        "release view",
        "release delete",
        "release create",
    ]
    assert fake.calls[3] == ["gh", "release", "delete", "v1.2.0", "--yes"]
    assert "--generate-notes" in fake.calls[4]


def test_gh_missing(temp_dir: Path) -> None:
    fake = FakeGh(failing={("gh", "--version"): "No such file or directory: 'gh'"})

    with patch("xrelease.publishers.github.run", fake):
        with pytest.raises(GitHubCLIMissingError) as exc_info:
            publish_release("1.2.0", None, [], temp_dir)

    assert "https://cli.github.com" in (exc_info.value.fix_hint or "")
    assert len(fake.calls) == 1


def test_gh_not_authenticated(temp_dir: Path) -> None:
    fake = FakeGh(failing={("gh", "auth", "status"): "You are not logged in"})

    with patch("xrelease.publishers.github.run", fake):
        with pytest.raises(GitHubAuthError) as exc_info:
            publish_release("1.2.0", None, [], temp_dir)

    assert "gh auth login" in (exc_info.value.fix_hint or "")
    assert fake.subcommands() == ["--version", "auth status"]


def test_create_failure(temp_dir: Path) -> None:
    fake = FakeGh(
        failing={
            ("gh", "release", "view"): "release not found",
            ("gh", "release", "create"): "HTTP 422: Validation Failed",
        }
    )

    with patch("xrelease.publishers.github.run", fake):
        with pytest.raises(GitHubReleaseError) as exc_info:
            publish_release("1.2.0", None, [], temp_dir)

    assert exc_info.value.message == "Failed to create GitHub release: HTTP 422: Validation Failed"


def test_assets_are_attached(temp_dir: Path) -> None:
    dist = temp_dir / "dist"
    dist.mkdir()
    (dist / "b.tgz").write_text("b")
    (dist / "a.tgz").write_text("a")
    (dist / "notes.txt").write_text("n")
    fake = FakeGh(failing={("gh", "release", "view"): "release not found"})

    with patch("xrelease.publishers.github.run", fake):
        publish_release("1.2.0", "notes", ["dist/*.tgz"], temp_dir)

    assert fake.calls[-1][-2:] == ["dist/a.tgz", "dist/b.tgz"]


class TestExpandAssets:
    def test_recursive_glob(self, temp_dir: Path) -> None:
        nested = temp_dir / "build" / "linux"
        nested.mkdir(parents=True)
        (nested / "app.zip").write_text("z")
        (temp_dir / "build" / "app.zip").write_text("z")

        assert expand_assets(["build/**/*.zip"], temp_dir) == [
            "build/app.zip",
            "build/linux/app.zip",
        ]

    def test_no_matches(self, temp_dir: Path) -> None:
        assert expand_assets(["dist/*.tgz"], temp_dir) == []

    def test_duplicates_collapsed(self, temp_dir: Path) -> None:
        (temp_dir / "a.txt").write_text("a")
        assert expand_assets(["*.txt", "a.*"], temp_dir) == ["a.txt"]
