"""Tests for the release action executor."""

from collections.abc import Callable
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from xrelease.config.models import ReleaseSettings
from xrelease.exceptions import (
    CommitPushActionError,
    CustomActionError,
    GitHubAuthError,
    TagActionError,
)
from xrelease.stages.actions import ActionExecutor


def make_actions(*raw: dict) -> list:
    return ReleaseSettings(actions=list(raw)).actions


@pytest.fixture
def output() -> StringIO:
    return StringIO()


@pytest.fixture
def executor_for(output: StringIO) -> Callable[..., ActionExecutor]:
    def _make(root: Path, version: str = "1.1.0", notes: str | None = None) -> ActionExecutor:
        console = Console(file=output, force_terminal=False, width=120)
        return ActionExecutor(root, version, notes, console)

    return _make


@pytest.fixture
def remote_project(
    nodejs_project: Path, temp_dir: Path, run_git: Callable[..., str]
) -> tuple[Path, Path]:
    """A project whose main branch tracks a bare 'origin' repository."""
    remote = temp_dir / "origin.git"
    run_git(temp_dir, "init", "--bare", str(remote))
    run_git(nodejs_project, "remote", "add", "origin", str(remote))
    run_git(nodejs_project, "push", "-u", "origin", "main")
    return nodejs_project, remote


class TestGitActions:
    def test_git_tag_pushes_annotated_tag(
        self,
        remote_project: tuple[Path, Path],
        executor_for: Callable[..., ActionExecutor],
        run_git: Callable[..., str],
    ) -> None:
        project, remote = remote_project

        records = executor_for(project).run(make_actions({"type": "git-tag"}))

        assert [(r.name, r.status) for r in records] == [("git-tag", "completed")]
        assert run_git(project, "cat-file", "-t", "v1.1.0") == "tag"
        assert run_git(project, "tag", "-l", "--format=%(contents:subject)", "v1.1.0") == (
            "Release v1.1.0"
        )
        assert run_git(remote, "tag", "--list") == "v1.1.0"

    def test_git_tag_without_remote(
        self, nodejs_project: Path, executor_for: Callable[..., ActionExecutor]
    ) -> None:
        executor = executor_for(nodejs_project)

        with pytest.raises(TagActionError):
            executor.run(make_actions({"type": "git-tag"}))

        assert executor.records[0].status == "failed"

    def test_commit_push(
        self,
        remote_project: tuple[Path, Path],
        executor_for: Callable[..., ActionExecutor],
        run_git: Callable[..., str],
    ) -> None:
        project, remote = remote_project
        (project / "CHANGELOG.md").write_text("# Changelog\n\n")

        executor_for(project).run(make_actions({"type": "commit-push"}))

        assert run_git(remote, "log", "-1", "--format=%s", "main") == "chore: release v1.1.0"
        assert run_git(project, "status", "--porcelain") == ""

    def test_commit_push_nothing_to_commit(
        self, remote_project: tuple[Path, Path], executor_for: Callable[..., ActionExecutor]
    ) -> None:
        project, _ = remote_project
        with pytest.raises(CommitPushActionError):
            executor_for(project).run(make_actions({"type": "commit-push"}))


class TestGitHubReleaseAction:
    def test_passes_notes_and_assets(
        self, temp_dir: Path, executor_for: Callable[..., ActionExecutor]
    ) -> None:
        actions = make_actions({"type": "github-release", "assets": ["dist/*.tgz"]})

        with patch("xrelease.stages.actions.publish_release") as publish:
            executor_for(temp_dir, "2.0.0", "notes").run(actions)

        publish.assert_called_once_with("2.0.0", "notes", ["dist/*.tgz"], temp_dir)

    def test_failure_propagates(
        self, temp_dir: Path, executor_for: Callable[..., ActionExecutor]
    ) -> None:
        actions = make_actions({"type": "github-release"}, {"type": "custom", "command": "touch x"})
        executor = executor_for(temp_dir)

        with patch(
            "xrelease.stages.actions.publish_release",
            side_effect=GitHubAuthError("Not authenticated with GitHub CLI"),
        ):
            with pytest.raises(GitHubAuthError):
                executor.run(actions)

        assert [r.status for r in executor.records] == ["failed"]
        assert not (temp_dir / "x").exists()


class TestCustomActions:
    def test_custom_runs_command(
        self,
        temp_dir: Path,
        executor_for: Callable[..., ActionExecutor],
        output: StringIO,
    ) -> None:
        actions = make_actions({"type": "custom", "name": "Publish", "command": "touch done"})

        records = executor_for(temp_dir).run(actions)

        assert (temp_dir / "done").exists()
        assert records[0].name == "Publish"
        assert "Running Publish..." in output.getvalue()
        assert "Publish completed" in output.getvalue()

    def test_custom_without_command_skipped(
        self, temp_dir: Path, executor_for: Callable[..., ActionExecutor]
    ) -> None:
        records = executor_for(temp_dir).run(make_actions({"type": "custom"}))
        assert records[0].status == "skipped"

    def test_custom_failure(
        self, temp_dir: Path, executor_for: Callable[..., ActionExecutor]
    ) -> None:
        actions = make_actions({"type": "custom", "name": "Deploy", "command": "echo nope >&2; exit 1"})

        with pytest.raises(CustomActionError) as exc_info:
            executor_for(temp_dir).run(actions)

        assert exc_info.value.message == "Custom action 'Deploy' failed: nope"

    def test_custom_in_missing_directory(
        self, temp_dir: Path, executor_for: Callable[..., ActionExecutor]
    ) -> None:
        actions = make_actions({"type": "custom", "name": "Deploy", "command": "true"})

        with pytest.raises(CustomActionError) as exc_info:
            executor_for(temp_dir / "gone").run(actions)

        assert exc_info.value.message.startswith("Custom action 'Deploy' failed: ")

    def test_unknown_type_with_command_runs(
        self,
        temp_dir: Path,
        executor_for: Callable[..., ActionExecutor],
        output: StringIO,
    ) -> None:
        records = executor_for(temp_dir).run(
            make_actions({"type": "npm-publish", "command": "touch published"})
        )

        assert "Unknown action type: npm-publish" in output.getvalue()
        assert (temp_dir / "published").exists()
        assert records[0].status == "completed"

    def test_unknown_type_without_command_skipped(
        self, temp_dir: Path, executor_for: Callable[..., ActionExecutor]
    ) -> None:
        records = executor_for(temp_dir).run(make_actions({"type": "npm-publish"}))
        assert records[0].status == "skipped"

    def test_actions_run_in_order(
        self, temp_dir: Path, executor_for: Callable[..., ActionExecutor]
    ) -> None:
        actions = make_actions(
            {"type": "custom", "name": "first", "command": "echo 1 >> order.txt"},
            {"type": "custom", "name": "second", "command": "echo 2 >> order.txt"},
        )

        records = executor_for(temp_dir).run(actions)

        assert (temp_dir / "order.txt").read_text().split() == ["1", "2"]
        assert [r.name for r in records] == ["first", "second"]
