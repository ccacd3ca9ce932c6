"""Executes the configured release actions in order.

Supported action types:
- git-tag: annotated v<version> tag pushed to origin
- commit-push: commit everything as 'chore: release v<version>' and push
- github-release: create (or recreate) the GitHub release via gh
- custom: arbitrary shell command

Unknown types are reported and, when they carry a command, run like custom
actions.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, assert_never

from rich.console import Console

from xrelease.config.models import (
    CommitPushAction,
    CustomAction,
    GitHubReleaseAction,
    GitTagAction,
    ReleaseAction,
    UnknownAction,
)
from xrelease.exceptions import (
    CommitPushActionError,
    CustomActionError,
    GitError,
    TagActionError,
)
from xrelease.git.operations import push, push_tag, stage_all, tag
from xrelease.git.operations import commit as git_commit
from xrelease.publishers.github import publish_release
from xrelease.utils.shell import ShellError, run_shell
from xrelease.utils.version import tag_name

ActionStatus = Literal["completed", "skipped", "failed"]


@dataclass
class ActionRecord:
    """What happened to one action."""

    name: str
    type: str
    status: ActionStatus


class ActionExecutor:
    """Runs release actions sequentially, stopping at the first failure."""

    def __init__(
        self,
        project_root: Path,
        version: str,
        release_notes: str | None = None,
        console: Console | None = None,
    ) -> None:
        self.project_root = project_root
        self.version = version
        self.release_notes = release_notes
        self.console = console or Console()
        self.records: list[ActionRecord] = []

    @property
    def tag(self) -> str:
        return tag_name(self.version)

    def run(self, actions: Sequence[ReleaseAction]) -> list[ActionRecord]:
        """Run every action in order.

        Returns:
            One record per action

        Raises:
            ActionError: The first action failure (its record is marked failed)
        """
        self.records = []
        for action in actions:
            name = action.display_name
            self.console.print(f"[cyan]Running {name}...[/cyan]")
            record = ActionRecord(name=name, type=action.type, status="failed")
            self.records.append(record)

            ran = self.run_action(action)
            record.status = "completed" if ran else "skipped"
            if ran:
                self.console.print(f"[green]✓[/green] {name} completed")
        return self.records

    def run_action(self, action: ReleaseAction) -> bool:
        """Dispatch one action. Returns False when it was skipped."""
        if isinstance(action, GitTagAction):
            self.create_tag()
            return True
        elif isinstance(action, CommitPushAction):
            self.commit_and_push()
            return True
        elif isinstance(action, GitHubReleaseAction):
            self.create_github_release(action)
            return True
        elif isinstance(action, CustomAction):
            return self.run_custom(action)
        elif isinstance(action, UnknownAction):
            self.console.print(
                f"[yellow]⚠ Unknown action type: {action.type}[/yellow]"
            )
            return self.run_custom(action)
        else:
            assert_never(action)

    def create_tag(self) -> None:
        try:
            tag(self.tag, f"Release {self.tag}", cwd=self.project_root)
            push_tag(self.tag, cwd=self.project_root)
        except GitError as e:
            raise TagActionError(
                f"Failed to create tag {self.tag}: {e.message}",
                details=e.details,
            ) from e

    def commit_and_push(self) -> None:
        try:
            stage_all(self.project_root)
            git_commit(f"chore: release {self.tag}", cwd=self.project_root)
            push(cwd=self.project_root)
        except GitError as e:
            raise CommitPushActionError(
                f"Failed to commit and push release: {e.message}",
                details=e.details,
            ) from e

    def create_github_release(self, action: GitHubReleaseAction) -> None:
        publish_release(
            self.version,
            self.release_notes,
            action.asset_patterns,
            self.project_root,
        )

    def run_custom(self, action: CustomAction | UnknownAction) -> bool:
        if not action.command:
            return False
        try:
            run_shell(action.command, cwd=self.project_root)
        except ShellError as e:
            raise CustomActionError(
                f"Custom action '{action.display_name}' failed: "
                f"{e.stderr or e.stdout or f'exited with code {e.returncode}'}",
                details=str(e),
            ) from e
        return True
