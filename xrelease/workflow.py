"""Release workflow orchestration.

Runs the release pipeline as a fixed sequence of stages:
1. Load configuration
2. Check the current branch
3. Run pre-release checks
4. Run pre-release steps
5. Bump the package.json version
6. Update version strings in configured files
7. Generate the changelog
8. Run release actions (tag, commit+push, GitHub release, custom)
9. Run post-release steps

The first failure halts the pipeline; nothing is rolled back.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from xrelease.config.loader import LoadStatus, resolve_config
from xrelease.config.models import ReleaseSettings, XreleaseConfig
from xrelease.exceptions import ConfigurationError, ReleaseError
from xrelease.stages.actions import ActionExecutor, ActionRecord
from xrelease.stages.branch import check_branch
from xrelease.stages.bump import bump_project_version
from xrelease.stages.changelog import generate_changelog
from xrelease.stages.checks import (
    run_post_release_steps,
    run_pre_release_checks,
    run_pre_release_steps,
)
from xrelease.stages.files import update_version_files
from xrelease.utils.version import BumpType

console = Console()


class Stage(Enum):
    """Pipeline stages, in execution order."""

    LOAD_CONFIG = "load config"
    CHECK_BRANCH = "check branch"
    PRE_CHECKS = "pre-release checks"
    PRE_STEPS = "pre-release steps"
    BUMP_VERSION = "bump version"
    UPDATE_FILES = "update version files"
    GENERATE_CHANGELOG = "generate changelog"
    RUN_ACTIONS = "release actions"
    POST_STEPS = "post-release steps"
    DONE = "done"


@dataclass
class ReleaseOutcome:
    """Result of a release run."""

    success: bool
    version: str | None = None
    failed_stage: Stage | None = None
    error: ReleaseError | None = None
    actions: list[ActionRecord] = field(default_factory=list)


@dataclass
class ReleaseWorkflow:
    """Orchestrates the release pipeline."""

    project_root: Path
    config_path: Path | str | None = None
    bump: BumpType | None = None
    branch: str | None = None
    verbose: bool = False
    console: Console | None = None

    # State tracking
    stage: Stage = Stage.LOAD_CONFIG
    config: XreleaseConfig | None = None
    version: str | None = None
    release_notes: str | None = None
    action_records: list[ActionRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.console is None:
            self.console = console

    @property
    def settings(self) -> ReleaseSettings:
        if self.config is None:
            raise ConfigurationError("Configuration has not been loaded")
        return self.config.release

    def run(self) -> ReleaseOutcome:
        """Execute every stage in order.

        Returns:
            ReleaseOutcome; on failure it names the stage and carries the error
        """
        stages: list[tuple[Stage, Callable[[], str | None]]] = [
            (Stage.LOAD_CONFIG, self.load_config),
            (Stage.CHECK_BRANCH, self.check_branch),
            (Stage.PRE_CHECKS, self.run_checks),
            (Stage.PRE_STEPS, self.run_pre_steps),
            (Stage.BUMP_VERSION, self.bump_version),
            (Stage.UPDATE_FILES, self.update_files),
            (Stage.GENERATE_CHANGELOG, self.generate_changelog),
            (Stage.RUN_ACTIONS, self.run_actions),
            (Stage.POST_STEPS, self.run_post_steps),
        ]

        for stage, stage_func in stages:
            self.stage = stage
            self.console.print(f"\n[bold cyan]>[/bold cyan] {stage.value.capitalize()}...")

            try:
                message = stage_func()
            except ReleaseError as e:
                return self.fail(stage, e)
            except Exception as e:
                return self.fail(stage, ReleaseError(str(e)))

            if message:
                self.console.print(f"[green]  {message}[/green]")
            else:
                self.console.print("[dim]  Skipped[/dim]")

        self.stage = Stage.DONE
        self.console.print(
            f"\n[bold green]Release v{self.version} created successfully![/bold green]"
        )
        return ReleaseOutcome(
            success=True,
            version=self.version,
            actions=self.action_records,
        )

    def fail(self, stage: Stage, error: ReleaseError) -> ReleaseOutcome:
        error.stage = stage.value
        self.console.print(f"[red]  Failed during {stage.value}: {error.message}[/red]")
        if error.details and self.verbose:
            self.console.print(f"[dim]  {error.details}[/dim]")
        if error.fix_hint:
            self.console.print(f"[dim]  Fix: {error.fix_hint}[/dim]")
        return ReleaseOutcome(
            success=False,
            version=self.version,
            failed_stage=stage,
            error=error,
            actions=self.action_records,
        )

    def load_config(self) -> str:
        result = resolve_config(self.config_path, self.project_root)
        self.config = result.unwrap()
        if result.status is LoadStatus.DEFAULTED:
            return "No config file found, using defaults"
        return f"Loaded {result.path}"

    def check_branch(self) -> str:
        current = check_branch(self.config, self.branch, cwd=self.project_root)
        return f"On branch {current}"

    def run_checks(self) -> str | None:
        ran = run_pre_release_checks(self.config, self.project_root)
        return f"{ran} check(s) passed" if ran else None

    def run_pre_steps(self) -> str | None:
        ran = run_pre_release_steps(self.config, self.project_root)
        return f"{ran} step(s) completed" if ran else None

    def bump_version(self) -> str:
        kind = self.bump or self.settings.default_bump
        self.version = bump_project_version(kind, self.project_root)
        return f"Version bumped to {self.version} ({kind})"

    def update_files(self) -> str | None:
        files = self.settings.version.files
        if not files:
            return None
        unmatched = update_version_files(files, self.version, self.project_root)
        for path in unmatched:
            self.console.print(f"[yellow]  ⚠ Pattern did not match in {path}[/yellow]")
        return f"Updated {len(files) - len(unmatched)} of {len(files)} file(s)"

    def generate_changelog(self) -> str | None:
        changelog = self.settings.changelog
        if not changelog.enabled:
            return None
        self.release_notes = generate_changelog(
            self.version, changelog.template, cwd=self.project_root
        )
        if self.verbose:
            self.console.print(f"[dim]{self.release_notes.rstrip()}[/dim]")
        return "Changelog updated"

    def run_actions(self) -> str | None:
        actions = self.settings.actions
        if not actions:
            return None
        executor = ActionExecutor(
            self.project_root, self.version, self.release_notes, self.console
        )
        try:
            executor.run(actions)
        finally:
            self.action_records = executor.records
        completed = sum(1 for r in self.action_records if r.status == "completed")
        return f"{completed} action(s) completed"

    def run_post_steps(self) -> str | None:
        ran = run_post_release_steps(self.config, self.project_root)
        return f"{ran} step(s) completed" if ran else None


def create_release(
    project_root: Path | None = None,
    config_path: Path | str | None = None,
    bump: BumpType | None = None,
    branch: str | None = None,
    verbose: bool = False,
    output: Console | None = None,
) -> ReleaseOutcome:
    """Execute a complete release.

    This is the main entry point for running a release.

    Args:
        project_root: Path to project root (defaults to cwd)
        config_path: Explicit config file
        bump: Bump kind (defaults to release.defaultBump)
        branch: Allowed branch override
        verbose: Whether to show detailed output
        output: Console to report to

    Returns:
        ReleaseOutcome
    """
    out = output or console
    workflow = ReleaseWorkflow(
        project_root=project_root or Path.cwd(),
        config_path=config_path,
        bump=bump,
        branch=branch,
        verbose=verbose,
        console=out,
    )

    out.print(
        Panel(
            f"[bold]Release[/bold]\n"
            f"Project: {workflow.project_root}\n"
            f"Bump: {bump or 'from config'}",
            title="Starting Release",
            border_style="cyan",
        )
    )

    outcome = workflow.run()

    if not outcome.success:
        out.print(
            Panel(
                f"[bold red]Release failed during {outcome.failed_stage.value}[/bold red]\n"
                "Completed stages are not rolled back",
                border_style="red",
            )
        )

    return outcome
