"""Runs the configured checks and pre/post-release steps.

Every entry's command goes through the shell, in order, and the first
non-zero exit aborts the run.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from xrelease.config.models import StepConfig, XreleaseConfig
from xrelease.exceptions import StepFailedError
from xrelease.utils.shell import ShellError, run_shell

StepKind = Literal["check", "step"]


def _failure_message(error: ShellError) -> str:
    return error.stderr or error.stdout or f"exited with code {error.returncode}"


def run_steps(
    steps: Sequence[StepConfig],
    kind: StepKind = "step",
    cwd: Path | None = None,
) -> int:
    """Run shell steps sequentially, stopping at the first failure.

    Args:
        steps: Configured entries; those without a command are skipped
        kind: "check" or "step", used in the failure message
        cwd: Working directory for the commands

    Returns:
        Number of commands that ran

    Raises:
        StepFailedError: "<type> check failed: <msg>" or "<type> step failed: <msg>"
    """
    ran = 0
    for step in steps:
        if not step.command:
            continue
        try:
            run_shell(step.command, cwd=cwd)
        except ShellError as e:
            raise StepFailedError(
                f"{step.type} {kind} failed: {_failure_message(e)}",
                details=str(e),
            ) from e
        ran += 1
    return ran


def run_pre_release_checks(config: XreleaseConfig, cwd: Path | None = None) -> int:
    return run_steps(config.release.checks, "check", cwd)


def run_pre_release_steps(config: XreleaseConfig, cwd: Path | None = None) -> int:
    return run_steps(config.release.pre, "step", cwd)


def run_post_release_steps(config: XreleaseConfig, cwd: Path | None = None) -> int:
    return run_steps(config.release.post, "step", cwd)
