"""Tests for the check and step runner."""

from pathlib import Path

import pytest

from xrelease.config.models import StepConfig, XreleaseConfig
from xrelease.exceptions import StepFailedError
from xrelease.stages.checks import (
    run_post_release_steps,
    run_pre_release_checks,
    run_pre_release_steps,
    run_steps,
)


class TestRunSteps:
    def test_runs_in_order(self, temp_dir: Path) -> None:
        steps = [
            StepConfig(type="one", command="echo one >> log.txt"),
            StepConfig(type="two", command="echo two >> log.txt"),
        ]
        assert run_steps(steps, "step", temp_dir) == 2
        assert (temp_dir / "log.txt").read_text().split() == ["one", "two"]

    def test_empty_is_noop(self, temp_dir: Path) -> None:
        assert run_steps([], "check", temp_dir) == 0

    def test_entries_without_command_skipped(self, temp_dir: Path) -> None:
        steps = [StepConfig(type="lint"), StepConfig(type="test", command="true")]
        assert run_steps(steps, "check", temp_dir) == 1

    def test_first_failure_stops(self, temp_dir: Path) -> None:
        """A failing check prevents later checks from running."""
        steps = [
            StepConfig(type="lint", command="echo lint failed >&2; exit 1"),
            StepConfig(type="test", command="touch ran.txt"),
        ]

        with pytest.raises(StepFailedError) as exc_info:
            run_steps(steps, "check", temp_dir)

        assert exc_info.value.message == "lint check failed: lint failed"
        assert not (temp_dir / "ran.txt").exists()

    def test_step_failure_message(self, temp_dir: Path) -> None:
        steps = [StepConfig(type="build", command="exit 2")]

        with pytest.raises(StepFailedError) as exc_info:
            run_steps(steps, "step", temp_dir)

        assert exc_info.value.message == "build step failed: exited with code 2"

    def test_command_not_found(self, temp_dir: Path) -> None:
        steps = [StepConfig(type="test", command="xrelease-no-such-binary-42")]
        with pytest.raises(StepFailedError) as exc_info:
            run_steps(steps, "check", temp_dir)
        assert exc_info.value.message.startswith("test check failed: ")

    def test_missing_working_directory(self, temp_dir: Path) -> None:
        steps = [StepConfig(type="lint", command="true")]
        with pytest.raises(StepFailedError) as exc_info:
            run_steps(steps, "check", temp_dir / "gone")
        assert exc_info.value.message.startswith("lint check failed: ")


class TestConfiguredSteps:
    def test_default_config_is_noop(self, temp_dir: Path) -> None:
        config = XreleaseConfig()
        assert run_pre_release_checks(config, temp_dir) == 0
        assert run_pre_release_steps(config, temp_dir) == 0
        assert run_post_release_steps(config, temp_dir) == 0

    def test_sections_are_separate(self, temp_dir: Path) -> None:
        config = XreleaseConfig(
            release={
                "checks": [{"type": "test", "command": "touch check.txt"}],
                "pre": [{"type": "build", "command": "touch pre.txt"}],
                "post": [{"type": "notify", "command": "exit 1"}],
            }
        )
        run_pre_release_checks(config, temp_dir)
        assert (temp_dir / "check.txt").exists()
        assert not (temp_dir / "pre.txt").exists()

        run_pre_release_steps(config, temp_dir)
        assert (temp_dir / "pre.txt").exists()

        with pytest.raises(StepFailedError, match="notify step failed"):
            run_post_release_steps(config, temp_dir)
