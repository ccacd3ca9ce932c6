"""Pytest fixtures for xrelease tests.

Provides common fixtures for:
- Temporary project directories
- Git repository setup (on a 'main' branch)
- Node.js test projects
- Config files
"""

import json
import os
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml


def git(cwd: Path, *args: str) -> str:
    """Run a git command in a test repository and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def run_git() -> Callable[..., str]:
    """Return the git helper: run_git(cwd, *args) -> stdout."""
    return git


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary directory for tests.

    Yields:
        Path to temporary directory
    """
    yield tmp_path


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a temporary project directory.

    Returns:
        Path to project directory
    """
    project = temp_dir / "test-project"
    project.mkdir()
    return project


@pytest.fixture
def git_repo(project_dir: Path) -> Path:
    """Create a git repository whose branch is 'main'.

    Returns:
        Path to git repository
    """
    git(project_dir, "init")
    git(project_dir, "symbolic-ref", "HEAD", "refs/heads/main")
    git(project_dir, "config", "user.email", "test@test.com")
    git(project_dir, "config", "user.name", "Test User")
    git(project_dir, "config", "commit.gpgsign", "false")
    git(project_dir, "config", "tag.gpgsign", "false")
    return project_dir


@pytest.fixture
def commit_file(git_repo: Path) -> Callable[[str, str, str], None]:
    """Return a helper that writes a file and commits it with a message."""

    def _commit(name: str, content: str, message: str) -> None:
        (git_repo / name).write_text(content)
        git(git_repo, "add", name)
        git(git_repo, "commit", "-m", message)

    return _commit


@pytest.fixture
def nodejs_project(git_repo: Path) -> Path:
    """Create a Node.js project with package.json and an initial commit.

    Returns:
        Path to project directory
    """
    package_json = {
        "name": "test-package",
        "version": "1.0.0",
        "description": "Test package",
        "main": "index.js",
        "scripts": {
            "test": "echo 'test'",
        },
    }
    (git_repo / "package.json").write_text(json.dumps(package_json, indent=2) + "\n")
    (git_repo / "index.js").write_text("module.exports = {};")

    git(git_repo, "add", ".")
    git(git_repo, "commit", "-m", "Initial commit")
    return git_repo


@pytest.fixture
def write_config(project_dir: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that writes .xrelease.yml into the project."""

    def _write(config: dict[str, Any], name: str = ".xrelease.yml") -> Path:
        config_path = project_dir / name
        config_path.write_text(yaml.safe_dump(config, sort_keys=False))
        return config_path

    return _write


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Return a representative configuration document.

    Returns:
        Configuration dictionary
    """
    return {
        "version": 1,
        "release": {
            "branch": "main",
            "branches": ["main", "hotfix/*"],
            "defaultBump": "minor",
            "version": {
                "files": [
                    {
                        "path": "VERSION",
                        "pattern": r"\d+\.\d+\.\d+",
                        "template": "${version}",
                    },
                ],
            },
            "changelog": {"enabled": True, "template": "conventional"},
            "checks": [{"type": "lint", "command": "echo lint"}],
            "pre": [{"type": "build", "command": "echo build"}],
            "post": [{"type": "notify", "command": "echo done"}],
            "actions": [
                {"type": "git-tag"},
                {"type": "github-release", "assets": "dist/*.tgz"},
                {"type": "custom", "name": "Publish", "command": "echo publish"},
            ],
        },
    }


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Temporarily clean environment variables.

    Removes XRELEASE_* environment variables during test.
    """
    old_env = {}
    for key in list(os.environ.keys()):
        if key.startswith("XRELEASE_"):
            old_env[key] = os.environ.pop(key)

    yield

    os.environ.update(old_env)
