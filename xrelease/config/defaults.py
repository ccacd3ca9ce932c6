"""Default configuration generation.

Provides the built-in default config value used when a project has no
.xrelease.yml, and the starter documents written by 'xrelease init'.
"""

import re
from pathlib import Path
from typing import Any, Literal

import yaml

from xrelease.config.models import XreleaseConfig

Language = Literal["node", "go"]

DEFAULT_CONFIG_FILENAME = ".xrelease.yml"

GO_MODULE_PATTERN = re.compile(r"^module\s+(\S+)", re.MULTILINE)

_CHECK_COMMANDS: dict[str, list[dict[str, str]]] = {
    "node": [
        {"type": "test", "command": "npm test"},
    ],
    "go": [
        {"type": "lint", "command": "golangci-lint run"},
        {"type": "test", "command": "go test ./..."},
    ],
}


def default_config() -> XreleaseConfig:
    """Build the default configuration value.

    Returns:
        A complete, immutable XreleaseConfig with every field defaulted
    """
    return XreleaseConfig()


def get_project_name(project_root: Path, language: Language = "node") -> str:
    """Derive a package name for a new manifest.

    Go projects use the last segment of the module path in go.mod; otherwise
    the directory name is used.

    Args:
        project_root: Project root directory
        language: Project language

    Returns:
        Package name
    """
    name = project_root.resolve().name
    if language == "go":
        go_mod = project_root / "go.mod"
        if go_mod.exists():
            match = GO_MODULE_PATTERN.search(go_mod.read_text(encoding="utf-8"))
            if match:
                name = match.group(1).rstrip("/").split("/")[-1] or name
    return name


def generate_default_config(language: Language = "node") -> dict[str, Any]:
    """Generate the starter config document for a project.

    Args:
        language: Project language (node or go)

    Returns:
        Config dictionary ready for YAML serialization
    """
    return {
        "version": 1,
        "release": {
            "branch": "main",
            "defaultBump": "patch",
            "changelog": {
                "enabled": True,
                "template": "conventional",
            },
            "checks": [dict(c) for c in _CHECK_COMMANDS[language]],
            "actions": [
                {"type": "commit-push"},
                {"type": "git-tag"},
                {"type": "github-release"},
            ],
        },
    }


def generate_config_header(language: Language) -> str:
    """Generate the comment header for a starter config file."""
    return (
        "# xrelease configuration\n"
        f"# Language: {language}\n"
        "#\n"
        "# release.branches accepts glob patterns (e.g. 'hotfix/*').\n"
        "# release.version.files rewrites versions in other files:\n"
        "#   - path: go.mod\n"
        "#     pattern: '^module\\s+([^\\s]+)'\n"
        "#     template: 'module ${1}'\n"
        "# Action types: git-tag, commit-push, github-release, custom\n"
        "\n"
    )


def write_default_config(output_path: Path, language: Language = "node") -> None:
    """Write a starter config file.

    Args:
        output_path: Path to write the config file
        language: Project language

    Raises:
        OSError: If the file cannot be written
    """
    config = generate_default_config(language)
    content = generate_config_header(language) + yaml.safe_dump(
        config, sort_keys=False, default_flow_style=False
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
