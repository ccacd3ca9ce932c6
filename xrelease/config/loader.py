"""Configuration file loading.

Supports YAML and TOML config files with:
- Automatic format detection by extension
- A structured result distinguishing defaulted, loaded and failed loads
- Per-field default merging (done by the pydantic models)
"""

import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from xrelease.config.defaults import default_config
from xrelease.config.models import XreleaseConfig
from xrelease.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigurationError,
)

SEARCH_PATHS = [
    ".xrelease.yml",
    ".xrelease.yaml",
    ".xrelease.toml",
]


class LoadStatus(Enum):
    """How a configuration was obtained."""

    DEFAULTED = "defaulted"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class ConfigLoadResult:
    """Outcome of resolving a configuration.

    Attributes:
        status: DEFAULTED (no file found), LOADED, or FAILED
        config: The resolved config (None when FAILED)
        path: The file that was read or attempted (None when DEFAULTED)
        error: The failure reason (only when FAILED)
    """

    status: LoadStatus
    config: XreleaseConfig | None = None
    path: Path | None = None
    error: ConfigurationError | None = None

    def unwrap(self) -> XreleaseConfig:
        """Return the config or raise the load error."""
        if self.status is LoadStatus.FAILED or self.config is None:
            raise self.error or ConfigurationError("Configuration could not be loaded")
        return self.config


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML as dictionary (empty for an empty file)

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigParseError: If the file cannot be parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigNotFoundError(
            f"Config file not found at: {path}",
            fix_hint="Run 'xrelease init' to create one",
        ) from None
    except yaml.YAMLError as e:
        raise ConfigParseError(
            f"Invalid YAML in {path}",
            details=str(e),
            fix_hint="Check YAML syntax at the indicated line",
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Invalid configuration in {path}",
            details=f"Expected a mapping at the top level, got {type(data).__name__}",
        )
    return data


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML configuration file.

    Args:
        path: Path to the TOML file

    Returns:
        Parsed TOML as dictionary

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigParseError: If the file cannot be parsed
    """
    try:
        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
            return data
    except FileNotFoundError:
        raise ConfigNotFoundError(
            f"Config file not found at: {path}",
            fix_hint="Run 'xrelease init' to create one",
        ) from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(
            f"Invalid TOML in {path}",
            details=str(e),
            fix_hint="Check TOML syntax at the indicated line",
        ) from e


def parse_config_file(config_path: Path) -> XreleaseConfig:
    """Read and validate a config file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigParseError: If the file is malformed or fails validation
    """
    if config_path.suffix in (".yml", ".yaml"):
        data = load_yaml(config_path)
    elif config_path.suffix == ".toml":
        data = load_toml(config_path)
    else:
        raise ConfigParseError(
            f"Unsupported config format: {config_path.suffix or config_path.name}",
            fix_hint="Use .yml, .yaml, or .toml extension",
        )

    try:
        return XreleaseConfig(**data)
    except PydanticValidationError as e:
        raise ConfigParseError(
            f"Invalid configuration in {config_path}",
            details=str(e),
            fix_hint="Check the configuration values match expected types",
        ) from e


def resolve_config(
    path: Path | str | None = None,
    project_root: Path | None = None,
) -> ConfigLoadResult:
    """Resolve the release configuration without raising.

    Search order if path not specified:
    1. .xrelease.yml
    2. .xrelease.yaml
    3. .xrelease.toml

    Args:
        path: Explicit path to config file (must exist)
        project_root: Directory relative paths are resolved against (defaults to cwd)

    Returns:
        ConfigLoadResult describing how the config was obtained
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path: Path | None = None
    if path:
        config_path = Path(path)
        if not config_path.is_absolute():
            config_path = project_root / config_path
        if not config_path.exists():
            return ConfigLoadResult(
                status=LoadStatus.FAILED,
                path=config_path,
                error=ConfigNotFoundError(
                    f"Config file not found at: {path}",
                    fix_hint="Check the --config path or run 'xrelease init'",
                ),
            )
    else:
        for search_path in SEARCH_PATHS:
            candidate = project_root / search_path
            if candidate.exists():
                config_path = candidate
                break

    if config_path is None:
        return ConfigLoadResult(status=LoadStatus.DEFAULTED, config=default_config())

    try:
        config = parse_config_file(config_path)
    except ConfigurationError as e:
        return ConfigLoadResult(status=LoadStatus.FAILED, path=config_path, error=e)

    return ConfigLoadResult(status=LoadStatus.LOADED, config=config, path=config_path)


def load_config(
    path: Path | str | None = None,
    project_root: Path | None = None,
) -> XreleaseConfig:
    """Load release configuration, falling back to defaults.

    Args:
        path: Explicit path to config file
        project_root: Project root directory (defaults to cwd)

    Returns:
        Validated XreleaseConfig instance

    Raises:
        ConfigNotFoundError: If an explicit path does not exist
        ConfigParseError: If the config file is malformed
    """
    return resolve_config(path, project_root).unwrap()
