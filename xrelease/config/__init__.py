"""Configuration management for the xrelease tool."""

from xrelease.config.defaults import DEFAULT_CONFIG_FILENAME, default_config
from xrelease.config.loader import (
    ConfigLoadResult,
    LoadStatus,
    load_config,
    resolve_config,
)
from xrelease.config.models import (
    BaseAction,
    ChangelogConfig,
    CommitPushAction,
    CustomAction,
    GitHubReleaseAction,
    GitTagAction,
    ReleaseAction,
    ReleaseSettings,
    StepConfig,
    UnknownAction,
    VersionConfig,
    VersionFileConfig,
    XreleaseConfig,
)

__all__ = [
    "XreleaseConfig",
    "ReleaseSettings",
    "VersionConfig",
    "VersionFileConfig",
    "ChangelogConfig",
    "StepConfig",
    "BaseAction",
    "GitTagAction",
    "CommitPushAction",
    "GitHubReleaseAction",
    "CustomAction",
    "UnknownAction",
    "ReleaseAction",
    "ConfigLoadResult",
    "LoadStatus",
    "load_config",
    "resolve_config",
    "default_config",
    "DEFAULT_CONFIG_FILENAME",
]
