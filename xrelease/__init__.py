"""Configuration-driven release automation tool."""

__version__ = "0.1.0"

from xrelease.exceptions import (
    ActionError,
    BranchNotAllowedError,
    ChangelogError,
    ConfigurationError,
    EcosystemError,
    FileUpdateError,
    GitError,
    ReleaseError,
    StepFailedError,
    ValidationError,
    VersionError,
)

__all__ = [
    "__version__",
    "ReleaseError",
    "ConfigurationError",
    "ValidationError",
    "BranchNotAllowedError",
    "GitError",
    "StepFailedError",
    "VersionError",
    "EcosystemError",
    "FileUpdateError",
    "ChangelogError",
    "ActionError",
]
