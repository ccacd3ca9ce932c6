"""Exception hierarchy for the xrelease tool.

Every error raised by a pipeline stage derives from ReleaseError. Errors carry
the underlying tool's raw message (in ``details``) and, once the orchestrator
has caught them, the name of the stage that failed (in ``stage``).

The CLI maps every ReleaseError to exit code 1.
"""


class ReleaseError(Exception):
    """Base exception for all release errors."""

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Brief error message
            details: Detailed explanation or raw tool output
            fix_hint: Suggested command or action to fix the issue
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.fix_hint = fix_hint
        self.stage: str | None = None

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)


class ConfigurationError(ReleaseError):
    """Configuration file errors."""


class ConfigNotFoundError(ConfigurationError):
    """An explicitly requested config file does not exist."""


class ConfigParseError(ConfigurationError):
    """Config file exists but is not valid YAML/TOML or fails schema validation."""


class ValidationError(ReleaseError):
    """Pre-release validation failures."""


class BranchNotAllowedError(ValidationError):
    """Current branch matches none of the allowed branch patterns."""


class GitError(ReleaseError):
    """Git operation failures.

    Raised when:
    - The current branch cannot be determined
    - Tag creation or push fails
    - Staging, committing or pushing fails
    """


class StepFailedError(ReleaseError):
    """A configured check, pre-release step or post-release step failed."""


class VersionError(ReleaseError):
    """Version is missing, unparsable, or the bump kind is invalid."""


class NoVersionFieldError(VersionError):
    """The project manifest has no version field."""


class EcosystemError(ReleaseError):
    """Manifest read/write failures."""


class FileUpdateError(ReleaseError):
    """Rewriting a version string in a configured file failed."""


class ChangelogError(ReleaseError):
    """Changelog generation failures."""


class ChangelogWriteFailedError(ChangelogError):
    """The changelog file could not be written."""


class ActionError(ReleaseError):
    """A release action failed."""


class TagActionError(ActionError):
    """Creating or pushing the release tag failed."""


class CommitPushActionError(ActionError):
    """Staging, committing or pushing the release commit failed."""


class GitHubCLIMissingError(ActionError):
    """The gh CLI is not installed."""


class GitHubAuthError(ActionError):
    """The gh CLI is not authenticated."""


class GitHubReleaseError(ActionError):
    """Creating the GitHub release failed."""


class CustomActionError(ActionError):
    """A custom action's command failed."""
