"""Pydantic v2 configuration models for .xrelease.yml.

These models provide:
- Type-safe configuration loading
- Per-field defaults (every field, nested ones included, is defaulted on its own)
- Immutable config values that are passed explicitly through the pipeline
- Environment variable override support on the root model

Document layout::

    version: 1
    release:
      branch: main
      defaultBump: patch
      changelog: {enabled: true, template: conventional}
      checks: [{type: test, command: npm test}]
      actions: [{type: git-tag}, {type: github-release, assets: "dist/*"}]
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from xrelease.utils.version import BumpType

ChangelogTemplate = Literal["conventional", "simple"]

ACTION_TYPES: tuple[str, ...] = ("git-tag", "commit-push", "github-release", "custom")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class VersionFileConfig(_Frozen):
    """A file whose version-bearing string is rewritten on release."""

    path: str = Field(description="File path, relative to the project root")
    pattern: str = Field(description="Regular expression locating the version string")
    template: str = Field(
        description="Replacement text; ${version} and ${1}, ${2}... are substituted",
    )


class VersionConfig(_Frozen):
    """Version propagation configuration."""

    files: list[VersionFileConfig] = Field(default_factory=list)

    @field_validator("files", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ChangelogConfig(_Frozen):
    """Changelog generation configuration."""

    enabled: bool = Field(default=True, description="Generate CHANGELOG.md on release")
    template: ChangelogTemplate = Field(
        default="conventional",
        description="Commit formatting (conventional or simple)",
    )

    @field_validator("enabled", mode="before")
    @classmethod
    def none_is_enabled(cls, v: Any) -> Any:
        return True if v is None else v

    @field_validator("template", mode="before")
    @classmethod
    def none_is_conventional(cls, v: Any) -> Any:
        return "conventional" if v is None else v


class StepConfig(_Frozen):
    """A check, pre-release step or post-release step.

    Entries without a command are accepted and skipped at run time.
    """

    type: str = Field(description="Label used in failure messages (e.g. 'lint')")
    command: str | None = Field(default=None, description="Shell command to run")


class BaseAction(_Frozen):
    """Fields shared by every release action."""

    type: str
    name: str | None = Field(default=None, description="Display name")
    command: str | None = Field(default=None, description="Shell command")

    @property
    def display_name(self) -> str:
        return self.name or self.type


class GitTagAction(BaseAction):
    """Create an annotated v<version> tag and push it to origin."""

    type: Literal["git-tag"] = "git-tag"


class CommitPushAction(BaseAction):
    """Stage everything, commit 'chore: release v<version>' and push."""

    type: Literal["commit-push"] = "commit-push"


class GitHubReleaseAction(BaseAction):
    """Create (or recreate) the GitHub release for v<version>."""

    type: Literal["github-release"] = "github-release"
    assets: str | list[str] | None = Field(
        default=None,
        description="Glob pattern(s) for files to attach",
    )

    @property
    def asset_patterns(self) -> list[str]:
        if self.assets is None:
            return []
        if isinstance(self.assets, str):
            return [self.assets]
        return list(self.assets)


class CustomAction(BaseAction):
    """Run an arbitrary shell command."""

    type: Literal["custom"] = "custom"


class UnknownAction(BaseAction):
    """Action whose type is not recognised; tolerated and reported at run time."""


def _action_discriminator(value: Any) -> str:
    raw = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return raw if raw in ACTION_TYPES else "unknown"


ReleaseAction = Annotated[
    Union[
        Annotated[GitTagAction, Tag("git-tag")],
        Annotated[CommitPushAction, Tag("commit-push")],
        Annotated[GitHubReleaseAction, Tag("github-release")],
        Annotated[CustomAction, Tag("custom")],
        Annotated[UnknownAction, Tag("unknown")],
    ],
    Discriminator(_action_discriminator),
]


class ReleaseSettings(_Frozen):
    """The `release` section of the config document."""

    branch: str = Field(default="main", description="Branch releases are created from")
    branches: list[str] = Field(
        default_factory=list,
        description="Allowed branch patterns; overrides `branch` when non-empty",
    )
    default_bump: BumpType = Field(
        default="patch",
        alias="defaultBump",
        description="Bump applied when no bump flag is given",
    )
    version: VersionConfig = Field(default_factory=VersionConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    checks: list[StepConfig] = Field(default_factory=list)
    pre: list[StepConfig] = Field(default_factory=list)
    post: list[StepConfig] = Field(default_factory=list)
    actions: list[ReleaseAction] = Field(default_factory=list)

    @field_validator("branch", mode="before")
    @classmethod
    def default_branch(cls, v: Any) -> Any:
        return v or "main"

    @field_validator("default_bump", mode="before")
    @classmethod
    def default_bump_is_patch(cls, v: Any) -> Any:
        return "patch" if v is None else v

    @field_validator("branches", "checks", "pre", "post", "actions", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("version", "changelog", mode="before")
    @classmethod
    def none_is_default(cls, v: Any) -> Any:
        return {} if v is None else v


class XreleaseConfig(BaseSettings):
    """Root configuration model for .xrelease.yml.

    Supports environment variable overrides with XRELEASE_ prefix.
    Example: XRELEASE_RELEASE__BRANCH=develop
    """

    version: int = Field(default=1, description="Config schema version")
    release: ReleaseSettings = Field(default_factory=ReleaseSettings)

    model_config = SettingsConfigDict(
        env_prefix="XRELEASE_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    @field_validator("version", mode="before")
    @classmethod
    def default_schema_version(cls, v: Any) -> Any:
        return v or 1

    @field_validator("release", mode="before")
    @classmethod
    def none_is_default(cls, v: Any) -> Any:
        return {} if v is None else v
