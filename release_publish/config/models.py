"""Pydantic v2 models for package.json and the release configuration.

These models provide:
- Type-safe loading of the package manifest
- Automatic validation of release_conf.yml
- Default values
- Environment variable override support
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PublishConfig(BaseModel):
    """The ``publishConfig`` block of package.json."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    registry: str | None = Field(
        default=None,
        description="Registry the package is published to",
    )


class PackageManifest(BaseModel):
    """Read-only view of package.json.

    Only the fields the publishers need are modelled; everything else in
    the file is ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(description="Package name, optionally scoped (@scope/pkg)")
    version: str = Field(description="Package version")
    publish_config: PublishConfig | None = Field(
        default=None,
        alias="publishConfig",
        description="npm publishConfig block",
    )

    @field_validator("name", "version")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @property
    def scope(self) -> str | None:
        """Scope prefix of the package name, or None when unscoped."""
        if "/" not in self.name:
            return None
        return self.name.split("/", 1)[0]

    @property
    def registry_url(self) -> str | None:
        """Configured registry URL without a trailing slash."""
        if self.publish_config is None or self.publish_config.registry is None:
            return None
        registry = self.publish_config.registry.strip()
        if registry.endswith("/"):
            registry = registry[:-1]
        return registry or None

    @property
    def spec(self) -> str:
        """``name@version`` as understood by the npm CLI."""
        return f"{self.name}@{self.version}"


class BranchConfig(BaseModel):
    """Publish settings for one protected branch."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Git branch name")
    tag: str = Field(
        default="latest",
        description="dist-tag the package is published under",
    )
    alias_tags: list[str] | None = Field(
        default=None,
        alias="aliasTags",
        description="Additional dist-tags pointed at the published version",
    )


class VersionConfig(BaseModel):
    """Version and tag naming configuration."""

    tag_prefix: str = Field(
        default="v",
        description="Prefix for git tags (e.g., 'v' for v1.0.0)",
    )

    @field_validator("tag_prefix")
    @classmethod
    def validate_tag_prefix(cls, v: str) -> str:
        if v and not v.isalnum():
            raise ValueError("tag_prefix must be alphanumeric or empty")
        return v


class ChangelogConfig(BaseModel):
    """Changelog location configuration."""

    file: str = Field(
        default="CHANGELOG.md",
        description="Changelog path relative to the project root",
    )


class GitHubConfig(BaseModel):
    """GitHub API configuration."""

    api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    timeout: int = Field(
        default=60,
        ge=1,
        description="HTTP timeout in seconds",
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class NPMConfig(BaseModel):
    """npm CLI and registry login configuration."""

    command: str = Field(
        default="npm",
        description="npm executable",
    )
    userconfig: str = Field(
        default="~/.npmrc",
        description="User-level npmrc that receives the auth token",
    )
    timeout: int = Field(
        default=300,
        ge=10,
        description="Timeout in seconds for npm commands and registry login",
    )


def _default_branches() -> list[BranchConfig]:
    return [BranchConfig(name="main"), BranchConfig(name="master")]


class ReleaseConfig(BaseSettings):
    """Root configuration model for release_conf.yml.

    Supports environment variable overrides with RELEASE_ prefix.
    Example: RELEASE_NPM__COMMAND=pnpm
    """

    model_config = SettingsConfigDict(
        env_prefix="RELEASE_",
        env_nested_delimiter="__",
    )

    version: VersionConfig = Field(default_factory=VersionConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    npm: NPMConfig = Field(default_factory=NPMConfig)
    branches: list[BranchConfig] = Field(
        default_factory=_default_branches,
        description="Protected branches and their dist-tags",
    )

    def get_branch(self, name: str) -> BranchConfig | None:
        """Find the publish settings for a branch by name."""
        for branch in self.branches:
            if branch.name == name:
                return branch
        return None
