"""Configuration management for the release publisher."""

from release_publish.config.models import (
    BranchConfig,
    ChangelogConfig,
    GitHubConfig,
    NPMConfig,
    PackageManifest,
    PublishConfig,
    ReleaseConfig,
    VersionConfig,
)

__all__ = [
    "ReleaseConfig",
    "BranchConfig",
    "ChangelogConfig",
    "GitHubConfig",
    "NPMConfig",
    "VersionConfig",
    "PackageManifest",
    "PublishConfig",
]
