"""Publishers for GitHub releases and npm registries."""

from release_publish.publishers.base import PublishResult, PublishStatus
from release_publish.publishers.github import GitHubReleasePublisher
from release_publish.publishers.npm import NpmPublisher, NpmPublishState

__all__ = [
    "PublishResult",
    "PublishStatus",
    "GitHubReleasePublisher",
    "NpmPublisher",
    "NpmPublishState",
]
