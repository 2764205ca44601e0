"""Shared result types for publishers.

Publishers handle the two publish paths:
- GitHub releases (release notes and artifacts)
- npm registry (package and dist-tags)

Fatal conditions are raised as ReleaseError subclasses. Everything a
publisher completes is described by a PublishResult, including the
non-fatal warnings it ran into.
"""

from dataclasses import dataclass, field
from enum import Enum


class PublishStatus(Enum):
    """Status of a publish operation."""

    SUCCESS = "success"
    SKIPPED = "skipped"


@dataclass
class PublishResult:
    """Result of a publish operation.

    Attributes:
        status: Overall status
        message: Brief description
        package_url: Direct URL to the published release or package
        version: Version that was published
        warnings: Non-fatal problems encountered
        steps: Completed steps, in order
    """

    status: PublishStatus
    message: str
    package_url: str | None = None
    version: str | None = None
    warnings: list[str] = field(default_factory=list)
    steps: list[str] = field(default_factory=list)

    @classmethod
    def success(
        cls,
        message: str,
        package_url: str | None = None,
        version: str | None = None,
    ) -> "PublishResult":
        """Create a successful publish result.

        Args:
            message: Success message
            package_url: Package URL
            version: Published version

        Returns:
            PublishResult with SUCCESS status
        """
        return cls(
            status=PublishStatus.SUCCESS,
            message=message,
            package_url=package_url,
            version=version,
        )

    @classmethod
    def skipped(cls, message: str, version: str | None = None) -> "PublishResult":
        """Create a skipped publish result.

        Args:
            message: Reason for skipping
            version: Version that was already published

        Returns:
            PublishResult with SKIPPED status
        """
        return cls(status=PublishStatus.SKIPPED, message=message, version=version)
