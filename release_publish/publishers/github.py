"""GitHub Releases publisher.

Completes a release created earlier in the pipeline:
- Replaces the release description with the changelog notes
- Uploads build artifacts as release assets

The release itself must already exist; it is never created here.
"""

import mimetypes
from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar

from release_publish.api.github import GitHubClient
from release_publish.exceptions import (
    ConfigurationError,
    PublishError,
    ReleaseNotFoundError,
)
from release_publish.publishers.base import PublishResult
from release_publish.utils.version import add_tag_prefix

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def parse_artifact_paths(value: str | None) -> list[Path]:
    """Split a comma-separated artifact list into paths.

    Entries are whitespace trimmed and empty entries dropped, so an
    unset input means no artifacts.
    """
    if value is None:
        return []
    return [Path(part.strip()) for part in value.split(",") if part.strip()]


def guess_content_type(path: Path) -> str:
    """Infer the MIME type of an artifact from its file name."""
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or DEFAULT_CONTENT_TYPE


def parse_repository(value: str | None) -> tuple[str, str]:
    """Split an ``owner/repo`` string (as in GITHUB_REPOSITORY).

    Raises:
        ConfigurationError: If the value is unset or malformed
    """
    if value is None or not value.strip():
        raise ConfigurationError(
            "Missing environment variable GITHUB_REPOSITORY",
            fix_hint="Set GITHUB_REPOSITORY to 'owner/repo'",
        )
    owner, sep, repo = value.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigurationError(
            f"Invalid GITHUB_REPOSITORY value: {value!r}",
            fix_hint="Expected the form 'owner/repo'",
        )
    return owner, repo


class GitHubReleasePublisher:
    """Publisher for GitHub Releases.

    Looks up the release for ``<tag_prefix><version>``, replaces its body
    with the release notes and uploads every artifact in order. An upload
    failure aborts the remaining uploads; already uploaded assets are
    left in place.
    """

    name: ClassVar[str] = "github"
    display_name: ClassVar[str] = "GitHub Releases"

    def __init__(self, client: GitHubClient, tag_prefix: str = "v") -> None:
        self.client = client
        self.tag_prefix = tag_prefix

    def publish(
        self,
        owner: str,
        repo: str,
        version: str,
        notes: str,
        artifacts: Sequence[Path],
    ) -> PublishResult:
        """Update the release notes and attach artifacts.

        Args:
            owner: Repository owner
            repo: Repository name
            version: Package version (without tag prefix)
            notes: Release notes; empty notes leave the body untouched
            artifacts: Artifact paths, uploaded in this order

        Returns:
            PublishResult listing the completed steps

        Raises:
            ReleaseNotFoundError: If no release exists for the tag
            PublishError: If an artifact file does not exist
            NetworkError: If any GitHub API call fails
        """
        tag = add_tag_prefix(version, self.tag_prefix)
        release = self.client.get_release_by_tag(owner, repo, tag)
        if release is None:
            raise ReleaseNotFoundError(owner, repo, tag)

        release_id = release["id"]
        steps: list[str] = []

        if notes:
            self.client.update_release(owner, repo, release_id, notes)
            steps.append(f"Updated release notes for {tag}")

        for artifact in artifacts:
            if not artifact.is_file():
                raise PublishError(
                    f"Artifact not found: {artifact}",
                    details=f"{len(steps)} step(s) completed before the failure",
                    fix_hint="Check the github-artifacts input and the build output",
                )
            self.client.upload_release_asset(
                release["upload_url"],
                name=artifact.name,
                data=artifact.read_bytes(),
                content_type=guess_content_type(artifact),
            )
            steps.append(f"Uploaded {artifact.name}")

        result = PublishResult.success(
            f"Published GitHub release {tag}",
            package_url=release.get("html_url"),
            version=version,
        )
        result.steps = steps
        return result
