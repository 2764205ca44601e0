"""Minimal GitHub REST API client for release publishing.

Covers the three release operations the publisher needs:
- get a release by tag
- update a release body
- upload a release asset
"""

from typing import Any

import requests

from release_publish.exceptions import NetworkError

GITHUB_API = "https://api.github.com"


class GitHubClient:
    """Thin wrapper around a requests.Session authenticated with a token."""

    def __init__(
        self,
        token: str,
        api_url: str = GITHUB_API,
        timeout: int = 60,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"token {token}",
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": "release-publish",
            }
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise NetworkError(
                f"GitHub API request failed: {method} {url}",
                details=str(e),
            ) from e

    @staticmethod
    def _raise_for_status(response: requests.Response, action: str) -> None:
        if response.ok:
            return
        raise NetworkError(
            f"Failed to {action} (HTTP {response.status_code})",
            details=response.text[:500],
            fix_hint="Check that repo-token has write access to the repository",
            status_code=response.status_code,
        )

    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> dict[str, Any] | None:
        """Look up a release by its tag name.

        Returns:
            Release JSON, or None if no release exists for the tag
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/releases/tags/{tag}"
        response = self._request("GET", url)
        if response.status_code == 404:
            return None
        self._raise_for_status(response, f"get release {tag}")
        release: dict[str, Any] = response.json()
        return release

    def update_release(
        self, owner: str, repo: str, release_id: int, body: str
    ) -> dict[str, Any]:
        """Replace the description of a release."""
        url = f"{self.api_url}/repos/{owner}/{repo}/releases/{release_id}"
        response = self._request("PATCH", url, json={"body": body})
        self._raise_for_status(response, f"update release {release_id}")
        release: dict[str, Any] = response.json()
        return release

    def upload_release_asset(
        self,
        upload_url: str,
        name: str,
        data: bytes,
        content_type: str,
    ) -> dict[str, Any]:
        """Upload a binary asset to a release.

        Args:
            upload_url: The release's ``upload_url`` (URI template allowed)
            name: Asset file name
            data: Raw file content
            content_type: MIME type sent as Content-Type

        Returns:
            Asset JSON returned by GitHub
        """
        # upload_url is a URI template: .../assets{?name,label}
        base_url = upload_url.split("{", 1)[0]
        response = self._request(
            "POST",
            base_url,
            params={"name": name},
            data=data,
            headers={"Content-Type": content_type},
        )
        self._raise_for_status(response, f"upload asset {name}")
        asset: dict[str, Any] = response.json()
        return asset
