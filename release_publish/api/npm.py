"""npm registry login.

Implements the legacy ``adduser`` login protocol used by npm-compatible
registries (npmjs, Verdaccio, Nexus, Artifactory): a PUT to the CouchDB
style user document returns an auth token. The token is then written to
the user-level npmrc so that subsequent npm CLI calls are authenticated.
"""

from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import quote, urlparse

import requests

from release_publish.exceptions import ConfigurationError, NetworkError


def parse_credentials(credentials: str | None) -> tuple[str, str]:
    """Split a ``username:password`` input.

    Only the first colon separates the fields, so passwords may contain
    colons.

    Raises:
        ConfigurationError: If the input is empty or has no colon
    """
    if credentials is None or not credentials.strip():
        raise ConfigurationError(
            "Missing npm credentials",
            fix_hint="Set the npm-credentials input to 'username:password'",
        )
    username, sep, password = credentials.strip().partition(":")
    if not sep or not username or not password:
        raise ConfigurationError(
            "npm credentials must have the form 'username:password'",
        )
    return username, password


def registry_auth_key(registry: str) -> str:
    """Return the npmrc key prefix for a registry (``//host/path/``)."""
    parsed = urlparse(registry)
    path = parsed.path.rstrip("/")
    return f"//{parsed.netloc}{path}/"


class NpmRegistryClient:
    """Authenticates against an npm-compatible registry."""

    def __init__(
        self,
        registry: str,
        timeout: int = 60,
        session: requests.Session | None = None,
    ) -> None:
        self.registry = registry.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def login(self, username: str, password: str, email: str) -> str:
        """Log in and return the auth token issued by the registry.

        Raises:
            NetworkError: If the registry rejects the login or is unreachable
        """
        user_id = f"org.couchdb.user:{username}"
        url = f"{self.registry}/-/user/{quote(user_id, safe=':')}"
        payload = {
            "_id": user_id,
            "name": username,
            "password": password,
            "email": email,
            "type": "user",
            "roles": [],
            "date": datetime.now(timezone.utc).isoformat(),
        }

        try:
            response = self.session.put(
                url,
                json=payload,
                auth=(username, password),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(
                f"Could not reach npm registry {self.registry}",
                details=str(e),
            ) from e

        if not response.ok:
            raise NetworkError(
                f"npm login failed for {username} (HTTP {response.status_code})",
                details=response.text[:500],
                fix_hint="Check the npm-credentials and npm-email inputs",
                status_code=response.status_code,
            )

        token = response.json().get("token")
        if not token:
            raise NetworkError(
                f"npm registry {self.registry} did not return an auth token",
                details=response.text[:500],
            )
        return str(token)


def write_npmrc(
    path: Path,
    registry: str,
    token: str,
    scope: str | None = None,
) -> None:
    """Store a registry token (and scope mapping) in an npmrc file.

    Lines previously configuring the same registry token or scope are
    replaced, every other line is preserved.
    """
    auth_key = registry_auth_key(registry)
    token_line = f"{auth_key}:_authToken={token}"
    scope_line = f"{scope}:registry={registry.rstrip('/')}/" if scope else None

    lines: list[str] = []
    if path.exists():
        lines = path.read_text(encoding="utf-8").splitlines()

    kept = [
        line
        for line in lines
        if not line.startswith(f"{auth_key}:_authToken=")
        and not (scope and line.startswith(f"{scope}:registry="))
    ]
    kept.append(token_line)
    if scope_line:
        kept.append(scope_line)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(kept) + "\n", encoding="utf-8")
