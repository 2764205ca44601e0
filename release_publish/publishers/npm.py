"""npm Registry publisher.

Publishes the package in the project root to the registry configured in
package.json under the dist-tag of the current branch.

Features:
- Token login against the configured registry (scoped packages supported)
- Skips publishing when the tag already points at the manifest version
- Points additional alias dist-tags at the published version

Every npm call runs with NPM_CONFIG_USERCONFIG set to the npmrc the login
token was written to.
"""

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import ClassVar

from release_publish.api.npm import NpmRegistryClient, parse_credentials, write_npmrc
from release_publish.config.models import BranchConfig, PackageManifest
from release_publish.exceptions import ConfigurationError, PublishError
from release_publish.publishers.base import PublishResult
from release_publish.utils.shell import Runner, ShellError, is_command_available, run

# npm error code for a package that does not exist on the registry
NOT_FOUND_CODE = "E404"


class NpmPublishState(Enum):
    """Progress of an npm publish.

    UNAUTHENTICATED -> AUTHENTICATED -> PUBLISHED | SKIPPED_ALREADY_PUBLISHED
    -> ALIASES_APPLIED -> DONE

    ALIASES_APPLIED is entered once every alias tag of the branch points at
    the version, also when the branch has none.
    """

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    PUBLISHED = "published"
    SKIPPED_ALREADY_PUBLISHED = "skipped_already_published"
    ALIASES_APPLIED = "aliases_applied"
    DONE = "done"


def npm_env(userconfig: Path) -> dict[str, str]:
    """Environment that points npm at a user-level npmrc."""
    return {"NPM_CONFIG_USERCONFIG": str(userconfig)}


def get_published_version(
    package_name: str,
    tag: str,
    cwd: Path,
    npm: str = "npm",
    runner: Runner = run,
    timeout: int = 300,
    env: Mapping[str, str] | None = None,
) -> str | None:
    """Return the version a dist-tag currently points at.

    Args:
        package_name: Package name
        tag: dist-tag to look up
        cwd: Working directory for the npm call
        npm: npm executable
        runner: Command runner
        timeout: Command timeout in seconds
        env: Extra environment for npm

    Returns:
        Version string, or None if the package or tag does not exist yet

    Raises:
        PublishError: If npm fails for any reason other than a missing package
    """
    result = runner(
        [npm, "view", f"{package_name}@{tag}", "version"],
        cwd=cwd,
        check=False,
        timeout=timeout,
        env=env,
    )
    if result.returncode != 0:
        if NOT_FOUND_CODE in result.stderr:
            return None
        raise PublishError(
            f"Could not query {package_name}@{tag} from the registry",
            details=f"Exit code: {result.returncode}\n{result.stderr or result.stdout}",
        )
    # npm prints one line per matching version; a dist-tag matches one
    lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
    return lines[-1] if lines else None


class NpmPublisher:
    """Publisher for npm-compatible registries.

    Configuration:
        npm:
            command: npm
            userconfig: ~/.npmrc
            timeout: 300
    """

    name: ClassVar[str] = "npm"
    display_name: ClassVar[str] = "npm Registry"

    def __init__(
        self,
        project_root: Path,
        credentials: str | None,
        email: str | None,
        npm: str = "npm",
        userconfig: Path | None = None,
        timeout: int = 300,
        runner: Runner = run,
        registry_client: NpmRegistryClient | None = None,
    ) -> None:
        self.project_root = project_root
        self.credentials = credentials
        self.email = email
        self.npm = npm
        self.userconfig = userconfig or Path("~/.npmrc").expanduser()
        self.timeout = timeout
        self.runner = runner
        self.registry_client = registry_client
        self.state = NpmPublishState.UNAUTHENTICATED
        self.history: list[NpmPublishState] = [self.state]

    def _enter(self, state: NpmPublishState) -> None:
        self.state = state
        self.history.append(state)

    def _npm(self, *args: str) -> None:
        cmd = [self.npm, *args]
        try:
            self.runner(
                cmd,
                cwd=self.project_root,
                check=True,
                timeout=self.timeout,
                env=npm_env(self.userconfig),
            )
        except ShellError as e:
            raise PublishError(
                f"npm command failed: {e.cmd}",
                details=f"Exit code: {e.returncode}\n{e.stderr or e.stdout}",
            ) from e

    def remove_local_npmrc(self) -> None:
        """Delete the project .npmrc so it cannot override the registry."""
        (self.project_root / ".npmrc").unlink(missing_ok=True)

    def login(self, manifest: PackageManifest, registry: str) -> None:
        """Authenticate against the registry and store the token."""
        username, password = parse_credentials(self.credentials)
        if self.email is None or not self.email.strip():
            raise ConfigurationError(
                "Missing npm email",
                fix_hint="Set the npm-email input",
            )

        client = self.registry_client or NpmRegistryClient(registry, timeout=self.timeout)
        token = client.login(username, password, self.email.strip())
        write_npmrc(self.userconfig, registry, token, scope=manifest.scope)
        self._enter(NpmPublishState.AUTHENTICATED)

    def publish(self, manifest: PackageManifest, branch: BranchConfig) -> PublishResult:
        """Publish the package and apply alias tags.

        Args:
            manifest: Parsed package.json
            branch: Publish settings of the current branch

        Returns:
            PublishResult; SKIPPED when the version was already published

        Raises:
            ConfigurationError: If no registry or credentials are configured
            PublishError: If npm is missing or an npm command fails
            NetworkError: If the registry login fails
        """
        self.state = NpmPublishState.UNAUTHENTICATED
        self.history = [self.state]
        self.remove_local_npmrc()

        registry = manifest.registry_url
        if registry is None:
            raise ConfigurationError(
                "Expected NPM registry to be defined in package.json but it is not",
                fix_hint='Add "publishConfig": {"registry": "<url>"} to package.json',
            )

        if not is_command_available(self.npm):
            raise PublishError(
                f"{self.npm} CLI not installed",
                details="The npm CLI is required for publishing",
            )

        self.login(manifest, registry)
        steps = [f"Logged in to {registry}"]

        published_version = get_published_version(
            manifest.name,
            branch.tag,
            cwd=self.project_root,
            npm=self.npm,
            runner=self.runner,
            timeout=self.timeout,
            env=npm_env(self.userconfig),
        )

        if published_version != manifest.version:
            self._npm("publish", "--tag", branch.tag)
            self._enter(NpmPublishState.PUBLISHED)
            result = PublishResult.success(
                f"Published {manifest.spec} with tag {branch.tag}",
                package_url=f"{registry}/{manifest.name}",
                version=manifest.version,
            )
            steps.append(f"Published {manifest.spec} with tag {branch.tag}")
        else:
            self._enter(NpmPublishState.SKIPPED_ALREADY_PUBLISHED)
            message = (
                f"Version {published_version} has already been published, skipping publish"
            )
            result = PublishResult.skipped(message, version=manifest.version)
            result.warnings.append(message)

        for alias in branch.alias_tags or []:
            self._npm("dist-tag", "add", manifest.spec, alias)
            steps.append(f"Tagged {manifest.spec} as {alias}")
        self._enter(NpmPublishState.ALIASES_APPLIED)

        result.steps = steps
        self._enter(NpmPublishState.DONE)
        return result
