"""Publish workflow orchestration.

Coordinates the two independent publish paths:
1. GitHub: extract release notes from the changelog, update the release,
   upload artifacts
2. npm: log in, publish unless already published, apply alias tags

Both read the same package.json. Fatal conditions propagate as
ReleaseError; warnings are printed and the path continues.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from release_publish.api.github import GitHubClient
from release_publish.changelog import ChangelogExtraction, extract_release_notes_from_file
from release_publish.config.loader import load_manifest
from release_publish.config.models import BranchConfig, PackageManifest, ReleaseConfig
from release_publish.exceptions import ConfigurationError
from release_publish.publishers.base import PublishResult, PublishStatus
from release_publish.publishers.github import (
    GitHubReleasePublisher,
    parse_artifact_paths,
    parse_repository,
)
from release_publish.publishers.npm import NpmPublisher

console = Console()


@dataclass(frozen=True)
class PublishInputs:
    """Values read from the environment and action inputs.

    Collected once by the CLI and passed down explicitly.
    """

    repo_token: str | None = None
    github_artifacts: str | None = None
    npm_credentials: str | None = None
    npm_email: str | None = None
    github_repository: str | None = None
    branch: str | None = None


@dataclass
class PublishWorkflow:
    """Runs the GitHub and npm publish paths for one project."""

    project_root: Path
    config: ReleaseConfig
    inputs: PublishInputs
    github_client: GitHubClient | None = None
    npm_publisher: NpmPublisher | None = None
    results: dict[str, PublishResult] = field(default_factory=dict)

    _manifest: PackageManifest | None = field(default=None, init=False, repr=False)

    @property
    def manifest(self) -> PackageManifest:
        """package.json, loaded once per workflow."""
        if self._manifest is None:
            self._manifest = load_manifest(self.project_root)
        return self._manifest

    def _warn(self, message: str) -> None:
        console.print(f"[yellow]  Warning: {message}[/yellow]")

    def extract_notes(self) -> ChangelogExtraction:
        """Extract release notes for the manifest version."""
        changelog_path = self.project_root / self.config.changelog.file
        extraction = extract_release_notes_from_file(changelog_path, self.manifest.version)
        for warning in extraction.warnings:
            self._warn(warning)
        return extraction

    def resolve_branch(self) -> BranchConfig:
        """Find the publish settings for the current branch."""
        if self.inputs.branch is None or not self.inputs.branch.strip():
            raise ConfigurationError(
                "Could not determine the current branch",
                fix_hint="Pass --branch or set GITHUB_REF_NAME",
            )
        branch = self.config.get_branch(self.inputs.branch.strip())
        if branch is None:
            configured = ", ".join(b.name for b in self.config.branches) or "none"
            raise ConfigurationError(
                f"No publish configuration for branch {self.inputs.branch}",
                details=f"Configured branches: {configured}",
                fix_hint="Add the branch under 'branches' in release_conf.yml",
            )
        return branch

    def publish_github(self) -> PublishResult:
        """Update the GitHub release notes and upload artifacts."""
        owner, repo = parse_repository(self.inputs.github_repository)
        extraction = self.extract_notes()

        client = self.github_client
        if client is None:
            if self.inputs.repo_token is None or not self.inputs.repo_token.strip():
                raise ConfigurationError(
                    "Missing GitHub token",
                    fix_hint="Set the repo-token input or GITHUB_TOKEN",
                )
            client = GitHubClient(
                self.inputs.repo_token.strip(),
                api_url=self.config.github.api_url,
                timeout=self.config.github.timeout,
            )

        artifacts = [
            path if path.is_absolute() else self.project_root / path
            for path in parse_artifact_paths(self.inputs.github_artifacts)
        ]

        publisher = GitHubReleasePublisher(client, tag_prefix=self.config.version.tag_prefix)
        result = publisher.publish(
            owner,
            repo,
            self.manifest.version,
            extraction.notes,
            artifacts,
        )
        result.warnings[:0] = extraction.warnings
        return result

    def publish_npm(self) -> PublishResult:
        """Publish the package to the registry for the current branch."""
        branch = self.resolve_branch()
        publisher = self.npm_publisher or NpmPublisher(
            project_root=self.project_root,
            credentials=self.inputs.npm_credentials,
            email=self.inputs.npm_email,
            npm=self.config.npm.command,
            userconfig=Path(self.config.npm.userconfig).expanduser(),
            timeout=self.config.npm.timeout,
        )
        result = publisher.publish(self.manifest, branch)
        for warning in result.warnings:
            self._warn(warning)
        return result

    def run(self, targets: list[str]) -> dict[str, PublishResult]:
        """Run the requested publish paths in order.

        Args:
            targets: Any of "github" and "npm"

        Returns:
            Results keyed by target

        Raises:
            ReleaseError: On the first fatal condition; later targets do not run
        """
        steps: dict[str, tuple[str, Callable[[], PublishResult]]] = {
            "github": ("Publishing GitHub release", self.publish_github),
            "npm": ("Publishing to npm", self.publish_npm),
        }

        for target in targets:
            step_name, step_func = steps[target]
            console.print(f"\n[bold cyan]>[/bold cyan] {step_name}...")

            result = step_func()
            self.results[target] = result

            for step in result.steps:
                console.print(f"[dim]  {step}[/dim]")
            if result.status == PublishStatus.SKIPPED:
                console.print(f"[yellow]  {result.message}[/yellow]")
            else:
                console.print(f"[green]  {result.message}[/green]")

        return self.results


def display_results(results: dict[str, PublishResult]) -> None:
    """Print a summary table of publish results."""
    table = Table(title="Publish Summary")
    table.add_column("Status", style="bold", width=8)
    table.add_column("Target", style="cyan")
    table.add_column("Message")

    for target, result in results.items():
        if result.status == PublishStatus.SKIPPED:
            status = "[yellow]SKIP[/yellow]"
        else:
            status = "[green]DONE[/green]"
        table.add_row(status, target, result.message)

    console.print(table)


def execute_publish(
    project_root: Path,
    config: ReleaseConfig,
    inputs: PublishInputs,
    targets: list[str],
) -> dict[str, PublishResult]:
    """Run the publish workflow with a start and summary banner.

    This is the main entry point used by the CLI.
    """
    workflow = PublishWorkflow(project_root=project_root, config=config, inputs=inputs)

    console.print(
        Panel(
            f"[bold]Publishing {workflow.manifest.spec}[/bold]\n"
            f"Targets: {', '.join(targets)}",
            title="Starting Publish",
            border_style="cyan",
        )
    )

    results = workflow.run(targets)
    display_results(results)
    return results
