"""Command-line interface for the release publisher.

Provides commands for:
- github: Update the GitHub release notes and upload artifacts
- npm: Publish the package to its registry
- all: Run both, GitHub first
- notes: Print the changelog notes for a version
"""

from pathlib import Path

import typer
from rich.console import Console

from release_publish import __version__
from release_publish.changelog import extract_release_notes_from_file
from release_publish.config.loader import load_config, load_manifest
from release_publish.exceptions import ReleaseError
from release_publish.utils.version import remove_tag_prefix
from release_publish.workflow import PublishInputs, execute_publish

app = typer.Typer(
    name="release-publish",
    help="Publish npm package releases to GitHub and the npm registry",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"release-publish version {__version__}")
        raise typer.Exit()


def fail(error: ReleaseError) -> typer.Exit:
    """Report a fatal error and build the matching exit."""
    console.print(f"[red]Error:[/red] {error.message}")
    if error.details:
        console.print(f"[dim]{error.details}[/dim]")
    if error.fix_hint:
        console.print(f"[yellow]Fix:[/yellow] {error.fix_hint}")
    return typer.Exit(code=error.exit_code)


def _run(
    targets: list[str],
    project_root: Path,
    config: Path | None,
    inputs: PublishInputs,
) -> None:
    try:
        cfg = load_config(config, project_root=project_root)
        execute_publish(project_root, cfg, inputs, targets)
    except ReleaseError as e:
        raise fail(e) from None


ProjectRootOption = typer.Option(
    Path("."),
    "--project-root",
    "-C",
    help="Directory containing package.json",
)
ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration file (searched for when omitted)",
)
RepoTokenOption = typer.Option(
    None,
    "--repo-token",
    envvar=["INPUT_REPO-TOKEN", "GITHUB_TOKEN"],
    help="GitHub token with write access to releases",
    show_envvar=False,
)
ArtifactsOption = typer.Option(
    None,
    "--github-artifacts",
    envvar="INPUT_GITHUB-ARTIFACTS",
    help="Comma-separated artifact paths to upload",
    show_envvar=False,
)
RepositoryOption = typer.Option(
    None,
    "--repository",
    envvar="GITHUB_REPOSITORY",
    help="Repository as owner/repo",
)
CredentialsOption = typer.Option(
    None,
    "--npm-credentials",
    envvar="INPUT_NPM-CREDENTIALS",
    help="Registry credentials as username:password",
    show_envvar=False,
)
EmailOption = typer.Option(
    None,
    "--npm-email",
    envvar="INPUT_NPM-EMAIL",
    help="Registry account email",
    show_envvar=False,
)
BranchOption = typer.Option(
    None,
    "--branch",
    "-b",
    envvar="GITHUB_REF_NAME",
    help="Branch whose publish configuration applies",
)


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Publish npm package releases.

    Runs after the version stage of a pipeline: the GitHub release for
    the package version must already exist.
    """
    pass


@app.command()
def github(
    project_root: Path = ProjectRootOption,
    config: Path | None = ConfigOption,
    repo_token: str | None = RepoTokenOption,
    github_artifacts: str | None = ArtifactsOption,
    repository: str | None = RepositoryOption,
) -> None:
    """Update the GitHub release with changelog notes and upload artifacts.

    Examples:
        release-publish github --github-artifacts "dist/a.zip, dist/b.tgz"
    """
    inputs = PublishInputs(
        repo_token=repo_token,
        github_artifacts=github_artifacts,
        github_repository=repository,
    )
    _run(["github"], project_root, config, inputs)


@app.command()
def npm(
    project_root: Path = ProjectRootOption,
    config: Path | None = ConfigOption,
    npm_credentials: str | None = CredentialsOption,
    npm_email: str | None = EmailOption,
    branch: str | None = BranchOption,
) -> None:
    """Publish the package under the branch dist-tag and apply alias tags.

    Examples:
        release-publish npm --branch main
    """
    inputs = PublishInputs(
        npm_credentials=npm_credentials,
        npm_email=npm_email,
        branch=branch,
    )
    _run(["npm"], project_root, config, inputs)


@app.command(name="all")
def all_targets(
    project_root: Path = ProjectRootOption,
    config: Path | None = ConfigOption,
    repo_token: str | None = RepoTokenOption,
    github_artifacts: str | None = ArtifactsOption,
    repository: str | None = RepositoryOption,
    npm_credentials: str | None = CredentialsOption,
    npm_email: str | None = EmailOption,
    branch: str | None = BranchOption,
) -> None:
    """Run the GitHub and npm publish steps in order."""
    inputs = PublishInputs(
        repo_token=repo_token,
        github_artifacts=github_artifacts,
        npm_credentials=npm_credentials,
        npm_email=npm_email,
        github_repository=repository,
        branch=branch,
    )
    _run(["github", "npm"], project_root, config, inputs)


@app.command()
def notes(
    version: str | None = typer.Argument(  # noqa: B008
        None,
        help="Version to extract (defaults to the package.json version)",
    ),
    project_root: Path = ProjectRootOption,
    config: Path | None = ConfigOption,
) -> None:
    """Print the changelog notes for a version.

    Examples:
        release-publish notes
        release-publish notes v1.2.3
    """
    try:
        cfg = load_config(config, project_root=project_root)
        if version is None:
            version = load_manifest(project_root).version
        else:
            version = remove_tag_prefix(version, cfg.version.tag_prefix)

        extraction = extract_release_notes_from_file(
            project_root / cfg.changelog.file, version
        )
    except ReleaseError as e:
        raise fail(e) from None

    for warning in extraction.warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {warning}")
    typer.echo(extraction.notes, nl=False)


if __name__ == "__main__":
    app()
