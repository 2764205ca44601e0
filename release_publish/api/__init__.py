"""HTTP clients for GitHub and npm registries."""

from release_publish.api.github import GitHubClient
from release_publish.api.npm import NpmRegistryClient, parse_credentials, write_npmrc

__all__ = [
    "GitHubClient",
    "NpmRegistryClient",
    "parse_credentials",
    "write_npmrc",
]
