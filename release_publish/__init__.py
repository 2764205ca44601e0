"""Release publishing for npm packages: GitHub release notes, artifacts and registry."""

__version__ = "0.1.0"

from release_publish.exceptions import (
    ConfigurationError,
    NetworkError,
    PublishError,
    ReleaseError,
    ReleaseNotFoundError,
)

__all__ = [
    "__version__",
    "ReleaseError",
    "ConfigurationError",
    "PublishError",
    "ReleaseNotFoundError",
    "NetworkError",
]
