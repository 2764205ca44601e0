"""Custom exception hierarchy for the release publisher.

Exit codes follow Unix conventions:
- 1: General error
- 2: Configuration error
- 5: Publish error
- 7: Network error
"""


class ReleaseError(Exception):
    """Base exception for all release publishing errors.

    Every fatal condition is raised as a subclass of this exception.
    The CLI converts it into a failure message and a process exit code,
    library code never exits the process itself.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Brief error message
            details: Detailed explanation of what went wrong
            fix_hint: Suggested command or action to fix the issue
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)


class ConfigurationError(ReleaseError):
    """Missing or invalid inputs.

    Raised when:
    - A required environment variable is unset (GITHUB_REPOSITORY)
    - A required input is empty (npm credentials, repo token)
    - package.json is missing, unreadable or invalid
    - No registry URL is configured in package.json
    - The release configuration file is invalid
    - The current branch has no publish configuration
    """

    exit_code = 2


class PublishError(ReleaseError):
    """Publishing failures.

    Raised when:
    - npm publish or npm dist-tag fails
    - The npm CLI is not installed
    - An artifact file does not exist
    """

    exit_code = 5


class ReleaseNotFoundError(PublishError):
    """No hosted release exists for the expected tag.

    Artifacts can only be attached to an existing release, so this is
    terminal for the GitHub path.
    """

    def __init__(self, owner: str, repo: str, tag: str) -> None:
        super().__init__(
            f"Could not find GitHub release matching the tag {tag}",
            details=f"Repository: {owner}/{repo}",
            fix_hint="Create the release (for example in the version stage) before publishing",
        )
        self.owner = owner
        self.repo = repo
        self.tag = tag


class NetworkError(ReleaseError):
    """Network/API failures.

    Raised when:
    - GitHub API requests fail
    - Registry login fails
    - Connection errors or timeouts
    """

    exit_code = 7

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, details=details, fix_hint=fix_hint)
        self.status_code = status_code
