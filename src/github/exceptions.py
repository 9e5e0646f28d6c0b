"""GitHub API client exceptions."""

from typing import Any


class GitHubError(Exception):
    """Base exception for GitHub API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ):
        """Initialize GitHub error.

        Args:
            message: Error message
            status_code: HTTP status code
            response_data: Response data from GitHub API
        """
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data or {}


class GitHubAuthenticationError(GitHubError):
    """Raised when no usable credentials are available."""

    pass


class GitHubTransportError(GitHubError):
    """Raised when a GitHub API call returns anything other than 200."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ):
        """Initialize transport error.

        Args:
            message: Error message, already stating expected vs. received status
            status_code: HTTP status code received
            response_data: Response data from GitHub API
        """
        super().__init__(message, status_code, response_data)


class GitHubNotFoundError(GitHubError):
    """Raised when a named workflow or check has no matching ID."""

    def __init__(self, message: str, available: list[str] | None = None):
        """Initialize not found error.

        Args:
            message: Error message
            available: ``name (id)`` pairs that were available in the listing
        """
        super().__init__(message)
        self.available = available or []


class GitHubConnectionError(GitHubError):
    """Raised when connection to GitHub fails."""

    pass


class GitHubTimeoutError(GitHubError):
    """Raised when request times out."""

    pass
