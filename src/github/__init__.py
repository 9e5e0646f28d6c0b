"""GitHub API client package."""

from .auth import AuthProvider, AuthToken, TokenAuth
from .client import GitHubClient, GitHubClientConfig, GitHubResponse
from .context import GitHubContext
from .exceptions import (
    GitHubAuthenticationError,
    GitHubConnectionError,
    GitHubError,
    GitHubNotFoundError,
    GitHubTimeoutError,
    GitHubTransportError,
)

__all__ = [
    "AuthProvider",
    "AuthToken",
    "GitHubAuthenticationError",
    "GitHubClient",
    "GitHubClientConfig",
    "GitHubConnectionError",
    "GitHubContext",
    "GitHubError",
    "GitHubNotFoundError",
    "GitHubResponse",
    "GitHubTimeoutError",
    "GitHubTransportError",
    "TokenAuth",
]
