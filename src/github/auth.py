"""GitHub authentication handlers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .exceptions import GitHubAuthenticationError


@dataclass
class AuthToken:
    """Authentication token with metadata."""

    token: str
    token_type: str = "Bearer"

    def to_header(self) -> dict[str, str]:
        """Convert to authorization header."""
        return {"Authorization": f"{self.token_type} {self.token}"}


class AuthProvider(ABC):
    """Abstract base class for authentication providers."""

    @abstractmethod
    async def get_token(self) -> AuthToken:
        """Get authentication token."""
        pass


class TokenAuth(AuthProvider):
    """Static token authentication.

    Covers both the ephemeral ``GITHUB_TOKEN`` issued to a workflow job and
    personal access tokens passed in as a step input.
    """

    DEFAULT_TOKEN_TYPE = "Bearer"  # Standard HTTP authentication scheme  # nosec B105

    def __init__(self, token: str, token_type: str | None = None):
        """Initialize token authentication.

        Args:
            token: Authentication token
            token_type: Type of token (Bearer, token, etc.). Uses Bearer by default.

        Raises:
            GitHubAuthenticationError: If the token is empty
        """
        if not token or not token.strip():
            raise GitHubAuthenticationError("A GitHub token is required")
        if token_type is None:
            token_type = self.DEFAULT_TOKEN_TYPE
        self._token = AuthToken(token=token.strip(), token_type=token_type)

    async def get_token(self) -> AuthToken:
        """Get authentication token."""
        return self._token
