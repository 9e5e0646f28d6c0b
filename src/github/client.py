"""GitHub API client for the Actions and Checks endpoints.

The client is deliberately thin: it authenticates, issues the request,
retries connection-level failures and hands back the status code together
with the decoded body. Interpreting status codes is left to the caller so
that every call site can report exactly which status it expected.
"""

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from .auth import AuthProvider
from .exceptions import GitHubConnectionError, GitHubError, GitHubTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class GitHubClientConfig:
    """Configuration for GitHub client."""

    base_url: str = "https://api.github.com"
    timeout: int = 30
    max_retries: int = 3
    retry_backoff_factor: float = 2.0
    user_agent: str = "Await-Local-Workflow/1.0"


@dataclass
class GitHubResponse:
    """Status code and decoded JSON body of a GitHub API call."""

    status: int
    data: Any
    headers: dict[str, str] = field(default_factory=dict)


class GitHubClient:
    """Async GitHub API client."""

    def __init__(
        self,
        auth: AuthProvider,
        config: GitHubClientConfig | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            auth: Authentication provider
            config: Client configuration
        """
        self.auth = auth
        self.config = config or GitHubClientConfig()

        # HTTP session will be initialized on first use
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> None:
        """Ensure HTTP session is initialized."""
        if self._session is None or self._session.closed:
            async with self._session_lock:
                if self._session is None or self._session.closed:
                    timeout = aiohttp.ClientTimeout(total=self.config.timeout)

                    self._session = aiohttp.ClientSession(
                        timeout=timeout,
                        headers={
                            "User-Agent": self.config.user_agent,
                            "Accept": "application/vnd.github+json",
                        },
                    )

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _generate_correlation_id(self) -> str:
        """Generate correlation ID for request tracking."""
        return str(uuid.uuid4())[:8]

    def _build_url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    @staticmethod
    def _prepare_params(params: dict[str, Any] | None) -> dict[str, str] | None:
        """Drop unset parameters and render the rest as query strings.

        aiohttp refuses booleans in query parameters, and GitHub expects the
        lowercase ``true``/``false`` spelling anyway.
        """
        if params is None:
            return None

        prepared: dict[str, str] = {}
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, bool):
                prepared[key] = "true" if value else "false"
            else:
                prepared[key] = str(value)
        return prepared

    async def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        correlation_id: str | None = None,
    ) -> GitHubResponse:
        """Make HTTP request, retrying only connection-level failures.

        Args:
            method: HTTP method
            url: Request URL
            params: Query parameters
            correlation_id: Request correlation ID

        Returns:
            Response status, body and headers. Non-2xx statuses are returned,
            not raised.

        Raises:
            GitHubTimeoutError: If every attempt timed out
            GitHubConnectionError: If every attempt failed to connect
        """
        if not correlation_id:
            correlation_id = self._generate_correlation_id()

        auth_token = await self.auth.get_token()
        request_headers = auth_token.to_header()

        await self._ensure_session()

        if not self._session:
            raise GitHubConnectionError("Failed to initialize HTTP session")

        last_exception: GitHubError | None = None
        for attempt in range(self.config.max_retries + 1):
            try:
                start_time = time.time()

                logger.debug(
                    f"GitHub API request [{correlation_id}] {method} {url} "
                    f"(attempt {attempt + 1})"
                )

                async with self._session.request(
                    method,
                    url,
                    params=self._prepare_params(params),
                    headers=request_headers,
                ) as response:
                    request_time = time.time() - start_time

                    try:
                        data = await response.json(content_type=None)
                    except (json.JSONDecodeError, aiohttp.ContentTypeError):
                        data = None

                    logger.debug(
                        f"GitHub API response [{correlation_id}] "
                        f"{response.status} in {request_time:.2f}s"
                    )

                    return GitHubResponse(
                        status=response.status,
                        data=data,
                        headers=dict(response.headers),
                    )

            except TimeoutError:
                last_exception = GitHubTimeoutError(
                    f"Request timeout for {method} {url}"
                )

            except aiohttp.ClientError as e:
                last_exception = GitHubConnectionError(
                    f"Connection error for {method} {url}: {e}"
                )

            if attempt < self.config.max_retries:
                backoff_time = self.config.retry_backoff_factor**attempt
                logger.warning(
                    f"Request [{correlation_id}] failed (attempt {attempt + 1}), "
                    f"retrying in {backoff_time:.1f}s: {last_exception}"
                )
                await asyncio.sleep(backoff_time)

        if last_exception:
            raise last_exception
        raise GitHubError(f"Request failed after {self.config.max_retries} retries")

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> GitHubResponse:
        """Make GET request to GitHub API.

        Args:
            path: API path (e.g., '/repos/owner/repo/actions/workflows')
            params: Query parameters

        Returns:
            Response status and JSON body
        """
        return await self._make_request("GET", self._build_url(path), params)

    # Convenience methods for the endpoints the awaiter consumes

    async def list_repo_workflows(self, owner: str, repo: str) -> GitHubResponse:
        """List workflows defined in a repository.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Response whose body holds ``total_count`` and ``workflows``
        """
        return await self.get(f"/repos/{owner}/{repo}/actions/workflows")

    async def list_workflow_runs(
        self,
        owner: str,
        repo: str,
        workflow_id: int,
        params: dict[str, Any] | None = None,
    ) -> GitHubResponse:
        """List runs of one workflow.

        Args:
            owner: Repository owner
            repo: Repository name
            workflow_id: Numeric workflow ID
            params: Filters such as ``branch``, ``created``, ``per_page``

        Returns:
            Response whose body holds ``total_count`` and ``workflow_runs``
        """
        return await self.get(
            f"/repos/{owner}/{repo}/actions/workflows/{workflow_id}/runs",
            params=params,
        )

    async def get_workflow_run(
        self, owner: str, repo: str, run_id: int
    ) -> GitHubResponse:
        """Get a single workflow run."""
        return await self.get(f"/repos/{owner}/{repo}/actions/runs/{run_id}")

    async def list_check_runs_for_suite(
        self, owner: str, repo: str, check_suite_id: int
    ) -> GitHubResponse:
        """List the check runs reported within a check suite.

        Args:
            owner: Repository owner
            repo: Repository name
            check_suite_id: Numeric check suite ID

        Returns:
            Response whose body holds ``total_count`` and ``check_runs``
        """
        return await self.get(
            f"/repos/{owner}/{repo}/check-suites/{check_suite_id}/check-runs"
        )

    async def get_check_run(
        self, owner: str, repo: str, check_run_id: int
    ) -> GitHubResponse:
        """Get a single check run."""
        return await self.get(f"/repos/{owner}/{repo}/check-runs/{check_run_id}")
