"""
Test configuration and fixtures shared by the unit tests.

Provides a triggering-event context, a mock GitHub client and a run registry
wired to both.
"""

from unittest.mock import Mock

import pytest

from src.github.context import GitHubContext
from src.workers.awaiter.registry import RunRegistry
from tests.fixtures.awaiter import make_context, make_github_client


@pytest.fixture(autouse=True)
def clear_runner_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Why: Tests may themselves run inside a CI runner job
    What: Removes the runner variables that change logging and context loading
    How: Deletes them through monkeypatch so they are restored afterwards
    """
    for name in ("RUNNER_DEBUG", "GITHUB_ACTIONS", "GITHUB_EVENT_PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def github_context() -> GitHubContext:
    """Push-event context for the mock repository."""
    return make_context()


@pytest.fixture
def mock_github_client() -> Mock:
    """
    Mock GitHub client for registry tests.

    Why: Isolates registry logic from HTTP
    What: Provides a Mock whose endpoint methods are AsyncMocks
    How: Each test sets return values to GitHubResponse objects
    """
    return make_github_client()


@pytest.fixture
def registry(mock_github_client: Mock, github_context: GitHubContext) -> RunRegistry:
    """Run registry backed by the mock client."""
    return RunRegistry(mock_github_client, github_context)
