"""Shared test data for the awaiter tests.

Provides a triggering-event context, canned API payloads and a mock GitHub
client whose endpoint methods return GitHubResponse objects.
"""

from typing import Any
from unittest.mock import AsyncMock, Mock

from src.github.client import GitHubResponse
from src.github.context import GitHubContext

MOCK_REPOSITORY = "rich-clown/circus"
MOCK_BRANCH = "lanayru"
MOCK_REF = f"refs/heads/{MOCK_BRANCH}"
MOCK_SHA = "1234567890123456789012345678901234567890"

WORKFLOWS_DATA: dict[str, Any] = {
    "total_count": 3,
    "workflows": [
        {"id": 0, "path": ".github/workflows/cake.yml"},
        {"id": 1, "path": ".github/workflows/pie.yml"},
        {"id": 2, "path": ".github/workflows/slice.yml"},
    ],
}

# Attempts deliberately out of order; only ids 1, 4, 9, 7 and 9 match MOCK_SHA.
WORKFLOW_RUNS: list[dict[str, Any]] = [
    {"id": 0, "check_suite_id": 0, "head_sha": "0", "run_attempt": 1, "status": "completed"},
    {"id": 1, "check_suite_id": 0, "head_sha": MOCK_SHA, "run_attempt": 0, "status": "completed"},
    {"id": 2, "check_suite_id": 0, "head_sha": "0", "run_attempt": 2, "status": "completed"},
    {"id": 3, "check_suite_id": 0, "head_sha": "0", "run_attempt": 3, "status": "completed"},
    {"id": 4, "check_suite_id": 0, "head_sha": MOCK_SHA, "run_attempt": 1, "status": "completed"},
    {"id": 9, "check_suite_id": 0, "head_sha": MOCK_SHA, "run_attempt": 3, "status": "queued"},
    {"id": 5, "check_suite_id": 0, "head_sha": "0", "run_attempt": 4, "status": "completed"},
    {"id": 6, "head_sha": "0", "run_attempt": 5, "status": "completed"},
    {"id": 7, "check_suite_id": 0, "head_sha": MOCK_SHA, "run_attempt": 2, "status": "in_progress"},
    {"id": 8, "check_suite_id": 0, "head_sha": "0", "run_attempt": 6, "status": "completed"},
    {"id": 9, "check_suite_id": 0, "head_sha": MOCK_SHA, "run_attempt": 2, "status": "queued"},
]


def make_context(**overrides: Any) -> GitHubContext:
    """Create a push-event context for MOCK_REPOSITORY."""
    values: dict[str, Any] = {
        "repository": MOCK_REPOSITORY,
        "sha": MOCK_SHA,
        "ref": MOCK_REF,
        "event_name": "push",
        "event_path": None,
        "api_url": "https://api.github.com",
    }
    values.update(overrides)
    return GitHubContext(**values)


def api_response(data: Any, status: int = 200) -> GitHubResponse:
    """Wrap a payload the way the client returns it."""
    return GitHubResponse(status=status, data=data)


def workflow_runs_response(runs: list[dict[str, Any]], status: int = 200) -> GitHubResponse:
    """Runs listing response for the given runs."""
    return api_response({"total_count": len(runs), "workflow_runs": runs}, status)


def make_github_client() -> Mock:
    """Mock GitHub client with every endpoint the registry uses."""
    client = Mock()
    client.list_repo_workflows = AsyncMock()
    client.list_workflow_runs = AsyncMock()
    client.list_check_runs_for_suite = AsyncMock()
    client.get_workflow_run = AsyncMock()
    client.get_check_run = AsyncMock()
    return client
