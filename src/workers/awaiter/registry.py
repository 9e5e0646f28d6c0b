"""Run registry: names to IDs, and IDs to live run state.

Wraps the Actions and Checks endpoints with the lookups the awaiter needs.
The runs listing has two quirks this module works around:

- results are not guaranteed to be ordered by recency, so candidates are
  sorted by attempt number here;
- it cannot filter by commit SHA, so a bounded window of runs is fetched and
  filtered client-side.

No call is retried here. Each lookup either returns or raises once, after
logging the failure.
"""

import functools
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from src.github.client import GitHubClient
from src.github.context import GitHubContext
from src.github.exceptions import GitHubNotFoundError, GitHubTransportError

from .exceptions import InvalidRunTypeError
from .models import RunConclusion, RunState, RunStatusResult, RunType, WorkflowRun
from .utils import get_head_sha, get_offset_range, get_target_branch

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

SUCCESS_STATUS = 200
DATE_WINDOW_DAYS = 1
DATE_WINDOW_PAGE_SIZE = 50
BRANCH_PAGE_SIZE = 25

_WORKFLOW_DIR = re.compile(r"\.github/workflows/", re.IGNORECASE)


def log_unexpected_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Log any exception escaping a registry call, then re-raise it unchanged.

    Args:
        operation: Name used to prefix the error record
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{operation}: An unexpected error has occurred: {e}")
                logger.debug(f"{operation}: {type(e).__name__}", exc_info=True)
                raise

        return wrapper

    return decorator


def sanitise_workflow_path(workflow_path: str) -> str:
    """Strip the workflows directory from a workflow path."""
    return _WORKFLOW_DIR.sub("", workflow_path, count=1)


def _format_pairs(pairs: list[tuple[str, Any]]) -> str:
    return ", ".join(f"{name} ({item_id})" for name, item_id in pairs)


class RunRegistry:
    """Lookups against the runs and checks of the current repository."""

    def __init__(self, client: GitHubClient, context: GitHubContext):
        """Initialize run registry.

        Args:
            client: GitHub API client
            context: Context of the triggering event
        """
        self.client = client
        self.context = context

    @property
    def repository(self) -> str:
        return f"{self.context.owner}/{self.context.repo}"

    @log_unexpected_errors("get_workflow_id")
    async def get_workflow_id(self, workflow_filename: str) -> int:
        """Resolve a workflow file name to its numeric ID.

        Args:
            workflow_filename: File name of the workflow, e.g. ``build.yml``

        Returns:
            Workflow ID

        Raises:
            GitHubTransportError: If the listing did not return 200
            GitHubNotFoundError: If no workflow has that file name
        """
        response = await self.client.list_repo_workflows(
            self.context.owner, self.context.repo
        )
        if response.status != SUCCESS_STATUS:
            raise GitHubTransportError(
                f"Failed to get Workflows, expected {SUCCESS_STATUS} "
                f"but received {response.status}",
                status_code=response.status,
            )

        data = response.data or {}
        workflows = data.get("workflows", [])
        pairs = [
            (sanitise_workflow_path(workflow["path"]), workflow["id"])
            for workflow in workflows
        ]
        workflow_ids = dict(pairs)
        available = _format_pairs(pairs)

        logger.debug(
            "Fetched Workflows:\n"
            f"  Repository: {self.repository}\n"
            f"  Total Workflows: {data.get('total_count', len(workflows))}\n"
            f"  Workflows: [{available}]"
        )

        workflow_id = workflow_ids.get(workflow_filename)
        if workflow_id is None:
            raise GitHubNotFoundError(
                f"Failed to get Workflow ID for '{workflow_filename}', "
                f"available workflows: [{available}]",
                available=[f"{name} ({item_id})" for name, item_id in pairs],
            )

        return int(workflow_id)

    @log_unexpected_errors("get_workflow_runs")
    async def get_workflow_runs(
        self, workflow_id: int, use_branch: bool = False
    ) -> list[WorkflowRun]:
        """List the runs of a workflow that belong to the triggering commit.

        Args:
            workflow_id: Numeric workflow ID
            use_branch: Filter the listing by branch instead of by creation date

        Returns:
            Matching runs, highest attempt first. Runs sharing an attempt keep
            the order the API returned them in.

        Raises:
            GitHubTransportError: If the listing did not return 200
        """
        branch = get_target_branch(self.context) if use_branch else None

        params: dict[str, Any] = {"exclude_pull_requests": True}
        if branch:
            params["branch"] = branch
            params["per_page"] = BRANCH_PAGE_SIZE
        else:
            params["created"] = get_offset_range(DATE_WINDOW_DAYS)
            params["per_page"] = DATE_WINDOW_PAGE_SIZE

        response = await self.client.list_workflow_runs(
            self.context.owner, self.context.repo, workflow_id, params=params
        )
        if response.status != SUCCESS_STATUS:
            raise GitHubTransportError(
                f"Failed to get Workflow runs, expected {SUCCESS_STATUS} "
                f"but received {response.status}",
                status_code=response.status,
            )

        head_sha = get_head_sha(self.context)
        runs = [
            WorkflowRun.from_api(run)
            for run in (response.data or {}).get("workflow_runs", [])
            if run.get("head_sha") == head_sha
        ]
        if len(runs) > 1:
            runs = sorted(runs, key=lambda run: run.attempt, reverse=True)

        logger.debug(
            "Fetched Workflow Runs:\n"
            f"  Repository: {self.repository}\n"
            f"  Workflow ID: {workflow_id}\n"
            f"  Triggering SHA: {head_sha}\n"
            f"  Runs Fetched: [{', '.join(run.describe() for run in runs)}]"
        )

        return runs

    @log_unexpected_errors("get_check_id")
    async def get_check_id(self, check_suite_id: int, check_name: str) -> int:
        """Resolve a check name to its check run ID within a check suite.

        Args:
            check_suite_id: Check suite of the workflow run
            check_name: Name of the check, as shown in the checks UI

        Returns:
            Check run ID

        Raises:
            GitHubTransportError: If the listing did not return 200
            GitHubNotFoundError: If the suite has no check with that name
        """
        response = await self.client.list_check_runs_for_suite(
            self.context.owner, self.context.repo, check_suite_id
        )
        if response.status != SUCCESS_STATUS:
            raise GitHubTransportError(
                f"Failed to get Checks, expected {SUCCESS_STATUS} "
                f"but received {response.status}",
                status_code=response.status,
            )

        data = response.data or {}
        check_runs = data.get("check_runs", [])
        pairs = [(check["name"], check["id"]) for check in check_runs]
        check_ids = dict(pairs)
        available = _format_pairs(pairs)

        logger.debug(
            "Fetched Check Runs:\n"
            f"  Repository: {self.repository}\n"
            f"  Check Suite ID: {check_suite_id}\n"
            f"  Total Checks: {data.get('total_count', len(check_runs))}\n"
            f"  Checks: [{available}]"
        )

        check_id = check_ids.get(check_name)
        if check_id is None:
            raise GitHubNotFoundError(
                f"Failed to get Check ID for '{check_name}', "
                f"available checks: [{available}]",
                available=[f"{name} ({item_id})" for name, item_id in pairs],
            )

        return int(check_id)

    @log_unexpected_errors("get_run_state")
    async def get_run_state(self, run_id: int, run_type: RunType) -> RunState:
        """Fetch the current status and conclusion of a run or check.

        Args:
            run_id: Workflow run ID or check run ID
            run_type: Which of the two the ID refers to

        Returns:
            Current run state

        Raises:
            InvalidRunTypeError: If run_type is not a RunType
            GitHubTransportError: If the lookup did not return 200
        """
        if run_type is RunType.WORKFLOW_RUN:
            fetch = self.client.get_workflow_run
        elif run_type is RunType.CHECK_RUN:
            fetch = self.client.get_check_run
        else:
            raise InvalidRunTypeError(run_type)

        response = await fetch(self.context.owner, self.context.repo, run_id)
        if response.status != SUCCESS_STATUS:
            raise GitHubTransportError(
                f"Failed to get run state, expected {SUCCESS_STATUS} "
                f"but received {response.status}",
                status_code=response.status,
            )

        data = response.data or {}
        state = RunState(
            status=data.get("status"),
            conclusion=data.get("conclusion"),
        )

        logger.debug(
            "Fetched Run State:\n"
            f"  Repository: {self.repository}\n"
            f"  Run ID: {run_id}\n"
            f"  Run Type: {run_type.value}\n"
            f"  Status: {state.status}\n"
            f"  Conclusion: {state.conclusion}"
        )

        return state

    async def get_run_status(self, run_id: int, run_type: RunType) -> RunStatusResult:
        """Poll a run or check once and translate its conclusion.

        Only ``success`` counts as success. Any other conclusion, including
        one this module does not know about, is reported as a failure.
        """
        state = await self.get_run_state(run_id, run_type)
        if not state.is_completed:
            return RunStatusResult(completed=False)

        conclusion = RunConclusion.parse(state.conclusion)
        if conclusion is RunConclusion.SUCCESS:
            return RunStatusResult(completed=True, conclusion=conclusion.value)

        if conclusion is None:
            failure = f"Unknown conclusion: {state.conclusion}"
        else:
            failure = conclusion.value
        return RunStatusResult(
            completed=True, conclusion=state.conclusion, failure=failure
        )
