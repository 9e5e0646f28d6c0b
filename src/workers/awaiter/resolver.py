"""Resolution of the workflow run belonging to the triggering commit.

Two things make the runs listing unreliable right after a push: the
date-window query can briefly miss a run that already exists, and under
some timing conditions it misses same-day runs altogether. The resolver
therefore alternates between the date-window search and a branch search,
switching strategy every time a search comes back empty.
"""

import logging
from dataclasses import dataclass

from .models import WorkflowRun
from .registry import RunRegistry

logger = logging.getLogger(__name__)


@dataclass
class ResolutionMode:
    """Search strategy state for one polling session."""

    use_branch_fallback: bool = False

    def toggle(self) -> None:
        """Switch to the other search strategy for the next attempt."""
        self.use_branch_fallback = not self.use_branch_fallback

    def reset(self) -> None:
        """Start over with the date-window search."""
        self.use_branch_fallback = False


class RunResolver:
    """Finds the most recent run attempt of a workflow for the current commit."""

    def __init__(self, registry: RunRegistry, mode: ResolutionMode | None = None):
        """Initialize run resolver.

        Args:
            registry: Run registry to list candidate runs with
            mode: Search strategy state, a fresh one if not given
        """
        self.registry = registry
        self.mode = mode or ResolutionMode()

    def reset_resolution_mode(self) -> None:
        """Reset the search strategy before starting a new polling session."""
        self.mode.reset()

    async def resolve_run(self, workflow_id: int) -> WorkflowRun | None:
        """Look for the run once with the current strategy.

        The strategy is toggled when the search finds nothing and left as is
        when it succeeds.

        Args:
            workflow_id: Numeric workflow ID

        Returns:
            The highest attempt found, or None if nothing matched this time
        """
        runs = await self.registry.get_workflow_runs(
            workflow_id, use_branch=self.mode.use_branch_fallback
        )

        if not runs:
            self.mode.toggle()
            return None

        run = runs[0]
        check_suite_id = "null" if run.check_suite_id is None else run.check_suite_id
        status = "null" if run.status is None else run.status
        logger.debug(
            "Workflow Run ID Found:\n"
            f"  Workflow ID: {workflow_id}\n"
            f"  Run ID: {run.id}\n"
            f"  Run Attempt: {run.attempt}\n"
            f"  Run Check Suite ID: {check_suite_id}\n"
            f"  Run Status: {status}"
        )
        return run
