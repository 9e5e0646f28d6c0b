"""Data models for awaiting a local workflow run.

Runs and checks are observed only: every value here is a snapshot of what
the API reported at one point in time, owned by whoever requested it.
"""

import enum
from dataclasses import dataclass
from typing import Any


class RunStatus(str, enum.Enum):
    """Lifecycle stage of a workflow run or check run."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class RunConclusion(str, enum.Enum):
    """Terminal outcome of a completed workflow run or check run."""

    SUCCESS = "success"
    FAILURE = "failure"
    NEUTRAL = "neutral"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"
    TIMED_OUT = "timed_out"
    ACTION_REQUIRED = "action_required"
    STALE = "stale"

    @classmethod
    def parse(cls, value: Any) -> "RunConclusion | None":
        """Return the matching conclusion, or None if the value is unrecognised."""
        try:
            return cls(value)
        except ValueError:
            return None


class RunType(enum.Enum):
    """Which kind of identifier is being polled."""

    WORKFLOW_RUN = "workflow_run"
    CHECK_RUN = "check_run"


@dataclass(frozen=True)
class WorkflowRun:
    """One observed attempt of a workflow run for the triggering commit."""

    id: int
    attempt: int
    check_suite_id: int | None = None
    status: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "WorkflowRun":
        """Build from a ``workflow_runs`` item of the runs listing."""
        return cls(
            id=data["id"],
            attempt=data.get("run_attempt") or 0,
            check_suite_id=data.get("check_suite_id"),
            status=data.get("status"),
        )

    def describe(self) -> str:
        """Short ``id (Attempt n)`` form used in diagnostics."""
        return f"{self.id} (Attempt {self.attempt})"


@dataclass(frozen=True)
class RunState:
    """Point-in-time status and conclusion of a run or check."""

    status: str | None
    conclusion: str | None

    @property
    def is_completed(self) -> bool:
        """Check if the run has reached a terminal state."""
        return self.status == RunStatus.COMPLETED.value


@dataclass(frozen=True)
class RunStatusResult:
    """Outcome of one status poll.

    ``failure`` is None while the run is still going and when it succeeded.
    Otherwise it holds the conclusion, or ``Unknown conclusion: <value>`` when
    the API reported something unrecognised.
    """

    completed: bool
    conclusion: str | None = None
    failure: str | None = None

    @property
    def succeeded(self) -> bool:
        """Check if the run completed with a success conclusion."""
        return self.completed and self.failure is None
