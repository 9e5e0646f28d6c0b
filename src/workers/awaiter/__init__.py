"""Awaiter for the local workflow run of the triggering commit.

Resolves the workflow (and optionally one of its checks) triggered by the
current commit and polls it until it completes, turning its conclusion into
the caller's own success or failure.

Main Components:
- RunRegistry: name-to-ID lookups and run state against the GitHub API
- RunResolver: date-window / branch search with a sticky fallback toggle
- WorkflowAwaiter: the bounded polling loop
"""

from .exceptions import (
    AwaitError,
    AwaitTimeoutError,
    InvalidRunTypeError,
    WorkflowConclusionError,
)
from .models import (
    RunConclusion,
    RunState,
    RunStatus,
    RunStatusResult,
    RunType,
    WorkflowRun,
)
from .orchestrator import AwaitPhase, AwaitSession, PollTarget, WorkflowAwaiter
from .registry import RunRegistry
from .resolver import ResolutionMode, RunResolver

__all__ = [
    "AwaitError",
    "AwaitPhase",
    "AwaitSession",
    "AwaitTimeoutError",
    "InvalidRunTypeError",
    "PollTarget",
    "ResolutionMode",
    "RunConclusion",
    "RunRegistry",
    "RunResolver",
    "RunState",
    "RunStatus",
    "RunStatusResult",
    "RunType",
    "WorkflowAwaiter",
    "WorkflowConclusionError",
    "WorkflowRun",
]
