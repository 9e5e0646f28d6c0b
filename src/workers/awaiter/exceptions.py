"""Exceptions raised while awaiting a local workflow run."""


class AwaitError(Exception):
    """Base exception for awaiter errors."""

    pass


class InvalidRunTypeError(AwaitError, ValueError):
    """Raised when asked to poll a run type that does not exist."""

    def __init__(self, run_type: object):
        """Initialize invalid run type error.

        Args:
            run_type: The unrecognised run type
        """
        super().__init__("Unknown run type specified")
        self.run_type = run_type


class AwaitTimeoutError(AwaitError):
    """Raised when the run did not complete within the configured timeout."""

    def __init__(
        self,
        message: str = "Timeout exceeded while attempting to await local workflow run",
    ):
        super().__init__(message)


class WorkflowConclusionError(AwaitError):
    """Raised when the awaited run completed without succeeding."""

    def __init__(
        self,
        workflow: str,
        workflow_id: int,
        conclusion: str | None,
        failure: str | None = None,
    ):
        """Initialize workflow conclusion error.

        Args:
            workflow: Workflow file name
            workflow_id: Numeric workflow ID
            conclusion: Conclusion reported for the run or check
            failure: Failure reason, differs from the conclusion when it was
                not recognised
        """
        super().__init__(
            f"Workflow {workflow} ({workflow_id}) has not completed successfully: "
            f"{conclusion}."
        )
        self.workflow = workflow
        self.workflow_id = workflow_id
        self.conclusion = conclusion
        self.failure = failure or conclusion
