"""Typed interfaces for job-layer orchestration responsibilities."""

from typing import Protocol

from acrolinx_mcp.domain import JobKind, JobRequest, JobResult


class WorkflowRunnerPort(Protocol):
    """Port definition for running one workflow to a terminal result."""

    async def job_run(self, kind: JobKind, request: JobRequest) -> JobResult:
        """Submit a workflow and wait for its terminal result.

        Args:
            kind: Workflow family.
            request: Caller request.

        Returns:
            JobResult: Successful terminal result.

        Raises:
            AcrolinxValidationError: Raised when the request is invalid.
            AcrolinxRemoteError: Raised when submission failed on every attempt.
            WorkflowTimeoutError: Raised when polling exceeded the deadline.
            WorkflowFailedError: Raised when the remote job failed.
        """
