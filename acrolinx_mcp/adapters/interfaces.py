"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol

from acrolinx_mcp.domain import JobHandle, JobKind, JobRequest, JobState


class WorkflowSubmitterPort(Protocol):
    """Port definition for starting remote text-analysis workflows."""

    async def adapter_submit_workflow(self, kind: JobKind, request: JobRequest) -> JobState:
        """Submit one workflow and return its first state snapshot.

        Args:
            kind: Workflow family.
            request: Validated caller request.

        Returns:
            JobState: Terminal state for synchronous jobs, else pending state.

        Raises:
            AcrolinxValidationError: Raised when request text is invalid.
            AcrolinxRemoteError: Raised when the remote call failed on every attempt.
        """


class WorkflowStatusPort(Protocol):
    """Port definition for reading remote workflow state."""

    async def adapter_get_workflow_status(self, handle: JobHandle) -> JobState:
        """Fetch the current state of one workflow.

        Args:
            handle: Submitted workflow handle.

        Returns:
            JobState: Fresh state snapshot.

        Raises:
            AcrolinxRemoteError: Raised when the remote call failed on every attempt.
        """


class WorkflowAdapterPort(WorkflowSubmitterPort, WorkflowStatusPort, Protocol):
    """Combined submit and status port with an explicit close hook."""

    def adapter_source_name(self) -> str:
        """Return adapter source identifier for diagnostics.

        Returns:
            str: Upstream source identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    async def adapter_close(self) -> None:
        """Release pooled transport resources.

        Returns:
            None: Closes resources as side effect.

        Raises:
            RuntimeError: Raised when resources cannot be released.
        """
