"""Job-layer coordinator driving one workflow from submission to terminal state."""

from __future__ import annotations

import asyncio
import dataclasses
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Final

import structlog

from acrolinx_mcp.adapters import (
    OperationFailedError,
    WorkflowFailedError,
    WorkflowStatusPort,
    WorkflowSubmitterPort,
    WorkflowTimeoutError,
)
from acrolinx_mcp.domain import (
    JobFailed,
    JobHandle,
    JobKind,
    JobRequest,
    JobResult,
    JobState,
    JobSucceeded,
    domain_job_state_is_terminal,
)

from .interfaces import WorkflowRunnerPort

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class WorkflowCoordinatorConfig:
    """Configuration values for workflow polling.

    Attributes:
        timeout_ms: Overall polling deadline measured from the start of polling.
        poll_interval_ms: Wait before each status poll.
        continue_on_poll_error: Keep polling when one status check fails after its retries.
    """

    timeout_ms: int = 60000
    poll_interval_ms: int = 2000
    continue_on_poll_error: bool = True


class WorkflowCoordinator(WorkflowRunnerPort):
    """Submit-then-poll coordinator owning one workflow handle per invocation.

    The deadline is checked before each poll wait, so a workflow that finishes
    on poll N+1 succeeds whenever N * poll_interval_ms < timeout_ms. A poll still
    in flight at `timeout_ms + poll_interval_ms` is abandoned. No cancel request
    is sent to the remote service.
    """

    _MIN_POLL_BUDGET_SECONDS: Final[float] = 0.001

    def __init__(
        self,
        submitter: WorkflowSubmitterPort,
        status_reader: WorkflowStatusPort,
        config: WorkflowCoordinatorConfig,
        clock: Callable[[], float] | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        """Initialize coordinator dependencies.

        Args:
            submitter: Adapter starting remote workflows.
            status_reader: Adapter reading remote workflow state.
            config: Polling configuration.
            clock: Monotonic clock returning seconds.
            sleep: Awaitable sleep used between polls.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if submitter is None:
            raise ValueError("submitter must not be None")
        if status_reader is None:
            raise ValueError("status_reader must not be None")
        if config.timeout_ms < 0:
            raise ValueError("config.timeout_ms must be >= 0")
        if config.poll_interval_ms < 0:
            raise ValueError("config.poll_interval_ms must be >= 0")

        self._submitter = submitter
        self._status_reader = status_reader
        self._config = config
        self._clock = clock or time.monotonic
        self._sleep = sleep or asyncio.sleep

    async def job_run(self, kind: JobKind, request: JobRequest) -> JobResult:
        """Submit a workflow and wait for its terminal result.

        Args:
            kind: Workflow family.
            request: Caller request.

        Returns:
            JobResult: Successful terminal result carrying a workflow id when one is known.

        Raises:
            AcrolinxValidationError: Raised when the request is invalid.
            AcrolinxRemoteError: Raised when submission failed on every attempt.
            WorkflowTimeoutError: Raised when polling exceeded the deadline.
            WorkflowFailedError: Raised when the remote job failed.
        """

        logger.info(
            "starting workflow",
            workflow_type=kind.value,
            text_length=len(request.text),
            dialect=request.dialect,
            tone=request.tone,
            style_guide=request.style_guide,
        )
        initial_state = await self._submitter.adapter_submit_workflow(kind, request)

        if not domain_job_state_is_terminal(initial_state):
            return await self._job_poll_until_terminal(initial_state.handle)
        return self._job_resolve_terminal_state(initial_state, handle=None)

    async def _job_poll_until_terminal(self, handle: JobHandle) -> JobResult:
        """Poll one workflow until it reaches a terminal state or the deadline passes.

        Args:
            handle: Pending workflow handle.

        Returns:
            JobResult: Successful terminal result.

        Raises:
            WorkflowTimeoutError: Raised when the deadline passed.
            WorkflowFailedError: Raised when the remote job failed.
            OperationFailedError: Raised on poll failure when `continue_on_poll_error` is off.
        """

        started_at = self._clock()
        poll_interval_seconds = self._config.poll_interval_ms / 1000
        deadline_ms = self._config.timeout_ms + self._config.poll_interval_ms
        logger.info(
            "polling workflow for completion",
            workflow_id=handle.workflow_id,
            workflow_type=handle.kind.value,
            timeout_ms=self._config.timeout_ms,
        )

        while True:
            elapsed_ms = self._job_elapsed_ms(started_at)
            if elapsed_ms > self._config.timeout_ms:
                raise self._job_build_timeout_error(handle, elapsed_ms)

            await self._sleep(poll_interval_seconds)

            poll_budget_seconds = (deadline_ms - self._job_elapsed_ms(started_at)) / 1000
            try:
                state = await asyncio.wait_for(
                    self._status_reader.adapter_get_workflow_status(handle),
                    timeout=max(poll_budget_seconds, self._MIN_POLL_BUDGET_SECONDS),
                )
            except asyncio.TimeoutError as error:
                raise self._job_build_timeout_error(handle, self._job_elapsed_ms(started_at)) from error
            except OperationFailedError as error:
                if not self._config.continue_on_poll_error:
                    raise
                logger.warning(
                    "error during polling, will retry",
                    workflow_id=handle.workflow_id,
                    error=str(error),
                    elapsed_ms=self._job_elapsed_ms(started_at),
                )
                continue

            logger.debug(
                "workflow poll update",
                workflow_id=handle.workflow_id,
                state=type(state).__name__,
                elapsed_ms=elapsed_ms,
            )
            if not domain_job_state_is_terminal(state):
                continue

            result = self._job_resolve_terminal_state(state, handle=handle)
            logger.info(
                "workflow completed successfully",
                workflow_id=handle.workflow_id,
                total_ms=self._job_elapsed_ms(started_at),
            )
            return result

    def _job_resolve_terminal_state(self, state: JobState, handle: JobHandle | None) -> JobResult:
        """Return the result of a terminal state or raise its failure.

        Args:
            state: Terminal state snapshot.
            handle: Submission handle used to backfill a missing workflow id.

        Returns:
            JobResult: Successful result.

        Raises:
            WorkflowFailedError: Raised for failed states.
            RuntimeError: Raised for non-terminal states.
        """

        if isinstance(state, JobFailed):
            workflow_id = state.workflow_id or (handle.workflow_id if handle is not None else None)
            logger.error("workflow failed", workflow_id=workflow_id, error=state.reason)
            raise WorkflowFailedError(
                f"Workflow failed: {state.reason}",
                reason=state.reason,
                workflow_id=workflow_id,
            )

        if not isinstance(state, JobSucceeded):
            raise RuntimeError(f"workflow state is not terminal: {type(state).__name__}")

        result = state.result
        if result.workflow_id is None and handle is not None:
            result = dataclasses.replace(result, workflow_id=handle.workflow_id)
        return result

    def _job_build_timeout_error(self, handle: JobHandle, elapsed_ms: int) -> WorkflowTimeoutError:
        logger.error(
            "workflow timeout",
            workflow_id=handle.workflow_id,
            elapsed_ms=elapsed_ms,
            timeout_ms=self._config.timeout_ms,
        )
        return WorkflowTimeoutError(
            f"Workflow timeout after {self._config.timeout_ms}ms. Workflow ID: {handle.workflow_id}",
            workflow_id=handle.workflow_id,
            elapsed_ms=elapsed_ms,
        )

    def _job_elapsed_ms(self, started_at: float) -> int:
        return max(0, int((self._clock() - started_at) * 1000))
