"""Tool gateway converting caller invocations into workflow runs and text reports.

Every public operation returns a `ToolResponse`; failures are converted into
error responses so the calling agent always receives text.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Final, Mapping

import structlog
from pydantic import ValidationError

from acrolinx_mcp.adapters import (
    AcrolinxRemoteError,
    AcrolinxValidationError,
    OperationFailedError,
    WorkflowAdapterPort,
    WorkflowFailedError,
    WorkflowTimeoutError,
)
from acrolinx_mcp.domain import JobHandle, JobKind, JobRequest, domain_format_workflow_report
from acrolinx_mcp.jobs import WorkflowRunnerPort

from .tool_catalog import (
    ANALYSIS_TOOL_KINDS,
    TOOL_CHECK,
    TOOL_REWRITE,
    TOOL_SUGGESTIONS,
    TOOL_WORKFLOW_STATUS,
    AnalysisToolArguments,
    WorkflowStatusToolArguments,
    gateway_tool_names,
)

logger = structlog.get_logger(__name__)

ERROR_CODE_VALIDATION: Final[str] = "VALIDATION_ERROR"
ERROR_CODE_REMOTE: Final[str] = "REMOTE_ERROR"
ERROR_CODE_OPERATION_FAILED: Final[str] = "OPERATION_FAILED"
ERROR_CODE_WORKFLOW_TIMEOUT: Final[str] = "WORKFLOW_TIMEOUT"
ERROR_CODE_WORKFLOW_FAILED: Final[str] = "WORKFLOW_FAILED"
ERROR_CODE_UNKNOWN_TOOL: Final[str] = "UNKNOWN_TOOL"
ERROR_CODE_GATEWAY_DRAINING: Final[str] = "GATEWAY_DRAINING"
ERROR_CODE_UNEXPECTED: Final[str] = "UNEXPECTED_ERROR"


class GatewayLifecycleState(str, Enum):
    """Gateway lifecycle states."""

    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


@dataclass(frozen=True)
class ToolResponse:
    """Result contract for one tool invocation.

    Attributes:
        text: Report text, or `Error: <message>` for failures.
        is_error: Whether the invocation failed.
        error_code: Deterministic failure code, None on success.
    """

    text: str
    is_error: bool = False
    error_code: str | None = None


class ToolGateway:
    """Validates tool arguments, dispatches workflows and tracks in-flight invocations."""

    def __init__(
        self,
        workflow_runner: WorkflowRunnerPort,
        workflow_adapter: WorkflowAdapterPort,
        include_raw_payload: bool = False,
    ):
        """Initialize gateway dependencies.

        Args:
            workflow_runner: Job-layer coordinator for analysis tools.
            workflow_adapter: Adapter used for single status checks and closed on shutdown.
            include_raw_payload: Append raw remote payloads to reports.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are missing.
        """

        if workflow_runner is None:
            raise ValueError("workflow_runner must not be None")
        if workflow_adapter is None:
            raise ValueError("workflow_adapter must not be None")

        self._workflow_runner = workflow_runner
        self._workflow_adapter = workflow_adapter
        self._include_raw_payload = include_raw_payload
        self._lifecycle_state = GatewayLifecycleState.RUNNING
        self._in_flight: set[asyncio.Future[str]] = set()

    @property
    def gateway_lifecycle_state(self) -> GatewayLifecycleState:
        """Return the current lifecycle state."""

        return self._lifecycle_state

    def gateway_in_flight_count(self) -> int:
        """Return the number of invocations currently running."""

        return len(self._in_flight)

    async def gateway_rewrite(
        self,
        text: str,
        dialect: str | None = None,
        tone: str | None = None,
        style_guide: str | None = None,
    ) -> ToolResponse:
        """Rewrite text and report before/after scores with the rewritten text."""

        return await self.gateway_invoke_tool(
            TOOL_REWRITE,
            {"text": text, "dialect": dialect, "tone": tone, "style_guide": style_guide},
        )

    async def gateway_check(
        self,
        text: str,
        dialect: str | None = None,
        tone: str | None = None,
        style_guide: str | None = None,
    ) -> ToolResponse:
        """Score text without changing it."""

        return await self.gateway_invoke_tool(
            TOOL_CHECK,
            {"text": text, "dialect": dialect, "tone": tone, "style_guide": style_guide},
        )

    async def gateway_suggestions(
        self,
        text: str,
        dialect: str | None = None,
        tone: str | None = None,
        style_guide: str | None = None,
    ) -> ToolResponse:
        """List issues with a suggested replacement for each."""

        return await self.gateway_invoke_tool(
            TOOL_SUGGESTIONS,
            {"text": text, "dialect": dialect, "tone": tone, "style_guide": style_guide},
        )

    async def gateway_workflow_status(self, workflow_id: str, workflow_type: str) -> ToolResponse:
        """Report the current state of a previously started workflow."""

        return await self.gateway_invoke_tool(
            TOOL_WORKFLOW_STATUS,
            {"workflow_id": workflow_id, "workflow_type": workflow_type},
        )

    async def gateway_invoke_tool(self, tool_name: str, arguments: Mapping[str, Any] | None) -> ToolResponse:
        """Invoke one tool by name with raw caller arguments.

        Args:
            tool_name: Registered tool name.
            arguments: Raw caller arguments; None values fall back to defaults.

        Returns:
            ToolResponse: Report or structured error response.

        Raises:
            asyncio.CancelledError: Raised only when the caller itself is cancelled.
        """

        if tool_name not in gateway_tool_names():
            return self._gateway_error_response(tool_name, f"Unknown tool: {tool_name}", ERROR_CODE_UNKNOWN_TOOL)

        cleaned_arguments = {key: value for key, value in (arguments or {}).items() if value is not None}
        if tool_name == TOOL_WORKFLOW_STATUS:
            return await self._gateway_track(tool_name, lambda: self._gateway_run_status(cleaned_arguments))
        return await self._gateway_track(
            tool_name,
            lambda: self._gateway_run_analysis(tool_name, cleaned_arguments),
        )

    async def gateway_shutdown(self, grace_seconds: float = 10.0) -> None:
        """Stop accepting invocations and wait for in-flight ones up to a grace period.

        Invocations still running after the grace period are cancelled and
        their callers receive an error response. The adapter transport is
        closed last.

        Args:
            grace_seconds: Maximum wait for in-flight invocations.

        Returns:
            None: Transitions lifecycle state to STOPPED as side effect.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if self._lifecycle_state is not GatewayLifecycleState.RUNNING:
            return

        self._lifecycle_state = GatewayLifecycleState.DRAINING
        pending_invocations = set(self._in_flight)
        logger.info("gateway draining", in_flight=len(pending_invocations), grace_seconds=grace_seconds)

        if pending_invocations:
            _, not_done = await asyncio.wait(pending_invocations, timeout=grace_seconds)
            for invocation in not_done:
                invocation.cancel()
            if not_done:
                logger.warning("abandoning in-flight invocations", abandoned=len(not_done))
                await asyncio.wait(not_done)

        try:
            await self._workflow_adapter.adapter_close()
        except Exception as error:  # pylint: disable=broad-exception-caught
            logger.error("adapter close failed", error=str(error))

        self._lifecycle_state = GatewayLifecycleState.STOPPED
        logger.info("gateway stopped")

    async def _gateway_track(self, tool_name: str, handler: Callable[[], Awaitable[str]]) -> ToolResponse:
        """Run one invocation as a tracked task and convert its outcome.

        Args:
            tool_name: Tool name for logs.
            handler: Coroutine factory producing the report text.

        Returns:
            ToolResponse: Report or structured error response.

        Raises:
            asyncio.CancelledError: Raised only when the caller itself is cancelled.
        """

        if self._lifecycle_state is not GatewayLifecycleState.RUNNING:
            return self._gateway_error_response(
                tool_name,
                "Server is shutting down and no longer accepts tool invocations",
                ERROR_CODE_GATEWAY_DRAINING,
            )

        logger.info("tool invoked", tool=tool_name)
        invocation = asyncio.ensure_future(handler())
        self._in_flight.add(invocation)
        try:
            report_text = await invocation
        except asyncio.CancelledError:
            if invocation.cancelled() and self._lifecycle_state is not GatewayLifecycleState.RUNNING:
                return self._gateway_error_response(
                    tool_name,
                    "Tool invocation abandoned during shutdown",
                    ERROR_CODE_GATEWAY_DRAINING,
                )
            raise
        except Exception as error:  # pylint: disable=broad-exception-caught
            return self._gateway_error_response(tool_name, self._gateway_error_message(error), self._gateway_error_code(error))
        finally:
            self._in_flight.discard(invocation)

        return ToolResponse(text=report_text)

    async def _gateway_run_analysis(self, tool_name: str, arguments: dict[str, Any]) -> str:
        try:
            parsed_arguments = AnalysisToolArguments.model_validate(arguments)
        except ValidationError as error:
            raise AcrolinxValidationError(self._gateway_format_validation_error(tool_name, error)) from error

        request = JobRequest(
            text=parsed_arguments.text,
            dialect=parsed_arguments.dialect,
            tone=parsed_arguments.tone,
            style_guide=parsed_arguments.style_guide,
        )
        result = await self._workflow_runner.job_run(ANALYSIS_TOOL_KINDS[tool_name], request)
        return domain_format_workflow_report(result, include_raw_payload=self._include_raw_payload)

    async def _gateway_run_status(self, arguments: dict[str, Any]) -> str:
        try:
            parsed_arguments = WorkflowStatusToolArguments.model_validate(arguments)
        except ValidationError as error:
            raise AcrolinxValidationError(self._gateway_format_validation_error(TOOL_WORKFLOW_STATUS, error)) from error

        handle = JobHandle(workflow_id=parsed_arguments.workflow_id, kind=JobKind(parsed_arguments.workflow_type))
        logger.info(
            "checking workflow status",
            workflow_id=handle.workflow_id,
            workflow_type=handle.kind.value,
            source=self._workflow_adapter.adapter_source_name(),
        )
        state = await self._workflow_adapter.adapter_get_workflow_status(handle)
        return domain_format_workflow_report(state, include_raw_payload=self._include_raw_payload)

    def _gateway_error_response(self, tool_name: str, message: str, error_code: str) -> ToolResponse:
        logger.error("tool execution failed", tool=tool_name, error=message, error_code=error_code)
        return ToolResponse(text=f"Error: {message}", is_error=True, error_code=error_code)

    def _gateway_error_code(self, error: Exception) -> str:
        """Map exception type to a deterministic tool error code.

        Args:
            error: Caught invocation exception.

        Returns:
            str: Deterministic error code.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if isinstance(error, AcrolinxValidationError):
            return ERROR_CODE_VALIDATION
        if isinstance(error, AcrolinxRemoteError):
            return ERROR_CODE_REMOTE
        if isinstance(error, OperationFailedError):
            return ERROR_CODE_OPERATION_FAILED
        if isinstance(error, WorkflowTimeoutError):
            return ERROR_CODE_WORKFLOW_TIMEOUT
        if isinstance(error, WorkflowFailedError):
            return ERROR_CODE_WORKFLOW_FAILED
        return ERROR_CODE_UNEXPECTED

    def _gateway_error_message(self, error: Exception) -> str:
        message = str(error)
        if message:
            return message
        return type(error).__name__

    def _gateway_format_validation_error(self, tool_name: str, error: ValidationError) -> str:
        details = "; ".join(
            f"{'.'.join(str(part) for part in item['loc']) or 'arguments'}: {item['msg']}" for item in error.errors()
        )
        return f"Invalid arguments for {tool_name}: {details}"
