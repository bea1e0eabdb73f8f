"""Tests for tool invocation, error conversion and gateway shutdown."""

from __future__ import annotations

import asyncio

import pytest

from acrolinx_mcp.adapters import (
    AcrolinxRemoteError,
    AcrolinxValidationError,
    WorkflowFailedError,
    WorkflowTimeoutError,
)
from acrolinx_mcp.domain import JobHandle, JobKind, JobPending, JobRequest, JobResult, JobState
from acrolinx_mcp.gateway import GatewayLifecycleState, ToolGateway


class _StubRunner:
    """Workflow runner returning a fixed result or raising a fixed error."""

    def __init__(self, result: JobResult | None = None, error: Exception | None = None) -> None:
        self.result = result or JobResult(workflow_id="wf-1", rewrite="Better.")
        self.error = error
        self.calls: list[tuple[JobKind, JobRequest]] = []

    async def job_run(self, kind: JobKind, request: JobRequest) -> JobResult:
        self.calls.append((kind, request))
        if self.error is not None:
            raise self.error
        return self.result


class _BlockingRunner:
    """Workflow runner waiting until released."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def job_run(self, kind: JobKind, request: JobRequest) -> JobResult:
        _ = (kind, request)
        self.started.set()
        await self.release.wait()
        return JobResult(workflow_id="wf-slow")


class _StubAdapter:
    """Status adapter recording polls and close calls."""

    def __init__(self, state: JobState | None = None) -> None:
        self.state = state
        self.handles: list[JobHandle] = []
        self.closed = False

    def adapter_source_name(self) -> str:
        return "stub"

    async def adapter_submit_workflow(self, kind: JobKind, request: JobRequest) -> JobState:
        raise AssertionError("submit is not used by the gateway")

    async def adapter_get_workflow_status(self, handle: JobHandle) -> JobState:
        self.handles.append(handle)
        return self.state

    async def adapter_close(self) -> None:
        self.closed = True


def test_gateway_rewrite_applies_defaults_and_formats_report() -> None:
    """Fill default dialect, tone and style guide and return the report text.

    Returns:
        None: Assertions validate request defaults and report text.

    Raises:
        AssertionError: Raised when defaults or formatting differ.
    """

    runner = _StubRunner()
    gateway = ToolGateway(workflow_runner=runner, workflow_adapter=_StubAdapter())

    response = asyncio.run(gateway.gateway_rewrite("Some text."))

    assert response.is_error is False
    assert response.error_code is None
    assert response.text == "Status: completed\nWorkflow ID: wf-1\n\n=== REWRITTEN TEXT ===\nBetter.\n"
    assert runner.calls == [
        (JobKind.REWRITE, JobRequest(text="Some text.", dialect="american_english", tone="formal", style_guide="microsoft"))
    ]


def test_gateway_check_and_suggestions_dispatch_matching_kinds() -> None:
    """Map each analysis tool to its workflow kind."""

    runner = _StubRunner()
    gateway = ToolGateway(workflow_runner=runner, workflow_adapter=_StubAdapter())

    asyncio.run(gateway.gateway_check("Text.", dialect="british_oxford", tone="casual", style_guide="ap"))
    asyncio.run(gateway.gateway_suggestions("Text."))

    assert [kind for kind, _ in runner.calls] == [JobKind.CHECK, JobKind.SUGGESTIONS]
    assert runner.calls[0][1] == JobRequest(text="Text.", dialect="british_oxford", tone="casual", style_guide="ap")


def test_gateway_rejects_invalid_arguments_before_running() -> None:
    """Return a validation error for unsupported enum values and missing text."""

    runner = _StubRunner()
    gateway = ToolGateway(workflow_runner=runner, workflow_adapter=_StubAdapter())

    bad_tone = asyncio.run(gateway.gateway_rewrite("Text.", tone="shouty"))
    missing_text = asyncio.run(gateway.gateway_invoke_tool("acrolinx_check", {}))

    assert bad_tone.is_error is True
    assert bad_tone.error_code == "VALIDATION_ERROR"
    assert bad_tone.text.startswith("Error: Invalid arguments for acrolinx_rewrite: tone:")
    assert missing_text.error_code == "VALIDATION_ERROR"
    assert "text: Field required" in missing_text.text
    assert runner.calls == []


@pytest.mark.parametrize(
    ("error", "error_code", "text"),
    [
        (
            AcrolinxValidationError("Text parameter is required and must be a non-empty string"),
            "VALIDATION_ERROR",
            "Error: Text parameter is required and must be a non-empty string",
        ),
        (
            AcrolinxRemoteError("submit checks workflow failed after 3 attempts: boom", label="submit", attempts=3),
            "REMOTE_ERROR",
            "Error: submit checks workflow failed after 3 attempts: boom",
        ),
        (
            WorkflowTimeoutError("Workflow timeout after 60000ms. Workflow ID: wf-1", workflow_id="wf-1", elapsed_ms=62000),
            "WORKFLOW_TIMEOUT",
            "Error: Workflow timeout after 60000ms. Workflow ID: wf-1",
        ),
        (
            WorkflowFailedError("Workflow failed: quota", reason="quota"),
            "WORKFLOW_FAILED",
            "Error: Workflow failed: quota",
        ),
        (RuntimeError("unexpected"), "UNEXPECTED_ERROR", "Error: unexpected"),
    ],
)
def test_gateway_converts_failures_into_error_responses(error: Exception, error_code: str, text: str) -> None:
    """Convert every failure into error text with a deterministic code."""

    gateway = ToolGateway(workflow_runner=_StubRunner(error=error), workflow_adapter=_StubAdapter())

    response = asyncio.run(gateway.gateway_check("Text."))

    assert response.is_error is True
    assert response.error_code == error_code
    assert response.text == text


def test_gateway_workflow_status_reports_single_snapshot() -> None:
    """Check status once and render the pending state."""

    adapter = _StubAdapter(state=JobPending(handle=JobHandle(workflow_id="wf-7", kind=JobKind.SUGGESTIONS)))
    gateway = ToolGateway(workflow_runner=_StubRunner(), workflow_adapter=adapter)

    response = asyncio.run(gateway.gateway_workflow_status(" wf-7 ", "suggestions"))

    assert response.text == "Status: running\nWorkflow ID: wf-7\n"
    assert adapter.handles == [JobHandle(workflow_id="wf-7", kind=JobKind.SUGGESTIONS)]


def test_gateway_workflow_status_rejects_unknown_type() -> None:
    """Reject workflow types outside the supported families."""

    adapter = _StubAdapter()
    gateway = ToolGateway(workflow_runner=_StubRunner(), workflow_adapter=adapter)

    response = asyncio.run(gateway.gateway_workflow_status("wf-7", "translations"))

    assert response.error_code == "VALIDATION_ERROR"
    assert adapter.handles == []


def test_gateway_unknown_tool_returns_error() -> None:
    """Reject tool names that are not registered."""

    gateway = ToolGateway(workflow_runner=_StubRunner(), workflow_adapter=_StubAdapter())

    response = asyncio.run(gateway.gateway_invoke_tool("acrolinx_translate", {"text": "x"}))

    assert response.error_code == "UNKNOWN_TOOL"
    assert response.text == "Error: Unknown tool: acrolinx_translate"


def test_gateway_shutdown_waits_for_in_flight_invocations() -> None:
    """Let in-flight invocations finish within the grace period, then close the adapter."""

    async def _scenario() -> tuple:
        runner = _BlockingRunner()
        adapter = _StubAdapter()
        gateway = ToolGateway(workflow_runner=runner, workflow_adapter=adapter)

        invocation = asyncio.create_task(gateway.gateway_check("Text."))
        await runner.started.wait()
        shutdown = asyncio.create_task(gateway.gateway_shutdown(grace_seconds=5))
        await asyncio.sleep(0)
        lifecycle_during_drain = gateway.gateway_lifecycle_state
        rejected = await gateway.gateway_check("Late text.")
        runner.release.set()
        response = await invocation
        await shutdown
        return response, rejected, lifecycle_during_drain, gateway.gateway_lifecycle_state, adapter.closed

    response, rejected, lifecycle_during_drain, final_lifecycle, adapter_closed = asyncio.run(_scenario())

    assert response.is_error is False
    assert response.text == "Status: completed\nWorkflow ID: wf-slow\n"
    assert rejected.error_code == "GATEWAY_DRAINING"
    assert lifecycle_during_drain is GatewayLifecycleState.DRAINING
    assert final_lifecycle is GatewayLifecycleState.STOPPED
    assert adapter_closed is True


def test_gateway_shutdown_abandons_invocations_after_grace_period() -> None:
    """Cancel invocations still running after the grace period with an error response."""

    async def _scenario() -> tuple:
        runner = _BlockingRunner()
        adapter = _StubAdapter()
        gateway = ToolGateway(workflow_runner=runner, workflow_adapter=adapter)

        invocation = asyncio.create_task(gateway.gateway_rewrite("Text."))
        await runner.started.wait()
        await gateway.gateway_shutdown(grace_seconds=0.01)
        response = await invocation
        return response, gateway.gateway_in_flight_count(), adapter.closed

    response, in_flight_count, adapter_closed = asyncio.run(_scenario())

    assert response.is_error is True
    assert response.error_code == "GATEWAY_DRAINING"
    assert response.text == "Error: Tool invocation abandoned during shutdown"
    assert in_flight_count == 0
    assert adapter_closed is True
