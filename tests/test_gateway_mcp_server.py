"""Tests for the MCP protocol binding."""

from __future__ import annotations

import asyncio

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from acrolinx_mcp.domain import JobHandle, JobKind, JobRequest, JobResult, JobState
from acrolinx_mcp.gateway import ToolGateway, gateway_create_mcp_server


class _StubRunner:
    async def job_run(self, kind: JobKind, request: JobRequest) -> JobResult:
        return JobResult(workflow_id=f"wf-{kind.value}")


class _StubAdapter:
    def adapter_source_name(self) -> str:
        return "stub"

    async def adapter_submit_workflow(self, kind: JobKind, request: JobRequest) -> JobState:
        raise AssertionError("submit is not used by the gateway")

    async def adapter_get_workflow_status(self, handle: JobHandle) -> JobState:
        raise AssertionError("status is not used in these tests")

    async def adapter_close(self) -> None:
        return None


def _build_server():
    gateway = ToolGateway(workflow_runner=_StubRunner(), workflow_adapter=_StubAdapter())
    return gateway_create_mcp_server(gateway)


def test_gateway_mcp_server_registers_all_tools() -> None:
    """Expose the four Acrolinx tools."""

    async def _list_tool_names() -> set[str]:
        async with Client(_build_server()) as client:
            tools = await client.list_tools()
        return {tool.name for tool in tools}

    assert asyncio.run(_list_tool_names()) == {
        "acrolinx_rewrite",
        "acrolinx_check",
        "acrolinx_suggestions",
        "acrolinx_workflow_status",
    }


def test_gateway_mcp_server_returns_report_text() -> None:
    """Return the formatted report as tool text content."""

    async def _call() -> str:
        async with Client(_build_server()) as client:
            result = await client.call_tool("acrolinx_check", {"text": "Hello."})
        return result.content[0].text

    assert asyncio.run(_call()) == "Status: completed\nWorkflow ID: wf-checks\n"


def test_gateway_mcp_server_flags_errors() -> None:
    """Surface gateway errors as MCP tool errors."""

    async def _call() -> None:
        async with Client(_build_server()) as client:
            await client.call_tool("acrolinx_check", {"text": "   ", "style_guide": ""})

    with pytest.raises(ToolError):
        asyncio.run(_call())
