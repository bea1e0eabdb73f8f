"""MCP protocol binding exposing the tool gateway over FastMCP."""

from typing import Annotated, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from .tool_catalog import (
    TOOL_CHECK,
    TOOL_DESCRIPTIONS,
    TOOL_REWRITE,
    TOOL_SUGGESTIONS,
    TOOL_WORKFLOW_STATUS,
    DialectName,
    ToneName,
)
from .tool_gateway import ToolGateway, ToolResponse

MCP_SERVER_NAME = "acrolinx-mcp-server"
MCP_SERVER_INSTRUCTIONS = """
Acrolinx MCP Server - content quality analysis and rewriting.

Use acrolinx_check to score text, acrolinx_suggestions to list issues with
replacements, and acrolinx_rewrite to obtain an improved version. When a tool
reports a running workflow, call acrolinx_workflow_status with its workflow id.
"""

TextArgument = Annotated[str, Field(description="The text content to analyze or rewrite")]
DialectArgument = Annotated[
    Optional[DialectName],
    Field(description="Language dialect (default: american_english)"),
]
ToneArgument = Annotated[Optional[ToneName], Field(description="Desired tone (default: formal)")]
StyleGuideArgument = Annotated[
    Optional[str],
    Field(description="Style guide name (ap, chicago, microsoft, proofpoint) or custom id (default: microsoft)"),
]


def gateway_create_mcp_server(gateway: ToolGateway) -> FastMCP:
    """Create a FastMCP server whose tools delegate to the gateway.

    Args:
        gateway: Tool gateway handling validation, execution and formatting.

    Returns:
        FastMCP: Server with the four Acrolinx tools registered.

    Raises:
        ValueError: Raised when gateway is missing.
    """

    if gateway is None:
        raise ValueError("gateway must not be None")

    server = FastMCP(name=MCP_SERVER_NAME, instructions=MCP_SERVER_INSTRUCTIONS)

    @server.tool(name=TOOL_REWRITE, description=TOOL_DESCRIPTIONS[TOOL_REWRITE])
    async def acrolinx_rewrite(
        text: TextArgument,
        dialect: DialectArgument = None,
        tone: ToneArgument = None,
        style_guide: StyleGuideArgument = None,
    ) -> str:
        response = await gateway.gateway_rewrite(text, dialect=dialect, tone=tone, style_guide=style_guide)
        return _gateway_unwrap_response(response)

    @server.tool(name=TOOL_CHECK, description=TOOL_DESCRIPTIONS[TOOL_CHECK])
    async def acrolinx_check(
        text: TextArgument,
        dialect: DialectArgument = None,
        tone: ToneArgument = None,
        style_guide: StyleGuideArgument = None,
    ) -> str:
        response = await gateway.gateway_check(text, dialect=dialect, tone=tone, style_guide=style_guide)
        return _gateway_unwrap_response(response)

    @server.tool(name=TOOL_SUGGESTIONS, description=TOOL_DESCRIPTIONS[TOOL_SUGGESTIONS])
    async def acrolinx_suggestions(
        text: TextArgument,
        dialect: DialectArgument = None,
        tone: ToneArgument = None,
        style_guide: StyleGuideArgument = None,
    ) -> str:
        response = await gateway.gateway_suggestions(text, dialect=dialect, tone=tone, style_guide=style_guide)
        return _gateway_unwrap_response(response)

    @server.tool(name=TOOL_WORKFLOW_STATUS, description=TOOL_DESCRIPTIONS[TOOL_WORKFLOW_STATUS])
    async def acrolinx_workflow_status(
        workflow_id: Annotated[str, Field(description="The workflow ID returned from a previous operation")],
        workflow_type: Annotated[
            Literal["rewrites", "checks", "suggestions"],
            Field(description="Type of workflow to check"),
        ],
    ) -> str:
        response = await gateway.gateway_workflow_status(workflow_id, workflow_type)
        return _gateway_unwrap_response(response)

    return server


def _gateway_unwrap_response(response: ToolResponse) -> str:
    # MCP clients see ToolError text as an isError result.
    if response.is_error:
        raise ToolError(response.text)
    return response.text
