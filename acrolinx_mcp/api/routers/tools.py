"""Tool invocation router mirroring the MCP tools over HTTP."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from acrolinx_mcp.gateway import ToolGateway, gateway_tool_names


def api_create_tools_router(gateway: ToolGateway) -> APIRouter:
    """Create router exposing tool invocation and listing endpoints.

    Args:
        gateway: Tool gateway executing invocations.

    Returns:
        APIRouter: Router exposing `/v1/tools` endpoints.

    Raises:
        ValueError: Raised when gateway is invalid.
    """

    if gateway is None:
        raise ValueError("gateway must not be None")

    router = APIRouter(prefix="/v1/tools", tags=["tools"])

    @router.get("")
    def api_tools_list() -> JSONResponse:
        """Return registered tool names."""

        return JSONResponse(content={"tools": list(gateway_tool_names())}, status_code=status.HTTP_200_OK)

    @router.post("/{tool_name}")
    async def api_tools_invoke(
        tool_name: str,
        arguments: dict[str, Any] | None = Body(default=None),
    ) -> JSONResponse:
        """Invoke one tool and return its text result.

        Tool failures are reported in the body with `is_error` set; only an
        unknown tool name changes the status code.

        Args:
            tool_name: Registered tool name.
            arguments: Tool arguments as a JSON object.

        Returns:
            JSONResponse: `{text, is_error, error_code}` payload.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        if tool_name not in gateway_tool_names():
            payload = {
                "text": f"Error: Unknown tool: {tool_name}",
                "is_error": True,
                "error_code": "UNKNOWN_TOOL",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_404_NOT_FOUND)

        response = await gateway.gateway_invoke_tool(tool_name, arguments or {})
        payload = {
            "text": response.text,
            "is_error": response.is_error,
            "error_code": response.error_code,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
