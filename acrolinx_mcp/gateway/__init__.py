"""Gateway layer package exposing tools to calling agents."""

from .mcp_server import gateway_create_mcp_server
from .tool_catalog import (
	ANALYSIS_TOOL_KINDS,
	TOOL_CHECK,
	TOOL_DESCRIPTIONS,
	TOOL_REWRITE,
	TOOL_SUGGESTIONS,
	TOOL_WORKFLOW_STATUS,
	AnalysisToolArguments,
	WorkflowStatusToolArguments,
	gateway_tool_names,
)
from .tool_gateway import (
	ERROR_CODE_GATEWAY_DRAINING,
	ERROR_CODE_OPERATION_FAILED,
	ERROR_CODE_REMOTE,
	ERROR_CODE_UNEXPECTED,
	ERROR_CODE_UNKNOWN_TOOL,
	ERROR_CODE_VALIDATION,
	ERROR_CODE_WORKFLOW_FAILED,
	ERROR_CODE_WORKFLOW_TIMEOUT,
	GatewayLifecycleState,
	ToolGateway,
	ToolResponse,
)

__all__ = [
	"ANALYSIS_TOOL_KINDS",
	"AnalysisToolArguments",
	"ERROR_CODE_GATEWAY_DRAINING",
	"ERROR_CODE_OPERATION_FAILED",
	"ERROR_CODE_REMOTE",
	"ERROR_CODE_UNEXPECTED",
	"ERROR_CODE_UNKNOWN_TOOL",
	"ERROR_CODE_VALIDATION",
	"ERROR_CODE_WORKFLOW_FAILED",
	"ERROR_CODE_WORKFLOW_TIMEOUT",
	"GatewayLifecycleState",
	"TOOL_CHECK",
	"TOOL_DESCRIPTIONS",
	"TOOL_REWRITE",
	"TOOL_SUGGESTIONS",
	"TOOL_WORKFLOW_STATUS",
	"ToolGateway",
	"ToolResponse",
	"WorkflowStatusToolArguments",
	"gateway_create_mcp_server",
	"gateway_tool_names",
]
