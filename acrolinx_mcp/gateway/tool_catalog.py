"""Tool names, descriptions and argument contracts exposed to calling agents."""

from __future__ import annotations

from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from acrolinx_mcp.domain import DEFAULT_DIALECT, DEFAULT_STYLE_GUIDE, DEFAULT_TONE, JobKind

TOOL_REWRITE: Final[str] = "acrolinx_rewrite"
TOOL_CHECK: Final[str] = "acrolinx_check"
TOOL_SUGGESTIONS: Final[str] = "acrolinx_suggestions"
TOOL_WORKFLOW_STATUS: Final[str] = "acrolinx_workflow_status"

ANALYSIS_TOOL_KINDS: Final[dict[str, JobKind]] = {
    TOOL_REWRITE: JobKind.REWRITE,
    TOOL_CHECK: JobKind.CHECK,
    TOOL_SUGGESTIONS: JobKind.SUGGESTIONS,
}

TOOL_DESCRIPTIONS: Final[dict[str, str]] = {
    TOOL_REWRITE: (
        "Automatically rewrite and improve text content using AI-powered style guides. This tool analyzes "
        "your text for grammar, clarity, tone, and style guide compliance, then provides a completely "
        "rewritten version. Use this when you need to transform rough drafts into polished content, ensure "
        "consistency with brand voice, or adapt content for different audiences. Returns both before/after "
        "scores and the rewritten text."
    ),
    TOOL_CHECK: (
        "Analyze text for quality issues without making changes. This tool provides detailed scores for "
        "grammar, clarity, tone, style guide compliance, and terminology. Use this for content audits, "
        "quality assessments, or when you want to understand specific issues before editing. Returns "
        "comprehensive readability metrics and issue counts by category."
    ),
    TOOL_SUGGESTIONS: (
        "Get detailed editing suggestions for improving text. This tool identifies specific issues and "
        "provides targeted recommendations for each problem found. Use this when you want to maintain "
        "editorial control while getting guidance on improvements. Returns a categorized list of issues "
        "with specific suggestions for each."
    ),
    TOOL_WORKFLOW_STATUS: (
        "Check the status of an asynchronous Acrolinx workflow. Use this to poll for results when other "
        "operations return a running status. Workflows typically complete within 5-30 seconds depending "
        "on text length and complexity."
    ),
}

DialectName = Literal["american_english", "british_oxford", "canadian_english"]
ToneName = Literal[
    "academic",
    "business",
    "casual",
    "conversational",
    "formal",
    "gen-z",
    "informal",
    "technical",
]


class AnalysisToolArguments(BaseModel):
    """Arguments shared by the rewrite, check and suggestions tools."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    text: str
    dialect: DialectName = DEFAULT_DIALECT
    tone: ToneName = DEFAULT_TONE
    style_guide: str = Field(default=DEFAULT_STYLE_GUIDE, min_length=1)


class WorkflowStatusToolArguments(BaseModel):
    """Arguments of the workflow status tool."""

    model_config = ConfigDict(extra="ignore", frozen=True, str_strip_whitespace=True)

    workflow_id: str = Field(min_length=1)
    workflow_type: JobKind


def gateway_tool_names() -> tuple[str, ...]:
    """Return the supported tool names in registration order.

    Returns:
        tuple[str, ...]: Tool names.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return (TOOL_REWRITE, TOOL_CHECK, TOOL_SUGGESTIONS, TOOL_WORKFLOW_STATUS)
