"""Domain models, parsing and report rendering shared across layers."""

from .models import (
    DEFAULT_DIALECT,
    DEFAULT_STYLE_GUIDE,
    DEFAULT_TONE,
    JobFailed,
    JobHandle,
    JobKind,
    JobPending,
    JobRequest,
    JobResult,
    JobState,
    JobSucceeded,
    ScoreBundle,
    ScoreDetails,
    WorkflowIssue,
    domain_job_state_is_terminal,
)
from .report_formatting import domain_format_workflow_report
from .style_guides import STYLE_GUIDE_IDS, domain_resolve_style_guide_id
from .workflow_parsing import domain_parse_job_result, domain_parse_workflow_state

__all__ = [
    "DEFAULT_DIALECT",
    "DEFAULT_STYLE_GUIDE",
    "DEFAULT_TONE",
    "JobFailed",
    "JobHandle",
    "JobKind",
    "JobPending",
    "JobRequest",
    "JobResult",
    "JobState",
    "JobSucceeded",
    "STYLE_GUIDE_IDS",
    "ScoreBundle",
    "ScoreDetails",
    "WorkflowIssue",
    "domain_format_workflow_report",
    "domain_job_state_is_terminal",
    "domain_parse_job_result",
    "domain_parse_workflow_state",
    "domain_resolve_style_guide_id",
]
