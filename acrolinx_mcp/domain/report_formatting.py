"""Human-readable report rendering for workflow results and states.

Rendering is pure and never raises: absent data drops the affected line or
section instead of producing placeholder values.
"""

from __future__ import annotations

import json
from typing import Final

from .models import (
    JobFailed,
    JobPending,
    JobResult,
    JobState,
    JobSucceeded,
    ScoreBundle,
    ScoreDetails,
    WorkflowIssue,
)
from .workflow_parsing import WORKFLOW_STATUS_FAILED, WORKFLOW_STATUS_RUNNING

SCORES_HEADER: Final[str] = "=== SCORES ==="
REWRITE_SCORES_HEADER: Final[str] = "=== REWRITE SCORES ==="
REWRITTEN_TEXT_HEADER: Final[str] = "=== REWRITTEN TEXT ==="
ISSUES_HEADER_PREFIX: Final[str] = "=== ISSUES"
FULL_RESPONSE_HEADER: Final[str] = "=== FULL RESPONSE ==="
MISSING_SUGGESTION_PLACEHOLDER: Final[str] = "N/A"
MISSING_CATEGORY_PLACEHOLDER: Final[str] = "uncategorized"


def domain_format_workflow_report(
    result_or_state: JobResult | JobState,
    include_raw_payload: bool = False,
) -> str:
    """Render a workflow result or state snapshot as a text report.

    Sections appear in fixed order: status, scores, rewrite scores, rewritten
    text, issues and, in debug mode, the full raw response.

    Args:
        result_or_state: Terminal result or any state snapshot.
        include_raw_payload: Append the raw response payload when True.

    Returns:
        str: Report text.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(result_or_state, JobSucceeded):
        return domain_format_workflow_report(result_or_state.result, include_raw_payload=include_raw_payload)

    if isinstance(result_or_state, JobPending):
        return _domain_format_status_block(
            status=WORKFLOW_STATUS_RUNNING,
            workflow_id=result_or_state.handle.workflow_id,
        )

    if isinstance(result_or_state, JobFailed):
        lines = _domain_format_status_block(
            status=WORKFLOW_STATUS_FAILED,
            workflow_id=result_or_state.workflow_id,
        )
        lines += f"Error: {result_or_state.reason}\n"
        if include_raw_payload:
            lines += _domain_format_raw_payload(result_or_state.raw_payload)
        return lines

    result = result_or_state
    sections = [_domain_format_status_block(status=result.status, workflow_id=result.workflow_id)]

    if result.scores is not None:
        sections.append(_domain_format_score_section(SCORES_HEADER, result.scores, detailed=True))
    if result.rewrite_scores is not None:
        sections.append(_domain_format_score_section(REWRITE_SCORES_HEADER, result.rewrite_scores, detailed=False))
    if result.rewrite is not None:
        sections.append(f"\n{REWRITTEN_TEXT_HEADER}\n{result.rewrite}\n")
    if result.issues:
        sections.append(_domain_format_issue_section(result.issues))
    if include_raw_payload:
        sections.append(_domain_format_raw_payload(result.raw_payload))

    return "".join(sections)


def _domain_format_status_block(status: str, workflow_id: str | None) -> str:
    block = f"Status: {status}\n"
    if workflow_id:
        block += f"Workflow ID: {workflow_id}\n"
    return block


def _domain_format_score_section(header: str, bundle: ScoreBundle, detailed: bool) -> str:
    """Render one score bundle section.

    Args:
        header: Section header line.
        bundle: Parsed score bundle.
        detailed: Include readability and tone sub-metrics when True.

    Returns:
        str: Section text beginning with a blank line.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    lines = [f"\n{header}"]
    _domain_append_score_line(lines, "Quality Score", bundle.quality, with_issues=False)
    _domain_append_score_line(lines, "Clarity Score", bundle.clarity, with_issues=False)
    if detailed and bundle.clarity is not None:
        _domain_append_metric_line(lines, "Word Count", bundle.clarity.word_count)
        _domain_append_metric_line(lines, "Sentence Count", bundle.clarity.sentence_count)
        _domain_append_metric_line(lines, "Avg Sentence Length", bundle.clarity.average_sentence_length)
        _domain_append_metric_line(lines, "Flesch Reading Ease", bundle.clarity.flesch_reading_ease)
        _domain_append_metric_line(lines, "Flesch-Kincaid Grade", bundle.clarity.flesch_kincaid_grade)
    _domain_append_score_line(lines, "Grammar Score", bundle.grammar, with_issues=True)
    _domain_append_score_line(lines, "Style Guide Score", bundle.style_guide, with_issues=True)
    _domain_append_score_line(lines, "Tone Score", bundle.tone, with_issues=False)
    if detailed and bundle.tone is not None:
        _domain_append_target_line(lines, "Informality", bundle.tone.informality, bundle.tone.target_informality)
        _domain_append_target_line(lines, "Liveliness", bundle.tone.liveliness, bundle.tone.target_liveliness)
    _domain_append_score_line(lines, "Terminology Score", bundle.terminology, with_issues=True)
    return "\n".join(lines) + "\n"


def _domain_append_score_line(
    lines: list[str],
    label: str,
    details: ScoreDetails | None,
    with_issues: bool,
) -> None:
    if details is None or details.score is None:
        return
    line = f"{label}: {_domain_format_number(details.score)}"
    if with_issues and details.issues is not None:
        line += f" ({details.issues} issues)"
    lines.append(line)


def _domain_append_metric_line(lines: list[str], label: str, value: float | int | None) -> None:
    if value is None:
        return
    lines.append(f"  - {label}: {_domain_format_number(value)}")


def _domain_append_target_line(
    lines: list[str],
    label: str,
    value: float | int | None,
    target: float | int | None,
) -> None:
    if value is None:
        return
    line = f"  - {label}: {_domain_format_number(value)}"
    if target is not None:
        line += f" (target: {_domain_format_number(target)})"
    lines.append(line)


def _domain_format_issue_section(issues: tuple[WorkflowIssue, ...]) -> str:
    lines = [f"\n{ISSUES_HEADER_PREFIX} ({len(issues)} total) ==="]
    for index, issue in enumerate(issues, start=1):
        category = issue.category or issue.subcategory or MISSING_CATEGORY_PLACEHOLDER
        replacement = issue.suggestion or issue.modified or MISSING_SUGGESTION_PLACEHOLDER
        lines.append(f"{index}. [{category}] {issue.original} → {replacement}")
    return "\n".join(lines) + "\n"


def _domain_format_raw_payload(raw_payload: object) -> str:
    try:
        rendered_payload = json.dumps(raw_payload, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        rendered_payload = repr(raw_payload)
    return f"\n{FULL_RESPONSE_HEADER}\n{rendered_payload}\n"


def _domain_format_number(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = [
    "FULL_RESPONSE_HEADER",
    "ISSUES_HEADER_PREFIX",
    "REWRITE_SCORES_HEADER",
    "REWRITTEN_TEXT_HEADER",
    "SCORES_HEADER",
    "domain_format_workflow_report",
]
