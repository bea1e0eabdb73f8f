"""Workflow response parsing helpers.

This module maps raw Acrolinx JSON payloads onto the typed workflow state
contracts. Optional fields are normalized leniently so partial payloads still
produce a usable result; only the status contract itself is strict.
"""

from __future__ import annotations

import math
from typing import Any, Final, Mapping

from .models import (
    JobFailed,
    JobHandle,
    JobKind,
    JobPending,
    JobResult,
    JobState,
    JobSucceeded,
    ScoreBundle,
    ScoreDetails,
    WorkflowIssue,
)

WORKFLOW_STATUS_RUNNING: Final[str] = "running"
WORKFLOW_STATUS_COMPLETED: Final[str] = "completed"
WORKFLOW_STATUS_FAILED: Final[str] = "failed"

_DOMAIN_SCORE_GROUPS: Final[tuple[str, ...]] = (
    "quality",
    "clarity",
    "grammar",
    "style_guide",
    "tone",
    "terminology",
)
_DOMAIN_INTEGER_METRICS: Final[frozenset[str]] = frozenset({"issues", "word_count", "sentence_count"})
_DOMAIN_FLOAT_METRICS: Final[tuple[str, ...]] = (
    "score",
    "average_sentence_length",
    "flesch_reading_ease",
    "flesch_kincaid_grade",
    "informality",
    "target_informality",
    "liveliness",
    "target_liveliness",
)


def domain_parse_workflow_state(
    payload: object,
    kind: JobKind,
    fallback_workflow_id: str | None = None,
) -> JobState:
    """Parse one workflow response payload into a typed state.

    Args:
        payload: Decoded JSON response body.
        kind: Workflow family the request was issued for.
        fallback_workflow_id: Workflow id to use when the payload omits it.

    Returns:
        JobState: Pending, succeeded or failed state snapshot.

    Raises:
        ValueError: Raised when the payload violates the status contract.
    """

    if not isinstance(payload, Mapping):
        raise ValueError("workflow response must be a JSON object")

    status_value = domain_normalize_optional_text(payload.get("status"))
    workflow_id = domain_normalize_optional_text(payload.get("workflow_id")) or fallback_workflow_id

    if status_value == WORKFLOW_STATUS_RUNNING:
        if workflow_id is None:
            raise ValueError("running workflow response missing workflow_id")
        return JobPending(handle=JobHandle(workflow_id=workflow_id, kind=kind))

    if status_value == WORKFLOW_STATUS_FAILED:
        reason = domain_normalize_optional_text(payload.get("error")) or "Unknown error"
        return JobFailed(reason=reason, workflow_id=workflow_id, raw_payload=dict(payload))

    if status_value == WORKFLOW_STATUS_COMPLETED:
        return JobSucceeded(result=domain_parse_job_result(payload, workflow_id=workflow_id))

    raise ValueError(f"unsupported workflow status={status_value!r}")


def domain_parse_job_result(payload: Mapping[str, Any], workflow_id: str | None = None) -> JobResult:
    """Build a job result from a completed workflow payload.

    Args:
        payload: Completed workflow response body.
        workflow_id: Resolved workflow id.

    Returns:
        JobResult: Normalized result contract.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    raw_issues = payload.get("issues")
    issues: list[WorkflowIssue] = []
    if isinstance(raw_issues, list):
        for raw_issue in raw_issues:
            issue = _domain_parse_issue(raw_issue)
            if issue is not None:
                issues.append(issue)

    return JobResult(
        status=domain_normalize_optional_text(payload.get("status")) or WORKFLOW_STATUS_COMPLETED,
        workflow_id=workflow_id,
        scores=_domain_parse_score_bundle(payload.get("scores")),
        rewrite_scores=_domain_parse_score_bundle(payload.get("rewrite_scores")),
        rewrite=_domain_normalize_rewrite(payload.get("rewrite")),
        issues=tuple(issues),
        raw_payload=dict(payload),
    )


def domain_normalize_optional_text(value: object | None) -> str | None:
    """Normalize one optional text value.

    Args:
        value: Candidate value from a response payload.

    Returns:
        str | None: Stripped text or None when missing, blank or not text.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(value, str):
        return None
    normalized_value = value.strip()
    if not normalized_value:
        return None
    return normalized_value


def _domain_normalize_rewrite(value: object | None) -> str | None:
    # Rewritten text keeps its own whitespace.
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def _domain_parse_score_bundle(value: object | None) -> ScoreBundle | None:
    """Parse a score bundle object, skipping malformed groups.

    Args:
        value: Candidate `scores` or `rewrite_scores` payload.

    Returns:
        ScoreBundle | None: Parsed bundle, or None when absent.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(value, Mapping):
        return None

    groups = {group_name: _domain_parse_score_details(value.get(group_name)) for group_name in _DOMAIN_SCORE_GROUPS}
    return ScoreBundle(**groups)


def _domain_parse_score_details(value: object | None) -> ScoreDetails | None:
    if not isinstance(value, Mapping):
        return None

    metrics: dict[str, float | int | None] = {}
    for metric_name in _DOMAIN_FLOAT_METRICS:
        metrics[metric_name] = _domain_normalize_number(value.get(metric_name))
    for metric_name in _DOMAIN_INTEGER_METRICS:
        number = _domain_normalize_number(value.get(metric_name))
        metrics[metric_name] = int(number) if number is not None else None
    return ScoreDetails(**metrics)


def _domain_normalize_number(value: object | None) -> float | int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    return None


def _domain_parse_issue(value: object) -> WorkflowIssue | None:
    if not isinstance(value, Mapping):
        return None

    original = value.get("original")
    return WorkflowIssue(
        original=original if isinstance(original, str) else "",
        category=domain_normalize_optional_text(value.get("category")),
        subcategory=domain_normalize_optional_text(value.get("subcategory")),
        suggestion=domain_normalize_optional_text(value.get("suggestion")),
        modified=domain_normalize_optional_text(value.get("modified")),
    )


__all__ = [
    "WORKFLOW_STATUS_COMPLETED",
    "WORKFLOW_STATUS_FAILED",
    "WORKFLOW_STATUS_RUNNING",
    "domain_normalize_optional_text",
    "domain_parse_job_result",
    "domain_parse_workflow_state",
]
