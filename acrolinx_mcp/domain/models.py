"""Typed domain models shared across runtime layers.

Workflow states are modelled as a closed set of frozen dataclasses so every
layer branches on types rather than on raw status strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union


class JobKind(str, Enum):
    """Remote workflow families; the value is the endpoint path segment."""

    REWRITE = "rewrites"
    CHECK = "checks"
    SUGGESTIONS = "suggestions"


DEFAULT_DIALECT = "american_english"
DEFAULT_TONE = "formal"
DEFAULT_STYLE_GUIDE = "microsoft"


@dataclass(frozen=True)
class JobRequest:
    """Caller request for one text-analysis workflow.

    Attributes:
        text: Text content to analyze.
        dialect: Language dialect identifier.
        tone: Target tone identifier.
        style_guide: Known style guide name or custom style guide id.
    """

    text: str
    dialect: str = DEFAULT_DIALECT
    tone: str = DEFAULT_TONE
    style_guide: str = DEFAULT_STYLE_GUIDE


@dataclass(frozen=True)
class JobHandle:
    """Correlation key for a job accepted by the remote service.

    Attributes:
        workflow_id: Remote workflow identifier.
        kind: Workflow family the job was submitted under.
    """

    workflow_id: str
    kind: JobKind


@dataclass(frozen=True)
class ScoreDetails:
    """One metric group of an analysis score bundle."""

    score: float | None = None
    issues: int | None = None
    word_count: int | None = None
    sentence_count: int | None = None
    average_sentence_length: float | None = None
    flesch_reading_ease: float | None = None
    flesch_kincaid_grade: float | None = None
    informality: float | None = None
    target_informality: float | None = None
    liveliness: float | None = None
    target_liveliness: float | None = None


@dataclass(frozen=True)
class ScoreBundle:
    """Quality, clarity, grammar, style guide, tone and terminology scores."""

    quality: ScoreDetails | None = None
    clarity: ScoreDetails | None = None
    grammar: ScoreDetails | None = None
    style_guide: ScoreDetails | None = None
    tone: ScoreDetails | None = None
    terminology: ScoreDetails | None = None


@dataclass(frozen=True)
class WorkflowIssue:
    """One issue found in the analyzed text."""

    original: str
    category: str | None = None
    subcategory: str | None = None
    suggestion: str | None = None
    modified: str | None = None


@dataclass(frozen=True)
class JobResult:
    """Terminal workflow result.

    Attributes:
        status: Remote status text, `completed` for successful results.
        workflow_id: Remote workflow id when known.
        scores: Scores of the submitted text.
        rewrite_scores: Scores of the rewritten text.
        rewrite: Rewritten text.
        issues: Ordered issue list.
        raw_payload: Raw response payload used for debug output.
    """

    status: str = "completed"
    workflow_id: str | None = None
    scores: ScoreBundle | None = None
    rewrite_scores: ScoreBundle | None = None
    rewrite: str | None = None
    issues: tuple[WorkflowIssue, ...] = ()
    raw_payload: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class JobPending:
    """Non-terminal state: the remote job is still running."""

    handle: JobHandle


@dataclass(frozen=True)
class JobSucceeded:
    """Terminal state: the remote job completed with a result."""

    result: JobResult


@dataclass(frozen=True)
class JobFailed:
    """Terminal state: the remote job reported a failure."""

    reason: str
    workflow_id: str | None = None
    raw_payload: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


JobState = Union[JobPending, JobSucceeded, JobFailed]


def domain_job_state_is_terminal(state: JobState) -> bool:
    """Return whether polling can stop for the given state.

    Args:
        state: Workflow state snapshot.

    Returns:
        bool: True for succeeded or failed states.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return not isinstance(state, JobPending)
