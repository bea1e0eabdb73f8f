"""Tests for text report rendering."""

from __future__ import annotations

from acrolinx_mcp.domain import (
    JobFailed,
    JobHandle,
    JobKind,
    JobPending,
    JobResult,
    JobSucceeded,
    ScoreBundle,
    ScoreDetails,
    WorkflowIssue,
    domain_format_workflow_report,
)


def test_domain_format_report_renders_sections_in_order() -> None:
    """Render status, scores, rewrite scores, rewrite and issues in fixed order."""

    result = JobResult(
        workflow_id="wf-1",
        scores=ScoreBundle(
            quality=ScoreDetails(score=72.0),
            clarity=ScoreDetails(score=65.5, word_count=120, flesch_reading_ease=48.2),
            grammar=ScoreDetails(score=90, issues=2),
            tone=ScoreDetails(score=80, informality=40, target_informality=30),
        ),
        rewrite_scores=ScoreBundle(quality=ScoreDetails(score=88)),
        rewrite="Improved text.",
        issues=(
            WorkflowIssue(original="utilize", category="word_choice", suggestion="use"),
            WorkflowIssue(original="very unique", subcategory="redundancy", modified="unique"),
            WorkflowIssue(original="thing"),
        ),
    )

    report = domain_format_workflow_report(result)

    assert report.startswith("Status: completed\nWorkflow ID: wf-1\n")
    assert "Quality Score: 72\n" in report
    assert "Clarity Score: 65.5\n" in report
    assert "  - Word Count: 120\n" in report
    assert "  - Flesch Reading Ease: 48.2\n" in report
    assert "Grammar Score: 90 (2 issues)\n" in report
    assert "  - Informality: 40 (target: 30)\n" in report
    assert "Style Guide Score" not in report
    assert "=== ISSUES (3 total) ===" in report
    assert "1. [word_choice] utilize → use" in report
    assert "2. [redundancy] very unique → unique" in report
    assert "3. [uncategorized] thing → N/A" in report
    assert "=== FULL RESPONSE ===" not in report

    positions = [
        report.index("=== SCORES ==="),
        report.index("=== REWRITE SCORES ==="),
        report.index("=== REWRITTEN TEXT ==="),
        report.index("=== ISSUES"),
    ]
    assert positions == sorted(positions)


def test_domain_format_report_rewrite_scores_omit_sub_metrics() -> None:
    """Show only headline scores in the rewrite score section."""

    result = JobResult(rewrite_scores=ScoreBundle(clarity=ScoreDetails(score=70, word_count=10)))

    report = domain_format_workflow_report(result)

    assert "=== REWRITE SCORES ===\nClarity Score: 70\n" in report
    assert "Word Count" not in report


def test_domain_format_report_minimal_result() -> None:
    """Render only the status line for an empty result."""

    assert domain_format_workflow_report(JobResult()) == "Status: completed\n"


def test_domain_format_report_states() -> None:
    """Render pending, failed and succeeded states."""

    pending = JobPending(handle=JobHandle(workflow_id="wf-2", kind=JobKind.CHECK))
    failed = JobFailed(reason="quota exceeded", workflow_id="wf-3")
    succeeded = JobSucceeded(result=JobResult(workflow_id="wf-4"))

    assert domain_format_workflow_report(pending) == "Status: running\nWorkflow ID: wf-2\n"
    assert domain_format_workflow_report(failed) == "Status: failed\nWorkflow ID: wf-3\nError: quota exceeded\n"
    assert domain_format_workflow_report(succeeded) == "Status: completed\nWorkflow ID: wf-4\n"


def test_domain_format_report_appends_raw_payload_in_debug_mode() -> None:
    """Append the raw response payload when requested."""

    result = JobResult(raw_payload={"status": "completed", "extra": 1})

    report = domain_format_workflow_report(result, include_raw_payload=True)

    assert "=== FULL RESPONSE ===" in report
    assert '"extra": 1' in report


def test_domain_format_report_scores_only_omits_other_sections() -> None:
    """Render only the status block and scores when nothing else is present."""

    result = JobResult(workflow_id="wf-5", scores=ScoreBundle(quality=ScoreDetails(score=75)))

    report = domain_format_workflow_report(result)

    assert report == "Status: completed\nWorkflow ID: wf-5\n\n=== SCORES ===\nQuality Score: 75\n"
    assert "=== REWRITE SCORES ===" not in report
    assert "=== REWRITTEN TEXT ===" not in report
    assert "=== ISSUES" not in report
