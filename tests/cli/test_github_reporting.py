"""Tests for GitHub Actions reporting helpers."""

from __future__ import annotations

import io
from contextlib import redirect_stdout
from pathlib import Path

from tfplan_report.cli import github_reporting
from tfplan_report.cli.github_reporting import iter_annotations, write_summary
from tfplan_report.models import PlanReport, ResourceChange

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def _build_report() -> PlanReport:
    changes = [
        ResourceChange(address="aws_instance.web", type="aws_instance", name="web", actions=("create",)),
        ResourceChange(
            address="module.db.aws_db_instance.main",
            type="aws_db_instance",
            name="main",
            actions=("delete", "create"),
        ),
        ResourceChange(address="aws_s3_bucket.logs", type="aws_s3_bucket", name="logs", actions=("delete",)),
    ]
    return PlanReport(
        created=["aws_instance.web"],
        deleted=["aws_s3_bucket.logs"],
        replaced=["module.db.aws_db_instance.main"],
        resource_changes=changes,
    )


def test_iter_annotations_maps_actions_to_levels() -> None:
    """Destructive changes should surface as warnings, the rest as notices."""

    annotations = list(iter_annotations(_build_report()))

    assert annotations == [
        "::notice title=will be created::aws_instance.web",
        "::warning title=will be replaced::module.db.aws_db_instance.main",
        "::warning title=will be destroyed::aws_s3_bucket.logs",
    ]


def test_write_summary_appends(tmp_path: Path) -> None:
    destination = tmp_path / "nested" / "summary.md"

    write_summary("first\n", destination)
    write_summary("second\n", destination)
    write_summary("ignored\n", None)

    assert destination.read_text(encoding="utf-8") == "first\nsecond\n"


def test_main_publishes_summary_and_annotations(tmp_path: Path, monkeypatch) -> None:
    summary_path = tmp_path / "step-summary.md"
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary_path))

    stdout = io.StringIO()
    with redirect_stdout(stdout):
        exit_code = github_reporting.main([str(FIXTURES / "plan-mixed.json")])

    assert exit_code == 0
    summary = summary_path.read_text(encoding="utf-8")
    assert summary.startswith("### 1 to add, 1 to change, 1 to destroy, 1 to replace.\n")
    assert "<details><summary>Change details</summary>" in summary

    lines = stdout.getvalue().splitlines()
    assert lines[0] == "::notice title=will be created::aws_instance.web"
    assert "::warning title=will be destroyed::aws_s3_bucket.logs" in lines
    assert len(lines) == 4


def test_main_reports_errors(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
    plan_path = tmp_path / "broken.json"
    plan_path.write_text("{", encoding="utf-8")

    stdout = io.StringIO()
    with redirect_stdout(stdout):
        exit_code = github_reporting.main([str(plan_path)])

    assert exit_code == 2
    assert stdout.getvalue().startswith("Error: cannot parse input")
