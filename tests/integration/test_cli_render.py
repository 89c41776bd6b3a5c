"""Integration tests for the ``tfplan-report render`` command."""

from __future__ import annotations

import io
import json
from contextlib import redirect_stdout
from pathlib import Path
from types import SimpleNamespace

import pytest

from tfplan_report.adapters import PlanLoader
from tfplan_report.cli import app
from tfplan_report.config import CONFIG_ENV_VAR

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"
PLAN_PATH = FIXTURES / "plan-mixed.json"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def invoke_cli(args: list[str]) -> tuple[int, str]:
    """Execute the CLI with the provided arguments and capture stdout."""

    stdout = io.StringIO()
    with redirect_stdout(stdout):
        exit_code = app.main(args)
    return exit_code, stdout.getvalue()


def test_render_markdown_to_stdout() -> None:
    exit_code, output = invoke_cli(["render", str(PLAN_PATH)])

    assert exit_code == 0, output
    assert output.startswith("### 1 to add, 1 to change, 1 to destroy, 1 to replace.\n")
    assert "- replace\n    - module.db.aws_db_instance.main\n" in output
    assert output.endswith("</details>\n")


def test_render_json_format() -> None:
    exit_code, output = invoke_cli(["render", str(PLAN_PATH), "--format", "json"])

    assert exit_code == 0
    payload = json.loads(output)
    assert payload["summary"] == {"add": 1, "change": 1, "destroy": 1, "replace": 1}
    assert payload["deleted"] == ["aws_s3_bucket.logs"]
    assert [item["action"] for item in payload["resource_changes"]] == [
        "create",
        "update",
        "delete",
        "replace",
    ]
    assert payload["resource_changes"][3]["after"]["password"] == "REDACTED_SENSITIVE"


def test_render_writes_output_file(tmp_path: Path) -> None:
    destination = tmp_path / "out" / "report.md"

    exit_code, output = invoke_cli(["render", str(PLAN_PATH), "--output", str(destination)])

    assert exit_code == 0
    assert output == ""
    assert destination.read_text(encoding="utf-8").startswith("### 1 to add")


def test_render_reads_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    stdin = SimpleNamespace(buffer=io.BytesIO(b'{"resource_changes": []}'))
    monkeypatch.setattr("tfplan_report.adapters.plan_loader.sys.stdin", stdin)

    exit_code, output = invoke_cli(["render", "-"])

    assert exit_code == 0
    assert output == "### 0 to add, 0 to change, 0 to destroy, 0 to replace.\n"


def test_render_plan_file_uses_terraform(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    plan_file = tmp_path / "plan.tfplan"
    plan_file.write_bytes(b"")
    recorded = {}

    def fake_run(self, args, cwd=None):
        recorded["args"] = args
        return SimpleNamespace(stdout=PLAN_PATH.read_bytes())

    monkeypatch.setattr(PlanLoader, "_run_command", fake_run)

    exit_code, output = invoke_cli(
        ["render", "--plan-file", str(plan_file), "--terraform-bin", "tofu"]
    )

    assert exit_code == 0
    assert recorded["args"][:3] == ["tofu", "show", "-json"]
    assert "# aws_s3_bucket.logs will be destroyed" in output


def test_config_file_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config = tmp_path / "report.yaml"
    config.write_text("code_fence: '~~~'\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config))

    exit_code, output = invoke_cli(["render", str(PLAN_PATH)])

    assert exit_code == 0
    assert "~~~diff\n" in output


@pytest.mark.parametrize(
    "args",
    [
        ["render", "missing-plan.json"],
        ["render", str(FIXTURES / "plan-minimal.json"), "--config", "missing.yaml"],
    ],
)
def test_errors_exit_with_status_two(args: list[str]) -> None:
    exit_code, output = invoke_cli(args)

    assert exit_code == 2
    assert output.startswith("Error: ")


def test_malformed_plan_reports_parse_error(tmp_path: Path) -> None:
    plan_path = tmp_path / "plan.json"
    plan_path.write_text("not json", encoding="utf-8")

    exit_code, output = invoke_cli(["render", str(plan_path)])

    assert exit_code == 2
    assert output.startswith("Error: cannot parse input")
    assert "###" not in output


def test_no_command_prints_help() -> None:
    exit_code, output = invoke_cli([])

    assert exit_code == 0
    assert "render" in output
