"""Helpers for publishing plan reports to GitHub Actions surfaces."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Iterable, Sequence

from ..adapters import PlanLoader
from ..errors import PlanReportError, RenderError
from ..models import ChangeAction, PlanReport
from ..reporting import header_suffix
from .app import add_common_arguments, configure_logging, create_service, load_settings

ANNOTATION_LEVELS = {
    ChangeAction.CREATE: "notice",
    ChangeAction.UPDATE: "notice",
    ChangeAction.DELETE: "warning",
    ChangeAction.REPLACE: "warning",
}


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def iter_annotations(report: PlanReport) -> Iterable[str]:
    """Generate GitHub Actions workflow command annotations for the changes."""

    for change in report.resource_changes:
        level = ANNOTATION_LEVELS.get(change.action, "notice")
        title = header_suffix(change)

        attribute_segment = ""
        if title:
            attribute_segment = f" title={_escape_property(title)}"

        yield f"::{level}{attribute_segment}::{_escape_data(change.address)}"


def write_summary(content: str, destination: Path | None) -> None:
    """Append ``content`` to the job summary file, if one is configured."""

    if destination is None:
        return

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("a", encoding="utf-8") as handle:
            handle.write(content)
    except OSError as exc:
        raise RenderError(f"failed to write job summary {destination}: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Publish a Terraform plan summary as GitHub job summary and annotations."
    )
    parser.add_argument("plan_json", type=Path, help="Path to the plan JSON file.")
    parser.add_argument(
        "--summary-path",
        type=Path,
        default=None,
        help="Optional explicit path for the GitHub job summary output.",
    )
    add_common_arguments(parser)

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    summary_path = args.summary_path
    if summary_path is None:
        summary_env = os.getenv("GITHUB_STEP_SUMMARY")
        if summary_env:
            summary_path = Path(summary_env)

    try:
        service = create_service(load_settings(args.config_files))
        report = service.build_report(PlanLoader(plan_json_path=args.plan_json).load_bytes())
        write_summary(service.render_report(report), summary_path)
    except PlanReportError as exc:
        print(f"Error: {exc}")
        return 2

    for command in iter_annotations(report):
        print(command)

    return 0


def run() -> None:  # pragma: no cover - wrapper for console entry point
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
