"""Command-line interface implementation for plan reports."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from ..adapters import STDIN_MARKER, PlanLoader
from ..config import ReportSettings, SettingsLoader, settings_files_from_env
from ..errors import PlanReportError, RenderError
from ..models import PlanReport
from ..service import PlanReportService

OUTPUT_FORMATS = ("markdown", "json")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="tfplan-report", description="Summarize Terraform plans for code review"
    )
    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render", help="Render a Terraform plan as a markdown change summary."
    )
    render_parser.add_argument(
        "plan_json",
        nargs="?",
        default=STDIN_MARKER,
        help="Plan exported with `terraform show -json`; `-` reads standard input.",
    )
    render_parser.add_argument(
        "--plan-file",
        type=Path,
        default=None,
        help="Binary plan file generated via `terraform plan -out`, shown with Terraform.",
    )
    render_parser.add_argument(
        "--terraform-bin",
        default="terraform",
        help="Name or path of the Terraform executable used with --plan-file.",
    )
    render_parser.add_argument(
        "--working-dir",
        type=Path,
        default=Path.cwd(),
        help="Directory Terraform runs in when showing a binary plan file.",
    )
    render_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of standard output.",
    )
    render_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="markdown",
        help="Output format for the report.",
    )
    add_common_arguments(render_parser)

    return parser


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        dest="config_files",
        action="append",
        type=Path,
        default=None,
        help="YAML settings file; may be repeated, later files win.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline progress to standard error.",
    )


def load_settings(
    config_files: Sequence[Path] | None, environ: Mapping[str, str] | None = None
) -> ReportSettings:
    """Load settings from explicit files or the environment fallback."""

    files = list(config_files or [])
    if not files:
        files = settings_files_from_env(os.environ if environ is None else environ)
    return SettingsLoader().load(files)


def create_service(settings: ReportSettings | None = None) -> PlanReportService:
    """Create a report service using the default pipeline components."""

    return PlanReportService(settings=settings)


def _format_report(service: PlanReportService, report: PlanReport, output_format: str) -> str:
    if output_format not in OUTPUT_FORMATS:
        raise ValueError("format must be either 'markdown' or 'json'")

    if output_format == "json":
        return json.dumps(report.to_dict(), indent=2) + "\n"
    return service.render_report(report)


def _write_output(text: str, destination: Path | None) -> None:
    if destination is None:
        sys.stdout.write(text)
        return

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise RenderError(f"failed to write report to {destination}: {exc}") from exc


def _handle_render(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(args.config_files)
        service = create_service(settings)

        loader = PlanLoader(
            args.working_dir,
            plan_json_path=None if args.plan_file else args.plan_json,
            plan_file_path=args.plan_file,
            terraform_bin=args.terraform_bin,
        )
        report = service.build_report(loader.load_bytes())
        output = _format_report(service, report, args.format)
        _write_output(output, args.output)
    except PlanReportError as exc:
        print(f"Error: {exc}")
        return 2

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "render":
        configure_logging(args.verbose)
        return _handle_render(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
