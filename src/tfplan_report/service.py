"""Orchestration layer that turns plan JSON into a rendered report."""

from __future__ import annotations

import io
import logging
from dataclasses import replace

from .adapters import PlanSanitizer, Sanitizer
from .config import ReportSettings
from .errors import PlanReportError
from .models import PlanReport
from .normalization import ChangeClassifier, PlanParser, ValueNormalizer
from .reporting import DiffRenderer, ReportComposer, TextSink

logger = logging.getLogger(__name__)


class PlanReportService:
    """Run parse, sanitize, classify, normalize and compose in sequence."""

    def __init__(
        self,
        *,
        settings: ReportSettings | None = None,
        parser: PlanParser | None = None,
        sanitizer: Sanitizer | None = None,
        classifier: ChangeClassifier | None = None,
        normalizer: ValueNormalizer | None = None,
        composer: ReportComposer | None = None,
    ) -> None:
        self.settings = settings or ReportSettings()
        self._parser = parser or PlanParser()
        self._sanitizer = sanitizer or PlanSanitizer(self.settings.redacted_value)
        self._classifier = classifier or ChangeClassifier()
        self._normalizer = normalizer or ValueNormalizer()
        self._composer = composer or ReportComposer(
            DiffRenderer(context_lines=self.settings.context_lines),
            code_fence=self.settings.code_fence,
        )

    # ------------------------------------------------------------------
    def build_report(self, data: bytes | str) -> PlanReport:
        """Return the classified, normalized report for raw plan JSON."""

        plan = self._parser.parse(data)
        sanitized = self._sanitizer(plan)
        report = self._classifier.classify(sanitized)

        report.resource_changes = [
            replace(
                change,
                before=self._normalizer.normalize(change.before),
                after=self._normalizer.normalize(change.after),
            )
            for change in report.resource_changes
        ]

        logger.info(
            "Plan summary: %d to add, %d to change, %d to destroy, %d to replace",
            len(report.created),
            len(report.updated),
            len(report.deleted),
            len(report.replaced),
        )
        return report

    def render(self, data: bytes | str, writer: TextSink) -> PlanReport:
        """Build the report and write the markdown rendering to ``writer``."""

        report = self.build_report(data)
        self._composer.compose(report, writer)
        return report

    def render_text(self, data: bytes | str) -> str:
        buffer = io.StringIO()
        self.render(data, buffer)
        return buffer.getvalue()

    def render_report(self, report: PlanReport) -> str:
        return self._composer.render(report)


__all__ = ["PlanReportError", "PlanReportService"]
