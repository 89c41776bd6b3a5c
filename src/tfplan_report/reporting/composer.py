"""Compose the markdown plan summary posted to pull requests."""

from __future__ import annotations

import io
import logging
from typing import List, Protocol

from ..config import DEFAULT_CODE_FENCE
from ..errors import DiffError, RenderError
from ..models import PlanReport
from .diff_renderer import DiffRenderer

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    def write(self, text: str) -> object:
        ...


class ReportComposer:
    """Render a :class:`PlanReport` using the fixed summary layout.

    The output looks like::

        ### 1 to add, 0 to change, 0 to destroy, 0 to replace.
        - add
            - aws_instance.foo
        <details><summary>Change details</summary>

        ````````diff
        # aws_instance.foo will be created
        ...
        ````````

        </details>
    """

    def __init__(
        self,
        diff_renderer: DiffRenderer | None = None,
        *,
        code_fence: str = DEFAULT_CODE_FENCE,
    ) -> None:
        self.diff_renderer = diff_renderer or DiffRenderer()
        self.code_fence = code_fence

    def compose(self, report: PlanReport, writer: TextSink) -> None:
        """Write the rendered report to ``writer`` in a single call."""

        text = self.render(report)
        try:
            writer.write(text)
        except (OSError, ValueError) as exc:
            raise RenderError(f"failed to write report: {exc}") from exc

    def render(self, report: PlanReport) -> str:
        """Return the rendered report as a string."""

        buffer = io.StringIO()
        counts = report.counts()
        buffer.write(
            f"### {counts['add']} to add, {counts['change']} to change, "
            f"{counts['destroy']} to destroy, {counts['replace']} to replace."
        )

        for title, addresses in (
            ("add", report.created),
            ("change", report.updated),
            ("destroy", report.deleted),
            ("replace", report.replaced),
        ):
            if addresses:
                buffer.write(f"\n- {title}")
                for address in addresses:
                    buffer.write(f"\n    - {address}")
        buffer.write("\n")

        if report.has_changes:
            buffer.write("<details><summary>Change details</summary>\n")
            for block in self._diff_blocks(report):
                buffer.write(block)
            buffer.write("\n</details>\n")

        return buffer.getvalue()

    # ------------------------------------------------------------------
    def _diff_blocks(self, report: PlanReport) -> List[str]:
        blocks: List[str] = []
        for change in report.resource_changes:
            try:
                diff_text = self.diff_renderer.render(change)
            except DiffError as exc:
                raise RenderError(f"failed to render template: {exc}") from exc

            logger.debug("Rendered diff for %s (%d chars)", change.address, len(diff_text))
            blocks.append(
                f"\n{self.code_fence}diff\n"
                f"{self.diff_renderer.header(change)}\n"
                f"{diff_text}{self.code_fence}\n"
            )
        return blocks


__all__ = ["ReportComposer", "TextSink"]
