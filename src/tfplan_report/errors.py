"""Exception hierarchy shared by every stage of the report pipeline.

The pipeline only raises; the CLI layers decide how errors are displayed.
"""

from __future__ import annotations


class PlanReportError(RuntimeError):
    """Base class for report generation failures."""

    stage = "report"


class PlanLoaderError(PlanReportError):
    """Raised when the plan JSON cannot be acquired."""

    stage = "load"


class ConfigError(PlanReportError):
    """Raised when report settings cannot be loaded or are invalid."""

    stage = "config"


class ParseError(PlanReportError):
    """Raised when the input is not plan JSON of the expected shape."""

    stage = "parse"


class SanitizeError(PlanReportError):
    """Raised when sensitive values cannot be redacted from a plan."""

    stage = "sanitize"


class FormatError(PlanReportError):
    """Raised when an embedded JSON string cannot be re-encoded."""

    stage = "format"


class DiffError(PlanReportError):
    """Raised when a resource change cannot be serialized or diffed."""

    stage = "diff"


class RenderError(PlanReportError):
    """Raised when the report cannot be composed or written."""

    stage = "render"


__all__ = [
    "ConfigError",
    "DiffError",
    "FormatError",
    "ParseError",
    "PlanLoaderError",
    "PlanReportError",
    "RenderError",
    "SanitizeError",
]
