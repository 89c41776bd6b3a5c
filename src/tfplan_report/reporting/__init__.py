"""Diff rendering and markdown composition."""

from .composer import ReportComposer, TextSink
from .diff_renderer import HEADER_SUFFIXES, DiffRenderer, header_suffix

__all__ = [
    "DiffRenderer",
    "HEADER_SUFFIXES",
    "ReportComposer",
    "TextSink",
    "header_suffix",
]
