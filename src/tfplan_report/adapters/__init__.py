"""Adapter layer for plan acquisition and sanitization."""

from .plan_loader import STDIN_MARKER, PlanLoader, PlanLoaderError
from .sanitizer import DEFAULT_REDACTED_VALUE, PlanSanitizer, Sanitizer, sanitize_plan

__all__ = [
    "DEFAULT_REDACTED_VALUE",
    "PlanLoader",
    "PlanLoaderError",
    "PlanSanitizer",
    "STDIN_MARKER",
    "Sanitizer",
    "sanitize_plan",
]
