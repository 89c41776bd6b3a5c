"""Redact values Terraform marks as sensitive before they reach the report."""

from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import Any, Callable

from ..errors import SanitizeError
from ..models import Plan, ResourceChange

logger = logging.getLogger(__name__)

DEFAULT_REDACTED_VALUE = "REDACTED_SENSITIVE"

Sanitizer = Callable[[Plan], Plan]


class PlanSanitizer:
    """Replace sensitive leaves using each change's sensitivity masks.

    ``before_sensitive`` and ``after_sensitive`` mirror the shape of the
    values they describe: ``true`` marks the whole subtree as sensitive,
    objects and arrays recurse by key and index.
    """

    def __init__(self, redacted_value: str = DEFAULT_REDACTED_VALUE) -> None:
        self.redacted_value = redacted_value

    def __call__(self, plan: Plan) -> Plan:
        return self.sanitize(plan)

    def sanitize(self, plan: Plan) -> Plan:
        changes = [self._sanitize_change(change) for change in plan.resource_changes]
        return replace(plan, resource_changes=changes)

    # ------------------------------------------------------------------
    def _sanitize_change(self, change: ResourceChange) -> ResourceChange:
        try:
            before = self._redact(change.before, change.before_sensitive)
            after = self._redact(change.after, change.after_sensitive)
        except SanitizeError as exc:
            raise SanitizeError(f"failed to sanitize {change.address}: {exc}") from exc

        return replace(
            change,
            before=before,
            after=after,
            before_sensitive=copy.deepcopy(change.before_sensitive),
            after_sensitive=copy.deepcopy(change.after_sensitive),
        )

    def _redact(self, value: Any, mask: Any) -> Any:
        if mask is None or mask is False:
            return copy.deepcopy(value)
        if mask is True:
            logger.debug("Redacting sensitive value")
            return self.redacted_value

        if isinstance(mask, dict):
            if not isinstance(value, dict):
                return copy.deepcopy(value)
            return {key: self._redact(item, mask.get(key)) for key, item in value.items()}

        if isinstance(mask, list):
            if not isinstance(value, list):
                return copy.deepcopy(value)
            return [
                self._redact(item, mask[position] if position < len(mask) else None)
                for position, item in enumerate(value)
            ]

        raise SanitizeError(f"unsupported sensitivity mask of type {type(mask).__name__}")


def sanitize_plan(plan: Plan, redacted_value: str = DEFAULT_REDACTED_VALUE) -> Plan:
    """Return a copy of ``plan`` with sensitive values redacted."""

    return PlanSanitizer(redacted_value).sanitize(plan)


__all__ = ["DEFAULT_REDACTED_VALUE", "PlanSanitizer", "Sanitizer", "sanitize_plan"]
