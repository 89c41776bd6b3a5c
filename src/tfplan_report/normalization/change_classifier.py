"""Partition resource changes into the report's address lists."""

from __future__ import annotations

import logging
from typing import Iterable

from ..models import ChangeAction, Plan, PlanReport, ResourceChange

logger = logging.getLogger(__name__)


class ChangeClassifier:
    """Group plan records by action while preserving plan order."""

    def classify(self, plan: Plan | Iterable[ResourceChange]) -> PlanReport:
        changes = plan.resource_changes if isinstance(plan, Plan) else plan
        report = PlanReport()
        targets = {
            ChangeAction.CREATE: report.created,
            ChangeAction.UPDATE: report.updated,
            ChangeAction.DELETE: report.deleted,
            ChangeAction.REPLACE: report.replaced,
        }

        for change in changes:
            action = change.action
            if action in (ChangeAction.NOOP, ChangeAction.READ):
                continue

            if not action.is_reportable:
                logger.warning(
                    "%s has an unrecognised action set %s; rendering without a summary entry",
                    change.address,
                    list(change.actions),
                )
                report.unclassified.append(change.address)
            else:
                targets[action].append(change.address)
            report.resource_changes.append(change)

        logger.debug("Classified plan: %s", report.counts())
        return report


__all__ = ["ChangeClassifier"]
