"""Report model assembled by the change classifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from .resource import ResourceChange


@dataclass(slots=True)
class PlanReport:
    """Addresses grouped by action plus the changes to render as diffs."""

    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    replaced: List[str] = field(default_factory=list)
    resource_changes: List[ResourceChange] = field(default_factory=list)
    unclassified: List[str] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "add": len(self.created),
            "change": len(self.updated),
            "destroy": len(self.deleted),
            "replace": len(self.replaced),
        }

    @property
    def has_changes(self) -> bool:
        return bool(self.resource_changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.counts(),
            "created": list(self.created),
            "updated": list(self.updated),
            "deleted": list(self.deleted),
            "replaced": list(self.replaced),
            "unclassified": list(self.unclassified),
            "resource_changes": [
                {
                    "address": change.address,
                    "type": change.type,
                    "name": change.name,
                    "action": change.action.value,
                    "before": change.before,
                    "after": change.after,
                }
                for change in self.resource_changes
            ],
        }
