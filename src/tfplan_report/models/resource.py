"""Plan and resource change models used by the report pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

_REPLACE_PAIRS = (("delete", "create"), ("create", "delete"))


class ChangeAction(str, Enum):
    """Enumeration of the planned action for a Terraform resource."""

    NOOP = "no-op"
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REPLACE = "replace"
    UNKNOWN = "unknown"

    @classmethod
    def from_actions(cls, actions: Iterable[str]) -> "ChangeAction":
        """Classify a plan action set.

        ``no-op`` and ``read`` win whenever they are present. The remaining
        actions are matched in the order create, update, delete, replace.
        Replacement is encoded by Terraform as a delete/create pair in either
        order; a literal ``replace`` entry is accepted as well.
        """

        action_list = tuple(actions)
        if not action_list:
            return cls.UNKNOWN

        if "no-op" in action_list:
            return cls.NOOP
        if "read" in action_list:
            return cls.READ
        if action_list == ("create",):
            return cls.CREATE
        if action_list == ("update",):
            return cls.UPDATE
        if action_list == ("delete",):
            return cls.DELETE
        if action_list in _REPLACE_PAIRS or action_list == ("replace",):
            return cls.REPLACE

        return cls.UNKNOWN

    @property
    def is_reportable(self) -> bool:
        return self in _REPORTABLE


_REPORTABLE = frozenset(
    {ChangeAction.CREATE, ChangeAction.UPDATE, ChangeAction.DELETE, ChangeAction.REPLACE}
)


@dataclass(slots=True)
class ResourceChange:
    """A single resource's proposed mutation as recorded in the plan."""

    address: str
    type: str = ""
    name: str = ""
    mode: str = "managed"
    module_address: Optional[str] = None
    provider_name: Optional[str] = None
    index: Optional[str | int] = None
    actions: Tuple[str, ...] = ()
    before: Any = None
    after: Any = None
    before_sensitive: Any = None
    after_sensitive: Any = None

    @property
    def action(self) -> ChangeAction:
        return ChangeAction.from_actions(self.actions)

    @property
    def display_name(self) -> str:
        """Return the ``<type>.<name>`` label used in diff headers."""

        return f"{self.type}.{self.name}"


@dataclass(slots=True)
class Plan:
    """Decoded Terraform plan, limited to what the report needs."""

    resource_changes: List[ResourceChange] = field(default_factory=list)
    format_version: Optional[str] = None
    terraform_version: Optional[str] = None
