"""Decode raw ``terraform show -json`` output into :class:`Plan` models."""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping

from ..errors import ParseError
from ..models import Plan, ResourceChange

logger = logging.getLogger(__name__)

_SUPPORTED_FORMAT_MAJORS = {"0", "1"}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not valid JSON")


class PlanParser:
    """Parse plan JSON, checking the parts of its shape the report relies on."""

    def parse(self, data: bytes | str) -> Plan:
        """Return the decoded plan or raise :class:`ParseError`."""

        try:
            raw = json.loads(data, parse_constant=_reject_constant)
        except (ValueError, UnicodeDecodeError) as exc:
            # JSONDecodeError is a ValueError subclass
            raise ParseError(f"cannot parse input: {exc}") from exc

        if not isinstance(raw, Mapping):
            raise ParseError("cannot parse input: plan JSON must be an object")

        format_version = self._format_version(raw.get("format_version"))
        terraform_version = raw.get("terraform_version")
        if terraform_version is not None and not isinstance(terraform_version, str):
            raise ParseError("cannot parse input: terraform_version must be a string")

        entries = raw.get("resource_changes")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ParseError("cannot parse input: resource_changes must be an array")

        changes = [self._parse_change(position, entry) for position, entry in enumerate(entries)]
        logger.debug("Parsed %d resource changes (format %s)", len(changes), format_version)

        return Plan(
            resource_changes=changes,
            format_version=format_version,
            terraform_version=terraform_version,
        )

    # ------------------------------------------------------------------
    def _format_version(self, value: object) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ParseError("cannot parse input: format_version must be a string")

        major = value.split(".", 1)[0]
        if major not in _SUPPORTED_FORMAT_MAJORS:
            raise ParseError(f"cannot parse input: unsupported plan format version {value!r}")
        return value

    def _parse_change(self, position: int, entry: object) -> ResourceChange:
        if not isinstance(entry, Mapping):
            raise ParseError(f"cannot parse input: resource_changes[{position}] must be an object")

        change = entry.get("change")
        if change is None:
            change = {}
        if not isinstance(change, Mapping):
            raise ParseError(
                f"cannot parse input: resource_changes[{position}].change must be an object"
            )

        index = entry.get("index")
        if index is not None and (isinstance(index, bool) or not isinstance(index, (str, int))):
            raise ParseError(
                f"cannot parse input: resource_changes[{position}].index must be a string or number"
            )

        return ResourceChange(
            address=self._string(entry, "address", position),
            type=self._string(entry, "type", position),
            name=self._string(entry, "name", position),
            mode=self._string(entry, "mode", position) or "managed",
            module_address=self._string(entry, "module_address", position) or None,
            provider_name=self._string(entry, "provider_name", position) or None,
            index=index,
            actions=self._actions(change.get("actions"), position),
            before=change.get("before"),
            after=change.get("after"),
            before_sensitive=change.get("before_sensitive"),
            after_sensitive=change.get("after_sensitive"),
        )

    def _string(self, entry: Mapping[str, Any], key: str, position: int) -> str:
        value = entry.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ParseError(
                f"cannot parse input: resource_changes[{position}].{key} must be a string"
            )
        return value

    def _actions(self, actions: object, position: int) -> tuple[str, ...]:
        if actions is None:
            return ()
        if not isinstance(actions, list):
            raise ParseError(
                f"cannot parse input: resource_changes[{position}].change.actions must be an array"
            )

        parsed: List[str] = []
        for action in actions:
            if not isinstance(action, str):
                raise ParseError(
                    f"cannot parse input: resource_changes[{position}].change.actions "
                    "must contain strings"
                )
            parsed.append(action)
        return tuple(parsed)


def parse_plan(data: bytes | str) -> Plan:
    """Module-level shortcut for :meth:`PlanParser.parse`."""

    return PlanParser().parse(data)


__all__ = ["PlanParser", "parse_plan"]
