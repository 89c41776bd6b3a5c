"""Unified diffs between the before and after values of a resource change."""

from __future__ import annotations

import difflib
import json
from typing import Any, List

from ..errors import DiffError
from ..models import ChangeAction, ResourceChange

HEADER_SUFFIXES = {
    ChangeAction.CREATE: "will be created",
    ChangeAction.UPDATE: "will be updated in-place",
    ChangeAction.DELETE: "will be destroyed",
    ChangeAction.REPLACE: "will be replaced",
}

# Applied to the serialized text so embedded JSON documents show real line breaks.
_UNESCAPES = ((r"\n", "\n  "), (r"\"", '"'))


def header_suffix(change: ResourceChange) -> str:
    """Return the human readable action phrase for a diff header."""

    return HEADER_SUFFIXES.get(change.action, "")


def split_lines(text: str) -> List[str]:
    """Split ``text`` keeping line endings; the last line always gets one."""

    return [f"{line}\n" for line in text.split("\n")]


class DiffRenderer:
    """Serialize before/after trees and diff them line by line."""

    def __init__(self, context_lines: int = 3) -> None:
        self.context_lines = context_lines

    def render(self, change: ResourceChange) -> str:
        before = self._serialize(change.before, change.address, "before")
        after = self._serialize(change.after, change.address, "after")

        try:
            diff = difflib.unified_diff(
                split_lines(self._unescape(before)),
                split_lines(self._unescape(after)),
                fromfile="before",
                tofile="after",
                n=self.context_lines,
            )
            return "".join(diff)
        except (TypeError, ValueError) as exc:  # pragma: no cover - difflib invariant breach
            raise DiffError(f"failed to create diff for {change.address}: {exc}") from exc

    def header(self, change: ResourceChange) -> str:
        return f"# {change.display_name} {header_suffix(change)}"

    # ------------------------------------------------------------------
    def _serialize(self, value: Any, address: str, side: str) -> str:
        try:
            return json.dumps(
                value,
                indent=2,
                sort_keys=True,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise DiffError(f"invalid resource changes ({side}) for {address}: {exc}") from exc

    def _unescape(self, text: str) -> str:
        for escaped, replacement in _UNESCAPES:
            text = text.replace(escaped, replacement)
        return text


__all__ = ["DiffRenderer", "HEADER_SUFFIXES", "header_suffix", "split_lines"]
