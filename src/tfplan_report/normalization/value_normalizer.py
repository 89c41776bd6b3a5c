"""Re-indent JSON documents embedded as strings inside attribute values.

Terraform records attributes such as IAM policies or container definitions
as JSON encoded strings. Left alone they show up in the diff as a single
escaped line, so every string that parses as JSON is re-encoded with two
space indentation before the before/after trees are serialized.

Only the layout changes: number literals keep their source text and object
members keep their order, duplicates included.
"""

from __future__ import annotations

import json
from typing import Any, List

from ..errors import FormatError


def _reject_constant(name: str) -> Any:
    raise ValueError(name)


class _NumberLiteral(str):
    """Number text exactly as written in the embedded document."""


class _Members(list):
    """Object members in document order."""


class ValueNormalizer:
    """Structural walk over a JSON value tree."""

    indent = 2

    def normalize(self, value: Any) -> Any:
        """Return ``value`` with JSON-valued strings re-indented."""

        if isinstance(value, list):
            return [self.normalize(item) for item in value]
        if isinstance(value, dict):
            return {key: self.normalize(item) for key, item in value.items()}
        if isinstance(value, str):
            return self._normalize_string(value)
        return value

    # ------------------------------------------------------------------
    def _normalize_string(self, value: str) -> str:
        try:
            decoded = json.loads(
                value,
                parse_constant=_reject_constant,
                parse_float=_NumberLiteral,
                parse_int=_NumberLiteral,
                object_pairs_hook=_Members,
            )
        except ValueError:
            return value

        try:
            return self._encode(decoded, 0)
        except (TypeError, ValueError) as exc:
            raise FormatError(f"failed to re-encode embedded JSON string: {exc}") from exc

    def _encode(self, value: Any, depth: int) -> str:
        if isinstance(value, _NumberLiteral):
            return str.__str__(value)
        if isinstance(value, _Members):
            items = [
                f"{json.dumps(key, ensure_ascii=False)}: {self._encode(item, depth + 1)}"
                for key, item in value
            ]
            return self._block("{", "}", items, depth)
        if isinstance(value, list):
            items = [self._encode(item, depth + 1) for item in value]
            return self._block("[", "]", items, depth)
        return json.dumps(value, ensure_ascii=False)

    def _block(self, opener: str, closer: str, items: List[str], depth: int) -> str:
        if not items:
            return opener + closer

        inner = " " * (self.indent * (depth + 1))
        outer = " " * (self.indent * depth)
        body = ",\n".join(inner + item for item in items)
        return f"{opener}\n{body}\n{outer}{closer}"


__all__ = ["ValueNormalizer"]
