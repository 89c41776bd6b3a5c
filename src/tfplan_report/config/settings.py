"""Load and merge YAML settings files for report rendering."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import yaml

from ..adapters.sanitizer import DEFAULT_REDACTED_VALUE
from ..errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TFPLAN_REPORT_CONFIG"
DEFAULT_CODE_FENCE = "`" * 8


@dataclass(slots=True)
class ReportSettings:
    """Options that tune the rendered report without changing its layout."""

    context_lines: int = 3
    code_fence: str = DEFAULT_CODE_FENCE
    redacted_value: str = DEFAULT_REDACTED_VALUE


class SettingsLoader:
    """Merge settings files in order; later files override earlier ones."""

    def __init__(self, default_files: Sequence[Path | str] | None = None) -> None:
        self._default_files = [Path(path) for path in default_files or []]

    # ------------------------------------------------------------------
    def load(self, files: Sequence[Path | str] | None = None) -> ReportSettings:
        """Return settings built from the default files plus ``files``."""

        paths = list(self._default_files)
        if files:
            paths.extend(Path(path) for path in files)

        settings = ReportSettings()
        for path in paths:
            data = self._load_file(path)
            for key, value in data.items():
                if key == "context_lines":
                    settings.context_lines = self._context_lines(value, path)
                elif key == "code_fence":
                    settings.code_fence = self._code_fence(value, path)
                elif key == "redacted_value":
                    if not isinstance(value, str):
                        raise ConfigError(f"redacted_value must be a string in {path}")
                    settings.redacted_value = value
                else:
                    logger.warning("Ignoring unknown setting %r in %s", key, path)

        return settings

    # ------------------------------------------------------------------
    def _context_lines(self, value: object, path: Path) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"context_lines must be a non-negative integer in {path}")
        return value

    def _code_fence(self, value: object, path: Path) -> str:
        if not isinstance(value, str) or len(value) < 3 or len(set(value)) != 1:
            raise ConfigError(f"code_fence must repeat a single character at least 3 times in {path}")
        if value[0] not in "`~":
            raise ConfigError(f"code_fence must use backticks or tildes in {path}")
        return value

    def _load_file(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigError(f"Settings file not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise ConfigError(f"Failed to read settings file {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in settings file {path}") from exc

        if not isinstance(data, Mapping):
            raise ConfigError(f"Settings file must be a mapping: {path}")

        logger.debug("Loaded settings from %s", path)
        return dict(data)


def settings_files_from_env(environ: Mapping[str, str]) -> List[Path]:
    """Return settings files named by ``TFPLAN_REPORT_CONFIG``, if any."""

    value = environ.get(CONFIG_ENV_VAR, "").strip()
    if not value:
        return []
    return [Path(item) for item in value.split(os.pathsep) if item.strip()]
