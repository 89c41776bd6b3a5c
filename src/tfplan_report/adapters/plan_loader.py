"""Acquire raw plan JSON from an artifact, stdin, or a saved plan file."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional

from ..errors import PlanLoaderError

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


class PlanLoader:
    """Acquire plan JSON bytes from an artifact, stdin, or a saved plan file."""

    def __init__(
        self,
        working_dir: str | os.PathLike[str] = ".",
        *,
        plan_json_path: str | os.PathLike[str] | None = None,
        plan_file_path: str | os.PathLike[str] | None = None,
        stdin: Optional[BinaryIO] = None,
        terraform_bin: str = "terraform",
    ) -> None:
        self.working_dir = Path(working_dir).resolve()
        self.read_stdin = plan_json_path is not None and str(plan_json_path) == STDIN_MARKER
        self.plan_json_path = (
            Path(plan_json_path).resolve() if plan_json_path and not self.read_stdin else None
        )
        self.plan_file_path = Path(plan_file_path).resolve() if plan_file_path else None
        self.stdin = stdin
        self.terraform_bin = terraform_bin

    def load_bytes(self) -> bytes:
        """Return the raw plan JSON without decoding it."""

        if self.plan_file_path:
            return self._load_plan_file(self.plan_file_path)

        if self.plan_json_path:
            return self._load_json_artifact(self.plan_json_path)

        return self._read_stdin()

    # Artifact ingestion helpers -------------------------------------------------
    def _load_json_artifact(self, path: Path) -> bytes:
        if not path.exists():
            raise PlanLoaderError(f"Terraform plan JSON artifact not found: {path}")

        try:
            data = path.read_bytes()
        except OSError as exc:
            raise PlanLoaderError(f"Failed to read plan artifact: {path}") from exc

        logger.debug("Read %d bytes from %s", len(data), path)
        return data

    def _read_stdin(self) -> bytes:
        stream = self.stdin if self.stdin is not None else sys.stdin.buffer
        try:
            data = stream.read()
        except OSError as exc:
            raise PlanLoaderError("Failed to read plan JSON from stdin") from exc

        logger.debug("Read %d bytes from stdin", len(data))
        return data

    def _load_plan_file(self, path: Path) -> bytes:
        if not path.exists():
            raise PlanLoaderError(f"Terraform plan file not found: {path}")

        completed = self._run_command(
            [self.terraform_bin, "show", "-json", str(path)],
            cwd=self.working_dir,
        )
        return completed.stdout

    # Command runner -------------------------------------------------------------
    def _run_command(
        self,
        args: List[str],
        *,
        cwd: Path | None = None,
    ) -> subprocess.CompletedProcess[bytes]:
        logger.debug("Running %s", " ".join(args))
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                check=True,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            raise PlanLoaderError(f"Executable not found: {args[0]}") from exc
        except subprocess.CalledProcessError as exc:
            raise PlanLoaderError(
                f"Command '{' '.join(args)}' failed with exit code {exc.returncode}"
            ) from exc

        return completed


__all__ = ["PlanLoader", "PlanLoaderError", "STDIN_MARKER"]
