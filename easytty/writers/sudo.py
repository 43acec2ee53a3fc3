"""Rule file writer that delegates to sudo for unprivileged callers."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from easytty.core.errors import PersistenceError

LOGGER = logging.getLogger(__name__)


class SudoFileWriter:
    def __init__(self, sudo_command: Sequence[str] = ("sudo",)) -> None:
        self.sudo_command = tuple(sudo_command)

    def write(self, path: Path, content: str) -> None:
        result = self._run([*self.sudo_command, "tee", str(path)], stdin=content)
        if result.returncode != 0:
            detail = (result.stderr or "").strip()
            raise PersistenceError(
                f"Failed to create rule file {path} (sudo required): {detail or 'tee failed'}"
            )

    def remove(self, path: Path) -> None:
        result = self._run([*self.sudo_command, "rm", "-f", str(path)])
        if result.returncode != 0:
            detail = (result.stderr or "").strip()
            raise PersistenceError(
                f"Failed to delete rule file {path} (sudo required): {detail or 'rm failed'}"
            )

    def _run(self, cmd: list[str], stdin: str | None = None) -> subprocess.CompletedProcess[str]:
        LOGGER.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                input=stdin,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise PersistenceError(
                f"Could not run '{cmd[0]}'; re-run easytty as root to modify rules"
            ) from exc
