"""Rule file writer interfaces."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class RuleFileWriter(Protocol):
    def write(self, path: Path, content: str) -> None:
        """Write ``content`` to ``path``, replacing any existing file."""

    def remove(self, path: Path) -> None:
        """Remove ``path``."""
