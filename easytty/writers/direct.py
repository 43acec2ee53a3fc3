"""Rule file writer using plain filesystem access."""

from __future__ import annotations

import logging
from pathlib import Path

from easytty.core.errors import PersistenceError

LOGGER = logging.getLogger(__name__)


class DirectFileWriter:
    def write(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except PermissionError as exc:
            raise PersistenceError(
                f"Failed to create rule file {path}: permission denied (sudo required)"
            ) from exc
        except OSError as exc:
            raise PersistenceError(f"Failed to create rule file {path}: {exc}") from exc
        LOGGER.debug("Wrote %s", path)

    def remove(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise PersistenceError(f"Rule file does not exist: {path}") from exc
        except PermissionError as exc:
            raise PersistenceError(
                f"Failed to delete rule file {path}: permission denied (sudo required)"
            ) from exc
        except OSError as exc:
            raise PersistenceError(f"Failed to delete rule file {path}: {exc}") from exc
        LOGGER.debug("Removed %s", path)
