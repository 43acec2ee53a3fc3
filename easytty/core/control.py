"""udevadm control bridge: reload rules and re-trigger coldplug."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from easytty.core.errors import ControlError
from easytty.core.model import OperationResult
from easytty.writers import is_root

_FAILURE_MARKERS = ("error", "failed")
LOGGER = logging.getLogger(__name__)


class UdevControl:
    def __init__(
        self,
        *,
        udevadm: str = "udevadm",
        sudo_command: Sequence[str] = ("sudo",),
        elevate: bool | None = None,
    ) -> None:
        self.udevadm = udevadm
        self.sudo_command = tuple(sudo_command)
        self.elevate = elevate

    def reload(self) -> OperationResult:
        try:
            self._run_checked(["control", "--reload-rules"], action="reload rules")
        except ControlError as exc:
            return OperationResult.failure(str(exc))
        return OperationResult.ok("Rules reloaded successfully")

    def trigger(self) -> OperationResult:
        try:
            self._run_checked(["trigger"], action="trigger rules")
        except ControlError as exc:
            return OperationResult.failure(str(exc))
        return OperationResult.ok("Rules triggered successfully")

    def apply(self) -> OperationResult:
        reload_result = self.reload()
        if not reload_result.success:
            return reload_result
        trigger_result = self.trigger()
        if not trigger_result.success:
            return trigger_result
        return OperationResult.ok("Rules reloaded and applied successfully")

    def _command(self, args: list[str]) -> list[str]:
        elevate = self.elevate
        if elevate is None:
            elevate = not is_root()
        prefix = list(self.sudo_command) if elevate else []
        return [*prefix, self.udevadm, *args]

    def _run_checked(self, args: list[str], *, action: str) -> str:
        cmd = self._command(args)
        LOGGER.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise ControlError(f"Failed to {action}: '{cmd[0]}' not found") from exc

        output = "\n".join(
            part.strip() for part in (result.stdout or "", result.stderr or "") if part.strip()
        )
        if result.returncode != 0:
            raise ControlError(
                f"Failed to {action} (exit status {result.returncode}): {output or '<no output>'}"
            )
        lowered = output.lower()
        if any(marker in lowered for marker in _FAILURE_MARKERS):
            LOGGER.warning("udevadm reported problems while trying to %s: %s", action, output)
        return output
