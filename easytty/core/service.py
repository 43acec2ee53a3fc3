"""Service layer used by the CLI and the public API."""

from __future__ import annotations

import shutil

from easytty.core.config import Settings, load_config
from easytty.core.control import UdevControl
from easytty.core.detector import DeviceDetector
from easytty.core.errors import DeviceSelectionError
from easytty.core.model import DeviceRecord, OperationResult, RuleRecord, RuleStatus
from easytty.core.naming import suggest_symlink_name
from easytty.core.rule_store import RuleStore
from easytty.writers import is_root


class EasyTTYService:
    def __init__(
        self,
        *,
        settings: Settings | None = None,
        detector: DeviceDetector | None = None,
        store: RuleStore | None = None,
        control: UdevControl | None = None,
    ) -> None:
        if settings is None:
            loaded = load_config()
            settings = loaded.settings
            self.load_warnings = loaded.warnings
        else:
            self.load_warnings = ()
        self.settings = settings
        self.runtime_warnings = _runtime_warnings(settings)
        self.detector = detector or DeviceDetector(tty_prefixes=settings.tty_prefixes)
        self.store = store or RuleStore(settings)
        self.control = control or UdevControl(
            udevadm=settings.udevadm,
            sudo_command=settings.sudo_command,
        )

    def list_devices(self) -> list[DeviceRecord]:
        return self.detector.scan()

    def list_rules(self) -> list[RuleRecord]:
        self.store.refresh()
        return self.store.get_rules()

    def rule_status(self) -> list[RuleStatus]:
        return [
            RuleStatus(rule=rule, symlink_present=self.store.verify_symlink(rule.symlink))
            for rule in self.list_rules()
        ]

    def resolve_device(self, device_hint: str) -> DeviceRecord:
        devices = self.list_devices()
        if not devices:
            raise DeviceSelectionError("No USB serial devices found. Ensure the adapter is plugged in.")

        exact = [d for d in devices if device_hint in (d.dev_path, d.dev_node)]
        if exact:
            return exact[0]

        hint = device_hint.lower()
        candidates = [
            d
            for d in devices
            if (d.serial and hint == d.serial.lower())
            or hint == d.identity_key.lower()
            or hint in d.product.lower()
        ]
        if not candidates:
            raise DeviceSelectionError(f"No device found matching '{device_hint}'")
        if len(candidates) > 1:
            candidate_desc = ", ".join(f"{d.dev_path} ({d.display_name})" for d in candidates)
            raise DeviceSelectionError(
                f"Multiple candidate devices found: {candidate_desc}. Use the device path to choose one."
            )
        return candidates[0]

    def suggest_name(self, device: DeviceRecord) -> str:
        return suggest_symlink_name(device.product, device.dev_node)

    def bind(self, device_hint: str, name: str, *, apply: bool = True) -> OperationResult:
        device = self.resolve_device(device_hint)
        self.store.refresh()
        result = self.store.create_rule(device, name)
        if not result.success or not apply:
            return result
        applied = self.control.apply()
        if not applied.success:
            return OperationResult.failure(f"{result.message}, but applying rules failed: {applied.message}")
        return OperationResult.ok(f"{result.message}\n{applied.message}")

    def unbind(self, name: str, *, apply: bool = True) -> OperationResult:
        self.store.refresh()
        result = self.store.delete_rule(name)
        if not result.success or not apply:
            return result
        applied = self.control.apply()
        if not applied.success:
            return OperationResult.failure(f"{result.message}, but applying rules failed: {applied.message}")
        return OperationResult.ok(f"{result.message}\n{applied.message}")

    def apply(self) -> OperationResult:
        return self.control.apply()


def _runtime_warnings(settings: Settings) -> tuple[str, ...]:
    warnings: list[str] = []
    if shutil.which(settings.udevadm) is None:
        warnings.append(f"'{settings.udevadm}' not found on PATH; rules cannot be applied.")
    if not is_root() and settings.sudo_command and shutil.which(settings.sudo_command[0]) is None:
        warnings.append(
            f"Not running as root and '{settings.sudo_command[0]}' is unavailable; rule changes will fail."
        )
    return tuple(warnings)
