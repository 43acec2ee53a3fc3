"""Stable public API for building tooling on top of easytty.

This module is the supported integration surface for third-party callers such
as interactive frontends. Avoid importing from private/internal modules unless
intentionally depending on non-stable internals.
"""

from __future__ import annotations

from easytty.core.config import Settings
from easytty.core.control import UdevControl
from easytty.core.detector import DeviceDetector
from easytty.core.device_match import matches
from easytty.core.errors import (
    ConfigLoadError,
    ConfigValidationError,
    ControlError,
    DeviceEnumerationError,
    DeviceSelectionError,
    EasyTTYError,
    PersistenceError,
    RuleConflictError,
    RuleValidationError,
)
from easytty.core.model import (
    DeviceRecord,
    OperationResult,
    RuleMatchType,
    RuleRecord,
    RuleStatus,
)
from easytty.core.rule_store import RuleStore
from easytty.core.service import EasyTTYService

__all__ = [
    "EasyTTYError",
    "ConfigLoadError",
    "ConfigValidationError",
    "ControlError",
    "DeviceEnumerationError",
    "DeviceSelectionError",
    "PersistenceError",
    "RuleConflictError",
    "RuleValidationError",
    "DeviceRecord",
    "OperationResult",
    "RuleMatchType",
    "RuleRecord",
    "RuleStatus",
    "Settings",
    "matches",
    "Client",
]


class Client:
    """Public client for interacting with easytty core capabilities.

    A `Client` wraps device discovery, the rule store, and udevadm control
    behind a stable API intended for third-party tools (TUI/services/scripts).
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        detector: DeviceDetector | None = None,
        store: RuleStore | None = None,
        control: UdevControl | None = None,
    ) -> None:
        self._service = EasyTTYService(
            settings=settings,
            detector=detector,
            store=store,
            control=control,
        )

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    @property
    def runtime_warnings(self) -> tuple[str, ...]:
        return self._service.runtime_warnings

    def list_devices(self) -> list[DeviceRecord]:
        return self._service.list_devices()

    def list_rules(self) -> list[RuleRecord]:
        return self._service.list_rules()

    def rule_status(self) -> list[RuleStatus]:
        return self._service.rule_status()

    def rule_match_type(self, device: DeviceRecord) -> RuleMatchType:
        return self._service.store.get_rule_match_type(device)

    def suggest_name(self, device: DeviceRecord) -> str:
        return self._service.suggest_name(device)

    def create_rule(self, device: DeviceRecord, name: str, *, apply: bool = True) -> OperationResult:
        result = self._service.store.create_rule(device, name)
        if result.success and apply:
            applied = self._service.apply()
            if not applied.success:
                return OperationResult.failure(
                    f"{result.message}, but applying rules failed: {applied.message}"
                )
        return result

    def bind(self, device_hint: str, name: str, *, apply: bool = True) -> OperationResult:
        return self._service.bind(device_hint, name, apply=apply)

    def unbind(self, name: str, *, apply: bool = True) -> OperationResult:
        return self._service.unbind(name, apply=apply)

    def apply(self) -> OperationResult:
        return self._service.apply()
