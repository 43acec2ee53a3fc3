"""Core data models used across detector, rule store, service, and CLI."""

from __future__ import annotations

import enum
from dataclasses import dataclass

DEFAULT_PRIORITY = 99


@dataclass(frozen=True)
class DeviceRecord:
    dev_path: str
    sys_path: str = ""
    subsystem: str = ""
    vendor: str = ""
    vendor_id: str = ""
    product_id: str = ""
    serial: str = ""
    manufacturer: str = ""
    product: str = ""
    driver: str = ""
    dev_node: str = ""
    bus_num: str = ""
    dev_num: str = ""
    interface_num: str = ""
    port_path: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.dev_path) and bool(self.vendor_id)

    @property
    def identity_key(self) -> str:
        """Key used to decide whether two scans saw the same physical device.

        Devices without a serial fall back to their bus/device numbers, which
        change when the adapter is replugged into another port.
        """
        if self.serial:
            return f"{self.vendor_id}:{self.product_id}:{self.serial}"
        return f"{self.vendor_id}:{self.product_id}:bus{self.bus_num}dev{self.dev_num}"

    @property
    def display_name(self) -> str:
        if self.product:
            return f"{self.product} ({self.dev_node})"
        return self.dev_node


@dataclass(frozen=True)
class RuleRecord:
    name: str
    vendor_id: str
    product_id: str
    serial: str
    symlink: str
    file_path: str
    interface_num: str = ""
    priority: int = DEFAULT_PRIORITY
    is_active: bool = True


class RuleMatchType(enum.Enum):
    """How an existing rule binds to a device."""

    NONE = "none"
    MATCHED_WITHOUT_SERIAL = "matched_without_serial"
    MATCHED_WITH_SERIAL = "matched_with_serial"


@dataclass(frozen=True)
class OperationResult:
    success: bool
    message: str

    @classmethod
    def ok(cls, message: str = "Operation completed successfully") -> OperationResult:
        return cls(success=True, message=message)

    @classmethod
    def failure(cls, message: str) -> OperationResult:
        return cls(success=False, message=message)

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class RuleStatus:
    rule: RuleRecord
    symlink_present: bool
