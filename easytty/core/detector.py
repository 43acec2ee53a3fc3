"""USB serial device discovery through the udev device tree."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import pyudev

from easytty.core.errors import DeviceEnumerationError
from easytty.core.model import DeviceRecord
from easytty.core.naming import format_hex_id

DEFAULT_TTY_PREFIXES = ("ttyUSB", "ttyACM", "ttyAMA", "ttySC")
LOGGER = logging.getLogger(__name__)


def _sys_attr(device: Any, name: str) -> str:
    try:
        value = device.attributes.asstring(name)
    except (KeyError, UnicodeDecodeError):
        return ""
    return value.strip() if value else ""


def _property(device: Any, name: str) -> str:
    value = device.properties.get(name)
    return value.strip() if value else ""


def _find_parent(device: Any, device_type: str) -> Any | None:
    return device.find_parent("usb", device_type)


def device_record_from_udev(device: Any) -> DeviceRecord | None:
    """Merge a tty node with its USB device and interface ancestors.

    Returns None for nodes without a USB ancestor, which are not USB serial
    adapters.
    """
    usb_device = _find_parent(device, "usb_device")
    if usb_device is None:
        return None
    usb_interface = _find_parent(device, "usb_interface")

    dev_path = device.device_node or ""
    driver = usb_device.driver or ""
    interface_num = ""
    if usb_interface is not None:
        driver = usb_interface.driver or driver
        interface_num = _sys_attr(usb_interface, "bInterfaceNumber")

    return DeviceRecord(
        dev_path=dev_path,
        sys_path=device.sys_path or "",
        subsystem=device.subsystem or "",
        vendor=_property(device, "ID_VENDOR_FROM_DATABASE") or _property(device, "ID_VENDOR"),
        vendor_id=format_hex_id(_sys_attr(usb_device, "idVendor")),
        product_id=format_hex_id(_sys_attr(usb_device, "idProduct")),
        serial=_sys_attr(usb_device, "serial"),
        manufacturer=_sys_attr(usb_device, "manufacturer"),
        product=_sys_attr(usb_device, "product"),
        driver=driver,
        dev_node=dev_path.rsplit("/", 1)[-1],
        bus_num=_sys_attr(usb_device, "busnum"),
        dev_num=_sys_attr(usb_device, "devnum"),
        interface_num=interface_num,
        port_path=usb_device.sys_name or "",
    )


class DeviceDetector:
    def __init__(
        self,
        *,
        context: Any | None = None,
        tty_prefixes: Sequence[str] = DEFAULT_TTY_PREFIXES,
    ) -> None:
        if context is None:
            try:
                context = pyudev.Context()
            except (OSError, ImportError) as exc:
                raise DeviceEnumerationError(f"Failed to initialize udev: {exc}") from exc
        self.context = context
        self.tty_prefixes = tuple(tty_prefixes)

    def _is_serial_node(self, device: Any) -> bool:
        name = device.sys_name or ""
        return bool(device.device_node) and name.startswith(self.tty_prefixes)

    def scan(self, pattern: str | None = None) -> list[DeviceRecord]:
        """Snapshot all USB serial devices, sorted by device node path.

        ``pattern`` keeps only devices whose node path contains it.
        """
        records: list[DeviceRecord] = []
        for device in self.context.list_devices(subsystem="tty"):
            if not self._is_serial_node(device):
                continue
            record = device_record_from_udev(device)
            if record is None:
                LOGGER.debug("Skipping %s: no USB ancestor", device.device_node)
                continue
            if not record.is_valid:
                LOGGER.debug("Skipping %s: missing vendor id", device.device_node)
                continue
            records.append(record)

        records.sort(key=lambda r: r.dev_path)
        if pattern:
            records = [r for r in records if pattern in r.dev_path]
        return records

    def get_device(self, dev_path: str) -> DeviceRecord | None:
        for record in self.scan():
            if record.dev_path == dev_path:
                return record
        return None
