"""Rendering and parsing of easytty udev rule files."""

from __future__ import annotations

import re
from datetime import datetime

from easytty.core.errors import RuleValidationError
from easytty.core.model import DEFAULT_PRIORITY, DeviceRecord, RuleRecord
from easytty.core.naming import is_rule_safe_value

DEFAULT_TAG = "easytty"
DEFAULT_MODE = "0666"
RULE_SUFFIX = ".rules"

_DEVICE_MARKER = "# Device:"
_VENDOR_RE = re.compile(r'ATTRS\{idVendor\}=="([0-9a-fA-F]+)"')
_PRODUCT_RE = re.compile(r'ATTRS\{idProduct\}=="([0-9a-fA-F]+)"')
_SERIAL_RE = re.compile(r'ATTRS\{serial\}=="([^"]+)"')
_INTERFACE_RE = re.compile(r'ATTRS\{bInterfaceNumber\}=="([0-9a-fA-F]+)"')
_SYMLINK_RE = re.compile(r'SYMLINK\+="([^"]+)"')
_PRIORITY_RE = re.compile(r"^(\d+)-")


def render_rule_line(device: DeviceRecord, name: str, *, mode: str = DEFAULT_MODE) -> str:
    if not is_rule_safe_value(device.serial):
        raise RuleValidationError(f"Device serial {device.serial!r} cannot be written into a udev rule")
    parts = [
        'SUBSYSTEM=="tty"',
        f'ATTRS{{idVendor}}=="{device.vendor_id}"',
        f'ATTRS{{idProduct}}=="{device.product_id}"',
    ]
    if device.serial:
        parts.append(f'ATTRS{{serial}}=="{device.serial}"')
    parts.append(f'SYMLINK+="{name}"')
    parts.append(f'MODE="{mode}"')
    return ", ".join(parts)


def render(
    device: DeviceRecord,
    name: str,
    *,
    created: datetime | None = None,
    mode: str = DEFAULT_MODE,
) -> str:
    """Render the full rule file for ``device`` published as ``/dev/<name>``."""
    timestamp = (created or datetime.now().astimezone()).isoformat(timespec="seconds")
    lines = [
        "# EasyTTY auto-generated rule",
        f"{_DEVICE_MARKER} {device.display_name}",
        f"# Vendor: {device.manufacturer} ({device.vendor_id})",
        f"# Product: {device.product} ({device.product_id})",
    ]
    if device.serial:
        lines.append(f"# Serial: {device.serial}")
    lines.append(f"# Original: {device.dev_path}")
    lines.append(f"# Created: {timestamp}")
    lines.append("")
    lines.append(render_rule_line(device, name, mode=mode))
    return "\n".join(lines) + "\n"


def priority_from_file_name(file_name: str) -> int:
    match = _PRIORITY_RE.match(file_name)
    if not match:
        return DEFAULT_PRIORITY
    return int(match.group(1))


def rule_file_name(name: str, *, priority: int = DEFAULT_PRIORITY, tag: str = DEFAULT_TAG) -> str:
    return f"{priority}-{tag}-{name}{RULE_SUFFIX}"


def _search(pattern: re.Pattern[str], line: str, current: str) -> str:
    match = pattern.search(line)
    return match.group(1) if match else current


def parse(text: str, file_path: str = "") -> RuleRecord | None:
    """Parse rule file text into a RuleRecord.

    Returns None when the vendor id or the symlink target is missing. Fields
    are extracted independently, so attribute order and extra comments do not
    matter.
    """
    name = ""
    vendor_id = ""
    product_id = ""
    serial = ""
    interface_num = ""
    symlink = ""

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if _DEVICE_MARKER in line:
            name = line.split(":", 1)[1].strip()
        if not line or line.startswith("#"):
            continue

        vendor_id = _search(_VENDOR_RE, line, vendor_id)
        product_id = _search(_PRODUCT_RE, line, product_id)
        serial = _search(_SERIAL_RE, line, serial)
        interface_num = _search(_INTERFACE_RE, line, interface_num)
        symlink = _search(_SYMLINK_RE, line, symlink)

    if not vendor_id or not symlink:
        return None

    file_name = file_path.rsplit("/", 1)[-1]
    return RuleRecord(
        name=name or symlink,
        vendor_id=vendor_id,
        product_id=product_id,
        serial=serial,
        symlink=symlink,
        file_path=file_path,
        interface_num=interface_num,
        priority=priority_from_file_name(file_name),
        is_active=True,
    )
