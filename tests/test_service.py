from __future__ import annotations

from pathlib import Path

import pytest

from easytty.core.config import Settings
from easytty.core.errors import DeviceSelectionError
from easytty.core.model import DeviceRecord, OperationResult
from easytty.core.rule_store import RuleStore
from easytty.core.service import EasyTTYService
from easytty.writers import DirectFileWriter


class FakeDetector:
    def __init__(self, devices: list[DeviceRecord]) -> None:
        self.devices = devices

    def scan(self, pattern: str | None = None) -> list[DeviceRecord]:
        return list(self.devices)


class FakeControl:
    def __init__(self, result: OperationResult | None = None) -> None:
        self.result = result if result is not None else OperationResult.ok("Rules reloaded and applied successfully")
        self.calls = 0

    def apply(self) -> OperationResult:
        self.calls += 1
        return self.result


def _device(node: str, serial: str, product: str = "FT232R USB UART") -> DeviceRecord:
    return DeviceRecord(
        dev_path=f"/dev/{node}",
        vendor_id="0403",
        product_id="6001",
        serial=serial,
        product=product,
        dev_node=node,
        bus_num="1",
        dev_num="3",
    )


def _service(tmp_path: Path, devices: list[DeviceRecord], control: FakeControl | None = None) -> EasyTTYService:
    settings = Settings(rules_dir=tmp_path / "rules.d", dev_dir=tmp_path / "dev")
    settings.rules_dir.mkdir()
    settings.dev_dir.mkdir()
    return EasyTTYService(
        settings=settings,
        detector=FakeDetector(devices),
        store=RuleStore(settings, writer=DirectFileWriter()),
        control=control or FakeControl(),
    )


def test_bind_creates_rule_and_applies(tmp_path: Path) -> None:
    control = FakeControl()
    service = _service(tmp_path, [_device("ttyUSB0", "A50285BI")], control)

    result = service.bind("/dev/ttyUSB0", "RS485_1")

    assert result.success, result.message
    assert control.calls == 1
    assert [r.symlink for r in service.list_rules()] == ["RS485_1"]


def test_bind_without_apply(tmp_path: Path) -> None:
    control = FakeControl()
    service = _service(tmp_path, [_device("ttyUSB0", "A50285BI")], control)

    assert service.bind("ttyUSB0", "RS485_1", apply=False).success
    assert control.calls == 0


def test_bind_reports_apply_failure(tmp_path: Path) -> None:
    control = FakeControl(OperationResult.failure("Failed to reload rules (exit status 1): denied"))
    service = _service(tmp_path, [_device("ttyUSB0", "A50285BI")], control)

    result = service.bind("ttyUSB0", "RS485_1")

    assert not result.success
    assert "applying rules failed" in result.message
    assert [r.symlink for r in service.list_rules()] == ["RS485_1"]


def test_bind_rejection_skips_apply(tmp_path: Path) -> None:
    control = FakeControl()
    service = _service(tmp_path, [_device("ttyUSB0", "A50285BI")], control)

    result = service.bind("ttyUSB0", "1abc")

    assert not result.success
    assert control.calls == 0


def test_resolve_device_by_serial_and_product(tmp_path: Path) -> None:
    service = _service(
        tmp_path,
        [_device("ttyUSB0", "A50285BI"), _device("ttyACM0", "", product="Arduino Uno")],
    )
    assert service.resolve_device("a50285bi").dev_path == "/dev/ttyUSB0"
    assert service.resolve_device("arduino").dev_path == "/dev/ttyACM0"


def test_resolve_device_ambiguous(tmp_path: Path) -> None:
    service = _service(tmp_path, [_device("ttyUSB0", "A"), _device("ttyUSB1", "B")])
    with pytest.raises(DeviceSelectionError) as exc:
        service.resolve_device("ft232r")
    assert "Multiple candidate devices" in str(exc.value)


def test_resolve_device_none_connected(tmp_path: Path) -> None:
    service = _service(tmp_path, [])
    with pytest.raises(DeviceSelectionError):
        service.resolve_device("ttyUSB0")


def test_unbind_and_rule_status(tmp_path: Path) -> None:
    service = _service(tmp_path, [_device("ttyUSB0", "A50285BI")])
    assert service.bind("ttyUSB0", "RS485_1").success
    (tmp_path / "dev" / "RS485_1").write_text("", encoding="utf-8")

    statuses = service.rule_status()
    assert len(statuses) == 1
    assert statuses[0].symlink_present

    assert service.unbind("RS485_1").success
    assert service.list_rules() == []


def test_suggest_name(tmp_path: Path) -> None:
    service = _service(tmp_path, [])
    assert service.suggest_name(_device("ttyUSB0", "", product="CP2102 USB to UART")) == "CP2102_USB_to_UART"
