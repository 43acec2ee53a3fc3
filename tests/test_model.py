from easytty.core.model import DeviceRecord, OperationResult


def test_identity_key_uses_serial_when_present() -> None:
    device = DeviceRecord(dev_path="/dev/ttyUSB0", vendor_id="0403", product_id="6001", serial="A50285BI")
    assert device.identity_key == "0403:6001:A50285BI"


def test_identity_key_falls_back_to_bus_topology() -> None:
    device = DeviceRecord(
        dev_path="/dev/ttyUSB1",
        vendor_id="1a86",
        product_id="7523",
        bus_num="3",
        dev_num="12",
    )
    assert device.identity_key == "1a86:7523:bus3dev12"


def test_validity_requires_node_and_vendor() -> None:
    assert DeviceRecord(dev_path="/dev/ttyUSB0", vendor_id="0403").is_valid
    assert not DeviceRecord(dev_path="", vendor_id="0403").is_valid
    assert not DeviceRecord(dev_path="/dev/ttyUSB0", vendor_id="").is_valid


def test_display_name_prefers_product() -> None:
    assert DeviceRecord(dev_path="/dev/ttyUSB0", dev_node="ttyUSB0", product="FT232R").display_name == (
        "FT232R (ttyUSB0)"
    )
    assert DeviceRecord(dev_path="/dev/ttyACM0", dev_node="ttyACM0").display_name == "ttyACM0"


def test_operation_result_truthiness() -> None:
    assert OperationResult.ok()
    assert not OperationResult.failure("nope")
    assert OperationResult.failure("nope").message == "nope"
