from easytty.core.device_match import find_matching_rule, matches, rule_match_type
from easytty.core.model import DeviceRecord, RuleMatchType, RuleRecord


def _rule(vendor_id: str, product_id: str, serial: str, symlink: str = "RS485_1") -> RuleRecord:
    return RuleRecord(
        name=symlink,
        vendor_id=vendor_id,
        product_id=product_id,
        serial=serial,
        symlink=symlink,
        file_path=f"/etc/udev/rules.d/99-easytty-{symlink}.rules",
    )


def _device(vendor_id: str = "0403", product_id: str = "6001", serial: str = "") -> DeviceRecord:
    return DeviceRecord(
        dev_path="/dev/ttyUSB0",
        vendor_id=vendor_id,
        product_id=product_id,
        serial=serial,
        dev_node="ttyUSB0",
        bus_num="1",
        dev_num="4",
    )


def test_serial_less_rule_does_not_match_device_with_serial() -> None:
    rule = _rule("0403", "6001", "")
    assert matches(rule, _device(serial="X")) is False
    assert matches(rule, _device(serial="")) is True


def test_rule_with_serial_requires_equal_serial() -> None:
    rule = _rule("0403", "6001", "A50285BI")
    assert matches(rule, _device(serial="A50285BI")) is True
    assert matches(rule, _device(serial="OTHER")) is False
    assert matches(rule, _device(serial="")) is False


def test_vendor_or_product_mismatch_never_matches() -> None:
    rule = _rule("0403", "6001", "A50285BI")
    assert matches(rule, _device(vendor_id="10c4", serial="A50285BI")) is False
    assert matches(rule, _device(product_id="6015", serial="A50285BI")) is False


def test_rule_match_type_reports_serial_discrimination() -> None:
    rules = [_rule("0403", "6001", "A50285BI", "with_serial"), _rule("1a86", "7523", "", "no_serial")]
    assert rule_match_type(rules, _device(serial="A50285BI")) is RuleMatchType.MATCHED_WITH_SERIAL
    assert rule_match_type(rules, _device("1a86", "7523")) is RuleMatchType.MATCHED_WITHOUT_SERIAL
    assert rule_match_type(rules, _device("2341", "0043")) is RuleMatchType.NONE


def test_find_matching_rule_returns_none_without_match() -> None:
    assert find_matching_rule([], _device()) is None
