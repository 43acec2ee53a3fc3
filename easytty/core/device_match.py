"""Rule-to-device matching logic."""

from __future__ import annotations

from collections.abc import Iterable

from easytty.core.model import DeviceRecord, RuleMatchType, RuleRecord


def _ids_match(rule: RuleRecord, device: DeviceRecord) -> bool:
    return rule.vendor_id == device.vendor_id and rule.product_id == device.product_id


def _serial_match(rule: RuleRecord, device: DeviceRecord) -> bool:
    # A serial-less rule never binds a device that reports a serial, and vice versa.
    if rule.serial:
        return rule.serial == device.serial
    return not device.serial


def matches(rule: RuleRecord, device: DeviceRecord) -> bool:
    return _ids_match(rule, device) and _serial_match(rule, device)


def find_matching_rule(rules: Iterable[RuleRecord], device: DeviceRecord) -> RuleRecord | None:
    for rule in rules:
        if matches(rule, device):
            return rule
    return None


def rule_match_type(rules: Iterable[RuleRecord], device: DeviceRecord) -> RuleMatchType:
    rule = find_matching_rule(rules, device)
    if rule is None:
        return RuleMatchType.NONE
    if rule.serial:
        return RuleMatchType.MATCHED_WITH_SERIAL
    return RuleMatchType.MATCHED_WITHOUT_SERIAL
