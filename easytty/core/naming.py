"""Symlink name grammar and USB id normalisation."""

from __future__ import annotations

import re

MAX_SYMLINK_LENGTH = 64

_SYMLINK_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_HEX_PREFIX_RE = re.compile(r"^0[xX]")
_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")
_RULE_UNSAFE_RE = re.compile(r"[\"\\\x00-\x1f\x7f]")


def is_valid_symlink_name(name: str) -> bool:
    if not name or len(name) > MAX_SYMLINK_LENGTH:
        return False
    return _SYMLINK_RE.match(name) is not None


def is_rule_safe_value(value: str) -> bool:
    """Whether ``value`` can sit inside a double-quoted udev match value."""
    return _RULE_UNSAFE_RE.search(value) is None


def format_hex_id(value: str) -> str:
    """Normalize a USB vendor/product id to four lowercase hex digits."""
    normalized = value.strip()
    if len(normalized) > 2:
        normalized = _HEX_PREFIX_RE.sub("", normalized)
    if not normalized:
        return ""
    return normalized.rjust(4, "0").lower()


def sanitize_for_udev(value: str) -> str:
    return _UNSAFE_RE.sub("", value.strip().replace(" ", "_"))


def suggest_symlink_name(product: str, dev_node: str) -> str:
    """Propose a default symlink name from the product string.

    Falls back to the kernel node name when the product string does not yield
    a valid name on its own.
    """
    candidate = sanitize_for_udev(product)[:MAX_SYMLINK_LENGTH]
    if is_valid_symlink_name(candidate):
        return candidate
    return dev_node
