"""Persistent device names for USB serial adapters via udev rules."""

__version__ = "1.0.0"
