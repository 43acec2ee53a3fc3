"""Core detection, rule handling, and udev control."""
