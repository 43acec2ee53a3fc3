"""Privilege-aware rule file writers."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from easytty.writers.base import RuleFileWriter
from easytty.writers.direct import DirectFileWriter
from easytty.writers.sudo import SudoFileWriter

__all__ = ["DirectFileWriter", "RuleFileWriter", "SudoFileWriter", "is_root", "select_writer"]


def is_root() -> bool:
    return os.geteuid() == 0


def select_writer(rules_dir: Path, sudo_command: Sequence[str] = ("sudo",)) -> RuleFileWriter:
    """Pick direct I/O when the rules directory is writable, sudo otherwise."""
    if is_root() or (rules_dir.is_dir() and os.access(rules_dir, os.W_OK)):
        return DirectFileWriter()
    return SudoFileWriter(sudo_command)
