"""On-disk udev rule directory with an in-memory snapshot cache."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from easytty.core import rule_codec
from easytty.core.config import Settings
from easytty.core.device_match import find_matching_rule, rule_match_type
from easytty.core.errors import PersistenceError, RuleConflictError, RuleValidationError
from easytty.core.model import DeviceRecord, OperationResult, RuleMatchType, RuleRecord
from easytty.core.naming import MAX_SYMLINK_LENGTH, is_rule_safe_value, is_valid_symlink_name
from easytty.writers import RuleFileWriter, select_writer

LOGGER = logging.getLogger(__name__)


class RuleStore:
    """Owner of the easytty rule files in the udev rules directory.

    The cached rules are an immutable snapshot that is replaced wholesale by
    :meth:`refresh` after every successful mutation. Nothing watches the
    directory, so callers refresh before relying on the cache.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        writer: RuleFileWriter | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._writer = writer
        self._clock = clock
        self._rules: tuple[RuleRecord, ...] = ()
        self.refresh()

    @property
    def rules_dir(self) -> Path:
        return self.settings.rules_dir

    @property
    def rules(self) -> tuple[RuleRecord, ...]:
        return self._rules

    def refresh(self) -> tuple[RuleRecord, ...]:
        self._rules = self._load_existing_rules()
        return self._rules

    def get_rules(self) -> list[RuleRecord]:
        return sorted(self._rules, key=lambda r: r.symlink)

    def rule_exists(self, device: DeviceRecord) -> bool:
        return find_matching_rule(self._rules, device) is not None

    def get_rule_match_type(self, device: DeviceRecord) -> RuleMatchType:
        return rule_match_type(self._rules, device)

    def symlink_exists(self, name: str) -> bool:
        return any(rule.symlink == name for rule in self._rules)

    def verify_symlink(self, name: str) -> bool:
        return (self.settings.dev_dir / name).exists()

    def rule_path(self, name: str) -> Path:
        file_name = rule_codec.rule_file_name(
            name,
            priority=self.settings.priority,
            tag=self.settings.rule_tag,
        )
        return self.rules_dir / file_name

    def create_rule(self, device: DeviceRecord, name: str) -> OperationResult:
        try:
            self._check_create(device, name)
        except (RuleValidationError, RuleConflictError) as exc:
            LOGGER.info("Rejected rule '%s': %s", name, exc)
            return OperationResult.failure(str(exc))

        content = rule_codec.render(
            device,
            name,
            created=self._clock() if self._clock else None,
            mode=self.settings.mode,
        )
        path = self.rule_path(name)
        try:
            self._persist(path, content)
        except PersistenceError as exc:
            return OperationResult.failure(str(exc))

        self.refresh()
        LOGGER.info("Created rule %s for %s", path, device.identity_key)
        return OperationResult.ok(f"Rule created successfully: {self.settings.dev_dir / name}")

    def delete_rule(self, name_or_symlink: str) -> OperationResult:
        for rule in self._rules:
            if rule.symlink == name_or_symlink or rule.name == name_or_symlink:
                return self.delete_rule_file(rule.file_path)
        return OperationResult.failure(f"Rule not found: {name_or_symlink}")

    def delete_rule_file(self, file_path: str | Path) -> OperationResult:
        path = Path(file_path)
        if not self._is_managed_file(path):
            return OperationResult.failure(f"Not an easytty rule file in {self.rules_dir}: {path}")
        if not path.exists():
            return OperationResult.failure(f"Rule file does not exist: {path}")
        try:
            self._unlink(path)
        except PersistenceError as exc:
            return OperationResult.failure(str(exc))

        self.refresh()
        LOGGER.info("Deleted rule %s", path)
        return OperationResult.ok("Rule deleted successfully")

    def _check_create(self, device: DeviceRecord, name: str) -> None:
        if not is_valid_symlink_name(name):
            raise RuleValidationError(
                "Invalid symlink name. Use only letters, numbers, underscores, and hyphens. "
                f"Must start with a letter and be at most {MAX_SYMLINK_LENGTH} characters."
            )
        if not device.is_valid:
            raise RuleValidationError("Invalid device information")
        if not is_rule_safe_value(device.serial):
            raise RuleValidationError(
                f"Device serial {device.serial!r} cannot be written into a udev rule"
            )
        if self.symlink_exists(name):
            raise RuleConflictError(f"Symlink name '{name}' is already in use")
        existing = find_matching_rule(self._rules, device)
        if existing is not None:
            raise RuleConflictError(f"A rule for this device already exists as '{existing.symlink}'")

    def _is_managed_file(self, path: Path) -> bool:
        name = path.name
        if self.settings.rule_tag not in name or not name.endswith(rule_codec.RULE_SUFFIX):
            return False
        return path.parent.resolve() == self.rules_dir.resolve()

    def _select_writer(self) -> RuleFileWriter:
        if self._writer is not None:
            return self._writer
        return select_writer(self.rules_dir, self.settings.sudo_command)

    def _persist(self, path: Path, content: str) -> None:
        self._select_writer().write(path, content)
        if not path.is_file():
            raise PersistenceError(f"Failed to create rule file {path} (sudo required)")

    def _unlink(self, path: Path) -> None:
        self._select_writer().remove(path)
        if path.exists():
            raise PersistenceError(f"Failed to delete rule file {path} (sudo required)")

    def _load_existing_rules(self) -> tuple[RuleRecord, ...]:
        if not self.rules_dir.is_dir():
            LOGGER.debug("Rules directory %s does not exist", self.rules_dir)
            return ()

        rules: list[RuleRecord] = []
        for path in sorted(self.rules_dir.iterdir()):
            if not path.is_file():
                continue
            if not self._is_managed_file(path):
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                LOGGER.warning("Could not read rule file %s: %s", path, exc)
                continue
            rule = rule_codec.parse(text, str(path))
            if rule is None:
                LOGGER.warning("Ignoring unparseable rule file %s", path)
                continue
            rules.append(rule)

        return tuple(sorted(rules, key=lambda r: r.symlink))
