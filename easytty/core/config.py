"""Configuration loading and validation for easytty."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from easytty.core.errors import ConfigLoadError, ConfigValidationError
from easytty.core.model import DEFAULT_PRIORITY

SYSTEM_CONFIG = Path("/etc/easytty/config.yaml")
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class Settings:
    rules_dir: Path = Path("/etc/udev/rules.d")
    dev_dir: Path = Path("/dev")
    rule_tag: str = "easytty"
    priority: int = DEFAULT_PRIORITY
    mode: str = "0666"
    tty_prefixes: tuple[str, ...] = ("ttyUSB", "ttyACM", "ttyAMA", "ttySC")
    sudo_command: tuple[str, ...] = ("sudo",)
    udevadm: str = "udevadm"


@dataclass(frozen=True)
class LoadedConfig:
    settings: Settings
    sources: tuple[Path, ...] = ()
    warnings: tuple[str, ...] = field(default_factory=tuple)


def _load_schema_validator() -> Any:
    schema_text = resources.files("easytty.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _user_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "easytty/config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def _validate(doc: dict[str, Any], source: Path) -> None:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc


def _apply(settings: Settings, doc: dict[str, Any]) -> Settings:
    values: dict[str, Any] = {}
    for key in ("rules_dir", "dev_dir"):
        if key in doc:
            values[key] = Path(doc[key])
    for key in ("rule_tag", "mode", "udevadm"):
        if key in doc:
            values[key] = doc[key]
    if "priority" in doc:
        values["priority"] = int(doc["priority"])
    for key in ("tty_prefixes", "sudo_command"):
        if key in doc:
            values[key] = tuple(doc[key])
    return replace(settings, **values)


def load_config(paths: tuple[Path, ...] | None = None) -> LoadedConfig:
    """Merge the system and user config files over the built-in defaults.

    Later files win key by key. Missing files are skipped.
    """
    candidates = paths if paths is not None else (SYSTEM_CONFIG, _user_config_path())
    settings = Settings()
    sources: list[Path] = []
    warnings: list[str] = []
    seen_keys: dict[str, Path] = {}

    for path in candidates:
        if not path.is_file():
            continue
        doc = _read_yaml(path)
        _validate(doc, path)
        for key in doc:
            if key in seen_keys:
                warning = f"Config key '{key}' from {path} overrides {seen_keys[key]}"
                LOGGER.warning(warning)
                warnings.append(warning)
            seen_keys[key] = path
        settings = _apply(settings, doc)
        sources.append(path)
        LOGGER.debug("Loaded config from %s", path)

    return LoadedConfig(settings=settings, sources=tuple(sources), warnings=tuple(warnings))
