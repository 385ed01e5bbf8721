"""Configuration loading from the XDG config directory."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from wakectl.core.errors import ConfigError
from wakectl.core.model import BroadcastSettings
from wakectl.core.schema import validate_document

LOGGER = logging.getLogger(__name__)


def config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "wakectl/config.yaml"


def default_registry_path() -> Path:
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_data / "wakectl/devices.yaml"


@dataclass(frozen=True)
class Config:
    broadcast: BroadcastSettings = field(default_factory=BroadcastSettings)
    registry_path: Path = field(default_factory=default_registry_path)


def _read_yaml(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc


def load_config(path: Path | None = None) -> Config:
    """Load configuration, falling back to defaults for anything unset.

    An explicit ``path`` must exist; the default location may be absent.
    """
    explicit = path is not None
    path = path or config_path()
    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file {path} does not exist")
        LOGGER.debug("No config file at %s, using defaults", path)
        return Config()

    doc = _read_yaml(path)
    if doc is None:
        return Config()
    if not isinstance(doc, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at root")
    validate_document(doc, "config.schema.json", source=path, error_cls=ConfigError)

    defaults = BroadcastSettings()
    section = doc.get("broadcast", {})
    broadcast = BroadcastSettings(
        address=section.get("address", defaults.address),
        port=int(section.get("port", defaults.port)),
        attempt_timeout_s=float(section.get("attempt_timeout_s", defaults.attempt_timeout_s)),
        overall_timeout_s=float(section.get("overall_timeout_s", defaults.overall_timeout_s)),
        bind_address=section.get("bind_address", defaults.bind_address),
        ttl=section.get("ttl", defaults.ttl),
    )
    if broadcast.overall_timeout_s < broadcast.attempt_timeout_s:
        raise ConfigError(
            f"broadcast.overall_timeout_s ({broadcast.overall_timeout_s:g}) must not be lower "
            f"than broadcast.attempt_timeout_s ({broadcast.attempt_timeout_s:g}) in {path}"
        )

    registry = doc.get("registry", {})
    registry_path = Path(registry["path"]).expanduser() if "path" in registry else default_registry_path()
    return Config(broadcast=broadcast, registry_path=registry_path)
