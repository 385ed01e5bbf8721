"""YAML-backed registry of named devices."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from wakectl.core.errors import (
    DeviceNotFoundError,
    DuplicateDeviceError,
    MacParseError,
    RegistryError,
)
from wakectl.core.model import Device
from wakectl.core.packet import normalize_mac
from wakectl.core.schema import validate_document

LOGGER = logging.getLogger(__name__)


class StringScalarLoader(yaml.SafeLoader):
    """YAML loader that keeps scalars as strings and rejects duplicate keys.

    Unquoted MACs like ``10:20:30:40:50:59`` would otherwise resolve to
    base-60 integers.
    """


StringScalarLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in mappings if tag == "tag:yaml.org,2002:null"]
    for first_char, mappings in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_mapping(loader: StringScalarLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise RegistryError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


StringScalarLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def _sort_key(device: Device) -> tuple[str, str]:
    return device.name.casefold(), device.name


class DeviceRegistry:
    """Named devices persisted to a YAML file.

    The device name is its identifier. Every mutation rewrites the whole
    file atomically.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def list_devices(self) -> list[Device]:
        return sorted(self._load().values(), key=_sort_key)

    def get_device(self, name: str) -> Device:
        device = self._load().get(name)
        if device is None:
            raise DeviceNotFoundError(f"No device named '{name}'")
        return device

    def add_device(self, name: str, mac: str) -> Device:
        name = name.strip()
        if not name:
            raise RegistryError("Device name must not be empty")
        device = Device(name=name, mac=normalize_mac(mac))

        devices = self._load()
        if name in devices:
            raise DuplicateDeviceError(f"A device named '{name}' already exists")
        devices[name] = device
        self._save(devices)
        LOGGER.info("Registered device %s (%s)", device.name, device.mac)
        return device

    def delete_device(self, name: str) -> Device:
        devices = self._load()
        device = devices.pop(name, None)
        if device is None:
            raise DeviceNotFoundError(f"No device named '{name}'")
        self._save(devices)
        LOGGER.info("Removed device %s", name)
        return device

    def _load(self) -> dict[str, Device]:
        if not self.path.exists():
            return {}
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RegistryError(f"Could not read device registry {self.path}: {exc}") from exc

        try:
            doc = yaml.load(content, Loader=StringScalarLoader)
        except yaml.YAMLError as exc:
            raise RegistryError(f"Invalid YAML in {self.path}: {exc}") from exc
        if doc is None:
            return {}
        validate_document(doc, "devices.schema.json", source=self.path, error_cls=RegistryError)

        devices: dict[str, Device] = {}
        for entry in doc["devices"]:
            name = entry["name"]
            if name in devices:
                raise RegistryError(f"Device '{name}' is listed twice in {self.path}")
            try:
                mac = normalize_mac(entry["mac"])
            except MacParseError as exc:
                raise RegistryError(f"Device '{name}' in {self.path} has an invalid MAC: {exc}") from exc
            devices[name] = Device(name=name, mac=mac)
        return devices

    def _save(self, devices: dict[str, Device]) -> None:
        doc = {
            "devices": [
                {"name": device.name, "mac": device.mac}
                for device in sorted(devices.values(), key=_sort_key)
            ]
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".devices-", suffix=".yaml")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    yaml.safe_dump(doc, handle, sort_keys=False, allow_unicode=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise RegistryError(f"Could not write device registry {self.path}: {exc}") from exc
