"""Stable public API for building tooling on top of wakectl.

This module is the supported integration surface for third-party callers
(menu bar apps, bots, scripts). Avoid importing from private/internal modules
unless intentionally depending on non-stable internals.
"""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path

from wakectl.core.broadcaster import Broadcaster, CompletionHandler
from wakectl.core.config import Config
from wakectl.core.errors import (
    ConfigError,
    DeviceNotFoundError,
    DeviceSelectionError,
    DuplicateDeviceError,
    MacHexError,
    MacLengthError,
    MacParseError,
    RegistryError,
    TransportConnectError,
    TransportError,
    TransportSendError,
    TransportTimeoutError,
    WakectlError,
)
from wakectl.core.model import (
    BroadcastSettings,
    DeliveryOutcome,
    Device,
    MacAddress,
    WakeResult,
)
from wakectl.core.packet import build_packet, parse_mac
from wakectl.core.registry import DeviceRegistry
from wakectl.core.service import WakeService
from wakectl.transports.base import Transport
from wakectl.transports.endpoint import DatagramEndpointTransport
from wakectl.transports.raw_socket import RawSocketTransport

__all__ = [
    "WakectlError",
    "ConfigError",
    "MacParseError",
    "MacLengthError",
    "MacHexError",
    "RegistryError",
    "DuplicateDeviceError",
    "DeviceNotFoundError",
    "DeviceSelectionError",
    "TransportError",
    "TransportConnectError",
    "TransportSendError",
    "TransportTimeoutError",
    "BroadcastSettings",
    "Config",
    "DeliveryOutcome",
    "Device",
    "MacAddress",
    "WakeResult",
    "Broadcaster",
    "DeviceRegistry",
    "Transport",
    "DatagramEndpointTransport",
    "RawSocketTransport",
    "build_packet",
    "parse_mac",
    "Client",
]


class Client:
    """Public client for interacting with wakectl core capabilities.

    A `Client` instance wraps the device registry and the Wake-on-LAN
    broadcaster behind a stable API. Wake calls never raise on delivery
    failure; inspect the returned `DeliveryOutcome` instead.
    """

    def __init__(
        self,
        *,
        config: Config | None = None,
        config_path: Path | None = None,
        registry: DeviceRegistry | None = None,
        broadcaster: Broadcaster | None = None,
    ) -> None:
        self._service = WakeService(
            config=config,
            config_path=config_path,
            registry=registry,
            broadcaster=broadcaster,
        )

    def list_devices(self) -> list[Device]:
        return self._service.list_devices()

    def add_device(self, name: str, mac: str) -> Device:
        return self._service.add_device(name, mac)

    def delete_device(self, name: str) -> Device:
        return self._service.delete_device(name)

    def resolve_target(self, hint: str) -> Device:
        return self._service.resolve_target(hint)

    def wake(self, hint: str) -> WakeResult:
        return self._service.wake(hint)

    def wake_async(
        self,
        hint: str,
        on_complete: CompletionHandler | None = None,
    ) -> tuple[Device, Future[DeliveryOutcome]]:
        return self._service.wake_async(hint, on_complete)

    def send(self, mac: str) -> DeliveryOutcome:
        return self._service.send(mac)
