"""Service layer used by CLI and future UI frontends."""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path

from wakectl.core.broadcaster import Broadcaster, CompletionHandler
from wakectl.core.config import Config, load_config
from wakectl.core.device_match import best_devices
from wakectl.core.errors import DeviceSelectionError, MacParseError
from wakectl.core.model import DeliveryOutcome, Device, WakeResult
from wakectl.core.packet import normalize_mac
from wakectl.core.registry import DeviceRegistry


class WakeService:
    def __init__(
        self,
        *,
        config: Config | None = None,
        config_path: Path | None = None,
        registry: DeviceRegistry | None = None,
        broadcaster: Broadcaster | None = None,
    ) -> None:
        self.config = config or load_config(config_path)
        self.registry = registry or DeviceRegistry(self.config.registry_path)
        self.broadcaster = broadcaster or Broadcaster(settings=self.config.broadcast)

    def list_devices(self) -> list[Device]:
        return self.registry.list_devices()

    def add_device(self, name: str, mac: str) -> Device:
        return self.registry.add_device(name, mac)

    def delete_device(self, name: str) -> Device:
        return self.registry.delete_device(name)

    def resolve_target(self, hint: str) -> Device:
        """Resolve a device name, partial name, or MAC to a single device.

        A hint that matches no registered device but is itself a valid MAC
        address resolves to an unnamed device carrying that MAC.
        """
        candidates = best_devices(self.list_devices(), hint)
        if len(candidates) == 1:
            return candidates[0]
        if len(candidates) > 1:
            candidate_desc = ", ".join(f"{d.name} ({d.mac})" for d in candidates)
            raise DeviceSelectionError(
                f"Multiple devices match '{hint}': {candidate_desc}. Use the full device name."
            )

        try:
            mac = normalize_mac(hint)
        except MacParseError:
            raise DeviceSelectionError(
                f"No device found matching '{hint}'. Use 'wakectl list' to see registered devices."
            ) from None
        return Device(name=mac, mac=mac)

    def wake(self, hint: str) -> WakeResult:
        device = self.resolve_target(hint)
        return WakeResult(device=device, outcome=self.broadcaster.send(device.mac))

    def wake_async(
        self,
        hint: str,
        on_complete: CompletionHandler | None = None,
    ) -> tuple[Device, Future[DeliveryOutcome]]:
        device = self.resolve_target(hint)
        return device, self.broadcaster.send_async(device.mac, on_complete)

    def send(self, mac: str) -> DeliveryOutcome:
        return self.broadcaster.send(mac)
