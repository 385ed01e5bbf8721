"""Device-to-hint matching logic."""

from __future__ import annotations

from collections.abc import Iterable

from wakectl.core.errors import MacParseError
from wakectl.core.model import Device
from wakectl.core.packet import normalize_mac


def _mac_equals(device_mac: str, hint: str) -> bool:
    try:
        return normalize_mac(hint) == device_mac
    except MacParseError:
        return False


def match_score(device: Device, hint: str) -> int:
    lowered = hint.strip().lower()
    if not lowered:
        return 0
    name = device.name.lower()
    if name == lowered or _mac_equals(device.mac, hint):
        return 3
    if name.startswith(lowered):
        return 2
    if lowered in name:
        return 1
    return 0


def best_devices(devices: Iterable[Device], hint: str) -> list[Device]:
    best: list[Device] = []
    best_score = 0
    for device in devices:
        score = match_score(device, hint)
        if score > best_score:
            best = [device]
            best_score = score
        elif score and score == best_score:
            best.append(device)
    return best
