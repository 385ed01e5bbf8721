"""Core data models used across packet, broadcaster, registry, and CLI."""

from __future__ import annotations

from dataclasses import dataclass

BROADCAST_ADDRESS = "255.255.255.255"
WOL_PORT = 9


@dataclass(frozen=True)
class MacAddress:
    octets: bytes

    def __post_init__(self) -> None:
        if len(self.octets) != 6:
            raise ValueError(f"MAC address must be 6 bytes, got {len(self.octets)}")

    def __str__(self) -> str:
        return ":".join(f"{octet:02X}" for octet in self.octets)


@dataclass(frozen=True)
class DeliveryAttempt:
    transport: str
    ok: bool
    detail: str


@dataclass(frozen=True)
class DeliveryOutcome:
    success: bool
    message: str


@dataclass(frozen=True)
class Device:
    name: str
    mac: str


@dataclass(frozen=True)
class BroadcastSettings:
    address: str = BROADCAST_ADDRESS
    port: int = WOL_PORT
    attempt_timeout_s: float = 5.0
    overall_timeout_s: float = 6.0
    bind_address: str | None = None
    ttl: int | None = 3


@dataclass(frozen=True)
class WakeResult:
    device: Device
    outcome: DeliveryOutcome
