"""Transport interfaces."""

from __future__ import annotations

from typing import Protocol


class Transport(Protocol):
    name: str

    def transmit(
        self,
        packet: bytes,
        *,
        address: str,
        port: int,
        timeout_s: float = 5.0,
    ) -> str:
        """Broadcast one datagram and return a human-readable detail.

        Failures are raised as ``TransportError`` subclasses.
        """
