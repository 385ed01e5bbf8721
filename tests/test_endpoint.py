from __future__ import annotations

import asyncio
import socket

import pytest

from wakectl.core.errors import TransportConnectError, TransportTimeoutError
from wakectl.transports import endpoint
from wakectl.transports.endpoint import DatagramEndpointTransport

PACKET = b"\xff" * 6 + bytes.fromhex("001122334455") * 16


def test_delivers_packet_to_loopback_receiver() -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as receiver:
        receiver.bind(("127.0.0.1", 0))
        receiver.settimeout(2.0)
        port = receiver.getsockname()[1]

        detail = DatagramEndpointTransport().transmit(
            PACKET, address="127.0.0.1", port=port, timeout_s=2.0
        )
        data, _ = receiver.recvfrom(1024)

    assert detail == "Wake-on-LAN packet sent successfully"
    assert data == PACKET


def test_unusable_bind_address_is_a_connect_error() -> None:
    transport = DatagramEndpointTransport(bind_address="203.0.113.77")

    with pytest.raises(TransportConnectError, match="Connection failed"):
        transport.transmit(PACKET, address="127.0.0.1", port=9, timeout_s=2.0)


def test_stalled_send_times_out(monkeypatch: pytest.MonkeyPatch) -> None:
    async def never_drains(self: object) -> None:
        await asyncio.sleep(10)

    monkeypatch.setattr(endpoint._BroadcastProtocol, "drained", never_drains)

    with pytest.raises(TransportTimeoutError):
        DatagramEndpointTransport().transmit(PACKET, address="127.0.0.1", port=9, timeout_s=0.1)


def test_error_received_fails_the_send() -> None:
    loop = asyncio.new_event_loop()
    try:
        protocol = endpoint._BroadcastProtocol(loop, ttl=None)
        protocol.error_received(OSError(101, "Network is unreachable"))
        assert isinstance(protocol.done.exception(), OSError)
    finally:
        loop.close()
