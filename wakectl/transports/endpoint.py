"""Event-driven broadcast transport built on an asyncio datagram endpoint."""

from __future__ import annotations

import asyncio
import logging
import socket

from wakectl.core.errors import (
    TransportConnectError,
    TransportError,
    TransportSendError,
    TransportTimeoutError,
)

LOGGER = logging.getLogger(__name__)


class _BroadcastProtocol(asyncio.DatagramProtocol):
    def __init__(self, loop: asyncio.AbstractEventLoop, ttl: int | None) -> None:
        self._ttl = ttl
        self.ready: asyncio.Future[None] = loop.create_future()
        self.done: asyncio.Future[None] = loop.create_future()
        self.transport: asyncio.DatagramTransport | None = None

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        self.transport = transport  # type: ignore[assignment]
        if self._ttl is not None:
            sock = transport.get_extra_info("socket")
            try:
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_TTL, self._ttl)
            except OSError as exc:
                self.ready.set_exception(exc)
                return
        self.ready.set_result(None)

    def error_received(self, exc: Exception) -> None:
        if not self.done.done():
            self.done.set_exception(exc)

    def connection_lost(self, exc: Exception | None) -> None:
        failure = exc or ConnectionAbortedError("endpoint closed before the packet was sent")
        for future in (self.ready, self.done):
            if not future.done():
                future.set_exception(failure)

    async def drained(self) -> None:
        assert self.transport is not None
        while not self.done.done() and self.transport.get_write_buffer_size() > 0:
            await asyncio.sleep(0.01)
        if not self.done.done():
            self.done.set_result(None)
        await self.done


class DatagramEndpointTransport:
    """Broadcast through an asyncio endpoint, sending only once it reports ready.

    ``bind_address`` pins the endpoint to the adapter owning that local IPv4
    address; left unset, the OS routing table picks the interface.
    """

    name = "endpoint"

    def __init__(self, *, bind_address: str | None = None, ttl: int | None = 3) -> None:
        self.bind_address = bind_address
        self.ttl = ttl

    def transmit(
        self,
        packet: bytes,
        *,
        address: str,
        port: int,
        timeout_s: float = 5.0,
    ) -> str:
        try:
            return asyncio.run(self._transmit(packet, address, port, timeout_s))
        except TransportError:
            raise
        except Exception as exc:
            raise TransportSendError(f"Datagram endpoint send failed: {exc}") from exc

    async def _transmit(self, packet: bytes, address: str, port: int, timeout_s: float) -> str:
        loop = asyncio.get_running_loop()
        protocol = _BroadcastProtocol(loop, self.ttl)
        local_addr = (self.bind_address, 0) if self.bind_address else None

        try:
            async with asyncio.timeout(timeout_s):
                try:
                    transport, _ = await loop.create_datagram_endpoint(
                        lambda: protocol,
                        remote_addr=(address, port),
                        local_addr=local_addr,
                        family=socket.AF_INET,
                        allow_broadcast=True,
                    )
                except OSError as exc:
                    raise TransportConnectError(f"Connection failed: {exc}") from exc

                try:
                    try:
                        await protocol.ready
                    except OSError as exc:
                        raise TransportConnectError(f"Connection preparation failed: {exc}") from exc

                    LOGGER.debug("Endpoint ready, sending %d bytes to %s:%d", len(packet), address, port)
                    transport.sendto(packet)
                    try:
                        await protocol.drained()
                    except OSError as exc:
                        raise TransportSendError(f"Failed to send packet: {exc}") from exc
                finally:
                    transport.close()
        except TimeoutError as exc:
            raise TransportTimeoutError(
                f"Datagram endpoint did not complete within {timeout_s:g}s"
            ) from exc

        return "Wake-on-LAN packet sent successfully"
