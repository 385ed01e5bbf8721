"""Raw UDP datagram transport implementation using Python sockets."""

from __future__ import annotations

import logging
import socket

from wakectl.core.errors import (
    TransportConnectError,
    TransportSendError,
    TransportTimeoutError,
)

LOGGER = logging.getLogger(__name__)


class RawSocketTransport:
    name = "socket"

    def transmit(
        self,
        packet: bytes,
        *,
        address: str,
        port: int,
        timeout_s: float = 5.0,
    ) -> str:
        try:
            udp_socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        except OSError as exc:
            raise TransportConnectError(f"Failed to create socket: {exc}") from exc

        try:
            try:
                udp_socket.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            except OSError as exc:
                raise TransportConnectError(f"Failed to set socket option: {exc}") from exc
            udp_socket.settimeout(timeout_s)

            try:
                sent = udp_socket.sendto(packet, (address, port))
            except TimeoutError as exc:
                raise TransportTimeoutError(
                    f"Sending to {address}:{port} timed out after {timeout_s:g}s"
                ) from exc
            except OSError as exc:
                raise TransportSendError(f"Failed to send packet: {exc}") from exc
        finally:
            udp_socket.close()

        LOGGER.debug("Sent %d bytes to %s:%d via raw socket", sent, address, port)
        return "Wake-on-LAN packet sent successfully using socket API"
