"""Wake-on-LAN delivery with a primary and a fallback transport.

Each send operation runs on its own worker thread and each transport attempt
on another. Completion of both is signalled through a fresh
``concurrent.futures.Future``, which can only ever be resolved once, so a
waiting caller is released exactly once whichever way an attempt ends.
Timed-out attempts are abandoned, not killed: their threads are daemons and
their late results are dropped.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from wakectl.core.errors import MacParseError, TransportError
from wakectl.core.model import BroadcastSettings, DeliveryAttempt, DeliveryOutcome
from wakectl.core.packet import build_packet, parse_mac
from wakectl.transports.base import Transport
from wakectl.transports.endpoint import DatagramEndpointTransport
from wakectl.transports.raw_socket import RawSocketTransport

LOGGER = logging.getLogger(__name__)

INVALID_MAC_MESSAGE = "Invalid MAC address format"

CompletionHandler = Callable[[bool, str], None]


def _spawn(target: Callable[..., Any], *args: Any, name: str) -> None:
    threading.Thread(target=target, args=args, name=name, daemon=True).start()


class Broadcaster:
    def __init__(
        self,
        *,
        primary: Transport | None = None,
        secondary: Transport | None = None,
        settings: BroadcastSettings | None = None,
    ) -> None:
        self.settings = settings or BroadcastSettings()
        self.primary = primary or DatagramEndpointTransport(
            bind_address=self.settings.bind_address,
            ttl=self.settings.ttl,
        )
        self.secondary = secondary or RawSocketTransport()

    def send(self, mac: str) -> DeliveryOutcome:
        """Broadcast a magic packet for ``mac`` and block until an outcome is known.

        Never raises; every failure becomes ``DeliveryOutcome(success=False)``.
        Returns within ``settings.overall_timeout_s``.
        """
        done: Future[DeliveryOutcome] = Future()
        _spawn(self._deliver, mac, done, name=f"wakectl-send-{mac}")
        try:
            return done.result(timeout=self.settings.overall_timeout_s)
        except TimeoutError:
            LOGGER.warning(
                "Wake-on-LAN delivery to %s exceeded %gs, abandoning in-flight attempt",
                mac,
                self.settings.overall_timeout_s,
            )
            return DeliveryOutcome(
                success=False,
                message=f"Wake-on-LAN delivery timed out after {self.settings.overall_timeout_s:g}s",
            )

    def send_async(
        self,
        mac: str,
        on_complete: CompletionHandler | None = None,
    ) -> Future[DeliveryOutcome]:
        """Start a send in the background.

        The returned future resolves to the same outcome ``send`` would give;
        ``on_complete(success, message)`` runs once on the worker thread.
        """
        result: Future[DeliveryOutcome] = Future()

        def _run() -> None:
            outcome = self.send(mac)
            result.set_result(outcome)

        if on_complete is not None:
            result.add_done_callback(
                lambda future: on_complete(future.result().success, future.result().message)
            )
        _spawn(_run, name=f"wakectl-async-{mac}")
        return result

    def _deliver(self, mac: str, done: Future[DeliveryOutcome]) -> None:
        try:
            outcome = self._fallback_chain(mac)
        except Exception as exc:
            LOGGER.exception("Unexpected failure while waking %s", mac)
            outcome = DeliveryOutcome(success=False, message=f"Wake-on-LAN delivery failed: {exc}")
        done.set_result(outcome)

    def _fallback_chain(self, mac: str) -> DeliveryOutcome:
        try:
            mac_address = parse_mac(mac)
        except MacParseError as exc:
            LOGGER.info("Rejected MAC address: %s", exc)
            return DeliveryOutcome(success=False, message=INVALID_MAC_MESSAGE)

        packet = build_packet(mac_address)
        primary = self._attempt(self.primary, packet)
        if primary.ok:
            LOGGER.info("Woke %s via %s transport", mac_address, primary.transport)
            return DeliveryOutcome(success=True, message=primary.detail)

        LOGGER.warning(
            "Primary transport '%s' failed for %s (%s), falling back to '%s'",
            primary.transport,
            mac_address,
            primary.detail,
            self.secondary.name,
        )
        secondary = self._attempt(self.secondary, packet)
        if secondary.ok:
            LOGGER.info("Woke %s via %s transport", mac_address, secondary.transport)
        else:
            LOGGER.error(
                "Both transports failed for %s: %s", mac_address, secondary.detail
            )
        return DeliveryOutcome(success=secondary.ok, message=secondary.detail)

    def _attempt(self, transport: Transport, packet: bytes) -> DeliveryAttempt:
        signal: Future[DeliveryAttempt] = Future()
        timeout_s = self.settings.attempt_timeout_s

        def _run() -> None:
            try:
                detail = transport.transmit(
                    packet,
                    address=self.settings.address,
                    port=self.settings.port,
                    timeout_s=timeout_s,
                )
            except TransportError as exc:
                signal.set_result(DeliveryAttempt(transport=transport.name, ok=False, detail=str(exc)))
            except Exception as exc:
                LOGGER.exception("Transport '%s' raised unexpectedly", transport.name)
                signal.set_result(
                    DeliveryAttempt(
                        transport=transport.name,
                        ok=False,
                        detail=f"{transport.name} transport failed: {exc}",
                    )
                )
            else:
                signal.set_result(DeliveryAttempt(transport=transport.name, ok=True, detail=detail))

        _spawn(_run, name=f"wakectl-{transport.name}")
        try:
            return signal.result(timeout=timeout_s)
        except TimeoutError:
            return DeliveryAttempt(
                transport=transport.name,
                ok=False,
                detail=f"Sending Wake-on-LAN packet via {transport.name} timed out after {timeout_s:g}s",
            )
