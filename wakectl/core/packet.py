"""Magic packet construction from human-entered MAC address strings."""

from __future__ import annotations

import re

from wakectl.core.errors import MacHexError, MacLengthError
from wakectl.core.model import MacAddress

_SEPARATORS_RE = re.compile(r"[:\-.\s]")
_HEX_PAIR_RE = re.compile(r"^[0-9a-fA-F]{2}$")
_SYNC_STREAM = b"\xff" * 6
_REPETITIONS = 16

PACKET_SIZE = len(_SYNC_STREAM) + 6 * _REPETITIONS


def parse_mac(value: str) -> MacAddress:
    """Parse a punctuation-tolerant MAC address string.

    Separators ``:``, ``-``, ``.`` and whitespace may appear anywhere, so
    ``00:11:22:33:44:55``, ``00-11-22-33-44-55`` and ``0011.2233.4455`` all
    parse to the same address.
    """
    cleaned = _SEPARATORS_RE.sub("", value)
    if len(cleaned) != 12:
        raise MacLengthError(
            f"MAC address must contain 12 hex digits, got {len(cleaned)}: {value!r}"
        )

    chunks = [cleaned[i : i + 2] for i in range(0, 12, 2)]
    for chunk in chunks:
        if not _HEX_PAIR_RE.match(chunk):
            raise MacHexError(f"MAC address contains non-hex byte '{chunk}': {value!r}")
    return MacAddress(octets=bytes(int(chunk, 16) for chunk in chunks))


def build_packet(mac: MacAddress) -> bytes:
    return _SYNC_STREAM + mac.octets * _REPETITIONS


def format_mac(mac: MacAddress) -> str:
    return str(mac)


def normalize_mac(value: str) -> str:
    """Parse and re-render a MAC string in canonical ``AA:BB:CC:DD:EE:FF`` form."""
    return format_mac(parse_mac(value))
