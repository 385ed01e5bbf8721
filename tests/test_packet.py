from __future__ import annotations

import pytest

from wakectl.core.errors import MacHexError, MacLengthError, MacParseError
from wakectl.core.model import MacAddress
from wakectl.core.packet import PACKET_SIZE, build_packet, format_mac, normalize_mac, parse_mac

EXPECTED = bytes([0x00, 0x11, 0x22, 0x33, 0x44, 0x55])


@pytest.mark.parametrize(
    "value",
    [
        "00:11:22:33:44:55",
        "00-11-22-33-44-55",
        "0011.2233.4455",
        "001122334455",
        "00-11:22.33 44-55",
        " 00 11 22 33 44 55 ",
    ],
)
def test_parse_mac_accepts_supported_separators(value: str) -> None:
    assert parse_mac(value).octets == EXPECTED


def test_parse_mac_is_case_insensitive() -> None:
    assert parse_mac("aa:bb:cc:dd:ee:ff") == parse_mac("AA:BB:CC:DD:EE:FF")
    assert parse_mac("aA:Bb:cC:dD:eE:Ff").octets == b"\xaa\xbb\xcc\xdd\xee\xff"


@pytest.mark.parametrize("value", ["", "00:11:22:33:44", "00:11:22:33:44:5", "00:11:22:33:44:55:6", ":::"])
def test_parse_mac_rejects_wrong_length(value: str) -> None:
    with pytest.raises(MacLengthError):
        parse_mac(value)


@pytest.mark.parametrize("value", ["GG:11:22:33:44:55", "00:11:22:33:44:5z", "+1:11:22:33:44:55", "0x1122334455"])
def test_parse_mac_rejects_non_hex(value: str) -> None:
    with pytest.raises(MacHexError):
        parse_mac(value)


def test_parse_errors_share_a_base_class() -> None:
    with pytest.raises(MacParseError):
        parse_mac("nonsense")
    with pytest.raises(ValueError):
        parse_mac("GG:11:22:33:44:55")


def test_build_packet_layout() -> None:
    mac = parse_mac("00:11:22:33:44:55")
    packet = build_packet(mac)

    assert len(packet) == PACKET_SIZE == 102
    assert packet[:6] == b"\xff" * 6
    body = packet[6:]
    assert [body[i : i + 6] for i in range(0, 96, 6)] == [EXPECTED] * 16


def test_build_packet_is_deterministic() -> None:
    mac = parse_mac("de:ad:be:ef:00:01")
    assert build_packet(mac) == build_packet(mac)
    assert build_packet(mac) == build_packet(parse_mac("DEADBEEF0001"))


def test_mac_address_rejects_wrong_size() -> None:
    with pytest.raises(ValueError):
        MacAddress(octets=b"\x00\x11")


def test_format_and_normalize() -> None:
    assert format_mac(parse_mac("0011.2233.44aa")) == "00:11:22:33:44:AA"
    assert normalize_mac("00-11-22-33-44-aa") == "00:11:22:33:44:AA"
