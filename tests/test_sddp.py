"""
Tests for SDDP message building and parsing.
"""

from director_relay.discovery import DiscoveredDevice, build_search_message, parse_sddp_headers


def test_parse_lowercases_keys_and_trims_values():
    headers = parse_sddp_headers("STATUS: ALIVE\r\nHOST: device1\r\n\r\n")

    assert headers == {"status": "ALIVE", "host": "device1"}


def test_parse_splits_on_first_colon_only():
    headers = parse_sddp_headers('NOTIFY ALIVE SDDP/1.0\r\nFrom: "192.168.1.20:1902"\r\nHost: "c4-core"\r\n')

    assert headers == {"from": '"192.168.1.20:1902"', "host": '"c4-core"'}


def test_parse_ignores_non_conforming_lines():
    text = "SDDP/1.0 200 OK\r\n: no key\r\nno colon here\r\n  Type :  c4:control4_ea1  \r\n"

    assert parse_sddp_headers(text) == {"type": "c4:control4_ea1"}


def test_build_search_message():
    message = build_search_message("239.255.255.250", 1902)

    assert message == (
        b"SEARCH * SDDP/1.0\r\n"
        b"Host: 239.255.255.250:1902\r\n"
        b'Man: "sddp:discover"\r\n'
        b"Type: sddp:all\r\n"
        b"\r\n"
    )
    assert parse_sddp_headers(message.decode()) == {
        "host": "239.255.255.250:1902",
        "man": '"sddp:discover"',
        "type": "sddp:all",
    }


def test_discovered_device_wire_shape():
    device = DiscoveredDevice.from_datagram(
        b"NOTIFY ALIVE SDDP/1.0\r\nHost: core\r\nIp: spoofed\r\n\r\n",
        ("192.168.1.20", 1902),
    )

    assert device.headers == {"host": "core", "ip": "spoofed"}
    data = device.to_dict()
    assert data["ip"] == "192.168.1.20"
    assert data["port"] == 1902
    assert data["host"] == "core"
    assert data["raw"].startswith("NOTIFY ALIVE")
    assert data["headers"] == {"host": "core", "ip": "spoofed"}
