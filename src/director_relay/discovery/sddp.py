"""
SDDP message format.

Requests and responses are line oriented: a start line followed by
``Name: value`` header lines and a blank line.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


def build_search_message(address: str, port: int) -> bytes:
    """Build the multicast search datagram."""
    return (
        "SEARCH * SDDP/1.0\r\n"
        f"Host: {address}:{port}\r\n"
        'Man: "sddp:discover"\r\n'
        "Type: sddp:all\r\n"
        "\r\n"
    ).encode("ascii")


def parse_sddp_headers(text: str) -> Dict[str, str]:
    """
    Parse header lines into a mapping.

    Each line is split on its first colon; the key is trimmed and
    lower-cased, the value trimmed. Lines without a key are skipped.
    """
    headers: Dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        key = key.strip().lower()
        if not sep or not key:
            continue
        headers[key] = value.strip()
    return headers


@dataclass
class DiscoveredDevice:
    """One datagram received during a discovery window."""
    ip: str
    port: int
    raw: str
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_datagram(cls, data: bytes, addr) -> "DiscoveredDevice":
        text = data.decode("utf-8", errors="replace")
        return cls(ip=addr[0], port=addr[1], raw=text, headers=parse_sddp_headers(text))

    def to_dict(self) -> Dict[str, Any]:
        """Flat wire shape: headers first, then ip/port/raw which win on collision."""
        result: Dict[str, Any] = dict(self.headers)
        result.update({
            "ip": self.ip,
            "port": self.port,
            "raw": self.raw,
            "headers": dict(self.headers),
        })
        return result
