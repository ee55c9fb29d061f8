"""
Discovery module - locates directors on the LAN with SDDP.
"""

from .sddp import DiscoveredDevice, build_search_message, parse_sddp_headers
from .multicast import SDDPDiscovery, get_discovery

__all__ = [
    "DiscoveredDevice", "build_search_message", "parse_sddp_headers",
    "SDDPDiscovery", "get_discovery",
]
