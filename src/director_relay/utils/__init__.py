"""
Utility modules for Director Relay.
"""

from .network import get_host_ip

__all__ = ["get_host_ip"]
