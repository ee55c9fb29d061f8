"""
Network utilities for Director Relay.
"""

import logging
import socket

logger = logging.getLogger(__name__)


def get_host_ip() -> str:
    """Get the primary LAN address (no packets are sent)."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError as e:
        logger.error(f"Error detecting host IP: {e}")
        return "127.0.0.1"
