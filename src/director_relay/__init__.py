"""
Director Relay - Local gateway between a browser control panel and
Control4-style director controllers.

This service handles:
- SDDP multicast discovery of directors on the LAN
- Cloud login, controller listing and director token minting
- Pass-through proxy for director REST calls
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
