"""
SDDP discovery over UDP multicast.

Each discover() call owns one socket for its whole lifetime:
bind -> join group -> send search -> collect for the window -> close.
"""

import asyncio
import ipaddress
import logging
import socket
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Tuple

from ..config import RelayConfig, get_config
from ..errors import DiscoveryError
from .sddp import DiscoveredDevice, build_search_message

logger = logging.getLogger(__name__)


class _CollectorProtocol(asyncio.DatagramProtocol):
    """Collects datagrams in arrival order until closed."""

    def __init__(self):
        self.devices: List[DiscoveredDevice] = []
        self.closed = False
        self.last_error: Optional[Exception] = None
        self._lost = asyncio.get_running_loop().create_future()

    def connection_lost(self, exc: Optional[Exception]) -> None:
        self.closed = True
        if not self._lost.done():
            self._lost.set_result(None)

    async def wait_closed(self) -> None:
        await self._lost

    def datagram_received(self, data: bytes, addr: Tuple[str, int]) -> None:
        if self.closed:
            return
        device = DiscoveredDevice.from_datagram(data, addr)
        logger.debug(f"SDDP response from {device.ip}:{device.port}")
        self.devices.append(device)

    def error_received(self, exc: Exception) -> None:
        logger.debug(f"SDDP socket error: {exc}")
        self.last_error = exc


class SDDPDiscovery:
    """
    Sends an SDDP search and collects responses for a fixed window.

    Usage:
        discovery = SDDPDiscovery(config)
        devices = await discovery.discover()
        # [DiscoveredDevice(ip="192.168.1.20", port=1902, headers={...}), ...]
    """

    def __init__(self, config: RelayConfig):
        self.address = config.sddp_address
        self.port = config.sddp_port
        self.window = config.discovery_window

    @property
    def is_multicast(self) -> bool:
        try:
            return ipaddress.ip_address(self.address).is_multicast
        except ValueError:
            return False

    def _create_socket(self) -> socket.socket:
        """Create a UDP socket bound to an ephemeral port."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(("", 0))
            if self.is_multicast:
                membership = socket.inet_aton(self.address) + socket.inet_aton("0.0.0.0")
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, membership)
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 2)
            sock.setblocking(False)
        except OSError:
            sock.close()
            raise
        return sock

    @asynccontextmanager
    async def _open(self) -> AsyncIterator[Tuple[asyncio.DatagramTransport, _CollectorProtocol]]:
        loop = asyncio.get_running_loop()
        try:
            sock = self._create_socket()
        except OSError as e:
            raise DiscoveryError(f"Could not open discovery socket: {e}") from e

        transport = None
        protocol = _CollectorProtocol()
        try:
            transport, _ = await loop.create_datagram_endpoint(lambda: protocol, sock=sock)
            yield transport, protocol
        finally:
            protocol.closed = True
            if transport is not None:
                transport.close()
                await protocol.wait_closed()
            else:
                sock.close()

    async def discover(self) -> List[DiscoveredDevice]:
        """Run one discovery window and return every response, in arrival order."""
        loop = asyncio.get_running_loop()
        message = build_search_message(self.address, self.port)

        async with self._open() as (transport, protocol):
            deadline = loop.time() + self.window
            try:
                transport.sendto(message, (self.address, self.port))
            except OSError as e:
                raise DiscoveryError(f"Could not send SDDP search: {e}") from e
            # The transport reports send failures through error_received
            if protocol.last_error is not None:
                raise DiscoveryError(f"Could not send SDDP search: {protocol.last_error}")
            logger.info(f"SDDP search sent to {self.address}:{self.port}")

            await asyncio.sleep(max(0.0, deadline - loop.time()))
            devices = list(protocol.devices)

        logger.info(f"SDDP discovery found {len(devices)} response(s)")
        return devices


# Global discovery instance
_discovery: Optional[SDDPDiscovery] = None


def get_discovery() -> SDDPDiscovery:
    """Get the global discovery instance."""
    global _discovery
    if _discovery is None:
        _discovery = SDDPDiscovery(get_config())
    return _discovery
