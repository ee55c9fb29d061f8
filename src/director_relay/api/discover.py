"""
Discovery API endpoint.
"""

from typing import List

from fastapi import APIRouter, Depends

from ..discovery import SDDPDiscovery, get_discovery

router = APIRouter()


@router.get("/discover")
async def discover(discovery: SDDPDiscovery = Depends(get_discovery)) -> List[dict]:
    """
    Search the LAN for directors.
    Blocks for the discovery window, then returns every response received.
    """
    devices = await discovery.discover()
    return [device.to_dict() for device in devices]
