"""
Director proxy API endpoints.

    GET  /api/director/{path}?ip=<director>&token=<bearer>
    POST /api/director/{path}?ip=<director>&token=<bearer>   (JSON body)
"""

import json

from fastapi import APIRouter, Depends, Request

from ..director import DirectorProxy, get_director_proxy
from ..errors import ValidationError

router = APIRouter(prefix="/director")


@router.get("/{path:path}")
async def director_get(
    path: str,
    ip: str = "",
    token: str = "",
    proxy: DirectorProxy = Depends(get_director_proxy),
):
    """Proxy a GET to the director REST API."""
    return await proxy.forward("GET", "/" + path, ip, token)


@router.post("/{path:path}")
async def director_post(
    path: str,
    request: Request,
    ip: str = "",
    token: str = "",
    proxy: DirectorProxy = Depends(get_director_proxy),
):
    """Proxy a POST command to the director REST API."""
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else {}
    except ValueError as e:
        raise ValidationError("Request body must be JSON") from e
    return await proxy.forward("POST", "/" + path, ip, token, body)
