"""
Health API endpoint for Director Relay.
"""

from fastapi import APIRouter

from .. import __version__
from ..config import get_config

router = APIRouter()


@router.get("/health")
async def health():
    """Basic health check endpoint."""
    config = get_config()
    return {
        "status": "healthy",
        "service": "director-relay",
        "version": __version__,
        "tls": config.tls_enabled,
        "auth": config.auth_enabled,
        "endpoints": {
            "discover": "/api/discover",
            "login": "/api/auth/login",
            "controllers": "/api/auth/controllers",
            "director_token": "/api/auth/director-token",
            "director": "/api/director/{path}?ip=&token=",
        },
    }
