"""
Cloud module - account login, controller listing and director token minting.
"""

from .schemas import AuthToken, AuthTokenEnvelope, DirectorToken
from .auth_gateway import CloudAuthGateway, get_cloud_gateway

__all__ = [
    "AuthToken", "AuthTokenEnvelope", "DirectorToken",
    "CloudAuthGateway", "get_cloud_gateway",
]
