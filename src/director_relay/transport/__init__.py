"""
Transport module - outbound HTTP(S) requests with bounded redirect following.
"""

from .request_client import OutboundRequest, OutboundResponse, RequestClient, REDIRECT_STATUSES

__all__ = ["OutboundRequest", "OutboundResponse", "RequestClient", "REDIRECT_STATUSES"]
