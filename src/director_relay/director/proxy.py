"""
Director proxy - ALL director REST calls from the browser go through here.

The browser cannot talk to a director directly (self-signed certificate,
no CORS), so the relay forwards the call and attaches the bearer token.
"""

import json
import logging
from typing import Any, Dict, Optional

from ..config import get_config
from ..errors import RelayError, UpstreamGatewayError, ValidationError
from ..transport import RequestClient

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST")


def parse_lenient(text: str) -> Any:
    """Parse a director body as JSON, wrapping anything else as ``{ok, raw}``."""
    try:
        return json.loads(text)
    except ValueError:
        # Some commands return an empty or plain-text body
        return {"ok": True, "raw": text}


class DirectorProxy:
    """
    Forwards arbitrary REST paths to a director device.

    Usage:
        proxy = DirectorProxy(RequestClient())
        items = await proxy.forward("GET", "/api/v1/items", "10.0.0.5", director_token)
    """

    def __init__(self, client: RequestClient):
        self.client = client

    async def forward(
        self,
        method: str,
        path: str,
        device_address: str,
        token: str,
        json_data: Optional[Any] = None,
    ) -> Any:
        """
        Proxy a request to a director.

        Args:
            method: GET or POST
            path: REST path on the director (e.g., "/api/v1/items")
            device_address: director IP or host name
            token: director bearer token
            json_data: JSON body for POST requests

        Returns:
            Parsed JSON response, or ``{"ok": True, "raw": text}`` for non-JSON bodies
        """
        if not device_address or not token:
            raise ValidationError("ip and token query params required")

        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValidationError(f"Method {method} not supported")

        if not path.startswith("/"):
            path = "/" + path
        url = f"https://{device_address}{path}"

        headers: Dict[str, str] = {"Authorization": f"Bearer {token}"}
        body = None
        if method == "POST":
            headers["Content-Type"] = "application/json"
            body = json.dumps(json_data if json_data is not None else {}).encode("utf-8")

        try:
            text = await self.client.fetch_text(url, method=method, headers=headers, body=body)
        except ValidationError:
            raise
        except RelayError as e:
            logger.error(f"Error proxying {method} {path} to director {device_address}: {e.message}")
            raise UpstreamGatewayError(e.message, cause=e) from e

        return parse_lenient(text)


# Global proxy instance
_proxy: Optional[DirectorProxy] = None


def get_director_proxy() -> DirectorProxy:
    """Get the global director proxy instance."""
    global _proxy
    if _proxy is None:
        config = get_config()
        _proxy = DirectorProxy(
            RequestClient(timeout=config.request_timeout, max_redirects=config.max_redirects)
        )
    return _proxy
