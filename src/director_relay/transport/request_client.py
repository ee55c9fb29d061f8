"""
Redirect-following request client.

One logical call issues one outbound request, buffers the whole body and
follows at most ``max_redirects`` redirect hops. TLS certificates are not
verified: directors on the LAN present self-signed certificates.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple
from urllib.parse import urljoin, urlsplit

import httpx

from ..errors import HTTPStatusError, RedirectLimitError, TransportError, ValidationError

logger = logging.getLogger(__name__)

REDIRECT_STATUSES = frozenset({301, 302, 307, 308})
DEFAULT_PORTS = {"http": 80, "https": 443}


def _origin(url: str) -> Tuple[str, str, Optional[int]]:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    return scheme, (parts.hostname or "").lower(), parts.port or DEFAULT_PORTS.get(scheme)


@dataclass(frozen=True)
class OutboundRequest:
    """A single outbound request attempt."""
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


@dataclass
class OutboundResponse:
    """A fully buffered response."""
    status_code: int
    headers: Dict[str, str]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class RequestClient:
    """
    Issues outbound requests for the cloud gateway and the director proxy.

    Usage:
        client = RequestClient(timeout=30.0)
        text = await client.fetch_text("https://apis.example.com/rest", method="POST",
                                        headers={"Content-Type": "application/json"},
                                        body=b"{}")
    """

    def __init__(
        self,
        timeout: Optional[float] = 30.0,
        max_redirects: int = 5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.max_redirects = max_redirects
        self._transport = transport

    def _build_client(self) -> httpx.AsyncClient:
        # A fresh client per call: no pooling across logical requests
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=False,
            verify=False,
            transport=self._transport,
        )

    @staticmethod
    def _prepare_headers(request: OutboundRequest) -> httpx.Headers:
        headers = httpx.Headers(request.headers)
        if request.body is not None:
            headers["Content-Length"] = str(len(request.body))
        return headers

    async def _send_once(self, client: httpx.AsyncClient, request: OutboundRequest) -> httpx.Response:
        try:
            outbound = client.build_request(
                request.method,
                request.url,
                headers=self._prepare_headers(request),
                content=request.body,
            )
            return await client.send(outbound)
        except UnicodeEncodeError as e:
            raise ValidationError(f"Header values must be ASCII: {e}") from e
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout on {request.method} {request.url}")
            raise TransportError(f"Timeout connecting to {request.url}", cause=e) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning(f"Transport error on {request.method} {request.url}: {e}")
            raise TransportError(f"Error connecting to {request.url}: {e}", cause=e) from e

    @staticmethod
    def _redirect_headers(current_url: str, next_url: str, headers: Dict[str, str]) -> Dict[str, str]:
        """Drop Authorization when a hop leaves the current origin."""
        if _origin(current_url) == _origin(next_url):
            return headers
        return {k: v for k, v in headers.items() if k.lower() != "authorization"}

    async def send(self, request: OutboundRequest) -> OutboundResponse:
        """
        Send a request, following redirects.

        Returns:
            The terminal response (status < 400).

        Raises:
            HTTPStatusError: terminal status >= 400
            RedirectLimitError: more than ``max_redirects`` hops
            TransportError: connection failure, timeout or unreadable body
            ValidationError: header value that cannot be sent
        """
        redirects = 0
        current = request

        async with self._build_client() as client:
            while True:
                response = await self._send_once(client, current)
                location = response.headers.get("location")

                if response.status_code in REDIRECT_STATUSES and location:
                    redirects += 1
                    if redirects > self.max_redirects:
                        logger.warning(f"Too many redirects starting from {request.url}")
                        raise RedirectLimitError(f"Too many redirects (max {self.max_redirects})")
                    next_url = urljoin(current.url, location)
                    logger.debug(f"Redirect {response.status_code} -> {next_url} (hop {redirects})")
                    current = replace(
                        current,
                        url=next_url,
                        headers=self._redirect_headers(current.url, next_url, current.headers),
                    )
                    continue

                result = OutboundResponse(
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    body=response.content,
                )
                if not result.ok:
                    logger.warning(f"{request.method} {current.url} returned HTTP {result.status_code}")
                    raise HTTPStatusError(result.status_code, result.text)

                logger.debug(f"{request.method} {current.url} -> {result.status_code}")
                return result

    async def fetch_text(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> str:
        """Send a request and return the body text of the terminal response."""
        response = await self.send(
            OutboundRequest(url=url, method=method, headers=dict(headers or {}), body=body)
        )
        return response.text
