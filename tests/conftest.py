"""Pytest configuration for Director Relay."""

from typing import Callable, List

import httpx
import pytest

from director_relay.config import RelayConfig, set_config
from director_relay.transport import RequestClient

AUTH_URL = "https://cloud.test/authentication/v1/rest"
CONTROLLER_AUTH_URL = "https://cloud.test/authentication/v1/rest/authorization"
ACCOUNTS_URL = "https://cloud.test/account/v3/rest/accounts"


@pytest.fixture
def config(tmp_path) -> RelayConfig:
    """Config pointing every cloud endpoint at a mock host."""
    cfg = RelayConfig(
        auth_url=AUTH_URL,
        controller_auth_url=CONTROLLER_AUTH_URL,
        accounts_url=ACCOUNTS_URL,
        static_dir=str(tmp_path / "public"),
        discovery_window=0.3,
    )
    set_config(cfg)
    yield cfg
    set_config(RelayConfig())


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to send."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_client():
    """Build a RequestClient backed by a recording mock transport."""

    def _make(handler, max_redirects: int = 5):
        transport = RecordingTransport(handler)
        return RequestClient(timeout=5.0, max_redirects=max_redirects, transport=transport), transport

    return _make
