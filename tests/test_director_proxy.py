"""
Tests for the director proxy.
"""

import json

import httpx
import pytest

from director_relay.director import DirectorProxy, parse_lenient
from director_relay.errors import UpstreamGatewayError, ValidationError


@pytest.mark.asyncio
async def test_get_forwards_path_with_bearer_and_no_body(make_client):
    client, transport = make_client(lambda request: httpx.Response(200, json=[{"id": 1}]))
    proxy = DirectorProxy(client)

    result = await proxy.forward("GET", "/api/v1/items", "10.0.0.5", "T")

    assert result == [{"id": 1}]
    assert len(transport.requests) == 1
    sent = transport.requests[0]
    assert str(sent.url) == "https://10.0.0.5/api/v1/items"
    assert sent.method == "GET"
    assert sent.headers["Authorization"] == "Bearer T"
    assert sent.content == b""
    assert "Content-Type" not in sent.headers


@pytest.mark.asyncio
async def test_post_serializes_json_body(make_client):
    client, transport = make_client(lambda request: httpx.Response(200, json={"result": 1}))
    proxy = DirectorProxy(client)
    command = {"async": True, "command": "ON", "tParams": {}}

    result = await proxy.forward("POST", "/api/v1/items/42/commands", "10.0.0.5", "T", command)

    assert result == {"result": 1}
    sent = transport.requests[0]
    assert sent.headers["Content-Type"] == "application/json"
    assert json.loads(sent.content) == command
    assert sent.headers["Content-Length"] == str(len(sent.content))


@pytest.mark.asyncio
async def test_path_without_leading_slash_is_normalized(make_client):
    client, transport = make_client(lambda request: httpx.Response(200, json={}))
    proxy = DirectorProxy(client)

    await proxy.forward("GET", "api/v1/agents/ui_configuration", "director.local", "T")

    assert str(transport.requests[0].url) == "https://director.local/api/v1/agents/ui_configuration"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["", "OK"])
async def test_non_json_body_is_wrapped(make_client, body):
    client, _ = make_client(lambda request: httpx.Response(200, text=body))
    proxy = DirectorProxy(client)

    result = await proxy.forward("POST", "/api/v1/items/1/commands", "10.0.0.5", "T", {})

    assert result == {"ok": True, "raw": body}


@pytest.mark.asyncio
@pytest.mark.parametrize("address,token", [("", "T"), ("10.0.0.5", "")])
async def test_missing_address_or_token_is_validation_error(make_client, address, token):
    client, transport = make_client(lambda request: httpx.Response(200, json={}))
    proxy = DirectorProxy(client)

    with pytest.raises(ValidationError) as exc_info:
        await proxy.forward("GET", "/api/v1/items", address, token)

    assert exc_info.value.status_code == 400
    assert transport.requests == []


@pytest.mark.asyncio
async def test_unsupported_method_is_validation_error(make_client):
    client, _ = make_client(lambda request: httpx.Response(200, json={}))

    with pytest.raises(ValidationError):
        await DirectorProxy(client).forward("DELETE", "/api/v1/items", "10.0.0.5", "T")


@pytest.mark.asyncio
async def test_upstream_http_error_is_gateway_error(make_client):
    client, _ = make_client(lambda request: httpx.Response(401, text="token expired"))
    proxy = DirectorProxy(client)

    with pytest.raises(UpstreamGatewayError) as exc_info:
        await proxy.forward("GET", "/api/v1/items", "10.0.0.5", "T")

    assert exc_info.value.status_code == 502
    assert "token expired" in exc_info.value.message


@pytest.mark.asyncio
async def test_unreachable_director_is_gateway_error(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route to host", request=request)

    client, _ = make_client(handler)

    with pytest.raises(UpstreamGatewayError):
        await DirectorProxy(client).forward("GET", "/api/v1/items", "10.0.0.5", "T")


def test_parse_lenient():
    assert parse_lenient('{"a": 1}') == {"a": 1}
    assert parse_lenient("[]") == []
    assert parse_lenient("") == {"ok": True, "raw": ""}


@pytest.mark.asyncio
async def test_corrupt_director_body_is_gateway_error(make_client):
    client, _ = make_client(
        lambda request: httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")
    )

    with pytest.raises(UpstreamGatewayError) as exc_info:
        await DirectorProxy(client).forward("GET", "/api/v1/items", "10.0.0.5", "T")

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_non_ascii_token_is_validation_error(make_client):
    client, transport = make_client(lambda request: httpx.Response(200, json={}))

    with pytest.raises(ValidationError) as exc_info:
        await DirectorProxy(client).forward("GET", "/api/v1/items", "10.0.0.5", "tök")

    assert exc_info.value.status_code == 400
    assert transport.requests == []
