import base64
import json

import httpx
import pytest

from pivxrpc.transport.http import HttpxTransport, is_retryable_status, redact_url
from pivxrpc.utils.exceptions import TransportError


@pytest.mark.asyncio
async def test_post_sends_json_with_basic_auth() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b'{"result": 1, "error": null, "id": 1}')

    transport = HttpxTransport(
        "http://127.0.0.1:51473/",
        auth=("alice", "s3cret"),
        http_transport=httpx.MockTransport(handler),
    )
    try:
        response = await transport.post(b'{"method": "getblockcount", "params": [], "id": 1}')
    finally:
        await transport.aclose()

    assert response.status_code == 200
    assert json.loads(response.content)["result"] == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/json"
    expected = "Basic " + base64.b64encode(b"alice:s3cret").decode()
    assert request.headers["authorization"] == expected
    assert json.loads(request.content)["method"] == "getblockcount"


@pytest.mark.asyncio
async def test_http_error_status_is_returned_not_raised() -> None:
    transport = HttpxTransport(
        "http://127.0.0.1:51473/",
        http_transport=httpx.MockTransport(lambda request: httpx.Response(401, content=b"")),
    )
    response = await transport.post(b"{}")
    await transport.aclose()
    assert response.status_code == 401
    assert response.content == b""


@pytest.mark.asyncio
async def test_timeout_maps_to_retryable_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    transport = HttpxTransport(
        "http://user:pw@127.0.0.1:51473/",
        timeout_seconds=0.5,
        http_transport=httpx.MockTransport(handler),
    )
    with pytest.raises(TransportError) as exc_info:
        await transport.post(b"{}")
    await transport.aclose()
    exc = exc_info.value
    assert exc.code == "TRANSPORT_TIMEOUT"
    assert exc.retryable is True
    assert isinstance(exc.__cause__, httpx.ReadTimeout)
    assert "pw" not in exc.message


@pytest.mark.asyncio
async def test_connection_failure_maps_to_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    transport = HttpxTransport("http://127.0.0.1:1/", http_transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError) as exc_info:
        await transport.post(b"{}")
    await transport.aclose()
    assert exc_info.value.code == "TRANSPORT_NETWORK_ERROR"
    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_client_is_created_lazily_and_reset_on_close() -> None:
    transport = HttpxTransport(
        "http://127.0.0.1:51473/",
        http_transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"{}")),
    )
    assert transport._client is None
    await transport.post(b"{}")
    assert transport._client is not None
    await transport.aclose()
    assert transport._client is None


def test_is_retryable_status() -> None:
    assert is_retryable_status(500)
    assert is_retryable_status(503)
    assert is_retryable_status(429)
    assert is_retryable_status(408)
    assert not is_retryable_status(401)
    assert not is_retryable_status(403)
    assert not is_retryable_status(404)


def test_redact_url() -> None:
    assert redact_url("http://u:p@node:51473/wallet/x") == "http://node:51473/wallet/x"
    assert redact_url("http://node:51473/") == "http://node:51473/"
