"""HTTP(S) transport for node JSON-RPC calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit, urlunsplit

import httpx

from pivxrpc.utils.exceptions import TransportError


@dataclass(frozen=True, slots=True)
class TransportResponse:
    status_code: int
    content: bytes


@runtime_checkable
class RpcTransport(Protocol):
    """Send one serialized JSON-RPC envelope and return the raw HTTP answer."""

    async def post(self, payload: bytes) -> TransportResponse:
        ...

    async def aclose(self) -> None:
        ...


def redact_url(url: str) -> str:
    """Drop any user:password@ part so the URL is safe to log."""
    parts = urlsplit(url)
    if "@" not in parts.netloc:
        return url
    host = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit((parts.scheme, host, parts.path, parts.query, parts.fragment))


def is_retryable_status(status_code: int) -> bool:
    return status_code >= 500 or status_code in {408, 409, 425, 429}


class HttpxTransport:
    """JSON-RPC POST over a shared, lazily created ``httpx.AsyncClient``."""

    def __init__(
        self,
        url: str,
        *,
        auth: tuple[str, str] | None = None,
        timeout_seconds: float = 1.0,
        max_connections: int = 20,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.auth = auth
        self.timeout_seconds = timeout_seconds
        self.max_connections = max_connections
        self._http_transport = http_transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                auth=httpx.BasicAuth(*self.auth) if self.auth else None,
                timeout=httpx.Timeout(self.timeout_seconds),
                limits=httpx.Limits(
                    max_keepalive_connections=self.max_connections,
                    max_connections=self.max_connections,
                ),
                headers={"Content-Type": "application/json"},
                transport=self._http_transport,
            )
        return self._client

    async def post(self, payload: bytes) -> TransportResponse:
        client = self._get_client()
        target = redact_url(self.url)
        try:
            resp = await client.post(self.url, content=payload)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"node timeout after {self.timeout_seconds}s: {target}",
                code="TRANSPORT_TIMEOUT",
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"node unreachable: {target}: {exc.__class__.__name__}",
                code="TRANSPORT_NETWORK_ERROR",
            ) from exc
        return TransportResponse(status_code=resp.status_code, content=resp.content)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
