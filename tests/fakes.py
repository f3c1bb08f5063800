"""In-process stand-ins for the node used across tests."""

from __future__ import annotations

import asyncio
import json
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pivxrpc.transport.http import TransportResponse


_DECIMAL_MARK = "__decimal__"


def dumps(value: Any) -> str:
    """JSON text with every Decimal written as a bare number, digit for digit."""
    text = json.dumps(value, default=lambda v: f"{_DECIMAL_MARK}{v}" if isinstance(v, Decimal) else str(v))
    return re.sub(rf'"{_DECIMAL_MARK}([^"]+)"', r"\1", text)


@dataclass(frozen=True)
class RawResult:
    """A result written as literal JSON text (keeps exact decimal spelling)."""

    text: str


@dataclass(frozen=True)
class RpcErrorReply:
    code: int
    message: str
    status: int = 500


class FakeTransport:
    """Answers queued replies in order and records every request it receives.

    A reply may be a plain JSON-able result, a ``RawResult``, an ``RpcErrorReply``,
    a ready ``TransportResponse`` or an exception to raise.
    """

    def __init__(self, *replies: Any, delay: float = 0.0):
        self.replies = list(replies)
        self.requests: list[dict[str, Any]] = []
        self.delay = delay
        self.closed = False
        self.in_flight = 0
        self.peak = 0

    async def post(self, payload: bytes) -> TransportResponse:
        request = json.loads(payload)
        self.requests.append(request)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if not self.replies:
                raise AssertionError(f"unexpected request {request['method']}")
            reply = self.replies.pop(0)
        finally:
            self.in_flight -= 1
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, TransportResponse):
            return reply
        if isinstance(reply, RpcErrorReply):
            body = {"result": None, "error": {"code": reply.code, "message": reply.message}, "id": request["id"]}
            return TransportResponse(reply.status, json.dumps(body).encode())
        result_text = reply.text if isinstance(reply, RawResult) else dumps(reply)
        body_text = f'{{"result": {result_text}, "error": null, "id": {request["id"]}}}'
        return TransportResponse(200, body_text.encode())

    async def aclose(self) -> None:
        self.closed = True

    @property
    def methods(self) -> list[str]:
        return [r["method"] for r in self.requests]


class RecordingSleep:
    """Replacement for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
