"""JSON-RPC 1.0 envelope models and codecs used by the node client."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pivxrpc.utils.exceptions import DecodeError, ProtocolError


@dataclass(frozen=True, slots=True)
class MethodCall:
    """One invocation of a node RPC method: name plus ordered positional params."""

    method: str
    params: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class RpcRequest:
    """JSON-RPC request frame."""

    id: int
    method: str
    params: list[Any] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RpcResponse:
    """JSON-RPC response frame after envelope validation."""

    id: Any
    result: Any = None
    error: dict[str, Any] | None = None


def safe_dict(value: Any) -> dict[str, Any]:
    """Return the value when dict-like, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        # Bound amounts carry at most 8 decimal places (see catalog._amount).
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_request(request: RpcRequest) -> bytes:
    """Encode a request frame into the JSON-RPC 1.0 wire form."""
    payload = {"method": request.method, "params": list(request.params), "id": request.id}
    return json.dumps(payload, default=_json_default, ensure_ascii=False).encode("utf-8")


def parse_json(method: str, raw: bytes | str) -> Any:
    """Parse raw bytes keeping every JSON fraction as an exact ``Decimal``."""
    try:
        return json.loads(raw, parse_float=Decimal)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(method, f"response is not valid JSON ({exc})", raw) from exc


def decode_response(method: str, raw: bytes | str) -> RpcResponse:
    """Decode and validate a JSON-RPC response envelope."""
    body = parse_json(method, raw)
    if not isinstance(body, dict):
        raise DecodeError(method, "response envelope is not a JSON object", raw)
    if "result" not in body and "error" not in body:
        raise DecodeError(method, "response envelope has neither 'result' nor 'error'", raw)
    error = body.get("error")
    if error is not None and not isinstance(error, dict):
        error = {"code": None, "message": str(error)}
    return RpcResponse(id=body.get("id"), result=body.get("result"), error=error)


def raise_for_error(method: str, response: RpcResponse) -> None:
    """Raise ProtocolError when the envelope carries a non-null error object."""
    if response.error is None:
        return
    err = safe_dict(response.error)
    code = err.get("code")
    rpc_code = int(code) if isinstance(code, (int, Decimal)) and not isinstance(code, bool) else None
    message = str(err.get("message") or "rpc failed")
    raise ProtocolError(method, rpc_code, message)
