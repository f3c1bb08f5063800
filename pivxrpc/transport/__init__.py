from pivxrpc.transport.http import (
    HttpxTransport,
    RpcTransport,
    TransportResponse,
    is_retryable_status,
    redact_url,
)

__all__ = [
    "HttpxTransport",
    "RpcTransport",
    "TransportResponse",
    "is_retryable_status",
    "redact_url",
]
