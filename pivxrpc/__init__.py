"""
pivxrpc - typed, throttled, retrying JSON-RPC client for PIVX nodes.
"""

__version__ = "0.3.0"

from pivxrpc.client import PivxRpcClient
from pivxrpc.config.schema import ClientConfig
from pivxrpc.utils.exceptions import (
    DecodeError,
    PivxRpcError,
    ProtocolError,
    RetriesExhaustedError,
    TransportError,
)

__all__ = [
    "__version__",
    "ClientConfig",
    "DecodeError",
    "PivxRpcClient",
    "PivxRpcError",
    "ProtocolError",
    "RetriesExhaustedError",
    "TransportError",
]
