"""Utility functions for pivxrpc."""

from pivxrpc.utils.exceptions import (
    DecodeError,
    ErrorCategory,
    PivxRpcError,
    ProtocolError,
    RetriesExhaustedError,
    TransportError,
    classify_exception,
    payload_excerpt,
    sanitize_error_message,
)

__all__ = [
    "DecodeError",
    "ErrorCategory",
    "PivxRpcError",
    "ProtocolError",
    "RetriesExhaustedError",
    "TransportError",
    "classify_exception",
    "payload_excerpt",
    "sanitize_error_message",
]
