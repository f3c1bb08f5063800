"""
Exception hierarchy and error classification for pivxrpc.

Provides:
- Error classes for each failure kind a call can end in (transport, protocol,
  decode, exhausted retries)
- Error categorization (retryable vs. fatal)
- Safe error message formatting (no credential leak into logs)
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RETRYABLE = "retryable"
    FATAL = "fatal"
    PROTOCOL = "protocol"
    DECODE = "decode"
    EXHAUSTED = "exhausted"


class PivxRpcError(Exception):
    """Base exception for all pivxrpc errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    @property
    def retryable(self) -> bool:
        return self.category == ErrorCategory.RETRYABLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class TransportError(PivxRpcError):
    """The request never produced a usable JSON-RPC envelope (network, TLS, HTTP)."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "TRANSPORT_ERROR",
        status_code: int | None = None,
        retryable: bool = True,
    ):
        category = ErrorCategory.RETRYABLE if retryable else ErrorCategory.FATAL
        super().__init__(
            message,
            code=code,
            category=category,
            details={"status_code": status_code},
        )
        self.status_code = status_code


class ProtocolError(PivxRpcError):
    """The node understood the request and answered with a JSON-RPC error object."""

    def __init__(self, method: str, rpc_code: int | None, rpc_message: str):
        super().__init__(
            f"{method}: node error {rpc_code}: {rpc_message}",
            code="RPC_ERROR",
            category=ErrorCategory.PROTOCOL,
            details={"method": method, "rpc_code": rpc_code, "rpc_message": rpc_message},
        )
        self.method = method
        self.rpc_code = rpc_code
        self.rpc_message = rpc_message


class DecodeError(PivxRpcError):
    """The response does not match any shape expected for the method."""

    EXCERPT_LIMIT = 200

    def __init__(self, method: str, reason: str, payload: Any = None):
        excerpt = payload_excerpt(payload, self.EXCERPT_LIMIT)
        super().__init__(
            f"{method}: cannot decode response: {reason}",
            code="DECODE_ERROR",
            category=ErrorCategory.DECODE,
            details={"method": method, "reason": reason, "payload_excerpt": excerpt},
        )
        self.method = method
        self.reason = reason
        self.payload_excerpt = excerpt


class RetriesExhaustedError(PivxRpcError):
    """A transient failure persisted through every permitted attempt."""

    def __init__(self, method: str, attempts: int, last_error: PivxRpcError):
        super().__init__(
            f"{method}: gave up after {attempts} attempts: {last_error.message}",
            code="RETRIES_EXHAUSTED",
            category=ErrorCategory.EXHAUSTED,
            details={"method": method, "attempts": attempts, "last_error": last_error.code},
        )
        self.method = method
        self.attempts = attempts
        self.last_error = last_error


def payload_excerpt(payload: Any, limit: int = 200) -> str:
    """Render a short, single-line excerpt of a raw payload for diagnostics."""
    if payload is None:
        return ""
    if isinstance(payload, (bytes, bytearray)):
        text = bytes(payload).decode("utf-8", errors="replace")
    elif isinstance(payload, str):
        text = payload
    else:
        try:
            text = json.dumps(payload, default=str)
        except (TypeError, ValueError):
            text = repr(payload)
    text = text.strip().replace("\n", " ")
    if len(text) > limit:
        return text[:limit] + "..."
    return text


_SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(rpc[_-]?password|password|passwd)[=:]\s*['\"]?[^\s'\"]+['\"]?", re.IGNORECASE), r"\1={r}"),
    (re.compile(r"basic\s+[a-zA-Z0-9+/]+=*", re.IGNORECASE), "Basic {r}"),
    (re.compile(r"(https?://)[^/\s:@]+:[^/\s@]+@", re.IGNORECASE), r"\1{r}@"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials from error messages before they reach a log sink."""
    sanitized = message
    for pattern, template in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(template.replace("{r}", replacement), sanitized)
    return sanitized


def classify_exception(exc: BaseException) -> tuple[str, ErrorCategory, bool]:
    """
    Classify an exception and return (error_code, category, should_retry).

    Only transport-level failures are retryable; anything the node answered
    (protocol errors) or that failed to decode is final.
    """
    if isinstance(exc, PivxRpcError):
        return exc.code, exc.category, exc.category == ErrorCategory.RETRYABLE

    return "INTERNAL_ERROR", ErrorCategory.FATAL, False
