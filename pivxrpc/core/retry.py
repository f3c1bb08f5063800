"""Constant-delay retry policy for node calls."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Generic, TypeVar
from collections.abc import Awaitable, Callable

from loguru import logger

from pivxrpc.utils.exceptions import (
    PivxRpcError,
    RetriesExhaustedError,
    classify_exception,
    sanitize_error_message,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Retry budget: ``max_retries`` re-attempts spaced by a constant delay."""

    max_retries: int = 10
    delay_seconds: float = 0.5

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {self.delay_seconds}")

    def without_retries(self) -> RetryPolicy:
        return RetryPolicy(max_retries=0, delay_seconds=self.delay_seconds)


@dataclass(slots=True)
class RetryState:
    """Per-call attempt bookkeeping."""

    attempts: int
    remaining: int
    delay_seconds: float

    @classmethod
    def start(cls, policy: RetryPolicy) -> RetryState:
        return cls(attempts=0, remaining=policy.max_retries, delay_seconds=policy.delay_seconds)


@dataclass(frozen=True, slots=True)
class RetryResult(Generic[T]):
    value: T
    attempts: int


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    label: str = "call",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RetryResult[T]:
    """
    Run ``fn`` and re-run it on transient failures.

    Non-transient errors propagate after the attempt that raised them. A
    transient error that outlasts a non-zero budget becomes
    RetriesExhaustedError carrying the attempt count and the last error.

    With ``max_retries == 0`` there is no budget to exhaust: the single attempt
    is the whole call, so its error propagates unchanged. Methods that must
    not be re-sent (state-changing calls, unknown raw calls) run this way and
    callers see the transport or node error itself, never a retry wrapper.
    """
    state = RetryState.start(policy)
    while True:
        state.attempts += 1
        try:
            value = await fn()
        except PivxRpcError as exc:
            _, _, should_retry = classify_exception(exc)
            if not should_retry:
                raise
            if state.remaining <= 0:
                if policy.max_retries == 0:
                    raise
                logger.error(f"{label} failed after {state.attempts} attempts: {sanitize_error_message(exc.message)}")
                raise RetriesExhaustedError(label, state.attempts, exc) from exc
            state.remaining -= 1
            logger.warning(f"{label} attempt {state.attempts} failed ({exc.code}), retrying in {state.delay_seconds}s")
            await sleep(state.delay_seconds)
            continue
        return RetryResult(value=value, attempts=state.attempts)
