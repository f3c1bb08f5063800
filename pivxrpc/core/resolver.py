"""
Response resolution: JSON-RPC payload -> typed value.

Every catalog method declares the shape of its ``result``:

- ``Fixed``: one known schema.
- ``Selected``: the schema is chosen by a request parameter (verbosity, verbose
  flag) that the caller sent. Exactly one schema is attempted.
- ``Probed``: no discriminant exists, candidates are tried in a fixed order and
  the first that decodes wins.
- ``Nullable``: JSON ``null`` is a normal "absent" answer, checked before the
  inner shape.

All decoding is pure; failures surface as DecodeError with the method name and a
payload excerpt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from pivxrpc.core.protocol import MethodCall, decode_response, raise_for_error
from pivxrpc.utils.exceptions import DecodeError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ResolvedVariant(Generic[T]):
    """Which candidate shape a payload matched, plus the decoded value."""

    tag: str
    value: T


class Shape(Protocol):
    def resolve(self, call: MethodCall, payload: Any) -> ResolvedVariant[Any]:
        ...


def _summarize(exc: ValidationError, limit: int = 3) -> str:
    parts = []
    for err in exc.errors()[:limit]:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    extra = exc.error_count() - limit
    if extra > 0:
        parts.append(f"(+{extra} more)")
    return "; ".join(parts)


class Fixed:
    """Decode against exactly one schema."""

    def __init__(self, type_: Any, tag: str = "value"):
        self.type_ = type_
        self.tag = tag
        self._adapter: TypeAdapter[Any] | None = None

    @property
    def adapter(self) -> TypeAdapter[Any]:
        # Built lazily so models may reference each other at import time.
        if self._adapter is None:
            self._adapter = TypeAdapter(self.type_)
        return self._adapter

    def resolve(self, call: MethodCall, payload: Any) -> ResolvedVariant[Any]:
        try:
            value = self.adapter.validate_python(payload)
        except ValidationError as exc:
            raise DecodeError(call.method, _summarize(exc), payload) from exc
        return ResolvedVariant(self.tag, value)


class Nullable:
    """``null`` means absent; anything else must match ``inner``."""

    ABSENT = "absent"

    def __init__(self, inner: Shape):
        self.inner = inner

    def resolve(self, call: MethodCall, payload: Any) -> ResolvedVariant[Any]:
        if payload is None:
            return ResolvedVariant(self.ABSENT, None)
        return self.inner.resolve(call, payload)


class Selected:
    """Pick the schema from a parameter the caller sent; never fall back."""

    def __init__(self, position: int, param: str, options: dict[Any, Shape]):
        self.position = position
        self.param = param
        self.options = options

    def select(self, call: MethodCall) -> Shape:
        if self.position >= len(call.params):
            raise ValueError(f"{call.method}: parameter {self.param!r} is required to select a result shape")
        key = call.params[self.position]
        for option_key, shape in self.options.items():
            if type(option_key) is type(key) and option_key == key:
                return shape
        allowed = ", ".join(repr(k) for k in self.options)
        raise ValueError(f"{call.method}: {self.param}={key!r} is not one of {allowed}")

    def resolve(self, call: MethodCall, payload: Any) -> ResolvedVariant[Any]:
        return self.select(call).resolve(call, payload)


@dataclass(frozen=True, slots=True)
class Candidate:
    """One entry of a probe list: a guard on the raw value and the schema to try."""

    tag: str
    type_: Any
    guard: Callable[[Any], bool]


class NoCandidateMatched(ValueError):
    pass


class Probed:
    """Try candidates in order; the first whose guard passes and which decodes wins."""

    def __init__(self, name: str, candidates: list[Candidate]):
        self.name = name
        self.candidates = list(candidates)
        self._adapters: dict[str, TypeAdapter[Any]] = {}

    def _adapter(self, candidate: Candidate) -> TypeAdapter[Any]:
        adapter = self._adapters.get(candidate.tag)
        if adapter is None:
            adapter = TypeAdapter(candidate.type_)
            self._adapters[candidate.tag] = adapter
        return adapter

    def probe(self, payload: Any) -> ResolvedVariant[Any]:
        rejected: list[str] = []
        for candidate in self.candidates:
            if not candidate.guard(payload):
                rejected.append(f"{candidate.tag}: shape does not apply")
                continue
            try:
                value = self._adapter(candidate).validate_python(payload)
            except ValidationError as exc:
                rejected.append(f"{candidate.tag}: {_summarize(exc, limit=1)}")
                continue
            return ResolvedVariant(candidate.tag, value)
        raise NoCandidateMatched(f"no {self.name} shape matched ({'; '.join(rejected)})")

    def validate(self, payload: Any) -> Any:
        """Pydantic-compatible validator returning the bare decoded value."""
        return self.probe(payload).value

    def resolve(self, call: MethodCall, payload: Any) -> ResolvedVariant[Any]:
        try:
            return self.probe(payload)
        except NoCandidateMatched as exc:
            raise DecodeError(call.method, str(exc), payload) from exc


def resolve_response(
    call: MethodCall,
    raw: bytes | str,
    shape: Shape,
    *,
    request_id: Any = None,
) -> Any:
    """Decode a raw JSON-RPC response for ``call`` into the value ``shape`` describes."""
    return resolve_variant(call, raw, shape, request_id=request_id).value


def resolve_variant(
    call: MethodCall,
    raw: bytes | str,
    shape: Shape,
    *,
    request_id: Any = None,
) -> ResolvedVariant[Any]:
    response = decode_response(call.method, raw)
    raise_for_error(call.method, response)
    if request_id is not None and response.id is not None and response.id != request_id:
        raise DecodeError(call.method, f"response id {response.id!r} does not match request id {request_id!r}", raw)
    return shape.resolve(call, response.result)
