"""
Declarative table of node RPC methods.

Each entry names the method, its positional parameters (required or optional,
with the default that is sent when the caller leaves it out), the shape of its
result, and whether a failed attempt may be blindly re-sent. Methods that change
node or wallet state are not retryable: a timed-out broadcast may still have
reached the node.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from pydantic import BaseModel

from pivxrpc.core.protocol import MethodCall
from pivxrpc.core.resolver import Fixed, Nullable, Selected, Shape
from pivxrpc.models.base import Count, Flag, Text
from pivxrpc.models.blockchain import Block, BlockchainInfo, BlockHeader, BlockWithTransactions, ChainTip
from pivxrpc.models.mempool import MempoolEntry, MempoolInfo
from pivxrpc.models.node import (
    AddressValidation,
    BudgetProposal,
    MasternodeCount,
    MasternodeEntry,
    NodeInfo,
    StakingStatus,
    SupplyInfo,
)
from pivxrpc.models.transactions import (
    ColdUtxo,
    SignedTransaction,
    Transaction,
    TxOut,
    TxOutSetInfo,
)


class _Omit:
    def __repr__(self) -> str:
        return "OMIT"


OMIT: Any = _Omit()


@dataclass(frozen=True, slots=True)
class Param:
    """A positional method parameter.

    Optional parameters with ``default=OMIT`` are left off the wire when not
    given; any other default is always sent, so result-shape selectors can read it.
    """

    name: str
    required: bool = True
    default: Any = OMIT
    cast: Callable[[Any], Any] | None = None
    choices: tuple[Any, ...] | None = None


def _optional(name: str, default: Any = OMIT, **kwargs: Any) -> Param:
    return Param(name, required=False, default=default, **kwargs)


def _strict_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a bool, got {type(value).__name__}")
    return value


def _strict_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an int, got {type(value).__name__}")
    return value


def _amount(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise TypeError("expected an amount, got bool")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"invalid amount {value!r}")
    if amount.as_tuple().exponent < -8:
        raise ValueError(f"amount {value!r} has more than 8 decimal places")
    return amount


def _amount_map(value: Any) -> dict[str, Decimal]:
    if not isinstance(value, dict):
        raise TypeError(f"expected a mapping of address to amount, got {type(value).__name__}")
    return {address: _amount(amount) for address, amount in value.items()}


def to_wire(value: Any) -> Any:
    """Turn argument models and containers into JSON-ready values (Decimal kept)."""
    if isinstance(value, BaseModel):
        to_param = getattr(value, "to_param", None)
        return to_param() if callable(to_param) else value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {str(k): to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    return value


@dataclass(frozen=True, slots=True)
class MethodSpec:
    name: str
    result: Shape
    params: tuple[Param, ...] = ()
    retryable: bool = True
    summary: str = ""

    def bind(self, *args: Any, **kwargs: Any) -> MethodCall:
        """Validate arguments against the parameter table and build the MethodCall."""
        if len(args) > len(self.params):
            raise TypeError(f"{self.name}() takes at most {len(self.params)} arguments ({len(args)} given)")
        names = {p.name for p in self.params}
        unknown = sorted(set(kwargs) - names)
        if unknown:
            raise TypeError(f"{self.name}() got unexpected argument(s): {', '.join(unknown)}")

        values: list[Any] = []
        for index, param in enumerate(self.params):
            if index < len(args):
                if param.name in kwargs:
                    raise TypeError(f"{self.name}() got multiple values for argument {param.name!r}")
                value = args[index]
            else:
                value = kwargs.get(param.name, OMIT)
            if value is OMIT or value is None:
                if param.required:
                    raise TypeError(f"{self.name}() missing required argument {param.name!r}")
                value = param.default
            if value is not OMIT and value is not None:
                if param.cast is not None:
                    value = param.cast(value)
                if param.choices is not None and value not in param.choices:
                    allowed = ", ".join(repr(c) for c in param.choices)
                    raise ValueError(f"{self.name}(): {param.name}={value!r} must be one of {allowed}")
                value = to_wire(value)
            values.append(value)

        # Trailing omitted optionals stay off the wire; interior gaps are sent as null.
        while values and values[-1] is OMIT:
            values.pop()
        return MethodCall(self.name, tuple(None if v is OMIT else v for v in values))


def _spec(name: str, result: Shape, *params: Param, retryable: bool = True, summary: str = "") -> MethodSpec:
    return MethodSpec(name=name, result=result, params=tuple(params), retryable=retryable, summary=summary)


_HEX = Fixed(Text, tag="hex")

METHOD_SPECS: tuple[MethodSpec, ...] = (
    _spec(
        "createrawtransaction",
        Fixed(Text),
        Param("inputs"),
        Param("outputs", cast=_amount_map),
        _optional("locktime", cast=_strict_int),
        summary="Build an unsigned transaction spending the given outpoints.",
    ),
    _spec("decoderawtransaction", Fixed(Transaction), Param("hexstring"), summary="Decode a serialized transaction."),
    _spec(
        "delegatoradd",
        Fixed(Flag),
        Param("address"),
        _optional("label"),
        retryable=False,
        summary="Whitelist a cold-staking delegator address.",
    ),
    _spec("dumpprivkey", Fixed(Text), Param("address"), summary="Reveal the private key of a wallet address."),
    _spec(
        "generate",
        Fixed(list[Text]),
        Param("nblocks", cast=_strict_int),
        _optional("maxtries", cast=_strict_int),
        retryable=False,
        summary="Mine blocks (regtest).",
    ),
    _spec("getbestblockhash", Fixed(Text), summary="Hash of the chain tip."),
    _spec(
        "getblock",
        Selected(
            1,
            "verbosity",
            {
                0: _HEX,
                1: Fixed(Block, tag="block"),
                2: Fixed(BlockWithTransactions, tag="block_with_transactions"),
            },
        ),
        Param("blockhash"),
        _optional("verbosity", 1, cast=_strict_int, choices=(0, 1, 2)),
        summary="Block by hash: 0 = serialized hex, 1 = object with txids, 2 = object with transactions.",
    ),
    _spec("getblockchaininfo", Fixed(BlockchainInfo), summary="Chain state summary."),
    _spec("getblockcount", Fixed(Count), summary="Height of the chain tip."),
    _spec("getblockhash", Fixed(Text), Param("height", cast=_strict_int), summary="Block hash at a height."),
    _spec(
        "getblockheader",
        Selected(1, "verbose", {True: Fixed(BlockHeader, tag="header"), False: _HEX}),
        Param("blockhash"),
        _optional("verbose", True, cast=_strict_bool),
        summary="Block header by hash.",
    ),
    _spec(
        "getbudgetinfo",
        Fixed(list[BudgetProposal]),
        _optional("name"),
        summary="Budget proposals, optionally filtered by name.",
    ),
    _spec("getchaintips", Fixed(list[ChainTip]), summary="Known chain tips including forks."),
    _spec("getconnectioncount", Fixed(Count), summary="Number of peer connections."),
    _spec("getdifficulty", Fixed(Decimal), summary="Current proof-of-stake difficulty."),
    _spec("getinfo", Fixed(NodeInfo), summary="Legacy node/wallet summary."),
    _spec("getmasternodecount", Fixed(MasternodeCount), summary="Masternode totals by state and network."),
    _spec("getmempoolinfo", Fixed(MempoolInfo), summary="Mempool size and fee floor."),
    _spec(
        "getnewaddress",
        Fixed(Text),
        _optional("label"),
        _optional("address_type"),
        retryable=False,
        summary="Generate a new wallet address.",
    ),
    _spec(
        "getrawmempool",
        Selected(
            0,
            "verbose",
            {
                False: Fixed(list[Text], tag="txids"),
                True: Fixed(dict[str, MempoolEntry], tag="entries"),
            },
        ),
        _optional("verbose", False, cast=_strict_bool),
        summary="Mempool contents: txids, or txid -> entry when verbose.",
    ),
    _spec(
        "getrawtransaction",
        Selected(1, "verbose", {True: Fixed(Transaction, tag="transaction"), False: _HEX}),
        Param("txid"),
        _optional("verbose", True, cast=_strict_bool),
        summary="Transaction by id.",
    ),
    _spec("getstakingstatus", Fixed(StakingStatus), summary="Wallet staking readiness."),
    _spec(
        "getsupplyinfo",
        Fixed(SupplyInfo),
        _optional("force_update", False, cast=_strict_bool),
        summary="Transparent, shielded and total money supply.",
    ),
    _spec(
        "gettxout",
        Nullable(Fixed(TxOut, tag="present")),
        Param("txid"),
        Param("n", cast=_strict_int),
        _optional("include_mempool", True, cast=_strict_bool),
        summary="Unspent output, or None when spent or unknown.",
    ),
    _spec("gettxoutsetinfo", Fixed(TxOutSetInfo), summary="UTXO set statistics."),
    _spec(
        "listcoldutxos",
        Fixed(list[ColdUtxo]),
        _optional("not_whitelisted", cast=_strict_bool),
        summary="Cold-staking UTXOs delegated to this wallet.",
    ),
    _spec(
        "listmasternodes",
        Fixed(list[MasternodeEntry]),
        _optional("filter"),
        summary="Masternode list, optionally filtered.",
    ),
    _spec(
        "sendrawtransaction",
        Fixed(Text),
        Param("hexstring"),
        _optional("allowhighfees", cast=_strict_bool),
        retryable=False,
        summary="Broadcast a signed transaction.",
    ),
    _spec(
        "sendtoaddress",
        Fixed(Text),
        Param("address"),
        Param("amount", cast=_amount),
        _optional("comment"),
        _optional("comment_to"),
        _optional("subtract_fee", cast=_strict_bool),
        retryable=False,
        summary="Send an amount from the wallet.",
    ),
    _spec(
        "signrawtransaction",
        Fixed(SignedTransaction),
        Param("hexstring"),
        _optional("prevtxs"),
        _optional("privkeys"),
        _optional("sighashtype"),
        summary="Sign a raw transaction with wallet or supplied keys.",
    ),
    _spec("validateaddress", Fixed(AddressValidation), Param("address"), summary="Validate an address."),
)

METHODS: dict[str, MethodSpec] = {spec.name: spec for spec in METHOD_SPECS}


def get_method(name: str) -> MethodSpec:
    try:
        return METHODS[name]
    except KeyError:
        raise KeyError(f"unknown RPC method {name!r}") from None


def register_method(spec: MethodSpec, *, replace: bool = False) -> None:
    """Add a method to the table (e.g. one a newer node exposes)."""
    if spec.name in METHODS and not replace:
        raise ValueError(f"RPC method {spec.name!r} is already registered")
    METHODS[spec.name] = spec
