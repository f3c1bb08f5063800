"""
Async PIVX node client.

``PivxRpcClient`` ties the pieces together: arguments are bound against the
method catalog, each attempt takes one throttle slot for the duration of its
HTTP round trip, transient failures are re-sent under the retry policy, and the
raw response is resolved into the result shape the catalog declares.
"""

from __future__ import annotations

import itertools
from decimal import Decimal
from typing import Any, Sequence

from loguru import logger

from pivxrpc.catalog import METHODS, MethodSpec, get_method, to_wire
from pivxrpc.config.schema import ClientConfig
from pivxrpc.core.protocol import MethodCall, RpcRequest, decode_response, encode_request
from pivxrpc.core.resolver import Fixed, Selected, Shape, resolve_response
from pivxrpc.core.retry import RetryPolicy, with_retry
from pivxrpc.core.throttle import CallThrottle
from pivxrpc.models import (
    AddressValidation,
    Block,
    BlockchainInfo,
    BlockHeader,
    BlockWithTransactions,
    BudgetProposal,
    ChainTip,
    ColdUtxo,
    MasternodeCount,
    MasternodeEntry,
    MempoolEntry,
    MempoolInfo,
    NodeInfo,
    PrevTxOutput,
    RawTxInput,
    SignedTransaction,
    StakingStatus,
    SupplyInfo,
    Transaction,
    TxOut,
    TxOutSetInfo,
)
from pivxrpc.transport.http import HttpxTransport, RpcTransport, is_retryable_status, redact_url
from pivxrpc.utils.exceptions import DecodeError, TransportError

_RAW_RESULT = Fixed(Any, tag="json")


class PivxRpcClient:
    """Typed, throttled, retrying JSON-RPC client for a PIVX node."""

    def __init__(
        self,
        url: str,
        rpc_user: str | None = None,
        rpc_password: str | None = None,
        *,
        max_parallel_requests: int = 3,
        max_retries: int = 10,
        timeout_ms: int = 1000,
        retry_delay_seconds: float = 0.5,
        transport: RpcTransport | None = None,
    ):
        if timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be > 0, got {timeout_ms}")
        self.url = url
        self.throttle = CallThrottle(max_parallel_requests)
        self.retry_policy = RetryPolicy(max_retries=max_retries, delay_seconds=retry_delay_seconds)
        self._owns_transport = transport is None
        if transport is None:
            auth = (rpc_user, rpc_password or "") if rpc_user else None
            transport = HttpxTransport(
                url,
                auth=auth,
                timeout_seconds=timeout_ms / 1000,
                max_connections=max_parallel_requests,
            )
        self.transport = transport
        self._ids = itertools.count(1)

    @classmethod
    def from_config(cls, config: ClientConfig, *, transport: RpcTransport | None = None) -> PivxRpcClient:
        rpc_user, rpc_password = config.auth or (None, None)
        return cls(
            config.url,
            rpc_user,
            rpc_password,
            max_parallel_requests=config.max_parallel_requests,
            max_retries=config.max_retries,
            timeout_ms=config.timeout_ms,
            retry_delay_seconds=config.retry_delay_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> PivxRpcClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP connection pool if this client created it."""
        if self._owns_transport:
            await self.transport.aclose()

    def __repr__(self) -> str:
        return f"PivxRpcClient(url={redact_url(self.url)!r}, max_parallel_requests={self.throttle.limit})"

    # -- generic dispatch -------------------------------------------------

    async def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke a catalog method by name with positional or keyword arguments."""
        spec = get_method(name)
        return await self.execute(spec.bind(*args, **kwargs), spec)

    async def call_raw(self, method: str, params: Sequence[Any] = ()) -> Any:
        """
        Send ``method`` with ``params`` as-is and return the untyped result.

        Unknown methods may change node state, so they are never retried.
        """
        spec = METHODS.get(method)
        retryable = spec.retryable if spec is not None else False
        raw_spec = MethodSpec(method, _RAW_RESULT, retryable=retryable)
        return await self.execute(MethodCall(method, tuple(to_wire(p) for p in params)), raw_spec)

    async def execute(self, call: MethodCall, spec: MethodSpec | None = None) -> Any:
        """Run a bound call under the throttle and retry policy and return its typed result."""
        spec = spec or get_method(call.method)
        policy = self.retry_policy if spec.retryable else self.retry_policy.without_retries()
        # Fails before anything is sent when the selector parameter is missing or unknown.
        shape = spec.result.select(call) if isinstance(spec.result, Selected) else spec.result
        attempts = itertools.count(1)

        async def attempt() -> Any:
            return await self._round_trip(call, shape, attempt=next(attempts))

        outcome = await with_retry(attempt, policy, label=call.method)
        if outcome.attempts > 1:
            logger.info(f"{call.method} succeeded after {outcome.attempts} attempts")
        return outcome.value

    async def _round_trip(self, call: MethodCall, shape: Shape, *, attempt: int = 1) -> Any:
        request = RpcRequest(id=next(self._ids), method=call.method, params=list(call.params))
        payload = encode_request(request)
        async with self.throttle.slot():
            logger.debug(
                f"rpc {call.method} id={request.id} attempt={attempt} in_flight={self.throttle.in_flight}"
            )
            response = await self.transport.post(payload)

        if response.status_code >= 400:
            # The node reports RPC errors with an HTTP error status and a JSON body.
            try:
                decode_response(call.method, response.content)
            except DecodeError as exc:
                raise TransportError(
                    f"{call.method}: HTTP {response.status_code} from {redact_url(self.url)}",
                    code="HTTP_ERROR",
                    status_code=response.status_code,
                    retryable=is_retryable_status(response.status_code),
                ) from exc
        return resolve_response(call, response.content, shape, request_id=request.id)

    # -- blockchain -------------------------------------------------------

    async def getbestblockhash(self) -> str:
        return await self.call("getbestblockhash")

    async def getblock(self, blockhash: str, verbosity: int = 1) -> str | Block | BlockWithTransactions:
        """Block by hash.

        ``verbosity`` 0 returns the serialized hex, 1 a :class:`Block` with
        transaction ids, 2 a :class:`BlockWithTransactions`.
        """
        return await self.call("getblock", blockhash, verbosity)

    async def getblockchaininfo(self) -> BlockchainInfo:
        return await self.call("getblockchaininfo")

    async def getblockcount(self) -> int:
        return await self.call("getblockcount")

    async def getblockhash(self, height: int) -> str:
        return await self.call("getblockhash", height)

    async def getblockheader(self, blockhash: str, verbose: bool = True) -> BlockHeader | str:
        return await self.call("getblockheader", blockhash, verbose)

    async def getchaintips(self) -> list[ChainTip]:
        return await self.call("getchaintips")

    async def getdifficulty(self) -> Decimal:
        return await self.call("getdifficulty")

    async def getsupplyinfo(self, force_update: bool = False) -> SupplyInfo:
        return await self.call("getsupplyinfo", force_update)

    async def gettxout(self, txid: str, n: int, include_mempool: bool = True) -> TxOut | None:
        """Unspent output ``txid:n``; None when it is spent or never existed."""
        return await self.call("gettxout", txid, n, include_mempool)

    async def gettxoutsetinfo(self) -> TxOutSetInfo:
        return await self.call("gettxoutsetinfo")

    # -- mempool ----------------------------------------------------------

    async def getmempoolinfo(self) -> MempoolInfo:
        return await self.call("getmempoolinfo")

    async def getrawmempool(self, verbose: bool = False) -> list[str] | dict[str, MempoolEntry]:
        return await self.call("getrawmempool", verbose)

    # -- transactions -----------------------------------------------------

    async def createrawtransaction(
        self,
        inputs: Sequence[RawTxInput | dict[str, Any]],
        outputs: dict[str, Decimal | str],
        locktime: int | None = None,
    ) -> str:
        return await self.call("createrawtransaction", list(inputs), outputs, locktime)

    async def decoderawtransaction(self, hexstring: str) -> Transaction:
        return await self.call("decoderawtransaction", hexstring)

    async def getrawtransaction(self, txid: str, verbose: bool = True) -> Transaction | str:
        return await self.call("getrawtransaction", txid, verbose)

    async def sendrawtransaction(self, hexstring: str, allowhighfees: bool | None = None) -> str:
        return await self.call("sendrawtransaction", hexstring, allowhighfees)

    async def signrawtransaction(
        self,
        hexstring: str,
        prevtxs: Sequence[PrevTxOutput | dict[str, Any]] | None = None,
        privkeys: Sequence[str] | None = None,
        sighashtype: str | None = None,
    ) -> SignedTransaction:
        return await self.call(
            "signrawtransaction",
            hexstring,
            list(prevtxs) if prevtxs is not None else None,
            list(privkeys) if privkeys is not None else None,
            sighashtype,
        )

    # -- wallet -----------------------------------------------------------

    async def delegatoradd(self, address: str, label: str | None = None) -> bool:
        return await self.call("delegatoradd", address, label)

    async def dumpprivkey(self, address: str) -> str:
        return await self.call("dumpprivkey", address)

    async def getnewaddress(self, label: str | None = None, address_type: str | None = None) -> str:
        return await self.call("getnewaddress", label, address_type)

    async def getstakingstatus(self) -> StakingStatus:
        return await self.call("getstakingstatus")

    async def listcoldutxos(self, not_whitelisted: bool | None = None) -> list[ColdUtxo]:
        return await self.call("listcoldutxos", not_whitelisted)

    async def sendtoaddress(
        self,
        address: str,
        amount: Decimal | str | int | float,
        comment: str | None = None,
        comment_to: str | None = None,
        subtract_fee: bool | None = None,
    ) -> str:
        return await self.call("sendtoaddress", address, amount, comment, comment_to, subtract_fee)

    async def validateaddress(self, address: str) -> AddressValidation:
        return await self.call("validateaddress", address)

    # -- network, masternodes, budget -------------------------------------

    async def generate(self, nblocks: int, maxtries: int | None = None) -> list[str]:
        return await self.call("generate", nblocks, maxtries)

    async def getbudgetinfo(self, name: str | None = None) -> list[BudgetProposal]:
        return await self.call("getbudgetinfo", name)

    async def getconnectioncount(self) -> int:
        return await self.call("getconnectioncount")

    async def getinfo(self) -> NodeInfo:
        return await self.call("getinfo")

    async def getmasternodecount(self) -> MasternodeCount:
        return await self.call("getmasternodecount")

    async def listmasternodes(self, filter: str | None = None) -> list[MasternodeEntry]:
        return await self.call("listmasternodes", filter)
