"""Block and chain-state shapes."""

from __future__ import annotations

from pydantic import Field

from pivxrpc.models.base import Amount, Count, Flag, NodeModel, Text
from pivxrpc.models.transactions import Transaction


class ShieldPoolValue(NodeModel):
    chain_value: Amount = Field(alias="chainValue")
    value_delta: Amount = Field(alias="valueDelta")


class BlockHeader(NodeModel):
    """Verbose ``getblockheader`` result.

    ``acc_checkpoint`` exists only on zerocoin-era nodes and ``shield_pool_value``
    only after the v5 shield upgrade; ``previousblockhash`` is absent on genesis and
    ``nextblockhash`` on the tip.
    """

    hash: Text
    confirmations: Count
    height: Count
    version: Count
    merkleroot: Text
    time: Count
    mediantime: Count
    nonce: Count
    bits: Text
    difficulty: Amount
    chainwork: Text
    acc_checkpoint: Text | None = None
    shield_pool_value: ShieldPoolValue | None = None
    previousblockhash: Text | None = None
    nextblockhash: Text | None = None


class _BlockBody(NodeModel):
    hash: Text
    confirmations: Count
    size: Count
    height: Count
    version: Count
    merkleroot: Text
    time: Count
    mediantime: Count
    nonce: Count
    bits: Text
    difficulty: Amount
    chainwork: Text
    acc_checkpoint: Text | None = None
    finalsaplingroot: Text | None = None
    previousblockhash: Text | None = None
    nextblockhash: Text | None = None
    stakemodifier: Text | None = None
    hashproofofstake: Text | None = None


class Block(_BlockBody):
    """``getblock`` at verbosity 1: block fields plus transaction ids."""

    tx: list[Text]


class BlockWithTransactions(_BlockBody):
    """``getblock`` at verbosity 2: block fields plus decoded transactions, in block order."""

    tx: list[Transaction]

    @property
    def txids(self) -> list[str]:
        return [t.txid for t in self.tx]


class SoftforkReject(NodeModel):
    status: Flag


class Softfork(NodeModel):
    id: Text
    version: Count
    reject: SoftforkReject


class Upgrade(NodeModel):
    activationheight: Count
    status: Text
    info: Text


class BlockchainInfo(NodeModel):
    """``getblockchaininfo`` result.

    ``upgrades`` is keyed by the node's upgrade name ("PoS v2", "v5 shield",
    "PIVX v5.5", ...); the set grows with each release so it is kept as a mapping.
    """

    chain: Text
    blocks: Count
    headers: Count
    bestblockhash: Text
    difficulty: Amount
    verificationprogress: Amount
    chainwork: Text
    shield_pool_value: ShieldPoolValue | None = None
    initial_block_downloading: Flag | None = None
    softforks: list[Softfork] = Field(default_factory=list)  # removed from newer nodes
    upgrades: dict[str, Upgrade] = Field(default_factory=dict)
    warnings: Text = ""

    def upgrade(self, name: str) -> Upgrade | None:
        return self.upgrades.get(name)


class ChainTip(NodeModel):
    height: Count
    hash: Text
    branchlen: Count
    status: Text
