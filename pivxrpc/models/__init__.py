"""Typed shapes of PIVX node RPC results and arguments."""

from pivxrpc.models.blockchain import (
    Block,
    BlockchainInfo,
    BlockHeader,
    BlockWithTransactions,
    ChainTip,
    ShieldPoolValue,
    Softfork,
    Upgrade,
)
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
    VIN_PROBE,
    CoinbaseInput,
    ColdUtxo,
    PrevTxOutput,
    RawTxInput,
    ScriptPubKey,
    ScriptSig,
    ShieldOutput,
    ShieldSpend,
    SignedTransaction,
    Transaction,
    TxInput,
    TxOut,
    TxOutput,
    TxOutSetInfo,
)

__all__ = [
    "AddressValidation",
    "Block",
    "BlockchainInfo",
    "BlockHeader",
    "BlockWithTransactions",
    "BudgetProposal",
    "ChainTip",
    "CoinbaseInput",
    "ColdUtxo",
    "MasternodeCount",
    "MasternodeEntry",
    "MempoolEntry",
    "MempoolInfo",
    "NodeInfo",
    "PrevTxOutput",
    "RawTxInput",
    "ScriptPubKey",
    "ScriptSig",
    "ShieldOutput",
    "ShieldPoolValue",
    "ShieldSpend",
    "SignedTransaction",
    "Softfork",
    "StakingStatus",
    "SupplyInfo",
    "Transaction",
    "TxInput",
    "TxOut",
    "TxOutput",
    "TxOutSetInfo",
    "Upgrade",
    "VIN_PROBE",
]
