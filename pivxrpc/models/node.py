"""Node, wallet-staking, masternode and budget shapes."""

from __future__ import annotations

from pydantic import Field

from pivxrpc.models.base import Amount, Count, Flag, NodeModel, Text


class NodeInfo(NodeModel):
    """``getinfo`` result. Wallet fields are absent when the node runs with ``-disablewallet``."""

    version: Count
    protocolversion: Count
    services: Text | None = None
    walletversion: Count | None = None
    balance: Amount | None = None
    staking_status: Text | None = Field(default=None, alias="staking status")
    blocks: Count
    timeoffset: Count
    connections: Count
    proxy: Text = ""
    difficulty: Amount
    testnet: Flag
    moneysupply: Amount
    transparentsupply: Amount | None = None
    shieldsupply: Amount | None = None
    keypoololdest: Count | None = None
    keypoolsize: Count | None = None
    paytxfee: Amount | None = None
    relayfee: Amount
    errors: Text = ""


class SupplyInfo(NodeModel):
    updateheight: Count
    transparentsupply: Amount
    shieldsupply: Amount
    totalsupply: Amount


class StakingStatus(NodeModel):
    """``getstakingstatus`` result. The ``lastattempt_*`` fields appear after the first stake attempt."""

    staking_status: Flag
    staking_enabled: Flag
    coldstaking_enabled: Flag
    haveconnections: Flag
    mnsync: Flag
    walletunlocked: Flag
    stakeablecoins: Count
    stakingbalance: Amount
    stakesplitthreshold: Amount
    lastattempt_age: Count | None = None
    lastattempt_depth: Count | None = None
    lastattempt_hash: Text | None = None
    lastattempt_coins: Count | None = None
    lastattempt_tries: Count | None = None


class MasternodeEntry(NodeModel):
    rank: Count
    mn_type: Text = Field(alias="type")
    network: Text
    txhash: Text
    outidx: Count
    pubkey: Text
    status: Text
    addr: Text
    version: Count
    lastseen: Count
    activetime: Count
    lastpaid: Count


class MasternodeCount(NodeModel):
    total: Count
    stable: Count
    enabled: Count
    inqueue: Count
    ipv4: Count
    ipv6: Count
    onion: Count


class BudgetProposal(NodeModel):
    name: Text = Field(alias="Name")
    url: Text = Field(alias="URL")
    hash: Text = Field(alias="Hash")
    fee_hash: Text = Field(alias="FeeHash")
    block_start: Count = Field(alias="BlockStart")
    block_end: Count = Field(alias="BlockEnd")
    total_payment_count: Count = Field(alias="TotalPaymentCount")
    remaining_payment_count: Count = Field(alias="RemainingPaymentCount")
    payment_address: Text = Field(alias="PaymentAddress")
    ratio: Amount = Field(alias="Ratio")
    yeas: Count = Field(alias="Yeas")
    nays: Count = Field(alias="Nays")
    abstains: Count = Field(alias="Abstains")
    total_payment: Amount = Field(alias="TotalPayment")
    monthly_payment: Amount = Field(alias="MonthlyPayment")
    is_established: Flag = Field(alias="IsEstablished")
    is_valid: Flag = Field(alias="IsValid")
    invalid_reason: Text | None = Field(default=None, alias="IsInvalidReason")
    allotted: Amount | None = Field(default=None, alias="Allotted")


class AddressValidation(NodeModel):
    """``validateaddress`` result; only ``isvalid`` is present for invalid input."""

    isvalid: Flag
    address: Text | None = None
    script_pub_key: Text | None = Field(default=None, alias="scriptPubKey")
    ismine: Flag | None = None
    isstaking: Flag | None = None
    iswatchonly: Flag | None = None
    isscript: Flag | None = None
