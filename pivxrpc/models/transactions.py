"""Transaction, input/output and UTXO shapes."""

from __future__ import annotations

from typing import Annotated, Union

from pydantic import AliasChoices, Field, PlainValidator

from pivxrpc.core.resolver import Candidate, Probed
from pivxrpc.models.base import Amount, ArgumentModel, Count, Flag, NodeModel, Text


class ScriptSig(NodeModel):
    asm: Text
    hex: Text


class ScriptPubKey(NodeModel):
    asm: Text
    hex: Text
    req_sigs: Count | None = Field(default=None, alias="reqSigs")
    script_type: Text | None = Field(default=None, alias="type")
    addresses: list[Text] | None = None


class CoinbaseInput(NodeModel):
    """Input of a coinbase transaction: carries the coinbase script instead of a prevout."""

    coinbase: Text
    sequence: Count


class TxInput(NodeModel):
    """Input spending a previous output (ordinary and coinstake inputs alike)."""

    txid: Text
    vout: Count
    script_sig: ScriptSig | None = Field(default=None, alias="scriptSig")
    sequence: Count | None = None


def _has_coinbase_without_txid(value: object) -> bool:
    return isinstance(value, dict) and "coinbase" in value and "txid" not in value


def _is_object(value: object) -> bool:
    return isinstance(value, dict)


# Probe order matters: a coinbase input is only tried when no prevout txid is present.
VIN_PROBE = Probed(
    "vin",
    [
        Candidate("coinbase", CoinbaseInput, _has_coinbase_without_txid),
        Candidate("input", TxInput, _is_object),
    ],
)

Vin = Annotated[Union[CoinbaseInput, TxInput], PlainValidator(VIN_PROBE.validate)]


class TxOutput(NodeModel):
    """Entry of a transaction's ``vout`` array."""

    value: Amount
    n: Count
    script_pub_key: ScriptPubKey = Field(alias="scriptPubKey")


class ShieldSpend(NodeModel):
    cv: Text
    anchor: Text
    nullifier: Text
    rk: Text
    proof: Text
    spend_auth_sig: Text = Field(validation_alias=AliasChoices("spendAuthSig", "spend_auth_sig"))


class ShieldOutput(NodeModel):
    cv: Text
    cmu: Text
    ephemeral_key: Text = Field(validation_alias=AliasChoices("ephemeralKey", "ephemeral_key"))
    enc_ciphertext: Text = Field(validation_alias=AliasChoices("encCiphertext", "enc_ciphertext"))
    out_ciphertext: Text = Field(validation_alias=AliasChoices("outCiphertext", "out_ciphertext"))
    proof: Text


class Transaction(NodeModel):
    """Decoded transaction as returned by ``getrawtransaction`` (verbose) or inside a block.

    ``hex`` is absent from ``decoderawtransaction``; the chain-position fields
    (``blockhash``, ``confirmations``, ``time``, ``blocktime``) are absent for
    mempool transactions. Shield fields appear only on Sapling transactions.
    """

    txid: Text
    version: Count
    tx_type: Count = Field(default=0, alias="type")  # pre-v5 nodes omit it; 0 is the standard type
    size: Count
    locktime: Count
    vin: list[Vin]
    vout: list[TxOutput]
    hex: Text | None = None
    value_balance: Amount | None = Field(default=None, validation_alias=AliasChoices("valueBalance", "value_balance"))
    value_balance_sat: Count | None = Field(
        default=None, validation_alias=AliasChoices("valueBalanceSat", "value_balance_sat")
    )
    shield_spends: list[ShieldSpend] | None = Field(
        default=None, validation_alias=AliasChoices("vShieldSpend", "vshield_spend")
    )
    shield_outputs: list[ShieldOutput] | None = Field(
        default=None, validation_alias=AliasChoices("vShieldOutput", "vshield_output")
    )
    binding_sig: Text | None = Field(default=None, validation_alias=AliasChoices("bindingSig", "binding_sig"))
    shielded_addresses: list[Text] | None = None
    extra_payload_size: Count | None = Field(
        default=None, validation_alias=AliasChoices("extraPayloadSize", "extra_payload_size")
    )
    extra_payload: Text | None = Field(default=None, validation_alias=AliasChoices("extraPayload", "extra_payload"))
    blockhash: Text | None = None
    confirmations: Count | None = None
    time: Count | None = None
    blocktime: Count | None = None

    @property
    def is_coinbase(self) -> bool:
        return len(self.vin) == 1 and isinstance(self.vin[0], CoinbaseInput)

    @property
    def total_out(self) -> Amount:
        return sum((o.value for o in self.vout), Amount(0))


class TxOut(NodeModel):
    """Unspent output returned by ``gettxout``."""

    bestblock: Text
    confirmations: Count
    value: Amount
    script_pub_key: ScriptPubKey = Field(alias="scriptPubKey")
    coinbase: Flag


class TxOutSetInfo(NodeModel):
    height: Count
    bestblock: Text
    transactions: Count
    txouts: Count
    hash_serialized_2: Text | None = None
    total_amount: Amount
    bytes_serialized: Count | None = None
    disk_size: Count | None = None


class SignedTransaction(NodeModel):
    hex: Text
    complete: Flag
    errors: list[dict] | None = None


class ColdUtxo(NodeModel):
    txid: Text
    txidn: Count
    amount: Amount
    confirmations: Count
    cold_staker: Text = Field(alias="cold-staker")
    coin_owner: Text = Field(alias="coin-owner")
    whitelisted: Flag


class RawTxInput(ArgumentModel):
    """Outpoint argument for ``createrawtransaction``."""

    txid: str
    vout: int
    sequence: int | None = None


class PrevTxOutput(ArgumentModel):
    """Previous-output hint for ``signrawtransaction``."""

    txid: str
    vout: int
    script_pub_key: str = Field(alias="scriptPubKey")
    redeem_script: str | None = Field(default=None, alias="redeemScript")
    amount: Amount | None = None
