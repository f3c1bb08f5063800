"""Sample node payloads shaped like real PIVX responses."""

from decimal import Decimal

BLOCK_HASH = "00000000000000a1b2c3d4e5f60718293a4b5c6d7e8f90112233445566778899"
COINBASE_TXID = "1111111111111111111111111111111111111111111111111111111111111111"
COINSTAKE_TXID = "2222222222222222222222222222222222222222222222222222222222222222"
PREVOUT_TXID = "3333333333333333333333333333333333333333333333333333333333333333"

COINBASE_TX_JSON = f"""{{
  "txid": "{COINBASE_TXID}",
  "version": 1,
  "type": 0,
  "size": 98,
  "locktime": 0,
  "vin": [{{"coinbase": "03a0860100", "sequence": 4294967295}}],
  "vout": [{{"value": 0.00000000, "n": 0, "scriptPubKey": {{"asm": "", "hex": "", "type": "nonstandard"}}}}]
}}"""

COINSTAKE_TX_JSON = f"""{{
  "txid": "{COINSTAKE_TXID}",
  "version": 1,
  "type": 0,
  "size": 226,
  "locktime": 0,
  "vin": [{{
    "txid": "{PREVOUT_TXID}",
    "vout": 1,
    "scriptSig": {{"asm": "3044022011[ALL]", "hex": "47304402201101"}},
    "sequence": 4294967295
  }}],
  "vout": [
    {{"value": 0.00000000, "n": 0, "scriptPubKey": {{"asm": "", "hex": "", "type": "nonstandard"}}}},
    {{"value": 1234.56789012, "n": 1, "scriptPubKey": {{
      "asm": "02ab OP_CHECKSIG", "hex": "2102abac", "reqSigs": 1, "type": "pubkey",
      "addresses": ["DQmR6fG7w3LdR5MsDnUfWqJNLcEjEgaKxd"]
    }}}}
  ]
}}"""

_BLOCK_FIELDS = f"""
  "hash": "{BLOCK_HASH}",
  "confirmations": 12,
  "size": 512,
  "height": 4000000,
  "version": 11,
  "merkleroot": "abcdef0123456789",
  "time": 1700000000,
  "mediantime": 1699999900,
  "nonce": 0,
  "bits": "1b0ffff0",
  "difficulty": 123456.78901234,
  "chainwork": "000000000000000000000000000000000000000000000a1b2c3d4e5f60718293",
  "finalsaplingroot": "0000000000000000000000000000000000000000000000000000000000000000",
  "previousblockhash": "0000000000000000000000000000000000000000000000000000000000000001"
"""

BLOCK_V1_JSON = f"""{{{_BLOCK_FIELDS},
  "tx": ["{COINBASE_TXID}", "{COINSTAKE_TXID}"]
}}"""

BLOCK_V2_JSON = f"""{{{_BLOCK_FIELDS},
  "tx": [{COINBASE_TX_JSON}, {COINSTAKE_TX_JSON}]
}}"""

MEMPOOL_ENTRY = {
    "size": 225,
    "fee": Decimal("0.0001"),
    "modifiedfee": Decimal("0.0001"),
    "time": 1700000100,
    "height": 4000000,
    "descendantcount": 1,
    "descendantsize": 225,
    "descendantfees": 10000,
    "depends": [],
}

TXOUT = {
    "bestblock": BLOCK_HASH,
    "confirmations": 3,
    "value": Decimal("12.5"),
    "scriptPubKey": {
        "asm": "OP_DUP OP_HASH160 ab OP_EQUALVERIFY OP_CHECKSIG",
        "hex": "76a914ab88ac",
        "reqSigs": 1,
        "type": "pubkeyhash",
        "addresses": ["DQmR6fG7w3LdR5MsDnUfWqJNLcEjEgaKxd"],
    },
    "coinbase": False,
}

BLOCKCHAIN_INFO = {
    "chain": "main",
    "blocks": 4000000,
    "headers": 4000000,
    "bestblockhash": BLOCK_HASH,
    "difficulty": Decimal("123456.78901234"),
    "verificationprogress": 1,
    "chainwork": "0000000000000000000000000000000000000000000000000000000000000abc",
    "shield_pool_value": {"chainValue": Decimal("1000.5"), "valueDelta": Decimal("0")},
    "initial_block_downloading": False,
    "upgrades": {
        "PoS v2": {"activationheight": 1967000, "status": "active", "info": "Cold staking"},
        "v5 shield": {"activationheight": 2700500, "status": "active", "info": "Sapling"},
    },
    "warnings": "",
}

NODE_INFO = {
    "version": 5060000,
    "protocolversion": 70926,
    "services": "NETWORK/BLOOM/",
    "walletversion": 169900,
    "balance": Decimal("42.00000000"),
    "staking status": "Staking Active",
    "blocks": 4000000,
    "timeoffset": 0,
    "connections": 16,
    "proxy": "",
    "difficulty": Decimal("123456.78901234"),
    "testnet": False,
    "moneysupply": Decimal("89000000.12345678"),
    "transparentsupply": Decimal("88000000.12345678"),
    "shieldsupply": Decimal("1000000"),
    "keypoololdest": 1600000000,
    "keypoolsize": 1000,
    "paytxfee": 0,
    "relayfee": Decimal("0.0001"),
    "errors": "",
}


