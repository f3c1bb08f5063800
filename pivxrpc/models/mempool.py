"""Mempool shapes."""

from __future__ import annotations

from pydantic import Field

from pivxrpc.models.base import Amount, Count, Flag, NodeModel, Text


class MempoolInfo(NodeModel):
    loaded: Flag | None = None
    size: Count
    bytes: Count
    usage: Count
    mempoolminfee: Amount
    minrelaytxfee: Amount | None = None


class MempoolEntry(NodeModel):
    """Value side of the verbose ``getrawmempool`` mapping."""

    size: Count
    fee: Amount
    modifiedfee: Amount
    time: Count
    height: Count
    descendantcount: Count
    descendantsize: Count
    descendantfees: Amount
    ancestorcount: Count | None = None
    ancestorsize: Count | None = None
    ancestorfees: Amount | None = None
    wtxid: Text | None = None
    depends: list[Text] = Field(default_factory=list)
