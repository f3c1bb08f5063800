"""Pytest hooks and fixtures."""

import os

import pytest

from payloads import BLOCK_V2_JSON, COINSTAKE_TX_JSON


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "requires_node: talks to a live PIVX node (skipped unless PIVX_RPC_LIVE=1)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip requires_node tests unless a live node is configured."""
    if os.environ.get("PIVX_RPC_LIVE") == "1":
        return
    skip = pytest.mark.skip(reason="Requires a live PIVX node (set PIVX_RPC_LIVE=1)")
    for item in items:
        if "requires_node" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def block_v2_json() -> str:
    return BLOCK_V2_JSON


@pytest.fixture
def coinstake_tx_json() -> str:
    return COINSTAKE_TX_JSON
