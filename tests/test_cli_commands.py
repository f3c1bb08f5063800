import json
from pathlib import Path
from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

import pivxrpc.cli.shared.runner as runner_module
from fakes import FakeTransport, RawResult, RpcErrorReply
from payloads import BLOCK_HASH, BLOCK_V1_JSON, BLOCKCHAIN_INFO, NODE_INFO, TXOUT
from pivxrpc.cli.command_groups.node_commands import parse_param
from pivxrpc.cli.commands import app
from pivxrpc.client import PivxRpcClient

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"url": "http://127.0.0.1:51473", "maxRetries": 0}))
    return path


def use_fake_node(monkeypatch, *replies) -> FakeTransport:
    transport = FakeTransport(*replies)

    def from_config(config):
        return PivxRpcClient(config.url, transport=transport, max_retries=config.max_retries, retry_delay_seconds=0)

    monkeypatch.setattr(runner_module, "PivxRpcClient", SimpleNamespace(from_config=from_config))
    return transport


def invoke(config_path: Path, *args: str):
    return runner.invoke(app, ["--config", str(config_path), *args])


def test_info_prints_chain_summary(monkeypatch, config_path) -> None:
    use_fake_node(monkeypatch, BLOCKCHAIN_INFO, NODE_INFO)
    result = invoke(config_path, "info")
    assert result.exit_code == 0, result.output
    assert "4000000" in result.output
    assert "active" in result.output


def test_block_by_height_as_json(monkeypatch, config_path) -> None:
    transport = use_fake_node(monkeypatch, BLOCK_HASH, RawResult(BLOCK_V1_JSON))
    result = invoke(config_path, "--json", "block", "4000000")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["height"] == 4000000
    assert data["difficulty"] == "123456.78901234"
    assert transport.requests[0]["params"] == [4000000]
    assert transport.requests[1]["params"] == [BLOCK_HASH, 1]


def test_block_hex_verbosity(monkeypatch, config_path) -> None:
    use_fake_node(monkeypatch, "0100abcd")
    result = invoke(config_path, "block", BLOCK_HASH, "--verbosity", "0")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "0100abcd"


def test_mempool_lists_txids(monkeypatch, config_path) -> None:
    use_fake_node(monkeypatch, ["aa", "bb"])
    result = invoke(config_path, "mempool")
    assert result.exit_code == 0, result.output
    assert result.output.split() == ["aa", "bb"]


def test_txout_spent_and_unspent(monkeypatch, config_path) -> None:
    use_fake_node(monkeypatch, None)
    result = invoke(config_path, "txout", "ab", "0")
    assert result.exit_code == 0, result.output
    assert "spent or unknown" in result.output

    transport = use_fake_node(monkeypatch, TXOUT)
    result = invoke(config_path, "--json", "txout", "ab", "1", "--no-include-mempool")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["value"] == "12.5"
    assert transport.requests[0]["params"] == ["ab", 1, False]


def test_call_sends_json_params(monkeypatch, config_path) -> None:
    transport = use_fake_node(monkeypatch, RawResult('{"ok": true, "fee": 0.0001}'))
    result = invoke(config_path, "call", "somethingnew", "7", "true", "DAddr")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"ok": True, "fee": "0.0001"}
    assert transport.requests[0]["params"] == [7, True, "DAddr"]


def test_node_error_exits_with_code(monkeypatch, config_path) -> None:
    use_fake_node(monkeypatch, RpcErrorReply(-5, "Block not found"))
    result = invoke(config_path, "block", BLOCK_HASH)
    assert result.exit_code == 1
    assert "[RPC_ERROR]" in result.output
    assert "Block not found" in result.output


def test_node_error_as_json(monkeypatch, config_path) -> None:
    use_fake_node(monkeypatch, RpcErrorReply(-5, "Block not found"))
    result = invoke(config_path, "--json", "block", BLOCK_HASH)
    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload["error"]["error"] == "RPC_ERROR"
    assert payload["error"]["details"]["rpc_code"] == -5


def test_broken_config_file_exits(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{broken")
    result = invoke(path, "info")
    assert result.exit_code == 1
    assert "Failed to load config" in result.output


def test_parse_param() -> None:
    assert parse_param("7") == 7
    assert parse_param("false") is False
    assert parse_param('{"a": 1}') == {"a": 1}
    assert parse_param("DQmR6fG7w3LdR5MsDnUfWqJNLcEjEgaKxd") == "DQmR6fG7w3LdR5MsDnUfWqJNLcEjEgaKxd"
    assert parse_param("00ab") == "00ab"
