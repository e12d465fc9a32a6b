"""
CLI integration tests using Click's test runner.

Commands run against a SyscoinClient over MockRpcClient, so no node or
network access is needed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from syscoin_client import __version__
from syscoin_client.cli import cli
from syscoin_client.client import SyscoinClient
from syscoin_client.config import ClientSettings
from syscoin_client.errors import RpcError, WalletError
from syscoin_client.rpc import MockRpcClient

PODA_URL = "http://mocked_poda_url/"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def rpc() -> MockRpcClient:
    return MockRpcClient()


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def mocked_client(rpc: MockRpcClient):
    client = SyscoinClient(rpc, PODA_URL)
    with patch.object(ClientSettings, "connect", return_value=client) as connect:
        yield connect


class TestVersionAndInfo:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_info_hides_password(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["--rpc-url", "http://node:8370", "--rpc-user", "u", "--rpc-password", "secret", "info"],
        )
        assert result.exit_code == 0
        assert "http://node:8370" in result.output
        assert "secret" not in result.output

    def test_options_from_environment(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["info"], env={"SYSCOIN_PODA_URL": "http://poda.env/"})
        assert result.exit_code == 0
        assert "http://poda.env/" in result.output


class TestBlobCommands:
    def test_create_blob_hex(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        result = runner.invoke(cli, ["create-blob", "--hex", "0102"])
        assert result.exit_code == 0
        assert result.output.strip() == "mocked_version_hash"
        assert rpc.calls == [("syscoincreatenevmblob", ["0102"])]

    def test_create_blob_text(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        result = runner.invoke(cli, ["create-blob", "--text", "hi"])
        assert result.exit_code == 0
        assert rpc.calls == [("syscoincreatenevmblob", ["6869"])]

    def test_create_blob_file(self, runner: CliRunner, rpc: MockRpcClient, mocked_client, tmp_path: Path) -> None:
        blob = tmp_path / "blob.bin"
        blob.write_bytes(b"\x00\xff")
        result = runner.invoke(cli, ["create-blob", "--file", str(blob)])
        assert result.exit_code == 0
        assert rpc.calls == [("syscoincreatenevmblob", ["00ff"])]

    def test_create_blob_needs_one_source(self, runner: CliRunner, mocked_client) -> None:
        result = runner.invoke(cli, ["create-blob", "--hex", "01", "--text", "x"])
        assert result.exit_code == 2

    def test_create_blob_rpc_error(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        rpc.errors["syscoincreatenevmblob"] = RpcError("Insufficient funds", code=-6)
        result = runner.invoke(cli, ["create-blob", "--hex", "01"])
        assert result.exit_code == RpcError.exit_code
        assert "Insufficient funds" in result.output

    def test_fetch_blob(self, runner: CliRunner, mocked_client) -> None:
        result = runner.invoke(cli, ["fetch-blob", "mocked_version_hash"])
        assert result.exit_code == 0
        assert result.output.strip() == "010203"

    def test_fetch_blob_to_file(self, runner: CliRunner, mocked_client, tmp_path: Path) -> None:
        out = tmp_path / "out.bin"
        result = runner.invoke(cli, ["fetch-blob", "mocked_version_hash", "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_bytes() == b"\x01\x02\x03"

    def test_fetch_unknown_blob(self, runner: CliRunner, mocked_client) -> None:
        result = runner.invoke(cli, ["fetch-blob", "other"])
        assert result.exit_code == 2
        assert "ERROR" in result.output

    def test_receipt(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        rpc.responses["getnevmblobdata"] = {"versionhash": "mocked_version_hash", "datasize": 3}
        result = runner.invoke(cli, ["receipt", "mocked_version_hash"])
        assert result.exit_code == 0
        assert json.loads(result.output)["datasize"] == 3

    def test_receipt_missing(self, runner: CliRunner, mocked_client) -> None:
        result = runner.invoke(cli, ["receipt", "unknown"])
        assert result.exit_code == 1
        assert "No record found." in result.output


class TestWalletCommands:
    def test_balance(self, runner: CliRunner, mocked_client) -> None:
        result = runner.invoke(cli, ["balance"])
        assert result.exit_code == 0
        assert "Balance: 100.0" in result.output

    def test_new_address(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        rpc.responses["getnewaddress"] = "tsys1qnew"
        result = runner.invoke(cli, ["new-address", "blobs"])
        assert result.exit_code == 0
        assert result.output.strip() == "tsys1qnew"

    def test_address_by_label(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        rpc.responses["getaddressesbylabel"] = {"tsys1qa": {}, "tsys1qb": {}}
        result = runner.invoke(cli, ["address-by-label", "blobs"])
        assert result.output.splitlines() == ["tsys1qa"]
        result = runner.invoke(cli, ["address-by-label", "blobs", "--all"])
        assert result.output.splitlines() == ["tsys1qa", "tsys1qb"]

    def test_address_by_label_not_found(self, runner: CliRunner, mocked_client) -> None:
        result = runner.invoke(cli, ["address-by-label", "nobody"])
        assert result.exit_code == 6

    def test_block_number(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        rpc.responses["getblockcount"] = 42
        result = runner.invoke(cli, ["block-number"])
        assert result.exit_code == 0
        assert result.output.strip() == "42"

    def test_wallet_loads_existing(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        rpc.errors["createwallet"] = RpcError("Database already exists.", code=-4)
        result = runner.invoke(cli, ["wallet", "wallet_name"])
        assert result.exit_code == 0
        assert "Wallet wallet_name ready." in result.output
        assert [method for method, _ in rpc.calls] == ["createwallet", "loadwallet"]

    def test_wallet_failure(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        rpc.errors["createwallet"] = RpcError("Invalid wallet name", code=-8)
        result = runner.invoke(cli, ["wallet", "bad"])
        assert result.exit_code == WalletError.exit_code


class TestDemo:
    def test_demo_with_mock(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        result = runner.invoke(cli, ["demo", "--hex", "010203"])
        assert result.exit_code == 0
        assert "mocked_version_hash" in result.output
        assert "[1, 2, 3]" in result.output
        assert "Round trip OK" in result.output
        assert [method for method, _ in rpc.calls] == [
            "createwallet",
            "getbalance",
            "syscoincreatenevmblob",
            "GET",
        ]

    def test_demo_mismatch(self, runner: CliRunner, mocked_client) -> None:
        result = runner.invoke(cli, ["demo"])
        assert result.exit_code == 0
        assert "Round trip mismatch" in result.output


class TestConnection:
    def test_bad_rpc_url(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--rpc-url", "localhost", "balance"])
        assert result.exit_code == 2
        assert "Invalid RPC endpoint" in result.output


class TestLogging:
    def test_json_logs_carry_wallet_events(self, runner: CliRunner, rpc: MockRpcClient, mocked_client) -> None:
        rpc.errors["createwallet"] = RpcError("Database already exists.", code=-4)
        result = runner.invoke(cli, ["--log-level", "INFO", "--json-logs", "wallet", "w"])
        assert result.exit_code == 0

        records = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
        events = [record["event"] for record in records]
        assert events == ["wallet_exists_loading", "wallet_loaded"]
        assert all(record["wallet"] == "w" for record in records)
        assert all(record["level"] == "info" for record in records)

    def test_default_level_hides_info_events(self, runner: CliRunner, mocked_client) -> None:
        result = runner.invoke(cli, ["--json-logs", "wallet", "w"])
        assert result.exit_code == 0
        assert "wallet_created" not in result.output
