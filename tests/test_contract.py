"""Tests for ABI helpers and read-only contract calls."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from chain3.mc import Contract, Mc, decode_function_result, encode_function_call, load_abi
from chain3.mc.contract import function_selector

from conftest import COINBASE, RECIPIENT, MockProvider

ERC20_ABI = [
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "totalSupply",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "info",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}, {"name": "", "type": "uint8"}],
        "stateMutability": "view",
    },
    {"type": "event", "name": "Transfer", "inputs": []},
]


def _uint(value: int) -> str:
    return "0x" + value.to_bytes(32, "big").hex()


class TestAbiHelpers:
    """Tests for selector and argument encoding."""

    def test_selectors(self) -> None:
        assert function_selector(ERC20_ABI, "balanceOf").hex() == "70a08231"
        assert function_selector(ERC20_ABI, "totalSupply").hex() == "18160ddd"

    def test_encode_call(self) -> None:
        data = encode_function_call(ERC20_ABI, "balanceOf", [COINBASE])
        assert data[:4].hex() == "70a08231"
        assert data[4:] == bytes(12) + bytes.fromhex(COINBASE[2:])

    def test_encode_without_args(self) -> None:
        assert encode_function_call(ERC20_ABI, "totalSupply", []).hex() == "18160ddd"

    def test_wrong_arg_count(self) -> None:
        with pytest.raises(ValueError, match="takes 1 arguments"):
            encode_function_call(ERC20_ABI, "balanceOf", [])

    def test_unknown_function(self) -> None:
        with pytest.raises(ValueError, match="not found"):
            encode_function_call(ERC20_ABI, "Transfer", [])

    def test_decode_single(self) -> None:
        assert decode_function_result(ERC20_ABI, "totalSupply", _uint(42)) == 42

    def test_decode_multiple(self) -> None:
        from eth_abi import encode

        data = encode(["string", "uint8"], ["MOAC", 18])
        assert decode_function_result(ERC20_ABI, "info", data) == ("MOAC", 18)


class TestLoadAbi:
    """Tests for load_abi."""

    def test_bare_list(self, tmp_path: Path) -> None:
        path = tmp_path / "abi.json"
        path.write_text(json.dumps(ERC20_ABI), encoding="utf-8")
        assert load_abi(path) == ERC20_ABI

    def test_artifact(self, tmp_path: Path) -> None:
        path = tmp_path / "Token.json"
        path.write_text(json.dumps({"contractName": "Token", "abi": ERC20_ABI}), encoding="utf-8")
        assert load_abi(path) == ERC20_ABI

    def test_no_abi(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError):
            load_abi(path)


class TestContractCall:
    """Tests for Contract.call over mc_call."""

    def test_call(self, mc: Mc, provider: MockProvider) -> None:
        provider.set("mc_call", _uint(1207))
        token = Contract(mc, RECIPIENT, ERC20_ABI)

        assert token.call("balanceOf", COINBASE) == 1207

        tx, block = provider.last("mc_call").params
        assert tx["to"] == RECIPIENT
        assert tx["data"].startswith("0x70a08231")
        assert block == "latest"

    def test_call_options(self, mc: Mc, provider: MockProvider) -> None:
        provider.set("mc_call", _uint(1))
        Contract(mc, RECIPIENT, ERC20_ABI).call("totalSupply", block=100, from_=COINBASE)
        tx, block = provider.last("mc_call").params
        assert tx["from"] == COINBASE
        assert block == "0x64"

    def test_empty_result(self, mc: Mc) -> None:
        assert Contract(mc, RECIPIENT, ERC20_ABI).call("totalSupply") is None
