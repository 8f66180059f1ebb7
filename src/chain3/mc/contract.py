"""
Contract helpers - ABI encoding for read-only mc_call requests.

Uses eth-abi for argument encoding and Keccak-256 for the 4-byte
function selector.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from eth_abi import decode, encode

from ..types import AddressLike, BlockSelector, TransactionRequest, address_param
from ..utils import hex_to_bytes, keccak256
from .api import Mc


def load_abi(path: Path) -> list[dict[str, Any]]:
    """
    Load a contract ABI from a JSON file.

    Accepts either a bare ABI list or a compiler artifact with an "abi" key.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds no ABI list
    """
    with Path(path).open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    if isinstance(artifact, dict):
        artifact = artifact.get("abi")
    if not isinstance(artifact, list):
        raise ValueError(f"No ABI found in {path}")
    return artifact


def _find_function(abi: list, function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def function_selector(abi: list, function_name: str) -> bytes:
    func = _find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    sig = f"{function_name}({','.join(input_types)})"
    return keccak256(sig.encode("utf-8"))[:4]


def encode_function_call(abi: list, function_name: str, args: list) -> bytes:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        Call data: 4-byte selector followed by the encoded arguments
    """
    func = _find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    if len(args) != len(input_types):
        raise ValueError(
            f"{function_name} takes {len(input_types)} arguments, got {len(args)}"
        )
    encoded_args = encode(input_types, args) if args else b""
    return function_selector(abi, function_name) + encoded_args


def decode_function_result(abi: list, function_name: str, data: bytes) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        Decoded result (single value, tuple, or None without outputs)
    """
    func = _find_function(abi, function_name)
    output_types = [out["type"] for out in func.get("outputs", [])]
    if not output_types:
        return None

    if isinstance(data, str):
        data = hex_to_bytes(data)
    decoded = decode(output_types, data)

    if len(decoded) == 1:
        return decoded[0]
    return decoded


class Contract:
    """A deployed contract reachable through mc_call."""

    def __init__(self, mc: Mc, address: AddressLike, abi: list) -> None:
        self.mc = mc
        self.address = address_param(address)
        self.abi = abi

    def call(
        self,
        function_name: str,
        *args: Any,
        block: BlockSelector = "latest",
        from_: Optional[AddressLike] = None,
    ) -> Any:
        """Run a read-only call and decode its return value(s)."""
        calldata = encode_function_call(self.abi, function_name, list(args))
        result = self.mc.call(
            TransactionRequest(from_=from_, to=self.address, data=calldata), block
        )
        if not result:
            return None
        return decode_function_result(self.abi, function_name, result)
