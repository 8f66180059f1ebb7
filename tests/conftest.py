"""
Shared fixtures: an in-process node that answers with canned responses.

MockProvider records every request it receives and answers from a
method -> response table. A response may be:
  - a plain JSON value (returned as ``result``)
  - a Fail marker (returned as a JSON-RPC error object)
  - an exception instance (raised from ``send``)
  - a callable taking the RpcRequest and returning any of the above
"""

from __future__ import annotations

import copy
import threading
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import pytest

from chain3 import Chain3, Mc, Settings
from chain3.rpc import ErrorObject, RpcRequest, RpcResponse

COINBASE = "0x407d73d8a49eeb85d32cf465507dd71d507100c1"
OTHER_ACCOUNT = "0x407d73d8a49ee783afd32cf465507dd71d507100"
RECIPIENT = "0x6295ee1b4f6dd65047762f924ecd367c17eabf8f"
TX_HASH = "0xc6ef2fc5426d6ad6fd9e2a26abeab0aa2411b7ab17f30a99d3cb96aed1d1055b"
BLOCK_HASH = "0xe670ec64341771606e55d6b4ca35a1a6b75ee3d5145a99d05921026d15273311"
SENT_TX_HASH = "0xe670ec64341771606e55d6b4ca35a1a6b75ee3d5145a99d05921026d15273310"
LOG_ADDRESS = "0x16c5785ac562ff41e2dcfdf829c5a142f1fccd7d"
LOG_TOPIC = "0x59ebeb90bc63057b6515673c3ecf9438e5058bca0f92585014eced636878c9a5"
CODE = "0x600160008035811a818181146012578301005b601b6001356025565b8060005260206000f25b600060078202905091905056"
SIGNATURE = (
    "0x2ac19db245478a06032e69cdbd2b54e648b78431d0a47bd1fbab18f79f820ba4"
    "07466e37adbe9e84541cab97ab7d290f4a64a5825c876d22109f3bf813254e8601"
)

BLOCK = {
    "number": "0x1b4",
    "hash": BLOCK_HASH,
    "parentHash": "0x9646252be9520f6e71339a8df9c55e4d7619deeb018d2a3f2d21fc165dde5eb5",
    "nonce": "0xe04d296d2460cfb8",
    "sha3Uncles": "0x1dcc4de8dec75d7aab85b567b6ccd41ad312451b948a7413f0a142fd40d49347",
    "logsBloom": "0x" + "00" * 256,
    "transactionsRoot": "0x56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421",
    "stateRoot": "0xd5855eb08b3387c0af375e9cdb6acfc05eb8f519e419b874b6ff2ffda7ed1dff",
    "receiptsRoot": "0x56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421",
    "miner": "0x4e65fda2159562a496f9f3522f89122a3088497a",
    "difficulty": "0x027f07",
    "totalDifficulty": "0x027f07",
    "extraData": "0x" + "00" * 32,
    "size": "0x027f07",
    "gasLimit": "0x9f759",
    "gasUsed": "0x9f759",
    "timestamp": "0x54e34e8e",
    "transactions": [],
    "uncles": [],
}

TRANSACTION = {
    "hash": TX_HASH,
    "nonce": "0x0",
    "blockHash": "0xbeab0aa2411b7ab17f30a99d3cb9c6ef2fc5426d6ad6fd9e2a26a6aed1d1055b",
    "blockNumber": "0x15df",
    "transactionIndex": "0x1",
    "from": COINBASE,
    "to": RECIPIENT,
    "value": "0x7f110",
    "gas": "0x7f110",
    "gasPrice": "0x09184e72a000",
    "input": "0x603880600c6000396000f300603880600c6000396000f3603880600c6000396000f360",
}

RECEIPT = {
    "transactionHash": "0xb903239f8543d04b5dc1ba6579132b143087c68db1b2168786408fcbce568238",
    "transactionIndex": "0x1",
    "blockNumber": "0xb",
    "blockHash": TX_HASH,
    "cumulativeGasUsed": "0x33bc",
    "gasUsed": "0x4dc",
    "contractAddress": "0xb60e8dd61c5d32be8058bb8eb970870f07233155",
    "logs": [],
}

LOG = {
    "logIndex": "0x1",
    "blockNumber": "0x1b4",
    "blockHash": "0x8216c5785ac562ff41e2dcfdf5785ac562ff41e2dcfdf829c5a142f1fccd7d00",
    "transactionHash": "0xdf829c5a142f1fccd7d8216c5785ac562ff41e2dcfdf5785ac562ff41e2dcf00",
    "transactionIndex": "0x0",
    "address": LOG_ADDRESS,
    "data": "0x" + "00" * 32,
    "topics": [LOG_TOPIC],
}

WORK = [
    "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef",
    "0x5EED00000000000000000000000000005EED0000000000000000000000000000",
    "0xd1ff1c01710000000000000000000000d1ff1c01710000000000000000000000",
]

MC_RESPONSES: dict[str, Any] = {
    "net_version": "99",
    "net_listening": True,
    "net_peerCount": "0x2",
    "mc_protocolVersion": "54",
    "mc_syncing": False,
    "mc_coinbase": COINBASE,
    "mc_mining": True,
    "mc_hashrate": "0x38a",
    "mc_gasPrice": "0x09184e72a000",
    "mc_accounts": [COINBASE, OTHER_ACCOUNT],
    "mc_blockNumber": "0x4b7",
    "mc_getBalance": "0x0234c8a3397aab58",
    "mc_getStorageAt": "0x03",
    "mc_getTransactionCount": "0x1",
    "mc_getBlockTransactionCountByHash": "0xb",
    "mc_getBlockTransactionCountByNumber": "0xa",
    "mc_getUncleCountByBlockHash": "0x1",
    "mc_getUncleCountByBlockNumber": "0x1",
    "mc_getCode": CODE,
    "mc_sign": SIGNATURE,
    "mc_sendTransaction": SENT_TX_HASH,
    "mc_sendRawTransaction": SENT_TX_HASH,
    "mc_call": "0x",
    "mc_estimateGas": "0x5208",
    "mc_getBlockByHash": BLOCK,
    "mc_getBlockByNumber": BLOCK,
    "mc_getTransactionByHash": TRANSACTION,
    "mc_getTransactionByBlockHashAndIndex": TRANSACTION,
    "mc_getTransactionByBlockNumberAndIndex": TRANSACTION,
    "mc_getTransactionReceipt": RECEIPT,
    "mc_getUncleByBlockHashAndIndex": BLOCK,
    "mc_getUncleByBlockNumberAndIndex": BLOCK,
    "mc_getCompilers": ["solidity", "lll", "serpent"],
    "mc_newFilter": "0x1",
    "mc_newBlockFilter": "0x1",
    "mc_newPendingTransactionFilter": "0x1",
    "mc_uninstallFilter": True,
    "mc_getFilterChanges": [LOG],
    "mc_getFilterLogs": [LOG],
    "mc_getLogs": [LOG],
    "mc_getWork": WORK,
    "mc_submitWork": True,
    "mc_submitHashrate": True,
}


class Fail:
    """Canned JSON-RPC error answer."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data


def sequence(*answers: Any) -> Callable[[RpcRequest], Any]:
    """Answer with each value in turn, then repeat the last one."""
    remaining = list(answers)
    lock = threading.Lock()

    def _answer(request: RpcRequest) -> Any:
        with lock:
            if len(remaining) > 1:
                return remaining.pop(0)
            return remaining[0]

    return _answer


def counter() -> Callable[[RpcRequest], str]:
    """Answer with "0x1", "0x2", ... (distinct filter ids)."""
    state = {"next": 1}
    lock = threading.Lock()

    def _answer(request: RpcRequest) -> str:
        with lock:
            value = state["next"]
            state["next"] += 1
        return f"0x{value:x}"

    return _answer


class MockProvider:
    def __init__(self, responses: Optional[dict[str, Any]] = None) -> None:
        self.responses: dict[str, Any] = dict(MC_RESPONSES)
        if responses:
            self.responses.update(responses)
        self.requests: list[RpcRequest] = []
        self._lock = threading.Lock()

    def set(self, method: str, answer: Any) -> None:
        with self._lock:
            self.responses[method] = answer

    def calls(self, method: str) -> list[RpcRequest]:
        with self._lock:
            return [r for r in self.requests if r.method == method]

    def last(self, method: str) -> RpcRequest:
        return self.calls(method)[-1]

    def send(self, request: RpcRequest) -> RpcResponse:
        with self._lock:
            self.requests.append(request)
            answer = self.responses.get(request.method, Fail(-32601, f"Invalid method {request.method}"))

        if callable(answer):
            answer = answer(request)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, Fail):
            return RpcResponse(
                id=request.id, error=ErrorObject(answer.code, answer.message, answer.data)
            )
        return RpcResponse(id=request.id, result=copy.deepcopy(answer))


@pytest.fixture()
def provider() -> MockProvider:
    return MockProvider()


@pytest.fixture()
def client(provider: MockProvider) -> Iterator[Chain3]:
    """Chain3 bound to the mock node, polling filters every 10ms."""
    chain3 = Chain3(provider, settings=Settings(poll_interval=0.01))
    yield chain3
    chain3.reset()


@pytest.fixture()
def mc(client: Chain3) -> Mc:
    return client.mc


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's CHAIN3_* variables and ~/.chain3 out of tests."""
    for name in ("CHAIN3_RPC_URL", "CHAIN3_RPC_TIMEOUT", "CHAIN3_POLL_INTERVAL"):
        # setenv first so teardown also undoes whatever load_dotenv wrote
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setattr("chain3.config.CHAIN3_ENV", tmp_path / "missing.env")
