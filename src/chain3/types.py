"""
Domain values exchanged with a MOAC node.

Every record decodes from the node's JSON with ``from_dict`` and fails
with DecodeError naming the expected shape. Records that travel to the
node encode with ``to_params``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, TypeVar, Union

from .address import to_checksum_address
from .errors import DecodeError
from .units import QuantityLike, to_hex, to_quantity
from .utils import bytes_to_hex, hex_to_bytes

T = TypeVar("T")

BLOCK_TAGS = ("latest", "pending", "earliest")

BlockSelector = Union[int, str, None]


@dataclass(frozen=True)
class Address:
    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != 20:
            raise ValueError(f"Address must be 20 bytes, got {len(self.value)}")

    @classmethod
    def from_hex(cls, value: str) -> "Address":
        return cls(hex_to_bytes(value))

    def checksum(self) -> str:
        return to_checksum_address(str(self))

    def __str__(self) -> str:
        return bytes_to_hex(self.value)


@dataclass(frozen=True)
class Hash:
    value: bytes

    @classmethod
    def from_hex(cls, value: str) -> "Hash":
        return cls(hex_to_bytes(value))

    def __str__(self) -> str:
        return bytes_to_hex(self.value)


AddressLike = Union[Address, str]
HashLike = Union[Hash, str]


def address_param(address: AddressLike) -> str:
    if isinstance(address, Address):
        return str(address)
    return str(Address.from_hex(address))


def hash_param(value: HashLike) -> str:
    if isinstance(value, Hash):
        return str(value)
    return str(Hash.from_hex(value))


def block_selector(block: BlockSelector) -> str:
    """
    Normalize a block selector into its wire form.

    Accepts None (latest), "latest", "pending", "earliest", a block
    number, or a 0x-prefixed hex block number.
    """
    if block is None:
        return "latest"
    if isinstance(block, bool):
        raise ValueError("Invalid block selector: bool")
    if isinstance(block, int):
        if block < 0:
            raise ValueError(f"Block number must not be negative: {block}")
        return to_hex(block)
    if isinstance(block, str):
        tag = block.strip()
        if tag.lower() in BLOCK_TAGS:
            return tag.lower()
        if tag.startswith("0x"):
            number = to_quantity(tag)
            if number < 0:
                raise ValueError(f"Block number must not be negative: {block}")
            return to_hex(number)
    raise ValueError(f"Invalid block selector: {block!r}")


# ---------------------------------------------------------------------------
# Primitive decoders
# ---------------------------------------------------------------------------

def decode_quantity(raw: Any) -> int:
    if not isinstance(raw, str) or not raw.startswith(("0x", "-0x")):
        raise DecodeError("quantity", raw)
    try:
        quantity = to_quantity(raw)
    except ValueError:
        raise DecodeError("quantity", raw) from None
    return quantity.numerator


def decode_bool(raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise DecodeError("boolean", raw)
    return raw


def decode_string(raw: Any) -> str:
    if not isinstance(raw, str):
        raise DecodeError("string", raw)
    return raw


def decode_data(raw: Any) -> bytes:
    if not isinstance(raw, str) or not raw.startswith("0x"):
        raise DecodeError("data", raw)
    try:
        return hex_to_bytes(raw)
    except ValueError:
        raise DecodeError("data", raw) from None


def decode_address(raw: Any) -> Address:
    try:
        return Address(decode_data(raw))
    except (DecodeError, ValueError):
        raise DecodeError("address", raw) from None


def decode_hash(raw: Any) -> Hash:
    try:
        return Hash(decode_data(raw))
    except DecodeError:
        raise DecodeError("hash", raw) from None


def decode_optional(decoder: Callable[[Any], T]) -> Callable[[Any], Optional[T]]:
    def _decode(raw: Any) -> Optional[T]:
        if raw is None:
            return None
        return decoder(raw)
    return _decode


def decode_list(decoder: Callable[[Any], T], expected: str = "list") -> Callable[[Any], list[T]]:
    def _decode(raw: Any) -> list[T]:
        if not isinstance(raw, list):
            raise DecodeError(expected, raw)
        return [decoder(item) for item in raw]
    return _decode


def _field(payload: dict[str, Any], key: str, decoder: Callable[[Any], T]) -> Optional[T]:
    return decode_optional(decoder)(payload.get(key))


def _require_dict(expected: str, payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(expected, payload)
    return payload


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Log:
    log_index: Optional[int]
    block_number: Optional[int]
    block_hash: Optional[Hash]
    transaction_hash: Optional[Hash]
    transaction_index: Optional[int]
    address: Address
    data: bytes
    topics: tuple[Hash, ...] = ()
    removed: bool = False

    @classmethod
    def from_dict(cls, payload: Any) -> "Log":
        payload = _require_dict("log", payload)
        try:
            return cls(
                log_index=_field(payload, "logIndex", decode_quantity),
                block_number=_field(payload, "blockNumber", decode_quantity),
                block_hash=_field(payload, "blockHash", decode_hash),
                transaction_hash=_field(payload, "transactionHash", decode_hash),
                transaction_index=_field(payload, "transactionIndex", decode_quantity),
                address=decode_address(payload.get("address")),
                data=decode_data(payload.get("data", "0x")),
                topics=tuple(decode_list(decode_hash)(payload.get("topics", []))),
                removed=bool(payload.get("removed", False)),
            )
        except DecodeError as exc:
            raise DecodeError("log", payload) from exc


@dataclass(frozen=True)
class Transaction:
    hash: Hash
    nonce: Optional[int]
    block_hash: Optional[Hash]
    block_number: Optional[int]
    transaction_index: Optional[int]
    from_: Optional[Address]
    to: Optional[Address]
    value: int
    gas: int
    gas_price: int
    input: bytes

    @classmethod
    def from_dict(cls, payload: Any) -> "Transaction":
        payload = _require_dict("transaction", payload)
        try:
            return cls(
                hash=decode_hash(payload.get("hash")),
                nonce=_field(payload, "nonce", decode_quantity),
                block_hash=_field(payload, "blockHash", decode_hash),
                block_number=_field(payload, "blockNumber", decode_quantity),
                transaction_index=_field(payload, "transactionIndex", decode_quantity),
                from_=_field(payload, "from", decode_address),
                to=_field(payload, "to", decode_address),
                value=decode_quantity(payload.get("value", "0x0")),
                gas=decode_quantity(payload.get("gas", "0x0")),
                gas_price=decode_quantity(payload.get("gasPrice", "0x0")),
                input=decode_data(payload.get("input", "0x")),
            )
        except DecodeError as exc:
            raise DecodeError("transaction", payload) from exc


@dataclass(frozen=True)
class TransactionReceipt:
    transaction_hash: Hash
    transaction_index: Optional[int]
    block_hash: Optional[Hash]
    block_number: Optional[int]
    cumulative_gas_used: int
    gas_used: int
    contract_address: Optional[Address]
    logs: tuple[Log, ...] = ()
    status: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "TransactionReceipt":
        payload = _require_dict("transaction receipt", payload)
        try:
            return cls(
                transaction_hash=decode_hash(payload.get("transactionHash")),
                transaction_index=_field(payload, "transactionIndex", decode_quantity),
                block_hash=_field(payload, "blockHash", decode_hash),
                block_number=_field(payload, "blockNumber", decode_quantity),
                cumulative_gas_used=decode_quantity(payload.get("cumulativeGasUsed", "0x0")),
                gas_used=decode_quantity(payload.get("gasUsed", "0x0")),
                contract_address=_field(payload, "contractAddress", decode_address),
                logs=tuple(decode_list(Log.from_dict)(payload.get("logs", []))),
                status=_field(payload, "status", decode_quantity),
            )
        except DecodeError as exc:
            raise DecodeError("transaction receipt", payload) from exc


def _decode_block_transaction(raw: Any) -> Union[Hash, Transaction]:
    if isinstance(raw, dict):
        return Transaction.from_dict(raw)
    return decode_hash(raw)


@dataclass(frozen=True)
class Block:
    number: Optional[int]
    hash: Optional[Hash]
    parent_hash: Hash
    nonce: Optional[bytes]
    sha3_uncles: Optional[Hash]
    logs_bloom: Optional[bytes]
    transactions_root: Optional[Hash]
    state_root: Optional[Hash]
    receipts_root: Optional[Hash]
    miner: Optional[Address]
    difficulty: int
    total_difficulty: Optional[int]
    extra_data: bytes
    size: Optional[int]
    gas_limit: int
    gas_used: int
    timestamp: int
    transactions: tuple[Union[Hash, Transaction], ...] = ()
    uncles: tuple[Hash, ...] = ()

    @classmethod
    def from_dict(cls, payload: Any) -> "Block":
        payload = _require_dict("block", payload)
        try:
            return cls(
                number=_field(payload, "number", decode_quantity),
                hash=_field(payload, "hash", decode_hash),
                parent_hash=decode_hash(payload.get("parentHash")),
                nonce=_field(payload, "nonce", decode_data),
                sha3_uncles=_field(payload, "sha3Uncles", decode_hash),
                logs_bloom=_field(payload, "logsBloom", decode_data),
                transactions_root=_field(payload, "transactionsRoot", decode_hash),
                state_root=_field(payload, "stateRoot", decode_hash),
                receipts_root=_field(payload, "receiptsRoot", decode_hash),
                miner=_field(payload, "miner", decode_address),
                difficulty=decode_quantity(payload.get("difficulty", "0x0")),
                total_difficulty=_field(payload, "totalDifficulty", decode_quantity),
                extra_data=decode_data(payload.get("extraData", "0x")),
                size=_field(payload, "size", decode_quantity),
                gas_limit=decode_quantity(payload.get("gasLimit", "0x0")),
                gas_used=decode_quantity(payload.get("gasUsed", "0x0")),
                timestamp=decode_quantity(payload.get("timestamp", "0x0")),
                transactions=tuple(
                    decode_list(_decode_block_transaction)(payload.get("transactions", []))
                ),
                uncles=tuple(decode_list(decode_hash)(payload.get("uncles", []))),
            )
        except DecodeError as exc:
            raise DecodeError("block", payload) from exc


@dataclass(frozen=True)
class SyncStatus:
    syncing: bool
    starting_block: Optional[int] = None
    current_block: Optional[int] = None
    highest_block: Optional[int] = None

    @classmethod
    def from_result(cls, payload: Any) -> "SyncStatus":
        """Decode mc_syncing, which answers false or a progress object."""
        if payload is False:
            return cls(syncing=False)
        payload = _require_dict("sync status", payload)
        try:
            return cls(
                syncing=True,
                starting_block=_field(payload, "startingBlock", decode_quantity),
                current_block=_field(payload, "currentBlock", decode_quantity),
                highest_block=_field(payload, "highestBlock", decode_quantity),
            )
        except DecodeError as exc:
            raise DecodeError("sync status", payload) from exc


@dataclass(frozen=True)
class TransactionRequest:
    """
    Call or transaction parameters for mc_sendTransaction, mc_call and
    mc_estimateGas.

    Attributes:
        from_: Sender address
        to: Recipient address (None for contract creation)
        gas: Gas limit in sha
        gas_price: Gas price in sha
        value: Amount to transfer in sha
        data: Call data or contract init code
        nonce: Explicit nonce (node assigns one when omitted)
    """
    from_: Optional[AddressLike] = None
    to: Optional[AddressLike] = None
    gas: Optional[QuantityLike] = None
    gas_price: Optional[QuantityLike] = None
    value: Optional[QuantityLike] = None
    data: Optional[bytes] = None
    nonce: Optional[int] = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.from_ is not None:
            params["from"] = address_param(self.from_)
        if self.to is not None:
            params["to"] = address_param(self.to)
        if self.gas is not None:
            params["gas"] = to_hex(self.gas)
        if self.gas_price is not None:
            params["gasPrice"] = to_hex(self.gas_price)
        if self.value is not None:
            params["value"] = to_hex(self.value)
        if self.data is not None:
            params["data"] = bytes_to_hex(self.data)
        if self.nonce is not None:
            params["nonce"] = to_hex(self.nonce)
        return params


Topic = Union[HashLike, None, Sequence[HashLike]]


def _topic_param(topic: Topic) -> Union[str, None, list[str]]:
    if topic is None:
        return None
    if isinstance(topic, (Hash, str)):
        return hash_param(topic)
    return [hash_param(item) for item in topic]


@dataclass(frozen=True)
class FilterOption:
    """Log matching criteria for mc_newFilter and mc_getLogs."""
    from_block: BlockSelector = None
    to_block: BlockSelector = None
    address: Union[AddressLike, Sequence[AddressLike], None] = None
    topics: Sequence[Topic] = field(default_factory=tuple)

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.from_block is not None:
            params["fromBlock"] = block_selector(self.from_block)
        if self.to_block is not None:
            params["toBlock"] = block_selector(self.to_block)
        if self.address is not None:
            if isinstance(self.address, (Address, str)):
                params["address"] = address_param(self.address)
            else:
                params["address"] = [address_param(item) for item in self.address]
        if self.topics:
            params["topics"] = [_topic_param(topic) for topic in self.topics]
        return params
