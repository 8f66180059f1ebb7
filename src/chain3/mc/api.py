"""
Mc - typed facade over the mc_* JSON-RPC methods.

Each operation normalizes its arguments into wire form, dispatches
through the shared RequestManager and decodes the raw result into a
typed value. Operations hold no state of their own beyond the registry of
filters they created, so one Mc can be used from several threads.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional, Sequence, TypeVar

from ..config import DEFAULT_POLL_INTERVAL
from ..errors import DecodeError
from ..rpc.manager import RequestManager
from ..rpc.methods import RPCMethod
from ..types import (
    Address,
    AddressLike,
    Block,
    BlockSelector,
    FilterOption,
    Hash,
    HashLike,
    Log,
    SyncStatus,
    Transaction,
    TransactionReceipt,
    TransactionRequest,
    address_param,
    block_selector,
    decode_address,
    decode_bool,
    decode_data,
    decode_hash,
    decode_list,
    decode_optional,
    decode_quantity,
    decode_string,
    hash_param,
)
from ..units import to_hex
from ..utils import bytes_to_hex
from .filter import Filter, FilterKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _decode_filter_id(raw: Any) -> str:
    if isinstance(raw, str) and raw:
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool):
        return to_hex(raw)
    raise DecodeError("filter id", raw)


class Mc:
    def __init__(self, manager: RequestManager, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        self._manager = manager
        self.poll_interval = poll_interval
        self._filters: set[Filter] = set()
        self._filters_lock = threading.Lock()

    def _call(self, method: str, params: Sequence[Any], decode: Callable[[Any], T]) -> T:
        return decode(self._manager.send(method, params))

    # ------------------------------------------------------------------
    # Node status
    # ------------------------------------------------------------------

    def protocol_version(self) -> str:
        return self._call(RPCMethod.mc_protocolVersion, [], decode_string)

    def syncing(self) -> SyncStatus:
        return self._call(RPCMethod.mc_syncing, [], SyncStatus.from_result)

    def coinbase(self) -> Address:
        return self._call(RPCMethod.mc_coinbase, [], decode_address)

    def mining(self) -> bool:
        return self._call(RPCMethod.mc_mining, [], decode_bool)

    def hash_rate(self) -> int:
        return self._call(RPCMethod.mc_hashrate, [], decode_quantity)

    def gas_price(self) -> int:
        """Current gas price in sha."""
        return self._call(RPCMethod.mc_gasPrice, [], decode_quantity)

    def accounts(self) -> list[Address]:
        return self._call(RPCMethod.mc_accounts, [], decode_list(decode_address, "address list"))

    def block_number(self) -> int:
        return self._call(RPCMethod.mc_blockNumber, [], decode_quantity)

    def get_compilers(self) -> list[str]:
        return self._call(RPCMethod.mc_getCompilers, [], decode_list(decode_string, "string list"))

    # ------------------------------------------------------------------
    # Account state
    # ------------------------------------------------------------------

    def get_balance(self, address: AddressLike, block: BlockSelector = "latest") -> int:
        """
        Get the balance of an account.

        Args:
            address: 0x-prefixed address
            block: Block selector ("latest", "pending", "earliest" or a number)

        Returns:
            Balance in sha
        """
        return self._call(
            RPCMethod.mc_getBalance,
            [address_param(address), block_selector(block)],
            decode_quantity,
        )

    def get_storage_at(self, address: AddressLike, position: int, block: BlockSelector = "latest") -> bytes:
        return self._call(
            RPCMethod.mc_getStorageAt,
            [address_param(address), to_hex(position), block_selector(block)],
            decode_data,
        )

    def get_transaction_count(self, address: AddressLike, block: BlockSelector = "latest") -> int:
        return self._call(
            RPCMethod.mc_getTransactionCount,
            [address_param(address), block_selector(block)],
            decode_quantity,
        )

    def get_code(self, address: AddressLike, block: BlockSelector = "latest") -> bytes:
        return self._call(
            RPCMethod.mc_getCode,
            [address_param(address), block_selector(block)],
            decode_data,
        )

    # ------------------------------------------------------------------
    # Block and uncle counts
    # ------------------------------------------------------------------

    def get_block_transaction_count_by_hash(self, block_hash: HashLike) -> int:
        return self._call(
            RPCMethod.mc_getBlockTransactionCountByHash, [hash_param(block_hash)], decode_quantity
        )

    def get_block_transaction_count_by_number(self, block: BlockSelector = "latest") -> int:
        return self._call(
            RPCMethod.mc_getBlockTransactionCountByNumber, [block_selector(block)], decode_quantity
        )

    def get_uncle_count_by_block_hash(self, block_hash: HashLike) -> int:
        return self._call(
            RPCMethod.mc_getUncleCountByBlockHash, [hash_param(block_hash)], decode_quantity
        )

    def get_uncle_count_by_block_number(self, block: BlockSelector = "latest") -> int:
        return self._call(
            RPCMethod.mc_getUncleCountByBlockNumber, [block_selector(block)], decode_quantity
        )

    # ------------------------------------------------------------------
    # Signing, transactions and calls
    # ------------------------------------------------------------------

    def sign(self, address: AddressLike, data: bytes) -> bytes:
        """Ask the node to sign ``data`` with an account it manages."""
        return self._call(
            RPCMethod.mc_sign, [address_param(address), bytes_to_hex(data)], decode_data
        )

    def send_transaction(self, request: TransactionRequest) -> Hash:
        return self._call(RPCMethod.mc_sendTransaction, [request.to_params()], decode_hash)

    def send_raw_transaction(self, raw_tx: bytes) -> Hash:
        return self._call(RPCMethod.mc_sendRawTransaction, [bytes_to_hex(raw_tx)], decode_hash)

    def call(self, request: TransactionRequest, block: BlockSelector = "latest") -> bytes:
        return self._call(
            RPCMethod.mc_call, [request.to_params(), block_selector(block)], decode_data
        )

    def estimate_gas(self, request: TransactionRequest, block: BlockSelector = None) -> int:
        params: list[Any] = [request.to_params()]
        if block is not None:
            params.append(block_selector(block))
        return self._call(RPCMethod.mc_estimateGas, params, decode_quantity)

    # ------------------------------------------------------------------
    # Blocks, transactions and receipts
    # ------------------------------------------------------------------

    def get_block_by_hash(self, block_hash: HashLike, full_transactions: bool = False) -> Optional[Block]:
        return self._call(
            RPCMethod.mc_getBlockByHash,
            [hash_param(block_hash), full_transactions],
            decode_optional(Block.from_dict),
        )

    def get_block_by_number(self, block: BlockSelector = "latest", full_transactions: bool = False) -> Optional[Block]:
        return self._call(
            RPCMethod.mc_getBlockByNumber,
            [block_selector(block), full_transactions],
            decode_optional(Block.from_dict),
        )

    def get_transaction_by_hash(self, tx_hash: HashLike) -> Optional[Transaction]:
        return self._call(
            RPCMethod.mc_getTransactionByHash,
            [hash_param(tx_hash)],
            decode_optional(Transaction.from_dict),
        )

    def get_transaction_by_block_hash_and_index(self, block_hash: HashLike, index: int) -> Optional[Transaction]:
        return self._call(
            RPCMethod.mc_getTransactionByBlockHashAndIndex,
            [hash_param(block_hash), to_hex(index)],
            decode_optional(Transaction.from_dict),
        )

    def get_transaction_by_block_number_and_index(self, block: BlockSelector, index: int) -> Optional[Transaction]:
        return self._call(
            RPCMethod.mc_getTransactionByBlockNumberAndIndex,
            [block_selector(block), to_hex(index)],
            decode_optional(Transaction.from_dict),
        )

    def get_transaction_receipt(self, tx_hash: HashLike) -> Optional[TransactionReceipt]:
        """
        Get the receipt of a mined transaction.

        Returns:
            The receipt, or None while the transaction is still pending
        """
        return self._call(
            RPCMethod.mc_getTransactionReceipt,
            [hash_param(tx_hash)],
            decode_optional(TransactionReceipt.from_dict),
        )

    def get_uncle_by_block_hash_and_index(self, block_hash: HashLike, index: int) -> Optional[Block]:
        return self._call(
            RPCMethod.mc_getUncleByBlockHashAndIndex,
            [hash_param(block_hash), to_hex(index)],
            decode_optional(Block.from_dict),
        )

    def get_uncle_by_block_number_and_index(self, block: BlockSelector, index: int) -> Optional[Block]:
        return self._call(
            RPCMethod.mc_getUncleByBlockNumberAndIndex,
            [block_selector(block), to_hex(index)],
            decode_optional(Block.from_dict),
        )

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def _install(self, method: str, params: Sequence[Any], kind: FilterKind,
                 option: Optional[FilterOption]) -> Filter:
        filter_id = self._call(method, params, _decode_filter_id)
        flt = Filter(self, filter_id, kind, option=option, poll_interval=self.poll_interval)
        with self._filters_lock:
            self._filters.add(flt)
        logger.debug("Installed %s filter %s", kind.value, filter_id)
        return flt

    def new_filter(self, option: Optional[FilterOption] = None) -> Filter:
        """
        Install a log filter on the node.

        Args:
            option: Log matching criteria (default: match everything)

        Returns:
            Filter in the created state
        """
        option = option or FilterOption()
        return self._install(RPCMethod.mc_newFilter, [option.to_params()], FilterKind.LOG, option)

    def new_block_filter(self) -> Filter:
        return self._install(RPCMethod.mc_newBlockFilter, [], FilterKind.BLOCK, None)

    def new_pending_transaction_filter(self) -> Filter:
        return self._install(
            RPCMethod.mc_newPendingTransactionFilter, [], FilterKind.PENDING_TRANSACTION, None
        )

    def uninstall_filter(self, flt: Filter) -> bool:
        """
        Stop polling and release the filter on the node.

        Local cancellation always happens first, so polling has stopped
        even if the RPC call fails. Once the node has answered, repeated
        calls return False without another RPC call.

        Returns:
            Whether the node confirmed removal
        """
        flt.cancel()
        if flt.released:
            return False
        removed = self._call(RPCMethod.mc_uninstallFilter, [flt.id], decode_bool)
        flt.mark_released()
        with self._filters_lock:
            self._filters.discard(flt)
        logger.debug("Uninstalled filter %s (node confirmed: %s)", flt.id, removed)
        return removed

    def get_filter_changes(self, flt: Filter) -> list[Any]:
        """
        Poll a filter once for entries new since the previous poll.

        Returns:
            Log entries for log filters; block or transaction hashes for
            block and pending-transaction filters

        Raises:
            InvalidStateError: If the filter has been uninstalled
        """
        flt.ensure_active()
        return self._call(
            RPCMethod.mc_getFilterChanges,
            [flt.id],
            decode_list(flt.decode_entry, "filter changes"),
        )

    def get_filter_logs(self, flt: Filter) -> list[Log]:
        flt.ensure_active()
        return self._call(
            RPCMethod.mc_getFilterLogs, [flt.id], decode_list(Log.from_dict, "log list")
        )

    def get_logs(self, option: Optional[FilterOption] = None) -> list[Log]:
        option = option or FilterOption()
        return self._call(
            RPCMethod.mc_getLogs, [option.to_params()], decode_list(Log.from_dict, "log list")
        )

    def active_filters(self) -> list[Filter]:
        with self._filters_lock:
            return list(self._filters)

    def uninstall_all_filters(self) -> None:
        for flt in self.active_filters():
            self.uninstall_filter(flt)

    # ------------------------------------------------------------------
    # Mining work
    # ------------------------------------------------------------------

    def get_work(self) -> tuple[Hash, Hash, Hash]:
        """
        Get the current mining work package.

        Returns:
            Tuple of (header pow-hash, seed hash, boundary)
        """
        work = self._call(RPCMethod.mc_getWork, [], decode_list(decode_hash, "work package"))
        if len(work) < 3:
            raise DecodeError("work package", work)
        return work[0], work[1], work[2]

    def submit_work(self, nonce: int, header: HashLike, mix_digest: HashLike) -> bool:
        return self._call(
            RPCMethod.mc_submitWork,
            [f"0x{nonce:016x}", hash_param(header), hash_param(mix_digest)],
            decode_bool,
        )

    def submit_hashrate(self, hashrate: int, client_id: HashLike) -> bool:
        return self._call(
            RPCMethod.mc_submitHashrate,
            [f"0x{hashrate:064x}", hash_param(client_id)],
            decode_bool,
        )
