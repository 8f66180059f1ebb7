__all__ = [
    # Client
    "Chain3",
    "Settings",
    "load_settings",
    # Facades
    "Mc",
    "Net",
    "Contract",
    # Filters
    "Filter",
    "FilterKind",
    "FilterState",
    "FilterWatcher",
    # Dispatch
    "HTTPProvider",
    "Provider",
    "RequestManager",
    "RpcRequest",
    "RpcResponse",
    # Errors
    "Chain3Error",
    "ConfigError",
    "DecodeError",
    "InvalidStateError",
    "RpcError",
    "TransportError",
    "UnknownUnitError",
    # Types
    "Address",
    "Block",
    "FilterOption",
    "Hash",
    "Log",
    "SyncStatus",
    "Transaction",
    "TransactionReceipt",
    "TransactionRequest",
    # Units
    "Direction",
    "UnitConverter",
    "UnitTable",
    "convert",
    "from_sha",
    "to_decimal",
    "to_hex",
    "to_quantity",
    "to_sha",
    # Addresses
    "is_address",
    "is_checksum_address",
    "to_checksum_address",
]

from .address import is_address, is_checksum_address, to_checksum_address
from .chain3 import Chain3
from .config import Settings, load_settings
from .errors import (
    Chain3Error,
    ConfigError,
    DecodeError,
    InvalidStateError,
    RpcError,
    TransportError,
    UnknownUnitError,
)
from .mc import Contract, Filter, FilterKind, FilterState, FilterWatcher, Mc, Net
from .rpc import HTTPProvider, Provider, RequestManager, RpcRequest, RpcResponse
from .types import (
    Address,
    Block,
    FilterOption,
    Hash,
    Log,
    SyncStatus,
    Transaction,
    TransactionReceipt,
    TransactionRequest,
)
from .units import (
    Direction,
    UnitConverter,
    UnitTable,
    convert,
    from_sha,
    to_decimal,
    to_hex,
    to_quantity,
    to_sha,
)
