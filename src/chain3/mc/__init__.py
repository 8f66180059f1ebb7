"""
Typed facades over the node's mc_* and net_* RPC methods, the filter
engine, and contract call helpers.
"""

from .api import Mc
from .contract import Contract, decode_function_result, encode_function_call, load_abi
from .filter import Filter, FilterKind, FilterState, FilterWatcher
from .net import Net

__all__ = [
    "Contract",
    "Filter",
    "FilterKind",
    "FilterState",
    "FilterWatcher",
    "Mc",
    "Net",
    "decode_function_result",
    "encode_function_call",
    "load_abi",
]
