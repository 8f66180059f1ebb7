from __future__ import annotations

from ..rpc.manager import RequestManager
from ..rpc.methods import RPCMethod
from ..types import decode_bool, decode_quantity, decode_string


class Net:
    """net_* methods: network id, listening flag and peer count."""

    def __init__(self, manager: RequestManager) -> None:
        self._manager = manager

    def version(self) -> str:
        return decode_string(self._manager.send(RPCMethod.net_version, []))

    def listening(self) -> bool:
        return decode_bool(self._manager.send(RPCMethod.net_listening, []))

    def peer_count(self) -> int:
        return decode_quantity(self._manager.send(RPCMethod.net_peerCount, []))
