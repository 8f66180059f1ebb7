"""
Chain3 - entry point tying a provider to the mc and net facades.

    chain3 = Chain3(HTTPProvider("http://localhost:8545"))
    chain3.mc.block_number()
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from fractions import Fraction
from typing import Any, Optional

from . import address, units, utils
from .config import Settings, load_settings
from .errors import RpcError, TransportError
from .mc.api import Mc
from .mc.net import Net
from .rpc.manager import RequestManager
from .rpc.provider import HTTPProvider, Provider
from .units import QuantityLike, UnitConverter

logger = logging.getLogger(__name__)


class Chain3:
    def __init__(
        self,
        provider: Optional[Provider] = None,
        settings: Optional[Settings] = None,
        converter: Optional[UnitConverter] = None,
    ) -> None:
        settings = settings or load_settings()
        if provider is None:
            provider = HTTPProvider(settings.rpc_url, timeout=settings.timeout)
        self.settings = settings
        self.converter = converter or UnitConverter()
        self._manager = RequestManager(provider)
        self.mc = Mc(self._manager, poll_interval=settings.poll_interval)
        self.net = Net(self._manager)

    @property
    def manager(self) -> RequestManager:
        return self._manager

    @property
    def current_provider(self) -> Provider:
        return self._manager.provider

    def set_provider(self, provider: Provider) -> None:
        self._manager.provider = provider

    def is_connected(self) -> bool:
        """Whether the node answers net_listening."""
        try:
            return self.net.listening()
        except (TransportError, RpcError) as exc:
            logger.debug("Node not reachable: %s", exc)
            return False

    def reset(self) -> None:
        """Uninstall every filter created through ``mc`` and stop polling."""
        self.mc.uninstall_all_filters()

    def __enter__(self) -> "Chain3":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.reset()

    # ------------------------------------------------------------------
    # Encoding helpers
    # ------------------------------------------------------------------

    @staticmethod
    def sha3(data: str, encoding: str = "default") -> str:
        """Keccak-256 (not the standardized SHA3-256) of text or hex data."""
        if encoding == "hex":
            raw = utils.hex_to_bytes(data)
        else:
            raw = data.encode("utf-8")
        return utils.bytes_to_hex(utils.keccak256(raw))

    @staticmethod
    def to_hex(value: Any) -> str:
        if isinstance(value, bool):
            return "0x1" if value else "0x0"
        if isinstance(value, str):
            return utils.bytes_to_hex(value.encode("utf-8"))
        if isinstance(value, (int, float, Decimal, Fraction)):
            return units.to_hex(value)
        encoded = json.dumps(value, separators=(",", ":"), sort_keys=True)
        return utils.bytes_to_hex(encoded.encode("utf-8"))

    to_ascii = staticmethod(utils.to_ascii)
    from_ascii = staticmethod(utils.from_ascii)
    to_decimal = staticmethod(units.to_decimal)
    from_decimal = staticmethod(units.to_hex)
    to_big_number = staticmethod(units.to_quantity)
    is_address = staticmethod(address.is_address)
    is_checksum_address = staticmethod(address.is_checksum_address)
    to_checksum_address = staticmethod(address.to_checksum_address)

    def to_sha(self, number: QuantityLike, unit: str = units.DEFAULT_UNIT) -> str:
        return self.converter.to_sha(number, unit)

    def from_sha(self, number: QuantityLike, unit: str = units.DEFAULT_UNIT) -> str:
        return self.converter.from_sha(number, unit)
