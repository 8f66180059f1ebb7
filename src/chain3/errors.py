"""Error taxonomy shared by every chain3 layer.

Each error carries an ``exit_code`` that the CLI uses when it aborts.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


class Chain3Error(RuntimeError):
    exit_code: int = 1


class TransportError(Chain3Error):
    """The provider could not deliver the request or read the reply."""

    exit_code = 2


class RpcError(Chain3Error):
    """The node answered with a JSON-RPC error object."""

    exit_code = 3

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data


class DecodeError(Chain3Error, ValueError):
    """A result did not have the shape the caller asked for."""

    exit_code = 4

    def __init__(self, expected: str, value: Any) -> None:
        shown = repr(value)
        if len(shown) > 120:
            shown = shown[:117] + "..."
        super().__init__(f"Cannot decode {expected} from {shown}")
        self.expected = expected
        self.value = value


class UnknownUnitError(Chain3Error, ValueError):
    exit_code = 5

    def __init__(self, unit: str, known: Iterable[str] = ()) -> None:
        self.unit = unit
        self.known = sorted(known)
        message = f"Unknown unit {unit!r}"
        if self.known:
            message += f"; use one of: {', '.join(self.known)}"
        super().__init__(message)


class InvalidStateError(Chain3Error):
    """Operation attempted on a filter that was already uninstalled."""

    exit_code = 6


class ConfigError(Chain3Error, ValueError):
    exit_code = 7

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key
