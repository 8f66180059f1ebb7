"""
Request Manager - JSON-RPC envelopes and generic response decoding.

The manager never looks at method-specific payloads: it returns the raw
``result`` and leaves typed decoding to the facades in chain3.mc.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Sequence

from ..errors import Chain3Error, RpcError, TransportError
from .schemas import RESPONSE_SCHEMA, SchemaRegistry, SchemaValidationError

if TYPE_CHECKING:
    from .provider import Provider

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


@dataclass(frozen=True)
class RpcRequest:
    id: int
    method: str
    params: tuple[Any, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": self.id,
            "method": self.method,
            "params": list(self.params),
        }


@dataclass(frozen=True)
class ErrorObject:
    code: int
    message: str
    data: Any = None


@dataclass(frozen=True)
class RpcResponse:
    id: Any
    result: Any = None
    error: Optional[ErrorObject] = None

    @classmethod
    def from_dict(cls, payload: Any, registry: SchemaRegistry | None = None) -> "RpcResponse":
        """
        Build a response from a decoded JSON envelope.

        Raises:
            SchemaValidationError: If the envelope is not JSON-RPC 2.0
        """
        registry = registry or SchemaRegistry.default()
        registry.validate_instance(payload, RESPONSE_SCHEMA)
        error = payload.get("error")
        if error is not None:
            return cls(
                id=payload["id"],
                error=ErrorObject(error["code"], error["message"], error.get("data")),
            )
        return cls(id=payload["id"], result=payload.get("result"))

    def to_dict(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": self.id}
        if self.error is not None:
            error: dict[str, Any] = {"code": self.error.code, "message": self.error.message}
            if self.error.data is not None:
                error["data"] = self.error.data
            envelope["error"] = error
        else:
            envelope["result"] = self.result
        return envelope


class RequestManager:
    """Assigns request ids and dispatches calls to a provider.

    Safe to share between threads: the id counter is the only mutable
    state and is advanced under a lock.
    """

    def __init__(self, provider: "Provider") -> None:
        self._provider = provider
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def provider(self) -> "Provider":
        return self._provider

    @provider.setter
    def provider(self, provider: "Provider") -> None:
        self._provider = provider

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def build_request(self, method: str, params: Sequence[Any] = ()) -> RpcRequest:
        return RpcRequest(id=self.next_id(), method=method, params=tuple(params))

    def send(self, method: str, params: Sequence[Any] = ()) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "mc_blockNumber")
            params: RPC parameters, already in wire form

        Returns:
            Result field from the RPC response

        Raises:
            TransportError: If the provider fails or the reply is malformed
            RpcError: If the node answers with an error object
        """
        request = self.build_request(method, params)
        logger.debug("-> %s #%d %s", request.method, request.id, list(request.params))
        try:
            response = self._provider.send(request)
        except SchemaValidationError as exc:
            raise TransportError(f"Malformed response to {method}: {exc}") from exc
        except Chain3Error:
            raise
        except Exception as exc:
            raise TransportError(f"Provider failed on {method}: {exc}") from exc

        if response.id != request.id:
            raise TransportError(
                f"Response id {response.id!r} does not match request id {request.id}"
            )
        if response.error is not None:
            logger.debug("<- %s #%d error %s", method, request.id, response.error.code)
            raise RpcError(response.error.code, response.error.message, response.error.data)

        logger.debug("<- %s #%d ok", method, request.id)
        return response.result
