"""
Transport providers.

A provider takes a built RpcRequest and returns the node's RpcResponse,
raising TransportError when the message cannot be delivered or read.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from ..config import DEFAULT_TIMEOUT
from ..errors import TransportError
from .manager import RpcRequest, RpcResponse
from .schemas import SchemaValidationError

logger = logging.getLogger(__name__)


class Provider(Protocol):
    def send(self, request: RpcRequest) -> RpcResponse:
        ...


class HTTPProvider:
    """JSON-RPC over HTTP POST using httpx."""

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        if "://" not in url:
            url = "http://" + url
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._headers = headers or {}

    def __repr__(self) -> str:
        return f"HTTPProvider({self.url!r})"

    def send(self, request: RpcRequest) -> RpcResponse:
        """
        POST one request envelope and read the response envelope.

        Raises:
            TransportError: On connection failure, timeout, HTTP error
                status, non-JSON body or a malformed envelope
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.url, json=request.to_dict(), headers=self._headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"{request.method}: HTTP {exc.response.status_code} from {self.url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{request.method}: {exc.__class__.__name__}: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"{request.method}: response is not JSON") from exc

        try:
            return RpcResponse.from_dict(data)
        except SchemaValidationError as exc:
            raise TransportError(f"{request.method}: malformed response: {exc}") from exc
