"""
JSON-RPC dispatch layer.

Builds request envelopes, hands them to a provider, and turns the generic
response into either a result payload or an RpcError. Uses httpx for the
HTTP provider and jsonschema to reject malformed response envelopes.
"""

from .manager import ErrorObject, RequestManager, RpcRequest, RpcResponse
from .methods import RPCMethod
from .provider import HTTPProvider, Provider

__all__ = [
    "ErrorObject",
    "HTTPProvider",
    "Provider",
    "RPCMethod",
    "RequestManager",
    "RpcRequest",
    "RpcResponse",
]
