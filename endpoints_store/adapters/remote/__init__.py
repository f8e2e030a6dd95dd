"""Remote API client adapters."""

from .jsonrpc import EndpointsRpcClient, EndpointsRpcRequest

__all__ = ["EndpointsRpcClient", "EndpointsRpcRequest"]
