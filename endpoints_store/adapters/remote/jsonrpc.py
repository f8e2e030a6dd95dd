"""Cloud Endpoints JSON-RPC client adapter.

Implements RemoteApiPort by posting JSON-RPC 2.0 calls to the
``{root}/rpc`` endpoint of a Cloud Endpoints API, the same protocol the
generated JavaScript client uses. Each prepared request is executed as
a task on the running event loop and reports through its callback.

Transport failures are delivered to the callback as an error envelope
rather than raised, so callers see one error shape for everything.
"""

import asyncio
import itertools
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from endpoints_store.core.ports import (
    RemoteApiPort,
    RemoteRequest,
    RemoteResponse,
    ResponseCallback,
)

logger = logging.getLogger(__name__)

# JSON-RPC "server error" range, used when the HTTP layer itself fails
TRANSPORT_ERROR_CODE = -32000


def _error_envelope(code: int, message: str) -> dict[str, Any]:
    return {"error": {"code": code, "message": message}}


class EndpointsRpcRequest(RemoteRequest):
    """A prepared JSON-RPC call. Nothing is sent until ``execute``."""

    def __init__(self, client: "EndpointsRpcClient", method: str, params: Mapping[str, Any]):
        self.client = client
        self.method = method
        self.params = dict(params)

    def execute(self, callback: ResponseCallback) -> None:
        """Send the call in the background and report to ``callback``.

        Must be called with a running event loop.
        """
        self.client.schedule(self, callback)

    def __repr__(self) -> str:
        return f"EndpointsRpcRequest(method={self.method!r}, params={self.params!r})"


class EndpointsRpcClient(RemoteApiPort):
    """httpx-backed JSON-RPC client for one Endpoints API resource."""

    def __init__(
        self,
        root_url: str,
        api_name: str,
        version: str = "v1",
        resource: str = "",
        auth_token: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            root_url: API root, e.g. http://localhost:8080/_ah/api
            api_name: Name of the Endpoints API.
            version: API version sent as ``apiVersion``.
            resource: Optional resource collection the methods live on.
            auth_token: Optional OAuth bearer token.
            timeout: HTTP timeout in seconds.
            transport: Optional httpx transport (used by tests).

        Raises:
            ValueError: If api_name is empty.
        """
        if not api_name:
            raise ValueError("api_name must be a non-empty string")

        self.root_url = root_url.rstrip("/")
        self.api_name = api_name
        self.version = version
        self.resource = resource
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        self.client = httpx.AsyncClient(
            base_url=self.root_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )
        self._request_ids = itertools.count(1)
        self._in_flight: set[asyncio.Task] = set()

    async def __aenter__(self) -> "EndpointsRpcClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Wait for in-flight calls, then close the httpx client."""
        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)
        await self.client.aclose()

    def method_id(self, method: str) -> str:
        """Return the fully qualified RPC method id, e.g. ``shop.items.list``."""
        return ".".join(part for part in (self.api_name, self.resource, method) if part)

    def get(self, params: Mapping[str, Any]) -> EndpointsRpcRequest:
        return EndpointsRpcRequest(self, self.method_id("get"), params)

    def update(self, record: Mapping[str, Any]) -> EndpointsRpcRequest:
        return EndpointsRpcRequest(self, self.method_id("update"), record)

    def insert(self, record: Mapping[str, Any]) -> EndpointsRpcRequest:
        return EndpointsRpcRequest(self, self.method_id("insert"), record)

    def remove(self, params: Mapping[str, Any]) -> EndpointsRpcRequest:
        return EndpointsRpcRequest(self, self.method_id("remove"), params)

    def list(self, query_options: Mapping[str, Any]) -> EndpointsRpcRequest:
        return EndpointsRpcRequest(self, self.method_id("list"), query_options)

    def schedule(self, request: EndpointsRpcRequest, callback: ResponseCallback) -> None:
        """Run ``request`` as a background task that ends in ``callback``."""
        task = asyncio.get_running_loop().create_task(self._run(request, callback))
        self._in_flight.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._in_flight.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                f"Response callback failed: {task.exception()}",
                exc_info=task.exception(),
            )

    async def _run(self, request: EndpointsRpcRequest, callback: ResponseCallback) -> None:
        try:
            response = await self.call(request.method, request.params)
        except Exception as e:
            # The callback must still fire exactly once
            logger.error(f"Unexpected error calling {request.method}: {e}", exc_info=True)
            response = _error_envelope(TRANSPORT_ERROR_CODE, str(e))
        callback(response)

    async def call(self, method: str, params: Mapping[str, Any]) -> RemoteResponse:
        """Post one JSON-RPC call and return the decoded envelope.

        Args:
            method: Fully qualified method id.
            params: Call parameters.

        Returns:
            The JSON-RPC envelope (``result`` or ``error``). HTTP and
            decoding failures are returned as an ``error`` envelope.
        """
        body = {
            "jsonrpc": "2.0",
            "id": f"rpc{next(self._request_ids)}",
            "method": method,
            "apiVersion": self.version,
            "params": dict(params),
        }
        logger.debug(f"Calling {method} on {self.root_url}")

        try:
            response = await self.client.post("/rpc", json=body)
        except httpx.HTTPError as e:
            logger.error(f"Failed to call {method}: {e}", exc_info=True)
            return _error_envelope(TRANSPORT_ERROR_CODE, str(e))

        try:
            data = response.json()
        except ValueError:
            logger.warning(
                f"Undecodable response from {method} (HTTP {response.status_code})"
            )
            return _error_envelope(
                response.status_code,
                f"Invalid JSON response (HTTP {response.status_code})",
            )

        # Batch-style replies wrap the single envelope in a list
        if isinstance(data, list):
            data = data[0] if data else {}

        if isinstance(data, Mapping) and data.get("error"):
            logger.debug(f"{method} returned error: {data['error']}")
            return data

        if not response.is_success:
            return _error_envelope(
                response.status_code,
                response.reason_phrase or f"HTTP {response.status_code}",
            )

        return data
