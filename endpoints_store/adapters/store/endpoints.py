"""Endpoints object store adapter.

Implements ObjectStorePort on top of a RemoteApiPort. Store operations
map one-to-one onto remote calls:

    get    -> api.get
    put    -> api.update (api.insert when the record has no identity)
    add    -> api.insert
    remove -> api.remove
    query  -> api.list

Each remote request reports through a completion callback, which is
adapted here into a single-resolution asyncio future.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from endpoints_store.core.errors import RemoteCallError
from endpoints_store.core.models import (
    PutDirectives,
    QueryOptions,
    QueryPage,
    Record,
    StoreConfig,
)
from endpoints_store.core.ports import (
    ObjectStorePort,
    RemoteApiPort,
    RemoteRequest,
    RemoteResponse,
)
from endpoints_store.core.query_results import QueryResults

logger = logging.getLogger(__name__)


class EndpointsStore(ObjectStorePort):
    """Object store backed by a Cloud Endpoints style remote API."""

    def __init__(self, config: StoreConfig):
        """Initialize the store.

        Args:
            config: Store configuration. ``config.api`` is required.

        Raises:
            AssertionError: If no remote API handle is configured.
        """
        if config is None or config.api is None:
            raise AssertionError("API not defined")
        self._config = config

    @property
    def api(self) -> RemoteApiPort:
        """The remote client this store talks to."""
        return self._config.api

    @property
    def id_property(self) -> str:
        """Name of the identity field of every record."""
        return self._config.id_property

    async def _execute(self, request: RemoteRequest) -> Any:
        """Execute a remote request and wait for its single outcome.

        Resolves with the response's ``result`` field when it is set,
        otherwise with the whole response. A response carrying an
        ``error`` raises RemoteCallError with that value.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def settle(response: RemoteResponse) -> None:
            # Only the first completion counts
            if future.done():
                return
            if isinstance(response, Mapping):
                error = response.get("error")
                if error:
                    future.set_exception(RemoteCallError(error))
                    return
                future.set_result(response.get("result") or response)
                return
            future.set_result(response)

        def on_response(response: RemoteResponse) -> None:
            loop.call_soon_threadsafe(settle, response)

        request.execute(on_response)
        return await future

    def _identity_params(self, id: Any) -> dict[str, Any]:
        return {self.id_property: id}

    def _effective_identity(self, record: Mapping[str, Any], directives: PutDirectives) -> Any:
        if directives.has_explicit_id:
            return directives.id
        return self.get_identity(record)

    async def get(self, id: Any) -> Record:
        """Retrieve a record by identity via ``api.get``.

        No existence check is made locally; not-found surfaces as the
        backend's error.
        """
        logger.debug(f"Fetching record {self.id_property}={id!r}")
        return await self._execute(self.api.get(self._identity_params(id)))

    def get_identity(self, record: Mapping[str, Any]) -> Any:
        """Return ``record[id_property]``, or None if absent."""
        return record.get(self.id_property)

    async def put(
        self,
        record: Record,
        options: PutDirectives | Mapping[str, Any] | None = None,
    ) -> Record:
        """Store a record via ``api.update``.

        The identity is ``options.id`` when supplied (even if None),
        otherwise the record's own identity. Without an identity the
        call is handed to ``add`` unchanged.
        """
        directives = PutDirectives.coerce(options)
        identity = self._effective_identity(record, directives)
        if identity is None:
            logger.debug("Record has no identity, delegating put to add")
            return await self.add(record, directives)

        # TODO: honor overwrite=False with a patch call once the remote API exposes one
        logger.debug(f"Updating record {self.id_property}={identity!r}")
        return await self._execute(self.api.update(record))

    async def add(
        self,
        record: Record,
        options: PutDirectives | Mapping[str, Any] | None = None,
    ) -> Record:
        """Create a record via ``api.insert``.

        A record that already carries an identity is inserted as-is;
        no conflict error is raised.
        """
        directives = PutDirectives.coerce(options)
        identity = self._effective_identity(record, directives)
        if identity is not None:
            logger.debug(f"Inserting record with existing {self.id_property}={identity!r}")
        else:
            logger.debug("Inserting new record")
        return await self._execute(self.api.insert(record))

    async def remove(self, id: Any) -> Any:
        """Delete a record by identity via ``api.remove``."""
        logger.debug(f"Removing record {self.id_property}={id!r}")
        return await self._execute(self.api.remove(self._identity_params(id)))

    def query(
        self,
        query: Any = None,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> QueryResults:
        """Query records via ``api.list``.

        Must be called with a running event loop; the remote call is
        issued right away. ``query`` is accepted for contract
        compatibility and is not sent to the backend.

        Returns:
            QueryResults whose ``total`` resolves after the items.
        """
        query_options = self._translate_query_options(QueryOptions.coerce(options))
        logger.debug(f"Listing records with {query_options}")
        request = self.api.list(query_options)
        return QueryResults(self._fetch_page(request, query_options))

    @staticmethod
    def _translate_query_options(options: QueryOptions) -> dict[str, Any]:
        """Map store query options onto the remote field names.

        ``start`` and ``count`` are only sent when truthy, so a start of
        0 is the same as no start at all.
        """
        query_options: dict[str, Any] = {}
        if options.start:
            query_options["offset"] = options.start
        if options.count:
            query_options["limit"] = options.count
        if options.sort:
            query_options["order"] = ",".join(
                item.to_order_term() for item in options.sort
            )
        return query_options

    async def _fetch_page(
        self, request: RemoteRequest, query_options: Mapping[str, Any]
    ) -> QueryPage:
        response = await self._execute(request)
        if not isinstance(response, Mapping):
            response = {}

        items = list(response.get("items") or [])
        if "count" in response:
            total = self._coerce_count(response["count"])
        else:
            total = len(items) + (query_options.get("offset") or 0)
            # A continuation marker means at least one more page exists
            if "nextPageToken" in response:
                total += len(items)

        return QueryPage(
            items=items,
            total=total,
            next_page_token=response.get("nextPageToken"),
        )

    @staticmethod
    def _coerce_count(count: Any) -> Any:
        """Convert a numeric string ``count`` to int; pass anything else through.

        int64 fields arrive as strings over JSON.
        """
        if isinstance(count, str):
            try:
                return int(count)
            except ValueError:
                return count
        return count
