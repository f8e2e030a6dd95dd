"""CLI command implementations for the endpoints store.

This adapter maps CLI commands (get, put, add, remove, query) to
ObjectStorePort operations. It handles CLI-specific result formatting
and error reporting.
"""

import logging
from typing import Any

from endpoints_store.core.errors import RemoteCallError
from endpoints_store.core.ports import ObjectStorePort

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to an ObjectStorePort.

    Every command returns a result dictionary with a ``status`` of either
    ``success`` or ``error``; remote and validation failures never escape.
    """

    def __init__(self, store: ObjectStorePort):
        """Initialize the CLI command handler.

        Args:
            store: ObjectStorePort implementation to execute commands.
        """
        self.store = store

    @staticmethod
    def _error(operation: str, e: Exception, **extra: Any) -> dict[str, Any]:
        result: dict[str, Any] = {
            "status": "error",
            "operation": operation,
            "message": str(e),
        }
        if isinstance(e, RemoteCallError):
            result["error"] = e.error
        result.update(extra)
        return result

    async def get_record(self, id: Any) -> dict[str, Any]:
        """Fetch one record.

        Args:
            id: Identity of the record.

        Returns:
            Dictionary with status and the record.
        """
        try:
            record = await self.store.get(id)
            return {"status": "success", "operation": "get", "id": id, "record": record}
        except RemoteCallError as e:
            logger.error(f"Failed to get record {id!r}: {e}")
            return self._error("get", e, id=id)

    async def put_record(
        self, record: dict[str, Any], options: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Store a record, creating it if it has no identity."""
        try:
            stored = await self.store.put(record, options)
            return {"status": "success", "operation": "put", "record": stored}
        except (RemoteCallError, ValueError) as e:
            logger.error(f"Failed to put record: {e}")
            return self._error("put", e)

    async def add_record(
        self, record: dict[str, Any], options: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Create a record."""
        try:
            stored = await self.store.add(record, options)
            return {"status": "success", "operation": "add", "record": stored}
        except (RemoteCallError, ValueError) as e:
            logger.error(f"Failed to add record: {e}")
            return self._error("add", e)

    async def remove_record(self, id: Any) -> dict[str, Any]:
        """Delete a record."""
        try:
            result = await self.store.remove(id)
            return {
                "status": "success",
                "operation": "remove",
                "id": id,
                "result": result,
                "message": f"Record {id} removed",
            }
        except RemoteCallError as e:
            logger.error(f"Failed to remove record {id!r}: {e}")
            return self._error("remove", e, id=id)

    async def query_records(
        self, options: dict[str, Any] | None = None, query: Any = None
    ) -> dict[str, Any]:
        """List records with pagination and sort options.

        Args:
            options: Store query options (start, count, sort).
            query: Query predicate, passed through to the store.

        Returns:
            Dictionary with status, items, total and next page token.
        """
        try:
            results = self.store.query(query, options)
            items = await results
            total = await results.total
            next_page_token = await results.next_page_token()
        except (RemoteCallError, ValueError, TypeError) as e:
            logger.error(f"Failed to query records: {e}")
            return self._error("query", e)

        return {
            "status": "success",
            "operation": "query",
            "items": items,
            "total": total,
            "next_page_token": next_page_token,
        }
