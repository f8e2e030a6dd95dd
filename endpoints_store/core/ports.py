"""Port interfaces for the endpoints store.

These abstract base classes define the boundaries between the store
adapter and its collaborators. Implementations live in the adapters/
package.

Port Interface Categories:

1. **Driven Ports** (the store calls out to them)
   - RemoteRequest: A not-yet-executed remote call
   - RemoteApiPort: The generated RPC client of the backing service

2. **Driving Ports** (callers use them)
   - ObjectStorePort: The generic object-store contract
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeAlias

from .models import PutDirectives, QueryOptions, Record

if TYPE_CHECKING:
    from .query_results import QueryResults

RemoteResponse: TypeAlias = Mapping[str, Any] | None
ResponseCallback: TypeAlias = Callable[[RemoteResponse], None]


# ============================================================================
# DRIVEN PORTS (The store calls out to these)
# ============================================================================


class RemoteRequest(ABC):
    """A remote call that has been prepared but not yet issued."""

    @abstractmethod
    def execute(self, callback: ResponseCallback) -> None:
        """Issue the remote call.

        Args:
            callback: Completion handler. Receives either a mapping with
                an ``error`` entry, or the payload (possibly wrapped in
                a ``result`` entry). It may be invoked synchronously,
                later on the event loop, or from another thread.

        The call cannot be cancelled once issued.
        """


class RemoteApiPort(ABC):
    """Port for the remote procedural API backing the store.

    Each method builds a RemoteRequest; nothing is sent until
    ``execute`` is called on it.
    """

    @abstractmethod
    def get(self, params: Mapping[str, Any]) -> RemoteRequest:
        """Prepare a fetch of one record by identity parameters."""

    @abstractmethod
    def update(self, record: Mapping[str, Any]) -> RemoteRequest:
        """Prepare an update of an existing record."""

    @abstractmethod
    def insert(self, record: Mapping[str, Any]) -> RemoteRequest:
        """Prepare an insertion of a new record."""

    @abstractmethod
    def remove(self, params: Mapping[str, Any]) -> RemoteRequest:
        """Prepare a deletion of one record by identity parameters."""

    @abstractmethod
    def list(self, query_options: Mapping[str, Any]) -> RemoteRequest:
        """Prepare a listing call.

        Args:
            query_options: Remote field names: ``offset``, ``limit`` and
                ``order`` (comma-joined attributes, ``-`` for descending).

        The successful payload carries ``items`` and optionally
        ``count`` and ``nextPageToken``.
        """


# ============================================================================
# DRIVING PORTS (Callers use these)
# ============================================================================


class ObjectStorePort(ABC):
    """Generic object-store contract: CRUD plus query."""

    @abstractmethod
    async def get(self, id: Any) -> Record:
        """Retrieve a record by its identity.

        Raises:
            RemoteCallError: If the backend reports an error, including
                not-found.
        """

    @abstractmethod
    def get_identity(self, record: Mapping[str, Any]) -> Any:
        """Return the record's identity value, or None if absent."""

    @abstractmethod
    async def put(
        self,
        record: Record,
        options: PutDirectives | Mapping[str, Any] | None = None,
    ) -> Record:
        """Store a record, creating it when it carries no identity."""

    @abstractmethod
    async def add(
        self,
        record: Record,
        options: PutDirectives | Mapping[str, Any] | None = None,
    ) -> Record:
        """Create a record."""

    @abstractmethod
    async def remove(self, id: Any) -> Any:
        """Delete a record by its identity."""

    @abstractmethod
    def query(
        self,
        query: Any = None,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> "QueryResults":
        """Query records.

        Returns:
            QueryResults wrapping the eventual items and total count.
        """
