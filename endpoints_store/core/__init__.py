"""Core domain logic for the endpoints store.

This package contains zero external dependencies: the data model, the
port interfaces, and the query results wrapper. The remote client, the
store adapter and the CLI are handled by the adapters package.
"""

from .errors import RemoteCallError
from .models import (
    UNSET,
    PutDirectives,
    QueryOptions,
    QueryPage,
    Record,
    SortInformation,
    StoreConfig,
)
from .query_results import QueryResults

__all__ = [
    "UNSET",
    "PutDirectives",
    "QueryOptions",
    "QueryPage",
    "QueryResults",
    "Record",
    "RemoteCallError",
    "SortInformation",
    "StoreConfig",
]
