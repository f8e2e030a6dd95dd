"""Lazy query results with a separately resolving total count."""

import asyncio
from collections.abc import Awaitable, Callable, Iterator
from typing import Any

from .models import QueryPage, Record


class QueryResults:
    """The eventual outcome of a query.

    Awaiting the wrapper yields the ordered list of records. ``total`` is a
    future of the total match count; it is chained off the items and so
    never resolves before them. When the list call fails, both fail with
    the same exception.

    Once resolved the wrapper can be consumed synchronously with ``iter``,
    ``len`` and indexing. Before that, those raise
    ``asyncio.InvalidStateError``.
    """

    def __init__(self, page: Awaitable[QueryPage]):
        self._page: asyncio.Future[QueryPage] = asyncio.ensure_future(page)
        self.total: asyncio.Future[int] = self._page.get_loop().create_future()
        self._page.add_done_callback(self._resolve_total)

    def _resolve_total(self, page: "asyncio.Future[QueryPage]") -> None:
        if self.total.done():
            return
        if page.cancelled():
            self.total.cancel()
            return
        exc = page.exception()
        if exc is not None:
            self.total.set_exception(exc)
            return
        self.total.set_result(page.result().total)

    def __await__(self):
        return self._items().__await__()

    async def _items(self) -> list[Record]:
        page = await self._page
        return page.items

    def done(self) -> bool:
        """Return True once the items are available (or failed)."""
        return self._page.done()

    async def next_page_token(self) -> str | None:
        """Return the continuation marker reported by the backend, if any."""
        page = await self._page
        return page.next_page_token

    async def for_each(self, callback: Callable[[Record], Any]) -> None:
        """Call ``callback`` with every record, in order."""
        for item in await self:
            result = callback(item)
            if hasattr(result, "__await__"):
                await result

    async def map(self, callback: Callable[[Record], Any]) -> list[Any]:
        """Return ``callback`` applied to every record, in order."""
        mapped = []
        for item in await self:
            result = callback(item)
            if hasattr(result, "__await__"):
                result = await result
            mapped.append(result)
        return mapped

    async def filter(self, predicate: Callable[[Record], bool]) -> list[Record]:
        """Return the records for which ``predicate`` is truthy."""
        return [item for item in await self if predicate(item)]

    def __iter__(self) -> Iterator[Record]:
        return iter(self._page.result().items)

    def __len__(self) -> int:
        return len(self._page.result().items)

    def __getitem__(self, index: int) -> Record:
        return self._page.result().items[index]
