"""Unit tests for the lazy query results wrapper."""

import asyncio

import pytest

from endpoints_store.core.errors import RemoteCallError
from endpoints_store.core.models import QueryPage
from endpoints_store.core.query_results import QueryResults


def _page_future(page: QueryPage | None = None) -> asyncio.Future:
    future = asyncio.get_running_loop().create_future()
    if page is not None:
        future.set_result(page)
    return future


@pytest.fixture
def page() -> QueryPage:
    return QueryPage(
        items=[{"id": "1", "name": "a"}, {"id": "2", "name": "b"}],
        total=7,
        next_page_token="tok",
    )


@pytest.mark.asyncio
async def test_await_yields_items(page: QueryPage) -> None:
    results = QueryResults(_page_future(page))
    assert await results == page.items


@pytest.mark.asyncio
async def test_total_resolves_to_page_total(page: QueryPage) -> None:
    results = QueryResults(_page_future(page))
    assert await results.total == 7


@pytest.mark.asyncio
async def test_total_never_resolves_before_items(page: QueryPage) -> None:
    pending = _page_future()
    results = QueryResults(pending)
    await asyncio.sleep(0)
    assert not results.total.done()

    pending.set_result(page)
    # The total is chained off the items future, so it lags by a loop turn
    assert results.done()
    assert not results.total.done()

    assert await results.total == 7


@pytest.mark.asyncio
async def test_failure_propagates_to_items_and_total() -> None:
    pending = _page_future()
    results = QueryResults(pending)
    pending.set_exception(RemoteCallError({"message": "boom"}))

    with pytest.raises(RemoteCallError):
        await results
    with pytest.raises(RemoteCallError) as exc_info:
        await results.total
    assert exc_info.value.error == {"message": "boom"}


@pytest.mark.asyncio
async def test_sync_consumption_after_resolution(page: QueryPage) -> None:
    results = QueryResults(_page_future(page))
    await results
    assert len(results) == 2
    assert [item["id"] for item in results] == ["1", "2"]
    assert results[1]["name"] == "b"


@pytest.mark.asyncio
async def test_sync_consumption_before_resolution_raises() -> None:
    results = QueryResults(_page_future())
    with pytest.raises(asyncio.InvalidStateError):
        list(results)


@pytest.mark.asyncio
async def test_for_each_visits_items_in_order(page: QueryPage) -> None:
    seen = []
    await QueryResults(_page_future(page)).for_each(lambda item: seen.append(item["id"]))
    assert seen == ["1", "2"]


@pytest.mark.asyncio
async def test_for_each_awaits_coroutine_callbacks(page: QueryPage) -> None:
    seen = []

    async def visit(item):
        seen.append(item["name"])

    await QueryResults(_page_future(page)).for_each(visit)
    assert seen == ["a", "b"]


@pytest.mark.asyncio
async def test_map_and_filter(page: QueryPage) -> None:
    results = QueryResults(_page_future(page))
    assert await results.map(lambda item: item["name"].upper()) == ["A", "B"]
    assert await results.filter(lambda item: item["id"] == "2") == [page.items[1]]


@pytest.mark.asyncio
async def test_next_page_token(page: QueryPage) -> None:
    results = QueryResults(_page_future(page))
    assert await results.next_page_token() == "tok"


@pytest.mark.asyncio
async def test_accepts_coroutine(page: QueryPage) -> None:
    async def fetch() -> QueryPage:
        return page

    results = QueryResults(fetch())
    assert await results == page.items
    assert await results.total == 7
