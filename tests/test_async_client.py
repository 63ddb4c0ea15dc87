import asyncio

import httpx
import pytest

from algoliasearch_python_sdk import AsyncClient
from algoliasearch_python_sdk.errors import (
    AlgoliaApiError,
    AlgoliaTimeoutError,
    InvalidBatchOperationError,
)
from algoliasearch_python_sdk.index import AsyncIndex
from algoliasearch_python_sdk.models.client import KeyCreate, KeyUpdate
from algoliasearch_python_sdk.models.objects import BatchOperation


async def test_async_client_context_manager(fake_server):
    async with AsyncClient(
        "TESTAPP", "adminKey", transport=httpx.MockTransport(fake_server.handle)
    ) as client:
        await client.list_indexes()

    assert client.http_client.is_closed


async def test_async_client_aclose(fake_server):
    client = AsyncClient("TESTAPP", "adminKey", transport=httpx.MockTransport(fake_server.handle))
    await client.aclose()

    assert client.http_client.is_closed


async def test_index(async_client):
    index = async_client.index("movies")

    assert isinstance(index, AsyncIndex)
    assert index.name == "movies"


async def test_list_indexes(async_client, async_index_with_movies):
    indexes = await async_client.list_indexes()

    assert [x.name for x in indexes.items] == ["movies"]
    assert indexes.items[0].entries == 5


async def test_copy_move_and_scoped_copy(async_client, async_index_with_movies):
    response = await async_client.copy_index("movies", "movies_copy")
    await async_client.wait_for_task("movies", response.task_id, interval_in_ms=0)
    response = await async_client.scoped_copy_index("movies", "movies_synonyms", ["synonyms"])
    await async_client.wait_for_task("movies", response.task_id, interval_in_ms=0)
    response = await async_client.move_index("movies_copy", "films")
    await async_client.wait_for_task("movies_copy", response.task_id, interval_in_ms=0)

    names = sorted(x.name for x in (await async_client.list_indexes()).items)
    assert names == ["films", "movies", "movies_synonyms"]


async def test_api_keys(async_client):
    response = await async_client.add_api_key(KeyCreate(acl=["search"], indexes=["movies"]))
    key = await async_client.wait_for_api_key(response.key, interval_in_ms=0)
    assert key.indexes == ["movies"]

    await async_client.update_api_key(response.key, KeyUpdate(acl=["search", "browse"]))
    key = await async_client.wait_for_api_key(
        response.key, lambda k: "browse" in k.acl, interval_in_ms=0
    )
    assert key.acl == ["search", "browse"]
    assert [x.value for x in await async_client.list_api_keys()] == [response.key]

    deleted = await async_client.delete_api_key(response.key)
    assert deleted.key == response.key
    with pytest.raises(AlgoliaApiError):
        await async_client.get_api_key(response.key)


async def test_wait_for_api_key_not_visible_yet(async_client, fake_server):
    fake_server.key_visibility_delay = 3
    key = (await async_client.add_api_key(KeyCreate(acl=["search"]))).key

    got = await async_client.wait_for_api_key(key, interval_in_ms=0)

    assert got.value == key


async def test_wait_for_api_key_timeout(async_client, fake_server):
    fake_server.key_visibility_delay = 10
    key = (await async_client.add_api_key(KeyCreate(acl=["search"]))).key

    with pytest.raises(AlgoliaTimeoutError) as e:
        await async_client.wait_for_api_key(key, max_retries=2, interval_in_ms=0)

    assert e.value.task_id == key


async def test_wait_for_api_key_invalid_retries(async_client):
    with pytest.raises(ValueError):
        await async_client.wait_for_api_key("abc", max_retries=0)


async def test_wait_for_api_keys(async_client, fake_server):
    fake_server.key_visibility_delay = 2
    keys = [(await async_client.add_api_key(KeyCreate(acl=["search"]))).key for _ in range(3)]

    got = await async_client.wait_for_api_keys(keys, interval_in_ms=0)

    assert [x.value for x in got] == keys


async def test_wait_for_api_keys_failure_cancels_the_rest(async_client, fake_server):
    fake_server.key_visibility_delay = 1000
    slow = (await async_client.add_api_key(KeyCreate(acl=["search"]))).key
    failing = (await async_client.add_api_key(KeyCreate(acl=["search"]))).key

    with pytest.raises(AlgoliaTimeoutError) as e:
        await asyncio.wait_for(
            async_client.wait_for_api_keys([slow, failing], lambda k: False, max_retries=1), 5
        )

    assert e.value.task_id in (slow, failing)


async def test_wait_for_api_keys_failure_waits_for_cancelled_keys(async_client, monkeypatch):
    slow_tasks = []

    async def wait_for_api_key(key, predicate=None, **kwargs):
        if key == "failing":
            raise AlgoliaTimeoutError(f"API key {key} timed out", task_id=key)
        slow_tasks.append(asyncio.current_task())
        await asyncio.sleep(10)

    monkeypatch.setattr(async_client, "wait_for_api_key", wait_for_api_key)

    with pytest.raises(AlgoliaTimeoutError):
        await asyncio.wait_for(async_client.wait_for_api_keys(["slow", "failing"]), 5)

    assert len(slow_tasks) == 1
    assert slow_tasks[0].done()
    assert slow_tasks[0].cancelled()


async def test_wait_for_api_keys_empty(async_client):
    assert await async_client.wait_for_api_keys([]) == []


async def test_multiple_batch(async_client, fake_server):
    response = await async_client.multiple_batch(
        [
            BatchOperation(action="addObject", body={"objectID": "1"}, index_name="movies"),
            {"action": "addObject", "body": {"objectID": "2"}, "indexName": "shows"},
        ]
    )

    assert set(response.task_id) == {"movies", "shows"}
    assert response.object_ids == ["1", "2"]
    status = await async_client.wait_for_task(
        "shows", response.task_id["shows"], interval_in_ms=0
    )
    assert status.is_published


async def test_multiple_batch_missing_index_name(async_client, fake_server):
    with pytest.raises(InvalidBatchOperationError) as e:
        await async_client.multiple_batch([BatchOperation(action="clear")])

    assert e.value.field == "indexName"
    assert fake_server.requests == []


async def test_async_generate_secured_api_key():
    secured = AsyncClient.generate_secured_api_key("searchKey", {"filters": "_tags:public"})

    assert isinstance(secured, str)
    with pytest.raises(ValueError):
        AsyncClient.get_secured_api_key_remaining_validity(secured)
