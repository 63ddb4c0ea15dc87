from __future__ import annotations

import asyncio
import sys
from collections.abc import Coroutine, Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, TypeVar

from httpx import AsyncClient as HttpxAsyncClient
from httpx import Client as HttpxClient

if TYPE_CHECKING:
    from algoliasearch_python_sdk._client import AsyncClient, Client  # pragma: no cover

T = TypeVar("T")


def get_async_client(
    client: AsyncClient | HttpxAsyncClient,
) -> HttpxAsyncClient:
    if isinstance(client, HttpxAsyncClient):
        return client

    return client.http_client


def get_client(
    client: Client | HttpxClient,
) -> HttpxClient:
    if isinstance(client, HttpxClient):
        return client

    return client.http_client


def iso_to_date_time(iso_date: datetime | str | None) -> datetime | None:
    """Handle conversion of iso string to datetime.

    Algolia sends dates both with and without milliseconds ("2018-07-24T13:35:00.123Z" and
    "2018-07-24T13:35:00Z") so both forms are accepted. The returned datetime is timezone aware.
    """
    if not iso_date:
        return None

    if isinstance(iso_date, datetime):
        return iso_date

    for date_format in ("%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%dT%H:%M:%SZ"):
        try:
            return datetime.strptime(iso_date, date_format).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    return datetime.fromisoformat(iso_date)


def timestamp_to_date_time(timestamp: datetime | int | float | None) -> datetime | None:
    if timestamp is None:
        return None

    if isinstance(timestamp, datetime):
        return timestamp

    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def use_task_groups() -> bool:
    return True if sys.version_info >= (3, 11) else False


async def gather_all(coroutines: Sequence[Coroutine[Any, Any, T]]) -> list[T]:
    """Run the coroutines concurrently and return their results in order.

    The first failure cancels the coroutines that are still running, waits for them to stop, and
    is then raised as is.
    """
    if use_task_groups():
        try:
            async with asyncio.TaskGroup() as tg:  # type: ignore[attr-defined]
                tasks = [tg.create_task(x) for x in coroutines]
        except BaseExceptionGroup as err:  # type: ignore[name-defined]  # noqa: F821
            raise err.exceptions[0] from None

        return [x.result() for x in tasks]

    tasks = [asyncio.create_task(x) for x in coroutines]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
