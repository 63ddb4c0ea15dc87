from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING
from urllib.parse import quote

from httpx import AsyncClient as HttpxAsyncClient
from httpx import Client as HttpxClient
from httpx import HTTPStatusError

from algoliasearch_python_sdk._http_requests import AsyncHttpRequests, HttpRequests
from algoliasearch_python_sdk._utils import gather_all, get_async_client, get_client
from algoliasearch_python_sdk.errors import (
    AlgoliaApiError,
    AlgoliaCommunicationError,
    AlgoliaError,
    AlgoliaTimeoutError,
)
from algoliasearch_python_sdk.models.task import TaskState, TaskStatus

if TYPE_CHECKING:
    from algoliasearch_python_sdk._client import AsyncClient, Client  # pragma: no cover

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 120
DEFAULT_INTERVAL_IN_MS = 1000


class TaskTracker:
    """Tracks a single task from submission until it is published or the retry budget runs out.

    The tracker does no I/O. The wait functions feed it the result of each status poll, or None
    when the poll could not reach the server, and act on the state it returns.
    """

    def __init__(
        self,
        task_id: int,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        interval_in_ms: int = DEFAULT_INTERVAL_IN_MS,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if interval_in_ms < 0:
            raise ValueError("interval_in_ms can not be negative")

        self.task_id = task_id
        self.max_retries = max_retries
        self.interval_in_ms = interval_in_ms
        self.attempts = 0
        self.state = TaskState.SUBMITTED

    @property
    def interval(self) -> float:
        return self.interval_in_ms / 1000

    def begin(self) -> None:
        if self.state is not TaskState.SUBMITTED:
            raise RuntimeError(f"Task {self.task_id} is already {self.state.value}")

        self.state = TaskState.POLLING

    def observe(self, status: TaskStatus | None) -> TaskState:
        if self.state is not TaskState.POLLING:
            raise RuntimeError(f"Task {self.task_id} is not being polled")

        self.attempts += 1
        if status is not None and status.is_published:
            self.state = TaskState.COMPLETED
        elif self.attempts >= self.max_retries:
            self.state = TaskState.TIMED_OUT
            logger.info("Task %s timed out after %s attempts", self.task_id, self.attempts)

        return self.state

    def timeout_error(self) -> AlgoliaTimeoutError:
        return AlgoliaTimeoutError(
            f"Task {self.task_id} was not published after {self.attempts} attempts",
            task_id=self.task_id,
        )


def get_task_status(client: HttpxClient | Client, index_name: str, task_id: int) -> TaskStatus:
    client_ = get_client(client)
    http_requests = HttpRequests(client_)
    response = http_requests.get(_task_url(index_name, task_id))

    return TaskStatus(**http_requests.parse_json(response))


async def async_get_task_status(
    client: HttpxAsyncClient | AsyncClient, index_name: str, task_id: int
) -> TaskStatus:
    client_ = get_async_client(client)
    http_requests = AsyncHttpRequests(client_)
    response = await http_requests.get(_task_url(index_name, task_id))

    return TaskStatus(**http_requests.parse_json(response))


def wait_for_task(
    client: HttpxClient | Client,
    index_name: str,
    task_id: int,
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    interval_in_ms: int = DEFAULT_INTERVAL_IN_MS,
) -> TaskStatus:
    """Wait until a task is published.

    Network errors and 5xx responses count as a check that did not see the task published, so
    polling goes on until the retry budget runs out.

    Args:
        client: An httpx Client or algoliasearch_python_sdk Client instance.
        index_name: The name of the index the task was submitted to.
        task_id: The identifier returned by the call that created the task.
        max_retries: The number of times the status is checked before giving up. Defaults to 120.
        interval_in_ms: Time to wait between two checks. Defaults to 1000.

    Returns:
        The published status of the task.

    Raises:
        AlgoliaApiError: If the Algolia API returned a 4xx error.
        AlgoliaTimeoutError: If the task was not published after max_retries checks.

    Examples
        >>> from algoliasearch_python_sdk import Client
        >>> from algoliasearch_python_sdk._task import wait_for_task
        >>> with Client("APP_ID", "adminKey") as client:
        >>>     response = client.index("movies").add_object({"title": "Alien"})
        >>>     wait_for_task(client, "movies", response.task_id)
    """
    client_ = get_client(client)
    http_requests = HttpRequests(client_)
    url = _task_url(index_name, task_id)
    tracker = TaskTracker(task_id, max_retries=max_retries, interval_in_ms=interval_in_ms)
    tracker.begin()

    while True:
        status: TaskStatus | None = None
        try:
            response = http_requests.get(url)
            status = TaskStatus(**http_requests.parse_json(response))
        except (AlgoliaError, HTTPStatusError) as err:
            if not _is_transient(err):
                raise
            logger.warning("Polling task %s failed, retrying: %s", task_id, err)

        state = tracker.observe(status)
        logger.debug("Task %s attempt %s: %s", task_id, tracker.attempts, state.value)
        if state is TaskState.COMPLETED:
            return status  # type: ignore[return-value]
        if state is TaskState.TIMED_OUT:
            raise tracker.timeout_error()

        time.sleep(tracker.interval)


async def async_wait_for_task(
    client: HttpxAsyncClient | AsyncClient,
    index_name: str,
    task_id: int,
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    interval_in_ms: int = DEFAULT_INTERVAL_IN_MS,
) -> TaskStatus:
    client_ = get_async_client(client)
    http_requests = AsyncHttpRequests(client_)
    url = _task_url(index_name, task_id)
    tracker = TaskTracker(task_id, max_retries=max_retries, interval_in_ms=interval_in_ms)
    tracker.begin()

    while True:
        status: TaskStatus | None = None
        try:
            response = await http_requests.get(url)
            status = TaskStatus(**http_requests.parse_json(response))
        except (AlgoliaError, HTTPStatusError) as err:
            if not _is_transient(err):
                raise
            logger.warning("Polling task %s failed, retrying: %s", task_id, err)

        state = tracker.observe(status)
        logger.debug("Task %s attempt %s: %s", task_id, tracker.attempts, state.value)
        if state is TaskState.COMPLETED:
            return status  # type: ignore[return-value]
        if state is TaskState.TIMED_OUT:
            raise tracker.timeout_error()

        await asyncio.sleep(tracker.interval)


def wait_for_tasks(
    client: HttpxClient | Client,
    index_name: str,
    task_ids: Sequence[int],
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    interval_in_ms: int = DEFAULT_INTERVAL_IN_MS,
) -> list[TaskStatus]:
    """Wait for several tasks at once, polling each one in its own thread.

    Returns once every task is published, with the statuses in the same order as task_ids. The
    first task that fails or times out is raised once all the workers have stopped.
    """
    if not task_ids:
        return []

    with ThreadPoolExecutor(max_workers=len(task_ids)) as executor:
        futures = [
            executor.submit(
                wait_for_task,
                client,
                index_name,
                task_id,
                max_retries=max_retries,
                interval_in_ms=interval_in_ms,
            )
            for task_id in task_ids
        ]
        for future in as_completed(futures):
            future.result()

    return [future.result() for future in futures]


async def async_wait_for_tasks(
    client: HttpxAsyncClient | AsyncClient,
    index_name: str,
    task_ids: Sequence[int],
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    interval_in_ms: int = DEFAULT_INTERVAL_IN_MS,
) -> list[TaskStatus]:
    """Wait for several tasks at once.

    The first failure cancels the remaining waits and is raised once they have all stopped.
    """
    return await gather_all(
        [
            async_wait_for_task(
                client,
                index_name,
                task_id,
                max_retries=max_retries,
                interval_in_ms=interval_in_ms,
            )
            for task_id in task_ids
        ]
    )


def _task_url(index_name: str, task_id: int) -> str:
    return f"1/indexes/{quote(index_name, safe='')}/task/{task_id}"


def _is_transient(err: AlgoliaError | HTTPStatusError) -> bool:
    if isinstance(err, AlgoliaCommunicationError):
        return True
    if isinstance(err, AlgoliaApiError):
        return err.status_code >= 500
    if isinstance(err, HTTPStatusError):
        return err.response.status_code >= 500

    return False
