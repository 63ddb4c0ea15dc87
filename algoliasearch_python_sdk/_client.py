from __future__ import annotations

import asyncio
import base64
import hashlib
import hmac
import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from ssl import SSLContext
from typing import TYPE_CHECKING
from urllib.parse import parse_qs

from httpx import AsyncBaseTransport, BaseTransport
from httpx import AsyncClient as HttpxAsyncClient
from httpx import Client as HttpxClient

from algoliasearch_python_sdk import _task
from algoliasearch_python_sdk._http_requests import (
    AsyncHttpRequests,
    HttpRequests,
    build_auth_headers,
    user_agent,
)
from algoliasearch_python_sdk._utils import gather_all
from algoliasearch_python_sdk.errors import (
    AlgoliaApiError,
    AlgoliaTimeoutError,
    InvalidBatchOperationError,
    InvalidRestriction,
)
from algoliasearch_python_sdk.index import AsyncIndex, Index
from algoliasearch_python_sdk.index._common import (
    build_encoded_url,
    encode_params,
    encode_path,
    to_batch_operations,
    validate_batch,
)
from algoliasearch_python_sdk.json_handler import BuiltinHandler, OrjsonHandler, UjsonHandler
from algoliasearch_python_sdk.models.client import (
    IndexList,
    Key,
    KeyCreate,
    KeyList,
    KeyResponse,
    KeyUpdate,
)
from algoliasearch_python_sdk.models.objects import BatchOperation, MultipleBatchResponse
from algoliasearch_python_sdk.models.task import TaskInfo, TaskStatus

if TYPE_CHECKING:  # pragma: no cover
    import sys
    from types import TracebackType

    from algoliasearch_python_sdk.types import JsonMapping

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

logger = logging.getLogger(__name__)

KeyPredicate = Callable[[Key], bool]


class BaseClient:
    def __init__(
        self,
        app_id: str,
        api_key: str,
        custom_headers: dict[str, str] | None = None,
        json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
    ) -> None:
        self.app_id = app_id
        self.json_handler = json_handler if json_handler else BuiltinHandler()
        self._headers = {"User-Agent": user_agent(), **build_auth_headers(app_id, api_key)}

        if custom_headers:
            self._headers.update(custom_headers)

    @staticmethod
    def generate_secured_api_key(parent_api_key: str, restrictions: JsonMapping) -> str:
        """Generates a secured API key from a parent key without calling the API.

        The restrictions are signed with the parent key, so they can not be changed by whoever
        receives the secured key.

        Args:
            parent_api_key: The search API key the secured key inherits its rights from.
            restrictions: Search parameters enforced on every search, plus optional
                "validUntil" (a UNIX timestamp or datetime), "restrictIndices",
                "restrictSources", and "userToken".

        Returns:
            The secured API key.

        Raises:
            InvalidRestriction: If validUntil is not in the future.

        Examples
            >>> import time
            >>> from algoliasearch_python_sdk import Client
            >>> key = Client.generate_secured_api_key(
            >>>     "searchKey",
            >>>     {"filters": "_tags:user_42", "validUntil": int(time.time()) + 3600},
            >>> )
        """
        valid_until = restrictions.get("validUntil")
        if isinstance(valid_until, datetime):
            valid_until = valid_until.timestamp()
        if valid_until is not None and int(valid_until) <= int(time.time()):
            raise InvalidRestriction("validUntil must be a time in the future")

        query = encode_params(restrictions)
        signature = hmac.new(
            parent_api_key.encode("utf-8"), query.encode("utf-8"), hashlib.sha256
        ).hexdigest()

        return base64.b64encode(f"{signature}{query}".encode()).decode("utf-8")

    @staticmethod
    def get_secured_api_key_remaining_validity(secured_api_key: str) -> int:
        """The number of seconds left before a secured API key expires.

        The value is negative when the key has already expired.

        Raises:
            ValueError: If the key has no validUntil restriction.
        """
        decoded = base64.b64decode(secured_api_key).decode("utf-8")
        # The first 64 characters are the hex encoded signature.
        restrictions = parse_qs(decoded[64:])
        if "validUntil" not in restrictions:
            raise ValueError("The secured API key has no validUntil restriction")

        return int(restrictions["validUntil"][0]) - int(time.time())

    def _multiple_batch_body(self, operations: Sequence[BatchOperation | JsonMapping]) -> dict:
        batch_operations = to_batch_operations(operations)
        for operation in batch_operations:
            if not operation.index_name:
                raise InvalidBatchOperationError(operation.action, "indexName")

        validate_batch(batch_operations)

        return {"requests": [op.to_wire() for op in batch_operations]}


class AsyncClient(BaseClient):
    """Async client to connect to the Algolia API."""

    def __init__(
        self,
        app_id: str,
        api_key: str,
        *,
        url: str | None = None,
        timeout: int | None = None,
        verify: bool | SSLContext = True,
        custom_headers: dict[str, str] | None = None,
        json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
        http2: bool = False,
        transport: AsyncBaseTransport | None = None,
    ) -> None:
        """Class initializer.

        Args:
            app_id: The Algolia application ID.
            api_key: The API key to use. Write operations need a key with the matching ACL.
            url: The url to the Algolia API. Defaults to https://{app_id}.algolia.net.
            timeout: The amount of time in seconds that the client will wait for a response before
                timing out. Defaults to None.
            verify: SSL certificates (a.k.a CA bundle) used to
                verify the identity of requested hosts. Either `True` (default CA bundle),
                a path to an SSL certificate file, or `False` (disable verification)
            custom_headers: Custom headers to add when sending data to Algolia. Defaults to None.
            json_handler: The module to use for json operations. The options are BuiltinHandler
                (uses the json module from the standard library), OrjsonHandler (uses orjson), or
                UjsonHandler (uses ujson). Note that in order use orjson or ujson the corresponding
                extra needs to be included. Default: BuiltinHandler.
            http2: Whether or not to use HTTP/2. Defaults to False.
            transport: An httpx transport to send the requests through. Defaults to None.
        """
        super().__init__(app_id, api_key, custom_headers, json_handler)

        self.http_client = HttpxAsyncClient(
            base_url=url or f"https://{app_id}.algolia.net",
            timeout=timeout,
            headers=self._headers,
            verify=verify,
            http2=http2,
            transport=transport,
        )
        self._http_requests = AsyncHttpRequests(self.http_client, json_handler=self.json_handler)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        et: type[BaseException] | None,
        ev: type[BaseException] | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Closes the client.

        This only needs to be used if the client was not created with a context manager.
        """
        await self.http_client.aclose()

    def index(self, name: str) -> AsyncIndex:
        """Create a local reference to an index.

        No request is sent, Algolia creates the index on the first write.

        Args:
            name: The name of the index.

        Returns:
            An AsyncIndex instance.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
        """
        return AsyncIndex(self.http_client, name, json_handler=self.json_handler)

    async def list_indexes(self, page: int | None = None) -> IndexList:
        """Get the indexes of the application.

        Args:
            page: The page to retrieve. Defaults to None (all the indexes).

        Returns:
            The indexes and the number of pages.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
        """
        url = "1/indexes" if page is None else build_encoded_url("1/indexes", {"page": page})
        response = await self._http_requests.get(url)

        return IndexList(**self._http_requests.parse_json(response))

    async def copy_index(self, source: str, destination: str) -> TaskInfo:
        return await self.index(source).copy(destination)

    async def move_index(self, source: str, destination: str) -> TaskInfo:
        return await self.index(source).move(destination)

    async def scoped_copy_index(
        self, source: str, destination: str, scopes: Sequence[str]
    ) -> TaskInfo:
        return await self.index(source).scoped_copy(destination, scopes)

    async def list_api_keys(self) -> list[Key]:
        """Get all the API keys of the application."""
        response = await self._http_requests.get("1/keys")

        return KeyList(**self._http_requests.parse_json(response)).keys

    async def get_api_key(self, key: str) -> Key:
        """Gets information about a specific API key.

        Args:
            key: The value of the key.

        Returns:
            The API key information.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error, for example when the key does
                not exist yet.
        """
        response = await self._http_requests.get(f"1/keys/{encode_path(key)}")

        return Key(**self._http_requests.parse_json(response))

    async def add_api_key(self, key: KeyCreate) -> KeyResponse:
        """Creates a new API key.

        Keys are eventually consistent, use wait_for_api_key before relying on the new key.

        Args:
            key: The information to use in creating the key.

        Returns:
            The value of the new key.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> from algoliasearch_python_sdk.models.client import KeyCreate
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     key_info = KeyCreate(
            >>>         description="Search-only key",
            >>>         acl=["search"],
            >>>         indexes=["movies"],
            >>>     )
            >>>     response = await client.add_api_key(key_info)
            >>>     key = await client.wait_for_api_key(response.key)
        """
        response = await self._http_requests.post(
            "1/keys", self.json_handler.loads(key.model_dump_json(by_alias=True, exclude_none=True))
        )

        return KeyResponse(**self._http_requests.parse_json(response))

    async def update_api_key(self, key: str, key_update: KeyUpdate) -> KeyResponse:
        response = await self._http_requests.put(
            f"1/keys/{encode_path(key)}",
            self.json_handler.loads(key_update.model_dump_json(by_alias=True, exclude_none=True)),
        )

        return KeyResponse(**self._http_requests.parse_json(response))

    async def delete_api_key(self, key: str) -> KeyResponse:
        response = await self._http_requests.delete(f"1/keys/{encode_path(key)}")

        return KeyResponse(key=key, **self._http_requests.parse_json(response))

    async def wait_for_api_key(
        self,
        key: str,
        predicate: KeyPredicate | None = None,
        *,
        max_retries: int = _task.DEFAULT_MAX_RETRIES,
        interval_in_ms: int = _task.DEFAULT_INTERVAL_IN_MS,
    ) -> Key:
        """Wait until an API key is visible and, if given, the predicate holds for it.

        Args:
            key: The value of the key.
            predicate: A function that gets the key and returns True once the expected change is
                visible, for example after update_api_key. Defaults to None.
            max_retries: The number of checks before giving up. Defaults to 120.
            interval_in_ms: Time to wait between two checks. Defaults to 1000.

        Returns:
            The API key information.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error other than not found.
            AlgoliaTimeoutError: If the key was not visible after max_retries checks.
        """
        _validate_retries(max_retries)

        for attempt in range(1, max_retries + 1):
            try:
                api_key = await self.get_api_key(key)
                if predicate is None or predicate(api_key):
                    return api_key
            except AlgoliaApiError as err:
                if err.status_code != 404:
                    raise

            logger.debug("API key %s not ready after attempt %s", key, attempt)
            if attempt < max_retries:
                await asyncio.sleep(interval_in_ms / 1000)

        raise _key_timeout_error(key, max_retries)

    async def wait_for_api_keys(
        self,
        keys: Sequence[str],
        predicate: KeyPredicate | None = None,
        *,
        max_retries: int = _task.DEFAULT_MAX_RETRIES,
        interval_in_ms: int = _task.DEFAULT_INTERVAL_IN_MS,
    ) -> list[Key]:
        """Wait for several API keys at once. The first failure cancels the remaining waits."""
        return await gather_all(
            [
                self.wait_for_api_key(
                    key, predicate, max_retries=max_retries, interval_in_ms=interval_in_ms
                )
                for key in keys
            ]
        )

    async def multiple_batch(
        self, operations: Sequence[BatchOperation | JsonMapping]
    ) -> MultipleBatchResponse:
        """Send write operations targeting several indexes in a single request.

        Args:
            operations: The operations to send. Each one needs an index_name.

        Returns:
            The task id of each index and the objectIDs.

        Raises:
            InvalidBatchOperationError: If an operation has no index_name, or an operation that
                needs an objectID does not have one.
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
        """
        body = self._multiple_batch_body(operations)
        response = await self._http_requests.post("1/indexes/*/batch", body)

        return MultipleBatchResponse(**self._http_requests.parse_json(response))

    async def wait_for_task(
        self,
        index_name: str,
        task_id: int,
        *,
        max_retries: int = _task.DEFAULT_MAX_RETRIES,
        interval_in_ms: int = _task.DEFAULT_INTERVAL_IN_MS,
    ) -> TaskStatus:
        """Wait until a task is published.

        Args:
            index_name: The name of the index the task was submitted to.
            task_id: Identifier of the task.
            max_retries: The number of checks before giving up. Defaults to 120.
            interval_in_ms: Time to wait between two checks. Defaults to 1000.

        Returns:
            The published status of the task.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
            AlgoliaTimeoutError: If the task was not published after max_retries checks.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     response = await client.index("movies").add_object({"title": "Alien"})
            >>>     await client.wait_for_task("movies", response.task_id)
        """
        return await _task.async_wait_for_task(
            self.http_client,
            index_name,
            task_id,
            max_retries=max_retries,
            interval_in_ms=interval_in_ms,
        )


class Client(BaseClient):
    """client to connect to the Algolia API."""

    def __init__(
        self,
        app_id: str,
        api_key: str,
        *,
        url: str | None = None,
        timeout: int | None = None,
        verify: bool | SSLContext = True,
        custom_headers: dict[str, str] | None = None,
        json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
        http2: bool = False,
        transport: BaseTransport | None = None,
    ) -> None:
        """Class initializer.

        Args:
            app_id: The Algolia application ID.
            api_key: The API key to use. Write operations need a key with the matching ACL.
            url: The url to the Algolia API. Defaults to https://{app_id}.algolia.net.
            timeout: The amount of time in seconds that the client will wait for a response before
                timing out. Defaults to None.
            verify: SSL certificates (a.k.a CA bundle) used to
                verify the identity of requested hosts. Either `True` (default CA bundle),
                a path to an SSL certificate file, or `False` (disable verification)
            custom_headers: Custom headers to add when sending data to Algolia. Defaults to None.
            json_handler: The module to use for json operations. The options are BuiltinHandler
                (uses the json module from the standard library), OrjsonHandler (uses orjson), or
                UjsonHandler (uses ujson). Note that in order use orjson or ujson the corresponding
                extra needs to be included. Default: BuiltinHandler.
            http2: If set to True, the client will use HTTP/2. Defaults to False.
            transport: An httpx transport to send the requests through. Defaults to None.
        """
        super().__init__(app_id, api_key, custom_headers, json_handler)

        self.http_client = HttpxClient(
            base_url=url or f"https://{app_id}.algolia.net",
            timeout=timeout,
            headers=self._headers,
            verify=verify,
            http2=http2,
            transport=transport,
        )
        self._http_requests = HttpRequests(self.http_client, json_handler=self.json_handler)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        et: type[BaseException] | None,
        ev: type[BaseException] | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Closes the client.

        This only needs to be used if the client was not created with a context manager.
        """
        self.http_client.close()

    def index(self, name: str) -> Index:
        """Create a local reference to an index.

        No request is sent, Algolia creates the index on the first write.

        Args:
            name: The name of the index.

        Returns:
            An Index instance.

        Examples
            >>> from algoliasearch_python_sdk import Client
            >>> with Client("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
        """
        return Index(self.http_client, name, json_handler=self.json_handler)

    def list_indexes(self, page: int | None = None) -> IndexList:
        """Get the indexes of the application.

        Args:
            page: The page to retrieve. Defaults to None (all the indexes).

        Returns:
            The indexes and the number of pages.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
        """
        url = "1/indexes" if page is None else build_encoded_url("1/indexes", {"page": page})
        response = self._http_requests.get(url)

        return IndexList(**self._http_requests.parse_json(response))

    def copy_index(self, source: str, destination: str) -> TaskInfo:
        return self.index(source).copy(destination)

    def move_index(self, source: str, destination: str) -> TaskInfo:
        return self.index(source).move(destination)

    def scoped_copy_index(self, source: str, destination: str, scopes: Sequence[str]) -> TaskInfo:
        return self.index(source).scoped_copy(destination, scopes)

    def list_api_keys(self) -> list[Key]:
        """Get all the API keys of the application."""
        response = self._http_requests.get("1/keys")

        return KeyList(**self._http_requests.parse_json(response)).keys

    def get_api_key(self, key: str) -> Key:
        """Gets information about a specific API key.

        Args:
            key: The value of the key.

        Returns:
            The API key information.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error, for example when the key does
                not exist yet.
        """
        response = self._http_requests.get(f"1/keys/{encode_path(key)}")

        return Key(**self._http_requests.parse_json(response))

    def add_api_key(self, key: KeyCreate) -> KeyResponse:
        """Creates a new API key.

        Keys are eventually consistent, use wait_for_api_key before relying on the new key.

        Args:
            key: The information to use in creating the key.

        Returns:
            The value of the new key.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import Client
            >>> from algoliasearch_python_sdk.models.client import KeyCreate
            >>> with Client("APP_ID", "adminKey") as client:
            >>>     key_info = KeyCreate(
            >>>         description="Search-only key",
            >>>         acl=["search"],
            >>>         indexes=["movies"],
            >>>     )
            >>>     response = client.add_api_key(key_info)
            >>>     key = client.wait_for_api_key(response.key)
        """
        response = self._http_requests.post(
            "1/keys", self.json_handler.loads(key.model_dump_json(by_alias=True, exclude_none=True))
        )

        return KeyResponse(**self._http_requests.parse_json(response))

    def update_api_key(self, key: str, key_update: KeyUpdate) -> KeyResponse:
        """Update an API key. Only the given fields are changed."""
        response = self._http_requests.put(
            f"1/keys/{encode_path(key)}",
            self.json_handler.loads(key_update.model_dump_json(by_alias=True, exclude_none=True)),
        )

        return KeyResponse(**self._http_requests.parse_json(response))

    def delete_api_key(self, key: str) -> KeyResponse:
        response = self._http_requests.delete(f"1/keys/{encode_path(key)}")

        return KeyResponse(key=key, **self._http_requests.parse_json(response))

    def wait_for_api_key(
        self,
        key: str,
        predicate: KeyPredicate | None = None,
        *,
        max_retries: int = _task.DEFAULT_MAX_RETRIES,
        interval_in_ms: int = _task.DEFAULT_INTERVAL_IN_MS,
    ) -> Key:
        """Wait until an API key is visible and, if given, the predicate holds for it.

        Args:
            key: The value of the key.
            predicate: A function that gets the key and returns True once the expected change is
                visible, for example after update_api_key. Defaults to None.
            max_retries: The number of checks before giving up. Defaults to 120.
            interval_in_ms: Time to wait between two checks. Defaults to 1000.

        Returns:
            The API key information.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error other than not found.
            AlgoliaTimeoutError: If the key was not visible after max_retries checks.

        Examples
            >>> from algoliasearch_python_sdk import Client
            >>> from algoliasearch_python_sdk.models.client import KeyUpdate
            >>> with Client("APP_ID", "adminKey") as client:
            >>>     client.update_api_key("abc123", KeyUpdate(description="Movies search"))
            >>>     client.wait_for_api_key(
            >>>         "abc123", lambda k: k.description == "Movies search"
            >>>     )
        """
        _validate_retries(max_retries)

        for attempt in range(1, max_retries + 1):
            try:
                api_key = self.get_api_key(key)
                if predicate is None or predicate(api_key):
                    return api_key
            except AlgoliaApiError as err:
                if err.status_code != 404:
                    raise

            logger.debug("API key %s not ready after attempt %s", key, attempt)
            if attempt < max_retries:
                time.sleep(interval_in_ms / 1000)

        raise _key_timeout_error(key, max_retries)

    def wait_for_api_keys(
        self,
        keys: Sequence[str],
        predicate: KeyPredicate | None = None,
        *,
        max_retries: int = _task.DEFAULT_MAX_RETRIES,
        interval_in_ms: int = _task.DEFAULT_INTERVAL_IN_MS,
    ) -> list[Key]:
        """Wait for several API keys at once, each one in its own thread.

        The keys are returned in the same order as given. The first failure is raised once all
        the workers have stopped.
        """
        if not keys:
            return []

        with ThreadPoolExecutor(max_workers=len(keys)) as executor:
            futures = [
                executor.submit(
                    self.wait_for_api_key,
                    key,
                    predicate,
                    max_retries=max_retries,
                    interval_in_ms=interval_in_ms,
                )
                for key in keys
            ]
            for future in as_completed(futures):
                future.result()

        return [future.result() for future in futures]

    def multiple_batch(
        self, operations: Sequence[BatchOperation | JsonMapping]
    ) -> MultipleBatchResponse:
        """Send write operations targeting several indexes in a single request.

        Args:
            operations: The operations to send. Each one needs an index_name.

        Returns:
            The task id of each index and the objectIDs.

        Raises:
            InvalidBatchOperationError: If an operation has no index_name, or an operation that
                needs an objectID does not have one.
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import Client
            >>> from algoliasearch_python_sdk.models.objects import BatchOperation
            >>> with Client("APP_ID", "adminKey") as client:
            >>>     response = client.multiple_batch(
            >>>         [
            >>>             BatchOperation(action="addObject", body={"a": 1}, index_name="one"),
            >>>             BatchOperation(action="clear", index_name="two"),
            >>>         ]
            >>>     )
            >>>     client.wait_for_task("one", response.task_id["one"])
        """
        body = self._multiple_batch_body(operations)
        response = self._http_requests.post("1/indexes/*/batch", body)

        return MultipleBatchResponse(**self._http_requests.parse_json(response))

    def wait_for_task(
        self,
        index_name: str,
        task_id: int,
        *,
        max_retries: int = _task.DEFAULT_MAX_RETRIES,
        interval_in_ms: int = _task.DEFAULT_INTERVAL_IN_MS,
    ) -> TaskStatus:
        """Wait until a task is published.

        Args:
            index_name: The name of the index the task was submitted to.
            task_id: Identifier of the task.
            max_retries: The number of checks before giving up. Defaults to 120.
            interval_in_ms: Time to wait between two checks. Defaults to 1000.

        Returns:
            The published status of the task.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
            AlgoliaTimeoutError: If the task was not published after max_retries checks.
        """
        return _task.wait_for_task(
            self.http_client,
            index_name,
            task_id,
            max_retries=max_retries,
            interval_in_ms=interval_in_ms,
        )


def _validate_retries(max_retries: int) -> None:
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")


def _key_timeout_error(key: str, attempts: int) -> AlgoliaTimeoutError:
    return AlgoliaTimeoutError(
        f"API key {key} was not ready after {attempts} attempts", task_id=key
    )
