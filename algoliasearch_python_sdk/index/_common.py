from __future__ import annotations

from collections.abc import Awaitable, Callable, Generator, Mapping, Sequence
from typing import Any
from urllib.parse import quote, urlencode

from algoliasearch_python_sdk.errors import (
    InvalidBatchOperationError,
    InvalidParameterTypeError,
    NoMoreHitsError,
)
from algoliasearch_python_sdk.json_handler import BuiltinHandler, OrjsonHandler, UjsonHandler
from algoliasearch_python_sdk.models.objects import BatchOperation
from algoliasearch_python_sdk.models.search import BrowseResponse
from algoliasearch_python_sdk.types import JsonDict, JsonMapping

COPY_SCOPES = ("settings", "synonyms", "rules")
GEO_PARAMETERS = ("insideBoundingBox", "insidePolygon")


class BaseIndex:
    def __init__(
        self,
        name: str,
        json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
    ):
        self.name = name
        self._base_url = "1/indexes"
        self._index_url = f"{self._base_url}/{encode_path(name)}"
        self._batch_url = f"{self._index_url}/batch"
        self._operation_url = f"{self._index_url}/operation"
        self._settings_url = f"{self._index_url}/settings"
        self._synonyms_url = f"{self._index_url}/synonyms"
        self._rules_url = f"{self._index_url}/rules"
        self._json_handler = json_handler if json_handler else BuiltinHandler()

    def __str__(self) -> str:
        return f"{type(self).__name__}(name={self.name})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def _object_url(self, object_id: str) -> str:
        return f"{self._index_url}/{encode_path(object_id)}"


class BrowseIterator:
    """Walks every object of an index, one page at a time.

    `next_hit` raises NoMoreHitsError once the last page has been consumed. Regular iteration
    turns that into StopIteration so the iterator can be used in a for loop.
    """

    def __init__(self, fetch_page: Callable[[str | None], BrowseResponse]) -> None:
        self._fetch_page = fetch_page
        self._hits: list[JsonDict] = []
        self._position = 0
        self._cursor: str | None = None
        self._started = False

    def __iter__(self) -> BrowseIterator:
        return self

    def __next__(self) -> JsonDict:
        try:
            return self.next_hit()
        except NoMoreHitsError:
            raise StopIteration from None

    def next_hit(self) -> JsonDict:
        while self._position >= len(self._hits):
            if self._started and not self._cursor:
                raise NoMoreHitsError()

            page = self._fetch_page(self._cursor)
            self._started = True
            self._hits = page.hits
            self._position = 0
            self._cursor = page.cursor

        hit = self._hits[self._position]
        self._position += 1

        return hit


class AsyncBrowseIterator:
    def __init__(self, fetch_page: Callable[[str | None], Awaitable[BrowseResponse]]) -> None:
        self._fetch_page = fetch_page
        self._hits: list[JsonDict] = []
        self._position = 0
        self._cursor: str | None = None
        self._started = False

    def __aiter__(self) -> AsyncBrowseIterator:
        return self

    async def __anext__(self) -> JsonDict:
        try:
            return await self.next_hit()
        except NoMoreHitsError:
            raise StopAsyncIteration from None

    async def next_hit(self) -> JsonDict:
        while self._position >= len(self._hits):
            if self._started and not self._cursor:
                raise NoMoreHitsError()

            page = await self._fetch_page(self._cursor)
            self._started = True
            self._hits = page.hits
            self._position = 0
            self._cursor = page.cursor

        hit = self._hits[self._position]
        self._position += 1

        return hit


def batch(objects: Sequence[Any], batch_size: int) -> Generator[Sequence[Any], None, None]:
    total_len = len(objects)
    for i in range(0, total_len, batch_size):
        yield objects[i : i + batch_size]


def to_batch_operations(
    operations: Sequence[BatchOperation | JsonMapping],
) -> list[BatchOperation]:
    return [op if isinstance(op, BatchOperation) else BatchOperation(**op) for op in operations]


def validate_batch(operations: Sequence[BatchOperation]) -> None:
    """Check every operation before anything is sent.

    Raises:
        InvalidBatchOperationError: If an operation that targets an existing object has no objectID.
    """
    for operation in operations:
        if operation.requires_object_id() and operation.body.get("objectID") in (None, ""):
            raise InvalidBatchOperationError(operation.action)


def encode_batch(operations: Sequence[BatchOperation | JsonMapping]) -> JsonDict:
    batch_operations = to_batch_operations(operations)
    validate_batch(batch_operations)

    return {"requests": [op.to_wire() for op in batch_operations]}


def build_object_operations(action: str, objects: Sequence[JsonMapping]) -> list[BatchOperation]:
    return [BatchOperation(action=action, body=dict(obj)) for obj in objects]  # type: ignore[arg-type]


def validate_geo_parameters(params: JsonMapping) -> None:
    """Geo parameters are sent either as a comma separated string or a list of coordinate lists."""
    for name in GEO_PARAMETERS:
        if name not in params:
            continue

        value = params[name]
        if isinstance(value, str) or _is_coordinates(value):
            continue

        raise InvalidParameterTypeError(name, "string or list[list[float]]")


def encode_params(
    params: JsonMapping | None,
    json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
) -> str:
    """Encodes search parameters as the query string Algolia expects.

    Strings, booleans and numbers are sent as is. Any other value, including datetimes, is
    serialized with the json_handler, which defaults to the BuiltinHandler.
    """
    if not params:
        return ""

    validate_geo_parameters(params)
    handler = json_handler if json_handler else BuiltinHandler()

    return urlencode(
        {k: _encode_param_value(v, handler) for k, v in params.items() if v is not None}
    )


def build_search_body(
    query: str,
    params: JsonMapping | None,
    json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
) -> JsonDict:
    return {"params": encode_params({"query": query, **(params or {})}, json_handler)}


def validate_scopes(scopes: Sequence[str]) -> list[str]:
    if not scopes:
        raise ValueError("At least one scope is required for a scoped copy")

    for scope in scopes:
        if scope not in COPY_SCOPES:
            raise ValueError(f"Invalid scope {scope}, valid scopes are {', '.join(COPY_SCOPES)}")

    return list(scopes)


def build_encoded_url(base_url: str, params: JsonMapping) -> str:
    return f"{base_url}?{urlencode(params)}"


def encode_path(value: str) -> str:
    return quote(value, safe="")


def bool_param(value: bool) -> str:
    return "true" if value else "false"


def _encode_param_value(
    value: Any, json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler
) -> str:
    if isinstance(value, bool):
        return bool_param(value)

    if isinstance(value, str):
        return value

    if isinstance(value, (int, float)):
        return str(value)

    return json_handler.dumps(value)


def _is_coordinates(value: Any) -> bool:
    if not isinstance(value, (list, tuple)):
        return False

    for coordinates in value:
        if not isinstance(coordinates, (list, tuple)):
            return False
        if not all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in coordinates):
            return False

    return True


def unwrap_mapping(value: Mapping[str, Any] | Any) -> JsonDict:
    if hasattr(value, "to_wire"):
        return value.to_wire()

    return dict(value)
