from __future__ import annotations

import warnings
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from httpx import AsyncClient

from algoliasearch_python_sdk._http_requests import AsyncHttpRequests
from algoliasearch_python_sdk._task import (
    DEFAULT_INTERVAL_IN_MS,
    DEFAULT_MAX_RETRIES,
    async_wait_for_task,
    async_wait_for_tasks,
)
from algoliasearch_python_sdk._utils import gather_all
from algoliasearch_python_sdk.index._common import (
    BaseIndex,
    AsyncBrowseIterator,
    batch,
    bool_param,
    build_encoded_url,
    build_object_operations,
    build_search_body,
    encode_batch,
    encode_params,
    encode_path,
    unwrap_mapping,
    validate_scopes,
)
from algoliasearch_python_sdk.json_handler import BuiltinHandler, OrjsonHandler, UjsonHandler
from algoliasearch_python_sdk.models.objects import (
    BatchOperation,
    BatchResponse,
    CreateObjectResponse,
    ObjectsResponse,
    UpdateObjectResponse,
    encode_body,
    object_id_of,
)
from algoliasearch_python_sdk.models.rules import Rule, RuleSearchResults
from algoliasearch_python_sdk.models.search import BrowseResponse, FacetSearchResults, SearchResults
from algoliasearch_python_sdk.models.settings import IndexSettings
from algoliasearch_python_sdk.models.synonyms import Synonym, SynonymSearchResults, parse_synonym
from algoliasearch_python_sdk.models.task import TaskInfo, TaskStatus
from algoliasearch_python_sdk.types import JsonDict

if TYPE_CHECKING:  # pragma: no cover
    from algoliasearch_python_sdk.types import JsonMapping


class AsyncIndex(BaseIndex):
    """Index class gives access to all the index routes and child routes.

    https://www.algolia.com/doc/rest-api/search/
    """

    def __init__(
        self,
        http_client: AsyncClient,
        name: str,
        json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
    ):
        """Class initializer.

        Args:
            http_client: An instance of the httpx AsyncClient. This automatically gets passed by the
                AsyncClient when creating an AsyncIndex instance.
            name: The name of the index.
            json_handler: The module to use for json operations. The options are BuiltinHandler
                (uses the json module from the standard library), OrjsonHandler (uses orjson), or
                UjsonHandler (uses ujson). Note that in order use orjson or ujson the corresponding
                extra needs to be included. Default: BuiltinHandler.
        """
        super().__init__(name=name, json_handler=json_handler)
        self.http_client = http_client
        self._http_requests = AsyncHttpRequests(http_client, json_handler=self._json_handler)

    async def wait_task(
        self,
        task_id: int,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        interval_in_ms: int = DEFAULT_INTERVAL_IN_MS,
    ) -> TaskStatus:
        """Wait until a task of this index is published.

        Args:
            task_id: The identifier returned by the call that created the task.
            max_retries: The number of status checks before giving up. Defaults to 120.
            interval_in_ms: Time to wait between two checks. Defaults to 1000.

        Returns:
            The published status of the task.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
            AlgoliaTimeoutError: If the task is still not published after max_retries checks.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     response = await index.add_object({"title": "Alien"})
            >>>     await index.wait_task(response.task_id)
        """
        return await async_wait_for_task(
            self.http_client,
            self.name,
            task_id,
            max_retries=max_retries,
            interval_in_ms=interval_in_ms,
        )

    async def wait_tasks(
        self,
        task_ids: Sequence[int],
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        interval_in_ms: int = DEFAULT_INTERVAL_IN_MS,
    ) -> list[TaskStatus]:
        """Wait for several tasks of this index concurrently.

        The first task that fails or times out is raised.
        """
        return await async_wait_for_tasks(
            self.http_client,
            self.name,
            task_ids,
            max_retries=max_retries,
            interval_in_ms=interval_in_ms,
        )

    async def delete(self) -> TaskInfo:
        """Deletes the index.

        Returns:
            The details of the task.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     await index.delete()
        """
        response = await self._http_requests.delete(self._index_url)

        return TaskInfo(**self._http_requests.parse_json(response))

    async def clear(self) -> TaskInfo:
        """Deletes all the objects of the index while keeping its settings, synonyms and rules."""
        response = await self._http_requests.post(f"{self._index_url}/clear")

        return TaskInfo(**self._http_requests.parse_json(response))

    async def copy(self, destination: str) -> TaskInfo:
        """Copies the index, objects included, to the destination index.

        Args:
            destination: The name of the destination index. It is overwritten if it exists.

        Returns:
            The details of the task.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
        """
        return await self._operation("copy", destination)

    async def move(self, destination: str) -> TaskInfo:
        """Renames the index to destination, overwriting it if it exists."""
        return await self._operation("move", destination)

    async def scoped_copy(self, destination: str, scopes: Sequence[str]) -> TaskInfo:
        """Copies only parts of the index configuration to the destination index.

        Args:
            destination: The name of the destination index.
            scopes: What to copy, any of "settings", "synonyms", and "rules". Objects are never
                copied.

        Returns:
            The details of the task.

        Raises:
            ValueError: If no scope or an unknown scope is given.
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     await index.scoped_copy("movies_staging", ["settings", "synonyms"])
        """
        return await self._operation("copy", destination, validate_scopes(scopes))

    async def get_settings(self) -> IndexSettings:
        """Get settings of the index.

        Returns:
            Settings of the index.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
            SettingsDecodeError: If a polymorphic setting came back in an unexpected shape.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     settings = await index.get_settings()
        """
        url = build_encoded_url(self._settings_url, {"getVersion": 2})
        response = await self._http_requests.get(url)

        return IndexSettings(**self._http_requests.parse_json(response))

    async def set_settings(
        self,
        settings: IndexSettings | JsonMapping,
        *,
        forward_to_replicas: bool = False,
        compress: bool = False,
    ) -> TaskInfo:
        """Update settings of the index.

        Only the given settings are changed. When an IndexSettings instance is passed the unset
        fields and the empty lists are not sent.

        Args:
            settings: The settings to update.
            forward_to_replicas: If set to True the settings are also applied to the replicas.
                Defaults to False.
            compress: If set to True the data will be sent in gzip format. Defaults to False.

        Returns:
            The details of the task.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> from algoliasearch_python_sdk.models.settings import IndexSettings
            >>> new_settings = IndexSettings(
            >>>     searchable_attributes=["title", "overview"],
            >>>     attributes_for_faceting=["searchable(genre)"],
            >>>     remove_stop_words=["en", "fr"],
            >>>     distinct=1,
            >>>     attribute_for_distinct="url",
            >>> )
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     await index.set_settings(new_settings)
        """
        body = settings.to_generic_map() if isinstance(settings, IndexSettings) else dict(settings)
        url = build_encoded_url(
            self._settings_url, {"forwardToReplicas": bool_param(forward_to_replicas)}
        )
        response = await self._http_requests.put(url, body, compress=compress)

        return TaskInfo(**self._http_requests.parse_json(response))

    async def get_object(self, object_id: str, attributes: list[str] | None = None) -> JsonDict:
        """Get one object with given object identifier.

        Args:
            object_id: Unique identifier of the object.
            attributes: Attributes to retrieve. If this value is None then all attributes are
                retrieved. Defaults to None.

        Returns:
            The object.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error, for example when the object
                does not exist.
        """
        url = self._object_url(object_id)
        if attributes:
            url = build_encoded_url(url, {"attributes": ",".join(attributes)})

        response = await self._http_requests.get(url)

        return self._http_requests.parse_json(response)

    async def get_objects(
        self, object_ids: Sequence[str], attributes: list[str] | None = None
    ) -> list[JsonDict | None]:
        """Get several objects at once. Missing objects are returned as None."""
        requests = []
        for object_id in object_ids:
            request: JsonDict = {"indexName": self.name, "objectID": object_id}
            if attributes:
                request["attributesToRetrieve"] = attributes
            requests.append(request)

        response = await self._http_requests.post(
            f"{self._base_url}/*/objects", body={"requests": requests}
        )

        return ObjectsResponse(**self._http_requests.parse_json(response)).results

    async def add_object(self, obj: JsonMapping) -> CreateObjectResponse:
        """Add an object to the index.

        When the object has an objectID it replaces the existing object with the same objectID,
        otherwise the server generates one.

        Args:
            obj: The object to add.

        Returns:
            The details of the task, including the objectID.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     response = await index.add_object({"title": "Alien", "year": 1979})
            >>>     await index.wait_task(response.task_id)
        """
        if obj.get("objectID") not in (None, ""):
            response = await self._http_requests.put(self._object_url(str(obj["objectID"])), obj)
            info = self._http_requests.parse_json(response)
            info.setdefault("createdAt", info.get("updatedAt"))
            return CreateObjectResponse(**info)

        response = await self._http_requests.post(self._index_url, obj)

        return CreateObjectResponse(**self._http_requests.parse_json(response))

    async def add_objects(self, objects: Sequence[JsonMapping]) -> BatchResponse:
        return await self.batch(build_object_operations("addObject", objects))

    async def add_objects_in_batches(
        self, objects: Sequence[JsonMapping], *, batch_size: int = 1000
    ) -> list[BatchResponse]:
        """Add objects to the index in batches.

        The batches are sent concurrently and the responses keep the order of the batches.

        Args:
            objects: List of objects.
            batch_size: The number of objects that should be included in each batch.
                Defaults to 1000.

        Returns:
            The details of each batch task.
        """
        return await gather_all([self.add_objects(x) for x in batch(objects, batch_size)])

    async def update_object(self, obj: JsonMapping) -> UpdateObjectResponse:
        """Replace an existing object.

        Raises:
            InvalidObjectError: If the object has no objectID.
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
        """
        object_id = object_id_of(obj)
        response = await self._http_requests.put(self._object_url(object_id), obj)

        return UpdateObjectResponse(**self._http_requests.parse_json(response))

    async def update_objects(self, objects: Sequence[JsonMapping]) -> BatchResponse:
        return await self.batch(build_object_operations("updateObject", objects))

    async def partial_update_object(
        self, obj: JsonMapping, *, create_if_not_exists: bool = True
    ) -> UpdateObjectResponse:
        """Update only the given attributes of an object.

        Values can be plain values or partial update operations such as Increment or AddUnique.

        Args:
            obj: The attributes to update, including the objectID.
            create_if_not_exists: If set to True the object is created when it does not exist.
                Defaults to True.

        Returns:
            The details of the task.

        Raises:
            InvalidObjectError: If the object has no objectID.
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> from algoliasearch_python_sdk.models.objects import Increment
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     await index.partial_update_object({"objectID": "1", "views": Increment(1)})
        """
        object_id = object_id_of(obj)
        url = build_encoded_url(
            f"{self._object_url(object_id)}/partial",
            {"createIfNotExists": bool_param(create_if_not_exists)},
        )
        response = await self._http_requests.post(url, encode_body(obj))

        return UpdateObjectResponse(**self._http_requests.parse_json(response))

    async def partial_update_objects(
        self, objects: Sequence[JsonMapping], *, create_if_not_exists: bool = True
    ) -> BatchResponse:
        action = "partialUpdateObject" if create_if_not_exists else "partialUpdateObjectNoCreate"

        return await self.batch(build_object_operations(action, objects))

    async def delete_object(self, object_id: str) -> TaskInfo:
        if not object_id:
            raise ValueError("object_id is required")

        response = await self._http_requests.delete(self._object_url(object_id))

        return TaskInfo(**self._http_requests.parse_json(response))

    async def delete_objects(self, object_ids: Sequence[str]) -> BatchResponse:
        return await self.batch(
            build_object_operations("deleteObject", [{"objectID": x} for x in object_ids])
        )

    async def batch(self, operations: Sequence[BatchOperation | JsonMapping]) -> BatchResponse:
        """Send several write operations in a single atomic request.

        Every operation is checked before anything is sent, so an invalid operation means nothing
        is written.

        Args:
            operations: The operations to send.

        Returns:
            The details of the task covering the whole batch.

        Raises:
            InvalidBatchOperationError: If an operation that needs an objectID does not have one.
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> from algoliasearch_python_sdk.models.objects import AddUnique, BatchOperation
            >>> operations = [
            >>>     BatchOperation(action="addObject", body={"title": "Alien"}),
            >>>     BatchOperation(
            >>>         action="partialUpdateObject",
            >>>         body={"objectID": "1", "tags": AddUnique("scifi")},
            >>>     ),
            >>> ]
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     response = await index.batch(operations)
        """
        body = encode_batch(operations)
        response = await self._http_requests.post(self._batch_url, body)

        return BatchResponse(**self._http_requests.parse_json(response))

    async def search(self, query: str = "", params: JsonMapping | None = None) -> SearchResults:
        """Search the index.

        Args:
            query: The text to search for. Defaults to "".
            params: Any other search parameter, for example {"hitsPerPage": 5} or
                {"insideBoundingBox": [[47.3, 4.9, 29.6, 12.5]]}. Defaults to None.

        Returns:
            The results of the search.

        Raises:
            InvalidParameterTypeError: If a geo parameter is neither a string nor a list of
                coordinate lists.
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "searchKey") as client:
            >>>     index = client.index("movies")
            >>>     results = await index.search("alien", {"hitsPerPage": 5})
        """
        body = build_search_body(query, params, self._json_handler)
        response = await self._http_requests.post(f"{self._index_url}/query", body)

        return SearchResults(**self._http_requests.parse_json(response))

    async def search_for_facet_values(
        self, facet_name: str, facet_query: str, params: JsonMapping | None = None
    ) -> FacetSearchResults:
        """Search the values of a facet.

        The facet has to be declared as searchable in attributes_for_faceting. A query that does
        not match any value returns no facet hits.

        Args:
            facet_name: The facet attribute to search in.
            facet_query: The text to search for in the facet values.
            params: Additional search parameters used to filter the objects that are counted.
                Defaults to None.

        Returns:
            The matching facet values.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.
        """
        params = {"facetQuery": facet_query, **(params or {})}
        body = {"params": encode_params(params, self._json_handler)}
        response = await self._http_requests.post(
            f"{self._index_url}/facets/{encode_path(facet_name)}/query", body
        )

        return FacetSearchResults(**self._http_requests.parse_json(response))

    async def search_facet(
        self, facet_name: str, facet_query: str, params: JsonMapping | None = None
    ) -> FacetSearchResults:
        """Deprecated, use search_for_facet_values instead."""
        warnings.warn(
            "search_facet is deprecated, use search_for_facet_values instead",
            DeprecationWarning,
            stacklevel=2,
        )

        return await self.search_for_facet_values(facet_name, facet_query, params)

    async def browse(
        self, params: JsonMapping | None = None, cursor: str | None = None
    ) -> BrowseResponse:
        """Get one page of objects, without the limits of search.

        Pass the cursor of the previous page to get the next one.
        """
        body: JsonDict = (
            {"cursor": cursor}
            if cursor
            else {"params": encode_params(params, self._json_handler)}
        )
        response = await self._http_requests.post(f"{self._index_url}/browse", body)

        return BrowseResponse(**self._http_requests.parse_json(response))

    def browse_all(self, params: JsonMapping | None = None) -> AsyncBrowseIterator:
        """Iterate over all the objects of the index.

        Each call starts a new iteration. Pages are only requested when the previous one is used
        up.

        Args:
            params: Browse parameters, for example {"filters": "year > 2000"}. Defaults to None.

        Returns:
            An iterator over the objects. It can be used in a for loop, or with `next_hit`, which
            raises NoMoreHitsError after the last object.

        Raises:
            InvalidParameterTypeError: If a geo parameter is neither a string nor a list of
                coordinate lists.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("movies")
            >>>     async for movie in index.browse_all():
            >>>         print(movie["title"])
        """
        encode_params(params, self._json_handler)

        async def fetch_page(cursor: str | None) -> BrowseResponse:
            return await self.browse(params, cursor)

        return AsyncBrowseIterator(fetch_page)

    async def save_synonym(
        self, synonym: Synonym | JsonMapping, *, forward_to_replicas: bool = False
    ) -> TaskInfo:
        """Create or replace a synonym.

        Args:
            synonym: The synonym, any of RegularSynonym, OneWaySynonym, PlaceholderSynonym, or
                AltCorrectionSynonym.
            forward_to_replicas: If set to True the synonym is also saved in the replicas.
                Defaults to False.

        Returns:
            The details of the task.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> from algoliasearch_python_sdk.models.synonyms import OneWaySynonym
            >>> synonym = OneWaySynonym(object_id="wii_to_wii_u", input="Wii", synonyms=["Wii U"])
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("consoles")
            >>>     await index.save_synonym(synonym)
        """
        body = unwrap_mapping(synonym)
        url = build_encoded_url(
            f"{self._synonyms_url}/{encode_path(object_id_of(body))}",
            {"forwardToReplicas": bool_param(forward_to_replicas)},
        )
        response = await self._http_requests.put(url, body)

        return TaskInfo(**self._http_requests.parse_json(response))

    async def batch_synonyms(
        self,
        synonyms: Sequence[Synonym | JsonMapping],
        *,
        forward_to_replicas: bool = False,
        replace_existing_synonyms: bool = False,
    ) -> TaskInfo:
        url = build_encoded_url(
            f"{self._synonyms_url}/batch",
            {
                "forwardToReplicas": bool_param(forward_to_replicas),
                "replaceExistingSynonyms": bool_param(replace_existing_synonyms),
            },
        )
        response = await self._http_requests.post(url, [unwrap_mapping(x) for x in synonyms])

        return TaskInfo(**self._http_requests.parse_json(response))

    async def get_synonym(self, object_id: str) -> Synonym:
        response = await self._http_requests.get(f"{self._synonyms_url}/{encode_path(object_id)}")

        return parse_synonym(self._http_requests.parse_json(response))

    async def delete_synonym(
        self, object_id: str, *, forward_to_replicas: bool = False
    ) -> TaskInfo:
        url = build_encoded_url(
            f"{self._synonyms_url}/{encode_path(object_id)}",
            {"forwardToReplicas": bool_param(forward_to_replicas)},
        )
        response = await self._http_requests.delete(url)

        return TaskInfo(**self._http_requests.parse_json(response))

    async def clear_synonyms(self, *, forward_to_replicas: bool = False) -> TaskInfo:
        url = build_encoded_url(
            f"{self._synonyms_url}/clear", {"forwardToReplicas": bool_param(forward_to_replicas)}
        )
        response = await self._http_requests.post(url)

        return TaskInfo(**self._http_requests.parse_json(response))

    async def search_synonyms(
        self,
        query: str = "",
        types: Sequence[str] | None = None,
        page: int = 0,
        hits_per_page: int = 100,
    ) -> SynonymSearchResults:
        """Search the synonyms of the index.

        Args:
            query: The text to search for. An empty query matches every synonym. Defaults to "".
            types: Only return synonyms of these types, for example ["oneWaySynonym"].
                Defaults to None (all types).
            page: The page to retrieve. Defaults to 0.
            hits_per_page: The number of synonyms per page. Defaults to 100.

        Returns:
            The matching synonyms.
        """
        body: JsonDict = {"query": query, "page": page, "hitsPerPage": hits_per_page}
        if types:
            body["type"] = ",".join(types)

        response = await self._http_requests.post(f"{self._synonyms_url}/search", body)

        return SynonymSearchResults(**self._http_requests.parse_json(response))

    async def save_rule(
        self, rule: Rule | JsonMapping, *, forward_to_replicas: bool = False
    ) -> TaskInfo:
        """Create or replace a query rule.

        Args:
            rule: The rule to save.
            forward_to_replicas: If set to True the rule is also saved in the replicas.
                Defaults to False.

        Returns:
            The details of the task.

        Raises:
            AlgoliaCommunicationError: If there was an error communicating with the server.
            AlgoliaApiError: If the Algolia API returned an error.

        Examples
            >>> from algoliasearch_python_sdk import AsyncClient
            >>> from algoliasearch_python_sdk.models.rules import (
            >>>     HiddenObject,
            >>>     Rule,
            >>>     RuleCondition,
            >>>     RuleConsequence,
            >>> )
            >>> rule = Rule(
            >>>     object_id="hide_42",
            >>>     condition=RuleCondition(pattern="iphone", anchoring="contains"),
            >>>     consequence=RuleConsequence(hide=[HiddenObject(object_id="42")]),
            >>> )
            >>> async with AsyncClient("APP_ID", "adminKey") as client:
            >>>     index = client.index("phones")
            >>>     await index.save_rule(rule)
        """
        body = unwrap_mapping(rule)
        url = build_encoded_url(
            f"{self._rules_url}/{encode_path(object_id_of(body))}",
            {"forwardToReplicas": bool_param(forward_to_replicas)},
        )
        response = await self._http_requests.put(url, body)

        return TaskInfo(**self._http_requests.parse_json(response))

    async def batch_rules(
        self,
        rules: Sequence[Rule | JsonMapping],
        *,
        forward_to_replicas: bool = False,
        clear_existing_rules: bool = False,
    ) -> TaskInfo:
        url = build_encoded_url(
            f"{self._rules_url}/batch",
            {
                "forwardToReplicas": bool_param(forward_to_replicas),
                "clearExistingRules": bool_param(clear_existing_rules),
            },
        )
        response = await self._http_requests.post(url, [unwrap_mapping(x) for x in rules])

        return TaskInfo(**self._http_requests.parse_json(response))

    async def get_rule(self, object_id: str) -> Rule:
        response = await self._http_requests.get(f"{self._rules_url}/{encode_path(object_id)}")

        return Rule(**self._http_requests.parse_json(response))

    async def delete_rule(
        self, object_id: str, *, forward_to_replicas: bool = False
    ) -> TaskInfo:
        url = build_encoded_url(
            f"{self._rules_url}/{encode_path(object_id)}",
            {"forwardToReplicas": bool_param(forward_to_replicas)},
        )
        response = await self._http_requests.delete(url)

        return TaskInfo(**self._http_requests.parse_json(response))

    async def clear_rules(self, *, forward_to_replicas: bool = False) -> TaskInfo:
        url = build_encoded_url(
            f"{self._rules_url}/clear", {"forwardToReplicas": bool_param(forward_to_replicas)}
        )
        response = await self._http_requests.post(url)

        return TaskInfo(**self._http_requests.parse_json(response))

    async def search_rules(self, params: JsonMapping | None = None) -> RuleSearchResults:
        """Search the query rules of the index.

        Args:
            params: Search parameters such as query, anchoring, context, page, and hitsPerPage.
                Defaults to None (all rules).

        Returns:
            The matching rules.
        """
        body: dict[str, Any] = {"query": ""}
        if params:
            body.update(params)

        response = await self._http_requests.post(f"{self._rules_url}/search", body)

        return RuleSearchResults(**self._http_requests.parse_json(response))

    async def _operation(
        self, operation: str, destination: str, scopes: list[str] | None = None
    ) -> TaskInfo:
        body: JsonDict = {"operation": operation, "destination": destination}
        if scopes:
            body["scope"] = scopes

        response = await self._http_requests.post(self._operation_url, body)

        return TaskInfo(**self._http_requests.parse_json(response))
