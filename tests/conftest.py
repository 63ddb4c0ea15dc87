import copy
import gzip
import json
from collections import defaultdict
from datetime import datetime, timezone
from urllib.parse import parse_qs, unquote

import httpx
import pytest

from algoliasearch_python_sdk import AsyncClient, Client
from algoliasearch_python_sdk.models.objects import apply_partial_update

APP_ID = "TESTAPP"
ADMIN_KEY = "adminKey"

BROWSE_PAGE_SIZE = 1000


def _now_iso():
    return datetime.now(tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def _now_ts():
    return int(datetime.now(tz=timezone.utc).timestamp())


def _json(status_code, body):
    return httpx.Response(status_code, json=body)


def _not_found(message):
    return _json(404, {"message": message, "status": 404})


def _new_index():
    return {"objects": {}, "settings": {}, "synonyms": {}, "rules": {}, "created_at": _now_iso()}


class FakeAlgolia:
    """In-memory stand-in for the Algolia REST API.

    Writes are applied right away, while each task reports `notPublished` for the first
    `not_published_polls` status checks. New API keys stay hidden for `key_visibility_delay`
    reads.
    """

    def __init__(self):
        self.indexes = {}
        self.keys = {}
        self.pending_keys = {}
        self.tasks = {}
        self.task_polls = defaultdict(int)
        self.requests = []
        self.not_published_polls = 0
        self.key_visibility_delay = 0
        self.failing_task_polls = 0
        self._next_task_id = 1
        self._next_object_id = 1
        self._next_key_id = 1

    def handle(self, request):
        self.requests.append(request)
        raw_path = request.url.raw_path.split(b"?")[0].decode()
        segments = [unquote(x) for x in raw_path.strip("/").split("/")]
        query = {k: v[0] for k, v in parse_qs(request.url.query.decode()).items()}
        content = request.content
        if request.headers.get("Content-Encoding") == "gzip":
            content = gzip.decompress(content)
        body = json.loads(content) if content else None

        if segments[:2] == ["1", "keys"]:
            return self._keys(request.method, segments[2:], body)

        if segments[:2] != ["1", "indexes"]:
            return _not_found("Unknown path")

        rest = segments[2:]
        if not rest:
            return self._list_indexes()

        if rest[0] == "*":
            if rest[1] == "objects":
                return self._get_objects(body)
            return self._multiple_batch(body)

        return self._index(request, rest[0], rest[1:], query, body)

    def task_requests(self):
        return [x for x in self.requests if "/task/" in x.url.path]

    def new_task(self):
        task_id = self._next_task_id
        self._next_task_id += 1
        self.tasks[task_id] = self.not_published_polls

        return task_id

    def _new_object_id(self):
        object_id = str(self._next_object_id)
        self._next_object_id += 1

        return object_id

    def _get_or_create(self, name):
        if name not in self.indexes:
            self.indexes[name] = _new_index()

        return self.indexes[name]

    def _list_indexes(self):
        items = [
            {
                "name": name,
                "createdAt": index["created_at"],
                "updatedAt": _now_iso(),
                "entries": len(index["objects"]),
                "dataSize": 0,
                "fileSize": 0,
                "lastBuildTimeS": 0,
                "numberOfPendingTasks": 0,
                "pendingTask": False,
            }
            for name, index in self.indexes.items()
        ]

        return _json(200, {"items": items, "nbPages": 1})

    def _get_objects(self, body):
        results = []
        for request in body["requests"]:
            index = self.indexes.get(request["indexName"])
            obj = index["objects"].get(request["objectID"]) if index else None
            if obj is not None and request.get("attributesToRetrieve"):
                obj = _select(obj, request["attributesToRetrieve"])
            results.append(obj)

        return _json(200, {"results": results})

    def _multiple_batch(self, body):
        task_ids = {}
        object_ids = []
        for request in body["requests"]:
            name = request["indexName"]
            object_ids.extend(self._apply_batch_request(name, request))
            if name not in task_ids:
                task_ids[name] = self.new_task()

        return _json(200, {"taskID": task_ids, "objectIDs": object_ids})

    def _apply_batch_request(self, name, request):
        action = request["action"]
        obj = request.get("body", {})

        if action == "delete":
            self.indexes.pop(name, None)
            return []

        index = self._get_or_create(name)
        if action == "clear":
            index["objects"].clear()
            return []

        if action == "addObject":
            object_id = str(obj.get("objectID") or self._new_object_id())
            index["objects"][object_id] = {**obj, "objectID": object_id}
        elif action == "updateObject":
            object_id = obj["objectID"]
            index["objects"][object_id] = dict(obj)
        elif action in ("partialUpdateObject", "partialUpdateObjectNoCreate"):
            object_id = obj["objectID"]
            current = index["objects"].get(object_id)
            if current is None and action == "partialUpdateObjectNoCreate":
                return [object_id]
            index["objects"][object_id] = apply_partial_update(
                current or {"objectID": object_id}, obj
            )
        elif action == "deleteObject":
            object_id = obj["objectID"]
            index["objects"].pop(object_id, None)
        else:
            raise AssertionError(f"unexpected batch action {action}")

        return [object_id]

    def _index(self, request, name, rest, query, body):
        method = request.method

        if not rest:
            if method == "DELETE":
                self.indexes.pop(name, None)
                return _json(200, {"deletedAt": _now_iso(), "taskID": self.new_task()})
            index = self._get_or_create(name)
            object_id = self._new_object_id()
            index["objects"][object_id] = {**body, "objectID": object_id}
            return _json(
                201, {"createdAt": _now_iso(), "taskID": self.new_task(), "objectID": object_id}
            )

        if rest[0] == "task":
            return self._task_status(request, int(rest[1]))

        if rest[0] == "synonyms":
            return self._synonyms(method, name, rest[1:], query, body)

        if rest[0] == "rules":
            return self._rules(method, name, rest[1:], query, body)

        if rest[0] == "facets":
            return self._search_facet(name, rest[1], body)

        if len(rest) == 1 and method == "POST":
            return self._index_post(name, rest[0], body)

        if rest[0] == "settings":
            if method == "GET":
                if name not in self.indexes:
                    return _not_found("Index does not exist")
                return _json(200, copy.deepcopy(self.indexes[name]["settings"]))
            self._get_or_create(name)["settings"].update(body)
            return _json(200, {"updatedAt": _now_iso(), "taskID": self.new_task()})

        return self._object(method, name, rest, query, body)

    def _index_post(self, name, action, body):
        if action == "clear":
            self._get_or_create(name)["objects"].clear()
            return _json(200, {"updatedAt": _now_iso(), "taskID": self.new_task()})

        if action == "batch":
            object_ids = []
            for request in body["requests"]:
                object_ids.extend(self._apply_batch_request(name, request))
            return _json(200, {"taskID": self.new_task(), "objectIDs": object_ids})

        if action == "operation":
            self._operation(name, body)
            return _json(200, {"updatedAt": _now_iso(), "taskID": self.new_task()})

        if action == "query":
            return self._search(name, body)

        if action == "browse":
            return self._browse(name, body)

        raise AssertionError(f"unexpected index action {action}")

    def _operation(self, name, body):
        source = self._get_or_create(name)
        destination = body["destination"]
        scopes = body.get("scope")

        if body["operation"] == "move":
            self.indexes[destination] = self.indexes.pop(name)
            return

        if not scopes:
            self.indexes[destination] = copy.deepcopy(source)
            return

        target = self._get_or_create(destination)
        for scope in scopes:
            target[scope] = copy.deepcopy(source[scope])

    def _task_status(self, request, task_id):
        self.task_polls[task_id] += 1
        if self.failing_task_polls > 0:
            self.failing_task_polls -= 1
            raise httpx.ConnectError("Connection refused", request=request)

        remaining = self.tasks.get(task_id, 0)
        if remaining > 0:
            self.tasks[task_id] = remaining - 1
            return _json(200, {"status": "notPublished", "pendingTask": True})

        return _json(200, {"status": "published", "pendingTask": False})

    def _object(self, method, name, rest, query, body):
        object_id = rest[0]
        index = self.indexes.get(name)

        if len(rest) == 2 and rest[1] == "partial":
            index = self._get_or_create(name)
            current = index["objects"].get(object_id)
            if current is not None or query.get("createIfNotExists") != "false":
                index["objects"][object_id] = apply_partial_update(
                    current or {"objectID": object_id}, body
                )
            return _json(
                200, {"updatedAt": _now_iso(), "taskID": self.new_task(), "objectID": object_id}
            )

        if method == "GET":
            obj = index["objects"].get(object_id) if index else None
            if obj is None:
                return _not_found("ObjectID does not exist")
            if query.get("attributes"):
                obj = _select(obj, query["attributes"].split(","))
            return _json(200, obj)

        if method == "PUT":
            self._get_or_create(name)["objects"][object_id] = {**body, "objectID": object_id}
            return _json(
                200, {"updatedAt": _now_iso(), "taskID": self.new_task(), "objectID": object_id}
            )

        if method == "DELETE":
            if index:
                index["objects"].pop(object_id, None)
            return _json(200, {"deletedAt": _now_iso(), "taskID": self.new_task()})

        raise AssertionError(f"unexpected object method {method}")

    def _search(self, name, body):
        if name not in self.indexes:
            return _not_found("Index does not exist")

        params = _params(body)
        query = params.get("query", "").lower()
        hits_per_page = int(params.get("hitsPerPage", 20))
        page = int(params.get("page", 0))
        matches = [
            obj
            for obj in self.indexes[name]["objects"].values()
            if not query or query in json.dumps(obj).lower()
        ]
        nb_pages = -(-len(matches) // hits_per_page)

        return _json(
            200,
            {
                "hits": matches[page * hits_per_page : (page + 1) * hits_per_page],
                "nbHits": len(matches),
                "page": page,
                "nbPages": nb_pages,
                "hitsPerPage": hits_per_page,
                "processingTimeMS": 1,
                "exhaustiveNbHits": True,
                "query": params.get("query", ""),
                "params": body["params"],
            },
        )

    def _browse(self, name, body):
        if name not in self.indexes:
            return _not_found("Index does not exist")

        if body.get("cursor"):
            offset, hits_per_page = (int(x) for x in body["cursor"].split(":"))
        else:
            offset = 0
            hits_per_page = int(_params(body).get("hitsPerPage", BROWSE_PAGE_SIZE))

        objects = list(self.indexes[name]["objects"].values())
        end = offset + hits_per_page
        response = {"hits": objects[offset:end], "nbHits": len(objects), "processingTimeMS": 1}
        if end < len(objects):
            response["cursor"] = f"{end}:{hits_per_page}"

        return _json(200, response)

    def _search_facet(self, name, facet, body):
        if name not in self.indexes:
            return _not_found("Index does not exist")

        facet_query = _params(body).get("facetQuery", "").lower()
        counts = defaultdict(int)
        for obj in self.indexes[name]["objects"].values():
            values = obj.get(facet)
            for value in values if isinstance(values, list) else [values]:
                if isinstance(value, str) and value.lower().startswith(facet_query):
                    counts[value] += 1

        facet_hits = [
            {
                "value": value,
                "highlighted": f"<em>{value[: len(facet_query)]}</em>{value[len(facet_query) :]}",
                "count": count,
            }
            for value, count in sorted(counts.items(), key=lambda x: -x[1])
        ]

        return _json(
            200,
            {"facetHits": facet_hits, "exhaustiveFacetsCount": True, "processingTimeMS": 1},
        )

    def _synonyms(self, method, name, rest, query, body):
        index = self._get_or_create(name)
        synonyms = index["synonyms"]

        if method == "POST" and rest[0] == "batch":
            if query.get("replaceExistingSynonyms") == "true":
                synonyms.clear()
            for synonym in body:
                synonyms[synonym["objectID"]] = synonym
            return _json(200, {"updatedAt": _now_iso(), "taskID": self.new_task()})

        if method == "POST" and rest[0] == "clear":
            synonyms.clear()
            return _json(200, {"updatedAt": _now_iso(), "taskID": self.new_task()})

        if method == "POST" and rest[0] == "search":
            text = body.get("query", "").lower()
            types = body["type"].split(",") if body.get("type") else None
            hits = [
                x
                for x in synonyms.values()
                if (not text or text in json.dumps(x).lower())
                and (types is None or x["type"] in types)
            ]
            return _json(200, {"hits": hits, "nbHits": len(hits)})

        return self._stored_item(method, synonyms, rest[0], body, "Synonym does not exist")

    def _rules(self, method, name, rest, query, body):
        index = self._get_or_create(name)
        rules = index["rules"]

        if method == "POST" and rest[0] == "batch":
            if query.get("clearExistingRules") == "true":
                rules.clear()
            for rule in body:
                rules[rule["objectID"]] = rule
            return _json(200, {"updatedAt": _now_iso(), "taskID": self.new_task()})

        if method == "POST" and rest[0] == "clear":
            rules.clear()
            return _json(200, {"updatedAt": _now_iso(), "taskID": self.new_task()})

        if method == "POST" and rest[0] == "search":
            text = body.get("query", "").lower()
            hits = [x for x in rules.values() if not text or text in json.dumps(x).lower()]
            return _json(200, {"hits": hits, "nbHits": len(hits), "page": 0, "nbPages": 1})

        return self._stored_item(method, rules, rest[0], body, "Rule does not exist")

    def _stored_item(self, method, items, object_id, body, missing_message):
        if method == "PUT":
            items[object_id] = body
            return _json(
                200, {"updatedAt": _now_iso(), "taskID": self.new_task(), "id": object_id}
            )

        if method == "GET":
            if object_id not in items:
                return _not_found(missing_message)
            return _json(200, items[object_id])

        if method == "DELETE":
            items.pop(object_id, None)
            return _json(200, {"deletedAt": _now_iso(), "taskID": self.new_task()})

        raise AssertionError(f"unexpected method {method}")

    def _keys(self, method, rest, body):
        if not rest:
            if method == "GET":
                return _json(200, {"keys": list(self.keys.values())})
            value = f"key{self._next_key_id}"
            self._next_key_id += 1
            self.keys[value] = {"value": value, "createdAt": _now_ts(), **body}
            self.pending_keys[value] = self.key_visibility_delay
            return _json(200, {"key": value, "createdAt": _now_iso()})

        value = rest[0]
        if value not in self.keys:
            return _not_found("Key does not exist")

        if method == "GET":
            if self.pending_keys.get(value, 0) > 0:
                self.pending_keys[value] -= 1
                return _not_found("Key does not exist")
            return _json(200, self.keys[value])

        if method == "PUT":
            self.keys[value].update(body)
            return _json(200, {"key": value, "updatedAt": _now_iso()})

        self.keys.pop(value)
        return _json(200, {"deletedAt": _now_iso()})


def _params(body):
    return {k: v[0] for k, v in parse_qs(body.get("params", "")).items()}


def _select(obj, attributes):
    return {k: v for k, v in obj.items() if k == "objectID" or k in attributes}


@pytest.fixture
def fake_server():
    return FakeAlgolia()


@pytest.fixture
def client(fake_server):
    with Client(APP_ID, ADMIN_KEY, transport=httpx.MockTransport(fake_server.handle)) as client:
        yield client


@pytest.fixture
async def async_client(fake_server):
    async with AsyncClient(
        APP_ID, ADMIN_KEY, transport=httpx.MockTransport(fake_server.handle)
    ) as client:
        yield client


@pytest.fixture
def index(client):
    return client.index("movies")


@pytest.fixture
def async_index(async_client):
    return async_client.index("movies")


@pytest.fixture
def movies():
    return [
        {"objectID": "1", "title": "Alien", "year": 1979, "genre": ["scifi", "horror"]},
        {"objectID": "2", "title": "Aliens", "year": 1986, "genre": ["scifi", "action"]},
        {"objectID": "3", "title": "Heat", "year": 1995, "genre": ["crime"]},
        {"objectID": "4", "title": "Arrival", "year": 2016, "genre": ["scifi", "drama"]},
        {"objectID": "5", "title": "Amelie", "year": 2001, "genre": ["comedy", "romance"]},
    ]


@pytest.fixture
def index_with_movies(index, movies):
    response = index.add_objects(movies)
    index.wait_task(response.task_id, interval_in_ms=0)

    return index


@pytest.fixture
async def async_index_with_movies(async_index, movies):
    response = await async_index.add_objects(movies)
    await async_index.wait_task(response.task_id, interval_in_ms=0)

    return async_index
