from __future__ import annotations

import gzip
import logging
from functools import lru_cache
from typing import Any, Callable

from httpx import (
    AsyncClient,
    Client,
    HTTPError,
    Response,
    TransportError,
)

from algoliasearch_python_sdk._version import VERSION
from algoliasearch_python_sdk.errors import (
    AlgoliaApiError,
    AlgoliaCommunicationError,
    AlgoliaError,
)
from algoliasearch_python_sdk.json_handler import BuiltinHandler, OrjsonHandler, UjsonHandler

logger = logging.getLogger(__name__)


class AsyncHttpRequests:
    def __init__(
        self,
        http_client: AsyncClient,
        json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
    ) -> None:
        self.http_client = http_client
        self.json_handler = json_handler if json_handler else BuiltinHandler()

    async def _send_request(
        self,
        http_method: Callable,
        path: str,
        body: Any | None = None,
        compress: bool = False,
    ) -> Response:
        headers = build_headers(compress)
        logger.debug("%s %s", getattr(http_method, "__name__", "request").upper(), path)

        try:
            if body is None:
                response = await http_method(path)
            elif not compress:
                response = await http_method(
                    path, content=self.json_handler.dumps(body), headers=headers
                )
            else:
                content = gzip.compress(self.json_handler.dumps(body).encode("utf-8"))
                response = await http_method(path, content=content, headers=headers)

            response.raise_for_status()
            return response

        except TransportError as err:
            raise AlgoliaCommunicationError(str(err)) from err
        except HTTPError as err:
            if "response" in locals():
                if "application/json" in response.headers.get("content-type", ""):
                    raise AlgoliaApiError(str(err), response) from err
                else:
                    raise
            else:
                # Fail safe just in case error happens before response is created
                raise AlgoliaError(str(err)) from err

    async def get(self, path: str) -> Response:
        return await self._send_request(self.http_client.get, path)

    async def post(self, path: str, body: Any | None = None, compress: bool = False) -> Response:
        return await self._send_request(self.http_client.post, path, body, compress)

    async def put(self, path: str, body: Any | None = None, compress: bool = False) -> Response:
        return await self._send_request(self.http_client.put, path, body, compress)

    async def delete(self, path: str) -> Response:
        return await self._send_request(self.http_client.delete, path)

    def parse_json(self, response: Response) -> Any:
        return self.json_handler.loads(response.content)


class HttpRequests:
    def __init__(
        self,
        http_client: Client,
        json_handler: BuiltinHandler | OrjsonHandler | UjsonHandler | None = None,
    ) -> None:
        self.http_client = http_client
        self.json_handler = json_handler if json_handler else BuiltinHandler()

    def _send_request(
        self,
        http_method: Callable,
        path: str,
        body: Any | None = None,
        compress: bool = False,
    ) -> Response:
        headers = build_headers(compress)
        logger.debug("%s %s", getattr(http_method, "__name__", "request").upper(), path)

        try:
            if body is None:
                response = http_method(path)
            elif not compress:
                response = http_method(path, content=self.json_handler.dumps(body), headers=headers)
            else:
                content = gzip.compress(self.json_handler.dumps(body).encode("utf-8"))
                response = http_method(path, content=content, headers=headers)

            response.raise_for_status()
            return response

        except TransportError as err:
            raise AlgoliaCommunicationError(str(err)) from err
        except HTTPError as err:
            if "response" in locals():
                if "application/json" in response.headers.get("content-type", ""):
                    raise AlgoliaApiError(str(err), response) from err
                else:
                    raise
            else:
                # Fail safe just in case error happens before response is created
                raise AlgoliaError(str(err)) from err

    def get(self, path: str) -> Response:
        return self._send_request(self.http_client.get, path)

    def post(self, path: str, body: Any | None = None, compress: bool = False) -> Response:
        return self._send_request(self.http_client.post, path, body, compress)

    def put(self, path: str, body: Any | None = None, compress: bool = False) -> Response:
        return self._send_request(self.http_client.put, path, body, compress)

    def delete(self, path: str) -> Response:
        return self._send_request(self.http_client.delete, path)

    def parse_json(self, response: Response) -> Any:
        return self.json_handler.loads(response.content)


def build_headers(compress: bool) -> dict[str, str]:
    headers = {"User-Agent": user_agent(), "Content-Type": "application/json"}

    if compress:
        headers["Content-Encoding"] = "gzip"

    return headers


@lru_cache(maxsize=1)
def user_agent() -> str:
    return f"Algolia for Python SDK (v{VERSION})"


def build_auth_headers(app_id: str, api_key: str) -> dict[str, str]:
    return {"X-Algolia-Application-Id": app_id, "X-Algolia-API-Key": api_key}
