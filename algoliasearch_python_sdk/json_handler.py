from __future__ import annotations

import json
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

try:
    import orjson
except ImportError:  # pragma: nocover
    orjson = None  # type: ignore

try:
    import ujson
except ImportError:  # pragma: nocover
    ujson = None  # type: ignore


class TimestampEncoder(json.JSONEncoder):
    """Encodes datetimes as UNIX timestamps, the format Algolia expects for dates."""

    def default(self, o: Any) -> Any:
        if isinstance(o, datetime):
            return int(o.timestamp())

        return super().default(o)


class _JsonHandler(ABC):
    @staticmethod
    @abstractmethod
    def dumps(obj: Any) -> str: ...

    @staticmethod
    @abstractmethod
    def loads(json_string: str | bytes | bytearray) -> Any: ...


class BuiltinHandler(_JsonHandler):
    serializer: type[json.JSONEncoder] = TimestampEncoder

    def __init__(self, serializer: type[json.JSONEncoder] | None = None) -> None:
        """Uses the json module from the Python standard library.

        Args:
            serializer: A custom JSONEncoder to handle serializing fields that the built in
                json.dumps cannot handle, for example UUID. Defaults to None, which
                encodes datetimes as UNIX timestamps.
        """
        if serializer:
            BuiltinHandler.serializer = serializer

    @staticmethod
    def dumps(obj: Any) -> str:
        return json.dumps(obj, cls=BuiltinHandler.serializer)

    @staticmethod
    def loads(json_string: str | bytes | bytearray) -> Any:
        return json.loads(json_string)


class OrjsonHandler(_JsonHandler):
    def __init__(self) -> None:
        if orjson is None:  # pragma: no cover
            raise ValueError("orjson must be installed to use the OrjsonHandler")

    @staticmethod
    def dumps(obj: Any) -> str:
        return orjson.dumps(
            obj, default=_timestamp, option=orjson.OPT_PASSTHROUGH_DATETIME
        ).decode("utf-8")

    @staticmethod
    def loads(json_string: str | bytes | bytearray) -> Any:
        return orjson.loads(json_string)


class UjsonHandler(_JsonHandler):
    def __init__(self) -> None:
        if ujson is None:  # pragma: no cover
            raise ValueError("ujson must be installed to use the UjsonHandler")

    @staticmethod
    def dumps(obj: Any) -> str:
        return ujson.dumps(obj, default=_timestamp)

    @staticmethod
    def loads(json_string: str | bytes | bytearray) -> Any:
        return ujson.loads(json_string)


def _timestamp(obj: Any) -> int:
    if isinstance(obj, datetime):
        return int(obj.timestamp())

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
