from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Literal

from camel_converter.pydantic_base import CamelBase
from pydantic import Field

from algoliasearch_python_sdk.errors import InvalidObjectError
from algoliasearch_python_sdk.models.task import TaskInfo
from algoliasearch_python_sdk.types import JsonDict, JsonMapping

BatchAction = Literal[
    "addObject",
    "updateObject",
    "partialUpdateObject",
    "partialUpdateObjectNoCreate",
    "deleteObject",
    "delete",
    "clear",
]

ACTIONS_REQUIRING_OBJECT_ID = frozenset(
    ("updateObject", "partialUpdateObject", "partialUpdateObjectNoCreate", "deleteObject")
)


class PartialUpdateOperation:
    """A built-in operation applied by the server to a single attribute of an object."""

    kind: ClassVar[str]

    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.value == other.value  # type: ignore[attr-defined]

    def to_wire(self) -> Any:
        return {"_operation": self.kind, "value": self.value}

    def apply(self, current: Any) -> Any:  # pragma: no cover
        raise NotImplementedError


class Replace(PartialUpdateOperation):
    kind = "Replace"

    def to_wire(self) -> Any:
        return self.value

    def apply(self, current: Any) -> Any:
        return self.value


class Increment(PartialUpdateOperation):
    kind = "Increment"

    def apply(self, current: Any) -> Any:
        return (current or 0) + self.value


class Decrement(PartialUpdateOperation):
    kind = "Decrement"

    def apply(self, current: Any) -> Any:
        return (current or 0) - self.value


class Add(PartialUpdateOperation):
    kind = "Add"

    def apply(self, current: Any) -> Any:
        return [*_as_list(current), self.value]


class Remove(PartialUpdateOperation):
    kind = "Remove"

    def apply(self, current: Any) -> Any:
        return [x for x in _as_list(current) if x != self.value]


class AddUnique(PartialUpdateOperation):
    kind = "AddUnique"

    def apply(self, current: Any) -> Any:
        values = _as_list(current)
        if self.value in values:
            return values

        return [*values, self.value]


_OPERATIONS: dict[str, type[PartialUpdateOperation]] = {
    op.kind: op for op in (Increment, Decrement, Add, Remove, AddUnique)
}


def decode_operation(value: Any) -> PartialUpdateOperation:
    """Turn a wire encoded attribute update back into an operation.

    Anything that is not a tagged operation is a plain replacement.
    """
    if isinstance(value, PartialUpdateOperation):
        return value

    if isinstance(value, Mapping) and "_operation" in value:
        try:
            operation = _OPERATIONS[value["_operation"]]
        except KeyError:
            raise InvalidObjectError(
                f"Unknown partial update operation {value['_operation']}"
            ) from None

        return operation(value.get("value"))

    return Replace(value)


def encode_body(body: JsonMapping) -> JsonDict:
    return {
        k: v.to_wire() if isinstance(v, PartialUpdateOperation) else v for k, v in body.items()
    }


def apply_partial_update(obj: JsonMapping, update: JsonMapping) -> JsonDict:
    """Apply a partial update to a local copy of an object the same way the server does.

    The update can hold operation instances or their wire encoded form. The objectID of the
    update is ignored.
    """
    result = dict(obj)
    for attribute, value in update.items():
        if attribute == "objectID":
            continue
        result[attribute] = decode_operation(value).apply(result.get(attribute))

    return result


def object_id_of(obj: JsonMapping) -> str:
    object_id = obj.get("objectID")
    if object_id is None or object_id == "":
        raise InvalidObjectError("objectID is required")

    return str(object_id)


class BatchOperation(CamelBase):
    action: BatchAction
    body: JsonDict = Field(default_factory=dict)
    index_name: str | None = None

    def requires_object_id(self) -> bool:
        return self.action in ACTIONS_REQUIRING_OBJECT_ID

    def to_wire(self) -> JsonDict:
        request: JsonDict = {"action": self.action, "body": encode_body(self.body)}
        if self.index_name:
            request["indexName"] = self.index_name

        return request


class CreateObjectResponse(TaskInfo):
    object_id: str = Field(..., alias="objectID")


class UpdateObjectResponse(TaskInfo):
    object_id: str = Field(..., alias="objectID")


class BatchResponse(CamelBase):
    task_id: int = Field(..., alias="taskID")
    object_ids: list[str] = Field(default_factory=list, alias="objectIDs")


class MultipleBatchResponse(CamelBase):
    task_id: dict[str, int] = Field(..., alias="taskID")
    object_ids: list[str] = Field(default_factory=list, alias="objectIDs")


class ObjectsResponse(CamelBase):
    results: list[JsonDict | None]


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        return list(value)

    # a scalar attribute becomes the first element of the new list
    return [value]
