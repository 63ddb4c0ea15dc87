from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

import pydantic
from camel_converter.pydantic_base import CamelBase
from pydantic import Field

from algoliasearch_python_sdk._utils import timestamp_to_date_time
from algoliasearch_python_sdk.types import JsonDict

Anchoring = Literal["is", "startsWith", "endsWith", "contains"]


class RuleCondition(CamelBase):
    pattern: str | None = None
    anchoring: Anchoring | None = None
    context: str | None = None
    alternatives: bool | None = None


class HiddenObject(CamelBase):
    object_id: str = Field(..., alias="objectID")


class PromotedObject(CamelBase):
    object_id: str = Field(..., alias="objectID")
    position: int


class AutomaticFacetFilter(CamelBase):
    facet: str
    disjunctive: bool = False
    score: int | None = None


class Edit(CamelBase):
    edit_type: Literal["remove", "replace"] = Field(..., alias="type")
    delete: str
    insert: str | None = None

    @classmethod
    def remove(cls, word: str) -> Edit:
        return cls(type="remove", delete=word)

    @classmethod
    def replace(cls, word: str, replacement: str) -> Edit:
        return cls(type="replace", delete=word, insert=replacement)


class RuleConsequence(CamelBase):
    params: JsonDict | None = None
    promote: list[PromotedObject] | None = None
    hide: list[HiddenObject] | None = None
    filter_promotes: bool | None = None
    user_data: Any | None = None


class TimeRange(CamelBase):
    from_: datetime = Field(..., alias="from")
    until: datetime

    @pydantic.field_validator("from_", "until", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_timestamps(cls, v: datetime | int | float) -> datetime | None:
        return timestamp_to_date_time(v)

    @pydantic.field_serializer("from_", "until")  # type: ignore[attr-defined]
    def serialize_timestamps(self, v: datetime) -> int:
        return int(v.timestamp())


class Rule(CamelBase):
    object_id: str = Field(..., alias="objectID")
    condition: RuleCondition | None = None
    conditions: list[RuleCondition] | None = None
    consequence: RuleConsequence
    enabled: bool = True
    validity: list[TimeRange] | None = None
    description: str | None = None

    def disable(self) -> None:
        self.enabled = False

    def enable(self) -> None:
        self.enabled = True

    def to_wire(self) -> JsonDict:
        return self.model_dump(by_alias=True, exclude_none=True)


class RuleSearchResults(CamelBase):
    hits: list[Rule]
    nb_hits: int
    page: int | None = None
    nb_pages: int | None = None
