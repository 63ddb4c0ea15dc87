from __future__ import annotations

from datetime import datetime

import pydantic
from camel_converter.pydantic_base import CamelBase
from pydantic import Field

from algoliasearch_python_sdk._utils import iso_to_date_time, timestamp_to_date_time


class _KeyBase(CamelBase):
    acl: list[str] = Field(default_factory=list)
    description: str | None = None
    indexes: list[str] | None = None
    max_hits_per_query: int | None = None
    max_queries_per_ip_per_hour: int | None = Field(None, alias="maxQueriesPerIPPerHour")
    query_parameters: str | None = None
    referers: list[str] | None = None
    validity: int | None = None


class Key(_KeyBase):
    value: str
    created_at: datetime | None = None

    @pydantic.field_validator("created_at", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_created_at(cls, v: datetime | int | None) -> datetime | None:
        return timestamp_to_date_time(v)


class KeyCreate(_KeyBase):
    acl: list[str]


class KeyUpdate(_KeyBase):
    acl: list[str] | None = None  # type: ignore[assignment]


class KeyResponse(CamelBase):
    key: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @pydantic.field_validator("created_at", "updated_at", "deleted_at", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_dates(cls, v: str | None) -> datetime | None:
        return iso_to_date_time(v)


class KeyList(CamelBase):
    keys: list[Key]


class IndexInfo(CamelBase):
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    entries: int = 0
    data_size: int = 0
    file_size: int = 0
    last_build_time_s: int | None = None
    number_of_pending_tasks: int | None = None
    pending_task: bool = False
    primary: str | None = None
    replicas: list[str] | None = None

    @pydantic.field_validator("created_at", "updated_at", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_dates(cls, v: str | None) -> datetime | None:
        return iso_to_date_time(v)


class IndexList(CamelBase):
    items: list[IndexInfo]
    nb_pages: int | None = None
