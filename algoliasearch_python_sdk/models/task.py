from __future__ import annotations

from datetime import datetime
from enum import Enum

import pydantic
from camel_converter.pydantic_base import CamelBase
from pydantic import Field

from algoliasearch_python_sdk._utils import iso_to_date_time


class TaskState(str, Enum):
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETED = "completed"
    TIMED_OUT = "timedOut"


class TaskStatus(CamelBase):
    status: str
    pending_task: bool | None = None

    @property
    def is_published(self) -> bool:
        return self.status == "published"


class TaskInfo(CamelBase):
    task_id: int = Field(..., alias="taskID")
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @pydantic.field_validator("created_at", "updated_at", "deleted_at", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_dates(cls, v: str | None) -> datetime | None:
        return iso_to_date_time(v)
