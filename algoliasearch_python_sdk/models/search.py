from __future__ import annotations

from camel_converter.pydantic_base import CamelBase
from pydantic import Field

from algoliasearch_python_sdk.types import JsonDict


class FacetHit(CamelBase):
    value: str
    highlighted: str | None = None
    count: int


class FacetSearchResults(CamelBase):
    facet_hits: list[FacetHit]
    exhaustive_facets_count: bool | None = None
    processing_time_ms: int | None = Field(None, alias="processingTimeMS")


class SearchResults(CamelBase):
    hits: list[JsonDict]
    nb_hits: int | None = None
    page: int | None = None
    nb_pages: int | None = None
    hits_per_page: int | None = None
    processing_time_ms: int | None = Field(None, alias="processingTimeMS")
    exhaustive_nb_hits: bool | None = None
    query: str | None = None
    params: str | None = None
    facets: dict[str, dict[str, int]] | None = None
    query_id: str | None = Field(None, alias="queryID")


class BrowseResponse(SearchResults):
    cursor: str | None = None
