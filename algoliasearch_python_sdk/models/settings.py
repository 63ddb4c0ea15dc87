from __future__ import annotations

import math
from typing import Any

import pydantic
from camel_converter.pydantic_base import CamelBase

from algoliasearch_python_sdk.errors import SettingsDecodeError
from algoliasearch_python_sdk.types import JsonDict


def decode_remove_stop_words(value: Any) -> bool | list[str] | None:
    """Decode the `removeStopWords` setting.

    The setting is either a boolean meaning "apply to all languages" or a list of language codes.
    Lists come back from the server with untyped elements so each element is coerced to a string.

    Raises:
        SettingsDecodeError: If the value is neither a boolean nor a list.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        return value

    if isinstance(value, (list, tuple)):
        return [str(x) for x in value]

    raise SettingsDecodeError("removeStopWords", value)


def decode_distinct(value: Any) -> bool | int | None:
    """Decode the `distinct` setting.

    The setting is either a boolean or the number of hits to keep per distinct group. Numbers may
    be float encoded and are truncated.

    Raises:
        SettingsDecodeError: If the value is neither a boolean nor a finite number.
    """
    if value is None:
        return None

    # bool has to be checked before int since bool is a subclass of int
    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float) and math.isfinite(value):
        return int(value)

    raise SettingsDecodeError("distinct", value)


def polymorphic_equal(first: Any, second: Any) -> bool:
    """Compare two decoded polymorphic values by meaning rather than representation."""
    if first is None or second is None:
        return first is None and second is None

    if isinstance(first, bool) or isinstance(second, bool):
        return isinstance(first, bool) and isinstance(second, bool) and first == second

    if isinstance(first, list) and isinstance(second, list):
        return _list_equal(first, second)

    if isinstance(first, int) and isinstance(second, int):
        return first == second

    return False


class IndexSettings(CamelBase):
    searchable_attributes: list[str] | None = None
    attributes_for_faceting: list[str] | None = None
    unretrievable_attributes: list[str] | None = None
    attributes_to_retrieve: list[str] | None = None
    ranking: list[str] | None = None
    custom_ranking: list[str] | None = None
    replicas: list[str] | None = None
    numeric_attributes_for_filtering: list[str] | None = None
    max_values_per_facet: int | None = None
    attributes_to_highlight: list[str] | None = None
    attributes_to_snippet: list[str] | None = None
    highlight_pre_tag: str | None = None
    highlight_post_tag: str | None = None
    snippet_ellipsis_text: str | None = None
    restrict_highlight_and_snippet_arrays: bool | None = None
    hits_per_page: int | None = None
    pagination_limited_to: int | None = None
    min_word_sizefor1_typo: int | None = None
    min_word_sizefor2_typos: int | None = None
    typo_tolerance: bool | str | None = None
    allow_typos_on_numeric_tokens: bool | None = None
    disable_typo_tolerance_on_attributes: list[str] | None = None
    disable_typo_tolerance_on_words: list[str] | None = None
    separators_to_index: str | None = None
    ignore_plurals: bool | None = None
    query_type: str | None = None
    remove_words_if_no_results: str | None = None
    advanced_syntax: bool | None = None
    optional_words: list[str] | None = None
    remove_stop_words: bool | list[str] | None = None
    disable_prefix_on_attributes: list[str] | None = None
    disable_exact_on_attributes: list[str] | None = None
    exact_on_single_word_query: str | None = None
    alternatives_as_exact: list[str] | None = None
    attribute_for_distinct: str | None = None
    distinct: bool | int | None = None
    replace_synonyms_in_highlight: bool | None = None
    min_proximity: int | None = None
    response_fields: list[str] | None = None
    max_facet_hits: int | None = None
    keep_diacritics_on_characters: str | None = None
    allow_compression_of_integer_array: bool | None = None

    @pydantic.field_validator("remove_stop_words", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_remove_stop_words(cls, v: Any) -> bool | list[str] | None:
        return decode_remove_stop_words(v)

    @pydantic.field_validator("distinct", mode="before")  # type: ignore[attr-defined]
    @classmethod
    def validate_distinct(cls, v: Any) -> bool | int | None:
        return decode_distinct(v)

    def to_generic_map(self) -> JsonDict:
        """Convert the settings to a map suitable for a partial settings update.

        Unset fields and fields holding an empty list are left out so sending the map never
        clears server side values by accident.
        """
        return {
            k: v
            for k, v in self.model_dump(by_alias=True, exclude_none=True).items()
            if v != []
        }

    def semantically_equal(self, other: IndexSettings) -> bool:
        return settings_are_equal(self, other)


_POLYMORPHIC_FIELDS = ("remove_stop_words", "distinct")


def settings_are_equal(first: IndexSettings, second: IndexSettings) -> bool:
    """Compare settings the way the server treats them.

    Lists are compared without regard to order and the polymorphic fields are compared by meaning.
    """
    for name in IndexSettings.model_fields:
        a = getattr(first, name)
        b = getattr(second, name)

        if name in _POLYMORPHIC_FIELDS:
            if not polymorphic_equal(a, b):
                return False
        elif isinstance(a, list) and isinstance(b, list):
            if not _list_equal(a, b):
                return False
        elif a != b:
            return False

    return True


def _list_equal(first: list[Any], second: list[Any]) -> bool:
    return set(first) == set(second)
