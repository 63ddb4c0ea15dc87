from __future__ import annotations

from typing import Annotated, Literal, Union

from camel_converter.pydantic_base import CamelBase
from pydantic import Field, TypeAdapter

from algoliasearch_python_sdk.types import JsonDict


class _SynonymBase(CamelBase):
    object_id: str = Field(..., alias="objectID")

    def to_wire(self) -> JsonDict:
        return self.model_dump(by_alias=True, exclude_none=True)


class RegularSynonym(_SynonymBase):
    """Words that are considered equal in both directions."""

    synonym_type: Literal["synonym"] = Field("synonym", alias="type")
    synonyms: list[str]


class OneWaySynonym(_SynonymBase):
    """The input word matches the synonyms, but not the other way around."""

    synonym_type: Literal["oneWaySynonym"] = Field("oneWaySynonym", alias="type")
    input: str
    synonyms: list[str]


class PlaceholderSynonym(_SynonymBase):
    synonym_type: Literal["placeholder"] = Field("placeholder", alias="type")
    placeholder: str
    replacements: list[str]


class AltCorrectionSynonym(_SynonymBase):
    """Corrections for a word with a typo distance of 1 or 2."""

    synonym_type: Literal["altCorrection1", "altCorrection2"] = Field(
        "altCorrection1", alias="type"
    )
    word: str
    corrections: list[str]


Synonym = Annotated[
    Union[RegularSynonym, OneWaySynonym, PlaceholderSynonym, AltCorrectionSynonym],
    Field(discriminator="synonym_type"),
]

_synonym_adapter: TypeAdapter[Synonym] = TypeAdapter(Synonym)


def parse_synonym(data: JsonDict) -> Synonym:
    return _synonym_adapter.validate_python(data)


class SynonymSearchResults(CamelBase):
    hits: list[Synonym]
    nb_hits: int
