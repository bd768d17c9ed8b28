"""Static corpus JSON document schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, RootModel

log = logging.getLogger(__name__)


class CorpusBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "Corpus %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class PropertyDocument(CorpusBaseModel):
    name: str = Field(alias="Name")
    is_complex: bool = Field(alias="IsComplex")
    meta: dict[str, str] = Field(alias="Meta")


class SchemaDocument(CorpusBaseModel):
    """One entity document, ``{version}/{name}.json``.

    ``Meta`` and ``Properties`` are required: a truncated document must not
    read as an entity whose fields were all deleted.
    """

    name: str = Field(alias="Name")
    meta: dict[str, str] = Field(alias="Meta")
    properties: dict[str, PropertyDocument] = Field(alias="Properties")


class CorpusIndexDocument(RootModel[dict[str, list[str]]]):
    """The ``_index.json`` document: version -> entity names."""
