"""Translate validated corpus documents into domain entities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from schemadiff.domain.model import Entity, MalformedEntityError, Property

from .schema import SchemaDocument

if TYPE_CHECKING:
    from .schema import PropertyDocument


def translate_property(document: PropertyDocument) -> Property:
    return Property(name=document.name, is_complex=document.is_complex, meta=document.meta)


def translate_schema(document: SchemaDocument) -> Entity:
    return Entity(
        name=document.name,
        meta=document.meta,
        properties={key: translate_property(value) for key, value in document.properties.items()},
    )


def parse_entity_document(payload: str | bytes) -> Entity:
    """Validate a raw JSON entity document and translate it.

    Raises :class:`MalformedEntityError` when the payload is not valid JSON or
    does not have the entity shape.
    """

    try:
        document = SchemaDocument.model_validate_json(payload)
    except ValidationError as exc:
        raise MalformedEntityError(
            f"Invalid entity document ({exc.error_count()} errors): {exc.errors()[0]['msg']}"
        ) from exc
    return translate_schema(document)
