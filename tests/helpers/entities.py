from __future__ import annotations

from schemadiff.domain.model import Entity, Property


def make_property(
    name: str,
    datatype: str | None = "String",
    *,
    is_complex: bool = False,
    **meta: str,
) -> Property:
    values = dict(meta)
    if datatype is not None:
        values["Datatype"] = datatype
    return Property(name=name, is_complex=is_complex, meta=values)


def make_entity(
    name: str,
    *properties: Property,
    meta: dict[str, str] | None = None,
) -> Entity:
    return Entity(
        name=name,
        meta=meta or {},
        properties={prop.name: prop for prop in properties},
    )
