from __future__ import annotations

import json

import pytest

from schemadiff.adapters.static_corpus import (
    CorpusIndexDocument,
    SchemaDocument,
    latest_pair,
    parse_entity_document,
    sort_versions,
    translate_schema,
)
from schemadiff.domain.model import MalformedEntityError

LEDGER = {
    "Name": "Ledger",
    "Meta": {"Category": "Masters"},
    "Properties": {
        "Parent": {
            "Name": "Parent",
            "IsComplex": True,
            "Meta": {"Object Name": "Group", "Is Repeated": "No"},
        },
        "Name": {"Name": "Name", "IsComplex": False, "Meta": {"Datatype": "String"}},
    },
}


def test_translate_schema_keeps_keys_and_values() -> None:
    entity = translate_schema(SchemaDocument.model_validate(LEDGER))

    assert entity.name == "Ledger"
    assert set(entity.properties) == {"Parent", "Name"}
    parent = entity.properties["Parent"]
    assert parent.is_complex is True
    assert dict(parent.meta) == {"Object Name": "Group", "Is Repeated": "No"}


def test_missing_is_complex_is_rejected() -> None:
    payload = {
        "Name": "Group",
        "Meta": {},
        "Properties": {"Name": {"Name": "Name", "Meta": {}}},
    }

    with pytest.raises(MalformedEntityError):
        parse_entity_document(json.dumps(payload))


@pytest.mark.parametrize("missing", ["Meta", "Properties", "Name"])
def test_truncated_document_is_rejected(missing: str) -> None:
    payload = {key: value for key, value in LEDGER.items() if key != missing}

    with pytest.raises(MalformedEntityError):
        parse_entity_document(json.dumps(payload))


def test_invalid_json_is_rejected() -> None:
    with pytest.raises(MalformedEntityError):
        parse_entity_document(b'{"Name": "Ledger"')


def test_extra_keys_are_tolerated(caplog: pytest.LogCaptureFixture) -> None:
    payload = dict(LEDGER, AuditNote="Reviewed")

    with caplog.at_level("WARNING"):
        entity = parse_entity_document(json.dumps(payload))

    assert entity.name == "Ledger"
    assert "unmodeled keys: AuditNote" in caplog.text


def test_index_document() -> None:
    index = CorpusIndexDocument.model_validate({"v1": ["A"], "v2": ["A", "B"]}).root

    assert index == {"v1": ["A"], "v2": ["A", "B"]}


def test_sort_versions_newest_first() -> None:
    assert sort_versions(["v9", "v10", "v2", "latest"]) == ["v10", "v9", "v2", "latest"]


def test_latest_pair() -> None:
    assert latest_pair(["v1", "v3", "v2"]) == ("v2", "v3")
    assert latest_pair(["v1"]) is None
