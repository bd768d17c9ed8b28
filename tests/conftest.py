from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from schemadiff.adapters.http_resilience import ResilientClient
from schemadiff.config.corpus import CorpusConfig
from schemadiff.config.http_resilience import ResilienceConfig

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "http://corpus.test/schemas/"

type CorpusFiles = dict[str, object]


def _schema_document(name: str, meta: dict[str, str], properties: dict[str, object]) -> object:
    return {"Name": name, "Meta": meta, "Properties": properties}


def _property_document(name: str, datatype: str, **extra: object) -> dict[str, object]:
    meta: dict[str, object] = {"Datatype": datatype}
    is_complex = bool(extra.pop("is_complex", False))
    meta.update(extra)
    return {"Name": name, "IsComplex": is_complex, "Meta": meta}


@pytest.fixture
def corpus_files() -> CorpusFiles:
    """A two-version corpus keyed by path below ``BASE_URL``.

    v1 -> v2: ``Group`` removed, ``Voucher`` added, ``Ledger`` modified,
    ``Company`` unchanged, ``Broken`` unparseable in v2, ``Ghost`` listed but
    missing in v2.
    """

    ledger_v1 = _schema_document(
        "Ledger",
        {"Category": "Masters"},
        {
            "Name": _property_document("Name", "String"),
            "Parent": _property_document("Parent", "String"),
        },
    )
    ledger_v2 = _schema_document(
        "Ledger",
        {"Category": "Masters"},
        {
            "Name": _property_document("Name", "String"),
            "Parent": _property_document("Parent", "Number"),
        },
    )
    company = _schema_document(
        "Company",
        {"Category": "Masters"},
        {
            "Address": _property_document(
                "Address", "Aggregate", is_complex=True, **{"Object Name": "Address"}
            )
        },
    )
    broken_v1 = _schema_document("Broken", {}, {})
    return {
        "_index.json": {
            "v1": ["Company", "Ledger", "Group", "Broken", "Ghost"],
            "v2": ["Company", "Ledger", "Voucher", "Broken", "Ghost"],
        },
        "v1/Company.json": company,
        "v2/Company.json": company,
        "v1/Ledger.json": ledger_v1,
        "v2/Ledger.json": ledger_v2,
        "v1/Group.json": _schema_document("Group", {}, {}),
        "v2/Voucher.json": _schema_document("Voucher", {}, {}),
        "v1/Broken.json": broken_v1,
        "v2/Broken.json": '{"Name": "Broken", "Meta": {}',
        "v1/Ghost.json": _schema_document("Ghost", {}, {}),
    }


@pytest.fixture
def corpus_config() -> CorpusConfig:
    return CorpusConfig(
        base_url=BASE_URL,
        resilience=ResilienceConfig(name="corpus", base_url=BASE_URL, cache=None),
    )


@pytest.fixture
def requested_paths() -> list[str]:
    return []


@pytest.fixture
def client_factory(
    corpus_files: CorpusFiles,
    requested_paths: list[str],
) -> Callable[[ResilienceConfig], ResilientClient]:
    prefix = httpx.URL(BASE_URL).path

    async def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix(prefix)
        requested_paths.append(path)
        if path not in corpus_files:
            return httpx.Response(404, text="Not Found")
        body = corpus_files[path]
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, content=json.dumps(body).encode())

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory
