# type: ignore
import copy
import os
from typing import Any

import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import ApiError, ConnectionError, NotFoundError

from gora.core import Configuration
from gora.elasticsearch._constants import (
    PROP_AUTHENTICATION_TYPE,
    PROP_HOST,
    PROP_PASSWORD,
    PROP_USERNAME,
    RESOURCES_PATH,
)
from gora.metadata import DataStoreMetadataFactory
from gora.store import DataStoreFactory

RESOURCES_DIR = os.path.join(os.path.dirname(__file__), "resources")

ID_FIELD = "gora_id"


def _meta(status: int) -> ApiResponseMeta:
    return ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )


def _api_error(cls, status: int, type: str, reason: str):
    body = {
        "error": {
            "type": type,
            "reason": reason,
            "root_cause": [{"type": type, "reason": reason}],
        },
        "status": status,
    }
    return cls(type, _meta(status), body)


def index_not_found(index: str) -> NotFoundError:
    return _api_error(
        NotFoundError,
        404,
        "index_not_found_exception",
        f"no such index [{index}]",
    )


class FakeIndices:
    def __init__(self, cluster: "FakeElasticsearch"):
        self._cluster = cluster

    def exists(self, index: str) -> bool:
        self._cluster.check()
        return index in self._cluster.indices_data

    def create(self, index: str, mappings: dict | None = None, **kwargs):
        self._cluster.check()
        if index in self._cluster.indices_data:
            raise _api_error(
                ApiError,
                400,
                "resource_already_exists_exception",
                f"index [{index}] already exists",
            )
        self._cluster.indices_data[index] = {
            "mappings": copy.deepcopy(mappings or {}),
            "documents": {},
        }
        return {"acknowledged": True, "index": index}

    def delete(self, index: str, **kwargs):
        self._cluster.check()
        self._cluster.get_index(index)
        del self._cluster.indices_data[index]
        return {"acknowledged": True}

    def get_alias(self, index: str = "*", **kwargs):
        self._cluster.check()
        return {name: {"aliases": {}} for name in self._cluster.indices_data}

    def get_mapping(self, index: str, **kwargs):
        self._cluster.check()
        mappings = self._cluster.get_index(index)["mappings"]
        properties = mappings.get("properties", {})
        # Elasticsearch reports properties sorted by name.
        properties = {k: properties[k] for k in sorted(properties)}
        return {index: {"mappings": {**mappings, "properties": properties}}}

    def refresh(self, index: str, **kwargs):
        self._cluster.check()
        self._cluster.get_index(index)
        return {"_shards": {"failed": 0}}


class FakeElasticsearch:
    """In-memory stand-in for the Elasticsearch client."""

    def __init__(self):
        self.indices_data: dict[str, dict[str, Any]] = {}
        self.indices = FakeIndices(self)
        self.available = True
        # HTTP status every call fails with, when set.
        self.error_status: int | None = None
        self.closed = False
        self.searches: list[dict] = []

    def check(self) -> None:
        if not self.available:
            raise ConnectionError("Connection refused")
        if self.error_status is not None:
            raise _api_error(
                ApiError,
                self.error_status,
                "cluster_block_exception",
                "blocked by: [SERVICE_UNAVAILABLE/1/state not recovered]",
            )

    def get_index(self, index: str) -> dict:
        if index not in self.indices_data:
            raise index_not_found(index)
        return self.indices_data[index]

    def index(self, index: str, id: str, document: dict, **kwargs):
        self.check()
        self.get_index(index)["documents"][id] = copy.deepcopy(document)
        return {"_id": id, "result": "created"}

    def get(self, index: str, id: str, source_includes=None, **kwargs):
        self.check()
        documents = self.get_index(index)["documents"]
        if id not in documents:
            raise NotFoundError(
                "NotFoundError", _meta(404), {"_index": index, "found": False}
            )
        return {
            "_id": id,
            "found": True,
            "_source": self._filter(documents[id], source_includes),
        }

    def delete(self, index: str, id: str, **kwargs):
        self.check()
        documents = self.get_index(index)["documents"]
        if id not in documents:
            raise NotFoundError(
                "NotFoundError",
                _meta(404),
                {"_index": index, "result": "not_found"},
            )
        del documents[id]
        return {"_id": id, "result": "deleted"}

    def search(
        self,
        index: str,
        query: dict,
        sort=None,
        size: int = 10,
        source_includes=None,
        **kwargs,
    ):
        self.check()
        self.searches.append(
            dict(
                query=query,
                sort=sort,
                size=size,
                source_includes=source_includes,
            )
        )
        documents = self.get_index(index)["documents"]
        matched = sorted(
            (d for d in documents.values() if self._match(d, query)),
            key=lambda d: d[ID_FIELD],
        )[:size]
        hits = [
            {"_id": d[ID_FIELD], "_source": self._filter(d, source_includes)}
            for d in matched
        ]
        return {"hits": {"total": {"value": len(hits)}, "hits": hits}}

    def delete_by_query(self, index: str, query: dict, **kwargs):
        self.check()
        documents = self.get_index(index)["documents"]
        keys = [k for k, d in documents.items() if self._match(d, query)]
        for key in keys:
            del documents[key]
        return {"deleted": len(keys)}

    def close(self):
        self.closed = True

    def _match(self, document: dict, query: dict) -> bool:
        if "match_all" in query:
            return True
        if "term" in query:
            return document.get(ID_FIELD) == query["term"][ID_FIELD]
        if "range" in query:
            bounds = query["range"][ID_FIELD]
            key = document.get(ID_FIELD)
            if "gte" in bounds and key < bounds["gte"]:
                return False
            if "lte" in bounds and key > bounds["lte"]:
                return False
            return True
        raise ValueError(f"Unsupported query {query}")

    def _filter(self, document: dict, source_includes) -> dict:
        if not source_includes:
            return copy.deepcopy(document)
        return {
            k: copy.deepcopy(v)
            for k, v in document.items()
            if k in source_includes
        }


class AsyncFakeElasticsearch:
    """Async view over a FakeElasticsearch."""

    def __init__(self, target: Any):
        self._target = target

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._target, name)
        if callable(attr):

            async def call(*args, **kwargs):
                return attr(*args, **kwargs)

            return call
        return AsyncFakeElasticsearch(attr)


class GoraElasticsearchTestDriver:
    """Builds stores and analyzers against one fake cluster."""

    def __init__(self, resources_dir: str = RESOURCES_DIR):
        self.client = FakeElasticsearch()
        self.aclient = AsyncFakeElasticsearch(self.client)
        self.conf = Configuration(
            values={
                PROP_HOST: "localhost",
                PROP_AUTHENTICATION_TYPE: "BASIC",
                PROP_USERNAME: "elastic",
                PROP_PASSWORD: "password",
                RESOURCES_PATH: resources_dir,
            },
            environ={},
        )

    def get_configuration(self) -> Configuration:
        return self.conf

    def create_props(self) -> dict[str, Any]:
        return {
            PROP_HOST: "localhost",
            PROP_AUTHENTICATION_TYPE: "BASIC",
            PROP_USERNAME: "elastic",
            PROP_PASSWORD: "password",
        }

    def create_data_store(
        self,
        class_name: str | None = None,
        properties: dict[str, Any] | None = None,
    ):
        return DataStoreFactory.create_data_store(
            class_name=class_name,
            properties=(
                properties if properties is not None else self.create_props()
            ),
            conf=self.conf,
            client=self.client,
        )

    def create_analyzer(self):
        return DataStoreMetadataFactory.create_analyzer(
            conf=self.conf,
            client=self.client,
            aclient=self.aclient,
        )


@pytest.fixture
def test_driver() -> GoraElasticsearchTestDriver:
    return GoraElasticsearchTestDriver()


@pytest.fixture
def employee_store(test_driver):
    store = test_driver.create_data_store("Employee")
    yield store
    store.close()


@pytest.fixture
def webpage_store(test_driver):
    store = test_driver.create_data_store("WebPage")
    yield store
    store.close()


@pytest.fixture
def resources_dir() -> str:
    return RESOURCES_DIR
