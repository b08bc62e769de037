"""
Metadata analyzer on Elasticsearch.
"""

from __future__ import annotations

__all__ = [
    "ElasticsearchMetadataAnalyzer",
    "ElasticsearchStoreCollectionMetadata",
]

import logging
from typing import Any

from elasticsearch import AsyncElasticsearch
from elasticsearch import Elasticsearch as SyncElasticsearch

from gora.core import Configuration, Provider, Response
from gora.elasticsearch import (
    ID_FIELD,
    STORE_TYPE,
    ElasticsearchParameters,
    create_async_client,
    create_client,
    translate_errors,
)
from gora.elasticsearch._client import get_body
from gora.elasticsearch._constants import ID_FIELD_TYPE

from .._models import CollectionMetadata

logger = logging.getLogger(__name__)

OBJECT_TYPE = "object"


class ElasticsearchStoreCollectionMetadata(CollectionMetadata):
    """Schema of a live Elasticsearch index."""


class ElasticsearchMetadataAnalyzer(Provider):
    conf: Configuration
    parameters: ElasticsearchParameters

    _client: SyncElasticsearch | None
    _aclient: AsyncElasticsearch | None

    def __init__(
        self,
        conf: Configuration | None = None,
        parameters: ElasticsearchParameters | None = None,
        client: SyncElasticsearch | None = None,
        aclient: AsyncElasticsearch | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            conf:
                Configuration holding connection parameters.
            parameters:
                Connection parameters, loaded from
                the configuration when not given.
            client:
                Elasticsearch client to use instead of
                one built from the connection parameters.
            aclient:
                Async Elasticsearch client to use instead of
                one built from the connection parameters.
        """
        self.conf = conf or Configuration()
        self.parameters = parameters or ElasticsearchParameters.load(
            None, self.conf
        )
        self._client = client
        self._aclient = aclient

    @property
    def client(self) -> SyncElasticsearch:
        if self._client is None:
            self._client = create_client(self.parameters)
        return self._client

    @property
    def aclient(self) -> AsyncElasticsearch:
        if self._aclient is None:
            self._aclient = create_async_client(self.parameters)
        return self._aclient

    def __setup__(self) -> None:
        pass

    async def __asetup__(self) -> None:
        pass

    def get_type(self) -> Response[str]:
        return Response(result=STORE_TYPE)

    async def aget_type(self) -> Response[str]:
        return Response(result=STORE_TYPE)

    def get_tables_names(self) -> Response[list[str]]:
        with translate_errors():
            response = self.client.indices.get_alias(index="*")
        return Response(result=self._convert_names(response))

    async def aget_tables_names(self) -> Response[list[str]]:
        with translate_errors():
            response = await self.aclient.indices.get_alias(index="*")
        return Response(result=self._convert_names(response))

    def get_table_info(
        self,
        collection: str,
    ) -> Response[ElasticsearchStoreCollectionMetadata]:
        with translate_errors(collection):
            response = self.client.indices.get_mapping(index=collection)
        return Response(result=self._convert_mapping(collection, response))

    async def aget_table_info(
        self,
        collection: str,
    ) -> Response[ElasticsearchStoreCollectionMetadata]:
        with translate_errors(collection):
            response = await self.aclient.indices.get_mapping(
                index=collection
            )
        return Response(result=self._convert_mapping(collection, response))

    def close(self, **kwargs: Any) -> Response[None]:
        if self._client is not None:
            self._client.close()
            self._client = None
        return Response(result=None)

    async def aclose(self, **kwargs: Any) -> Response[None]:
        if self._aclient is not None:
            await self._aclient.close()
            self._aclient = None
        return Response(result=None)

    def _convert_names(self, response: Any) -> list[str]:
        return [
            str(name)
            for name in get_body(response).keys()
            if not str(name).startswith(".")
        ]

    def _convert_mapping(
        self,
        collection: str,
        response: Any,
    ) -> ElasticsearchStoreCollectionMetadata:
        body = get_body(response)
        # An alias resolves to the concrete index name.
        index_mapping = body.get(collection) or next(iter(body.values()), {})
        properties = index_mapping.get("mappings", {}).get("properties", {})
        keys = []
        types = []
        id_type = ID_FIELD_TYPE
        for name, config in properties.items():
            field_type = config.get("type", OBJECT_TYPE)
            if name == ID_FIELD:
                id_type = field_type
                continue
            keys.append(name)
            types.append(field_type)
        keys.append(ID_FIELD)
        types.append(id_type)
        logger.debug(f"Collection {collection} has fields {keys}")
        return ElasticsearchStoreCollectionMetadata(
            collection_name=collection,
            document_keys=keys,
            document_types=types,
        )
