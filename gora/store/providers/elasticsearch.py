"""
Data store on Elasticsearch.
"""

from __future__ import annotations

__all__ = ["ElasticsearchStore"]

import logging
from typing import Any, Mapping

from elasticsearch import ApiError
from elasticsearch import Elasticsearch as SyncElasticsearch
from elasticsearch.exceptions import NotFoundError as ESNotFoundError

from gora.core import Configuration, Provider, Response
from gora.core.config import parse_bool
from gora.core.exceptions import BadRequestError
from gora.elasticsearch import (
    ElasticsearchMapping,
    ElasticsearchParameters,
    ElasticsearchQuery,
    MappingBuilder,
    create_client,
    translate_errors,
)
from gora.elasticsearch._client import get_body
from gora.elasticsearch._constants import (
    AUTO_CREATE_SCHEMA,
    DEFAULT_MAPPING_FILE,
    ID_FIELD,
    PARSE_MAPPING_FILE_KEY,
    RESOURCES_PATH,
    XSD_VALIDATION,
)

from .._models import Result, ResultItem
from .._query import Query

logger = logging.getLogger(__name__)


class ElasticsearchStore(Provider):
    class_name: str | None
    properties: dict[str, Any]
    conf: Configuration

    mapping_file: str
    xsd_validation: bool
    auto_create_schema: bool

    _mapping: ElasticsearchMapping
    _parameters: ElasticsearchParameters
    _client: SyncElasticsearch | None

    _init: bool

    def __init__(
        self,
        class_name: str | None = None,
        properties: Mapping[str, Any] | None = None,
        conf: Configuration | None = None,
        client: SyncElasticsearch | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            class_name:
                Record class whose mapping is used,
                defaults to the first class in the mapping file.
            properties:
                Data store properties. Values override the configuration.
            conf:
                Configuration holding default values.
            client:
                Elasticsearch client to use instead of
                one built from the connection parameters.
        """
        self.class_name = class_name
        self.properties = dict(properties or {})
        self.conf = conf or Configuration()
        self._client = client
        self.mapping_file = str(
            self._get_property(PARSE_MAPPING_FILE_KEY, DEFAULT_MAPPING_FILE)
        )
        try:
            self.xsd_validation = parse_bool(
                self._get_property(XSD_VALIDATION), False
            )
            self.auto_create_schema = parse_bool(
                self._get_property(AUTO_CREATE_SCHEMA), True
            )
        except ValueError as e:
            raise BadRequestError(f"Invalid data store property: {e}") from e
        self._init = False

    @property
    def client(self) -> SyncElasticsearch:
        if self._client is None:
            self._client = create_client(self._parameters)
        return self._client

    @property
    def mapping(self) -> ElasticsearchMapping:
        return self._mapping

    @property
    def parameters(self) -> ElasticsearchParameters:
        return self._parameters

    def __setup__(self) -> None:
        if self._init:
            return
        search_paths = self._get_property(RESOURCES_PATH)
        builder = MappingBuilder(
            search_paths=(
                [p.strip() for p in str(search_paths).split(",") if p.strip()]
                if search_paths
                else None
            )
        )
        self._mapping = builder.load_mapping(
            self.mapping_file,
            validate=self.xsd_validation,
            class_name=self.class_name,
        )
        self._parameters = ElasticsearchParameters.load(
            self.properties, self.conf
        )
        logger.info(
            f"Initialized store for {self._mapping.class_name} "
            f"on index {self._mapping.index_name}"
        )
        if self.auto_create_schema and not self._schema_exists():
            self._create_schema()
        self._init = True

    def _get_property(self, key: str, default: Any = None) -> Any:
        value = self.properties.get(key)
        if value is None:
            value = self.conf.get(key)
        return default if value is None else value

    def get_schema_name(self) -> Response[str]:
        return Response(result=self._mapping.index_name)

    def get_mapping(self) -> Response[ElasticsearchMapping]:
        return Response(result=self._mapping)

    def schema_exists(self) -> Response[bool]:
        return Response(result=self._schema_exists())

    def create_schema(self) -> Response[None]:
        self._create_schema()
        return Response(result=None)

    def delete_schema(self) -> Response[None]:
        index = self._mapping.index_name
        if self._schema_exists():
            with translate_errors(index):
                self.client.indices.delete(index=index)
            logger.info(f"Deleted index {index}")
        return Response(result=None)

    def get(
        self,
        key: str,
        fields: list[str] | None = None,
    ) -> Response[dict[str, Any] | None]:
        args: dict[str, Any] = {}
        if fields:
            args["source_includes"] = self._get_docfields(fields)
        try:
            with translate_errors():
                response = self.client.get(
                    index=self._mapping.index_name,
                    id=str(key),
                    **args,
                )
        except ESNotFoundError:
            return Response(result=None)
        source = get_body(response).get("_source", {})
        return Response(result=self._to_record(source))

    def put(
        self,
        key: str,
        value: dict[str, Any],
    ) -> Response[None]:
        document = self._to_document(key, value)
        with translate_errors():
            self.client.index(
                index=self._mapping.index_name,
                id=str(key),
                document=document,
            )
        return Response(result=None)

    def delete(
        self,
        key: str,
    ) -> Response[bool]:
        try:
            with translate_errors():
                self.client.delete(
                    index=self._mapping.index_name,
                    id=str(key),
                )
        except ESNotFoundError:
            return Response(result=False)
        return Response(result=True)

    def new_query(self) -> Response[Query]:
        data_store = getattr(self, "__component__", self)
        return Response(result=ElasticsearchQuery(data_store=data_store))

    def execute(
        self,
        query: Query,
    ) -> Response[Result]:
        search = self._convert_query(query).to_search(self._mapping)
        logger.debug(f"Executing {query} on {self._mapping.index_name}")
        with translate_errors(self._mapping.index_name):
            response = self.client.search(
                index=self._mapping.index_name,
                **search,
            )
        items = []
        for hit in get_body(response).get("hits", {}).get("hits", []):
            source = hit.get("_source", {})
            items.append(
                ResultItem(
                    key=str(source.get(ID_FIELD, hit.get("_id"))),
                    value=self._to_record(source),
                )
            )
        return Response(result=Result(items=items))

    def delete_by_query(
        self,
        query: Query,
    ) -> Response[int]:
        es_query = self._convert_query(query).to_query()
        with translate_errors(self._mapping.index_name):
            response = self.client.delete_by_query(
                index=self._mapping.index_name,
                query=es_query,
                refresh=True,
            )
        return Response(result=int(get_body(response).get("deleted", 0)))

    def flush(self) -> Response[None]:
        with translate_errors(self._mapping.index_name):
            self.client.indices.refresh(index=self._mapping.index_name)
        return Response(result=None)

    def close(self) -> Response[None]:
        if self._client is not None:
            self._client.close()
            self._client = None
        self._init = False
        return Response(result=None)

    def _schema_exists(self) -> bool:
        with translate_errors():
            return bool(
                self.client.indices.exists(index=self._mapping.index_name)
            )

    def _create_schema(self) -> None:
        index = self._mapping.index_name
        try:
            with translate_errors():
                self.client.indices.create(
                    index=index,
                    mappings=self._mapping.to_native(),
                )
            logger.info(f"Created index {index}")
        except ApiError as e:
            if e.error != "resource_already_exists_exception":
                raise
            logger.info(f"Index already exists: {index}")

    def _convert_query(self, query: Query) -> ElasticsearchQuery:
        if isinstance(query, ElasticsearchQuery):
            return query
        return ElasticsearchQuery(
            data_store=self,
            fields=query.fields,
            key=query.key,
            start_key=query.start_key,
            end_key=query.end_key,
            limit=query.limit,
        )

    def _get_docfields(self, fields: list[str]) -> list[str]:
        docfields = []
        for record_field in fields:
            field = self._mapping.get_field(record_field)
            if field is None:
                raise BadRequestError(f"Field {record_field} is not mapped")
            docfields.append(field.name)
        return docfields

    def _to_document(self, key: str, value: dict[str, Any]) -> dict[str, Any]:
        if ID_FIELD in value:
            raise BadRequestError(f"Field name {ID_FIELD} is reserved")
        document: dict[str, Any] = {}
        for record_field, field_value in value.items():
            field = self._mapping.get_field(record_field)
            if field is None:
                raise BadRequestError(f"Field {record_field} is not mapped")
            document[field.name] = field_value
        document[ID_FIELD] = str(key)
        return document

    def _to_record(self, source: dict[str, Any]) -> dict[str, Any]:
        return {
            self._mapping.get_record_field(name): value
            for name, value in source.items()
            if name != ID_FIELD
        }

    def __repr__(self) -> str:
        return f"ElasticsearchStore(class_name={self.class_name!r})"

