from ._client import create_async_client, create_client, translate_errors
from ._constants import (
    DEFAULT_MAPPING_FILE,
    ID_FIELD,
    PARSE_MAPPING_FILE_KEY,
    STORE_TYPE,
    XSD_VALIDATION,
)
from ._mapping import NATIVE_TYPES, DataType, ElasticsearchMapping, Field
from ._mapping_builder import MappingBuilder
from ._parameters import AuthenticationType, ElasticsearchParameters
from ._query import ElasticsearchQuery

__all__ = [
    "AuthenticationType",
    "DataType",
    "DEFAULT_MAPPING_FILE",
    "ElasticsearchMapping",
    "ElasticsearchParameters",
    "ElasticsearchQuery",
    "Field",
    "ID_FIELD",
    "MappingBuilder",
    "NATIVE_TYPES",
    "PARSE_MAPPING_FILE_KEY",
    "STORE_TYPE",
    "XSD_VALIDATION",
    "create_async_client",
    "create_client",
    "translate_errors",
]
