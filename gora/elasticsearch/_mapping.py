from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field as ModelField
from pydantic import model_validator

from gora.core import FrozenDataModel
from gora.core.exceptions import SpecError

from ._constants import ID_FIELD, ID_FIELD_TYPE


class DataType(str, Enum):
    """Field types accepted in the mapping file.

    Tokens are matched case-insensitively.
    """

    # String
    TEXT = "text"
    KEYWORD = "keyword"
    CONSTANT_KEYWORD = "constant_keyword"
    WILDCARD = "wildcard"

    # Numeric
    LONG = "long"
    INTEGER = "integer"
    SHORT = "short"
    BYTE = "byte"
    DOUBLE = "double"
    FLOAT = "float"
    HALF_FLOAT = "half_float"
    SCALED_FLOAT = "scaled_float"
    UNSIGNED_LONG = "unsigned_long"

    # Other primitives
    BOOLEAN = "boolean"
    BINARY = "binary"
    DATE = "date"
    DATE_NANOS = "date_nanos"
    IP = "ip"
    VERSION = "version"

    # Structures
    OBJECT = "object"
    FLATTENED = "flattened"
    NESTED = "nested"

    # Spatial
    GEO_POINT = "geo_point"
    GEO_SHAPE = "geo_shape"

    @classmethod
    def _missing_(cls, value: object) -> DataType | None:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


NATIVE_TYPES: dict[DataType, str] = {
    DataType.TEXT: "text",
    DataType.KEYWORD: "keyword",
    DataType.CONSTANT_KEYWORD: "constant_keyword",
    DataType.WILDCARD: "wildcard",
    DataType.LONG: "long",
    DataType.INTEGER: "integer",
    DataType.SHORT: "short",
    DataType.BYTE: "byte",
    DataType.DOUBLE: "double",
    DataType.FLOAT: "float",
    DataType.HALF_FLOAT: "half_float",
    DataType.SCALED_FLOAT: "scaled_float",
    DataType.UNSIGNED_LONG: "unsigned_long",
    DataType.BOOLEAN: "boolean",
    DataType.BINARY: "binary",
    DataType.DATE: "date",
    DataType.DATE_NANOS: "date_nanos",
    DataType.IP: "ip",
    DataType.VERSION: "version",
    DataType.OBJECT: "object",
    DataType.FLATTENED: "flattened",
    DataType.NESTED: "nested",
    DataType.GEO_POINT: "geo_point",
    DataType.GEO_SHAPE: "geo_shape",
}

_unmapped = set(DataType) - set(NATIVE_TYPES)
if _unmapped:
    raise SpecError(
        "Data types without native mapping: "
        f"{sorted(t.value for t in _unmapped)}"
    )


class Field(FrozenDataModel):
    """Mapped document field."""

    name: str = ModelField(min_length=1)
    """Document field name."""

    data_type: DataType
    """Field type."""

    scaling_factor: int | None = None
    """Scaling factor, required by scaled_float fields."""

    @model_validator(mode="after")
    def _check_scaling_factor(self) -> Field:
        if self.data_type == DataType.SCALED_FLOAT:
            if self.scaling_factor is None or self.scaling_factor <= 0:
                raise ValueError(
                    f"Field {self.name} requires a positive scaling factor"
                )
        elif self.scaling_factor is not None:
            raise ValueError(
                f"Scaling factor is not supported by {self.data_type.value}"
            )
        return self

    @property
    def native_type(self) -> str:
        return NATIVE_TYPES[self.data_type]

    def to_native(self) -> dict[str, Any]:
        config: dict[str, Any] = {"type": self.native_type}
        if self.scaling_factor is not None:
            config["scaling_factor"] = self.scaling_factor
        return config


class ElasticsearchMapping(FrozenDataModel):
    """Mapping of one record class to an Elasticsearch index."""

    index_name: str = ModelField(min_length=1)
    """Index holding the documents."""

    fields: dict[str, Field] = {}
    """Document fields keyed by document field name."""

    class_name: str | None = None
    """Record class mapped to the index."""

    key_class: str = "str"
    """Record key type."""

    record_fields: dict[str, str] = {}
    """Record field name to document field name."""

    @model_validator(mode="after")
    def _check_fields(self) -> ElasticsearchMapping:
        for key, field in self.fields.items():
            if key != field.name:
                raise ValueError(
                    f"Field key {key} does not match field name {field.name}"
                )
        for record_field, docfield in self.record_fields.items():
            if docfield not in self.fields:
                raise ValueError(
                    f"Record field {record_field} maps to "
                    f"unknown document field {docfield}"
                )
        if ID_FIELD in self.fields:
            raise ValueError(f"Field name {ID_FIELD} is reserved")
        return self

    def get_index_name(self) -> str:
        return self.index_name

    def get_fields(self) -> dict[str, Field]:
        return dict(self.fields)

    def get_field(self, record_field: str) -> Field | None:
        # Without record fields, records use the document field names.
        if not self.record_fields:
            return self.fields.get(record_field)
        docfield = self.record_fields.get(record_field)
        if docfield is None:
            return None
        return self.fields.get(docfield)

    def get_record_field(self, docfield: str) -> str:
        for record_field, name in self.record_fields.items():
            if name == docfield:
                return record_field
        return docfield

    def to_native(self) -> dict[str, Any]:
        properties = {
            name: field.to_native() for name, field in self.fields.items()
        }
        properties[ID_FIELD] = {"type": ID_FIELD_TYPE}
        return {"properties": properties}
