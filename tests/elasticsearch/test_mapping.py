# type: ignore
import pytest
from pydantic import ValidationError

from gora.elasticsearch import (
    NATIVE_TYPES,
    DataType,
    ElasticsearchMapping,
    Field,
)


def test_native_types_cover_data_types():
    assert set(NATIVE_TYPES) == set(DataType)
    for data_type, native in NATIVE_TYPES.items():
        assert native == data_type.value


@pytest.mark.parametrize(
    "token, expected",
    [
        ("text", DataType.TEXT),
        ("TEXT", DataType.TEXT),
        ("Long", DataType.LONG),
        (" keyword ", DataType.KEYWORD),
        ("scaled_float", DataType.SCALED_FLOAT),
    ],
)
def test_data_type_tokens(token: str, expected: DataType):
    assert DataType(token) == expected


@pytest.mark.parametrize("token", ["integers", "string", ""])
def test_unknown_data_type(token: str):
    with pytest.raises(ValueError):
        DataType(token)


def test_field_equality():
    field = Field(name="name", data_type=DataType.TEXT)
    assert field == Field(name="name", data_type=DataType("TEXT"))
    assert field != Field(name="name", data_type=DataType.KEYWORD)
    assert hash(field) == hash(Field(name="name", data_type=DataType.TEXT))
    assert field.to_native() == {"type": "text"}


def test_field_is_immutable():
    field = Field(name="name", data_type=DataType.TEXT)
    with pytest.raises(ValidationError):
        field.name = "other"


@pytest.mark.parametrize(
    "args",
    [
        dict(name="", data_type=DataType.TEXT),
        dict(name="price", data_type=DataType.SCALED_FLOAT),
        dict(name="price", data_type=DataType.SCALED_FLOAT, scaling_factor=0),
        dict(name="price", data_type=DataType.DOUBLE, scaling_factor=10),
        dict(name="name", data_type="integers"),
    ],
)
def test_invalid_field(args: dict):
    with pytest.raises(ValidationError):
        Field(**args)


def test_mapping_equality_ignores_order():
    name = Field(name="name", data_type=DataType.TEXT)
    salary = Field(name="salary", data_type=DataType.INTEGER)
    first = ElasticsearchMapping(
        index_name="frontier", fields={"name": name, "salary": salary}
    )
    second = ElasticsearchMapping(
        index_name="frontier", fields={"salary": salary, "name": name}
    )
    assert first == second
    assert first.get_index_name() == "frontier"
    assert first.get_field("salary") == salary
    assert first.get_field("missing") is None
    assert first.get_record_field("name") == "name"


def test_get_field_by_record_field():
    title = Field(name="product_title", data_type=DataType.TEXT)
    mapping = ElasticsearchMapping(
        index_name="products",
        fields={"product_title": title},
        record_fields={"title": "product_title"},
    )
    assert mapping.get_field("title") == title
    assert mapping.get_field("product_title") is None
    assert mapping.get_record_field("product_title") == "title"


def test_get_fields_returns_copy():
    mapping = ElasticsearchMapping(
        index_name="frontier",
        fields={"name": Field(name="name", data_type=DataType.TEXT)},
    )
    fields = mapping.get_fields()
    fields["salary"] = Field(name="salary", data_type=DataType.INTEGER)
    assert list(mapping.get_fields()) == ["name"]


@pytest.mark.parametrize(
    "args",
    [
        dict(index_name=""),
        dict(
            index_name="frontier",
            fields={"other": Field(name="name", data_type=DataType.TEXT)},
        ),
        dict(
            index_name="frontier",
            fields={"gora_id": Field(name="gora_id", data_type=DataType.TEXT)},
        ),
        dict(index_name="frontier", record_fields={"name": "name"}),
    ],
)
def test_invalid_mapping(args: dict):
    with pytest.raises(ValidationError):
        ElasticsearchMapping(**args)


def test_mapping_to_native():
    mapping = ElasticsearchMapping(
        index_name="frontier",
        fields={
            "name": Field(name="name", data_type=DataType.TEXT),
            "boss": Field(name="boss", data_type=DataType.OBJECT),
        },
    )
    assert mapping.to_native() == {
        "properties": {
            "name": {"type": "text"},
            "boss": {"type": "object"},
            "gora_id": {"type": "keyword"},
        }
    }


def test_mapping_serialization():
    mapping = ElasticsearchMapping(
        index_name="frontier",
        class_name="Employee",
        fields={"name": Field(name="name", data_type=DataType.TEXT)},
    )
    data = mapping.to_dict()
    assert data["fields"]["name"] == {
        "name": "name",
        "data_type": "text",
        "scaling_factor": None,
    }
    assert ElasticsearchMapping.from_dict(data) == mapping
