# type: ignore
import pytest

from gora.core import Configuration
from gora.core.config import env_name, flatten, parse_bool, parse_int


def test_flatten():
    assert flatten(
        {"gora": {"xsd_validation": True, "datastore": {"default": " es "}}}
    ) == {"gora.xsd_validation": True, "gora.datastore.default": "es"}


@pytest.mark.parametrize(
    "key, expected",
    [
        ("gora.xsd_validation", "GORA_XSD_VALIDATION"),
        (
            "gora.datastore.elasticsearch.host",
            "GORA_DATASTORE_ELASTICSEARCH_HOST",
        ),
        ("other.key", "GORA_OTHER_KEY"),
    ],
)
def test_env_name(key: str, expected: str):
    assert env_name(key) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        (True, True),
        ("true", True),
        (" Yes ", True),
        ("0", False),
        ("off", False),
    ],
)
def test_parse_bool(value, expected: bool):
    assert parse_bool(value) is expected


def test_parse_invalid():
    with pytest.raises(ValueError):
        parse_bool("maybe")
    with pytest.raises(ValueError):
        parse_int("ten")
    with pytest.raises(ValueError):
        parse_int(True)
    assert parse_int("", 5) == 5
    assert parse_int(" 7 ") == 7


def test_precedence(tmp_path):
    path = tmp_path / "gora.yaml"
    path.write_text(
        "gora:\n"
        "  xsd_validation: false\n"
        "  datastore:\n"
        "    default: elasticsearch\n"
        "    autocreateschema: true\n"
    )
    conf = Configuration(
        values={"gora.datastore.autocreateschema": False},
        path=str(path),
        environ={"GORA_XSD_VALIDATION": " true "},
    )
    assert conf.get_bool("gora.xsd_validation") is True
    assert conf.get_bool("gora.datastore.autocreateschema", True) is False
    assert conf.get("gora.datastore.default") == "elasticsearch"
    assert conf.get("gora.missing", "x") == "x"
    assert "gora.datastore.default" in conf
    assert "gora.missing" not in conf

    conf.set("gora.datastore.default", "other")
    assert conf.get("gora.datastore.default") == "other"
    assert conf.to_dict()["gora.xsd_validation"] is False


def test_default_file(tmp_path, monkeypatch):
    (tmp_path / "gora.yaml").write_text("gora:\n  resources:\n    path: res\n")
    monkeypatch.chdir(tmp_path)
    conf = Configuration(environ={})
    assert conf.get("gora.resources.path") == "res"


def test_get_int():
    conf = Configuration(
        values={"gora.datastore.elasticsearch.port": "9201"},
        environ={"GORA_DATASTORE_ELASTICSEARCH_MAXRETRIES": "5"},
    )
    assert conf.get_int("gora.datastore.elasticsearch.port") == 9201
    assert conf.get_int("gora.datastore.elasticsearch.maxRetries") == 5
    assert conf.get_int("gora.datastore.elasticsearch.missing", 1) == 1


def test_invalid_file(tmp_path):
    path = tmp_path / "gora.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        Configuration(path=str(path), environ={})
