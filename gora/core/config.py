"""Layered configuration: environment variables over a YAML file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "gora.yaml"
ENV_PREFIX = "GORA_"
ROOT_KEY = "gora"

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def flatten(values: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dotted keys.

    ``{"gora": {"xsd_validation": True}}`` becomes
    ``{"gora.xsd_validation": True}``.
    """
    result: dict[str, Any] = {}
    for key, value in values.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            result.update(flatten(value, name))
        else:
            result[name] = value.strip() if isinstance(value, str) else value
    return result


def load_yaml(path: str | os.PathLike) -> dict[str, Any]:
    with open(path, "r") as f:
        values = yaml.safe_load(f) or {}
    if not isinstance(values, Mapping):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return flatten(values)


def env_name(key: str) -> str:
    parts = key.split(".")
    if parts[0] == ROOT_KEY:
        parts = parts[1:]
    return ENV_PREFIX + "_".join(parts).upper()


def parse_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def parse_int(value: Any, default: int | None = None) -> int | None:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer value: {value!r}")
    return int(str(value).strip())


class Configuration:
    """Default values for data stores and analyzers.

    Lookup precedence (highest to lowest):
    1. Environment variables (``GORA_*``)
    2. Values given at construction or with ``set``
    3. YAML configuration file
    """

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        path: str | os.PathLike | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self._values: dict[str, Any] = {}
        if path is not None:
            self._values.update(load_yaml(path))
            logger.debug(f"Loaded configuration file {path}")
        elif Path(DEFAULT_CONFIG_FILE).is_file():
            self._values.update(load_yaml(DEFAULT_CONFIG_FILE))
            logger.debug(f"Loaded configuration file {DEFAULT_CONFIG_FILE}")
        if values:
            self._values.update(flatten(values))
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Any = None) -> Any:
        value = self._environ.get(env_name(key))
        if value is not None:
            return value.strip()
        return self._values.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return parse_bool(self.get(key), default)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        return parse_int(self.get(key), default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)
