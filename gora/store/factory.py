from __future__ import annotations

import logging
import os
from typing import Any, Mapping

from gora.core import Configuration
from gora.core.config import DEFAULT_CONFIG_FILE, load_yaml

from .component import DataStore

logger = logging.getLogger(__name__)

DATASTORE_TYPE_KEY = "gora.datastore.default"
DEFAULT_DATASTORE_TYPE = "elasticsearch"


def get_datastore_type(
    properties: Mapping[str, Any] | None,
    conf: Configuration | None,
) -> str:
    value = (properties or {}).get(DATASTORE_TYPE_KEY)
    if not value and conf is not None:
        value = conf.get(DATASTORE_TYPE_KEY)
    return str(value or DEFAULT_DATASTORE_TYPE).strip().lower()


class DataStoreFactory:
    @staticmethod
    def create_props(
        path: str | os.PathLike = DEFAULT_CONFIG_FILE,
    ) -> dict[str, Any]:
        """Read data store properties.

        Args:
            path:
                YAML properties file. A missing file
                gives empty properties.

        Returns:
            Properties keyed by dotted name.
        """
        if not os.path.isfile(path):
            logger.debug(f"Properties file {path} not found")
            return dict()
        return load_yaml(path)

    @staticmethod
    def create_data_store(
        class_name: str | None = None,
        properties: Mapping[str, Any] | None = None,
        conf: Configuration | None = None,
        provider: str | None = None,
        **parameters: Any,
    ) -> DataStore:
        """Create and initialize a data store.

        Args:
            class_name:
                Record class whose mapping is used,
                defaults to the first mapped class.
            properties:
                Data store properties, override the configuration.
            conf:
                Configuration holding default values.
            provider:
                Backend type, defaults to gora.datastore.default.
            parameters:
                Additional provider parameters.

        Returns:
            Initialized data store.
        """
        conf = conf or Configuration()
        provider = provider or get_datastore_type(properties, conf)
        store = DataStore(
            __provider__=dict(
                type=provider,
                parameters=dict(
                    class_name=class_name,
                    properties=dict(properties or {}),
                    conf=conf,
                    **parameters,
                ),
            )
        )
        store.__setup__()
        return store
