from __future__ import annotations

from typing import Any

from gora.core import Configuration
from gora.store.factory import get_datastore_type

from .component import MetadataAnalyzer


class DataStoreMetadataFactory:
    @staticmethod
    def create_analyzer(
        conf: Configuration | None = None,
        provider: str | None = None,
        **parameters: Any,
    ) -> MetadataAnalyzer:
        """Create a metadata analyzer for the configured backend.

        Args:
            conf:
                Configuration holding connection parameters.
            provider:
                Backend type, defaults to gora.datastore.default.
            parameters:
                Additional provider parameters.

        Returns:
            Metadata analyzer.
        """
        conf = conf or Configuration()
        provider = provider or get_datastore_type(None, conf)
        return MetadataAnalyzer(
            __provider__=dict(
                type=provider,
                parameters=dict(conf=conf, **parameters),
            )
        )
