from gora.core.exceptions import (
    CollectionNotFoundError,
    StoreUnavailableError,
)

from ._models import CollectionMetadata
from .component import MetadataAnalyzer
from .factory import DataStoreMetadataFactory

__all__ = [
    "CollectionMetadata",
    "CollectionNotFoundError",
    "DataStoreMetadataFactory",
    "MetadataAnalyzer",
    "StoreUnavailableError",
]
