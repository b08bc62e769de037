from gora.core.exceptions import (
    BadRequestError,
    CollectionNotFoundError,
    MalformedMappingError,
    MappingNotFoundError,
    StoreUnavailableError,
)

from ._models import Result, ResultItem
from ._query import Query
from .component import DataStore
from .factory import DataStoreFactory

__all__ = [
    "BadRequestError",
    "CollectionNotFoundError",
    "DataStore",
    "DataStoreFactory",
    "MalformedMappingError",
    "MappingNotFoundError",
    "Query",
    "Result",
    "ResultItem",
    "StoreUnavailableError",
]
