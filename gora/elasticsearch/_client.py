from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from elasticsearch import ApiError, AsyncElasticsearch, Elasticsearch
from elasticsearch.exceptions import ConnectionError as ESConnectionError
from elasticsearch.exceptions import ConnectionTimeout as ESConnectionTimeout
from elasticsearch.exceptions import NotFoundError as ESNotFoundError

from gora.core.exceptions import (
    CollectionNotFoundError,
    StoreUnavailableError,
)

from ._parameters import ElasticsearchParameters

logger = logging.getLogger(__name__)

INDEX_NOT_FOUND = "index_not_found_exception"


def create_client(parameters: ElasticsearchParameters) -> Elasticsearch:
    logger.info(f"Connecting to Elasticsearch at {parameters.get_urls()}")
    return Elasticsearch(**parameters.to_client_args())


def create_async_client(
    parameters: ElasticsearchParameters,
) -> AsyncElasticsearch:
    logger.info(f"Connecting to Elasticsearch at {parameters.get_urls()}")
    return AsyncElasticsearch(**parameters.to_client_args())


def is_index_not_found(error: ESNotFoundError) -> bool:
    return getattr(error, "error", None) == INDEX_NOT_FOUND


@contextmanager
def translate_errors(collection: str | None = None) -> Iterator[None]:
    """Translate client errors into store errors.

    Args:
        collection:
            Collection addressed by an index level call. Any
            not found error is then reported as a missing collection.
    """
    try:
        yield
    except (ESConnectionError, ESConnectionTimeout) as e:
        raise StoreUnavailableError(
            f"Elasticsearch is unavailable: {e}"
        ) from e
    except ESNotFoundError as e:
        if collection is not None or is_index_not_found(e):
            name = collection or "Collection"
            raise CollectionNotFoundError(f"{name} does not exist") from e
        raise
    except ApiError as e:
        if e.status_code >= 500:
            raise StoreUnavailableError(
                f"Elasticsearch is not serving requests: {e}"
            ) from e
        raise


def get_body(response: Any) -> dict[str, Any]:
    body = getattr(response, "body", response)
    return body if isinstance(body, dict) else dict(body)
