from __future__ import annotations

from typing import Any

from gora.core import Component, Response, operation

from ._models import CollectionMetadata


class MetadataAnalyzer(Component):
    """Introspects the collections of a live backend.

    Every call queries the backend; nothing is cached.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

    @operation()
    def get_type(self) -> Response[str]:
        """Get the backend type.

        Returns:
            Backend type label.
        """
        raise NotImplementedError

    @operation()
    def get_tables_names(self) -> Response[list[str]]:
        """List collection names.

        Returns:
            Collection names in backend order.

        Raises:
            StoreUnavailableError:
                Backend cannot be reached.
        """
        raise NotImplementedError

    @operation()
    def get_table_info(
        self,
        collection: str,
    ) -> Response[CollectionMetadata]:
        """Get the live schema of a collection.

        Args:
            collection:
                Collection name.

        Returns:
            Collection metadata.

        Raises:
            StoreUnavailableError:
                Backend cannot be reached.
            CollectionNotFoundError:
                Collection does not exist.
        """
        raise NotImplementedError

    @operation()
    def close(self, **kwargs: Any) -> Response[None]:
        """Close client.

        Returns:
            None.
        """
        raise NotImplementedError

    @operation()
    async def aget_type(self) -> Response[str]:
        """Get the backend type.

        Returns:
            Backend type label.
        """
        raise NotImplementedError

    @operation()
    async def aget_tables_names(self) -> Response[list[str]]:
        """List collection names.

        Returns:
            Collection names in backend order.
        """
        raise NotImplementedError

    @operation()
    async def aget_table_info(
        self,
        collection: str,
    ) -> Response[CollectionMetadata]:
        """Get the live schema of a collection.

        Args:
            collection:
                Collection name.

        Returns:
            Collection metadata.
        """
        raise NotImplementedError

    @operation()
    async def aclose(self, **kwargs: Any) -> Response[None]:
        """Close async client.

        Returns:
            None.
        """
        raise NotImplementedError
