from __future__ import annotations

from typing import Any

from gora.core import Component, Response, operation

from ._models import Result
from ._query import Query


class DataStore(Component):
    """Persists records of one class into a backend collection.

    Records are dictionaries keyed by record field name.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

    @operation()
    def get_schema_name(self) -> Response[str]:
        """Get the backend collection name.

        Returns:
            Collection name.
        """
        raise NotImplementedError

    @operation()
    def get_mapping(self) -> Response[Any]:
        """Get the mapping the store was initialized with.

        Returns:
            Backend specific mapping.
        """
        raise NotImplementedError

    @operation()
    def create_schema(self) -> Response[None]:
        """Create the backend collection if it does not exist.

        Returns:
            None.
        """
        raise NotImplementedError

    @operation()
    def delete_schema(self) -> Response[None]:
        """Delete the backend collection if it exists.

        Returns:
            None.
        """
        raise NotImplementedError

    @operation()
    def schema_exists(self) -> Response[bool]:
        """Check if the backend collection exists.

        Returns:
            A value indicating whether the collection exists.
        """
        raise NotImplementedError

    @operation()
    def get(
        self,
        key: str,
        fields: list[str] | None = None,
    ) -> Response[dict[str, Any] | None]:
        """Get record.

        Args:
            key:
                Record key.
            fields:
                Record fields to return, defaults to all.

        Returns:
            Record or None if not found.
        """
        raise NotImplementedError

    @operation()
    def put(
        self,
        key: str,
        value: dict[str, Any],
    ) -> Response[None]:
        """Put record.

        Args:
            key:
                Record key.
            value:
                Record.

        Returns:
            None.

        Raises:
            BadRequestError:
                Record has unmapped fields.
        """
        raise NotImplementedError

    @operation()
    def delete(
        self,
        key: str,
    ) -> Response[bool]:
        """Delete record.

        Args:
            key:
                Record key.

        Returns:
            A value indicating whether the record was deleted.
        """
        raise NotImplementedError

    @operation()
    def new_query(self) -> Response[Query]:
        """Create a query bound to this store.

        Returns:
            Query.
        """
        raise NotImplementedError

    @operation()
    def execute(
        self,
        query: Query,
    ) -> Response[Result]:
        """Execute query.

        Args:
            query:
                Query to execute.

        Returns:
            Matching records sorted by key.
        """
        raise NotImplementedError

    @operation()
    def delete_by_query(
        self,
        query: Query,
    ) -> Response[int]:
        """Delete the records matching the query.

        Args:
            query:
                Query selecting records.

        Returns:
            Number of deleted records.
        """
        raise NotImplementedError

    @operation()
    def flush(self) -> Response[None]:
        """Make pending writes visible to queries.

        Returns:
            None.
        """
        raise NotImplementedError

    @operation()
    def close(self) -> Response[None]:
        """Close client.

        Returns:
            None.
        """
        raise NotImplementedError
