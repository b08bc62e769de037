from __future__ import annotations

from typing import Any

from gora.core import Response
from gora.core.exceptions import BadRequestError

from ._models import Result


class Query:
    """Key based query over the records of a data store.

    A key selects a single record and takes precedence over
    the key range. Both range bounds are inclusive.
    """

    data_store: Any
    fields: list[str] | None
    key: str | None
    start_key: str | None
    end_key: str | None
    limit: int | None

    def __init__(
        self,
        data_store: Any = None,
        fields: list[str] | None = None,
        key: str | None = None,
        start_key: str | None = None,
        end_key: str | None = None,
        limit: int | None = None,
    ):
        self.data_store = data_store
        self.fields = fields
        self.key = key
        self.start_key = start_key
        self.end_key = end_key
        self.set_limit(limit)

    def set_fields(self, *fields: str) -> Query:
        self.fields = list(fields) if fields else None
        return self

    def set_key(self, key: str | None) -> Query:
        self.key = key
        return self

    def set_key_range(
        self,
        start_key: str | None,
        end_key: str | None,
    ) -> Query:
        self.start_key = start_key
        self.end_key = end_key
        return self

    def set_limit(self, limit: int | None) -> Query:
        if limit is not None and limit <= 0:
            raise BadRequestError("Query limit must be positive")
        self.limit = limit
        return self

    def execute(self) -> Result:
        if self.data_store is None:
            raise BadRequestError("Query is not bound to a data store")
        response = self.data_store.execute(self)
        if isinstance(response, Response):
            return response.result
        return response

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(fields={self.fields}, key={self.key}, "
            f"start_key={self.start_key}, end_key={self.end_key}, "
            f"limit={self.limit})"
        )
