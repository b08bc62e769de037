from __future__ import annotations

from typing import Any

from gora.core.exceptions import BadRequestError
from gora.store._query import Query

from ._constants import DEFAULT_QUERY_SIZE, ID_FIELD
from ._mapping import ElasticsearchMapping


class ElasticsearchQuery(Query):
    """Query translated into an Elasticsearch search on the key field."""

    def to_query(self) -> dict[str, Any]:
        if self.key is not None:
            return {"term": {ID_FIELD: str(self.key)}}
        bounds = {}
        if self.start_key is not None:
            bounds["gte"] = str(self.start_key)
        if self.end_key is not None:
            bounds["lte"] = str(self.end_key)
        if bounds:
            return {"range": {ID_FIELD: bounds}}
        return {"match_all": {}}

    def to_search(self, mapping: ElasticsearchMapping) -> dict[str, Any]:
        args: dict[str, Any] = {
            "query": self.to_query(),
            "sort": [{ID_FIELD: "asc"}],
            "size": self.limit or DEFAULT_QUERY_SIZE,
        }
        if self.fields:
            docfields = []
            for record_field in self.fields:
                field = mapping.get_field(record_field)
                if field is None:
                    raise BadRequestError(
                        f"Field {record_field} is not mapped"
                    )
                docfields.append(field.name)
            args["source_includes"] = docfields + [ID_FIELD]
        return args
