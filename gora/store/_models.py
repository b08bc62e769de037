from typing import Any

from gora.core import DataModel


class ResultItem(DataModel):
    """Query result item."""

    key: str
    """Record key."""

    value: dict[str, Any]
    """Record keyed by record field name."""


class Result(DataModel):
    """Query result."""

    items: list[ResultItem] = []
    """Items sorted by key."""

    def keys(self) -> list[str]:
        return [item.key for item in self.items]
