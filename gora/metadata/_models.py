from __future__ import annotations

from pydantic import model_validator

from gora.core import FrozenDataModel


class CollectionMetadata(FrozenDataModel):
    """Schema of a live backend collection."""

    collection_name: str
    """Collection name."""

    document_keys: list[str] = []
    """Field names in backend order."""

    document_types: list[str] = []
    """Field types, parallel to the field names."""

    @model_validator(mode="after")
    def _check_lengths(self) -> CollectionMetadata:
        if len(self.document_keys) != len(self.document_types):
            raise ValueError(
                "Document keys and document types must have the same length"
            )
        return self

    def get_collection_name(self) -> str:
        return self.collection_name

    def get_document_keys(self) -> list[str]:
        return self.document_keys

    def get_document_types(self) -> list[str]:
        return self.document_types

    def as_dict(self) -> dict[str, str]:
        return dict(zip(self.document_keys, self.document_types))
