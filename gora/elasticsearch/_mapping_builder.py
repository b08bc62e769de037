"""
Mapping file reader.
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from importlib import resources
from typing import Iterable

import xmlschema
from pydantic import ValidationError

from gora.core.exceptions import MalformedMappingError, MappingNotFoundError

from ._constants import ID_FIELD, XSD_FILE
from ._mapping import DataType, ElasticsearchMapping, Field

logger = logging.getLogger(__name__)

CLASS_ELEMENT = "class"
FIELD_ELEMENT = "field"


class MappingBuilder:
    """Builds index mappings from an XML mapping file.

    With validation the file must conform to the bundled XSD and any
    violation raises ``MalformedMappingError``. Without validation the
    file is read best-effort: classes and fields that cannot be
    interpreted are skipped.
    """

    search_paths: list[str]

    _schema: xmlschema.XMLSchema | None = None

    def __init__(self, search_paths: Iterable[str] | None = None):
        self.search_paths = list(search_paths or [])

    def load(
        self,
        path: str,
        validate: bool = False,
    ) -> list[ElasticsearchMapping]:
        """Load every class mapping declared in the file.

        Args:
            path:
                Mapping file path. Relative paths not found
                from the working directory are looked up in
                the search paths.
            validate:
                A value indicating whether the file is
                validated against the mapping schema.

        Returns:
            Index mappings in declaration order.

        Raises:
            MappingNotFoundError:
                File not found or unreadable.
            MalformedMappingError:
                File is not well-formed or fails validation.
        """
        resolved = self.resolve(path)
        try:
            tree = ET.parse(resolved)
        except ET.ParseError as e:
            raise MalformedMappingError(
                reason=str(e), source=resolved
            ) from e
        except OSError as e:
            raise MappingNotFoundError(
                f"Mapping file {resolved} could not be read"
            ) from e
        if validate:
            self._validate(tree, resolved)
        mappings = []
        for element in tree.getroot().findall(CLASS_ELEMENT):
            mapping = self._parse_class(element, validate, resolved)
            if mapping is not None:
                mappings.append(mapping)
        logger.debug(f"Loaded {len(mappings)} mappings from {resolved}")
        return mappings

    def load_mapping(
        self,
        path: str,
        validate: bool = False,
        class_name: str | None = None,
    ) -> ElasticsearchMapping:
        """Load the mapping of one record class.

        Args:
            path:
                Mapping file path.
            validate:
                A value indicating whether the file is
                validated against the mapping schema.
            class_name:
                Record class name, defaults to the first class.

        Returns:
            Index mapping.
        """
        mappings = self.load(path, validate)
        for mapping in mappings:
            if class_name is None or mapping.class_name == class_name:
                return mapping
        raise MappingNotFoundError(
            f"No mapping for class {class_name} in {path}"
        )

    def resolve(self, path: str) -> str:
        if os.path.isfile(path):
            return path
        if not os.path.isabs(path):
            for directory in self.search_paths:
                candidate = os.path.join(directory, path)
                if os.path.isfile(candidate):
                    return candidate
        raise MappingNotFoundError(f"Mapping file {path} not found")

    @classmethod
    def get_schema(cls) -> xmlschema.XMLSchema:
        if cls._schema is None:
            xsd = resources.files(__package__).joinpath(XSD_FILE)
            with resources.as_file(xsd) as xsd_path:
                cls._schema = xmlschema.XMLSchema(str(xsd_path))
        return cls._schema

    def _validate(self, tree: ET.ElementTree, source: str) -> None:
        for error in self.get_schema().iter_errors(tree):
            raise MalformedMappingError(
                reason=error.reason or str(error.message),
                path=error.path,
                source=source,
            )

    def _parse_class(
        self,
        element: ET.Element,
        strict: bool,
        source: str,
    ) -> ElasticsearchMapping | None:
        class_name = element.get("name")
        index_name = element.get("index")
        if not class_name or not index_name:
            logger.debug(f"Skipping class without name or index in {source}")
            return None
        fields: dict[str, Field] = {}
        record_fields: dict[str, str] = {}
        for field_element in element.findall(FIELD_ELEMENT):
            parsed = self._parse_field(field_element, strict, source)
            if parsed is None:
                continue
            record_field, field = parsed
            if field.name in fields or record_field in record_fields:
                if strict:
                    raise MalformedMappingError(
                        reason=f"Duplicate field {field.name}",
                        path=f"/gora-otd/class[@name='{class_name}']",
                        source=source,
                    )
                logger.debug(f"Skipping duplicate field {field.name}")
                continue
            fields[field.name] = field
            record_fields[record_field] = field.name
        try:
            return ElasticsearchMapping(
                index_name=index_name,
                fields=fields,
                class_name=class_name,
                key_class=element.get("keyClass") or "str",
                record_fields=record_fields,
            )
        except ValidationError as e:
            if strict:
                raise MalformedMappingError(
                    reason=str(e), source=source
                ) from e
            logger.debug(f"Skipping class {class_name}: {e}")
            return None

    def _parse_field(
        self,
        element: ET.Element,
        strict: bool,
        source: str,
    ) -> tuple[str, Field] | None:
        name = element.get("name")
        type = element.get("type")
        if not name or not type:
            logger.debug(f"Skipping field without name or type in {source}")
            return None
        docfield = element.get("docfield") or name
        if ID_FIELD in (name, docfield):
            if strict:
                raise MalformedMappingError(
                    reason=f"Field name {ID_FIELD} is reserved",
                    path=f"field[@name='{name}']",
                    source=source,
                )
            logger.debug(f"Skipping reserved field {name}")
            return None
        try:
            data_type = DataType(type)
            scaling_factor = element.get("scalingFactor")
            field = Field(
                name=docfield,
                data_type=data_type,
                scaling_factor=(
                    int(scaling_factor) if scaling_factor is not None else None
                ),
            )
        except (ValueError, ValidationError) as e:
            if strict:
                raise MalformedMappingError(
                    reason=str(e),
                    path=f"field[@name='{name}']",
                    source=source,
                ) from e
            logger.debug(f"Skipping field {name}: {e}")
            return None
        return name, field
