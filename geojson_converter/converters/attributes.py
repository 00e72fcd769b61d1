"""GeoJSON ``properties`` converter.

WHY: Properties are free-form, but two Feature-level rules touch them:
the identifier must not be written twice, and an identifier read before
``properties`` must not be thrown away when the properties arrive.

HOW: On write, every attribute except "id" is emitted in table order.
On read, members are inserted into the owner Feature's existing table
when it has one (so an already-read identifier survives), otherwise into
a fresh table from the configured factory.

RULES:
- "id" is never written inside properties
- ignore_null_values drops None-valued attributes on write
- Read is insert-or-overwrite: a later member with the same name wins,
  including an "id" member inside properties
- Nested objects are read as nested tables from the same factory;
  arrays are read as lists
"""

from __future__ import annotations

from typing import Callable

from geojson_converter.config import ID_ATTRIBUTE, SerializerOptions
from geojson_converter.converters.base import BaseConverter
from geojson_converter.core.model import AttributesTable, Feature
from geojson_converter.stream.reader import GeoJsonFormatError, JsonTokenReader, TokenType
from geojson_converter.stream.writer import JsonTokenWriter


class AttributesConverter(BaseConverter):
    """Reads and writes the ``properties`` member of a Feature."""

    target_type = AttributesTable

    def __init__(self, create_attributes_table: Callable[[], AttributesTable] | None = None) -> None:
        self._create_attributes_table = create_attributes_table or AttributesTable

    @property
    def name(self) -> str:
        return "GeoJSON Properties"

    def write(self, writer: JsonTokenWriter, attributes: AttributesTable | None, options: SerializerOptions) -> None:
        if attributes is None:
            writer.write_null()
            return

        writer.write_start_object()
        for name, value in attributes.items():
            if name == ID_ATTRIBUTE:
                continue
            if value is None and options.ignore_null_values:
                continue
            writer.write_property_name(name)
            writer.write_value(value)
        writer.write_end_object()

    def read(
        self,
        reader: JsonTokenReader,
        options: SerializerOptions,
        feature: Feature | None = None,
    ) -> AttributesTable | None:
        """Read a properties object, merging into ``feature.attributes`` if set."""
        if reader.token_type is TokenType.NULL:
            reader.read()
            return None
        if reader.token_type is not TokenType.START_OBJECT:
            raise GeoJsonFormatError(
                f"properties must be an object or null, found {reader.token_type.name}",
                reader.token_type,
            )

        if feature is not None and feature.attributes is not None:
            table = feature.attributes
        else:
            table = self._create_attributes_table()

        reader.read()
        while reader.token_type is TokenType.PROPERTY_NAME:
            name = reader.value
            reader.read()
            table[name] = reader.read_value(self._create_attributes_table)
        reader.read_token(TokenType.END_OBJECT)
        return table
