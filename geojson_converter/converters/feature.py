"""GeoJSON Feature converter: the orchestrator.

WHY: A Feature is the unit producers and consumers exchange. Writing one
needs a fixed member order and the id pulled out of the attributes;
reading one needs to accept members in any order, fold the id back into
the attributes, and survive members added by newer producers.

HOW: write() emits type, id, bbox, geometry, properties in that order,
delegating the sub-documents to GeometryConverter and
AttributesConverter. read() opens the object and loops over member
names, dispatching known names and skipping the rest structurally.

RULES:
- Write order is fixed: type, id, bbox, geometry, properties
- id is written only when the attribute table has a non-None "id"
- bbox falls back to the geometry envelope; bbox/geometry/properties
  follow the null-emission policy (ignore_null_values)
- "type" must be the string "Feature"
- The id member is resolved from its token shape and stored in
  attributes["id"], allocating the table if needed
- properties are assigned only if the Feature has no table yet; the
  attributes converter merges into an existing one
- Member order matters for id vs properties: whichever is read last
  decides attributes["id"]
- Unknown members are skipped; any token mismatch is fatal
"""

from __future__ import annotations

import logging
from typing import Callable

from geojson_converter.config import (
    DEFAULT_ID_PROPERTY_NAME,
    FEATURE_TYPE,
    ID_ATTRIBUTE,
    SerializerOptions,
)
from geojson_converter.converters.attributes import AttributesConverter
from geojson_converter.converters.base import BaseConverter
from geojson_converter.converters.geometry import GeometryConverter
from geojson_converter.core.bbox import effective_bounding_box, should_emit
from geojson_converter.core.identifier import escape_identifier, resolve_identifier
from geojson_converter.core.model import AttributesTable, Feature
from geojson_converter.stream.reader import GeoJsonFormatError, JsonTokenReader, TokenType
from geojson_converter.stream.writer import JsonTokenWriter

logger = logging.getLogger(__name__)


class FeatureConverter(BaseConverter):
    """Converts Feature objects to and from their GeoJSON representation.

    WHY: Callers plug in their own Feature subclasses, table types, or
    identifier member name without touching the read/write logic.

    HOW: Collaborators and factories are fixed at construction. The
    instance holds no per-call state, so one converter can serve many
    independent readers and writers.

    RULES:
    - id_property_name: blank or None falls back to the configured default
    - create_feature / create_attributes_table: zero-argument factories
    - geometry_converter / attributes_converter: optional replacements
    """

    target_type = Feature

    def __init__(
        self,
        id_property_name: str | None = None,
        create_feature: Callable[[], Feature] | None = None,
        create_attributes_table: Callable[[], AttributesTable] | None = None,
        geometry_converter: GeometryConverter | None = None,
        attributes_converter: AttributesConverter | None = None,
    ) -> None:
        if id_property_name is None or not id_property_name.strip():
            id_property_name = DEFAULT_ID_PROPERTY_NAME
        self._id_property_name = id_property_name
        self._create_feature = create_feature or Feature
        self._create_attributes_table = create_attributes_table or AttributesTable
        self._geometry_converter = geometry_converter or GeometryConverter()
        self._attributes_converter = attributes_converter or AttributesConverter(self._create_attributes_table)

    @property
    def name(self) -> str:
        return "GeoJSON Feature"

    @property
    def id_property_name(self) -> str:
        return self._id_property_name

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def write(
        self,
        writer: JsonTokenWriter,
        feature: Feature | None,
        options: SerializerOptions | None = None,
    ) -> None:
        """Write ``feature`` as one GeoJSON Feature object, or null."""
        if options is None:
            options = SerializerOptions()

        if feature is None:
            writer.write_null()
            return

        writer.write_start_object()

        writer.write_property_name("type")
        writer.write_string(FEATURE_TYPE)

        # The id is written here and skipped by the properties writer
        attributes = feature.attributes
        if attributes is not None and attributes.has_id():
            writer.write_property_name(self._id_property_name)
            self._write_identifier(writer, attributes.get_id(), options)

        bbox = effective_bounding_box(feature)
        if should_emit(bbox, options):
            writer.write_property_name("bbox")
            self._geometry_converter.write_bbox(writer, bbox, options)

        if should_emit(feature.geometry, options):
            writer.write_property_name("geometry")
            self._geometry_converter.write(writer, feature.geometry, options)

        if should_emit(attributes, options):
            writer.write_property_name("properties")
            self._attributes_converter.write(writer, attributes, options)

        writer.write_end_object()

    def _write_identifier(self, writer: JsonTokenWriter, value: object, options: SerializerOptions) -> None:
        if options.escape_identifiers:
            writer.write_string(escape_identifier(value))
        else:
            writer.write_value(value)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read(self, reader: JsonTokenReader, options: SerializerOptions | None = None) -> Feature | None:
        """Read one Feature object (or null) starting at the current token."""
        if options is None:
            options = SerializerOptions()

        if reader.token_type is TokenType.NULL:
            reader.read()
            return None

        reader.read_token(TokenType.START_OBJECT)
        feature = self._create_feature()

        while reader.token_type is TokenType.PROPERTY_NAME:
            member = reader.value
            reader.read()

            if member == "type":
                self._read_type(reader)
            elif member == self._id_property_name:
                self._read_identifier(reader, feature, options)
            elif member == "bbox":
                feature.bounding_box = self._geometry_converter.read_bbox(reader, options)
            elif member == "geometry":
                feature.geometry = self._geometry_converter.read(reader, options)
            elif member == "properties":
                attributes = self._attributes_converter.read(reader, options, feature=feature)
                if feature.attributes is None:
                    feature.attributes = attributes
            else:
                logger.debug("Skipping unknown Feature member %r", member)
                reader.skip()

        reader.read_token(TokenType.END_OBJECT)
        return feature

    def _read_type(self, reader: JsonTokenReader) -> None:
        if reader.token_type is not TokenType.STRING or reader.value != FEATURE_TYPE:
            raise GeoJsonFormatError(
                f"Expected value {FEATURE_TYPE!r} not found (got {reader.value!r})",
                reader.token_type,
            )
        reader.read()

    def _read_identifier(self, reader: JsonTokenReader, feature: Feature, options: SerializerOptions) -> None:
        feature_id = resolve_identifier(reader.token_type, reader.value, unescape=options.escape_identifiers)

        if feature.attributes is None:
            feature.attributes = self._create_attributes_table()
        if feature.attributes.exists(ID_ATTRIBUTE):
            feature.attributes[ID_ATTRIBUTE] = feature_id.value
        else:
            feature.attributes.add(ID_ATTRIBUTE, feature_id.value)

        reader.read()
