"""GeoJSON geometry and bbox converter backed by shapely.

WHY: The feature converter treats geometry as an opaque sub-document and
only needs its envelope. shapely already knows every GeoJSON geometry
type (including GeometryCollection) through ``shape``/``mapping``, so
this converter only moves the sub-document between the token stream and
shapely.

HOW: Geometries are materialised from the reader as a plain dict and
handed to ``shapely.geometry.shape``; on write, ``mapping`` produces the
dict that the writer emits. The bbox rectangle sub-format lives here too
because it shares the coordinate conventions.

RULES:
- null ↔ None for both geometry and bbox
- Geometry must be a JSON object shapely accepts, else GeoJsonFormatError
- bbox is written as [min_x, min_y, max_x, max_y]
- bbox is read from 4 numbers [minx, miny, maxx, maxy] or 6 numbers
  [minx, miny, minz, maxx, maxy, maxz]; z is dropped
"""

from __future__ import annotations

from typing import Any

from shapely.errors import ShapelyError
from shapely.geometry import mapping, shape
from shapely.geometry.base import BaseGeometry

from geojson_converter.config import SerializerOptions
from geojson_converter.converters.base import BaseConverter
from geojson_converter.core.model import Envelope
from geojson_converter.stream.reader import GeoJsonFormatError, JsonTokenReader, TokenType
from geojson_converter.stream.writer import JsonTokenWriter


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class GeometryConverter(BaseConverter):
    """Reads and writes GeoJSON geometry objects and bbox arrays."""

    target_type = BaseGeometry

    @property
    def name(self) -> str:
        return "GeoJSON Geometry"

    def write(self, writer: JsonTokenWriter, geometry: BaseGeometry | None, options: SerializerOptions) -> None:
        if geometry is None:
            writer.write_null()
            return
        writer.write_value(mapping(geometry))

    def read(self, reader: JsonTokenReader, options: SerializerOptions) -> BaseGeometry | None:
        if reader.token_type is TokenType.NULL:
            reader.read()
            return None
        if reader.token_type is not TokenType.START_OBJECT:
            raise GeoJsonFormatError(
                f"Geometry must be an object or null, found {reader.token_type.name}",
                reader.token_type,
            )

        data = reader.read_value()
        try:
            return shape(data)
        except (ShapelyError, AttributeError, KeyError, TypeError, ValueError) as exc:
            raise GeoJsonFormatError(f"Invalid geometry object: {exc}") from exc

    def write_bbox(self, writer: JsonTokenWriter, envelope: Envelope | None, options: SerializerOptions) -> None:
        if envelope is None:
            writer.write_null()
            return
        writer.write_start_array()
        for coordinate in envelope.as_tuple():
            writer.write_number(coordinate)
        writer.write_end_array()

    def read_bbox(self, reader: JsonTokenReader, options: SerializerOptions) -> Envelope | None:
        if reader.token_type is TokenType.NULL:
            reader.read()
            return None
        if reader.token_type is not TokenType.START_ARRAY:
            raise GeoJsonFormatError(
                f"bbox must be an array or null, found {reader.token_type.name}",
                reader.token_type,
            )

        values = reader.read_value()
        if len(values) not in (4, 6) or not all(_is_number(v) for v in values):
            raise GeoJsonFormatError(f"bbox must hold 4 or 6 numbers, got {values!r}")

        if len(values) == 6:
            min_x, min_y, _, max_x, max_y, _ = values
        else:
            min_x, min_y, max_x, max_y = values
        return Envelope.from_corners(min_x, min_y, max_x, max_y)
