"""GeoJSON Feature Converter: streaming Feature codec.

WHY: GeoJSON Features arrive from many producers with members in any
order, identifiers of mixed types, and vendor extensions nobody asked
for. Materialising the whole document as a dict and picking it apart
loses type information (is "42" a string or a number?) and forces every
caller to re-implement the id/properties merge. This package converts
Features to and from a small domain model by walking the JSON token
stream directly.

HOW: Three layers: a token stream (ijson-backed reader, compact
writer), the domain model (Feature, AttributesTable, Envelope,
FeatureId), and pluggable converters (geometry, attributes, feature)
that sit between them. ``serializer`` wires the layers together for the
common dumps/loads case.

RULES:
- All converters read from a JsonTokenReader and write to a JsonTokenWriter
- The identifier lives in ``attributes["id"]`` in memory and as a
  top-level member on the wire, never both on the wire
- Malformed input raises GeoJsonFormatError; unknown members are skipped
"""

from geojson_converter.core.identifier import FeatureId, IdKind
from geojson_converter.core.model import AttributesTable, Envelope, Feature
from geojson_converter.serializer import dump, dumps, load, loads
from geojson_converter.stream.reader import GeoJsonFormatError

__version__ = "0.1.0"

__all__ = [
    "AttributesTable",
    "Envelope",
    "Feature",
    "FeatureId",
    "GeoJsonFormatError",
    "IdKind",
    "dump",
    "dumps",
    "load",
    "loads",
]
