"""JSON token stream: incremental reader and compact writer.

WHY: Converters must work token by token so that unknown members can be
skipped without materialising them and so that number/string shapes are
still visible when the identifier is resolved.

HOW: reader.py wraps ijson's basic_parse events in a forward-only cursor;
writer.py emits compact JSON text to any text stream.

RULES:
- Both sides are single-use and owned by exactly one call
- Lexer errors surface as GeoJsonFormatError, never as ijson exceptions
"""

from geojson_converter.stream.reader import GeoJsonFormatError, JsonTokenReader, TokenType
from geojson_converter.stream.writer import JsonTokenWriter

__all__ = ["GeoJsonFormatError", "JsonTokenReader", "JsonTokenWriter", "TokenType"]
