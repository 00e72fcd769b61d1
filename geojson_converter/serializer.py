"""dumps/loads helpers for single Features.

WHY: Most callers just want "Feature to string" and back. These helpers
hide the reader/writer plumbing and the document-level checks (position
on the first token, nothing after the Feature).

HOW: A default FeatureConverter is built on first use and reused.
Callers pass their own converter for custom factories or id names.

RULES:
- loads/load accept str, bytes, or a text/binary file object
- Trailing content after the Feature raises GeoJsonFormatError
- A bare ``null`` document loads as None
"""

from __future__ import annotations

from typing import Any, TextIO

from geojson_converter.config import SerializerOptions
from geojson_converter.converters.feature import FeatureConverter
from geojson_converter.core.model import Feature
from geojson_converter.stream.reader import GeoJsonFormatError, JsonTokenReader, TokenType
from geojson_converter.stream.writer import JsonTokenWriter

_DEFAULT_CONVERTER: FeatureConverter | None = None


def _get_converter(converter: FeatureConverter | None) -> FeatureConverter:
    global _DEFAULT_CONVERTER
    if converter is not None:
        return converter
    if _DEFAULT_CONVERTER is None:
        _DEFAULT_CONVERTER = FeatureConverter()
    return _DEFAULT_CONVERTER


def dumps(
    feature: Feature | None,
    options: SerializerOptions | None = None,
    converter: FeatureConverter | None = None,
) -> str:
    """Serialize ``feature`` to a compact GeoJSON string."""
    writer = JsonTokenWriter()
    _get_converter(converter).write(writer, feature, options)
    return writer.getvalue()


def dump(
    feature: Feature | None,
    fp: TextIO,
    options: SerializerOptions | None = None,
    converter: FeatureConverter | None = None,
) -> None:
    """Serialize ``feature`` to the text stream ``fp``."""
    writer = JsonTokenWriter(fp)
    _get_converter(converter).write(writer, feature, options)


def loads(
    data: str | bytes,
    options: SerializerOptions | None = None,
    converter: FeatureConverter | None = None,
) -> Feature | None:
    """Deserialize one Feature (or null) from a string or bytes."""
    return _read_document(JsonTokenReader(data), options, converter)


def load(
    fp: Any,
    options: SerializerOptions | None = None,
    converter: FeatureConverter | None = None,
) -> Feature | None:
    """Deserialize one Feature (or null) from a text or binary file object."""
    return _read_document(JsonTokenReader(fp), options, converter)


def _read_document(
    reader: JsonTokenReader,
    options: SerializerOptions | None,
    converter: FeatureConverter | None,
) -> Feature | None:
    if not reader.read():
        raise GeoJsonFormatError("Unexpected end of stream: empty document")

    feature = _get_converter(converter).read(reader, options)

    if reader.token_type is not TokenType.NONE:
        raise GeoJsonFormatError(
            f"Unexpected {reader.token_type.name} after the Feature",
            reader.token_type,
        )
    return feature
