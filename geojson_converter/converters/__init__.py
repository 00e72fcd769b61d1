"""Converter registry: pluggable token-stream converters.

WHY: Callers that handle several GeoJSON value kinds need one lookup to
find the right converter, either by name or by the Python type they
hold.

HOW: CONVERTERS maps snake_case keys to converter *classes*. Callers
instantiate as needed: ``converter = CONVERTERS["feature"]()``.
find_converter() returns a fresh instance for a value type.

RULES:
- Keys are snake_case identifiers
- Values are BaseConverter subclasses (not instances)
- Every converter listed here must be constructible without arguments
"""

from __future__ import annotations

from geojson_converter.converters.attributes import AttributesConverter
from geojson_converter.converters.base import BaseConverter
from geojson_converter.converters.feature import FeatureConverter
from geojson_converter.converters.geometry import GeometryConverter

CONVERTERS: dict[str, type[BaseConverter]] = {
    "feature": FeatureConverter,
    "geometry": GeometryConverter,
    "attributes": AttributesConverter,
}


def find_converter(value_type: type) -> BaseConverter | None:
    """Instantiate the first registered converter that handles ``value_type``."""
    for converter_cls in CONVERTERS.values():
        converter = converter_cls()
        if converter.can_convert(value_type):
            return converter
    return None
