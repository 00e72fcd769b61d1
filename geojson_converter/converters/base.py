"""Abstract base converter.

WHY: The feature converter composes a geometry converter and an
attributes converter, and callers may swap either for their own. A
common base keeps read/write signatures aligned so any converter can be
dropped in.

HOW: BaseConverter is an ABC with a ``name`` property and ``read`` /
``write`` methods over the token stream. ``target_type`` drives
``can_convert``.

RULES:
- Subclasses MUST implement ``name``, ``read`` and ``write``
- ``write(writer, None, options)`` writes a JSON null
- ``read`` on a null token advances past it and returns None
- Converters hold configuration only; per-call state lives in the
  reader/writer

To add a converter:
1. Create a new module in converters/
2. Subclass BaseConverter and set ``target_type``
3. Register it in CONVERTERS in converters/__init__.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from geojson_converter.config import SerializerOptions
from geojson_converter.stream.reader import JsonTokenReader
from geojson_converter.stream.writer import JsonTokenWriter


class BaseConverter(ABC):
    """Abstract base for all token-stream converters."""

    target_type: ClassVar[type] = object

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable converter name, e.g. 'GeoJSON Feature'."""

    def can_convert(self, value_type: type) -> bool:
        """True when values of ``value_type`` are handled by this converter."""
        return isinstance(value_type, type) and issubclass(value_type, self.target_type)

    @abstractmethod
    def write(self, writer: JsonTokenWriter, value: Any, options: SerializerOptions) -> None:
        """Write ``value`` (or null) as one JSON value."""

    @abstractmethod
    def read(self, reader: JsonTokenReader, options: SerializerOptions) -> Any:
        """Read one JSON value starting at the reader's current token."""
