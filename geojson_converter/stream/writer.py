"""Compact JSON token writer.

WHY: The Feature converter emits members in a fixed order and delegates
sub-documents to collaborators mid-object. A push-style writer lets each
converter append its tokens without knowing what came before it.

HOW: Tokens are written straight to a text stream. A stack records, per
open container, whether a separating comma is due. Scalars are encoded
with the standard json module so escaping matches ``json.dumps``.

RULES:
- Output is compact: "," and ":" with no whitespace
- NaN and infinity are rejected (ValueError), they are not valid JSON
- write_value handles None, bool, int, float, str, uuid.UUID, mappings
  and lists/tuples; anything else raises TypeError
"""

from __future__ import annotations

import io
import json
import uuid
from collections.abc import Mapping
from typing import Any, TextIO


class JsonTokenWriter:
    """Push sink that writes one JSON document to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else io.StringIO()
        # One entry per open container, plus the document root
        self._containers: list[str] = [""]
        self._needs_comma: list[bool] = [False]
        self._after_property_name = False

    def getvalue(self) -> str:
        """Return everything written so far (only for the default StringIO sink)."""
        return self._stream.getvalue()

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def write_start_object(self) -> None:
        self._before_value()
        self._stream.write("{")
        self._containers.append("{")
        self._needs_comma.append(False)

    def write_end_object(self) -> None:
        self._close("{", "}")

    def write_start_array(self) -> None:
        self._before_value()
        self._stream.write("[")
        self._containers.append("[")
        self._needs_comma.append(False)

    def write_end_array(self) -> None:
        self._close("[", "]")

    def write_property_name(self, name: str) -> None:
        if not isinstance(name, str):
            raise TypeError(f"Property names must be str, got {type(name).__name__}")
        if self._containers[-1] != "{" or self._after_property_name:
            raise ValueError(f"Cannot write property name {name!r} here")
        if self._needs_comma[-1]:
            self._stream.write(",")
        self._needs_comma[-1] = True
        self._stream.write(json.dumps(name, ensure_ascii=False))
        self._stream.write(":")
        self._after_property_name = True

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def write_string(self, value: str) -> None:
        self._before_value()
        self._stream.write(json.dumps(value, ensure_ascii=False))

    def write_number(self, value: int | float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Expected a number, got {type(value).__name__}")
        self._before_value()
        self._stream.write(json.dumps(value, allow_nan=False))

    def write_boolean(self, value: bool) -> None:
        self._before_value()
        self._stream.write("true" if value else "false")

    def write_null(self) -> None:
        self._before_value()
        self._stream.write("null")

    def write_value(self, value: Any) -> None:
        """Write arbitrary JSON-compatible Python data."""
        if value is None:
            self.write_null()
        elif isinstance(value, bool):
            self.write_boolean(value)
        elif isinstance(value, (int, float)):
            self.write_number(value)
        elif isinstance(value, str):
            self.write_string(value)
        elif isinstance(value, uuid.UUID):
            self.write_string(str(value))
        elif isinstance(value, Mapping):
            self.write_start_object()
            for name, item in value.items():
                self.write_property_name(name)
                self.write_value(item)
            self.write_end_object()
        elif isinstance(value, (list, tuple)):
            self.write_start_array()
            for item in value:
                self.write_value(item)
            self.write_end_array()
        else:
            raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _before_value(self) -> None:
        if self._after_property_name:
            self._after_property_name = False
            return
        if self._containers[-1] == "{":
            raise ValueError("Object members need a property name before the value")
        if self._needs_comma[-1]:
            self._stream.write(",")
        self._needs_comma[-1] = True

    def _close(self, opening: str, closing: str) -> None:
        if self._containers[-1] != opening or self._after_property_name:
            raise ValueError(f"Unbalanced {closing!r}")
        self._containers.pop()
        self._needs_comma.pop()
        self._stream.write(closing)
