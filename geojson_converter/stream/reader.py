"""Forward-only JSON token reader backed by ijson.

WHY: The Feature converter dispatches on member names and needs to see
each value's token shape (number vs string) before deciding what it is.
It also has to step over members it does not understand without
building them. A pull cursor over lexical tokens gives both, and never
holds more than the current token in memory.

HOW: ijson.basic_parse turns the byte source into (event, value) pairs.
JsonTokenReader keeps the current pair as ``token_type``/``value`` and
advances with ``read()``. ``skip()`` steps over one complete value by
counting container depth; ``read_value()`` materialises one complete
value as Python data for collaborators that want a tree.

RULES:
- A new reader is unpositioned (TokenType.NONE); call read() once first
- Every consuming method leaves the cursor on the token after the value
- ijson errors and premature end of input raise GeoJsonFormatError
- Text sources are encoded to UTF-8 on the fly (ijson reads bytes)
"""

from __future__ import annotations

import enum
import io
from typing import Any, Callable, MutableMapping

import ijson


class GeoJsonFormatError(ValueError):
    """Raised when the token stream does not match the expected grammar.

    WHY: Callers need one exception type for "this is not a valid
    Feature", whether the cause is a lexer error, a bad ``type`` literal,
    an unparseable identifier, or a truncated stream.

    RULES:
    - Fatal: the read is aborted and no partial result is returned
    - token_type is the offending token when known, else None
    """

    def __init__(self, message: str, token_type: TokenType | None = None) -> None:
        self.token_type = token_type
        super().__init__(message)


class TokenType(enum.Enum):
    """Lexical JSON token kinds. Values match ijson event names."""

    NONE = "none"
    START_OBJECT = "start_map"
    END_OBJECT = "end_map"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"
    PROPERTY_NAME = "map_key"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


_EVENT_TYPES: dict[str, TokenType] = {t.value: t for t in TokenType}

_OPENING = frozenset({TokenType.START_OBJECT, TokenType.START_ARRAY})
_CLOSING = frozenset({TokenType.END_OBJECT, TokenType.END_ARRAY})
_NOT_A_VALUE = _CLOSING | {TokenType.NONE, TokenType.PROPERTY_NAME}


class _Utf8Source:
    """Byte view over a text stream."""

    def __init__(self, text_stream: Any) -> None:
        self._text_stream = text_stream

    def read(self, size: int = -1) -> bytes:
        return self._text_stream.read(size).encode("utf-8")


def _as_byte_source(source: Any) -> Any:
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source.read(0), str):
        return _Utf8Source(source)
    return source


class JsonTokenReader:
    """Pull cursor over the lexical tokens of one JSON document.

    WHY: Converters are written against this cursor rather than ijson so
    that every converter shares the same positioning rules and the same
    error translation.

    HOW: Wraps the ijson basic_parse generator. ``depth`` counts the
    containers open after the current token.

    RULES:
    - source may be str, bytes, or a binary/text file-like object
    - read() returns False once the document is exhausted
    - Trailing content after the top-level value raises on the read()
      that would move past it
    """

    def __init__(self, source: Any) -> None:
        self._events = ijson.basic_parse(_as_byte_source(source), use_float=True)
        self.token_type = TokenType.NONE
        self.value: Any = None
        self.depth = 0

    def read(self) -> bool:
        """Advance to the next token. Returns False at end of stream."""
        try:
            event, value = next(self._events)
        except StopIteration:
            self.token_type = TokenType.NONE
            self.value = None
            return False
        except ijson.JSONError as exc:
            raise GeoJsonFormatError(f"Malformed JSON: {exc}") from exc

        self.token_type = _EVENT_TYPES[event]
        self.value = value
        if self.token_type in _OPENING:
            self.depth += 1
        elif self.token_type in _CLOSING:
            self.depth -= 1
        return True

    def read_token(self, expected: TokenType) -> None:
        """Require the current token to be ``expected``, then advance past it."""
        if self.token_type is not expected:
            raise GeoJsonFormatError(
                f"Expected {expected.name} but found {self.token_type.name}",
                self.token_type,
            )
        self.read()

    def skip(self) -> None:
        """Step over one complete value.

        WHY: Unknown members must be dropped without disturbing the
        position of their siblings.

        HOW: When positioned on a property name, moves to its value first.
        Scalars consume exactly one token; objects and arrays consume
        tokens until the matching close, tracking nesting.

        RULES:
        - Afterwards the cursor is on the next property name, the
          enclosing container's close, or end of stream
        - Raises GeoJsonFormatError if the stream ends inside the value
        """
        if self.token_type is TokenType.PROPERTY_NAME:
            self.read()
        self._require_value()

        nesting = 0
        while True:
            if self.token_type is TokenType.NONE:
                raise GeoJsonFormatError("Unexpected end of stream while skipping a value")
            if self.token_type in _OPENING:
                nesting += 1
            elif self.token_type in _CLOSING:
                nesting -= 1
            self.read()
            if nesting == 0:
                return

    def read_value(
        self,
        object_factory: Callable[[], MutableMapping[str, Any]] = dict,
    ) -> Any:
        """Materialise the current value as Python data and advance past it.

        Objects are built with ``object_factory`` (dict by default),
        arrays become lists, scalars are returned as-is.
        """
        self._require_value()

        if self.token_type is TokenType.START_OBJECT:
            result = object_factory()
            self.read()
            while self.token_type is TokenType.PROPERTY_NAME:
                name = self.value
                self.read()
                result[name] = self.read_value(object_factory)
            self.read_token(TokenType.END_OBJECT)
            return result

        if self.token_type is TokenType.START_ARRAY:
            items: list[Any] = []
            self.read()
            while self.token_type is not TokenType.END_ARRAY:
                items.append(self.read_value(object_factory))
            self.read()
            return items

        value = self.value
        self.read()
        return value

    def _require_value(self) -> None:
        if self.token_type in _NOT_A_VALUE:
            raise GeoJsonFormatError(
                f"Expected a value but found {self.token_type.name}",
                self.token_type,
            )
