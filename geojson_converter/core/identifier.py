"""Feature identifier resolution from a single JSON token.

WHY: GeoJSON allows a Feature id to be a number or a string, and
producers use both: database serials, 64-bit snowflakes, UUIDs, slugs.
The type has to be inferred from the token shape alone, because once the
value lands in the attribute table the wire shape is gone.

HOW: resolve_identifier() applies a closed, ordered policy to one scalar
token and returns a FeatureId, a tagged union of INT32, INT64, UUID and
STRING. escape_identifier() is the write-side counterpart used when ids
are emitted as escaped strings.

RULES:
- Number → INT32 if it fits in 32 bits, else INT64 if it fits in 64 bits,
  else GeoJsonFormatError; non-integral numbers are a format error
- String → UUID if the content is a canonical 8-4-4-4-12 hex UUID,
  else STRING with the raw content
- Boolean, null, object, array → GeoJsonFormatError
- With unescape=True a string whose content is exactly what
  escape_identifier() writes for a string or a 64-bit integer is decoded
  first and the decoded scalar goes through the same policy; any other
  content (padded, "-0", "007") stays a raw string
- Only int, str and uuid.UUID ids can be escaped; anything else is a
  TypeError
"""

from __future__ import annotations

import enum
import json
import re
import uuid
from dataclasses import dataclass
from typing import Any, Union

from geojson_converter.stream.reader import GeoJsonFormatError, TokenType

_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


class IdKind(enum.Enum):
    INT32 = "int32"
    INT64 = "int64"
    UUID = "uuid"
    STRING = "string"


@dataclass(frozen=True)
class FeatureId:
    """A resolved identifier: the inferred kind plus the typed value.

    RULES:
    - INT32 / INT64 → value is int
    - UUID → value is uuid.UUID
    - STRING → value is str
    """

    kind: IdKind
    value: Union[int, uuid.UUID, str]


def resolve_identifier(token_type: TokenType, value: Any, *, unescape: bool = False) -> FeatureId:
    """Infer the identifier type from one scalar token.

    Args:
        token_type: Shape of the current token.
        value: Token value as produced by the reader.
        unescape: Decode escaped string ids (see module RULES).

    Returns:
        FeatureId carrying the inferred kind and typed value.

    Raises:
        GeoJsonFormatError: The token cannot be an identifier.
    """
    if token_type is TokenType.NUMBER:
        return _resolve_number(value)

    if token_type is TokenType.STRING:
        if unescape:
            decoded = _decode_escaped(value)
            if isinstance(decoded, int):
                return _resolve_number(decoded)
            value = decoded
        return _resolve_string(value)

    raise GeoJsonFormatError(
        f"Feature id must be a number or a string, found {token_type.name}",
        token_type,
    )


def escape_identifier(value: Any) -> str:
    """JSON serialization of an identifier value, to be written as a string."""
    if isinstance(value, bool) or not isinstance(value, (int, str, uuid.UUID)):
        raise TypeError(f"Feature id of type {type(value).__name__} cannot be escaped")
    if isinstance(value, uuid.UUID):
        value = str(value)
    return json.dumps(value, ensure_ascii=False)


def _resolve_number(value: Any) -> FeatureId:
    if isinstance(value, int) and not isinstance(value, bool):
        if _INT32_MIN <= value <= _INT32_MAX:
            return FeatureId(IdKind.INT32, value)
        if _INT64_MIN <= value <= _INT64_MAX:
            return FeatureId(IdKind.INT64, value)
    raise GeoJsonFormatError(f"Feature id {value!r} is not a 32- or 64-bit integer", TokenType.NUMBER)


def _resolve_string(value: str) -> FeatureId:
    if _UUID_RE.match(value):
        return FeatureId(IdKind.UUID, uuid.UUID(value))
    return FeatureId(IdKind.STRING, value)


def _decode_escaped(content: str) -> Union[int, str]:
    try:
        decoded = json.loads(content)
    except ValueError:
        return content
    if isinstance(decoded, bool) or not isinstance(decoded, (int, str)):
        return content
    if isinstance(decoded, int) and not _INT64_MIN <= decoded <= _INT64_MAX:
        return content
    # Only the exact form the writer emits counts as escaped
    if escape_identifier(decoded) != content:
        return content
    return decoded
