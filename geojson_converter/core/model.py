"""Domain model for GeoJSON Features.

WHY: Converters need one in-memory shape to read into and write from,
independent of the wire order of members. The model keeps the
identifier inside the attribute table so callers see a single
"attributes" view, and keeps the bounding box separate so an explicit
bbox is never confused with one derived from the geometry.

HOW: Three types:
  Envelope        : axis-aligned rectangle (min_x, min_y, max_x, max_y)
  AttributesTable : ordered mutable mapping of attribute name to value
  Feature         : geometry + attributes + bounding box

RULES:
- Attribute values are JSON-compatible: None, bool, int, float, str,
  uuid.UUID, lists, and nested AttributesTable instances
- The identifier is stored under the "id" key
- Feature.bounding_box is only set when the producer supplied one; the
  derived envelope is never cached back onto the Feature
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping

from shapely.geometry.base import BaseGeometry

from geojson_converter.config import ID_ATTRIBUTE


@dataclass(frozen=True)
class Envelope:
    """Axis-aligned bounding rectangle in the geometry's coordinate space."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_bounds(cls, bounds: Iterable[float]) -> Envelope:
        """Build from a shapely-style ``(minx, miny, maxx, maxy)`` tuple."""
        min_x, min_y, max_x, max_y = bounds
        return cls(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)

    @classmethod
    def from_corners(cls, x1: float, y1: float, x2: float, y2: float) -> Envelope:
        """Build from two opposite corners in any order."""
        return cls(
            min_x=min(x1, x2),
            min_y=min(y1, y2),
            max_x=max(x1, x2),
            max_y=max(y1, y2),
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def expand_to_include(self, other: Envelope) -> Envelope:
        """Smallest envelope covering both this one and ``other``."""
        return Envelope(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
        )


class AttributesTable(MutableMapping):
    """Ordered attribute map with the identifier under the "id" key.

    WHY: GeoJSON properties are free-form, but the identifier is special:
    it is read from and written to a top-level member. The table exposes
    it through get_id()/has_id() so converters never spell out the key.

    HOW: A plain dict underneath (insertion order preserved). Behaves as a
    regular MutableMapping and compares equal to any mapping with the same
    items.

    RULES:
    - add() refuses to overwrite an existing attribute (ValueError)
    - Item access on a missing name raises KeyError
    - Overwriting an existing name keeps its original position
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        self._attributes: dict[str, Any] = {}
        if attributes is not None:
            self.update(attributes)

    def __getitem__(self, name: str) -> Any:
        return self._attributes[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._attributes[name] = value

    def __delitem__(self, name: str) -> None:
        del self._attributes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"

    def add(self, name: str, value: Any) -> None:
        if name in self._attributes:
            raise ValueError(f"Attribute {name!r} already exists")
        self._attributes[name] = value

    def exists(self, name: str) -> bool:
        return name in self._attributes

    def delete_attribute(self, name: str) -> None:
        del self[name]

    def get_names(self) -> list[str]:
        return list(self._attributes)

    def get_values(self) -> list[Any]:
        return list(self._attributes.values())

    def get_optional_value(self, name: str) -> Any:
        """Value for ``name``, or None when the attribute is missing."""
        return self._attributes.get(name)

    def get_id(self) -> Any:
        return self.get_optional_value(ID_ATTRIBUTE)

    def has_id(self) -> bool:
        """True when an identifier is present (key exists with a non-None value)."""
        return self.get_id() is not None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict copy, nested tables included."""
        return {name: _plain(value) for name, value in self._attributes.items()}


def _plain(value: Any) -> Any:
    if isinstance(value, AttributesTable):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


@dataclass
class Feature:
    """A geometry with attributes and an optional explicit bounding box.

    RULES:
    - geometry: shapely geometry or None
    - attributes: AttributesTable or None; holds the identifier under "id"
    - bounding_box: explicit Envelope or None (never derived here)
    """

    geometry: BaseGeometry | None = None
    attributes: AttributesTable | None = None
    bounding_box: Envelope | None = None

    @property
    def id(self) -> Any:
        """The identifier value, or None when the Feature has none."""
        if self.attributes is None:
            return None
        return self.attributes.get_id()
