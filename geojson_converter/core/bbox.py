"""Bounding-box fallback and the shared null-emission rule."""

from __future__ import annotations

import logging
from typing import Any

from shapely.geometry.base import BaseGeometry

from geojson_converter.config import SerializerOptions
from geojson_converter.core.model import Envelope, Feature

logger = logging.getLogger(__name__)


def envelope_of(geometry: BaseGeometry | None) -> Envelope | None:
    """Enclosing envelope of ``geometry``; None for a missing or empty geometry."""
    if geometry is None or geometry.is_empty:
        return None
    return Envelope.from_bounds(geometry.bounds)


def effective_bounding_box(feature: Feature) -> Envelope | None:
    """Bounding box to write for ``feature``.

    The explicit bounding box wins; otherwise the geometry's envelope is
    derived. The derived value is returned only, the Feature is untouched.
    """
    if feature.bounding_box is not None:
        return feature.bounding_box

    envelope = envelope_of(feature.geometry)
    if envelope is not None:
        logger.debug("Derived bbox %s from %s geometry", envelope.as_tuple(), feature.geometry.geom_type)
    return envelope


def should_emit(value: Any, options: SerializerOptions) -> bool:
    """Whether an optional member is written: present, or nulls requested."""
    return value is not None or not options.ignore_null_values
