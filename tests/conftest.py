"""Shared test fixtures for the geojson_converter test suite.

WHY: Several test modules need the same sample Features, a fixed UUID,
and the bundled Feature schema. Centralizing them here keeps every module
working from identical inputs.

HOW: Pytest fixtures build fresh Feature objects per test (the model is
mutable) and load geojson_feature_schema.json for jsonschema checks.

RULES:
- Sample UUID is fixed for reproducibility.
- example_feature_json is the worked example of a minimal Feature.
- Fixtures return new objects on every call; tests may mutate them.
"""

import json
import uuid
from pathlib import Path

import pytest
from shapely.geometry import LineString, Point

from geojson_converter.core.model import AttributesTable, Envelope, Feature

SCHEMA_PATH = Path(__file__).resolve().parent / "geojson_feature_schema.json"

SAMPLE_UUID = uuid.UUID("3f2b8c1e-9a4d-4e6f-8b7a-0c1d2e3f4a5b")


@pytest.fixture
def sample_uuid():
    return SAMPLE_UUID


@pytest.fixture
def point_feature():
    """Point feature with an int32 id and one attribute, no explicit bbox."""
    return Feature(
        geometry=Point(1, 2),
        attributes=AttributesTable({"id": 42, "name": "x"}),
    )


@pytest.fixture
def line_feature():
    """LineString feature with a UUID id and an explicit bbox."""
    return Feature(
        geometry=LineString([(0, 0), (4, 3)]),
        attributes=AttributesTable({"id": SAMPLE_UUID, "lanes": 2, "oneway": True}),
        bounding_box=Envelope(-1.0, -1.0, 5.0, 5.0),
    )


@pytest.fixture
def empty_feature():
    """Feature with no geometry, no attributes and no bbox."""
    return Feature()


@pytest.fixture
def example_feature_json():
    return '{"type":"Feature","id":42,"geometry":null,"properties":{"name":"x"}}'


@pytest.fixture
def feature_schema():
    with open(SCHEMA_PATH) as f:
        return json.load(f)
