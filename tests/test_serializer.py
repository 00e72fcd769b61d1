"""End-to-end tests for the dumps/loads helpers.

WHY: dumps/loads are what most callers touch. They must round-trip the
identifier types, produce schema-valid GeoJSON, and reject documents
that hold more than one Feature.

HOW: Round-trips through strings and files, plus jsonschema validation
of written output against tests/geojson_feature_schema.json.
"""

import dataclasses
import io
import json
import uuid

import jsonschema
import pytest
from shapely.geometry import Point, Polygon

import geojson_converter
from geojson_converter.config import SerializerOptions
from geojson_converter.converters.feature import FeatureConverter
from geojson_converter.core.model import AttributesTable, Feature
from geojson_converter.serializer import dump, dumps, load, loads
from geojson_converter.stream.reader import GeoJsonFormatError

WITH_NULLS = SerializerOptions(ignore_null_values=False, escape_identifiers=True)
WITHOUT_NULLS = SerializerOptions(ignore_null_values=True, escape_identifiers=True)
BARE_IDS = SerializerOptions(ignore_null_values=False, escape_identifiers=False)


class TestRoundTrip:
    """Write then read gives back an equivalent Feature."""

    @pytest.mark.parametrize("options", [WITH_NULLS, BARE_IDS])
    def test_int32_id(self, point_feature, options):
        result = loads(dumps(point_feature, options), options)
        assert result.attributes["id"] == 42
        assert type(result.attributes["id"]) is int

    @pytest.mark.parametrize("options", [WITH_NULLS, BARE_IDS])
    def test_uuid_id(self, line_feature, sample_uuid, options):
        result = loads(dumps(line_feature, options), options)
        assert isinstance(result.attributes["id"], uuid.UUID)
        assert result.attributes["id"] == sample_uuid

    def test_string_id(self):
        feature = Feature(attributes=AttributesTable({"id": "road-1"}))
        assert loads(dumps(feature, WITH_NULLS), WITH_NULLS).attributes["id"] == "road-1"

    def test_full_feature(self, line_feature):
        result = loads(dumps(line_feature, WITH_NULLS), WITH_NULLS)
        assert result.attributes == line_feature.attributes
        assert result.bounding_box == line_feature.bounding_box
        assert result.geometry.equals(line_feature.geometry)

    def test_derived_bbox_becomes_explicit_on_read(self, point_feature):
        result = loads(dumps(point_feature, WITH_NULLS), WITH_NULLS)
        assert point_feature.bounding_box is None
        assert result.bounding_box is not None
        assert result.bounding_box.as_tuple() == point_feature.geometry.bounds

    def test_null_feature(self):
        assert dumps(None) == "null"
        assert loads("null") is None

    def test_custom_converter(self, point_feature):
        converter = FeatureConverter(id_property_name="fid")
        text = dumps(point_feature, WITH_NULLS, converter=converter)
        assert '"fid"' in text
        assert loads(text, WITH_NULLS, converter=converter).attributes["id"] == 42


class TestFiles:
    def test_dump_and_load_text_file(self, tmp_path, point_feature):
        path = tmp_path / "feature.geojson"
        with open(path, "w", encoding="utf-8") as f:
            dump(point_feature, f, WITH_NULLS)
        with open(path, encoding="utf-8") as f:
            result = load(f, WITH_NULLS)
        assert result.attributes == point_feature.attributes

    def test_load_binary_file(self, example_feature_json):
        result = load(io.BytesIO(example_feature_json.encode("utf-8")))
        assert result.attributes == {"id": 42, "name": "x"}

    def test_loads_bytes(self, example_feature_json):
        assert loads(example_feature_json.encode("utf-8")).attributes["name"] == "x"


class TestDocumentErrors:
    @pytest.mark.parametrize("text", ["", "   ", '{"type":"Feature"} {}', 'null 1', '{"type":"Feature"'])
    def test_rejected_documents(self, text):
        with pytest.raises(GeoJsonFormatError):
            loads(text)


class TestSchemaValidation:
    """Written Features validate against the bundled GeoJSON Feature schema."""

    @pytest.mark.parametrize("options", [WITH_NULLS, WITHOUT_NULLS, BARE_IDS])
    def test_sample_features(self, feature_schema, point_feature, line_feature, empty_feature, options):
        for feature in (point_feature, line_feature, empty_feature):
            jsonschema.validate(instance=json.loads(dumps(feature, options)), schema=feature_schema)

    def test_polygon_with_nested_properties(self, feature_schema):
        feature = Feature(
            geometry=Polygon([(0, 0), (3, 0), (3, 3), (0, 0)]),
            attributes=AttributesTable({
                "id": 2 ** 40,
                "owner": AttributesTable({"id": "p-1", "name": "Park Board"}),
                "tags": ["green", "public"],
            }),
        )
        data = json.loads(dumps(feature, WITH_NULLS))
        jsonschema.validate(instance=data, schema=feature_schema)
        assert data["properties"]["owner"] == {"id": "p-1", "name": "Park Board"}

    def test_schema_rejects_id_in_properties(self, feature_schema):
        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate(
                instance={"type": "Feature", "properties": {"id": 1}},
                schema=feature_schema,
            )


class TestPackageSurface:
    def test_top_level_exports(self):
        feature = geojson_converter.Feature(geometry=Point(0, 0))
        text = geojson_converter.dumps(feature, WITHOUT_NULLS)
        assert geojson_converter.loads(text, WITHOUT_NULLS).geometry.equals(Point(0, 0))

    def test_options_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            SerializerOptions().ignore_null_values = True
