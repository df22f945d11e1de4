from typing import Annotated, Optional

import pytest

from api_schema_synth.core.errors import UnsupportedTypeError
from api_schema_synth.generator.parameters import parameters_for_model
from api_schema_synth.schema.walker import SchemaWalker
from sample_models import Address, Color, OmitEmpty, SearchQuery


@pytest.fixture
def walker():
    return SchemaWalker()


def _by_name(walker, model):
    return {p.name: p.to_dict() for p in parameters_for_model(walker, model)}


class TestLocations:
    def test_one_parameter_per_location_tag(self, walker):
        params = parameters_for_model(walker, SearchQuery)
        assert [p.name for p in params] == ["q", "page", "id", "X-Token", "session", "both", "color"]
        assert [p.in_ for p in params] == ["query", "query", "path", "header", "cookie", "query", "query"]

    def test_query_wins_over_header(self, walker):
        params = _by_name(walker, SearchQuery)
        assert params["both"]["in"] == "query"
        assert "X-Both" not in params

    def test_body_fields_are_not_parameters(self, walker):
        assert "body_only" not in _by_name(walker, SearchQuery)

    def test_instance_is_accepted(self, walker):
        assert len(parameters_for_model(walker, SearchQuery())) == 7


class TestParameterShape:
    def test_required_and_description(self, walker):
        assert _by_name(walker, SearchQuery)["q"] == {
            "name": "q",
            "in": "query",
            "required": True,
            "description": "Search text",
            "schema": {"type": "string"},
        }

    def test_default_goes_on_schema(self, walker):
        assert _by_name(walker, SearchQuery)["page"] == {
            "name": "page",
            "in": "query",
            "required": False,
            "schema": {"type": "integer", "default": 1},
        }

    def test_path_parameters_are_required(self, walker):
        param = _by_name(walker, SearchQuery)["id"]
        assert param["required"] is True
        assert param["schema"] == {"type": "integer"}

    def test_enum_parameter_references_component(self, walker):
        param = _by_name(walker, SearchQuery)["color"]
        assert param["schema"] == {"$ref": "#/components/schemas/Color"}
        assert walker.registry.to_dict()["Color"]["enum"] == ["red", "green"]
        assert Color in walker.coercions


class TestNoParameters:
    def test_none_model(self, walker):
        assert parameters_for_model(walker, None) == []

    def test_model_without_location_tags(self, walker):
        assert parameters_for_model(walker, Address) == []

    def test_non_model_rejected(self, walker):
        with pytest.raises(UnsupportedTypeError):
            parameters_for_model(walker, int)


class TestWrappedModels:
    def test_optional_model(self, walker):
        assert [p.name for p in parameters_for_model(walker, Optional[SearchQuery])] == [
            p.name for p in parameters_for_model(SchemaWalker(), SearchQuery)
        ]

    def test_annotated_model(self, walker):
        assert len(parameters_for_model(walker, Annotated[SearchQuery, "query"])) == 7

    def test_empty_tag_name_uses_field_name(self, walker):
        params = parameters_for_model(walker, OmitEmpty)
        assert [(p.name, p.in_) for p in params] == [("page", "query")]
