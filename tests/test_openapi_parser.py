from pathlib import Path

import pytest

from oas_provider_gen.errors import SpecLoadError
from oas_provider_gen.parser.detect import detect_format
from oas_provider_gen.parser.openapi import load_openapi, parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_detect_openapi3(self):
        assert detect_format({"openapi": "3.0.3", "paths": {}}) == "openapi3"

    def test_detect_swagger2(self):
        assert detect_format({"swagger": "2.0"}) == "swagger2"

    def test_detect_unknown(self):
        assert detect_format({"info": {}}) == "unknown"
        assert detect_format(["not", "a", "mapping"]) == "unknown"


class TestLoadOpenApi:
    def test_load_restlike_paths(self):
        doc = load_openapi(FIXTURES / "restlike.yaml")
        assert set(doc.paths) == {
            "/v3/boards",
            "/v3/boards/{board_id}",
            "/v3/health",
            "/v3/images",
            "/v3/images/{image_id}",
        }

    def test_operations_keyed_by_upper_method(self):
        doc = load_openapi(FIXTURES / "restlike.yaml")
        item = doc.get_path("/v3/boards/{board_id}")
        assert set(item.operations()) == {"GET", "PUT", "DELETE"}
        assert item.get_operation("put") is item.put
        assert item.get_operation("connect") is None

    def test_status_codes_become_strings(self):
        doc = load_openapi(FIXTURES / "restlike.yaml")
        post = doc.get_path("/v3/boards").post
        assert "201" in post.responses
        assert post.response(201) is post.responses["201"]
        assert post.response(200) is None

    def test_path_level_parameters_are_inherited(self):
        doc = load_openapi(FIXTURES / "restlike.yaml")
        item = doc.get_path("/v3/boards/{board_id}")
        for operation in (item.get, item.put, item.delete):
            params = operation.path_parameters()
            assert [p.name for p in params] == ["board_id"]
            assert params[0].schema_.type == "string"

    def test_operation_parameter_overrides_path_level(self):
        doc = parse_openapi({
            "openapi": "3.0.0",
            "paths": {
                "/things/{id}": {
                    "parameters": [{"name": "id", "in": "path", "schema": {"type": "string"}}],
                    "get": {
                        "parameters": [{"name": "id", "in": "path", "schema": {"type": "integer"}}],
                        "responses": {},
                    },
                },
            },
        })
        params = doc.get_path("/things/{id}").get.path_parameters()
        assert len(params) == 1
        assert params[0].schema_.type == "integer"

    def test_query_parameters_are_not_path_parameters(self):
        doc = load_openapi(FIXTURES / "restlike.yaml")
        get_boards = doc.get_path("/v3/boards").get
        assert get_boards.parameters[0].location == "query"
        assert get_boards.path_parameters() == []

    def test_nested_schema_models(self):
        doc = load_openapi(FIXTURES / "restlike.yaml")
        body = doc.get_path("/v3/boards").post.request_body.content["application/json"].schema_
        assert body.required == ["name"]
        assert body.properties["permissions"].properties["can_edit"].type == "boolean"

    def test_type_list_collapses_to_non_null(self):
        doc = parse_openapi({
            "openapi": "3.1.0",
            "paths": {
                "/things": {
                    "post": {
                        "requestBody": {"content": {"application/json": {"schema": {
                            "type": "object",
                            "properties": {"note": {"type": ["string", "null"]}},
                        }}}},
                        "responses": {},
                    },
                },
            },
        })
        schema = doc.get_path("/things").post.request_body.content["application/json"].schema_
        assert schema.properties["note"].type == "string"

    def test_extension_keys_are_not_paths(self):
        doc = parse_openapi({"openapi": "3.0.0", "paths": {"x-internal": True, "/a": {}}})
        assert list(doc.paths) == ["/a"]

    def test_yes_no_on_off_property_names(self, tmp_path):
        f = tmp_path / "switches.yaml"
        f.write_text(
            "openapi: 3.0.0\n"
            "paths:\n"
            "  /switches/{id}:\n"
            "    get:\n"
            "      responses:\n"
            "        200:\n"
            "          description: A switch\n"
            "          content:\n"
            "            application/json:\n"
            "              schema:\n"
            "                type: object\n"
            "                required: [on, no]\n"
            "                properties:\n"
            "                  on:\n"
            "                    type: boolean\n"
            "                  off:\n"
            "                    type: boolean\n"
            "                  no:\n"
            "                    type: integer\n"
            "                  enabled:\n"
            "                    type: boolean\n"
            "                    default: true\n",
            encoding="utf-8",
        )
        doc = load_openapi(f)
        schema = doc.get_path("/switches/{id}").get.response(200).content["application/json"].schema_
        assert list(schema.properties) == ["on", "off", "no", "enabled"]
        assert schema.required == ["on", "no"]
        assert schema.properties["enabled"].model_extra["default"] is True

    def test_non_string_property_names_from_memory(self):
        doc = parse_openapi({"openapi": "3.0.0", "paths": {"/a": {"post": {
            "requestBody": {"content": {"application/json": {"schema": {
                "type": "object",
                "required": [404],
                "properties": {404: {"type": "string"}},
            }}}},
        }}}})
        schema = doc.get_path("/a").post.request_body.content["application/json"].schema_
        assert list(schema.properties) == ["404"]
        assert schema.required == ["404"]


class TestLoadErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(SpecLoadError) as exc:
            load_openapi(tmp_path / "nope.yaml")
        assert exc.value.path == tmp_path / "nope.yaml"

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "broken.yaml"
        f.write_text("openapi: 3.0.0\npaths: [unclosed", encoding="utf-8")
        with pytest.raises(SpecLoadError):
            load_openapi(f)

    def test_swagger2_is_rejected(self):
        with pytest.raises(SpecLoadError, match="Swagger 2.0"):
            load_openapi(FIXTURES / "swagger2.yaml")

    def test_not_openapi(self, tmp_path):
        f = tmp_path / "doc.yaml"
        f.write_text("# API Docs\nSome text", encoding="utf-8")
        with pytest.raises(SpecLoadError, match="openapi"):
            load_openapi(f)

    def test_invalid_structure(self):
        with pytest.raises(SpecLoadError):
            parse_openapi({"openapi": "3.0.0", "paths": {"/a": {"get": "not an operation"}}})
