from pathlib import Path

import pytest
import yaml

from swagger_client.parser.base import ParamLocation
from swagger_client.parser.swagger import load_spec, parse_swagger
from swagger_client.registry import LookupKind

FIXTURES = Path(__file__).parent / "fixtures"


class TestSpecDocument:
    def test_base_url_includes_base_path(self):
        spec, _ = load_spec(FIXTURES / "petstore.yaml")
        assert spec.base_url == "petstore.example.com/v1"
        assert spec.schemes == ["http", "https"]

    def test_root_base_path_adds_nothing(self):
        spec, _ = parse_swagger({"host": "api.example.com", "basePath": "/", "paths": {}})
        assert spec.base_url == "api.example.com"
        assert spec.schemes == []

    def test_non_mapping_document_rejected(self):
        with pytest.raises(ValueError):
            parse_swagger(["not", "a", "document"])


class TestOperations:
    def test_operations_count(self):
        _, registry = load_spec(FIXTURES / "petstore.yaml")
        assert len(registry) == 5

    def test_list_pets(self):
        _, registry = load_spec(FIXTURES / "petstore.yaml")
        op = registry.resolve("listPets")
        assert op.method == "GET"
        assert op.path == "/pets"
        assert op.summary == "List all pets"
        assert [p.name for p in op.parameters] == ["limit", "tag", "X-Trace-Id"]

    def test_parameter_ref_resolved(self):
        _, registry = load_spec(FIXTURES / "petstore.yaml")
        trace = registry.resolve("listPets").parameters[2]
        assert trace.location == ParamLocation.HEADER
        assert trace.required is False

    def test_document_media_types_inherited(self):
        _, registry = load_spec(FIXTURES / "petstore.yaml")
        op = registry.resolve("createPet")
        assert op.consumes == ["application/json"]
        assert op.produces == ["application/json"]

    def test_operation_media_types_override(self):
        _, registry = load_spec(FIXTURES / "petstore.yaml")
        assert registry.resolve("showPetById").produces == ["application/json", "application/xml"]
        assert registry.resolve("uploadPhoto").consumes == ["multipart/form-data"]

    def test_path_level_parameters_merged(self):
        _, registry = load_spec(FIXTURES / "petstore.yaml")
        get_pet = registry.resolve("showPetById")
        assert get_pet.parameters[0].name == "petId"
        assert get_pet.parameters[0].location == ParamLocation.PATH
        assert get_pet.parameters[0].required is True

    def test_first_method_keeps_path_key(self):
        _, registry = load_spec(FIXTURES / "petstore.yaml")
        assert registry.resolve("/pets/{petId}").operation_id == "showPetById"
        assert registry.get(LookupKind.BY_ID, "/pets/{petId}") is None

    def test_unsupported_location_becomes_none(self):
        _, registry = load_spec(FIXTURES / "petstore.yaml")
        session = registry.resolve("uploadPhoto").parameters[-1]
        assert session.name == "session"
        assert session.location is None

    def test_no_parameters_is_none(self):
        _, registry = parse_swagger({"host": "h", "paths": {"/ping": {"get": {"operationId": "ping"}}}})
        op = registry.resolve("ping")
        assert op.parameters is None
        assert op.consumes is None
        assert op.produces is None

    def test_operation_param_overrides_path_param(self):
        doc = {
            "host": "h",
            "paths": {
                "/items/{id}": {
                    "parameters": [{"name": "id", "in": "path", "required": True, "type": "string"}],
                    "get": {
                        "operationId": "getItem",
                        "parameters": [{"name": "id", "in": "path", "required": True, "type": "integer"}],
                    },
                }
            },
        }
        _, registry = parse_swagger(doc)
        params = registry.resolve("getItem").parameters
        assert len(params) == 1
        assert params[0].param_type == "integer"

    def test_unresolvable_ref_skipped(self):
        doc = {"host": "h", "paths": {"/x": {"get": {"operationId": "x", "parameters": [{"$ref": "#/parameters/nope"}]}}}}
        _, registry = parse_swagger(doc)
        assert registry.resolve("x").parameters is None


class TestNullEntries:
    def test_null_path_item_has_no_operations(self):
        _, registry = load_spec_text("swagger: '2.0'\nhost: h\npaths:\n  /x:\n")
        assert len(registry) == 0

    def test_null_operation_parameters(self):
        doc = {"host": "h", "paths": {"/x": {"get": {"operationId": "x", "parameters": None}}}}
        _, registry = parse_swagger(doc)
        assert registry.resolve("x").parameters is None

    def test_null_path_level_parameters(self):
        doc = {"host": "h", "paths": {"/x": {"parameters": None, "get": {"operationId": "x"}}}}
        _, registry = parse_swagger(doc)
        assert registry.resolve("x").parameters is None

    def test_null_operation(self):
        _, registry = parse_swagger({"host": "h", "paths": {"/x": {"get": None}}})
        op = registry.resolve("/x")
        assert op.method == "GET"
        assert op.summary == ""

    def test_non_mapping_path_item_rejected(self):
        with pytest.raises(ValueError, match="/x"):
            parse_swagger({"host": "h", "paths": {"/x": ["get"]}})

    def test_non_mapping_operation_rejected(self):
        with pytest.raises(ValueError, match="get /x"):
            parse_swagger({"host": "h", "paths": {"/x": {"get": "listX"}}})


def load_spec_text(text: str):
    return parse_swagger(yaml.safe_load(text))
