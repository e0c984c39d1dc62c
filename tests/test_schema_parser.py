"""Tests for the schema and schema_parser modules."""

import pytest

from apigen.errors import DocumentError
from apigen.schema import (
    ArraySchema,
    IntersectionSchema,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    UnionSchema,
    parse_schema,
)
from apigen.schema_parser import (
    get_json_response,
    parse_parameters,
    parse_request_body,
)


class TestParseSchema:
    """Test raw OpenAPI schema -> SchemaNode."""

    def test_string(self):
        node = parse_schema({"type": "string", "description": "A name"})
        assert node == PrimitiveSchema("string", description="A name")

    def test_integer(self):
        assert parse_schema({"type": "integer"}).type == "integer"

    def test_empty_schema_is_any(self):
        assert parse_schema({}) == PrimitiveSchema("any")
        assert parse_schema(None) == PrimitiveSchema("any")

    def test_unknown_type_is_any(self):
        assert parse_schema({"type": "file"}).type == "any"

    def test_ref_not_expanded(self):
        node = parse_schema({"$ref": "#/components/schemas/Pet"})
        assert node == RefSchema("#/components/schemas/Pet")

    def test_array(self):
        node = parse_schema({"type": "array", "items": {"type": "string"}})
        assert isinstance(node, ArraySchema)
        assert node.items == PrimitiveSchema("string")

    def test_array_without_items(self):
        node = parse_schema({"type": "array"})
        assert node.items == PrimitiveSchema("any")

    def test_object_keeps_property_order(self):
        node = parse_schema({
            "type": "object",
            "properties": {"b": {"type": "string"}, "a": {"type": "integer"}},
            "required": ["a"],
        })
        assert isinstance(node, ObjectSchema)
        assert list(node.properties) == ["b", "a"]
        assert node.required == ["a"]

    def test_properties_without_type(self):
        node = parse_schema({"properties": {"x": {"type": "boolean"}}})
        assert isinstance(node, ObjectSchema)

    def test_one_of(self):
        node = parse_schema({"oneOf": [{"type": "string"}, {"$ref": "#/components/schemas/Pet"}]})
        assert isinstance(node, UnionSchema)
        assert len(node.members) == 2

    def test_any_of_is_union(self):
        node = parse_schema({"anyOf": [{"type": "string"}, {"type": "integer"}]})
        assert isinstance(node, UnionSchema)

    def test_all_of(self):
        node = parse_schema({"allOf": [{"$ref": "#/components/schemas/Pet"}, {"type": "object"}]})
        assert isinstance(node, IntersectionSchema)
        assert node.members[0] == RefSchema("#/components/schemas/Pet")

    def test_enum(self):
        node = parse_schema({"type": "string", "enum": ["a", "b"]})
        assert node.enum == ["a", "b"]

    def test_enum_without_type(self):
        node = parse_schema({"enum": ["on", "off"]})
        assert node == PrimitiveSchema("string", enum=["on", "off"])

    def test_type_list(self):
        node = parse_schema({"type": ["string", "null"], "description": "maybe"})
        assert isinstance(node, UnionSchema)
        assert [m.type for m in node.members] == ["string", "null"]
        assert node.description == "maybe"

    def test_kind_tags(self):
        assert parse_schema({"type": "object"}).kind == "object"
        assert parse_schema({"type": "array"}).kind == "array"
        assert parse_schema({"type": "string"}).kind == "primitive"
        assert parse_schema({"$ref": "#/x"}).kind == "ref"
        assert parse_schema({"oneOf": []}).kind == "union"
        assert parse_schema({"allOf": []}).kind == "intersection"


class TestParseParameters:
    """Test parameter extraction from operations."""

    def test_partition_by_location(self):
        op = {
            "parameters": [
                {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}},
                {"name": "q", "in": "query", "schema": {"type": "string"}},
                {"name": "X-Key", "in": "header", "schema": {"type": "string"}},
            ],
        }
        groups = parse_parameters(op)
        assert [p.name for p in groups.path] == ["id"]
        assert [p.name for p in groups.query] == ["q"]
        assert [p.name for p in groups.header] == ["X-Key"]
        assert groups.path[0].required is True
        assert groups.query[0].required is False

    def test_cookie_params_ignored(self):
        op = {"parameters": [{"name": "s", "in": "cookie", "schema": {"type": "string"}}]}
        groups = parse_parameters(op)
        assert not groups.path and not groups.query and not groups.header

    def test_no_parameters(self):
        groups = parse_parameters({})
        assert groups.query == []

    def test_missing_schema_is_any(self):
        groups = parse_parameters({"parameters": [{"name": "q", "in": "query"}]})
        assert groups.query[0].schema == PrimitiveSchema("any")

    def test_description_kept(self):
        op = {"parameters": [{"name": "q", "in": "query", "description": "Search", "schema": {"type": "string"}}]}
        assert parse_parameters(op).query[0].description == "Search"

    def test_ref_entries_skipped(self):
        op = {
            "parameters": [
                {"$ref": "#/components/parameters/Limit"},
                {"name": "q", "in": "query", "schema": {"type": "string"}},
            ],
        }
        groups = parse_parameters(op)
        assert [p.name for p in groups.query] == ["q"]
        assert not groups.path and not groups.header

    def test_missing_location_skipped(self):
        groups = parse_parameters({"parameters": [{"name": "q", "schema": {"type": "string"}}]})
        assert groups.query == []


class TestParseRequestBody:
    """Test request body content type selection."""

    def test_no_body(self):
        body = parse_request_body({})
        assert body.content_type == ""
        assert body.schema is None

    def test_json_body(self):
        op = {"requestBody": {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}}}}
        body = parse_request_body(op)
        assert body.content_type == "application/json"
        assert body.schema == RefSchema("#/components/schemas/Pet")

    def test_multipart_wins_over_json(self):
        op = {
            "requestBody": {
                "content": {
                    "application/json": {"schema": {"type": "string"}},
                    "multipart/form-data": {"schema": {"type": "object"}},
                },
            },
        }
        body = parse_request_body(op)
        assert body.content_type == "multipart/form-data"
        assert isinstance(body.schema, ObjectSchema)

    def test_json_without_schema(self):
        body = parse_request_body({"requestBody": {"content": {"application/json": {}}}})
        assert body.content_type == "application/json"
        assert body.schema is None

    def test_multipart_without_schema_still_overwrites(self):
        op = {
            "requestBody": {
                "content": {
                    "application/json": {"schema": {"type": "string"}},
                    "multipart/form-data": {},
                },
            },
        }
        body = parse_request_body(op)
        assert body.content_type == "multipart/form-data"
        assert body.schema is None

    def test_other_content_types_ignored(self):
        op = {"requestBody": {"content": {"text/plain": {"schema": {"type": "string"}}}}}
        body = parse_request_body(op)
        assert body.content_type == ""
        assert body.schema is None


class TestGetJsonResponse:
    """Test the 200 response lookup."""

    def test_json_schema(self):
        op = {
            "responses": {
                "200": {
                    "description": "ok",
                    "content": {"application/json": {"schema": {"type": "integer"}}},
                },
            },
        }
        resp = get_json_response(op, "get", "/count")
        assert resp.description == "ok"
        assert resp.schema == PrimitiveSchema("integer")

    def test_no_content(self):
        resp = get_json_response({"responses": {"200": {"description": "Deleted"}}}, "delete", "/x")
        assert resp.schema is None

    def test_non_json_content(self):
        op = {"responses": {"200": {"description": "csv", "content": {"text/csv": {}}}}}
        assert get_json_response(op, "get", "/x").schema is None

    def test_missing_200_is_fatal(self):
        op = {"responses": {"201": {"description": "Created"}}}
        with pytest.raises(DocumentError, match="POST /things"):
            get_json_response(op, "post", "/things")
