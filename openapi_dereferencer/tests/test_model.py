"""
Tests for decoding and encoding the typed OpenAPI model.
"""

import pytest

from openapi_dereferencer.errors import ParsingError
from openapi_dereferencer.model import (
    Callback,
    EncodeOptions,
    Example,
    Inline,
    ObjectSchema,
    OpenApi,
    Operation,
    Parameter,
    PathItem,
    Resolved,
    Response,
    Responses,
    SecurityScheme,
    Unresolved,
    decode_schema,
    encode_schema,
)


class TestSlotDecoding:
    def test_reference_object_becomes_unresolved(self):
        operation = PathItem.from_dict(
            {"get": {"parameters": [{"$ref": "#/components/parameters/limit", "description": "Page size"}]}}
        ).get
        assert operation.parameters == [Unresolved(pointer="#/components/parameters/limit", description="Page size")]

    def test_inline_object_becomes_inline(self):
        responses = Responses.from_dict({"200": {"description": "Ok"}})
        assert responses.responses == {"200": Inline(Response(description="Ok"))}

    def test_reference_must_be_a_string(self):
        with pytest.raises(ParsingError):
            Responses.from_dict({"200": {"$ref": 12}})

    def test_unresolved_encodes_as_reference_object(self):
        responses = Responses(default=Unresolved(pointer="#/components/responses/Error", summary="Oops"))
        assert responses.to_dict() == {"default": {"$ref": "#/components/responses/Error", "summary": "Oops"}}


class TestObjectDecoding:
    def test_parameter_fields(self):
        parameter = Parameter.from_dict(
            {"name": "limit", "in": "query", "required": False, "x-order": 3, "schema": {"type": "integer"}}
        )
        assert parameter.location == "query"
        assert parameter.required is False
        assert parameter.extra == {"x-order": 3}
        assert parameter.schema == ObjectSchema(keywords={"type": "integer"})

    def test_missing_required_field(self):
        with pytest.raises(ParsingError) as exc_info:
            Parameter.from_dict({"in": "query"}, "#/components/parameters/limit")
        assert "name" in str(exc_info.value)
        assert "#/components/parameters/limit" in str(exc_info.value)

    def test_unknown_parameter_location(self):
        with pytest.raises(ParsingError):
            Parameter.from_dict({"name": "body", "in": "body"})

    def test_unknown_security_scheme_type(self):
        with pytest.raises(ParsingError):
            SecurityScheme.from_dict({"type": "basic"})

    def test_wrong_json_type(self):
        with pytest.raises(ParsingError) as exc_info:
            Response.from_dict({"description": 5})
        assert "expected string" in str(exc_info.value)

    def test_not_an_object(self):
        with pytest.raises(ParsingError):
            Example.from_dict(["value"])

    def test_callback_expressions(self):
        callback = Callback.from_dict(
            {"{$request.body#/url}": {"post": {"responses": {"200": {"description": "Ok"}}}}, "x-note": "kept"}
        )
        assert list(callback.expressions) == ["{$request.body#/url}"]
        assert callback.extra == {"x-note": "kept"}

    def test_document_requires_info(self):
        with pytest.raises(ParsingError):
            OpenApi.from_dict({"openapi": "3.1.0"})

    def test_absent_and_empty_collections_differ(self):
        absent = Operation.from_dict({})
        empty = Operation.from_dict({"parameters": [], "callbacks": {}, "security": []})
        assert absent.parameters is None
        assert empty.parameters == []
        assert absent.to_dict() == {}
        assert empty.to_dict() == {"parameters": [], "callbacks": {}, "security": []}

    def test_path_item_operations_in_method_order(self):
        item = PathItem.from_dict({"post": {}, "get": {}, "trace": {}})
        assert [method for method, _ in item.operations()] == ["get", "post", "trace"]


class TestSchemaModel:
    def test_boolean_schema(self):
        assert decode_schema(False) is False

    def test_composition_keywords(self):
        schema = decode_schema({"title": "T", "allOf": [{"$ref": "#/a"}, True], "if": {"type": "string"}})
        assert schema.keywords == {"title": "T"}
        assert schema.all_of == [ObjectSchema(reference="#/a"), True]
        assert schema.if_schema == ObjectSchema(keywords={"type": "string"})
        assert schema.any_of is None

    def test_composition_must_be_list(self):
        with pytest.raises(ParsingError):
            decode_schema({"oneOf": {"type": "string"}})

    def test_schema_must_be_object_or_boolean(self):
        with pytest.raises(ParsingError):
            decode_schema("string")

    def test_encode_keeps_shape(self):
        raw = {"type": "object", "anyOf": [{"$ref": "#/a"}, {"type": "null"}], "else": False}
        assert encode_schema(decode_schema(raw), EncodeOptions()) == raw

    def test_resolved_schema_annotation(self):
        schema = ObjectSchema(keywords={"type": "string"}, resolved_from="#/components/schemas/Name")
        assert encode_schema(schema, EncodeOptions()) == {"type": "string"}
        annotated = encode_schema(schema, EncodeOptions(annotate_resolved_refs=True, ref_annotation_key="x-ref"))
        assert annotated == {"type": "string", "x-ref": "#/components/schemas/Name"}


class TestResolvedEncoding:
    def responses(self):
        return Responses(
            responses={
                "404": Resolved(
                    pointer="#/components/responses/NotFound",
                    value=Response(description="Not found"),
                    description="No such pet",
                )
            }
        )

    def test_resolved_encodes_concrete_value_with_override(self):
        assert self.responses().to_dict() == {"404": {"description": "No such pet"}}

    def test_overrides_can_be_disabled(self):
        encoded = self.responses().to_dict(EncodeOptions(apply_reference_overrides=False))
        assert encoded == {"404": {"description": "Not found"}}

    def test_summary_ignored_when_target_has_no_summary(self):
        responses = Responses(
            default=Resolved(pointer="#/r", value=Response(description="Error"), summary="Short")
        )
        assert responses.to_dict() == {"default": {"description": "Error"}}

    def test_annotation(self):
        encoded = self.responses().to_dict(EncodeOptions(annotate_resolved_refs=True))
        assert encoded["404"]["x-resolved-ref"] == "#/components/responses/NotFound"
        decoded = Responses.from_dict(encoded)
        assert isinstance(decoded.responses["404"], Inline)
        assert decoded.responses["404"].value.extra == {"x-resolved-ref": "#/components/responses/NotFound"}
