"""
Schema Object model.

OpenAPI 3.1 schemas are JSON Schema 2020-12 documents: either a boolean or
an object. Only what dereferencing needs is typed: the $ref keyword and the
composition keywords (allOf, anyOf, oneOf, if, then, else). Every other
keyword is kept raw in ``keywords``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Union

from ..errors import ParsingError
from .fields import Codec, EncodeOptions, json_type_name

COMPOSITION_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf")
CONDITIONAL_KEYWORDS = ("if", "then", "else")


@dataclass
class ObjectSchema:
    """A JSON Schema object.

    Attributes:
        reference: The $ref of the schema, None when it has no $ref
        all_of: Children under allOf, None when the keyword is absent
        any_of: Children under anyOf, None when the keyword is absent
        one_of: Children under oneOf, None when the keyword is absent
        if_schema: Child under if
        then_schema: Child under then
        else_schema: Child under else
        keywords: Every other keyword, raw and in document order
        resolved_from: Pointer this schema was loaded from when it replaced a $ref
    """

    reference: str | None = None
    all_of: list[Schema] | None = None
    any_of: list[Schema] | None = None
    one_of: list[Schema] | None = None
    if_schema: Schema | None = None
    then_schema: Schema | None = None
    else_schema: Schema | None = None
    keywords: dict[str, Any] = field(default_factory=dict)
    resolved_from: str | None = None

    def is_ref(self) -> bool:
        return self.reference is not None


Schema = Union[bool, ObjectSchema]

# (attribute, keyword) pairs for the list-valued composition keywords
_LIST_ATTRIBUTES = (("all_of", "allOf"), ("any_of", "anyOf"), ("one_of", "oneOf"))
_CONDITIONAL_ATTRIBUTES = (("if_schema", "if"), ("then_schema", "then"), ("else_schema", "else"))


def decode_schema(data: Any, path: str = "#") -> Schema:
    """
    Decode a raw JSON value into a Schema.

    Raises:
        ParsingError: If the value is neither a boolean nor an object, or a
            composition keyword does not hold schemas
    """
    if isinstance(data, bool):
        return data
    if not isinstance(data, dict):
        raise ParsingError(f"expected schema at {path}, found {json_type_name(data)}")

    schema = ObjectSchema()
    for key, value in data.items():
        if key == "$ref":
            if not isinstance(value, str):
                raise ParsingError(f"expected string for $ref at {path}")
            schema.reference = value
        elif key in COMPOSITION_LIST_KEYWORDS:
            if not isinstance(value, list):
                raise ParsingError(f"expected array of schemas for {key} at {path}")
            children = [decode_schema(child, f"{path}/{key}/{index}") for index, child in enumerate(value)]
            setattr(schema, _attribute_for(key), children)
        elif key in CONDITIONAL_KEYWORDS:
            setattr(schema, _attribute_for(key), decode_schema(value, f"{path}/{key}"))
        else:
            schema.keywords[key] = value
    return schema


def _attribute_for(keyword: str) -> str:
    for attribute, name in _LIST_ATTRIBUTES + _CONDITIONAL_ATTRIBUTES:
        if name == keyword:
            return attribute
    raise KeyError(keyword)


def encode_schema(schema: Schema, options: EncodeOptions) -> Any:
    """Encode a Schema back into its JSON form."""
    if isinstance(schema, bool):
        return schema

    out: dict[str, Any] = {}
    if schema.reference is not None:
        out["$ref"] = schema.reference
    out.update(copy.deepcopy(schema.keywords))
    for attribute, keyword in _LIST_ATTRIBUTES:
        children = getattr(schema, attribute)
        if children is not None:
            out[keyword] = [encode_schema(child, options) for child in children]
    for attribute, keyword in _CONDITIONAL_ATTRIBUTES:
        child = getattr(schema, attribute)
        if child is not None:
            out[keyword] = encode_schema(child, options)
    if options.annotate_resolved_refs and schema.resolved_from is not None:
        out[options.ref_annotation_key] = schema.resolved_from
    return out


def iter_children(schema: ObjectSchema) -> list[tuple[str, Schema]]:
    """Composition children of a schema as (location, child) pairs, in keyword order."""
    children: list[tuple[str, Schema]] = []
    for attribute, keyword in _LIST_ATTRIBUTES:
        for index, child in enumerate(getattr(schema, attribute) or []):
            children.append((f"{keyword}/{index}", child))
    for attribute, keyword in _CONDITIONAL_ATTRIBUTES:
        child = getattr(schema, attribute)
        if child is not None:
            children.append((keyword, child))
    return children


class SchemaCodec(Codec):
    """Codec for fields holding a Schema."""

    def decode(self, data: Any, path: str) -> Schema:
        return decode_schema(data, path)

    def encode(self, value: Any, options: EncodeOptions) -> Any:
        return encode_schema(value, options)
