"""
Typed OpenAPI 3.1 document model.

Decodes raw JSON into dataclasses with ``from_dict`` and encodes them back
with ``to_dict``. Shape mismatches raise ParsingError.
"""

from __future__ import annotations

from .fields import DEFAULT_ENCODE_OPTIONS, EncodeOptions, OpenApiObject
from .objects import (
    HTTP_METHODS,
    Callback,
    Components,
    Example,
    Header,
    Link,
    MediaType,
    OpenApi,
    Operation,
    Parameter,
    PathItem,
    Paths,
    RequestBody,
    Response,
    Responses,
    SecurityScheme,
    Server,
    ServerVariable,
)
from .schema import ObjectSchema, Schema, decode_schema, encode_schema
from .slots import Inline, ReferenceOr, Resolved, Unresolved

__all__ = [
    "DEFAULT_ENCODE_OPTIONS",
    "EncodeOptions",
    "OpenApiObject",
    "HTTP_METHODS",
    "Callback",
    "Components",
    "Example",
    "Header",
    "Link",
    "MediaType",
    "OpenApi",
    "Operation",
    "Parameter",
    "PathItem",
    "Paths",
    "RequestBody",
    "Response",
    "Responses",
    "SecurityScheme",
    "Server",
    "ServerVariable",
    "ObjectSchema",
    "Schema",
    "decode_schema",
    "encode_schema",
    "Inline",
    "ReferenceOr",
    "Resolved",
    "Unresolved",
]
