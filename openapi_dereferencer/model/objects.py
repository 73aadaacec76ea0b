"""
OpenAPI 3.1 object model.

Each class names the fields of one OpenAPI object. Fields that may hold a
Reference Object are typed as ReferenceOr slots, schema fields as Schema.
Objects dereferencing never looks into (info, tags, security requirements,
OAuth flows, ...) are kept raw.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .fields import (
    BoolCodec,
    ListCodec,
    MapCodec,
    ObjectCodec,
    OpenApiObject,
    RawCodec,
    StrCodec,
    extra_field,
    openapi_object,
    patterned,
    prop,
)
from .schema import Schema, SchemaCodec
from .slots import ReferenceOr, SlotCodec

STR = StrCodec()
BOOL = BoolCodec()
RAW = RawCodec()
SCHEMA = SchemaCodec()

PARAMETER_LOCATIONS = ("query", "header", "path", "cookie")
SECURITY_SCHEME_TYPES = ("apiKey", "http", "mutualTLS", "oauth2", "openIdConnect")
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@openapi_object
@dataclass
class ServerVariable(OpenApiObject):
    enum: list[str] | None = prop("enum", RAW)
    default: str | None = prop("default", STR, required=True)
    description: str | None = prop("description", STR)
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Server(OpenApiObject):
    url: str | None = prop("url", STR, required=True)
    description: str | None = prop("description", STR)
    variables: dict[str, ServerVariable] | None = prop("variables", MapCodec(ObjectCodec("ServerVariable")))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Example(OpenApiObject):
    summary: str | None = prop("summary", STR)
    description: str | None = prop("description", STR)
    value: Any = prop("value", RAW)
    external_value: str | None = prop("externalValue", STR)
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class MediaType(OpenApiObject):
    schema: Schema | None = prop("schema", SCHEMA)
    example: Any = prop("example", RAW)
    examples: dict[str, ReferenceOr[Example]] | None = prop("examples", MapCodec(SlotCodec("Example")))
    encoding: dict[str, Any] | None = prop("encoding", RAW)
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Parameter(OpenApiObject):
    """Parameter Object. ``location`` is the ``in`` field."""

    name: str | None = prop("name", STR, required=True)
    location: str | None = prop("in", StrCodec(PARAMETER_LOCATIONS), required=True)
    description: str | None = prop("description", STR)
    required: bool | None = prop("required", BOOL)
    deprecated: bool | None = prop("deprecated", BOOL)
    allow_empty_value: bool | None = prop("allowEmptyValue", BOOL)
    style: str | None = prop("style", STR)
    explode: bool | None = prop("explode", BOOL)
    allow_reserved: bool | None = prop("allowReserved", BOOL)
    schema: Schema | None = prop("schema", SCHEMA)
    example: Any = prop("example", RAW)
    examples: dict[str, ReferenceOr[Example]] | None = prop("examples", MapCodec(SlotCodec("Example")))
    content: dict[str, MediaType] | None = prop("content", MapCodec(ObjectCodec("MediaType")))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Header(OpenApiObject):
    description: str | None = prop("description", STR)
    required: bool | None = prop("required", BOOL)
    deprecated: bool | None = prop("deprecated", BOOL)
    style: str | None = prop("style", STR)
    explode: bool | None = prop("explode", BOOL)
    schema: Schema | None = prop("schema", SCHEMA)
    example: Any = prop("example", RAW)
    examples: dict[str, ReferenceOr[Example]] | None = prop("examples", MapCodec(SlotCodec("Example")))
    content: dict[str, MediaType] | None = prop("content", MapCodec(ObjectCodec("MediaType")))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class RequestBody(OpenApiObject):
    description: str | None = prop("description", STR)
    content: dict[str, MediaType] | None = prop("content", MapCodec(ObjectCodec("MediaType")), required=True)
    required: bool | None = prop("required", BOOL)
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Link(OpenApiObject):
    operation_ref: str | None = prop("operationRef", STR)
    operation_id: str | None = prop("operationId", STR)
    parameters: dict[str, Any] | None = prop("parameters", RAW)
    request_body: Any = prop("requestBody", RAW)
    description: str | None = prop("description", STR)
    server: Server | None = prop("server", ObjectCodec("Server"))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Response(OpenApiObject):
    description: str | None = prop("description", STR, required=True)
    headers: dict[str, ReferenceOr[Header]] | None = prop("headers", MapCodec(SlotCodec("Header")))
    content: dict[str, MediaType] | None = prop("content", MapCodec(ObjectCodec("MediaType")))
    links: dict[str, ReferenceOr[Link]] | None = prop("links", MapCodec(SlotCodec("Link")))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Responses(OpenApiObject):
    """Responses Object. Status codes are kept as their JSON keys ("200", "4XX")."""

    default: ReferenceOr[Response] | None = prop("default", SlotCodec("Response"))
    responses: dict[str, ReferenceOr[Response]] = patterned(SlotCodec("Response"))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class SecurityScheme(OpenApiObject):
    """Security Scheme Object. ``location`` is the ``in`` field of apiKey schemes."""

    type: str | None = prop("type", StrCodec(SECURITY_SCHEME_TYPES), required=True)
    description: str | None = prop("description", STR)
    name: str | None = prop("name", STR)
    location: str | None = prop("in", STR)
    scheme: str | None = prop("scheme", STR)
    bearer_format: str | None = prop("bearerFormat", STR)
    flows: dict[str, Any] | None = prop("flows", RAW)
    open_id_connect_url: str | None = prop("openIdConnectUrl", STR)
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Callback(OpenApiObject):
    """Callback Object: runtime expressions mapped to path items."""

    expressions: dict[str, ReferenceOr[PathItem]] = patterned(SlotCodec("PathItem"))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Operation(OpenApiObject):
    tags: list[str] | None = prop("tags", RAW)
    summary: str | None = prop("summary", STR)
    description: str | None = prop("description", STR)
    external_docs: dict[str, Any] | None = prop("externalDocs", RAW)
    operation_id: str | None = prop("operationId", STR)
    parameters: list[ReferenceOr[Parameter]] | None = prop("parameters", ListCodec(SlotCodec("Parameter")))
    request_body: ReferenceOr[RequestBody] | None = prop("requestBody", SlotCodec("RequestBody"))
    responses: Responses | None = prop("responses", ObjectCodec("Responses"))
    callbacks: dict[str, ReferenceOr[Callback]] | None = prop("callbacks", MapCodec(SlotCodec("Callback")))
    deprecated: bool | None = prop("deprecated", BOOL)
    security: list[dict[str, Any]] | None = prop("security", RAW)
    servers: list[Server] | None = prop("servers", ListCodec(ObjectCodec("Server")))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class PathItem(OpenApiObject):
    summary: str | None = prop("summary", STR)
    description: str | None = prop("description", STR)
    get: Operation | None = prop("get", ObjectCodec("Operation"))
    put: Operation | None = prop("put", ObjectCodec("Operation"))
    post: Operation | None = prop("post", ObjectCodec("Operation"))
    delete: Operation | None = prop("delete", ObjectCodec("Operation"))
    options: Operation | None = prop("options", ObjectCodec("Operation"))
    head: Operation | None = prop("head", ObjectCodec("Operation"))
    patch: Operation | None = prop("patch", ObjectCodec("Operation"))
    trace: Operation | None = prop("trace", ObjectCodec("Operation"))
    servers: list[Server] | None = prop("servers", ListCodec(ObjectCodec("Server")))
    parameters: list[ReferenceOr[Parameter]] | None = prop("parameters", ListCodec(SlotCodec("Parameter")))
    extra: dict[str, Any] = extra_field()

    def operations(self) -> list[tuple[str, Operation]]:
        """(method, operation) pairs for the methods this path item defines."""
        return [(method, getattr(self, method)) for method in HTTP_METHODS if getattr(self, method) is not None]


@openapi_object
@dataclass
class Paths(OpenApiObject):
    paths: dict[str, ReferenceOr[PathItem]] = patterned(SlotCodec("PathItem"))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class Components(OpenApiObject):
    schemas: dict[str, Schema] | None = prop("schemas", MapCodec(SCHEMA))
    responses: dict[str, ReferenceOr[Response]] | None = prop("responses", MapCodec(SlotCodec("Response")))
    parameters: dict[str, ReferenceOr[Parameter]] | None = prop("parameters", MapCodec(SlotCodec("Parameter")))
    examples: dict[str, ReferenceOr[Example]] | None = prop("examples", MapCodec(SlotCodec("Example")))
    request_bodies: dict[str, ReferenceOr[RequestBody]] | None = prop(
        "requestBodies", MapCodec(SlotCodec("RequestBody"))
    )
    headers: dict[str, ReferenceOr[Header]] | None = prop("headers", MapCodec(SlotCodec("Header")))
    security_schemes: dict[str, ReferenceOr[SecurityScheme]] | None = prop(
        "securitySchemes", MapCodec(SlotCodec("SecurityScheme"))
    )
    links: dict[str, ReferenceOr[Link]] | None = prop("links", MapCodec(SlotCodec("Link")))
    callbacks: dict[str, ReferenceOr[Callback]] | None = prop("callbacks", MapCodec(SlotCodec("Callback")))
    path_items: dict[str, ReferenceOr[PathItem]] | None = prop("pathItems", MapCodec(SlotCodec("PathItem")))
    extra: dict[str, Any] = extra_field()


@openapi_object
@dataclass
class OpenApi(OpenApiObject):
    """Root OpenAPI Object."""

    object_name = "OpenAPI"

    openapi: str | None = prop("openapi", STR, required=True)
    info: dict[str, Any] | None = prop("info", RAW, required=True)
    json_schema_dialect: str | None = prop("jsonSchemaDialect", STR)
    servers: list[Server] | None = prop("servers", ListCodec(ObjectCodec("Server")))
    paths: Paths | None = prop("paths", ObjectCodec("Paths"))
    webhooks: dict[str, ReferenceOr[PathItem]] | None = prop("webhooks", MapCodec(SlotCodec("PathItem")))
    components: Components | None = prop("components", ObjectCodec("Components"))
    security: list[dict[str, Any]] | None = prop("security", RAW)
    tags: list[dict[str, Any]] | None = prop("tags", RAW)
    external_docs: dict[str, Any] | None = prop("externalDocs", RAW)
    extra: dict[str, Any] = extra_field()
