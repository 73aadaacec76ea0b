"""
Structural walker.

Visits every field of the document where a reference may appear and
resolves it: components first, then paths, then webhooks. The first error
stops the walk.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import fields
from typing import Any, TypeVar

from .composer import SchemaComposer
from .model import (
    Callback,
    Components,
    Example,
    Header,
    Link,
    MediaType,
    ObjectSchema,
    OpenApi,
    OpenApiObject,
    Operation,
    Parameter,
    PathItem,
    Paths,
    RequestBody,
    Response,
    SecurityScheme,
)
from .model.fields import RawCodec
from .model.schema import Schema, iter_children
from .model.slots import Inline, ReferenceOr, Resolved, Unresolved
from .normalizer import normalize, normalize_and_map
from .pointer import escape_segment
from .resolver import PointerResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StructuralWalker:
    """Dereferences a typed OpenAPI document in place."""

    def __init__(self, resolver: PointerResolver):
        self.resolver = resolver
        self.composer = SchemaComposer(resolver)

    def dereference(self, openapi: OpenApi) -> OpenApi:
        """Dereference components, paths and webhooks of a document."""
        logger.debug("Dereferencing components")
        openapi.components = self.dereference_components(openapi.components)
        logger.debug("Dereferencing paths")
        openapi.paths = self.dereference_paths(openapi.paths)
        logger.debug("Dereferencing webhooks")
        openapi.webhooks = self._mapped_map(openapi.webhooks, PathItem, self.dereference_path_item)
        return openapi

    # Slot helpers

    def _leaf(self, slot: ReferenceOr[T], cls: type[OpenApiObject]) -> ReferenceOr[T]:
        return normalize(slot, self.resolver, cls.from_dict)

    def _mapped(self, slot: ReferenceOr[T], cls: type[OpenApiObject], fn: Callable[[T], T]) -> ReferenceOr[T]:
        return normalize_and_map(slot, self.resolver, cls.from_dict, fn)

    # Absent collections stay None so they are not written back as empty ones
    def _leaf_map(
        self, slots: dict[str, ReferenceOr[T]] | None, cls: type[OpenApiObject]
    ) -> dict[str, ReferenceOr[T]] | None:
        if slots is None:
            return None
        return {key: self._leaf(slot, cls) for key, slot in slots.items()}

    def _mapped_map(
        self,
        slots: dict[str, ReferenceOr[T]] | None,
        cls: type[OpenApiObject],
        fn: Callable[[T], T],
    ) -> dict[str, ReferenceOr[T]] | None:
        if slots is None:
            return None
        return {key: self._mapped(slot, cls, fn) for key, slot in slots.items()}

    def _parameters(self, slots: list[ReferenceOr[Parameter]] | None) -> list[ReferenceOr[Parameter]] | None:
        if slots is None:
            return None
        return [self._mapped(slot, Parameter, self.dereference_parameter) for slot in slots]

    def _schema(self, schema: Schema | None) -> Schema | None:
        if schema is None:
            return None
        return self.composer.compose(schema)

    def _content(self, content: dict[str, MediaType] | None) -> dict[str, MediaType] | None:
        if content is None:
            return None
        return {media_range: self.dereference_media_type(media) for media_range, media in content.items()}

    # Components

    def dereference_components(self, components: Components | None) -> Components | None:
        if components is None:
            return None

        components.security_schemes = self._leaf_map(components.security_schemes, SecurityScheme)
        components.responses = self._mapped_map(components.responses, Response, self.dereference_response)
        if components.schemas is not None:
            components.schemas = {name: self.composer.compose(schema) for name, schema in components.schemas.items()}
        components.parameters = self._mapped_map(components.parameters, Parameter, self.dereference_parameter)
        components.examples = self._leaf_map(components.examples, Example)
        components.request_bodies = self._mapped_map(
            components.request_bodies, RequestBody, self.dereference_request_body
        )
        components.headers = self._mapped_map(components.headers, Header, self.dereference_header)
        components.links = self._leaf_map(components.links, Link)
        components.callbacks = self._mapped_map(components.callbacks, Callback, self.dereference_callback)
        components.path_items = self._mapped_map(components.path_items, PathItem, self.dereference_path_item)
        return components

    # Paths

    def dereference_paths(self, paths: Paths | None) -> Paths | None:
        if paths is None:
            return None
        paths.paths = self._mapped_map(paths.paths, PathItem, self.dereference_path_item)
        return paths

    def dereference_path_item(self, path_item: PathItem) -> PathItem:
        for method, operation in path_item.operations():
            setattr(path_item, method, self.dereference_operation(operation))
        path_item.parameters = self._parameters(path_item.parameters)
        return path_item

    def dereference_operation(self, operation: Operation) -> Operation:
        operation.parameters = self._parameters(operation.parameters)
        if operation.request_body is not None:
            operation.request_body = self._mapped(operation.request_body, RequestBody, self.dereference_request_body)
        if operation.responses is not None:
            responses = operation.responses
            if responses.default is not None:
                responses.default = self._mapped(responses.default, Response, self.dereference_response)
            responses.responses = self._mapped_map(responses.responses, Response, self.dereference_response)
        operation.callbacks = self._mapped_map(operation.callbacks, Callback, self.dereference_callback)
        return operation

    def dereference_callback(self, callback: Callback) -> Callback:
        callback.expressions = self._mapped_map(callback.expressions, PathItem, self.dereference_path_item)
        return callback

    # Objects carrying examples, schemas and content

    def dereference_parameter(self, parameter: Parameter) -> Parameter:
        # Examples may carry externalValue, which is left as written
        parameter.examples = self._leaf_map(parameter.examples, Example)
        parameter.schema = self._schema(parameter.schema)
        parameter.content = self._content(parameter.content)
        return parameter

    def dereference_header(self, header: Header) -> Header:
        header.examples = self._leaf_map(header.examples, Example)
        header.schema = self._schema(header.schema)
        header.content = self._content(header.content)
        return header

    def dereference_response(self, response: Response) -> Response:
        response.headers = self._mapped_map(response.headers, Header, self.dereference_header)
        response.links = self._leaf_map(response.links, Link)
        response.content = self._content(response.content)
        return response

    def dereference_request_body(self, request_body: RequestBody) -> RequestBody:
        request_body.content = self._content(request_body.content)
        return request_body

    def dereference_media_type(self, media_type: MediaType) -> MediaType:
        media_type.schema = self._schema(media_type.schema)
        media_type.examples = self._leaf_map(media_type.examples, Example)
        return media_type


def find_unresolved(node: Any, location: str = "#") -> Iterator[str]:
    """
    Yield the location of every reference left unresolved below a node.

    Covers Unresolved slots and object schemas that still carry a $ref at a
    composition position. Raw fields (info, examples values, schema keywords
    such as properties) are not inspected.
    """
    match node:
        case Unresolved():
            yield location
        case Inline(value=value) | Resolved(value=value):
            yield from find_unresolved(value, location)
        case ObjectSchema():
            if node.reference is not None:
                yield location
            for child_location, child in iter_children(node):
                yield from find_unresolved(child, f"{location}/{child_location}")
        case OpenApiObject():
            for f in fields(node):
                value = getattr(node, f.name)
                if "patterned" in f.metadata:
                    for key, item in value.items():
                        yield from find_unresolved(item, f"{location}/{escape_segment(key)}")
                elif "key" in f.metadata and not isinstance(f.metadata["codec"], RawCodec):
                    yield from find_unresolved(value, f"{location}/{f.metadata['key']}")
        case list():
            for index, item in enumerate(node):
                yield from find_unresolved(item, f"{location}/{index}")
        case dict():
            for key, item in node.items():
                yield from find_unresolved(item, f"{location}/{escape_segment(key)}")
