"""
OpenAPI document facade.

Holds the raw JSON tree, the typed document and the resolution cache of one
OpenAPI 3.1 document, and runs the dereferencing pass over it.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from pathlib import Path
from typing import Any

from .cache import ResolutionCache
from .config import DereferenceConfig
from .errors import DerefBeforeGettingServers, InternalConsistencyError, ParsingError, UnsupportedOpenApiVersion
from .model import EncodeOptions, Inline, OpenApi, Resolved, Server, Unresolved
from .resolver import PointerResolver
from .walker import StructuralWalker, find_unresolved

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)(\.\d+)?(-.*)?$")


def check_version(json_value: Any) -> None:
    """
    Check that a raw document declares OpenAPI 3.1.

    Raises:
        UnsupportedOpenApiVersion: For Swagger 2.0, OpenAPI 3.0 and any other version
    """
    if not isinstance(json_value, dict):
        return
    version = json_value.get("openapi")
    if version is None and "swagger" in json_value:
        raise UnsupportedOpenApiVersion(str(json_value["swagger"]))
    if not isinstance(version, str):
        return
    match = _VERSION_PATTERN.match(version)
    if match is None or (match.group(1), match.group(2)) != ("3", "1"):
        raise UnsupportedOpenApiVersion(version)


class OpenApiDocument:
    """An OpenAPI 3.1 document that can be dereferenced.

    Create it with one of the ``from_*`` constructors, then call
    ``dereference()``. The raw JSON tree is never modified and is the
    source for every pointer lookup.
    """

    def __init__(self, json_value: Any, openapi: OpenApi, config: DereferenceConfig | None = None):
        self.json = json_value
        self.openapi = openapi
        self.config = config or DereferenceConfig()
        self.cache = ResolutionCache()
        self._is_dereferenced = False

    @classmethod
    def from_bytes(cls, data: bytes, config: DereferenceConfig | None = None) -> OpenApiDocument:
        try:
            json_value = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise ParsingError(f"Error parsing bytes as JSON {e}") from e
        return cls.from_value(json_value, config)

    @classmethod
    def from_str(cls, text: str, config: DereferenceConfig | None = None) -> OpenApiDocument:
        try:
            json_value = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            raise ParsingError(f"Error parsing string as JSON {e}") from e
        return cls.from_value(json_value, config)

    @classmethod
    def from_file(cls, path: str | Path, config: DereferenceConfig | None = None) -> OpenApiDocument:
        return cls.from_bytes(Path(path).read_bytes(), config)

    @classmethod
    def from_value(cls, json_value: Any, config: DereferenceConfig | None = None) -> OpenApiDocument:
        """
        Build a document from an already parsed JSON tree.

        Raises:
            UnsupportedOpenApiVersion: If the document is not OpenAPI 3.1
            ParsingError: If the tree does not have the shape of an OpenAPI document
        """
        check_version(json_value)
        # The typed model and the raw tree must not share mutable nodes
        json_value = copy.deepcopy(json_value)
        openapi = OpenApi.from_dict(copy.deepcopy(json_value))
        return cls(json_value, openapi, config)

    @property
    def is_dereferenced(self) -> bool:
        return self._is_dereferenced

    def dereference(self) -> OpenApiDocument:
        """
        Replace every reference slot of the document by its target.

        The pass is all-or-nothing: on error the typed document is left as it was.

        Returns:
            This document, now flagged as dereferenced

        Raises:
            OpenApiError: The first error met during the walk
        """
        resolver = PointerResolver(self.json, self.cache, follow_chained_refs=self.config.follow_chained_refs)
        walker = StructuralWalker(resolver)
        self.openapi = walker.dereference(copy.deepcopy(self.openapi))
        self._is_dereferenced = True
        logger.info(
            "Dereferenced document: %d pointers, %d cache hits, %d misses",
            len(self.cache),
            self.cache.hits,
            self.cache.misses,
        )
        return self

    def get_servers(self) -> list[Server]:
        """
        Collect the servers declared at every level of the document.

        Returns top-level servers, then for each path item its own servers
        followed by its GET operation's servers, in document order.

        Raises:
            DerefBeforeGettingServers: If dereference() has not run
            InternalConsistencyError: If a path item is still unresolved
        """
        if not self._is_dereferenced:
            raise DerefBeforeGettingServers()

        servers = list(self.openapi.servers or [])
        if self.openapi.paths is None:
            return servers

        for path, slot in self.openapi.paths.paths.items():
            match slot:
                case Inline(value=item) | Resolved(value=item):
                    servers.extend(item.servers or [])
                    if item.get is not None:
                        servers.extend(item.get.servers or [])
                case Unresolved(pointer=pointer):
                    raise InternalConsistencyError(f"Path {path} still references {pointer} after dereferencing")
        return servers

    def unresolved_references(self) -> list[str]:
        """Locations of references still unresolved in the typed document."""
        return list(find_unresolved(self.openapi))

    def encode_options(self) -> EncodeOptions:
        return EncodeOptions(
            annotate_resolved_refs=self.config.annotate_resolved_refs,
            ref_annotation_key=self.config.ref_annotation_key,
            apply_reference_overrides=self.config.apply_reference_overrides,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.openapi.to_dict(self.encode_options())

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
