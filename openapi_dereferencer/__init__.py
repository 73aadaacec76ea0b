"""OpenAPI Dereferencer

Resolves the internal $ref pointers of an OpenAPI 3.1 document, producing
a self-contained typed document that still records which fields were
references.
"""

__version__ = "0.1.0"

from .cache import ResolutionCache
from .config import DereferenceConfig, OutputConfig, OutputMode
from .document import OpenApiDocument
from .errors import (
    CircularReference,
    DerefBeforeGettingServers,
    InternalConsistencyError,
    OpenApiError,
    OutputWriteError,
    ParsingError,
    UnsupportedOpenApiVersion,
    UnsupportedRefFormat,
)
from .pointer import QueryExpr, ref_to_json_path, ref_to_query
from .resolver import PointerResolver

__all__ = [
    "OpenApiDocument",
    "DereferenceConfig",
    "OutputConfig",
    "OutputMode",
    "ResolutionCache",
    "PointerResolver",
    "QueryExpr",
    "ref_to_query",
    "ref_to_json_path",
    "OpenApiError",
    "ParsingError",
    "UnsupportedRefFormat",
    "UnsupportedOpenApiVersion",
    "DerefBeforeGettingServers",
    "CircularReference",
    "InternalConsistencyError",
    "OutputWriteError",
]
