"""
Translation of local $ref pointers into root-anchored queries.

A pointer such as "#/components/parameters/limit" becomes the query
$.components.parameters.limit, which is then evaluated against the raw
JSON tree of the document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import ParsingError, UnsupportedRefFormat


@dataclass(frozen=True)
class QueryExpr:
    """A root-anchored path through the raw document."""

    segments: tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return "".join(["$"] + [f".{segment}" for segment in self.segments])


def escape_segment(segment: str) -> str:
    """Escape a key for use as one JSON pointer segment."""
    return segment.replace("~", "~0").replace("/", "~1")


def _unescape(segment: str) -> str:
    """Apply JSON pointer escapes (~1 is "/", ~0 is "~")."""
    return segment.replace("~1", "/").replace("~0", "~")


def ref_to_query(reference: str) -> QueryExpr:
    """
    Translate a local reference into a query expression.

    Args:
        reference: A reference string, e.g. "#/components/schemas/Pet"

    Returns:
        QueryExpr with one step per path segment

    Raises:
        UnsupportedRefFormat: If the reference does not start with "#"
    """
    if not reference.startswith("#"):
        raise UnsupportedRefFormat(reference)

    path = reference[1:]
    if path.startswith("/"):
        path = path[1:]

    # Empty segments ("#/a//b") are skipped
    segments = tuple(_unescape(part) for part in path.split("/") if part)
    return QueryExpr(segments=segments)


def ref_to_json_path(reference: str) -> str:
    """Translate a local reference into its JSONPath text form."""
    return str(ref_to_query(reference))


def find_first(document: Any, query: QueryExpr, reference: str = "") -> Any:
    """
    Evaluate a query against the raw document and return the matched node.

    Mappings are walked by key, lists by decimal index.

    Raises:
        ParsingError: If any step of the query has no match
    """
    node = document
    for depth, segment in enumerate(query.segments):
        if isinstance(node, dict) and segment in node:
            node = node[segment]
        elif isinstance(node, list) and segment.isascii() and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            walked = QueryExpr(segments=query.segments[: depth + 1])
            raise ParsingError(f"Reference {reference or query} has no match at {walked}")
    return node
