"""
Errors raised while loading and dereferencing an OpenAPI document.

Every error derives from OpenApiError so callers can catch the whole family
with a single except clause.
"""

from __future__ import annotations


class OpenApiError(Exception):
    """Base class for all dereferencing errors."""

    pass


class ParsingError(OpenApiError):
    """Raised when input is not valid JSON or a node does not decode into the expected object.

    This can happen when:
    - The input bytes or string are not valid JSON
    - The document does not have the shape of an OpenAPI document
    - A reference points at a node whose shape does not match the slot it fills
    - A reference points at a location that does not exist
    """

    def __init__(self, message: str):
        super().__init__(f"Error parsing open api spec {message}")
        self.message = message


class UnsupportedRefFormat(OpenApiError):
    """Raised for references that do not point inside the current document."""

    def __init__(self, reference: str):
        super().__init__(f"References must be in the same file and start with #, found {reference}")
        self.reference = reference


class UnsupportedOpenApiVersion(OpenApiError):
    """Raised when the document is not an OpenAPI 3.1 document."""

    def __init__(self, version: str | None = None):
        message = "Unsupported open api version"
        if version is not None:
            message = f"{message} {version}"
        super().__init__(message)
        self.version = version


class DerefBeforeGettingServers(OpenApiError):
    """Raised when servers are requested from a document that was not dereferenced."""

    def __init__(self):
        super().__init__("Must dereference before getting servers")


class CircularReference(OpenApiError):
    """Raised when a reference is expanded again inside its own expansion."""

    def __init__(self, reference: str, chain: list[str]):
        super().__init__(f"Circular reference {reference} found through {' -> '.join(chain + [reference])}")
        self.reference = reference
        self.chain = chain


class InternalConsistencyError(OpenApiError):
    """Raised when a dereferenced document still holds an unresolved reference."""

    pass


class OutputWriteError(OpenApiError):
    """Raised when generated output fails validation before being written."""

    pass
