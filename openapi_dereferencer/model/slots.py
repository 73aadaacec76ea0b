"""
Reference slots.

A slot is a field that may hold either an inline object or a Reference
Object ({"$ref": ..., "summary": ..., "description": ...}). Slots are
decoded into one of three states:

- Unresolved: the field held a reference that was not followed yet
- Inline: the field held the object itself
- Resolved: the field held a reference, now carrying the located object

Inline and Resolved are terminal, resolving them again changes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from ..errors import ParsingError
from .fields import Codec, EncodeOptions, ObjectCodec, lookup_class

T = TypeVar("T")


@dataclass
class Unresolved(Generic[T]):
    """A reference that has not been followed."""

    pointer: str
    summary: str | None = None
    description: str | None = None


@dataclass
class Inline(Generic[T]):
    """A value that was written in place, never a reference."""

    value: T


@dataclass
class Resolved(Generic[T]):
    """A reference replaced by the value it points to."""

    pointer: str
    value: T
    summary: str | None = None
    description: str | None = None


ReferenceOr = Union[Unresolved[T], Inline[T], Resolved[T]]


def _optional_str(mapping: dict[str, Any], key: str, path: str) -> str | None:
    value = mapping.get(key)
    if value is not None and not isinstance(value, str):
        raise ParsingError(f"expected string for {key} at {path}")
    return value


def decode_reference(mapping: dict[str, Any], path: str) -> Unresolved:
    """Decode a Reference Object into an Unresolved slot."""
    pointer = mapping["$ref"]
    if not isinstance(pointer, str):
        raise ParsingError(f"expected string for $ref at {path}")
    return Unresolved(
        pointer=pointer,
        summary=_optional_str(mapping, "summary", path),
        description=_optional_str(mapping, "description", path),
    )


def is_reference(data: Any) -> bool:
    """Check whether a raw JSON value is a Reference Object."""
    return isinstance(data, dict) and "$ref" in data


def slot_pointer(slot: ReferenceOr) -> str | None:
    """Pointer a slot was written with, None for inline values."""
    match slot:
        case Unresolved(pointer=pointer) | Resolved(pointer=pointer):
            return pointer
        case Inline():
            return None


def slot_value(slot: ReferenceOr) -> Any:
    """Value held by a slot, None when it is still unresolved."""
    match slot:
        case Inline(value=value) | Resolved(value=value):
            return value
        case Unresolved():
            return None


class SlotCodec(Codec):
    """Codec for a field that may hold a reference to an object of one model class."""

    def __init__(self, class_name: str):
        self.class_name = class_name
        self.value_codec = ObjectCodec(class_name)

    def decode(self, data: Any, path: str) -> ReferenceOr:
        if is_reference(data):
            return decode_reference(data, path)
        return Inline(self.value_codec.decode(data, path))

    def decode_value(self, data: Any, path: str) -> Any:
        """Decode the object a reference points to."""
        return lookup_class(self.class_name).from_dict(data, path)

    def encode(self, slot: ReferenceOr, options: EncodeOptions) -> Any:
        match slot:
            case Unresolved(pointer=pointer, summary=summary, description=description):
                out: dict[str, Any] = {"$ref": pointer}
                if summary is not None:
                    out["summary"] = summary
                if description is not None:
                    out["description"] = description
                return out
            case Inline(value=value):
                return self.value_codec.encode(value, options)
            case Resolved(pointer=pointer, value=value, summary=summary, description=description):
                out = self.value_codec.encode(value, options)
                if options.apply_reference_overrides:
                    # A reference's summary/description win over the target's own
                    if summary is not None and hasattr(value, "summary"):
                        out["summary"] = summary
                    if description is not None and hasattr(value, "description"):
                        out["description"] = description
                if options.annotate_resolved_refs:
                    out[options.ref_annotation_key] = pointer
                return out
        raise TypeError(f"Expected a reference slot, got {type(slot).__name__}")
