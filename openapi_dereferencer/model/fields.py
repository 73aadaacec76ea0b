"""
Field codecs for the typed OpenAPI object model.

Every model dataclass declares its JSON keys with ``prop`` and a codec. The
codec decodes the raw JSON value found under that key and encodes the typed
value back. OpenApiObject uses the declarations to implement ``from_dict`` and
``to_dict`` for all model classes.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from ..errors import ParsingError

# Model classes by name, so codecs can refer to classes defined later
_REGISTRY: dict[str, type[OpenApiObject]] = {}


@dataclass(frozen=True)
class EncodeOptions:
    """Options controlling how resolved references are written back out."""

    annotate_resolved_refs: bool = False
    ref_annotation_key: str = "x-resolved-ref"
    apply_reference_overrides: bool = True


DEFAULT_ENCODE_OPTIONS = EncodeOptions()


def json_type_name(value: Any) -> str:
    """Name of the JSON type of a decoded value, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def expect_mapping(data: Any, path: str, what: str) -> dict[str, Any]:
    """Return data if it is a JSON object, raise ParsingError otherwise."""
    if not isinstance(data, dict):
        raise ParsingError(f"expected {what} object at {path}, found {json_type_name(data)}")
    return data


class Codec:
    """Converts one JSON value to its typed form and back."""

    def decode(self, data: Any, path: str) -> Any:
        raise NotImplementedError

    def encode(self, value: Any, options: EncodeOptions) -> Any:
        raise NotImplementedError


class RawCodec(Codec):
    """Keeps the JSON value as-is."""

    def decode(self, data: Any, path: str) -> Any:
        return data

    def encode(self, value: Any, options: EncodeOptions) -> Any:
        return copy.deepcopy(value)


class StrCodec(Codec):
    """A JSON string, optionally restricted to a set of choices."""

    def __init__(self, choices: tuple[str, ...] = ()):
        self.choices = choices

    def decode(self, data: Any, path: str) -> str:
        if not isinstance(data, str):
            raise ParsingError(f"expected string at {path}, found {json_type_name(data)}")
        if self.choices and data not in self.choices:
            raise ParsingError(f"unknown value {data!r} at {path}, expected one of {', '.join(self.choices)}")
        return data

    def encode(self, value: Any, options: EncodeOptions) -> Any:
        return value


class BoolCodec(Codec):
    """A JSON boolean."""

    def decode(self, data: Any, path: str) -> bool:
        if not isinstance(data, bool):
            raise ParsingError(f"expected boolean at {path}, found {json_type_name(data)}")
        return data

    def encode(self, value: Any, options: EncodeOptions) -> Any:
        return value


class ObjectCodec(Codec):
    """A nested model object, looked up by class name."""

    def __init__(self, class_name: str):
        self.class_name = class_name

    def decode(self, data: Any, path: str) -> Any:
        return _REGISTRY[self.class_name].from_dict(data, path)

    def encode(self, value: Any, options: EncodeOptions) -> Any:
        return value.to_dict(options)


class ListCodec(Codec):
    """A JSON array of values sharing one codec."""

    def __init__(self, item: Codec):
        self.item = item

    def decode(self, data: Any, path: str) -> list[Any]:
        if not isinstance(data, list):
            raise ParsingError(f"expected array at {path}, found {json_type_name(data)}")
        return [self.item.decode(value, f"{path}/{index}") for index, value in enumerate(data)]

    def encode(self, value: Any, options: EncodeOptions) -> Any:
        return [self.item.encode(item, options) for item in value]


class MapCodec(Codec):
    """A JSON object whose values share one codec. Key order is preserved."""

    def __init__(self, value: Codec):
        self.value = value

    def decode(self, data: Any, path: str) -> dict[str, Any]:
        mapping = expect_mapping(data, path, "map")
        return {key: self.value.decode(value, f"{path}/{key}") for key, value in mapping.items()}

    def encode(self, value: Any, options: EncodeOptions) -> Any:
        return {key: self.value.encode(item, options) for key, item in value.items()}


def prop(key: str, codec: Codec, required: bool = False) -> Any:
    """Declare a dataclass field stored under a JSON key.

    Absent keys decode to None, so an empty list or map written in the
    document is kept apart from a missing one.
    """
    metadata = {"key": key, "codec": codec, "required": required}
    return field(default=None, metadata=metadata)


def patterned(codec: Codec) -> Any:
    """Declare the field collecting every non-extension key not named by another field.

    Used by objects such as Paths and Callback whose keys are free-form.
    """
    return field(default_factory=dict, metadata={"patterned": codec})


def openapi_object(cls: type[OpenApiObject]) -> type[OpenApiObject]:
    """Register a model class so codecs can refer to it by name."""
    _REGISTRY[cls.__name__] = cls
    return cls


def lookup_class(class_name: str) -> type[OpenApiObject]:
    return _REGISTRY[class_name]


class OpenApiObject:
    """Base for model dataclasses declared with ``prop``.

    Keys not named by the class are kept in ``extra`` and written back
    unchanged after the named keys.
    """

    # Name used in error messages, defaults to the class name
    object_name: ClassVar[str] = ""

    extra: dict[str, Any]

    @classmethod
    def from_dict(cls, data: Any, path: str = "#") -> Any:
        what = cls.object_name or cls.__name__
        mapping = expect_mapping(data, path, what)

        values: dict[str, Any] = {}
        known: set[str] = set()
        patterned_field = None
        for f in fields(cls):
            if "patterned" in f.metadata:
                patterned_field = f
                continue
            key = f.metadata.get("key")
            if key is None:
                continue
            known.add(key)
            if key in mapping:
                values[f.name] = f.metadata["codec"].decode(mapping[key], f"{path}/{key}")
            elif f.metadata["required"]:
                raise ParsingError(f"missing field {key} in {what} at {path}")

        extra: dict[str, Any] = {}
        entries: dict[str, Any] = {}
        for key, value in mapping.items():
            if key in known:
                continue
            if patterned_field is not None and not key.startswith("x-"):
                entries[key] = patterned_field.metadata["patterned"].decode(value, f"{path}/{key}")
            else:
                extra[key] = value

        if patterned_field is not None:
            values[patterned_field.name] = entries
        values["extra"] = extra
        return cls(**values)

    def to_dict(self, options: EncodeOptions | None = None) -> dict[str, Any]:
        options = options or DEFAULT_ENCODE_OPTIONS
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if "patterned" in f.metadata:
                codec = f.metadata["patterned"]
                for key, item in value.items():
                    out[key] = codec.encode(item, options)
                continue
            key = f.metadata.get("key")
            if key is None or value is None:
                continue
            out[key] = f.metadata["codec"].encode(value, options)
        out.update(copy.deepcopy(self.extra))
        return out


def extra_field() -> Any:
    """The ``extra`` field every model dataclass ends with."""
    return field(default_factory=dict)


__all__ = [
    "BoolCodec",
    "Codec",
    "DEFAULT_ENCODE_OPTIONS",
    "EncodeOptions",
    "ListCodec",
    "MapCodec",
    "ObjectCodec",
    "OpenApiObject",
    "RawCodec",
    "StrCodec",
    "expect_mapping",
    "extra_field",
    "json_type_name",
    "lookup_class",
    "openapi_object",
    "patterned",
    "prop",
]
