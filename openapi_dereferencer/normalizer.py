"""
Reference normalization for single slots.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from .model.slots import Inline, ReferenceOr, Resolved, Unresolved
from .resolver import PointerResolver

T = TypeVar("T")


def normalize(
    slot: ReferenceOr[T],
    resolver: PointerResolver,
    decode: Callable[[Any, str], T],
) -> ReferenceOr[T]:
    """
    Turn an unresolved slot into a resolved one.

    Inline and already resolved slots are returned unchanged.

    Args:
        slot: The slot to normalize
        resolver: Resolver used for unresolved slots
        decode: Decoder for the object type the slot holds

    Returns:
        An Inline or Resolved slot
    """
    match slot:
        case Inline() | Resolved():
            return slot
        case Unresolved(pointer=pointer, summary=summary, description=description):
            value = resolver.resolve(pointer, decode)
            return Resolved(pointer=pointer, value=value, summary=summary, description=description)
    raise TypeError(f"Expected a reference slot, got {type(slot).__name__}")


def normalize_and_map(
    slot: ReferenceOr[T],
    resolver: PointerResolver,
    decode: Callable[[Any, str], T],
    fn: Callable[[T], T],
) -> ReferenceOr[T]:
    """
    Normalize a slot, then apply fn to the value it holds.

    fn dereferences the contents of the value. While it runs on a value that
    came from a reference, the reference is marked as being expanded so a
    reference back to it further down raises CircularReference.
    """
    match slot:
        case Inline(value=value):
            return Inline(fn(value))
        case Resolved(pointer=pointer, value=value, summary=summary, description=description):
            with resolver.expanding(pointer):
                value = fn(value)
            return Resolved(pointer=pointer, value=value, summary=summary, description=description)
        case Unresolved():
            return normalize_and_map(normalize(slot, resolver, decode), resolver, decode, fn)
    raise TypeError(f"Expected a reference slot, got {type(slot).__name__}")
