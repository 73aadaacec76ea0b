"""
Pointer resolver.

Locates the raw value a local reference points to, caches it by pointer,
and decodes it into the typed object the caller expects.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from .cache import ResolutionCache
from .errors import CircularReference, ParsingError
from .model.slots import is_reference
from .pointer import find_first, ref_to_query

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PointerResolver:
    """Resolves local $ref pointers against the raw document."""

    def __init__(
        self,
        document: Any,
        cache: ResolutionCache | None = None,
        follow_chained_refs: bool = True,
    ):
        """
        Initialize the resolver.

        Args:
            document: The raw JSON tree pointers are evaluated against
            cache: Cache shared by every resolution, a new one when omitted
            follow_chained_refs: Whether a target that is itself a reference is followed
        """
        self.document = document
        self.cache = cache if cache is not None else ResolutionCache()
        self.follow_chained_refs = follow_chained_refs
        # Pointers being expanded on the current recursion branch
        self._active: list[str] = []

    def locate(self, reference: str) -> Any:
        """
        Return the raw value a pointer locates, evaluating the pointer at most once.

        Raises:
            UnsupportedRefFormat: If the reference is not local
            ParsingError: If the pointer matches nothing
        """
        found, value = self.cache.lookup(reference)
        if found:
            return value

        query = ref_to_query(reference)
        logger.debug("Evaluating %s as %s", reference, query)
        value = find_first(self.document, query, reference)
        return self.cache.store(reference, value)

    def resolve(
        self,
        reference: str,
        decode: Callable[[Any, str], T],
        follow_chain: bool | None = None,
    ) -> T:
        """
        Resolve a pointer and decode the located value.

        Args:
            reference: Local reference, e.g. "#/components/parameters/limit"
            decode: Decoder taking the raw value and its location
            follow_chain: Overrides follow_chained_refs for this call

        Returns:
            The decoded value

        Raises:
            UnsupportedRefFormat: If the reference is not local
            ParsingError: If the pointer matches nothing or the value does not decode
            CircularReference: If a chain of references loops
        """
        if follow_chain is None:
            follow_chain = self.follow_chained_refs

        target = reference
        value = self.locate(reference)
        if follow_chain:
            chain = [reference]
            while is_reference(value) and isinstance(value["$ref"], str):
                target = value["$ref"]
                if target in chain:
                    raise CircularReference(target, chain)
                logger.debug("Following %s to %s", chain[-1], target)
                chain.append(target)
                value = self.locate(target)

        try:
            # Decoders may keep parts of the value, the cached copy stays pristine
            return decode(copy.deepcopy(value), target)
        except ParsingError as e:
            raise ParsingError(f"Error decoding {reference}: {e.message}") from e

    @contextmanager
    def expanding(self, reference: str) -> Iterator[None]:
        """
        Mark a pointer as being expanded for the duration of the block.

        Raises:
            CircularReference: If the pointer is already being expanded on this branch
        """
        if reference in self._active:
            start = self._active.index(reference)
            raise CircularReference(reference, self._active[start:])
        self._active.append(reference)
        try:
            yield
        finally:
            self._active.pop()

    @property
    def active(self) -> list[str]:
        return list(self._active)
