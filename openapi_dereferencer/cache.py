"""
Cache of raw values located for reference pointers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ResolutionCache:
    """Write-once mapping from reference pointer to the raw value it locates.

    Attributes:
        hits: Number of lookups answered from the cache
        misses: Number of lookups that required a pointer evaluation
    """

    _values: dict[str, Any] = field(default_factory=dict)
    hits: int = 0
    misses: int = 0

    def __contains__(self, reference: str) -> bool:
        return reference in self._values

    def __len__(self) -> int:
        return len(self._values)

    def lookup(self, reference: str) -> tuple[bool, Any]:
        """Return (found, value) for a pointer and record the hit or miss."""
        if reference in self._values:
            self.hits += 1
            return True, self._values[reference]
        self.misses += 1
        return False, None

    def store(self, reference: str, value: Any) -> Any:
        """Store a value for a pointer unless one is already present.

        Returns:
            The value held by the cache for the pointer
        """
        return self._values.setdefault(reference, value)

    def pointers(self) -> list[str]:
        """Pointers cached so far, in first-resolution order."""
        return list(self._values)
