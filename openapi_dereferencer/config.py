"""
Configuration for dereferencing and for writing the dereferenced document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite the existing file


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        indent: JSON indentation, None for compact output
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    indent: int | None = 2
    atomic_write: bool = True


@dataclass
class DereferenceConfig:
    """Configuration options for dereferencing."""

    # Follow a reference whose target is itself a reference
    follow_chained_refs: bool = True

    # Keep the original pointer in the encoded output of resolved slots
    annotate_resolved_refs: bool = False

    # Key used for the pointer when annotate_resolved_refs is set
    ref_annotation_key: str = "x-resolved-ref"

    # Let a reference's summary/description replace the target's on output
    apply_reference_overrides: bool = True

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> DereferenceConfig:
        """Create a config from a dictionary."""
        config = DereferenceConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                for ok, ov in v.items():
                    if ok == "mode":
                        ov = OutputMode(ov)
                    if hasattr(config.output, ok):
                        setattr(config.output, ok, ov)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "follow_chained_refs": self.follow_chained_refs,
            "annotate_resolved_refs": self.annotate_resolved_refs,
            "ref_annotation_key": self.ref_annotation_key,
            "apply_reference_overrides": self.apply_reference_overrides,
            "output": {
                "mode": self.output.mode.value,
                "indent": self.output.indent,
                "atomic_write": self.output.atomic_write,
            },
        }
