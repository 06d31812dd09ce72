"""Diagnostic and metric types for XML object hydration.

Conditions that are not errors (a matched node that is not a scalar leaf, two
attributes collapsing onto one mapping key) are reported through these types
instead of being raised.
"""

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional


class DiagnosticSeverity(IntEnum):
    """Severity levels for diagnostic entries, ordered from least severe."""

    DEBUG = 10      # Expected mismatch, recorded for tracing only
    INFO = 20       # Informational messages
    WARNING = 30    # Input that was handled but is probably not intended
    ERROR = 40      # Condition that aborted hydration

    @classmethod
    def from_name(cls, name: str) -> "DiagnosticSeverity":
        """Look up a severity by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown diagnostic severity: {name!r}") from None


class DiagnosticCode:
    """Stable identifiers for the diagnostics the engine can record."""

    STRUCTURAL_LEAF_MISMATCH = "structural-leaf-mismatch"
    AMBIGUOUS_ATTRIBUTE_KEY = "ambiguous-attribute-key"


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    code: str
    message: str
    component: str
    node_path: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "code": self.code,
            "message": self.message,
            "component": self.component,
            "node_path": self.node_path,
            "details": dict(self.details or {}),
        }


@dataclass
class HydrationMetrics:
    """Counters collected over one top-level hydration call."""

    processing_time_ms: float = 0.0
    nodes_visited: int = 0
    setters_invoked: int = 0
    attributes_matched: int = 0
    objects_created: int = 0
    leaf_mismatches: int = 0
    ambiguous_attribute_keys: int = 0
    max_depth: int = 0

    @property
    def setters_per_node(self) -> float:
        """Average number of setter calls per visited node."""
        if self.nodes_visited == 0:
            return 0.0
        return self.setters_invoked / self.nodes_visited

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to a dictionary."""
        return {
            "processing_time_ms": self.processing_time_ms,
            "nodes_visited": self.nodes_visited,
            "setters_invoked": self.setters_invoked,
            "attributes_matched": self.attributes_matched,
            "objects_created": self.objects_created,
            "leaf_mismatches": self.leaf_mismatches,
            "ambiguous_attribute_keys": self.ambiguous_attribute_keys,
            "max_depth": self.max_depth,
        }
