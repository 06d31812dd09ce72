"""Exception hierarchy for XML object hydration."""

from typing import Any, List, Optional


class HydrationError(Exception):
    """Base exception for all hydration failures."""


class MappingConfigurationError(HydrationError):
    """A mapping description, child type or setter is unusable.

    Raised before or during traversal; aborts the whole hydration so that no
    partial object graph reaches the caller.
    """

    def __init__(
        self,
        message: str,
        mapping_key: Optional[str] = None,
        target_type: Optional[Any] = None,
        node_path: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.mapping_key = mapping_key
        self.target_type = target_type
        self.node_path = node_path
        self.suggestions = suggestions or []

    def with_node_path(self, node_path: str) -> "MappingConfigurationError":
        """Attach the path of the node being processed, keeping the innermost."""
        if self.node_path is None:
            self.node_path = node_path
        return self

    def __str__(self) -> str:
        parts = [self.message]
        if self.target_type is not None:
            name = getattr(self.target_type, "__qualname__", str(self.target_type))
            parts.append(f"type={name}")
        if self.mapping_key is not None:
            parts.append(f"key={self.mapping_key!r}")
        if self.node_path is not None:
            parts.append(f"node={self.node_path}")
        if self.suggestions:
            parts.append(f"did you mean: {', '.join(self.suggestions)}")
        return " | ".join(parts)


class StructuralMismatchError(HydrationError):
    """A field rule matched a node that does not hold a scalar value.

    Only raised when strict structure checking is enabled.
    """

    def __init__(self, message: str, mapping_key: str, node_path: str) -> None:
        super().__init__(f"{message} (key={mapping_key!r}, node={node_path})")
        self.mapping_key = mapping_key
        self.node_path = node_path


class UnsupportedDocumentError(HydrationError):
    """The document object cannot be adapted to a tree of nodes."""


class DocumentLoadError(HydrationError):
    """Raw XML input could not be parsed into a document."""
