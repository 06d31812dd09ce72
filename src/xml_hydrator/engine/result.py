"""Result of a top-level hydration call."""

from typing import Any, Dict, Iterator, List, Optional, Sequence, Type, TypeVar, overload

from xml_hydrator.shared import DiagnosticEntry, DiagnosticSeverity, HydrationMetrics

T = TypeVar("T")


class ResultSet(Sequence[Any]):
    """Flat, ordered collection of every object one hydration produced.

    The root object comes first, followed by each child's own flattened
    subtree in the order its node was encountered. The set holds the only
    references the engine kept; the objects belong to the caller.
    """

    def __init__(
        self,
        objects: List[Any],
        diagnostics: Optional[List[DiagnosticEntry]] = None,
        metrics: Optional[HydrationMetrics] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self._objects = list(objects)
        self.diagnostics: List[DiagnosticEntry] = list(diagnostics or [])
        self.metrics = metrics or HydrationMetrics()
        self.correlation_id = correlation_id

    @overload
    def __getitem__(self, index: int) -> Any: ...

    @overload
    def __getitem__(self, index: slice) -> List[Any]: ...

    def __getitem__(self, index: Any) -> Any:
        return self._objects[index]

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._objects)

    def __repr__(self) -> str:
        return f"ResultSet({len(self._objects)} objects, {len(self.diagnostics)} diagnostics)"

    @property
    def root(self) -> Any:
        """The caller-provided root object."""
        if not self._objects:
            raise IndexError("ResultSet is empty")
        return self._objects[0]

    def of_type(self, target_type: Type[T]) -> List[T]:
        """Objects that are instances of ``target_type``, in result order."""
        return [obj for obj in self._objects if isinstance(obj, target_type)]

    def to_list(self) -> List[Any]:
        """Copy of the objects as a plain list."""
        return list(self._objects)

    def get_diagnostics_by_code(self, code: str) -> List[DiagnosticEntry]:
        """Diagnostics carrying ``code``."""
        return [diag for diag in self.diagnostics if diag.code == code]

    def has_warnings(self) -> bool:
        """Check if any diagnostic is a warning or worse."""
        return any(diag.severity >= DiagnosticSeverity.WARNING for diag in self.diagnostics)

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the hydration."""
        type_counts: Dict[str, int] = {}
        for obj in self._objects:
            name = type(obj).__name__
            type_counts[name] = type_counts.get(name, 0) + 1

        diagnostics_by_code: Dict[str, int] = {}
        for diag in self.diagnostics:
            diagnostics_by_code[diag.code] = diagnostics_by_code.get(diag.code, 0) + 1

        return {
            "object_count": len(self._objects),
            "objects_by_type": type_counts,
            "diagnostics_by_code": diagnostics_by_code,
            "metrics": self.metrics.to_dict(),
            "correlation_id": self.correlation_id,
        }
