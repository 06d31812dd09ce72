"""State carried through one hydration.

A :class:`HydrationRun` lives for one top-level call and is shared by every
nested child hydration; a :class:`HydrationContext` lives for one object.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from xml_hydrator.mapping import CompiledMapping
from xml_hydrator.shared import (
    CorrelationLogger,
    DiagnosticEntry,
    DiagnosticSeverity,
    HydrationConfig,
    HydrationMetrics,
)
from xml_hydrator.tree import XMLNode


@dataclass
class HydrationRun:
    """Configuration, logger and diagnostic sink of one top-level call."""

    config: HydrationConfig
    logger: CorrelationLogger
    correlation_id: Optional[str] = None
    metrics: HydrationMetrics = field(default_factory=HydrationMetrics)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._minimum_severity = DiagnosticSeverity.from_name(self.config.diagnostic_level)

    def is_recording(self, severity: DiagnosticSeverity) -> bool:
        """Check whether a diagnostic of ``severity`` would be kept."""
        return self.config.enable_diagnostics and severity >= self._minimum_severity

    def record(
        self,
        severity: DiagnosticSeverity,
        code: str,
        message: str,
        node_path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record a diagnostic if diagnostics are enabled at this severity."""
        if not self.is_recording(severity):
            return
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                code=code,
                message=message,
                component="hydrator",
                node_path=node_path,
                details=details,
                correlation_id=self.correlation_id,
            )
        )


@dataclass
class HydrationContext:
    """Object being hydrated, its dispatch table and its result list.

    Attributes:
        target: Object receiving setter calls
        mapping: Dispatch table of the target's type
        parent_node: Effective parent node name for the parent-context guard
        root: Root of the (possibly detached) subtree being hydrated
        locate_root: Returns the path of ``root`` in the original document;
            only called when a path is needed, then cached
        depth: Nesting level of child hydrations (top level = 0)
        run: Shared state of the top-level call
        results: Target first, then the results of every spawned child
    """

    target: Any
    mapping: CompiledMapping
    parent_node: str
    root: XMLNode
    locate_root: Callable[[], str]
    depth: int
    run: HydrationRun
    results: List[Any] = field(default_factory=list)
    _root_path: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.results:
            self.results.append(self.target)

    @property
    def root_path(self) -> str:
        """Path of ``root`` in the original document."""
        if self._root_path is None:
            self._root_path = self.locate_root()
        return self._root_path

    def node_path(self, node: XMLNode) -> str:
        """Path of ``node`` in the original document."""
        return self.root_path + node.get_path()[len(self.root.get_path()):]
