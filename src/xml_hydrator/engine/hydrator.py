"""Traversal engine that hydrates objects from a document tree.

The engine walks the document once per object. Every element it visits is
either handed to a child object, matched against the field rules of the
current object, or skipped while traversal continues into its children.

Matching is scoped by position rather than by name alone: a field rule only
applies to an element whose immediate parent carries the mapping's parent
node name, and a child rule only to an element under the rule's own parent
node (or the mapping's). The same element name can therefore mean different
things at different depths of one document.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from xml_hydrator.engine.context import HydrationContext, HydrationRun
from xml_hydrator.engine.result import ResultSet
from xml_hydrator.mapping import (
    CompiledChildRule,
    CompiledNestedPath,
    MappingRegistry,
    SetterRef,
    get_registry,
)
from xml_hydrator.shared import (
    DiagnosticCode,
    DiagnosticSeverity,
    HydrationConfig,
    MappingConfigurationError,
    StructuralMismatchError,
    get_logger,
)
from xml_hydrator.tree import XMLNode, to_tree

MS_PER_SECOND = 1000

Scope = Mapping[str, Any]


class XMLHydrator:
    """Configurable hydration engine, reusable across documents.

    Attributes:
        config: Hydration configuration
        registry: Registry used to look up mappings and dispatch tables
        correlation_id: Correlation ID for request tracking

    Examples:
        >>> hydrator = XMLHydrator()
        >>> results = hydrator.hydrate(load_document(xml), Menu())
        >>> results.root.menu_type
        'breakfast'
    """

    def __init__(
        self,
        config: Optional[HydrationConfig] = None,
        registry: Optional[MappingRegistry] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the hydrator.

        Args:
            config: Hydration configuration (defaults to HydrationConfig())
            registry: Mapping registry (defaults to the global registry)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or HydrationConfig()
        self.registry = registry or get_registry()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "hydrator")

        self._stats_lock = threading.Lock()
        self._hydration_count = 0
        self._object_count = 0
        self._total_processing_time = 0.0

    def hydrate(self, document: Any, root_object: Any) -> ResultSet:
        """Hydrate ``root_object`` and its descendants from ``document``.

        Args:
            document: XMLNode, lxml or ElementTree element or element tree
            root_object: Caller-provided instance of a type with a mapping

        Returns:
            ResultSet with the root first, then every created descendant

        Raises:
            MappingConfigurationError: A mapping, child type or setter is
                unusable; no partial result is returned
            UnsupportedDocumentError: The document cannot be adapted
        """
        start_time = time.time()
        root = to_tree(document, self.correlation_id)
        logger = self.logger.bind(
            root_node=root.local_name,
            target_type=type(root_object).__name__,
        )
        run = HydrationRun(
            config=self.config,
            logger=logger,
            correlation_id=self.correlation_id,
        )

        logger.info("Starting hydration")

        try:
            objects = self._hydrate_root(root, root_object, run, root.get_path, 0)
        except MappingConfigurationError as e:
            logger.error(
                "Hydration aborted by mapping configuration",
                extra={
                    "mapping_key": e.mapping_key,
                    "node_path": e.node_path,
                    "error": e.message,
                },
            )
            raise

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        run.metrics.processing_time_ms = processing_time

        with self._stats_lock:
            self._hydration_count += 1
            self._object_count += len(objects)
            self._total_processing_time += processing_time

        logger.info(
            "Hydration completed",
            extra={
                "object_count": len(objects),
                "setters_invoked": run.metrics.setters_invoked,
                "diagnostic_count": len(run.diagnostics),
                "processing_time_ms": processing_time,
            },
        )
        return ResultSet(objects, run.diagnostics, run.metrics, self.correlation_id)

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get hydrator usage statistics."""
        with self._stats_lock:
            count = self._hydration_count
            return {
                "total_hydrations": count,
                "total_objects": self._object_count,
                "total_processing_time_ms": self._total_processing_time,
                "average_processing_time_ms": (
                    self._total_processing_time / count if count > 0 else 0.0
                ),
                "correlation_id": self.correlation_id,
            }

    def reset_statistics(self) -> None:
        """Reset hydrator usage statistics."""
        with self._stats_lock:
            self._hydration_count = 0
            self._object_count = 0
            self._total_processing_time = 0.0

    # Root hydration

    def _hydrate_root(
        self,
        root: XMLNode,
        target: Any,
        run: HydrationRun,
        locate_root: Callable[[], str],
        depth: int,
    ) -> List[Any]:
        try:
            mapping = self.registry.compiled(type(target))
        except MappingConfigurationError as e:
            raise e.with_node_path(locate_root())

        context = HydrationContext(
            target=target,
            mapping=mapping,
            parent_node=mapping.parent_node or root.local_name,
            root=root,
            locate_root=locate_root,
            depth=depth,
            run=run,
        )
        run.metrics.max_depth = max(run.metrics.max_depth, depth)

        if root.has_attributes:
            self._match_attributes(context, root, mapping.field_rules)

        self._iterate_nodes(context, root.children, mapping.field_rules)
        return context.results

    # Node traversal

    def _iterate_nodes(
        self, context: HydrationContext, nodes: List[XMLNode], scope: Scope
    ) -> None:
        for node in nodes:
            if not node.is_element:
                continue
            context.run.metrics.nodes_visited += 1

            try:
                delegated, next_scope = self._parse_node(context, node, scope)
            except MappingConfigurationError as e:
                raise e.with_node_path(context.node_path(node))

            if not delegated and node.has_child_nodes:
                self._iterate_nodes(context, node.children, next_scope)

    def _parse_node(
        self, context: HydrationContext, node: XMLNode, scope: Scope
    ) -> Tuple[bool, Scope]:
        """Apply the rules of the current object to one element.

        Returns:
            Whether the node was handed to a child object, and the scope to
            use for the node's children
        """
        name = node.local_name
        parent_name = node.parent_name
        mapping = context.mapping

        child_rule = mapping.child_rules.get(name)
        if child_rule is not None and parent_name == (
            child_rule.parent_node or context.parent_node
        ):
            self._create_child(context, child_rule, node)
            return True, scope

        # elements are not unique by name; only direct children of the
        # declared parent node belong to this mapping
        if parent_name != context.parent_node:
            return False, scope

        if node.has_attributes:
            self._match_attributes(context, node, mapping.field_rules)

        rule = scope.get(name)
        if rule is None:
            return False, scope

        if isinstance(rule, CompiledNestedPath):
            self._traverse_path(context, rule.rules, node)
            return False, rule.rules

        self._dispatch_leaf(context, rule, node)
        return False, scope

    def _traverse_path(
        self, context: HydrationContext, rules: Scope, node: XMLNode
    ) -> None:
        """Match a nested path among the children of ``node``."""
        for child in node.children:
            if child.is_element and child.has_attributes:
                self._match_attributes(context, child, rules)

        for key, rule in rules.items():
            for child in node.children:
                if not child.is_element or child.local_name != key:
                    continue
                if isinstance(rule, CompiledNestedPath):
                    self._traverse_path(context, rule.rules, child)
                else:
                    self._dispatch_leaf(context, rule, child)

    # Matching

    def _attribute_key(self, node: XMLNode, attribute_name: str) -> str:
        if attribute_name == self.config.value_attribute:
            return node.local_name
        return node.local_name + attribute_name[:1].upper() + attribute_name[1:]

    def _match_attributes(
        self, context: HydrationContext, node: XMLNode, scope: Scope
    ) -> None:
        matched: Dict[str, str] = {}
        for attribute in node.attributes:
            key = self._attribute_key(node, attribute.local_name)
            rule = scope.get(key)
            if not isinstance(rule, SetterRef):
                continue

            if key in matched:
                context.run.metrics.ambiguous_attribute_keys += 1
                context.run.record(
                    DiagnosticSeverity.WARNING,
                    DiagnosticCode.AMBIGUOUS_ATTRIBUTE_KEY,
                    f"Attributes {matched[key]!r} and {attribute.local_name!r} "
                    f"both map to {key!r}",
                    node_path=context.node_path(node),
                    details={"mapping_key": key},
                )
            matched[key] = attribute.local_name

            context.run.metrics.attributes_matched += 1
            self._invoke(context, rule, attribute.value, node)

    def _dispatch_leaf(
        self, context: HydrationContext, rule: SetterRef, node: XMLNode
    ) -> None:
        # a same-named element holding structure must not trigger the setter
        if node.is_scalar_leaf:
            value = node.text_content
            if self.config.strip_text:
                value = value.strip()
            self._invoke(context, rule, value, node)
            return

        context.run.metrics.leaf_mismatches += 1
        # empty elements may carry their value in the value attribute
        if self.config.strict_structure and node.has_child_nodes:
            raise StructuralMismatchError(
                "Field rule matched an element without a scalar value",
                mapping_key=rule.key,
                node_path=context.node_path(node),
            )

        recording = context.run.is_recording(DiagnosticSeverity.DEBUG)
        logging_debug = context.run.logger.is_enabled_for(logging.DEBUG)
        if not (recording or logging_debug):
            return

        node_path = context.node_path(node)
        context.run.record(
            DiagnosticSeverity.DEBUG,
            DiagnosticCode.STRUCTURAL_LEAF_MISMATCH,
            f"Element {node.local_name!r} is not a scalar leaf; {rule.name} not called",
            node_path=node_path,
            details={
                "mapping_key": rule.key,
                "child_count": len(node.children),
            },
        )
        context.run.logger.debug(
            "Skipped non-leaf match",
            extra={"mapping_key": rule.key, "node_path": node_path},
        )

    def _invoke(
        self, context: HydrationContext, rule: SetterRef, value: str, node: XMLNode
    ) -> None:
        rule.invoke(context.target, value)
        context.run.metrics.setters_invoked += 1

        if context.run.logger.is_enabled_for(logging.DEBUG):
            context.run.logger.debug(
                "Setter invoked",
                extra={
                    "setter": rule.name,
                    "mapping_key": rule.key,
                    "node_path": context.node_path(node),
                },
            )

    # Child objects

    def _create_child(
        self, context: HydrationContext, rule: CompiledChildRule, node: XMLNode
    ) -> None:
        child = rule.instantiate()
        context.run.metrics.objects_created += 1

        def locate_child() -> str:
            return context.node_path(node)

        if context.run.logger.is_enabled_for(logging.DEBUG):
            context.run.logger.debug(
                "Spawning child object",
                extra={
                    "child_type": rule.target_type.__name__,
                    "node_path": locate_child(),
                    "depth": context.depth + 1,
                },
            )

        child_results = self._hydrate_root(
            node.detached(), child, context.run, locate_child, context.depth + 1
        )
        rule.link(child, context.target)
        context.results.extend(child_results)
