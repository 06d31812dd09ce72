"""Adapters from third-party XML trees to the generic node tree.

The hydration engine only understands :class:`XMLNode`. Documents produced by
lxml or ``xml.etree.ElementTree`` are converted through the adapters in this
module; new sources can be supported by registering another
:class:`TreeAdapter` subclass.
"""

import threading
import time
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type

from xml_hydrator.shared import UnsupportedDocumentError, get_logger
from xml_hydrator.tree.node import (
    COMMENT_NODE_NAME,
    NodeType,
    XMLAttribute,
    XMLNode,
)

_PI_NODE_NAME = "#processing-instruction"


def split_qualified_name(name: str) -> Tuple[str, Optional[str]]:
    """Split ``{uri}local`` or ``prefix:local`` into local name and namespace.

    Examples:
        >>> split_qualified_name("{urn:example}price")
        ('price', 'urn:example')
        >>> split_qualified_name("ns:price")
        ('price', None)
    """
    if name.startswith("{"):
        namespace, _, local_name = name[1:].partition("}")
        return local_name, namespace
    if ":" in name:
        return name.split(":", 1)[1], None
    return name, None


@dataclass
class AdapterMetadata:
    """Metadata about a tree adapter."""

    name: str
    target_library: str
    description: str


class TreeAdapter(ABC):
    """Abstract base class for document tree adapters.

    An adapter recognises documents of one library and converts them into an
    :class:`XMLNode` tree, keeping text and comment nodes in document order.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    def is_available(self) -> bool:
        """Check whether the library this adapter targets can be imported."""
        return True

    @abstractmethod
    def accepts(self, document: Any) -> bool:
        """Check whether this adapter can convert ``document``."""

    @abstractmethod
    def to_node(self, document: Any) -> XMLNode:
        """Convert ``document`` to the root element of a node tree."""


class XMLNodeAdapter(TreeAdapter):
    """Pass-through adapter for trees that are already :class:`XMLNode`."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="xmlnode",
            target_library="xml_hydrator",
            description="Native node trees, used as-is",
        )

    def accepts(self, document: Any) -> bool:
        return isinstance(document, XMLNode)

    def to_node(self, document: Any) -> XMLNode:
        if not document.is_element:
            raise UnsupportedDocumentError("Document root must be an element node")
        return document


class _ElementTreeLikeAdapter(TreeAdapter):
    """Shared conversion for libraries following the ElementTree API."""

    def _convert(self, element: Any, comment_tag: Any, pi_tag: Any) -> XMLNode:
        tag = element.tag
        if tag is comment_tag:
            return XMLNode(
                local_name=COMMENT_NODE_NAME,
                node_type=NodeType.COMMENT,
                value=element.text or "",
            )
        if tag is pi_tag:
            return XMLNode(
                local_name=getattr(element, "target", None) or _PI_NODE_NAME,
                node_type=NodeType.PROCESSING_INSTRUCTION,
                value=element.text or "",
            )
        if not isinstance(tag, str):
            # entities and other special nodes carry no mappable content
            return XMLNode(
                local_name=_PI_NODE_NAME,
                node_type=NodeType.PROCESSING_INSTRUCTION,
                value="",
            )

        local_name, namespace = split_qualified_name(tag)
        attributes: List[XMLAttribute] = []
        for name, value in element.attrib.items():
            attribute_name, attribute_namespace = split_qualified_name(name)
            attributes.append(XMLAttribute(attribute_name, value, attribute_namespace))

        node = XMLNode(local_name=local_name, attributes=attributes, namespace=namespace)
        if element.text:
            node.add_child(XMLNode.text(element.text))
        for child in element:
            node.add_child(self._convert(child, comment_tag, pi_tag))
            if child.tail:
                node.add_child(XMLNode.text(child.tail))
        return node


class LxmlAdapter(_ElementTreeLikeAdapter):
    """Adapter for lxml.etree elements and element trees."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Conversion from lxml.etree._Element/_ElementTree",
        )

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def accepts(self, document: Any) -> bool:
        if not self.is_available():
            return False
        from lxml import etree

        return isinstance(document, (etree._Element, etree._ElementTree))

    def to_node(self, document: Any) -> XMLNode:
        from lxml import etree

        if isinstance(document, etree._ElementTree):
            document = document.getroot()
        if document is None or not isinstance(document.tag, str):
            raise UnsupportedDocumentError("lxml document has no root element")
        return self._convert(document, etree.Comment, etree.ProcessingInstruction)


class ElementTreeAdapter(_ElementTreeLikeAdapter):
    """Adapter for xml.etree.ElementTree elements and element trees."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            target_library="xml.etree.ElementTree",
            description="Conversion from ElementTree.Element/ElementTree",
        )

    def accepts(self, document: Any) -> bool:
        return isinstance(document, (ET.Element, ET.ElementTree))

    def to_node(self, document: Any) -> XMLNode:
        if isinstance(document, ET.ElementTree):
            document = document.getroot()
        if document is None or not isinstance(document.tag, str):
            raise UnsupportedDocumentError("ElementTree document has no root element")
        return self._convert(document, ET.Comment, ET.ProcessingInstruction)


class AdapterRegistry:
    """Registry of tree adapters, consulted in registration order."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[TreeAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[TreeAdapter]) -> None:
        """Register an adapter class under its metadata name.

        Args:
            adapter_class: Adapter class to register
        """
        name = adapter_class().metadata.name
        with self._lock:
            self._adapters[name] = adapter_class

    def get_adapter(
        self, adapter_name: str, correlation_id: Optional[str] = None
    ) -> Optional[TreeAdapter]:
        """Get an adapter instance by name, or None if unknown."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        return adapter_class(correlation_id)

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of registered adapters whose library is importable."""
        with self._lock:
            classes = list(self._adapters.values())
        adapters = [adapter_class() for adapter_class in classes]
        return [adapter.metadata for adapter in adapters if adapter.is_available()]

    def adapt(self, document: Any, correlation_id: Optional[str] = None) -> XMLNode:
        """Convert ``document`` with the first adapter that accepts it.

        Raises:
            UnsupportedDocumentError: No registered adapter accepts the document
        """
        with self._lock:
            classes = list(self._adapters.values())

        for adapter_class in classes:
            adapter = adapter_class(correlation_id)
            if not adapter.accepts(document):
                continue

            start_time = time.time()
            root = adapter.to_node(document)
            adapter._logger.debug(
                "Document adapted",
                extra={
                    "adapter": adapter.metadata.name,
                    "root": root.local_name,
                    "conversion_time_ms": (time.time() - start_time) * 1000,
                },
            )
            return root

        raise UnsupportedDocumentError(
            f"No tree adapter accepts documents of type {type(document).__name__}"
        )


_registry = AdapterRegistry()
_registry.register(XMLNodeAdapter)
_registry.register(LxmlAdapter)
_registry.register(ElementTreeAdapter)


def register_adapter(adapter_class: Type[TreeAdapter]) -> None:
    """Register an adapter class with the global registry."""
    _registry.register(adapter_class)


def get_adapter(
    adapter_name: str, correlation_id: Optional[str] = None
) -> Optional[TreeAdapter]:
    """Get an adapter from the global registry."""
    return _registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List adapters of the global registry whose library is available."""
    return _registry.list_available_adapters()


def to_tree(document: Any, correlation_id: Optional[str] = None) -> XMLNode:
    """Convert any supported document into its root :class:`XMLNode`."""
    return _registry.adapt(document, correlation_id)
