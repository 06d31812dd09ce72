"""Document tree abstraction for XML object hydration.

Key Components:
    XMLNode: DOM-style node with local name, attributes, children and parent
    XMLAttribute: Namespace-stripped attribute name/value pair
    TreeAdapter: Base class converting third-party trees into XMLNode trees
    load_document: lxml-backed loader for strings, bytes, paths and files
"""

from .adapters import (
    AdapterMetadata,
    AdapterRegistry,
    ElementTreeAdapter,
    LxmlAdapter,
    TreeAdapter,
    XMLNodeAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
    split_qualified_name,
    to_tree,
)
from .loader import load_document, load_file
from .node import NodeType, XMLAttribute, XMLNode

__all__ = [
    "AdapterMetadata",
    "AdapterRegistry",
    "ElementTreeAdapter",
    "LxmlAdapter",
    "TreeAdapter",
    "XMLNodeAdapter",
    "get_adapter",
    "list_available_adapters",
    "register_adapter",
    "split_qualified_name",
    "to_tree",
    "load_document",
    "load_file",
    "NodeType",
    "XMLAttribute",
    "XMLNode",
]
