"""Generic document tree consumed by the hydration engine.

Nodes follow DOM conventions: an element's ``children`` list holds element
nodes and the text, CDATA, comment and processing-instruction nodes between
them, in document order. Only local names are kept; namespace URIs are
recorded but never used for matching.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

TEXT_NODE_NAME = "#text"
CDATA_NODE_NAME = "#cdata-section"
COMMENT_NODE_NAME = "#comment"


class NodeType(Enum):
    """Kinds of nodes that can appear in a document tree."""

    ELEMENT = auto()
    TEXT = auto()
    CDATA = auto()
    COMMENT = auto()
    PROCESSING_INSTRUCTION = auto()


_TEXTUAL_TYPES = (NodeType.TEXT, NodeType.CDATA)


@dataclass(frozen=True)
class XMLAttribute:
    """A single attribute with its namespace-stripped name."""

    local_name: str
    value: str
    namespace: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate attribute values."""
        if not self.local_name:
            raise ValueError("Attribute name cannot be empty")
        if not isinstance(self.value, str):
            raise TypeError("Attribute value must be a string")


@dataclass(eq=False)
class XMLNode:
    """A node of the document tree.

    Elements carry a local name, attributes and children; text-like nodes
    carry a ``value``. The ``parent`` reference is maintained by the node
    itself when children are attached.
    """

    local_name: str
    node_type: NodeType = NodeType.ELEMENT
    attributes: List[XMLAttribute] = field(default_factory=list)
    children: List["XMLNode"] = field(default_factory=list)
    value: Optional[str] = None
    namespace: Optional[str] = None
    parent: Optional["XMLNode"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate node values and establish parent-child relationships."""
        if not self.local_name:
            raise ValueError("Node name cannot be empty")
        if self.node_type is not NodeType.ELEMENT:
            if self.attributes:
                raise ValueError("Only element nodes can carry attributes")
            if self.children:
                raise ValueError("Only element nodes can have children")

        for child in self.children:
            child.parent = self

    # Construction helpers

    @classmethod
    def element(
        cls,
        local_name: str,
        attributes: Optional[Union[Mapping[str, str], List[XMLAttribute]]] = None,
        children: Optional[List[Union["XMLNode", str]]] = None,
        namespace: Optional[str] = None,
    ) -> "XMLNode":
        """Build an element; plain strings in ``children`` become text nodes."""
        if attributes is None:
            attribute_list: List[XMLAttribute] = []
        elif isinstance(attributes, Mapping):
            attribute_list = [XMLAttribute(k, v) for k, v in attributes.items()]
        else:
            attribute_list = list(attributes)

        child_nodes = [
            cls.text(child) if isinstance(child, str) else child
            for child in (children or [])
        ]
        return cls(
            local_name=local_name,
            attributes=attribute_list,
            children=child_nodes,
            namespace=namespace,
        )

    @classmethod
    def text(cls, value: str) -> "XMLNode":
        """Build a text node."""
        return cls(local_name=TEXT_NODE_NAME, node_type=NodeType.TEXT, value=value)

    # Structure

    @property
    def is_element(self) -> bool:
        """Check if this node is an element."""
        return self.node_type is NodeType.ELEMENT

    @property
    def has_attributes(self) -> bool:
        """Check if this node carries any attribute."""
        return len(self.attributes) > 0

    @property
    def has_child_nodes(self) -> bool:
        """Check if this node has children of any kind."""
        return len(self.children) > 0

    @property
    def first_child(self) -> Optional["XMLNode"]:
        """Get the first child node, if any."""
        return self.children[0] if self.children else None

    @property
    def child_elements(self) -> List["XMLNode"]:
        """Get element children only."""
        return [child for child in self.children if child.is_element]

    @property
    def parent_name(self) -> Optional[str]:
        """Local name of the parent element, or None for a detached root."""
        if self.parent is None:
            return None
        return self.parent.local_name

    @property
    def is_scalar_leaf(self) -> bool:
        """A single non-element child, i.e. ``<name>value</name>``."""
        return len(self.children) == 1 and not self.children[0].is_element

    @property
    def text_content(self) -> str:
        """Concatenated text of this node and all of its descendants."""
        if not self.is_element:
            return self.value or ""
        # comments and processing instructions do not contribute
        return "".join(
            child.text_content for child in self.children
            if child.is_element or child.node_type in _TEXTUAL_TYPES
        )

    def add_child(self, child: "XMLNode") -> None:
        """Add a child node and establish parent relationship."""
        if not isinstance(child, XMLNode):
            raise TypeError("Child must be an XMLNode instance")
        if not self.is_element:
            raise ValueError("Only element nodes can have children")

        child.parent = self
        self.children.append(child)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute with this local name."""
        for attribute in self.attributes:
            if attribute.local_name == name:
                return attribute.value
        return default

    def find_children(self, local_name: str) -> List["XMLNode"]:
        """Find all direct element children with matching local name."""
        return [
            child for child in self.children
            if child.is_element and child.local_name == local_name
        ]

    def iter_elements(self) -> Iterator["XMLNode"]:
        """Iterate over this element and its element descendants in document order."""
        if not self.is_element:
            return
        yield self
        for child in self.children:
            yield from child.iter_elements()

    def get_path(self) -> str:
        """Get XPath-like path to this node."""
        name = self.local_name if self.is_element else "text()"
        if self.parent is None:
            return f"/{name}"

        parent_path = self.parent.get_path()
        siblings = [
            child for child in self.parent.children
            if child.node_type is self.node_type and child.local_name == self.local_name
        ]
        if len(siblings) > 1:
            position = next(
                index for index, sibling in enumerate(siblings, 1) if sibling is self
            )
            return f"{parent_path}/{name}[{position}]"

        return f"{parent_path}/{name}"

    def get_depth(self) -> int:
        """Get depth of this node in the tree (root = 0)."""
        if self.parent is None:
            return 0
        return self.parent.get_depth() + 1

    def detached(self) -> "XMLNode":
        """Deep copy of the subtree rooted here, with no parent.

        The copy can be hydrated as a document of its own without touching
        the original tree.
        """
        return self._copy(None)

    def _copy(self, parent: Optional["XMLNode"]) -> "XMLNode":
        clone = XMLNode(
            local_name=self.local_name,
            node_type=self.node_type,
            attributes=list(self.attributes),
            value=self.value,
            namespace=self.namespace,
            parent=parent,
        )
        clone.children = [child._copy(clone) for child in self.children]
        return clone

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        if not self.is_element:
            return {"type": self.node_type.name.lower(), "value": self.value}

        result: Dict[str, Any] = {"name": self.local_name}
        if self.attributes:
            result["attributes"] = {a.local_name: a.value for a in self.attributes}
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result
