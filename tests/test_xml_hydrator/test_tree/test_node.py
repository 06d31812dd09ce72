"""Tests for the generic document tree."""

import pytest

from xml_hydrator.tree import NodeType, XMLAttribute, XMLNode


class TestXMLAttribute:
    """Test attribute validation."""

    def test_attribute_creation(self):
        """Test basic attribute creation."""
        attribute = XMLAttribute("codingScheme", "ABC")

        assert attribute.local_name == "codingScheme"
        assert attribute.value == "ABC"
        assert attribute.namespace is None

    def test_empty_name_rejected(self):
        """Test empty attribute names raise ValueError."""
        with pytest.raises(ValueError, match="Attribute name cannot be empty"):
            XMLAttribute("", "value")

    def test_non_string_value_rejected(self):
        """Test attribute values must be strings."""
        with pytest.raises(TypeError):
            XMLAttribute("id", 3)  # type: ignore


class TestXMLNodeCreation:
    """Test node construction and validation."""

    def test_element_helper_builds_children(self):
        """Test strings become text nodes and parents are linked."""
        name = XMLNode.element("name", children=["Belgian Waffles"])
        food = XMLNode.element("food", attributes={"id": "1"}, children=[name])

        assert name.parent is food
        assert name.first_child.node_type is NodeType.TEXT
        assert name.first_child.parent is name
        assert food.get_attribute("id") == "1"

    def test_empty_name_rejected(self):
        """Test that an element needs a name."""
        with pytest.raises(ValueError, match="Node name cannot be empty"):
            XMLNode("")

    def test_text_nodes_cannot_have_children(self):
        """Test non-element nodes reject children and attributes."""
        with pytest.raises(ValueError, match="Only element nodes can have children"):
            XMLNode("#text", node_type=NodeType.TEXT, children=[XMLNode("a")])

        with pytest.raises(ValueError, match="Only element nodes can carry attributes"):
            XMLNode(
                "#text",
                node_type=NodeType.TEXT,
                attributes=[XMLAttribute("a", "b")],
            )

    def test_add_child(self):
        """Test adding children establishes parent relationship."""
        parent = XMLNode.element("menu")
        child = XMLNode.element("food")

        parent.add_child(child)

        assert child.parent is parent
        assert parent.children == [child]
        assert child.parent_name == "menu"

    def test_add_child_rejects_non_nodes(self):
        """Test add_child type checking."""
        with pytest.raises(TypeError, match="Child must be an XMLNode instance"):
            XMLNode.element("menu").add_child("food")  # type: ignore

    def test_add_child_to_text_node_rejected(self):
        """Test text nodes cannot receive children."""
        with pytest.raises(ValueError):
            XMLNode.text("x").add_child(XMLNode.element("a"))


class TestXMLNodeStructure:
    """Test structural queries."""

    def test_scalar_leaf(self):
        """Test a single text child makes a scalar leaf."""
        assert XMLNode.element("price", children=["$5.95"]).is_scalar_leaf

    def test_element_child_is_not_scalar_leaf(self):
        """Test a single element child does not make a scalar leaf."""
        price = XMLNode.element("price", children=[XMLNode.element("amount", children=["5"])])

        assert not price.is_scalar_leaf

    def test_empty_and_mixed_are_not_scalar_leaves(self):
        """Test empty elements and several text nodes are not scalar leaves."""
        assert not XMLNode.element("price").is_scalar_leaf
        assert not XMLNode.element("price", children=["5", "95"]).is_scalar_leaf

    def test_text_content_skips_comments(self):
        """Test text content concatenates text but not comments."""
        comment = XMLNode("#comment", node_type=NodeType.COMMENT, value="note")
        node = XMLNode.element(
            "description",
            children=["Two ", comment, XMLNode.element("b", children=["famous"]), " waffles"],
        )

        assert node.text_content == "Two famous waffles"

    def test_child_elements_and_find(self):
        """Test element filtering helpers."""
        menu = XMLNode.element(
            "menu",
            children=["\n", XMLNode.element("food"), "\n", XMLNode.element("type")],
        )

        assert [child.local_name for child in menu.child_elements] == ["food", "type"]
        assert len(menu.find_children("food")) == 1
        assert [node.local_name for node in menu.iter_elements()] == ["menu", "food", "type"]

    def test_paths_and_depth(self):
        """Test XPath-like paths index repeated siblings."""
        first = XMLNode.element("food", children=[XMLNode.element("name", children=["a"])])
        second = XMLNode.element("food")
        XMLNode.element("menu", children=[first, second])

        assert first.get_path() == "/menu/food[1]"
        assert second.get_path() == "/menu/food[2]"
        assert first.children[0].get_path() == "/menu/food[1]/name"
        assert first.children[0].first_child.get_path() == "/menu/food[1]/name/text()"
        assert first.children[0].get_depth() == 2

    def test_detached_copy(self):
        """Test detached copies share no nodes with the original."""
        name = XMLNode.element("name", children=["Waffles"])
        food = XMLNode.element("food", attributes={"id": "1"}, children=[name])
        XMLNode.element("menu", children=[food])

        copy = food.detached()

        assert copy is not food
        assert copy.parent is None
        assert copy.get_path() == "/food"
        assert copy.children[0] is not name
        assert copy.children[0].parent is copy
        assert copy.children[0].text_content == "Waffles"
        assert food.parent is not None

    def test_to_dict(self):
        """Test dictionary representation."""
        node = XMLNode.element("price", attributes={"currency": "USD"}, children=["5"])

        assert node.to_dict() == {
            "name": "price",
            "attributes": {"currency": "USD"},
            "children": [{"type": "text", "value": "5"}],
        }
