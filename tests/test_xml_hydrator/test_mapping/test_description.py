"""Tests for mapping descriptions."""

import pytest

from xml_hydrator.mapping import (
    KEY_CHILDREN,
    KEY_CLASS,
    KEY_MAP,
    KEY_PARENT_NODE,
    KEY_SETTER,
    ChildRule,
    MappingDescription,
    NestedPath,
    Setter,
)
from xml_hydrator.shared import MappingConfigurationError


class Item:
    def set_parent(self, parent):
        self.parent = parent


class TestFieldRules:
    """Test field rule normalisation."""

    def test_strings_become_setters(self):
        """Test method names are wrapped in Setter rules."""
        description = MappingDescription.build(fields={"name": "set_name"})

        assert description.field_rules["name"] == Setter("set_name")
        assert description.field_rules["name"].name == "set_name"

    def test_callables_become_setters(self):
        """Test callables are accepted as setter targets."""

        def assign(obj, value):
            obj.value = value

        rule = MappingDescription.build(fields={"name": assign}).field_rules["name"]

        assert isinstance(rule, Setter)
        assert rule.target is assign
        assert rule.name.endswith("assign")

    def test_nested_mappings_become_paths(self):
        """Test nested dictionaries become NestedPath rules."""
        description = MappingDescription.build(
            fields={"header": {"sender": {"identification": "set_sender"}}},
        )

        header = description.field_rules["header"]
        assert isinstance(header, NestedPath)
        sender = header.rules["sender"]
        assert isinstance(sender, NestedPath)
        assert sender.rules["identification"] == Setter("set_sender")

    def test_rules_are_read_only(self):
        """Test normalised rule tables cannot be modified."""
        description = MappingDescription.build(fields={"name": "set_name"})

        with pytest.raises(TypeError):
            description.field_rules["other"] = Setter("x")  # type: ignore

    def test_empty_setter_name_rejected(self):
        """Test empty setter names carry the offending key."""
        with pytest.raises(MappingConfigurationError) as exc_info:
            MappingDescription.build(fields={"name": ""})

        assert exc_info.value.mapping_key == "name"

    def test_unsupported_rule_value_rejected(self):
        """Test values that are neither setters nor paths."""
        with pytest.raises(MappingConfigurationError, match="Unsupported field rule"):
            MappingDescription.build(fields={"name": 3})

    def test_empty_key_rejected(self):
        """Test mapping keys must be non-empty strings."""
        with pytest.raises(MappingConfigurationError, match="non-empty strings"):
            MappingDescription.build(fields={"": "set_name"})


class TestChildRules:
    """Test child rule normalisation."""

    def test_child_rule_instances(self):
        """Test ChildRule instances are kept."""
        rule = ChildRule(Item, parent_link="set_parent", parent_node="order")
        description = MappingDescription.build(children={"item": rule})

        assert description.child_rules["item"] is rule

    def test_child_rule_dictionaries(self):
        """Test the class/setter dictionary layout."""
        description = MappingDescription.build(
            children={"item": {KEY_CLASS: Item, KEY_SETTER: "set_parent"}},
        )

        rule = description.child_rules["item"]
        assert rule.target_type is Item
        assert rule.parent_link == "set_parent"
        assert rule.parent_node is None

    def test_dotted_type_reference(self):
        """Test target types may be given as import paths."""
        rule = ChildRule("xml_hydrator.examples.menu:FoodItem", parent_link="set_parent")

        assert rule.target_type == "xml_hydrator.examples.menu:FoodItem"

    def test_missing_setter_entry(self):
        """Test dictionaries need both class and setter."""
        with pytest.raises(MappingConfigurationError, match="missing the 'setter' entry"):
            MappingDescription.build(children={"item": {KEY_CLASS: Item}})

    def test_unknown_child_entry_suggests(self):
        """Test misspelled child entries get suggestions."""
        with pytest.raises(MappingConfigurationError) as exc_info:
            MappingDescription.build(
                children={"item": {KEY_CLASS: Item, "setr": "set_parent"}},
            )

        assert exc_info.value.mapping_key == "item"
        assert KEY_SETTER in exc_info.value.suggestions

    def test_invalid_target_type(self):
        """Test target types must be classes or import paths."""
        with pytest.raises(MappingConfigurationError, match="must be a class"):
            ChildRule(42, parent_link="set_parent")  # type: ignore

    def test_field_and_child_names_must_be_disjoint(self):
        """Test a name cannot be both a field rule and a child rule."""
        with pytest.raises(MappingConfigurationError) as exc_info:
            MappingDescription.build(
                fields={"item": "set_item"},
                children={"item": ChildRule(Item, parent_link="set_parent")},
            )

        assert exc_info.value.mapping_key == "item"


class TestDictionaryLayout:
    """Test from_dict/to_dict."""

    def test_from_dict(self):
        """Test the parent_node/map/children layout."""
        description = MappingDescription.from_dict({
            KEY_PARENT_NODE: "order",
            KEY_MAP: {"number": "set_number"},
            KEY_CHILDREN: {"item": {KEY_CLASS: Item, KEY_SETTER: "set_parent"}},
        })

        assert description.parent_node == "order"
        assert set(description.field_rules) == {"number"}
        assert set(description.child_rules) == {"item"}

    def test_from_dict_requires_map(self):
        """Test the map entry is required."""
        with pytest.raises(MappingConfigurationError, match="required 'map' entry"):
            MappingDescription.from_dict({KEY_PARENT_NODE: "order"})

    def test_from_dict_unknown_entry(self):
        """Test misspelled top-level entries get suggestions."""
        with pytest.raises(MappingConfigurationError) as exc_info:
            MappingDescription.from_dict({"mapp": {}})

        assert KEY_MAP in exc_info.value.suggestions

    def test_from_dict_passes_descriptions_through(self):
        """Test an existing description is returned unchanged."""
        description = MappingDescription.build(fields={"a": "set_a"})

        assert MappingDescription.from_dict(description) is description

    def test_to_dict_round_trip(self):
        """Test to_dict produces the layout from_dict accepts."""
        description = MappingDescription.build(
            parent_node="order",
            fields={"number": "set_number", "header": {"date": "set_date"}},
            children={"item": ChildRule(Item, parent_link="set_parent", parent_node="items")},
        )

        data = description.to_dict()

        assert data == {
            KEY_MAP: {"number": "set_number", "header": {"date": "set_date"}},
            KEY_PARENT_NODE: "order",
            KEY_CHILDREN: {
                "item": {KEY_CLASS: Item, KEY_SETTER: "set_parent", KEY_PARENT_NODE: "items"},
            },
        }
        assert MappingDescription.from_dict(data) == description

    def test_invalid_parent_node(self):
        """Test parent_node must be a non-empty string."""
        with pytest.raises(MappingConfigurationError):
            MappingDescription(parent_node="")
