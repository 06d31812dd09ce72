"""Declarative mapping descriptions attached to hydratable types.

A :class:`MappingDescription` states which nodes feed which setters of a type
and which nodes spawn nested objects. It is inert configuration: nothing here
touches a document or an object.

Example:

    class Menu:
        XML_MAPPING = MappingDescription.build(
            parent_node="menu",
            fields={
                "type": "set_menu_type",
                "serving": "set_serving_time",
                "header": {"sender": {"identification": "set_sender"}},
            },
            children={
                "food": ChildRule(FoodItem, parent_link="set_parent"),
            },
        )

The plain dictionary layout is accepted through :meth:`MappingDescription.from_dict`
using the ``KEY_*`` constants of this module.
"""

import difflib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from xml_hydrator.shared import MappingConfigurationError

# Keys of the dictionary layout accepted by MappingDescription.from_dict
KEY_PARENT_NODE = "parent_node"
KEY_MAP = "map"
KEY_CHILDREN = "children"
KEY_CLASS = "class"
KEY_SETTER = "setter"

_DESCRIPTION_KEYS = [KEY_PARENT_NODE, KEY_MAP, KEY_CHILDREN]
_CHILD_KEYS = [KEY_CLASS, KEY_SETTER, KEY_PARENT_NODE]

SetterTarget = Union[str, Callable[[Any, Any], Any]]
TypeReference = Union[type, str]


def _check_setter_target(target: Any, key: Optional[str]) -> None:
    if isinstance(target, str):
        if not target:
            raise MappingConfigurationError("Setter name cannot be empty", mapping_key=key)
    elif not callable(target):
        raise MappingConfigurationError(
            f"Setter must be a method name or a callable, got {type(target).__name__}",
            mapping_key=key,
        )


def setter_display_name(target: SetterTarget) -> str:
    """Readable name of a setter target for logs and error messages."""
    if isinstance(target, str):
        return target
    return getattr(target, "__qualname__", None) or repr(target)


@dataclass(frozen=True)
class Setter:
    """Field rule that passes the node or attribute value to a setter."""

    target: SetterTarget

    def __post_init__(self) -> None:
        _check_setter_target(self.target, None)

    @property
    def name(self) -> str:
        return setter_display_name(self.target)


@dataclass(frozen=True)
class NestedPath:
    """Field rule that continues matching among the node's children.

    No new object is created: the rules inside still write to the object the
    enclosing mapping belongs to.
    """

    rules: Mapping[str, "FieldRule"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", _normalise_field_rules(self.rules))


FieldRule = Union[Setter, NestedPath]


@dataclass(frozen=True)
class ChildRule:
    """Node that spawns a nested object linked back to its parent.

    Attributes:
        target_type: Class to instantiate, or its dotted import path
        parent_link: Setter called on the new child with the parent object
        parent_node: Required parent local name; defaults to the parent
            node name of the mapping that owns this rule
    """

    target_type: TypeReference
    parent_link: SetterTarget
    parent_node: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.target_type, str):
            if not self.target_type:
                raise MappingConfigurationError("Child target type cannot be empty")
        elif not isinstance(self.target_type, type):
            raise MappingConfigurationError(
                "Child target type must be a class or a dotted import path",
                target_type=self.target_type,
            )
        _check_setter_target(self.parent_link, None)
        if self.parent_node is not None and not self.parent_node:
            raise MappingConfigurationError("Child parent_node cannot be empty")


def _normalise_field_rule(key: str, value: Any) -> FieldRule:
    if isinstance(value, (Setter, NestedPath)):
        return value
    if isinstance(value, Mapping):
        return NestedPath(value)
    if isinstance(value, str) or callable(value):
        try:
            return Setter(value)
        except MappingConfigurationError as e:
            e.mapping_key = key
            raise
    raise MappingConfigurationError(
        f"Unsupported field rule of type {type(value).__name__}", mapping_key=key
    )


def _check_key(key: Any) -> None:
    if not isinstance(key, str) or not key:
        raise MappingConfigurationError(f"Mapping keys must be non-empty strings, got {key!r}")


def _normalise_field_rules(rules: Any) -> Mapping[str, FieldRule]:
    if not isinstance(rules, Mapping):
        raise MappingConfigurationError(
            f"Field rules must be a mapping, got {type(rules).__name__}"
        )
    normalised: Dict[str, FieldRule] = {}
    for key, value in rules.items():
        _check_key(key)
        normalised[key] = _normalise_field_rule(key, value)
    return MappingProxyType(normalised)


def _normalise_child_rule(key: str, value: Any) -> ChildRule:
    if isinstance(value, ChildRule):
        return value
    if not isinstance(value, Mapping):
        raise MappingConfigurationError(
            f"Child rule must be a ChildRule or a mapping, got {type(value).__name__}",
            mapping_key=key,
        )

    for entry in value:
        if entry not in _CHILD_KEYS:
            raise MappingConfigurationError(
                f"Unknown child rule entry {entry!r}",
                mapping_key=key,
                suggestions=difflib.get_close_matches(str(entry), _CHILD_KEYS),
            )
    for required in (KEY_CLASS, KEY_SETTER):
        if required not in value:
            raise MappingConfigurationError(
                f"Child rule is missing the {required!r} entry", mapping_key=key
            )

    try:
        return ChildRule(
            target_type=value[KEY_CLASS],
            parent_link=value[KEY_SETTER],
            parent_node=value.get(KEY_PARENT_NODE),
        )
    except MappingConfigurationError as e:
        e.mapping_key = key
        raise


def _normalise_child_rules(rules: Any) -> Mapping[str, ChildRule]:
    if not isinstance(rules, Mapping):
        raise MappingConfigurationError(
            f"Child rules must be a mapping, got {type(rules).__name__}"
        )
    normalised: Dict[str, ChildRule] = {}
    for key, value in rules.items():
        _check_key(key)
        normalised[key] = _normalise_child_rule(key, value)
    return MappingProxyType(normalised)


@dataclass(frozen=True)
class MappingDescription:
    """Parent context, field rules and child rules of one hydratable type.

    Field rule keys are node names, or a node name followed by a capitalised
    attribute name (``identificationCodingScheme`` for the ``codingScheme``
    attribute of ``identification``). A name cannot be both a field rule and
    a child rule.
    """

    parent_node: Optional[str] = None
    field_rules: Mapping[str, FieldRule] = field(default_factory=dict)
    child_rules: Mapping[str, ChildRule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalise rules and validate the description."""
        if self.parent_node is not None and (
            not isinstance(self.parent_node, str) or not self.parent_node
        ):
            raise MappingConfigurationError("parent_node must be a non-empty string or None")

        object.__setattr__(self, "field_rules", _normalise_field_rules(self.field_rules))
        object.__setattr__(self, "child_rules", _normalise_child_rules(self.child_rules))

        overlap = sorted(set(self.field_rules) & set(self.child_rules))
        if overlap:
            raise MappingConfigurationError(
                "Names cannot be both field rules and child rules",
                mapping_key=overlap[0],
                suggestions=[f"remove {name!r} from one of the rule sets" for name in overlap],
            )

    @classmethod
    def build(
        cls,
        parent_node: Optional[str] = None,
        fields: Optional[Mapping[str, Any]] = None,
        children: Optional[Mapping[str, Any]] = None,
    ) -> "MappingDescription":
        """Build a description from plain values.

        Strings and callables in ``fields`` become :class:`Setter` rules and
        nested mappings become :class:`NestedPath` rules; ``children`` values
        may be :class:`ChildRule` instances or dictionaries in the
        ``KEY_CLASS``/``KEY_SETTER`` layout.
        """
        return cls(
            parent_node=parent_node,
            field_rules=fields or {},
            child_rules=children or {},
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MappingDescription":
        """Create a description from the ``KEY_*`` dictionary layout.

        ``KEY_MAP`` is required; ``KEY_PARENT_NODE`` and ``KEY_CHILDREN`` are
        optional.
        """
        if isinstance(data, MappingDescription):
            return data
        if not isinstance(data, Mapping):
            raise MappingConfigurationError(
                f"Mapping description must be a mapping, got {type(data).__name__}"
            )
        for key in data:
            if key not in _DESCRIPTION_KEYS:
                raise MappingConfigurationError(
                    f"Unknown mapping description entry {key!r}",
                    mapping_key=str(key),
                    suggestions=difflib.get_close_matches(str(key), _DESCRIPTION_KEYS),
                )
        if KEY_MAP not in data:
            raise MappingConfigurationError(
                f"Mapping description is missing the required {KEY_MAP!r} entry"
            )

        return cls(
            parent_node=data.get(KEY_PARENT_NODE),
            field_rules=data[KEY_MAP],
            child_rules=data.get(KEY_CHILDREN) or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the description back to the ``KEY_*`` dictionary layout."""

        def _rules_to_dict(rules: Mapping[str, FieldRule]) -> Dict[str, Any]:
            return {
                key: _rules_to_dict(rule.rules) if isinstance(rule, NestedPath) else rule.target
                for key, rule in rules.items()
            }

        result: Dict[str, Any] = {KEY_MAP: _rules_to_dict(self.field_rules)}
        if self.parent_node is not None:
            result[KEY_PARENT_NODE] = self.parent_node
        if self.child_rules:
            children: Dict[str, Any] = {}
            for key, rule in self.child_rules.items():
                entry: Dict[str, Any] = {
                    KEY_CLASS: rule.target_type,
                    KEY_SETTER: rule.parent_link,
                }
                if rule.parent_node is not None:
                    entry[KEY_PARENT_NODE] = rule.parent_node
                children[key] = entry
            result[KEY_CHILDREN] = children
        return result
