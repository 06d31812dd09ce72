"""Per-type dispatch tables built from mapping descriptions.

Compiling a mapping checks every setter it names against the target class
once, so traversal only ever calls setters that are known to exist.
"""

import difflib
import importlib
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from xml_hydrator.mapping.description import (
    ChildRule,
    MappingDescription,
    NestedPath,
    SetterTarget,
    TypeReference,
    setter_display_name,
)
from xml_hydrator.shared import MappingConfigurationError


def resolve_type(reference: TypeReference) -> type:
    """Resolve a class or a ``pkg.module.Class`` / ``pkg.module:Class`` path.

    Raises:
        MappingConfigurationError: The path cannot be imported or does not
            name a class
    """
    if isinstance(reference, type):
        return reference
    if not isinstance(reference, str) or not reference:
        raise MappingConfigurationError(
            f"Cannot resolve target type from {reference!r}", target_type=reference
        )

    if ":" in reference:
        module_name, _, attribute_path = reference.partition(":")
    else:
        module_name, _, attribute_path = reference.rpartition(".")
    if not module_name or not attribute_path:
        raise MappingConfigurationError(
            f"Target type {reference!r} is not a dotted import path",
            target_type=reference,
        )

    try:
        resolved: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise MappingConfigurationError(
            f"Cannot import module {module_name!r}: {e}", target_type=reference
        ) from e

    for part in attribute_path.split("."):
        try:
            resolved = getattr(resolved, part)
        except AttributeError:
            raise MappingConfigurationError(
                f"Module {module_name!r} has no attribute {attribute_path!r}",
                target_type=reference,
            ) from None

    if not isinstance(resolved, type):
        raise MappingConfigurationError(
            f"Target type {reference!r} is not a class", target_type=reference
        )
    return resolved


class SetterRef:
    """A validated setter, callable as ``invoke(obj, value)``."""

    __slots__ = ("key", "target", "name")

    def __init__(self, key: str, target: SetterTarget) -> None:
        self.key = key
        self.target = target
        self.name = setter_display_name(target)

    def invoke(self, obj: Any, value: Any) -> None:
        if isinstance(self.target, str):
            getattr(obj, self.target)(value)
        else:
            self.target(obj, value)

    def __repr__(self) -> str:
        return f"SetterRef({self.key!r} -> {self.name})"


@dataclass(frozen=True)
class CompiledNestedPath:
    """Compiled form of a NestedPath rule."""

    rules: Mapping[str, "CompiledFieldRule"]


CompiledFieldRule = Union[SetterRef, CompiledNestedPath]


def compile_setter(target_type: type, key: str, target: SetterTarget) -> SetterRef:
    """Validate a setter against ``target_type`` and wrap it.

    Raises:
        MappingConfigurationError: A named setter is missing or not callable
    """
    if isinstance(target, str):
        attribute = getattr(target_type, target, None)
        if attribute is None:
            public_names = [name for name in dir(target_type) if not name.startswith("_")]
            raise MappingConfigurationError(
                f"Setter {target!r} does not exist",
                mapping_key=key,
                target_type=target_type,
                suggestions=difflib.get_close_matches(target, public_names),
            )
        if not callable(attribute):
            raise MappingConfigurationError(
                f"Setter {target!r} is not callable",
                mapping_key=key,
                target_type=target_type,
            )
    return SetterRef(key, target)


def _compile_field_rules(
    target_type: type, rules: Mapping[str, Any]
) -> Mapping[str, CompiledFieldRule]:
    compiled: Dict[str, CompiledFieldRule] = {}
    for key, rule in rules.items():
        if isinstance(rule, NestedPath):
            compiled[key] = CompiledNestedPath(_compile_field_rules(target_type, rule.rules))
        else:
            compiled[key] = compile_setter(target_type, key, rule.target)
    return MappingProxyType(compiled)


class CompiledChildRule:
    """A child rule whose target type is resolved on first use."""

    def __init__(self, key: str, rule: ChildRule) -> None:
        self.key = key
        self.rule = rule
        self._target_type: Optional[type] = None
        self._parent_link: Optional[SetterRef] = None
        self._lock = threading.Lock()

    @property
    def parent_node(self) -> Optional[str]:
        return self.rule.parent_node

    def _resolve(self) -> Tuple[type, SetterRef]:
        with self._lock:
            if self._target_type is not None and self._parent_link is not None:
                return self._target_type, self._parent_link
            try:
                target_type = resolve_type(self.rule.target_type)
            except MappingConfigurationError as e:
                e.mapping_key = self.key
                raise
            parent_link = compile_setter(target_type, self.key, self.rule.parent_link)
            self._target_type, self._parent_link = target_type, parent_link
            return target_type, parent_link

    @property
    def target_type(self) -> type:
        """The resolved child class."""
        return self._resolve()[0]

    def instantiate(self) -> Any:
        """Create an empty child instance with the default constructor."""
        target_type = self.target_type
        try:
            return target_type()
        except TypeError as e:
            raise MappingConfigurationError(
                f"Child type cannot be instantiated without arguments: {e}",
                mapping_key=self.key,
                target_type=target_type,
            ) from e

    def link(self, child: Any, parent: Any) -> None:
        """Give ``child`` its back-reference to ``parent``."""
        _, parent_link = self._resolve()
        parent_link.invoke(child, parent)


@dataclass(frozen=True)
class CompiledMapping:
    """Dispatch table of one target type."""

    target_type: type
    description: MappingDescription
    field_rules: Mapping[str, CompiledFieldRule]
    child_rules: Mapping[str, CompiledChildRule]

    @property
    def parent_node(self) -> Optional[str]:
        return self.description.parent_node


def compile_mapping(target_type: type, description: MappingDescription) -> CompiledMapping:
    """Build the dispatch table of ``target_type`` from its description."""
    try:
        field_rules = _compile_field_rules(target_type, description.field_rules)
    except MappingConfigurationError as e:
        if e.target_type is None:
            e.target_type = target_type
        raise

    child_rules = MappingProxyType({
        key: CompiledChildRule(key, rule) for key, rule in description.child_rules.items()
    })
    return CompiledMapping(
        target_type=target_type,
        description=description,
        field_rules=field_rules,
        child_rules=child_rules,
    )
