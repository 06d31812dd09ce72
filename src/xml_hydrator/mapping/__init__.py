"""Mapping descriptions for XML object hydration.

Key Components:
    MappingDescription: Parent context, field rules and child rules of a type
    Setter / NestedPath: The two kinds of field rule
    ChildRule: Node that spawns a nested object linked back to its parent
    MappingRegistry: Mapping lookup and cached per-type dispatch tables
"""

from .description import (
    KEY_CHILDREN,
    KEY_CLASS,
    KEY_MAP,
    KEY_PARENT_NODE,
    KEY_SETTER,
    ChildRule,
    FieldRule,
    MappingDescription,
    NestedPath,
    Setter,
)
from .dispatch import (
    CompiledChildRule,
    CompiledMapping,
    CompiledNestedPath,
    SetterRef,
    compile_mapping,
    resolve_type,
)
from .registry import (
    MAPPING_ATTRIBUTE,
    MappingRegistry,
    get_mapping,
    get_registry,
    register_mapping,
)

__all__ = [
    "KEY_CHILDREN",
    "KEY_CLASS",
    "KEY_MAP",
    "KEY_PARENT_NODE",
    "KEY_SETTER",
    "ChildRule",
    "FieldRule",
    "MappingDescription",
    "NestedPath",
    "Setter",
    "CompiledChildRule",
    "CompiledMapping",
    "CompiledNestedPath",
    "SetterRef",
    "compile_mapping",
    "resolve_type",
    "MAPPING_ATTRIBUTE",
    "MappingRegistry",
    "get_mapping",
    "get_registry",
    "register_mapping",
]
