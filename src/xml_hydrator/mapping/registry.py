"""Lookup of mapping descriptions and their compiled dispatch tables.

A type declares its mapping either through an ``XML_MAPPING`` class
attribute or by being registered here, which lets callers map classes they
cannot modify.
"""

import threading
from typing import Any, Dict, Optional

from xml_hydrator.mapping.description import MappingDescription
from xml_hydrator.mapping.dispatch import CompiledMapping, compile_mapping
from xml_hydrator.shared import MappingConfigurationError

MAPPING_ATTRIBUTE = "XML_MAPPING"


class MappingRegistry:
    """Registry of mapping descriptions keyed by target class.

    Compiled dispatch tables are cached per class; registering or removing a
    mapping drops the cached table of that class.
    """

    def __init__(self) -> None:
        self._mappings: Dict[type, MappingDescription] = {}
        self._compiled: Dict[type, CompiledMapping] = {}
        self._lock = threading.RLock()

    def register(self, target_type: type, mapping: Any) -> MappingDescription:
        """Register a mapping for ``target_type``.

        Args:
            target_type: Class the mapping applies to
            mapping: A MappingDescription or the ``KEY_*`` dictionary layout

        Returns:
            The normalised MappingDescription
        """
        if not isinstance(target_type, type):
            raise MappingConfigurationError(
                "Mappings can only be registered for classes", target_type=target_type
            )
        description = MappingDescription.from_dict(mapping)
        with self._lock:
            self._mappings[target_type] = description
            self._compiled.pop(target_type, None)
        return description

    def unregister(self, target_type: type) -> bool:
        """Remove a registered mapping; returns False if none was registered."""
        with self._lock:
            self._compiled.pop(target_type, None)
            return self._mappings.pop(target_type, None) is not None

    def is_registered(self, target_type: type) -> bool:
        """Check whether an explicit mapping exists for ``target_type``."""
        with self._lock:
            return target_type in self._mappings

    def get(self, target_type: type) -> MappingDescription:
        """Get the mapping of ``target_type``.

        Explicit registrations take precedence over the ``XML_MAPPING``
        class attribute.

        Raises:
            MappingConfigurationError: No mapping is declared, or the declared
                one is malformed
        """
        with self._lock:
            registered: Optional[MappingDescription] = self._mappings.get(target_type)
        if registered is not None:
            return registered

        declared = getattr(target_type, MAPPING_ATTRIBUTE, None)
        if declared is None:
            raise MappingConfigurationError(
                f"No mapping description declared; set {MAPPING_ATTRIBUTE} "
                "or register one",
                target_type=target_type,
            )
        try:
            return MappingDescription.from_dict(declared)
        except MappingConfigurationError as e:
            e.target_type = target_type
            raise

    def compiled(self, target_type: type) -> CompiledMapping:
        """Get the cached dispatch table of ``target_type``, compiling it once."""
        with self._lock:
            cached = self._compiled.get(target_type)
            if cached is not None:
                return cached
            table = compile_mapping(target_type, self.get(target_type))
            self._compiled[target_type] = table
            return table

    def clear_cache(self) -> None:
        """Drop every compiled dispatch table."""
        with self._lock:
            self._compiled.clear()


_registry = MappingRegistry()


def get_registry() -> MappingRegistry:
    """Get the global mapping registry."""
    return _registry


def register_mapping(target_type: type, mapping: Any) -> MappingDescription:
    """Register a mapping for ``target_type`` in the global registry."""
    return _registry.register(target_type, mapping)


def get_mapping(target_type: type) -> MappingDescription:
    """Get the mapping of ``target_type`` from the global registry."""
    return _registry.get(target_type)
