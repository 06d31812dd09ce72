"""XML Hydrator.

Hydrates typed Python objects from XML documents using a declarative mapping
description attached to each type instead of hand-written parsing code.

Progressive API Disclosure:
- Level 1: Simple functions - hydrate(), hydrate_string(), hydrate_file()
- Level 2: Configured engine - XMLHydrator class
- Level 3: Custom document sources - TreeAdapter / register_adapter()
"""

__version__ = "0.1.0"
__author__ = "XML Hydrator Team"

# Progressive API disclosure - Level 1: Simple functions
from .api import hydrate, hydrate_file, hydrate_string

# Progressive API disclosure - Level 2: Configured engine
from .engine import ResultSet, XMLHydrator

# Mapping descriptions
from .mapping import (
    ChildRule,
    MappingDescription,
    NestedPath,
    Setter,
    register_mapping,
)

# Configuration and errors
from .shared import (
    HydrationConfig,
    HydrationError,
    MappingConfigurationError,
)

# Document trees
from .tree import XMLNode, load_document

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple hydration functions
    "hydrate",
    "hydrate_string",
    "hydrate_file",

    # Level 2: Configured engine
    "XMLHydrator",
    "ResultSet",

    # Mapping descriptions
    "ChildRule",
    "MappingDescription",
    "NestedPath",
    "Setter",
    "register_mapping",

    # Configuration and errors
    "HydrationConfig",
    "HydrationError",
    "MappingConfigurationError",

    # Document trees
    "XMLNode",
    "load_document",
]
