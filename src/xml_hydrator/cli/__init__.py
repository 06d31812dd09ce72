"""Command-line interface for XML Hydrator.

Provides the xml-hydrate tool, which hydrates a type from an XML file and
prints the resulting objects, and shows the mapping description of a type.
"""

from .main import main

__all__ = ["main"]
