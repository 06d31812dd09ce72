"""Hydration engine.

Key Components:
    XMLHydrator: Configurable, reusable traversal engine
    ResultSet: Ordered objects of one hydration with diagnostics and metrics
    HydrationContext: Per-object traversal state
"""

from .context import HydrationContext, HydrationRun
from .hydrator import XMLHydrator
from .result import ResultSet

__all__ = [
    "HydrationContext",
    "HydrationRun",
    "XMLHydrator",
    "ResultSet",
]
