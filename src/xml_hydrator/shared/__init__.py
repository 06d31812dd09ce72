"""Shared utilities for XML object hydration.

This module provides the configuration object, diagnostic and metric types,
the exception hierarchy and correlation-aware logging used by every layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    HydrationConfig,
)
from .errors import (
    DocumentLoadError,
    HydrationError,
    MappingConfigurationError,
    StructuralMismatchError,
    UnsupportedDocumentError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticCode,
    DiagnosticEntry,
    DiagnosticSeverity,
    HydrationMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "HydrationConfig",
    "DocumentLoadError",
    "HydrationError",
    "MappingConfigurationError",
    "StructuralMismatchError",
    "UnsupportedDocumentError",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticCode",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "HydrationMetrics",
]
