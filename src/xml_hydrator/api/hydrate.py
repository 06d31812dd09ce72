"""Module-level hydration functions.

Simple entry points for the common case; use :class:`XMLHydrator` directly to
reuse one configured engine across many documents.
"""

from pathlib import Path
from typing import Any, Optional, Union

from xml_hydrator.engine import ResultSet, XMLHydrator
from xml_hydrator.shared import HydrationConfig, get_logger
from xml_hydrator.tree import load_document
from xml_hydrator.tree.loader import SourceType

# Max length for content preview in logs
PREVIEW_LENGTH = 100


def _is_raw_source(document: Any) -> bool:
    return isinstance(document, (str, bytes, Path)) or (
        hasattr(document, "read") and not hasattr(document, "tag")
    )


def hydrate(
    document: Union[Any, SourceType],
    root_object: Any,
    config: Optional[HydrationConfig] = None,
    correlation_id: Optional[str] = None,
) -> ResultSet:
    """Hydrate ``root_object`` from a parsed tree or raw XML input.

    Parsed trees (XMLNode, lxml, ElementTree) are used directly; strings,
    bytes, paths and file-like objects are parsed first.

    Args:
        document: Parsed tree or raw XML input
        root_object: Instance of a type with a mapping description
        config: Optional hydration configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ResultSet with the root object first, then every created descendant

    Examples:
        >>> results = hydrate('<menu><type>breakfast</type></menu>', Menu())
        >>> results.root.menu_type
        'breakfast'
    """
    if _is_raw_source(document):
        document = load_document(document, correlation_id)
    return XMLHydrator(config=config, correlation_id=correlation_id).hydrate(
        document, root_object
    )


def hydrate_string(
    xml_string: Union[str, bytes],
    root_object: Any,
    config: Optional[HydrationConfig] = None,
    correlation_id: Optional[str] = None,
) -> ResultSet:
    """Parse ``xml_string`` and hydrate ``root_object`` from it."""
    logger = get_logger(__name__, correlation_id, "hydrate_string")
    preview = xml_string[:PREVIEW_LENGTH]
    logger.debug(
        "Hydrating from string",
        extra={
            "content_length": len(xml_string),
            "preview": preview.decode("utf-8", "replace") if isinstance(preview, bytes) else preview,
        },
    )
    document = load_document(xml_string, correlation_id)
    return XMLHydrator(config=config, correlation_id=correlation_id).hydrate(
        document, root_object
    )


def hydrate_file(
    file_path: Union[str, Path],
    root_object: Any,
    config: Optional[HydrationConfig] = None,
    correlation_id: Optional[str] = None,
) -> ResultSet:
    """Parse the XML file at ``file_path`` and hydrate ``root_object`` from it."""
    document = load_document(Path(file_path), correlation_id)
    return XMLHydrator(config=config, correlation_id=correlation_id).hydrate(
        document, root_object
    )
