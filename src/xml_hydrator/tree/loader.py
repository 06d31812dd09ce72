"""Loading raw XML into a node tree.

Parsing itself is delegated to lxml; this module only normalises the input
types and converts the parsed document with :class:`LxmlAdapter`.
"""

import re
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from lxml import etree

from xml_hydrator.shared import DocumentLoadError, get_logger
from xml_hydrator.tree.adapters import LxmlAdapter
from xml_hydrator.tree.node import XMLNode

# Type definitions for input data
SourceType = Union[str, bytes, Path, BinaryIO, TextIO]

# lxml refuses str input that carries an encoding declaration
XML_DECLARATION = re.compile(r"^\ufeff?\s*<\?xml[^>]*\?>")


def _make_parser() -> "etree.XMLParser":
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=False,
        huge_tree=False,
    )


def load_document(
    source: SourceType, correlation_id: Optional[str] = None
) -> XMLNode:
    """Parse XML from a string, bytes, path or file-like object.

    A ``str`` is always treated as XML content; pass a :class:`Path` to read a
    file.

    Args:
        source: XML content or a location to read it from
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Root element of the parsed document

    Raises:
        DocumentLoadError: The input is not well-formed XML or cannot be read
    """
    logger = get_logger(__name__, correlation_id, "load_document")
    parser = _make_parser()

    try:
        if isinstance(source, Path):
            tree = etree.parse(str(source), parser)
            root = tree.getroot()
        elif isinstance(source, str):
            # already decoded; the declared encoding no longer applies
            text = XML_DECLARATION.sub("", source, count=1)
            root = etree.fromstring(text, parser)
        elif isinstance(source, bytes):
            root = etree.fromstring(source, parser)
        elif hasattr(source, "read"):
            root = etree.parse(source, parser).getroot()
        else:
            raise DocumentLoadError(
                f"Unsupported source type: {type(source).__name__}"
            )
    except etree.XMLSyntaxError as e:
        logger.error("XML syntax error", extra={"error": str(e)})
        raise DocumentLoadError(f"Malformed XML: {e}") from e
    except OSError as e:
        logger.error("Could not read XML source", extra={"error": str(e)})
        raise DocumentLoadError(f"Could not read XML source: {e}") from e

    if root is None:
        raise DocumentLoadError("XML source has no root element")

    logger.debug("Document loaded", extra={"root": root.tag})
    return LxmlAdapter(correlation_id).to_node(root)


def load_file(
    file_path: Union[str, Path], correlation_id: Optional[str] = None
) -> XMLNode:
    """Parse an XML file given as a string path or :class:`Path`."""
    return load_document(Path(file_path), correlation_id)
