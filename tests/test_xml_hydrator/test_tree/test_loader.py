"""Tests for loading raw XML into node trees."""

import io

import pytest

from xml_hydrator.shared import DocumentLoadError
from xml_hydrator.tree import load_document, load_file


class TestLoadDocument:
    """Test the lxml-backed loader."""

    def test_load_string(self):
        """Test a str is parsed as XML content."""
        node = load_document("<menu><type>breakfast</type></menu>")

        assert node.local_name == "menu"
        assert node.child_elements[0].text_content == "breakfast"

    def test_load_string_with_encoding_declaration(self):
        """Test declarations are accepted in str input."""
        node = load_document('<?xml version="1.0" encoding="UTF-8"?>\n<menu/>')

        assert node.local_name == "menu"

    def test_load_string_declaring_another_encoding(self):
        """Test str input is not re-encoded against its declaration."""
        xml = '<?xml version="1.0" encoding="ISO-8859-1"?><menu><type>caf\u00e9</type></menu>'

        node = load_document(xml)

        assert node.child_elements[0].text_content == "caf\u00e9"

    def test_load_string_with_byte_order_mark(self):
        """Test a leading byte order mark before the declaration."""
        node = load_document('\ufeff<?xml version="1.0" encoding="UTF-16"?><menu/>')

        assert node.local_name == "menu"

    def test_load_bytes(self):
        """Test bytes input."""
        assert load_document(b"<food id='1'/>").get_attribute("id") == "1"

    def test_load_file_like(self):
        """Test file-like input."""
        assert load_document(io.BytesIO(b"<menu/>")).local_name == "menu"

    def test_load_path(self, tmp_path):
        """Test path input through load_file."""
        path = tmp_path / "menu.xml"
        path.write_text("<menu><food/></menu>")

        node = load_file(str(path))

        assert node.child_elements[0].local_name == "food"

    def test_malformed_xml(self):
        """Test malformed XML raises DocumentLoadError."""
        with pytest.raises(DocumentLoadError, match="Malformed XML"):
            load_document("<menu><type></menu>")

    def test_missing_file(self, tmp_path):
        """Test unreadable paths raise DocumentLoadError."""
        with pytest.raises(DocumentLoadError):
            load_file(tmp_path / "missing.xml")

    def test_unsupported_source(self):
        """Test unsupported input types."""
        with pytest.raises(DocumentLoadError, match="Unsupported source type"):
            load_document(42)  # type: ignore

    def test_entities_are_not_resolved(self):
        """Test external entities are not fetched."""
        xml = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE menu [<!ENTITY ext SYSTEM "file:///etc/passwd">]>'
            "<menu><type>&ext;</type></menu>"
        )

        node = load_document(xml)

        assert "root:" not in node.text_content
