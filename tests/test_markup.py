"""Tests for the markup tree and its lxml serializer."""

import pytest
from lxml import etree

from epub_creator.core.serializer import serialize
from epub_creator.errors import MalformedMetadataError
from epub_creator.models.markup import Element, check_xml_text


class TestFromMarkup:
    """Tests for Element.from_markup()."""

    def test_tag_only(self):
        element = Element.from_markup(["dc:title"])
        assert element == Element("dc:title")

    def test_attributes_and_text(self):
        element = Element.from_markup(
            ["dc:identifier", {"opf:scheme": "ISBN"}, "1234567890"]
        )
        assert element.tag == "dc:identifier"
        assert element.attributes == {"opf:scheme": "ISBN"}
        assert element.text == "1234567890"

    def test_nested_children(self):
        element = Element.from_markup(["a", ["b", "x"], "tail"])
        assert element.children == [Element("b", children=["x"]), "tail"]

    def test_round_trip_to_markup(self):
        value = ["dc:creator", {"opf:role": "aut"}, "E. A. Poe"]
        assert Element.from_markup(value).to_markup() == value

    def test_rejects_non_list(self):
        with pytest.raises(MalformedMetadataError, match="is not an array"):
            Element.from_markup(1)

    def test_rejects_missing_tag(self):
        with pytest.raises(MalformedMetadataError, match="tag name"):
            Element.from_markup([{"id": "x"}])

    def test_rejects_bad_child(self):
        with pytest.raises(MalformedMetadataError, match="neither an array nor a string"):
            Element.from_markup(["dc:title", 42])

    def test_rejects_non_string_attribute(self):
        with pytest.raises(MalformedMetadataError, match="must map a string"):
            Element.from_markup(["dc:title", {"id": 3}, "x"])

    def test_rejects_invalid_name(self):
        with pytest.raises(MalformedMetadataError, match="not a valid name"):
            Element.from_markup(["1title", "x"])

    def test_rejects_unknown_prefix(self):
        with pytest.raises(MalformedMetadataError, match="unknown prefix"):
            Element.from_markup(["calibre:series", "x"])

    def test_rejects_name_with_trailing_newline(self):
        with pytest.raises(MalformedMetadataError, match="not a valid name"):
            Element.from_markup(["dc:title\n", "x"])

    def test_accepts_namespace_declarations(self):
        element = Element.from_markup(
            ["metadata", {"xmlns": "urn:a", "xmlns:dc": "http://purl.org/dc/elements/1.1/"}]
        )
        assert list(element.attributes) == ["xmlns", "xmlns:dc"]

    @pytest.mark.parametrize("name", ["xmlns bad", "xmlns:", "xmlnsdc", "xmlns:1dc", "xmlns:a:b"])
    def test_rejects_malformed_namespace_declaration(self, name):
        with pytest.raises(MalformedMetadataError, match="namespace declaration"):
            Element.from_markup(["dc:publisher", {name: "http://x"}, "Acme"])

    @pytest.mark.parametrize("name", ["xmlns:xml", "xmlns:xmlns"])
    def test_rejects_reserved_prefix_declaration(self, name):
        with pytest.raises(MalformedMetadataError, match="cannot be redeclared"):
            Element.from_markup(["dc:publisher", {name: "http://x"}, "Acme"])

    def test_rejects_empty_namespace(self):
        with pytest.raises(MalformedMetadataError, match="empty namespace"):
            Element.from_markup(["dc:publisher", {"xmlns:x": ""}, "Acme"])

    @pytest.mark.parametrize("text", ["Bad\x01Title", "a\x0bb", "\x00", "x\ufffe"])
    def test_rejects_illegal_characters_in_text(self, text):
        with pytest.raises(MalformedMetadataError, match="not allowed in XML"):
            Element.from_markup(["dc:title", text])

    def test_rejects_illegal_characters_in_nested_text(self):
        with pytest.raises(MalformedMetadataError, match="not allowed in XML"):
            Element.from_markup(["dc:description", ["b", "bold\x1f"]])

    def test_rejects_illegal_characters_in_attribute_value(self):
        with pytest.raises(MalformedMetadataError, match="not allowed in XML"):
            Element.from_markup(["dc:creator", {"opf:role": "a\x07ut"}, "Poe"])

    def test_allows_tab_and_line_breaks(self):
        element = Element.from_markup(["dc:description", "one\ttwo\nthree\r\n"])
        assert element.text == "one\ttwo\nthree\r\n"


class TestCheckXmlText:
    """Tests for check_xml_text()."""

    def test_returns_value(self):
        assert check_xml_text("Les Misérables") == "Les Misérables"

    def test_reports_position(self):
        with pytest.raises(ValueError, match="position 5"):
            check_xml_text("Front\x0bMatter")


class TestSerialize:
    """Tests for serialize()."""

    def test_declaration_and_doctype(self):
        doctype = '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" "x.dtd">'
        output = serialize(Element("html", {"xmlns": "http://www.w3.org/1999/xhtml"}), doctype)
        assert output.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")
        assert doctype.encode() in output

    def test_prefixed_names_resolve_to_declared_namespaces(self):
        tree = Element(
            "metadata",
            {"xmlns:dc": "http://purl.org/dc/elements/1.1/", "xmlns:opf": "http://www.idpf.org/2007/opf"},
            [Element("dc:identifier", {"opf:scheme": "UUID"}, ["abc"])],
        )
        root = etree.fromstring(serialize(tree))
        identifier = root[0]
        assert identifier.tag == "{http://purl.org/dc/elements/1.1/}identifier"
        assert identifier.get("{http://www.idpf.org/2007/opf}scheme") == "UUID"
        assert identifier.text == "abc"

    def test_default_namespace_applies_to_descendants(self):
        tree = Element("ncx", {"xmlns": "urn:test"}, [Element("head")])
        root = etree.fromstring(serialize(tree))
        assert root[0].tag == "{urn:test}head"

    def test_mixed_content(self):
        tree = Element("p", children=["a", Element("b", children=["b"]), "c"])
        root = etree.fromstring(serialize(tree))
        assert root.text == "a"
        assert root[0].tail == "c"

    def test_text_is_escaped(self):
        tree = Element("dc:description", children=["<p>A & B</p>"])
        tree.attributes["xmlns:dc"] = "http://purl.org/dc/elements/1.1/"
        root = etree.fromstring(serialize(tree))
        assert root.text == "<p>A & B</p>"

    def test_undeclared_prefix_fails(self):
        with pytest.raises(ValueError, match="Undeclared namespace prefix"):
            serialize(Element("dc:title", children=["x"]))
