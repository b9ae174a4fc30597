"""Serialize markup trees with lxml."""

from lxml import etree

from epub_creator.models.markup import Element

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def _qualify(name: str, scope: dict[str | None, str], use_default: bool) -> str:
    if ":" in name:
        prefix, local = name.split(":", 1)
        uri = scope.get(prefix)
        if uri is None:
            raise ValueError(f"Undeclared namespace prefix {prefix!r} in {name!r}")
        return f"{{{uri}}}{local}"
    if use_default and scope.get(None):
        return f"{{{scope[None]}}}{name}"
    return name


def to_lxml(
    element: Element,
    parent: etree._Element | None = None,
    scope: dict[str | None, str] | None = None,
) -> etree._Element:
    """Convert an Element tree to lxml, resolving xmlns declarations."""
    scope = dict(scope or {"xml": XML_NAMESPACE})
    nsmap: dict[str | None, str] = {}
    attributes: list[tuple[str, str]] = []
    for name, value in element.attributes.items():
        if name == "xmlns":
            nsmap[None] = value
        elif name.startswith("xmlns:"):
            nsmap[name[len("xmlns:"):]] = value
        else:
            attributes.append((name, value))
    scope.update(nsmap)

    tag = _qualify(element.tag, scope, use_default=True)
    if parent is None:
        node = etree.Element(tag, nsmap=nsmap or None)
    else:
        node = etree.SubElement(parent, tag, nsmap=nsmap or None)
    for name, value in attributes:
        node.set(_qualify(name, scope, use_default=False), value)

    last: etree._Element | None = None
    for child in element.children:
        if isinstance(child, str):
            if last is None:
                node.text = (node.text or "") + child
            else:
                last.tail = (last.tail or "") + child
        else:
            last = to_lxml(child, node, scope)
    return node


def serialize(element: Element, doctype: str | None = None) -> bytes:
    """Return UTF-8 markup with an XML declaration and optional doctype."""
    return etree.tostring(
        to_lxml(element),
        xml_declaration=True,
        encoding="UTF-8",
        doctype=doctype,
        pretty_print=True,
    )
