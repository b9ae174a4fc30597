"""Labeled markup tree used for every generated document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Union

from epub_creator.errors import MalformedMetadataError

# Prefixes a user may put on explicit metadata tags and attributes
KNOWN_PREFIXES = frozenset({"dc", "opf", "xml"})

_NAME_RE = re.compile(r"[A-Za-z_][\w.-]*(:[A-Za-z_][\w.-]*)?", re.ASCII)
_NAMESPACE_DECLARATION_RE = re.compile(r"xmlns(:[A-Za-z_][\w.-]*)?", re.ASCII)

# C0 controls other than tab, LF and CR, lone surrogates, U+FFFE and U+FFFF
_ILLEGAL_XML_CHARS_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

Node = Union["Element", str]


def check_xml_text(value: str) -> str:
    """Return value unchanged if XML can carry it.

    Raises:
        ValueError: If value contains a character XML 1.0 does not allow
    """
    match = _ILLEGAL_XML_CHARS_RE.search(value)
    if match:
        raise ValueError(
            f"character {match.group()!r} at position {match.start()} is not allowed in XML"
        )
    return value


@dataclass
class Element:
    """One markup element: tag, ordered attributes, mixed children."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    @property
    def text(self) -> str | None:
        """First text child, if any."""
        for child in self.children:
            if isinstance(child, str):
                return child
        return None

    def append(self, child: Node) -> Element:
        self.children.append(child)
        return self

    def to_markup(self) -> list[Any]:
        """Return the nested-list form accepted by from_markup()."""
        result: list[Any] = [self.tag]
        if self.attributes:
            result.append(dict(self.attributes))
        for child in self.children:
            result.append(child if isinstance(child, str) else child.to_markup())
        return result

    @classmethod
    def from_markup(cls, value: Any) -> Element:
        """Parse ``["tag", {attrs}?, child...]`` into an Element.

        Raises:
            MalformedMetadataError: If the value is not well-structured markup
        """
        if not isinstance(value, list):
            raise MalformedMetadataError(
                f"Invalid markup: {value!r} is not an array"
            )
        if not value or not isinstance(value[0], str):
            raise MalformedMetadataError(
                f"Invalid markup: {value!r} does not start with a tag name"
            )

        tag = value[0]
        _check_name(tag, value)
        rest = value[1:]

        attributes: dict[str, str] = {}
        if rest and isinstance(rest[0], dict):
            for name, attr_value in rest[0].items():
                if not isinstance(name, str) or not isinstance(attr_value, str):
                    raise MalformedMetadataError(
                        f"Invalid markup: attribute {name!r}={attr_value!r} of "
                        f"<{tag}> must map a string to a string"
                    )
                if name.startswith("xmlns"):
                    _check_namespace_declaration(name, attr_value, value)
                else:
                    _check_name(name, value)
                _check_text(attr_value, value)
                attributes[name] = attr_value
            rest = rest[1:]

        children: list[Node] = []
        for child in rest:
            if isinstance(child, str):
                _check_text(child, value)
                children.append(child)
            elif isinstance(child, list):
                children.append(cls.from_markup(child))
            else:
                raise MalformedMetadataError(
                    f"Invalid markup: {child!r} is neither an array nor a string"
                )

        return cls(tag=tag, attributes=attributes, children=children)


def _check_name(name: str, context: Any) -> None:
    if not _NAME_RE.fullmatch(name):
        raise MalformedMetadataError(
            f"Invalid markup: {name!r} in {context!r} is not a valid name"
        )
    if ":" in name:
        prefix = name.split(":", 1)[0]
        if prefix not in KNOWN_PREFIXES:
            raise MalformedMetadataError(
                f"Invalid markup: unknown prefix {prefix!r} in {name!r}"
            )


def _check_namespace_declaration(name: str, uri: str, context: Any) -> None:
    match = _NAMESPACE_DECLARATION_RE.fullmatch(name)
    if not match:
        raise MalformedMetadataError(
            f"Invalid markup: {name!r} in {context!r} is not a valid namespace declaration"
        )
    prefix = (match.group(1) or ":")[1:]
    if prefix in ("xml", "xmlns"):
        raise MalformedMetadataError(
            f"Invalid markup: prefix {prefix!r} in {context!r} cannot be redeclared"
        )
    if not uri:
        raise MalformedMetadataError(
            f"Invalid markup: {name!r} in {context!r} declares an empty namespace"
        )


def _check_text(text: str, context: Any) -> None:
    try:
        check_xml_text(text)
    except ValueError as e:
        raise MalformedMetadataError(f"Invalid markup: {e} in {context!r}") from None
