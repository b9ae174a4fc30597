"""Merge explicit metadata elements with shorthand fields."""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from epub_creator.models.markup import Element
from epub_creator.models.request import SimpleMetadata

log = logging.getLogger(__name__)

UNIQUE_ID_ANCHOR = "BookId"
DEFAULT_LANGUAGE = "en"
DEFAULT_TITLE = "Untitled"


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ``2000-01-01T00:00:00.000Z``."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def find_element(elements: list[Element], tag: str) -> Element | None:
    """Return the first element with the given tag."""
    for element in elements:
        if element.tag == tag:
            return element
    return None


def get_element_text(elements: list[Element], tag: str) -> str | None:
    """Return the text of the first element with the given tag."""
    element = find_element(elements, tag)
    return element.text if element is not None else None


def _scheme(element: Element) -> str:
    return element.attributes.get("opf:scheme", "").lower()


def get_unique_id(elements: list[Element]) -> str | None:
    """Text of the first UUID-scheme identifier, else of the first identifier."""
    identifiers = [e for e in elements if e.tag == "dc:identifier"]
    for element in identifiers:
        if _scheme(element) == "uuid":
            return element.text
    return identifiers[0].text if identifiers else None


def merge_metadata(
    explicit: list[Any],
    simple: SimpleMetadata | None = None,
    now: Callable[[], datetime] | None = None,
    new_uuid: Callable[[], uuid.UUID] = uuid.uuid4,
) -> list[Element]:
    """Return explicit elements followed by synthesized defaults.

    Explicit elements are kept as given and always come first. Identifier,
    date, language and title are synthesized when absent; creator, ISBN,
    description and subjects only when the shorthand supplies them and no
    explicit element covers the same field.

    Raises:
        MalformedMetadataError: If an explicit element is not valid markup
    """
    simple = simple or SimpleMetadata()
    # Validate everything before synthesizing anything
    elements = [Element.from_markup(item) for item in explicit]

    def has(tag: str) -> bool:
        return find_element(elements, tag) is not None

    extra: list[Element] = []

    if not has("dc:identifier"):
        extra.append(
            Element(
                "dc:identifier",
                {"id": UNIQUE_ID_ANCHOR, "opf:scheme": "UUID"},
                [f"urn:uuid:{new_uuid()}"],
            )
        )
    elif not any(e.attributes.get("id") == UNIQUE_ID_ANCHOR for e in elements):
        log.warning(
            f"No explicit dc:identifier has id=\"{UNIQUE_ID_ANCHOR}\"; "
            "the package unique-identifier will not resolve"
        )

    if simple.isbn and not any(
        e.tag == "dc:identifier" and _scheme(e) == "isbn" for e in elements
    ):
        extra.append(Element("dc:identifier", {"opf:scheme": "ISBN"}, [simple.isbn]))

    if not has("dc:date"):
        moment = now() if now else datetime.now(timezone.utc)
        extra.append(Element("dc:date", children=[format_timestamp(moment)]))

    if not has("dc:language"):
        extra.append(
            Element("dc:language", children=[simple.language or DEFAULT_LANGUAGE])
        )

    if not has("dc:title"):
        extra.append(Element("dc:title", children=[simple.title or DEFAULT_TITLE]))

    if simple.author and not has("dc:creator"):
        extra.append(Element("dc:creator", {"opf:role": "aut"}, [simple.author]))

    if simple.description and not has("dc:description"):
        extra.append(Element("dc:description", children=[simple.description]))

    if simple.tags and not has("dc:subject"):
        extra.extend(Element("dc:subject", children=[tag]) for tag in simple.tags)

    log.debug(f"Synthesized {len(extra)} metadata element(s)")
    return elements + extra
