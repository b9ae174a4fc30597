"""Manifest construction and identifier assignment."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from epub_creator.core.media_types import NCX_MEDIA_TYPE, XHTML_MEDIA_TYPE, get_media_type
from epub_creator.core.registry import COVER_PAGE_ID, TOC_ID, IdentifierRegistry
from epub_creator.core.walker import WalkEntry, relative_name, walk_content
from epub_creator.errors import ConfigurationError
from epub_creator.models.markup import Element

log = logging.getLogger(__name__)

CONTENT_FILENAME = "content.opf"
TOC_FILENAME = "toc.ncx"
COVER_PAGE_FILENAME = "cover-page.html"


class ManifestBuilder:
    """Walk the content root and emit the manifest fragment.

    This is the only component that writes to the identifier registry.
    """

    def __init__(
        self,
        content_dir: Path,
        cover: str | None = None,
        walk: Callable[[Path], Iterable[WalkEntry]] = walk_content,
    ):
        self.content_dir = content_dir
        self.cover = cover
        self.walk = walk

    def reserved_names(self) -> set[str]:
        """Names of generated documents that content files may not shadow."""
        names = {CONTENT_FILENAME, TOC_FILENAME}
        if self.cover:
            names.add(COVER_PAGE_FILENAME)
        return names

    def build(self, registry: IdentifierRegistry) -> Element:
        """Build the manifest and populate the registry in walk order."""
        manifest = Element("manifest")
        manifest.append(
            Element(
                "item",
                {"id": TOC_ID, "href": TOC_FILENAME, "media-type": NCX_MEDIA_TYPE},
            )
        )
        if self.cover:
            manifest.append(
                Element(
                    "item",
                    {
                        "id": COVER_PAGE_ID,
                        "href": COVER_PAGE_FILENAME,
                        "media-type": XHTML_MEDIA_TYPE,
                    },
                )
            )

        reserved = self.reserved_names()
        for dirpath, _, filenames in self.walk(self.content_dir):
            for filename in filenames:
                href = relative_name(self.content_dir, dirpath, filename)
                if href in reserved:
                    raise ConfigurationError(
                        f'"{href}" collides with a generated document',
                        field="content_dir",
                    )
                media_type = get_media_type(href)
                file_id = registry.register(href)
                log.debug(f"{file_id} -> {href} ({media_type})")
                manifest.append(
                    Element(
                        "item",
                        {"id": file_id, "href": href, "media-type": media_type},
                    )
                )

        log.info(f"Manifest lists {len(registry)} content file(s)")
        return manifest
