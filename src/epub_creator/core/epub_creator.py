"""Assemble an EPUB 2 package from a content directory."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from epub_creator.core.archive import ArchiveWriter
from epub_creator.core.manifest import (
    CONTENT_FILENAME,
    COVER_PAGE_FILENAME,
    TOC_FILENAME,
    ManifestBuilder,
)
from epub_creator.core.media_types import OPF_MEDIA_TYPE, is_image
from epub_creator.core.metadata import (
    UNIQUE_ID_ANCHOR,
    get_element_text,
    get_unique_id,
    merge_metadata,
)
from epub_creator.core.navmap import build_nav_map
from epub_creator.core.registry import IdentifierRegistry
from epub_creator.core.serializer import serialize
from epub_creator.core.spine import build_spine
from epub_creator.core.walker import WalkEntry, walk_content
from epub_creator.errors import UnsupportedContentError
from epub_creator.models.markup import Element
from epub_creator.models.package import BuildResult, Package
from epub_creator.models.request import BuildRequest

log = logging.getLogger(__name__)

EPUB_MIMETYPE = "application/epub+zip"
MIMETYPE_FILENAME = "mimetype"
CONTAINER_FILENAME = "META-INF/container.xml"
CONTENT_DIR = "OEBPS"

METADATA_ATTRIBUTES = {
    "xmlns:dc": "http://purl.org/dc/elements/1.1/",
    "xmlns:opf": "http://www.idpf.org/2007/opf",
}
TOC_DOCTYPE = (
    '<!DOCTYPE ncx PUBLIC "-//NISO//DTD ncx 2005-1//EN" '
    '"http://www.daisy.org/z3986/2005/ncx-2005-1.dtd">'
)
XHTML_DOCTYPE = (
    '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" '
    '"http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">'
)


class EpubCreator:
    """Build one EPUB from a BuildRequest.

    Every call to build_package() starts from an empty identifier registry,
    so one instance can be reused and separate instances never share state.
    """

    def __init__(
        self,
        request: BuildRequest,
        walk: Callable[[Path], Iterable[WalkEntry]] = walk_content,
    ):
        self.request = request
        self.walk = walk

    @property
    def cover(self) -> str | None:
        return self.request.cover

    def build_package(self) -> Package:
        """Run every builder in dependency order.

        The manifest populates the registry; spine, navigation map and the
        cover meta element only read from it.
        """
        request = self.request
        request.check_content_dir()
        if self.cover:
            self.check_cover()

        registry = IdentifierRegistry()
        log.info(f"Scanning {request.content_dir}")
        manifest = ManifestBuilder(request.content_dir, self.cover, self.walk).build(registry)

        metadata = merge_metadata(request.metadata, request.simple_metadata)
        if self.cover:
            metadata.append(
                Element("meta", {"name": "cover", "content": registry.resolve(self.cover)})
            )

        spine = build_spine(request.spine, registry, has_cover=bool(self.cover))
        nav_map = build_nav_map(request.toc, registry)
        log.info(
            f"Spine has {len(spine.children)} item(s), navigation map has "
            f"{nav_map.point_count} point(s), depth {nav_map.max_depth}"
        )

        package = Package(
            metadata=metadata,
            manifest=manifest,
            spine=spine,
            nav_map=nav_map,
            content_files=registry.paths(),
        )
        if self.cover:
            package.cover_page = self.build_cover_page(package)
        return package

    def check_cover(self) -> None:
        """Fail unless the configured cover is an image."""
        if not is_image(self.cover):
            raise UnsupportedContentError(
                self.cover, f'Cover file "{self.cover}" is not an image'
            )

    def build_container(self) -> Element:
        return Element(
            "container",
            {"version": "1.0", "xmlns": "urn:oasis:names:tc:opendocument:xmlns:container"},
            [
                Element(
                    "rootfiles",
                    children=[
                        Element(
                            "rootfile",
                            {
                                "full-path": f"{CONTENT_DIR}/{CONTENT_FILENAME}",
                                "media-type": OPF_MEDIA_TYPE,
                            },
                        )
                    ],
                )
            ],
        )

    def build_content(self, package: Package) -> Element:
        """Package document: metadata, manifest and spine."""
        return Element(
            "package",
            {
                "version": "2.0",
                "xmlns": "http://www.idpf.org/2007/opf",
                "unique-identifier": UNIQUE_ID_ANCHOR,
            },
            [
                Element("metadata", dict(METADATA_ATTRIBUTES), list(package.metadata)),
                package.manifest,
                package.spine,
            ],
        )

    def build_toc(self, package: Package) -> Element:
        """Navigation (NCX) document."""
        unique_id = get_unique_id(package.metadata) or ""
        title = get_element_text(package.metadata, "dc:title") or ""
        return Element(
            "ncx",
            {"xmlns": "http://www.daisy.org/z3986/2005/ncx/", "version": "2005-1"},
            [
                Element(
                    "head",
                    children=[
                        Element("meta", {"name": "dtb:uid", "content": unique_id}),
                        Element(
                            "meta",
                            {"name": "dtb:depth", "content": str(package.nav_map.max_depth)},
                        ),
                        Element("meta", {"name": "dtb:totalPageCount", "content": "0"}),
                        Element("meta", {"name": "dtb:maxPageNumber", "content": "0"}),
                    ],
                ),
                Element("docTitle", children=[Element("text", children=[title])]),
                package.nav_map.root,
            ],
        )

    def build_cover_page(self, package: Package) -> Element:
        """XHTML page showing the cover image."""
        self.check_cover()
        title = get_element_text(package.metadata, "dc:title") or ""
        return Element(
            "html",
            {"xmlns": "http://www.w3.org/1999/xhtml"},
            [
                Element("head", children=[Element("title", children=[title])]),
                Element(
                    "body",
                    children=[
                        Element(
                            "div",
                            {"style": "text-align:center;height:100%;"},
                            [
                                Element(
                                    "img",
                                    {
                                        "alt": f'Cover for "{title}"',
                                        "src": self.cover,
                                        "style": "max-width:100%;height:100%;",
                                    },
                                )
                            ],
                        )
                    ],
                ),
            ],
        )

    def build_archive(self, package: Package, output_path: Path) -> ArchiveWriter:
        """Serialize every document and register it with an archive writer."""
        writer = ArchiveWriter(output_path)
        writer.add(MIMETYPE_FILENAME, EPUB_MIMETYPE, compress=False)
        writer.add(CONTAINER_FILENAME, serialize(self.build_container()))
        writer.add(f"{CONTENT_DIR}/{CONTENT_FILENAME}", serialize(self.build_content(package)))
        writer.add(
            f"{CONTENT_DIR}/{TOC_FILENAME}",
            serialize(self.build_toc(package), doctype=TOC_DOCTYPE),
        )
        if package.cover_page is not None:
            writer.add(
                f"{CONTENT_DIR}/{COVER_PAGE_FILENAME}",
                serialize(package.cover_page, doctype=XHTML_DOCTYPE),
            )
        for path in package.content_files:
            writer.add_file(f"{CONTENT_DIR}/{path}", self.request.content_dir / path)
        return writer

    def create(self, output_path: Path) -> BuildResult:
        """Build the package and write it to output_path.

        Nothing is written unless every stage succeeds.
        """
        package = self.build_package()
        writer = self.build_archive(package, output_path)
        writer.finalize()

        return BuildResult(
            output_path=output_path,
            unique_id=get_unique_id(package.metadata) or "",
            title=get_element_text(package.metadata, "dc:title") or "",
            manifest_items=len(package.manifest.children),
            spine_items=len(package.spine.children),
            nav_points=package.nav_map.point_count,
            max_depth=package.nav_map.max_depth,
        )
