"""Read a packaged EPUB back using ebooklib."""

import zipfile
from pathlib import Path

from ebooklib import epub

from epub_creator.errors import PackageIOError
from epub_creator.models.book import BookMetadata, ParsedBook, TOCEntry


class EpubReader:
    """Read metadata, spine and navigation tree from an EPUB file."""

    def __init__(self, epub_path: Path):
        self.path = epub_path
        try:
            self.book = epub.read_epub(str(epub_path), {"ignore_ncx": False})
        except (OSError, zipfile.BadZipFile, epub.EpubException) as e:
            raise PackageIOError(f"Cannot read {epub_path}: {e}", path=str(epub_path)) from e

    def parse(self) -> ParsedBook:
        """Parse the EPUB and return its structure."""
        return ParsedBook(
            metadata=self._get_metadata(),
            toc=self._parse_toc_recursive(self.book.toc),
            spine_order=[item[0] for item in self.book.spine],
            manifest={item.get_id(): item.get_name() for item in self.book.get_items()},
        )

    def _first(self, name: str) -> str | None:
        values = self.book.get_metadata("DC", name)
        return values[0][0] if values else None

    def _get_metadata(self) -> BookMetadata:
        authors = self.book.get_metadata("DC", "creator")
        return BookMetadata(
            title=self._first("title") or "Unknown Title",
            authors=[a[0] for a in authors] if authors else [],
            language=self._first("language"),
            identifier=self._first("identifier"),
            publication_date=self._first("date"),
        )

    def _parse_toc_recursive(self, toc_items: list, level: int = 1) -> list[TOCEntry]:
        """Recursively parse TOC structure."""
        entries = []

        for item in toc_items:
            if isinstance(item, tuple):
                # Section with children: (Section, [children])
                section, children = item
                entry = TOCEntry(
                    title=section.title or "Untitled",
                    href=section.href or "",
                    level=level,
                    children=self._parse_toc_recursive(children, level + 1),
                )
            else:
                entry = TOCEntry(
                    title=item.title or "Untitled",
                    href=item.href or "",
                    level=level,
                )
            entries.append(entry)

        return entries
