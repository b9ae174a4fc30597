"""Data models."""

from epub_creator.models.book import BookMetadata, ParsedBook, TOCEntry
from epub_creator.models.markup import Element
from epub_creator.models.package import BuildResult, NavMap, Package
from epub_creator.models.request import BuildRequest, SimpleMetadata, TocItem

__all__ = [
    # Request models
    "BuildRequest",
    "SimpleMetadata",
    "TocItem",
    # Markup
    "Element",
    # Package models
    "NavMap",
    "Package",
    "BuildResult",
    # Read-back models
    "TOCEntry",
    "BookMetadata",
    "ParsedBook",
]
