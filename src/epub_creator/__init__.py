"""Assemble EPUB packages from a content directory."""

from epub_creator.core.epub_creator import EpubCreator
from epub_creator.models.request import BuildRequest

__version__ = "0.1.0"

__all__ = ["BuildRequest", "EpubCreator", "__version__"]
