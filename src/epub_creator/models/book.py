"""Data models for an EPUB read back from disk."""

from pydantic import BaseModel, Field


class TOCEntry(BaseModel):
    """Single entry in table of contents."""

    title: str
    href: str
    level: int = 0
    children: list["TOCEntry"] = Field(default_factory=list)


class BookMetadata(BaseModel):
    """Book-level metadata."""

    title: str
    authors: list[str] = Field(default_factory=list)
    language: str | None = None
    identifier: str | None = None
    publication_date: str | None = None


class ParsedBook(BaseModel):
    """Structure of a packaged EPUB."""

    metadata: BookMetadata
    toc: list[TOCEntry] = Field(default_factory=list)
    spine_order: list[str] = Field(default_factory=list)
    manifest: dict[str, str] = Field(default_factory=dict)  # id -> href
