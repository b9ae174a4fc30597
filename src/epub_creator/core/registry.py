"""Relative path to manifest identifier registry."""

from typing import Protocol

from epub_creator.errors import UnresolvedReferenceError

TOC_ID = "id-toc"
COVER_PAGE_ID = "id-cover"


def format_id(prefix: str, counter: int) -> str:
    """Format a sequential identifier, e.g. ``id-000001``."""
    return f"{prefix}-{counter:06d}"


def strip_fragment(href: str) -> str:
    """Remove a trailing ``#fragment`` from an href."""
    index = href.rfind("#")
    return href if index < 0 else href[:index]


class Resolver(Protocol):
    """Lookup capability handed to the spine and navigation builders."""

    def resolve(self, path: str) -> str: ...


class IdentifierRegistry:
    """Build-scoped mapping from relative path to manifest id.

    Only the manifest builder registers paths; everything else resolves.
    """

    def __init__(self) -> None:
        self._ids: dict[str, str] = {}
        self._counter = 0

    def register(self, path: str) -> str:
        """Assign the next sequential id to path and return it."""
        if path in self._ids:
            raise ValueError(f"Path already registered: {path}")
        self._counter += 1
        file_id = format_id("id", self._counter)
        self._ids[path] = file_id
        return file_id

    def resolve(self, path: str) -> str:
        """Return the id of path.

        Raises:
            UnresolvedReferenceError: If the path was never registered
        """
        try:
            return self._ids[path]
        except KeyError:
            raise UnresolvedReferenceError(path) from None

    def __len__(self) -> int:
        return len(self._ids)

    def paths(self) -> list[str]:
        """Registered paths in registration order."""
        return list(self._ids)
