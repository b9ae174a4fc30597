"""Pre-order directory walk over the content root."""

import os
from collections.abc import Iterator
from pathlib import Path

from epub_creator.errors import PackageIOError

WalkEntry = tuple[Path, list[str], list[str]]


def walk_content(root: Path) -> Iterator[WalkEntry]:
    """Yield ``(dirpath, dirnames, filenames)`` for every directory under root.

    Directories come before their subdirectories; names are sorted so the
    traversal order does not depend on the platform.
    """

    def _raise(error: OSError) -> None:
        raise PackageIOError(
            f"cannot read directory {error.filename}: {error.strerror}",
            path=error.filename,
        )

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        yield Path(dirpath), list(dirnames), sorted(filenames)


def relative_name(root: Path, dirpath: Path, filename: str) -> str:
    """Return the POSIX-style path of a file relative to root."""
    return (dirpath / filename).relative_to(root).as_posix()
