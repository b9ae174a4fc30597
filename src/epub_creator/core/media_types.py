"""Media type inference from file extensions."""

from pathlib import PurePosixPath

from epub_creator.errors import UnsupportedContentError

XHTML_MEDIA_TYPE = "application/xhtml+xml"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
OPF_MEDIA_TYPE = "application/oebps-package+xml"

MEDIA_TYPES = {
    ".html": XHTML_MEDIA_TYPE,
    ".htm": XHTML_MEDIA_TYPE,
    ".xhtml": XHTML_MEDIA_TYPE,
    ".png": "image/png",
    ".gif": "image/gif",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".css": "text/css",
    ".otf": "font/otf",
    ".ttf": "font/ttf",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ncx": NCX_MEDIA_TYPE,
}


def get_media_type(path: str) -> str:
    """Return the media type for a relative path.

    Raises:
        UnsupportedContentError: If the extension is not in MEDIA_TYPES
    """
    suffix = PurePosixPath(path).suffix.lower()
    media_type = MEDIA_TYPES.get(suffix)
    if media_type is None:
        raise UnsupportedContentError(path)
    return media_type


def is_image(path: str) -> bool:
    """Check whether a path maps to an image media type."""
    return get_media_type(path).startswith("image/")
