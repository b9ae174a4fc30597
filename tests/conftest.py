"""Shared fixtures: small content trees on disk."""

import json
from pathlib import Path

import pytest

XHTML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml"><head><title>{title}</title></head>
<body><h1 id="top">{title}</h1><p>Text of {title}.</p></body></html>
"""

# Minimal JPEG header; nothing decodes it
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


def write_content(root: Path, files: dict[str, bytes | str]) -> Path:
    """Create files below root; str values are written as UTF-8."""
    for name, data in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_bytes(data)
    return root


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """front/001/002 chapters, a cover image and a stylesheet."""
    return write_content(
        tmp_path / "content",
        {
            "front.xhtml": XHTML_TEMPLATE.format(title="Front Matter"),
            "001.xhtml": XHTML_TEMPLATE.format(title="Chapter One"),
            "002.xhtml": XHTML_TEMPLATE.format(title="Chapter Two"),
            "images/cover.jpg": JPEG_BYTES,
            "style/default.css": "body { margin: 0; }\n",
        },
    )


@pytest.fixture
def request_data(content_dir: Path) -> dict:
    """Raw build request for content_dir."""
    return {
        "content_dir": str(content_dir),
        "spine": ["front.xhtml", "001.xhtml", "002.xhtml"],
        "toc": [
            {"label": "Front Matter", "href": "front.xhtml"},
            {"label": "Chapter One", "href": "001.xhtml"},
            {"label": "Chapter Two", "href": "002.xhtml#top"},
        ],
        "cover": "images/cover.jpg",
        "simple_metadata": {"title": "Test ePUB", "author": "Test Author"},
        "metadata": [
            ["dc:date", "2000-01-01T00:00:00.000Z"],
            ["dc:identifier", {"id": "BookId", "opf:scheme": "UUID"}, "test-identifier"],
        ],
    }


@pytest.fixture
def config_file(tmp_path: Path, request_data: dict) -> Path:
    path = tmp_path / "book.json"
    path.write_text(json.dumps(request_data), encoding="utf-8")
    return path
