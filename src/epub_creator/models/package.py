"""In-memory package aggregate and build summary."""

from dataclasses import dataclass, field
from pathlib import Path

from epub_creator.models.markup import Element


@dataclass
class NavMap:
    """Navigation tree produced by the navigation builder."""

    root: Element
    max_depth: int = 0
    point_count: int = 0


@dataclass
class Package:
    """Fragments assembled for one build, before serialization."""

    metadata: list[Element]
    manifest: Element
    spine: Element
    nav_map: NavMap
    content_files: list[str] = field(default_factory=list)
    cover_page: Element | None = None


@dataclass
class BuildResult:
    """Summary of a finished build."""

    output_path: Path
    unique_id: str
    title: str
    manifest_items: int
    spine_items: int
    nav_points: int
    max_depth: int
