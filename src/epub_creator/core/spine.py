"""Spine (linear reading order) construction."""

from epub_creator.core.registry import COVER_PAGE_ID, TOC_ID, Resolver
from epub_creator.models.markup import Element


def build_spine(paths: list[str], resolver: Resolver, has_cover: bool = False) -> Element:
    """Emit one ``itemref`` per path, in declaration order.

    A synthetic cover-page reference comes first when a cover is configured.

    Raises:
        UnresolvedReferenceError: If a path is not in the manifest
    """
    spine = Element("spine", {"toc": TOC_ID})
    if has_cover:
        spine.append(Element("itemref", {"idref": COVER_PAGE_ID}))
    for path in paths:
        spine.append(Element("itemref", {"idref": resolver.resolve(path)}))
    return spine
