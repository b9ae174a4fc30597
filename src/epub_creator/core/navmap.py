"""Navigation map construction for the NCX document."""

from dataclasses import dataclass

from epub_creator.core.registry import Resolver, format_id, strip_fragment
from epub_creator.models.markup import Element
from epub_creator.models.package import NavMap
from epub_creator.models.request import TocItem


@dataclass
class _Traversal:
    """Running state of one navigation build."""

    resolver: Resolver
    counter: int = 1
    max_depth: int = 0


def build_nav_map(items: list[TocItem], resolver: Resolver) -> NavMap:
    """Turn a TOC forest into a ``navMap`` element.

    Nodes are numbered in pre-order across the whole forest: the n-th node
    visited gets ``ncx-00000n`` and ``playOrder="n"``. Root items are depth 1.

    Raises:
        UnresolvedReferenceError: If a target, minus its fragment, is not in
            the manifest. Nothing is returned in that case.
    """
    state = _Traversal(resolver)
    root = Element("navMap")
    for item in items:
        root.append(_build_nav_point(item, 1, state))
    return NavMap(root=root, max_depth=state.max_depth, point_count=state.counter - 1)


def _build_nav_point(item: TocItem, depth: int, state: _Traversal) -> Element:
    state.resolver.resolve(strip_fragment(item.href))
    state.max_depth = max(state.max_depth, depth)

    nav_point = Element(
        "navPoint",
        {"id": format_id("ncx", state.counter), "playOrder": str(state.counter)},
        [
            Element("navLabel", children=[Element("text", children=[item.label])]),
            Element("content", {"src": item.href}),
        ],
    )
    state.counter += 1

    for child in item.children:
        nav_point.append(_build_nav_point(child, depth + 1, state))
    return nav_point
