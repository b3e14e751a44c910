"""
Inline style resolution.

Given a text leaf, walk its ancestor chain up to the root and collect the
inline styles that apply. The walk is pure: it only reads parent links of the
immutable tree, so it can be tested against any hand-picked leaf.

Rules:
- Emphasis level 1 is italic; level 2 and deeper collapse to bold. There is no
  distinct bold+italic style, only the two independent operations.
- A strikethrough ancestor adds strikethrough.
- The closest link (or autolink) ancestor supplies the link URL.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from docs_markdown.nodes import NodeKind, classify, emphasis_level, link_destination
from docs_markdown.operations import Bold, FormatOperation, Italic, Link, Range, Strikethrough, StyleKind

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

logger = logging.getLogger(__name__)


class ResolvedStyle(NamedTuple):
    kind: StyleKind
    payload: str | None = None


# Emission order for the styles of a single leaf
INLINE_STYLE_ORDER: tuple[StyleKind, ...] = (
    StyleKind.BOLD,
    StyleKind.ITALIC,
    StyleKind.STRIKETHROUGH,
    StyleKind.LINK,
)


def resolve_styles(leaf: SyntaxTreeNode) -> frozenset[ResolvedStyle]:
    """
    Determine the inline styles that apply to a leaf.

    Args:
        leaf: A text-producing node inside a parsed tree.

    Returns:
        The set of (kind, payload) pairs; payload is the URL for links, else None.
    """
    styles: set[ResolvedStyle] = set()
    link_url: str | None = None

    ancestor = leaf.parent
    while ancestor is not None:
        kind = classify(ancestor)
        if kind is NodeKind.EMPHASIS:
            if emphasis_level(ancestor) >= 2:
                styles.add(ResolvedStyle(StyleKind.BOLD))
            else:
                styles.add(ResolvedStyle(StyleKind.ITALIC))
        elif kind is NodeKind.STRIKETHROUGH:
            styles.add(ResolvedStyle(StyleKind.STRIKETHROUGH))
        elif kind in (NodeKind.LINK, NodeKind.AUTOLINK) and link_url is None:
            # Closest link wins
            link_url = link_destination(ancestor)
        ancestor = ancestor.parent

    if link_url:
        styles.add(ResolvedStyle(StyleKind.LINK, link_url))

    return frozenset(styles)


def _sort_key(style: ResolvedStyle) -> tuple[int, str]:
    return INLINE_STYLE_ORDER.index(style.kind), style.payload or ""


def operations_for_styles(styles: frozenset[ResolvedStyle], start: int, end: int) -> list[FormatOperation]:
    """
    Build one operation per resolved style over [start, end).

    Empty spans produce no operations regardless of the styles.
    """
    if start >= end:
        return []

    span = Range(start, end)
    operations: list[FormatOperation] = []
    for style in sorted(styles, key=_sort_key):
        if style.kind is StyleKind.BOLD:
            operations.append(Bold(span))
        elif style.kind is StyleKind.ITALIC:
            operations.append(Italic(span))
        elif style.kind is StyleKind.STRIKETHROUGH:
            operations.append(Strikethrough(span))
        elif style.kind is StyleKind.LINK and style.payload:
            operations.append(Link(span, url=style.payload))
        else:
            logger.warning(f"Ignoring unsupported inline style {style.kind.value}")
    return operations
