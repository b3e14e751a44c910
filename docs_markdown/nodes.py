"""
Input tree for the compiler.

Parsing is delegated to markdown-it-py (CommonMark + GFM tables and
strikethrough + task lists). Its token stream is lifted into a
`SyntaxTreeNode` tree, whose parent back-references let the style resolver
walk upward from any text leaf. `classify` maps markdown-it node types onto
the closed set of node kinds the compiler understands.
"""

from __future__ import annotations

import functools
import logging
from enum import Enum

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.tasklists import tasklists_plugin

logger = logging.getLogger(__name__)

# Task list checkbox characters (Unicode ballot box symbols)
CHECKBOX_UNCHECKED = "☐"  # U+2610 BALLOT BOX
CHECKBOX_CHECKED = "☑"  # U+2611 BALLOT BOX WITH CHECK
TASKLIST_CHECKBOX_CLASS = 'class="task-list-item-checkbox"'


class NodeKind(Enum):
    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    LIST_ITEM = "list_item"
    TEXT = "text"
    EMPHASIS = "emphasis"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    AUTOLINK = "autolink"
    CODE_SPAN = "code_span"
    FENCED_CODE_BLOCK = "fenced_code_block"
    CODE_BLOCK = "code_block"
    THEMATIC_BREAK = "thematic_break"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    TABLE_SECTION = "table_section"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    IMAGE = "image"
    HTML_BLOCK = "html_block"
    RAW_HTML = "raw_html"
    INLINE = "inline"
    SOFT_BREAK = "soft_break"
    HARD_BREAK = "hard_break"
    UNKNOWN = "unknown"


# markdown-it node type -> NodeKind (links are refined in classify)
NODE_KIND_MAP: dict[str, NodeKind] = {
    "root": NodeKind.DOCUMENT,
    "heading": NodeKind.HEADING,
    "paragraph": NodeKind.PARAGRAPH,
    "bullet_list": NodeKind.LIST,
    "ordered_list": NodeKind.LIST,
    "list_item": NodeKind.LIST_ITEM,
    "text": NodeKind.TEXT,
    "text_special": NodeKind.TEXT,
    "em": NodeKind.EMPHASIS,
    "strong": NodeKind.EMPHASIS,
    "s": NodeKind.STRIKETHROUGH,
    "link": NodeKind.LINK,
    "code_inline": NodeKind.CODE_SPAN,
    "fence": NodeKind.FENCED_CODE_BLOCK,
    "code_block": NodeKind.CODE_BLOCK,
    "hr": NodeKind.THEMATIC_BREAK,
    "blockquote": NodeKind.BLOCKQUOTE,
    "table": NodeKind.TABLE,
    "thead": NodeKind.TABLE_SECTION,
    "tbody": NodeKind.TABLE_SECTION,
    "tr": NodeKind.TABLE_ROW,
    "th": NodeKind.TABLE_CELL,
    "td": NodeKind.TABLE_CELL,
    "image": NodeKind.IMAGE,
    "html_block": NodeKind.HTML_BLOCK,
    "html_inline": NodeKind.RAW_HTML,
    "inline": NodeKind.INLINE,
    "softbreak": NodeKind.SOFT_BREAK,
    "hardbreak": NodeKind.HARD_BREAK,
}

# Emphasis nesting depth per markdown-it node type
EMPHASIS_LEVELS: dict[str, int] = {"em": 1, "strong": 2}


def create_parser(tasklists: bool = True) -> MarkdownIt:
    """Build the CommonMark parser with table, strikethrough and optional task-list support."""
    md = MarkdownIt("commonmark").enable("table").enable("strikethrough")
    if tasklists:
        md = md.use(tasklists_plugin)
    return md


@functools.lru_cache(maxsize=2)
def _shared_parser(tasklists: bool) -> MarkdownIt:
    return create_parser(tasklists)


def parse_markdown(markdown_text: str, tasklists: bool = True) -> SyntaxTreeNode:
    """
    Parse markdown into a syntax tree rooted at a DOCUMENT node.

    Args:
        markdown_text: The markdown source.
        tasklists: Whether `[ ]` / `[x]` list markers become checkbox nodes.

    Returns:
        The root `SyntaxTreeNode`.
    """
    tokens = _shared_parser(tasklists).parse(markdown_text)
    logger.debug(f"Parsed {len(markdown_text)} chars into {len(tokens)} tokens")
    return SyntaxTreeNode(tokens)


def classify(node: SyntaxTreeNode) -> NodeKind:
    """Map a syntax tree node onto its NodeKind."""
    kind = NODE_KIND_MAP.get(node.type, NodeKind.UNKNOWN)
    if kind is NodeKind.LINK and node.markup == "autolink":
        return NodeKind.AUTOLINK
    return kind


def heading_level(node: SyntaxTreeNode) -> int:
    """Return 1-6 for an `hN` heading node."""
    tag = node.tag or ""
    if len(tag) == 2 and tag[0] == "h" and tag[1].isdigit():
        return min(max(int(tag[1]), 1), 6)
    logger.warning(f"Unknown heading tag: {tag!r}, treating as level 1")
    return 1


def emphasis_level(node: SyntaxTreeNode) -> int:
    """Return 1 for `*em*`, 2 for `**strong**`."""
    return EMPHASIS_LEVELS.get(node.type, 1)


def is_ordered_list(node: SyntaxTreeNode) -> bool:
    return node.type == "ordered_list"


def link_destination(node: SyntaxTreeNode) -> str:
    href = node.attrs.get("href", "")
    return str(href) if href else ""


def code_text(node: SyntaxTreeNode) -> str:
    """Raw source of a code node, verbatim apart from the newline closing its last line."""
    content = node.content or ""
    return content[:-1] if content.endswith("\n") else content


def image_alt_text(node: SyntaxTreeNode) -> str:
    """Concatenate the direct text children of an image node."""
    return "".join(child.content for child in node.children if classify(child) is NodeKind.TEXT)


def checkbox_glyph(node: SyntaxTreeNode) -> str | None:
    """
    Return the ballot box for a task-list checkbox node, else None.

    The tasklists plugin renders `[ ]` and `[x]` as an `<input>` html_inline token:
    <input class="task-list-item-checkbox" disabled="disabled" type="checkbox">
    with checked="checked" added for completed items.
    """
    content = node.content or ""
    if TASKLIST_CHECKBOX_CLASS not in content:
        return None
    return CHECKBOX_CHECKED if 'checked="checked"' in content else CHECKBOX_UNCHECKED


def table_rows(node: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    """Rows of a table in document order, across thead and tbody."""
    rows: list[SyntaxTreeNode] = []
    for child in node.children:
        kind = classify(child)
        if kind is NodeKind.TABLE_SECTION:
            rows.extend(row for row in child.children if classify(row) is NodeKind.TABLE_ROW)
        elif kind is NodeKind.TABLE_ROW:
            rows.append(child)
    return rows


def row_cells(row: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    return [cell for cell in row.children if classify(cell) is NodeKind.TABLE_CELL]
