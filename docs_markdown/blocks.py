"""
Block-level emission.

`BlockEmitter` owns what happens when the walker enters and exits each
block-level node: which text is written through the buffer, and which
block-level operation (heading, bullet, code) covers the span afterwards.

| Node                    | On enter                              | On exit                             |
|-------------------------|---------------------------------------|-------------------------------------|
| Heading                 | -                                     | newline, HeadingStyle               |
| Paragraph               | TAB prefix for nested list items      | newline, Bullet when inside a list  |
| List                    | push list context                     | pop list context                    |
| Code span               | raw content                           | Code                                |
| Fenced / indented code  | raw content                           | newline, Code                       |
| Thematic break          | rule glyph line                       | -                                   |
| Table                   | rows and cells, TAB / newline between | -                                   |
| Image                   | `[alt]`                               | -                                   |
| HTML block              | nothing, children skipped             | -                                   |

Ranges are always [start recorded on enter, cursor before the trailing newline).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from docs_markdown.nodes import (
    NodeKind,
    code_text,
    heading_level,
    image_alt_text,
    is_ordered_list,
    row_cells,
    table_rows,
)
from docs_markdown.operations import Bullet, Code, HeadingStyle, Range

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

    from core.config import CompilerConfig
    from docs_markdown.state import CompileState

logger = logging.getLogger(__name__)

CODE_BLOCK_KINDS = frozenset({NodeKind.FENCED_CODE_BLOCK, NodeKind.CODE_BLOCK})

Walk = Callable[["SyntaxTreeNode", "CompileState"], None]


class BlockEmitter:
    """
    Emits text and block-level operations for block nodes.

    Args:
        config: Supplies the thematic-break rule line.
        walk: Callback into the tree walker, used to compile table cell content.
    """

    def __init__(self, config: CompilerConfig, walk: Walk) -> None:
        self.config = config
        self._walk = walk

    def enter(self, kind: NodeKind, node: SyntaxTreeNode, state: CompileState) -> bool:
        """
        Handle entry into a node.

        Returns:
            True if the walker should descend into the node's children.
        """
        if kind is NodeKind.PARAGRAPH:
            self._prefix_nested_list_item(state)
            return True
        if kind is NodeKind.LIST:
            state.push_list(is_ordered_list(node))
            return True
        if kind is NodeKind.CODE_SPAN:
            state.append(node.content or "")
            return False
        if kind in CODE_BLOCK_KINDS:
            text = code_text(node)
            if text.rstrip("\n"):
                state.append(text)
            return False
        if kind is NodeKind.THEMATIC_BREAK:
            state.append(self.config.rule_line)
            logger.debug(f"Inserted thematic break at index {state.current() - len(self.config.rule_line)}")
            return False
        if kind is NodeKind.TABLE:
            self._emit_table(node, state)
            return False
        if kind is NodeKind.IMAGE:
            # Images cannot be inserted as text; degrade to bracketed alt text
            state.append(f"[{image_alt_text(node)}]")
            return False
        if kind is NodeKind.HTML_BLOCK:
            logger.debug("Skipped HTML block")
            return False
        return True

    def exit(self, kind: NodeKind, node: SyntaxTreeNode, state: CompileState, start: int) -> None:
        """Handle exit from a node whose span began at `start`."""
        if kind is NodeKind.HEADING:
            end = state.current()
            if end == start:
                logger.debug("Skipped empty heading")
                return
            state.append("\n")
            state.emit(HeadingStyle(Range(start, end), level=heading_level(node)))
        elif kind is NodeKind.PARAGRAPH:
            end = state.current()
            state.append("\n")
            active = state.active_list
            if active is not None:
                state.emit(Bullet(Range(start, end), ordered=active.ordered))
        elif kind is NodeKind.LIST:
            state.pop_list()
        elif kind is NodeKind.CODE_SPAN:
            state.emit(Code(Range(start, state.current())))
        elif kind in CODE_BLOCK_KINDS:
            # Trailing blank lines stay in the text but outside the Code range
            body = code_text(node).rstrip("\n")
            if not body:
                logger.debug("Skipped empty code block")
                return
            state.append("\n")
            state.emit(Code(Range(start, start + len(body))))

    def _prefix_nested_list_item(self, state: CompileState) -> None:
        """
        Write one TAB per nesting level below the top-level list.

        Google Docs derives bullet nesting from leading TABs when the bullets
        are created, so nested items carry them in the text itself.
        """
        depth = state.list_depth
        if depth > 1:
            state.append("\t" * (depth - 1))
            logger.debug(f"Inserted {depth - 1} TAB(s) for list nesting")

    def _emit_table(self, node: SyntaxTreeNode, state: CompileState) -> None:
        """Flatten a table: TAB between cells, newline between rows and after the last row."""
        rows = table_rows(node)
        for r, row in enumerate(rows):
            if r > 0:
                state.append("\n")
            for c, cell in enumerate(row_cells(row)):
                if c > 0:
                    state.append("\t")
                for child in cell.children:
                    self._walk(child, state)
        if rows:
            state.append("\n")
        logger.debug(f"Flattened table: {len(rows)} row(s), cursor at {state.current()}")
