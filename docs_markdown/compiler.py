"""
Markdown to Google Docs Compiler

Walks a parsed markdown tree once, pre-order on enter and post-order on exit,
and produces a `CompileResult`: the flattened plain text plus the formatting
operations addressed in the index space of the document that will receive
that text at `base_index`.

Example:
    >>> result = compile_markdown("# Title\n\nBody")
    >>> result.plain_text
    'Title\nBody\n'
    >>> result.operations
    (HeadingStyle(range=Range(start=1, end=6), level=1),)

All mutable state lives in a `CompileState` created per call, so one
`MarkdownCompiler` can serve concurrent compilations from several threads.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.config import CompilerConfig, get_compiler_config
from core.utils import validate_positive_int
from docs_markdown.blocks import BlockEmitter
from docs_markdown.nodes import NodeKind, checkbox_glyph, classify, parse_markdown
from docs_markdown.operations import CompileResult
from docs_markdown.state import CompileState
from docs_markdown.styles import operations_for_styles, resolve_styles

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

logger = logging.getLogger(__name__)


class MarkdownCompiler:
    """
    Compiles syntax trees into (plain text, operations) pairs.

    Attributes:
        config: Compiler settings; defaults to the process-wide configuration.
        blocks: The block emitter, sharing this compiler's walk.
    """

    def __init__(self, config: CompilerConfig | None = None) -> None:
        self.config = config or get_compiler_config()
        self.blocks = BlockEmitter(self.config, self._walk)

    def compile(self, root: SyntaxTreeNode, base_index: int = 1) -> CompileResult:
        """
        Compile a parsed tree.

        Args:
            root: Root of the tree (normally a DOCUMENT node from `parse_markdown`).
            base_index: Document index of the first emitted character (>= 1).

        Returns:
            The immutable compile result.

        Raises:
            ValidationError: If base_index is not a positive integer.
            InvariantViolationError: If range arithmetic goes wrong (a compiler bug).
        """
        validate_positive_int(base_index, "base_index")
        state = CompileState(base_index=base_index)

        self._walk(root, state)

        result = state.to_result()
        logger.debug(
            f"Compiled {len(result.plain_text)} chars, {len(result.operations)} operation(s), "
            f"range [{result.base_index}, {result.end_index})"
        )
        return result

    def compile_markdown(self, markdown_text: str, base_index: int = 1) -> CompileResult:
        """Parse markdown with the configured parser and compile it."""
        root = parse_markdown(markdown_text, tasklists=self.config.tasklists_enabled)
        return self.compile(root, base_index)

    def _walk(self, node: SyntaxTreeNode, state: CompileState) -> None:
        kind = classify(node)

        if kind is NodeKind.TEXT:
            self._emit_leaf(node, node.content, state)
            return
        if kind is NodeKind.SOFT_BREAK:
            # Soft line breaks become spaces and keep the surrounding styles
            self._emit_leaf(node, " ", state)
            return
        if kind is NodeKind.HARD_BREAK:
            state.append("\n")
            return
        if kind is NodeKind.RAW_HTML:
            self._emit_raw_html(node, state)
            return

        start = state.current()
        if self.blocks.enter(kind, node, state):
            for child in node.children:
                self._walk(child, state)
        self.blocks.exit(kind, node, state, start)

    def _emit_leaf(self, node: SyntaxTreeNode, text: str, state: CompileState) -> None:
        """Write a text leaf and one inline operation per style it resolves to."""
        if not text:
            return
        start = state.current()
        state.append(text)
        end = state.current()
        for op in operations_for_styles(resolve_styles(node), start, end):
            state.emit_inline(op)

    def _emit_raw_html(self, node: SyntaxTreeNode, state: CompileState) -> None:
        """Skip raw HTML, except task-list checkboxes which become ballot boxes."""
        glyph = checkbox_glyph(node)
        if glyph is None:
            logger.debug(f"Skipped raw HTML: {node.content!r}")
            return
        state.append(glyph)
        logger.debug(f"Inserted task list checkbox: {glyph!r}")


def compile_document(root: SyntaxTreeNode, base_index: int = 1, config: CompilerConfig | None = None) -> CompileResult:
    """Compile an already-parsed tree with a fresh compiler."""
    return MarkdownCompiler(config).compile(root, base_index)


def compile_markdown(markdown_text: str, base_index: int = 1, config: CompilerConfig | None = None) -> CompileResult:
    """Parse and compile markdown text in one call."""
    return MarkdownCompiler(config).compile_markdown(markdown_text, base_index)
