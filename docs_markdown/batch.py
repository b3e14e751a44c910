"""
Google Docs batchUpdate encoding.

Turns a `CompileResult` into the request list a Docs API `batchUpdate` call
expects: one `insertText` carrying the whole plain text, followed by one request per operation
in compile order.

Example:
    >>> converter = MarkdownToDocsConverter()
    >>> requests = converter.convert("# Title\n\n**Bold** text")
    >>> [next(iter(r)) for r in requests]
    ['insertText', 'updateParagraphStyle', 'updateTextStyle']
"""

from __future__ import annotations

import logging
from typing import Any

from core.config import CompilerConfig, get_compiler_config
from docs_markdown.compiler import MarkdownCompiler
from docs_markdown.operations import (
    Bold,
    Bullet,
    Code,
    CompileResult,
    FormatOperation,
    HeadingStyle,
    Italic,
    Link,
    Range,
    Strikethrough,
    StyleKind,
)

logger = logging.getLogger(__name__)

# Named style mappings for headings (level 1 -> HEADING_1, etc.)
HEADING_STYLE_MAP: dict[int, str] = {
    1: "HEADING_1",
    2: "HEADING_2",
    3: "HEADING_3",
    4: "HEADING_4",
    5: "HEADING_5",
    6: "HEADING_6",
}

# Regular weight for code runs
CODE_FONT_WEIGHT = 400


def _range_dict(span: Range) -> dict[str, int]:
    return {"startIndex": span.start, "endIndex": span.end}


def create_insert_text_request(index: int, text: str) -> dict[str, Any]:
    """Create an insertText request."""
    return {"insertText": {"text": text, "location": {"index": index}}}


def create_text_style_request(span: Range, text_style: dict[str, Any]) -> dict[str, Any]:
    """Create an updateTextStyle request whose field mask is the style's keys."""
    return {
        "updateTextStyle": {
            "range": _range_dict(span),
            "textStyle": text_style,
            "fields": ",".join(text_style.keys()),
        }
    }


def create_operation_request(op: FormatOperation, config: CompilerConfig | None = None) -> dict[str, Any]:
    """
    Encode one formatting operation as a Docs API request.

    Args:
        op: The operation to encode.
        config: Supplies the code font and bullet presets.

    Returns:
        A single request dictionary.
    """
    config = config or get_compiler_config()

    if isinstance(op, HeadingStyle):
        return {
            "updateParagraphStyle": {
                "range": _range_dict(op.range),
                "paragraphStyle": {"namedStyleType": HEADING_STYLE_MAP[op.level]},
                "fields": "namedStyleType",
            }
        }
    if isinstance(op, Bullet):
        return {
            "createParagraphBullets": {
                "range": _range_dict(op.range),
                "bulletPreset": config.bullet_preset_for(op.ordered),
            }
        }
    if isinstance(op, Bold):
        return create_text_style_request(op.range, {"bold": True})
    if isinstance(op, Italic):
        return create_text_style_request(op.range, {"italic": True})
    if isinstance(op, Strikethrough):
        return create_text_style_request(op.range, {"strikethrough": True})
    if isinstance(op, Code):
        return create_text_style_request(
            op.range,
            {"weightedFontFamily": {"fontFamily": config.code_font_family, "weight": CODE_FONT_WEIGHT}},
        )
    if isinstance(op, Link):
        return create_text_style_request(op.range, {"link": {"url": op.url}})
    raise TypeError(f"Unsupported operation type: {type(op).__name__}")


def _leading_tabs(result: CompileResult, span: Range) -> int:
    text = result.plain_text[span.start - result.base_index : span.end - result.base_index]
    return len(text) - len(text.lstrip("\t"))


def build_batch_requests(
    result: CompileResult,
    config: CompilerConfig | None = None,
    adjust_for_tab_removal: bool = True,
) -> list[dict[str, Any]]:
    """
    Build the full batchUpdate request list for a compile result.

    createParagraphBullets removes the leading TABs of the paragraphs it
    converts, which shifts every later index left. With
    `adjust_for_tab_removal`, requests after such a bullet are shifted by the
    cumulative number of removed TABs.

    Args:
        result: The compile result to encode.
        config: Supplies the code font and bullet presets.
        adjust_for_tab_removal: Whether to compensate for TAB removal.

    Returns:
        insertText followed by one request per operation; empty for empty text.
    """
    if not result.plain_text:
        return []

    config = config or get_compiler_config()
    requests = [create_insert_text_request(result.base_index, result.plain_text)]

    tab_shift = 0
    for op in result.operations:
        shifted = op
        if tab_shift:
            shifted = op.with_range(Range(op.range.start - tab_shift, op.range.end - tab_shift))
        requests.append(create_operation_request(shifted, config))

        if adjust_for_tab_removal and op.kind is StyleKind.BULLET:
            removed = _leading_tabs(result, op.range)
            if removed:
                tab_shift += removed
                logger.debug(
                    f"Bullet range {op.range} -> {shifted.range} removes {removed} TAB(s), "
                    f"cumulative shift: {tab_shift}"
                )

    return requests


class MarkdownToDocsConverter:
    """
    Converts Markdown text into Google Docs API batchUpdate requests.

    Combines parsing, compilation and request encoding. The converter keeps no
    state between calls besides `last_result`, so one instance can be reused.

    Attributes:
        config: Compiler settings.
        compiler: The underlying `MarkdownCompiler`.
        last_result: The `CompileResult` of the most recent `convert` call.
    """

    def __init__(self, config: CompilerConfig | None = None) -> None:
        self.config = config or get_compiler_config()
        self.compiler = MarkdownCompiler(self.config)
        self.last_result: CompileResult | None = None

    def convert(self, markdown_text: str, start_index: int = 1) -> list[dict[str, Any]]:
        """
        Convert Markdown text to Google Docs API requests.

        Args:
            markdown_text: The Markdown string to convert.
            start_index: The starting index in the document (1-based).
                         Defaults to 1 (start of document body).

        Returns:
            A list of Google Docs API request dictionaries ready for batchUpdate.
        """
        self.last_result = self.compiler.compile_markdown(markdown_text, start_index)
        requests = build_batch_requests(self.last_result, self.config)
        logger.debug(f"Converted markdown into {len(requests)} request(s)")
        return requests

    @property
    def cursor_index(self) -> int | None:
        """Index just past the text of the last conversion."""
        return self.last_result.end_index if self.last_result is not None else None
