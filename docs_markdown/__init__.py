"""
Markdown to Google Docs compiler package.

Compiles parsed markdown into flattened plain text plus range-addressed
formatting operations for a Google Doc, and encodes them as batchUpdate requests.
"""

from docs_markdown.batch import (
    HEADING_STYLE_MAP,
    MarkdownToDocsConverter,
    build_batch_requests,
    create_insert_text_request,
    create_operation_request,
)
from docs_markdown.compiler import MarkdownCompiler, compile_document, compile_markdown
from docs_markdown.nodes import NodeKind, classify, create_parser, parse_markdown
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
from docs_markdown.reading import document_end_index, document_plain_text
from docs_markdown.state import CompileState, IndexTracker, LinearBuffer, ListContext
from docs_markdown.styles import ResolvedStyle, resolve_styles

__all__ = [
    "compile_document",
    "compile_markdown",
    "MarkdownCompiler",
    "MarkdownToDocsConverter",
    "build_batch_requests",
    "create_insert_text_request",
    "create_operation_request",
    "HEADING_STYLE_MAP",
    "parse_markdown",
    "create_parser",
    "classify",
    "NodeKind",
    "CompileResult",
    "FormatOperation",
    "HeadingStyle",
    "Bold",
    "Italic",
    "Strikethrough",
    "Code",
    "Link",
    "Bullet",
    "Range",
    "StyleKind",
    "CompileState",
    "IndexTracker",
    "LinearBuffer",
    "ListContext",
    "resolve_styles",
    "ResolvedStyle",
    "document_plain_text",
    "document_end_index",
]
