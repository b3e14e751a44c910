"""
Google Docs Reading Helpers

Flattens a `documents.get` response back into plain text using the same
conventions the compiler writes with (TAB between table cells, newline between
rows), and locates the index to append new content at.
"""

from __future__ import annotations

import logging
from typing import Any

from core.utils import truncate_utf8, utf8_length

logger = logging.getLogger(__name__)


class _LimitedWriter:
    """Collects text up to an optional UTF-8 byte budget."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        self.parts: list[str] = []
        self.used = 0

    def write(self, text: str) -> bool:
        """Append text; returns False once the budget is exhausted."""
        if self.max_bytes <= 0:
            self.parts.append(text)
            return True
        remaining = self.max_bytes - self.used
        if remaining <= 0:
            return False
        size = utf8_length(text)
        if size > remaining:
            self.parts.append(truncate_utf8(text, remaining))
            self.used = self.max_bytes
            return False
        self.parts.append(text)
        self.used += size
        return True


def _write_element(writer: _LimitedWriter, element: dict[str, Any]) -> bool:
    if "paragraph" in element:
        for pe in element["paragraph"].get("elements", []):
            text_run = pe.get("textRun")
            if not text_run or "content" not in text_run:
                continue
            if not writer.write(text_run["content"]):
                return False
    elif "table" in element:
        for r, row in enumerate(element["table"].get("tableRows", [])):
            if r > 0 and not writer.write("\n"):
                return False
            for c, cell in enumerate(row.get("tableCells", [])):
                if c > 0 and not writer.write("\t"):
                    return False
                for content in cell.get("content", []):
                    if not _write_element(writer, content):
                        return False
    elif "tableOfContents" in element:
        for content in element["tableOfContents"].get("content", []):
            if not _write_element(writer, content):
                return False
    return True


def document_plain_text(document: dict[str, Any] | None, max_bytes: int = 0) -> str:
    """
    Extract the plain text of a Google Doc body.

    Args:
        document: A `documents.get` response.
        max_bytes: Optional UTF-8 byte limit (0 = unlimited). Never splits a character.

    Returns:
        The flattened body text.
    """
    if not document:
        return ""
    writer = _LimitedWriter(max_bytes)
    for element in document.get("body", {}).get("content", []):
        if not _write_element(writer, element):
            logger.debug(f"Stopped text extraction at {max_bytes} byte limit")
            break
    return "".join(writer.parts)


def document_end_index(document: dict[str, Any] | None) -> int:
    """
    Return the index to append at: just before the body's implicit trailing newline.

    Args:
        document: A `documents.get` response.

    Returns:
        The append index, at least 1.
    """
    if not document:
        return 1
    content = document.get("body", {}).get("content", [])
    if not content:
        return 1
    end_index = content[-1].get("endIndex", 0)
    if end_index > 1:
        return end_index - 1
    return 1
