"""
Range-addressed formatting operations produced by the compiler.

Every operation carries a half-open `Range` in target-document index space.
Operations are plain frozen values; turning them into Google Docs API requests
is the job of `docs_markdown.batch`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from core.errors import InvariantViolationError


class StyleKind(str, Enum):
    """Tag for each FormatOperation variant."""

    HEADING = "heading"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    LINK = "link"
    BULLET = "bullet"


@dataclass(frozen=True)
class Range:
    """Half-open interval [start, end) in target-document index units."""

    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise InvariantViolationError(
                f"Range start {self.start} is after end {self.end}", start=self.start, end=self.end
            )

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def length(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


@dataclass(frozen=True)
class FormatOperation:
    """Base class for one styling instruction over a range."""

    kind: ClassVar[StyleKind]
    range: Range

    @property
    def payload(self) -> str | int | bool | None:
        """The variant-specific value (level, url, ordered flag), if any."""
        return None

    def with_range(self, new_range: Range) -> FormatOperation:
        return dataclasses.replace(self, range=new_range)


@dataclass(frozen=True)
class HeadingStyle(FormatOperation):
    kind: ClassVar[StyleKind] = StyleKind.HEADING
    level: int = 1

    def __post_init__(self):
        if not 1 <= self.level <= 6:
            raise InvariantViolationError(f"Heading level {self.level} outside 1-6")

    @property
    def payload(self) -> int:
        return self.level


@dataclass(frozen=True)
class Bold(FormatOperation):
    kind: ClassVar[StyleKind] = StyleKind.BOLD


@dataclass(frozen=True)
class Italic(FormatOperation):
    kind: ClassVar[StyleKind] = StyleKind.ITALIC


@dataclass(frozen=True)
class Strikethrough(FormatOperation):
    kind: ClassVar[StyleKind] = StyleKind.STRIKETHROUGH


@dataclass(frozen=True)
class Code(FormatOperation):
    kind: ClassVar[StyleKind] = StyleKind.CODE


@dataclass(frozen=True)
class Link(FormatOperation):
    kind: ClassVar[StyleKind] = StyleKind.LINK
    url: str = ""

    @property
    def payload(self) -> str:
        return self.url


@dataclass(frozen=True)
class Bullet(FormatOperation):
    kind: ClassVar[StyleKind] = StyleKind.BULLET
    ordered: bool = False

    @property
    def payload(self) -> bool:
        return self.ordered


@dataclass(frozen=True)
class CompileResult:
    """
    Output of one compile call.

    Attributes:
        plain_text: The flattened text, to be inserted at the base index in one call.
        operations: Formatting operations in traversal order, to be applied
            after the insert as a single batch.
        base_index: The insertion index every range is expressed against.
    """

    plain_text: str
    operations: tuple[FormatOperation, ...]
    base_index: int = 1

    @property
    def end_index(self) -> int:
        """Index just past the last inserted character."""
        return self.base_index + len(self.plain_text)

    def operations_of(self, kind: StyleKind) -> list[FormatOperation]:
        return [op for op in self.operations if op.kind is kind]
