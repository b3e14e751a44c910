"""
Per-compilation mutable state.

The compiler follows the "Index Tracker" pattern: all text, synthetic separators included,
goes through one `LinearBuffer`, and the write cursor is always derived from
the buffer length (`base + length`).

Index unit: one Python `str` code point per index position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from core.errors import InvariantViolationError
from docs_markdown.operations import CompileResult, FormatOperation, Range, StyleKind

logger = logging.getLogger(__name__)


class LinearBuffer:
    """Append-only accumulator for the flattened plain text."""

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._length: int = 0

    def append(self, text: str) -> None:
        """Append text; the only mutator."""
        if not text:
            return
        self._chunks.append(text)
        self._length += len(text)

    def length(self) -> int:
        """Logical character count (code points) used for index math."""
        return self._length

    def getvalue(self) -> str:
        return "".join(self._chunks)


class IndexTracker:
    """Maps the buffer length onto target-document indices."""

    def __init__(self, base: int, buffer: LinearBuffer) -> None:
        self.base = base
        self._buffer = buffer

    def current(self) -> int:
        """Return base + length(buffer), recomputed on every call."""
        return self.base + self._buffer.length()


@dataclass(frozen=True)
class ListContext:
    """One active list: whether it is ordered and how deeply it is nested (1 = top level)."""

    ordered: bool
    depth: int


@dataclass
class CompileState:
    """
    Mutable context owned by exactly one compile call.

    Attributes:
        base_index: Document index where the first emitted character lands.
        buffer: The Linear Buffer receiving all text.
        tracker: Index Tracker derived from `buffer`.
        operations: Operations emitted so far, in traversal order.
        list_stack: Active list contexts, innermost last.
    """

    base_index: int
    buffer: LinearBuffer = field(default_factory=LinearBuffer)
    operations: list[FormatOperation] = field(default_factory=list)
    list_stack: list[ListContext] = field(default_factory=list)
    tracker: IndexTracker = field(init=False, repr=False)
    # (kind, payload) -> position in `operations` of the latest inline operation with that key
    _latest_inline: dict[tuple[StyleKind, object], int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        self.tracker = IndexTracker(self.base_index, self.buffer)

    # -- text -----------------------------------------------------------------

    def append(self, text: str) -> None:
        self.buffer.append(text)

    def current(self) -> int:
        return self.tracker.current()

    # -- lists ----------------------------------------------------------------

    def push_list(self, ordered: bool) -> ListContext:
        context = ListContext(ordered=ordered, depth=len(self.list_stack) + 1)
        self.list_stack.append(context)
        logger.debug(f"List open: ordered={ordered}, depth={context.depth}")
        return context

    def pop_list(self) -> ListContext | None:
        if not self.list_stack:
            logger.warning("List close without matching list open")
            return None
        context = self.list_stack.pop()
        logger.debug(f"List close: ordered={context.ordered}, depth={context.depth}")
        return context

    @property
    def active_list(self) -> ListContext | None:
        return self.list_stack[-1] if self.list_stack else None

    @property
    def list_depth(self) -> int:
        return len(self.list_stack)

    # -- operations -----------------------------------------------------------

    def _check_bounds(self, op: FormatOperation) -> None:
        limit = self.current()
        if op.range.start < self.base_index or op.range.end > limit:
            raise InvariantViolationError(
                f"{op.kind.value} range {op.range} outside written span [{self.base_index}, {limit})",
                start=op.range.start,
                end=op.range.end,
                limit=limit,
            )

    def emit(self, op: FormatOperation) -> bool:
        """
        Record an operation, dropping it when its range is empty.

        Returns:
            True if the operation was recorded.
        """
        if op.range.is_empty:
            logger.debug(f"Dropped empty {op.kind.value} range {op.range}")
            return False
        self._check_bounds(op)
        self.operations.append(op)
        logger.debug(f"Emitted {op.kind.value} range {op.range} payload={op.payload!r}")
        return True

    def emit_inline(self, op: FormatOperation) -> bool:
        """
        Record an inline operation, extending the previous one when contiguous.

        A leaf whose style range starts exactly where the latest operation with
        the same kind and payload ends continues that span instead of opening a
        new one, so `**a *b* c**` yields a single bold range.
        """
        if op.range.is_empty:
            logger.debug(f"Dropped empty {op.kind.value} range {op.range}")
            return False
        self._check_bounds(op)
        key = (op.kind, op.payload)
        position = self._latest_inline.get(key)
        if position is not None:
            previous = self.operations[position]
            if previous.range.end == op.range.start:
                extended = previous.with_range(Range(previous.range.start, op.range.end))
                self.operations[position] = extended
                logger.debug(f"Extended {op.kind.value} range {previous.range} -> {extended.range}")
                return True
        self._latest_inline[key] = len(self.operations)
        self.operations.append(op)
        logger.debug(f"Emitted {op.kind.value} range {op.range} payload={op.payload!r}")
        return True

    # -- result ---------------------------------------------------------------

    def to_result(self) -> CompileResult:
        """
        Finalize the buffer and freeze the result.

        Non-empty text ends with exactly one newline: a missing one is added and
        trailing blank lines are dropped. Operation bounds are then checked
        against the final text.
        """
        body = self.buffer.getvalue().rstrip("\n")
        plain_text = body + "\n" if body else ""
        limit = self.base_index + len(plain_text)
        for op in self.operations:
            if op.range.start < self.base_index or op.range.end > limit:
                raise InvariantViolationError(
                    f"{op.kind.value} range {op.range} exceeds final text end {limit}",
                    start=op.range.start,
                    end=op.range.end,
                    limit=limit,
                )

        if self.list_stack:
            logger.warning(f"Compilation ended with {len(self.list_stack)} unclosed list context(s)")

        return CompileResult(plain_text=plain_text, operations=tuple(self.operations), base_index=self.base_index)
