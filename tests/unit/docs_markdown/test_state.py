"""
Unit tests for the Linear Buffer, Index Tracker and CompileState.
"""

import pytest

from core.errors import InvariantViolationError
from docs_markdown.operations import Bold, Bullet, HeadingStyle, Italic, Link, Range
from docs_markdown.state import CompileState, IndexTracker, LinearBuffer, ListContext


class TestLinearBuffer:
    def test_starts_empty(self):
        buffer = LinearBuffer()
        assert buffer.length() == 0
        assert buffer.getvalue() == ""

    def test_append_accumulates(self):
        buffer = LinearBuffer()
        buffer.append("Hello")
        buffer.append("\n")
        assert buffer.getvalue() == "Hello\n"
        assert buffer.length() == 6

    def test_empty_append_is_noop(self):
        buffer = LinearBuffer()
        buffer.append("")
        assert buffer.length() == 0
        assert buffer.getvalue() == ""

    def test_length_counts_code_points(self):
        buffer = LinearBuffer()
        buffer.append("é日本😀")
        assert buffer.length() == 4

    def test_multi_chunk_value_is_joined_in_order(self):
        buffer = LinearBuffer()
        for chunk in ("a", "\n", "\t", "b"):
            buffer.append(chunk)
        assert buffer.getvalue() == "a\n\tb"
        assert buffer.length() == 4


class TestIndexTracker:
    def test_current_is_base_plus_length(self):
        buffer = LinearBuffer()
        tracker = IndexTracker(5, buffer)
        assert tracker.current() == 5
        buffer.append("abc")
        assert tracker.current() == 8

    def test_current_follows_every_write(self):
        buffer = LinearBuffer()
        tracker = IndexTracker(1, buffer)
        for expected, chunk in zip((2, 4, 5), ("a", "\t\t", "\n"), strict=True):
            buffer.append(chunk)
            assert tracker.current() == expected


class TestListStack:
    def test_push_assigns_depth(self):
        state = CompileState(base_index=1)
        assert state.push_list(False) == ListContext(ordered=False, depth=1)
        assert state.push_list(True) == ListContext(ordered=True, depth=2)
        assert state.list_depth == 2
        assert state.active_list.ordered is True

    def test_pop_restores_outer_context(self):
        state = CompileState(base_index=1)
        state.push_list(False)
        state.push_list(True)
        popped = state.pop_list()
        assert popped.ordered is True
        assert state.active_list == ListContext(ordered=False, depth=1)

    def test_pop_empty_stack_returns_none(self):
        state = CompileState(base_index=1)
        assert state.pop_list() is None
        assert state.active_list is None


class TestEmit:
    def test_emit_records_operation(self):
        state = CompileState(base_index=1)
        state.append("Title")
        assert state.emit(HeadingStyle(Range(1, 6), level=1)) is True
        assert state.operations == [HeadingStyle(Range(1, 6), level=1)]

    def test_empty_range_is_dropped(self):
        state = CompileState(base_index=1)
        assert state.emit(Bullet(Range(1, 1), ordered=False)) is False
        assert state.operations == []

    def test_range_past_cursor_raises(self):
        state = CompileState(base_index=1)
        state.append("ab")
        with pytest.raises(InvariantViolationError) as exc_info:
            state.emit(Bold(Range(1, 5)))
        assert exc_info.value.limit == 3

    def test_range_before_base_raises(self):
        state = CompileState(base_index=10)
        state.append("ab")
        with pytest.raises(InvariantViolationError):
            state.emit(Bold(Range(9, 11)))


class TestEmitInline:
    def test_contiguous_ranges_are_coalesced(self):
        state = CompileState(base_index=1)
        state.append("abcdef")
        state.emit_inline(Bold(Range(1, 3)))
        state.emit_inline(Italic(Range(3, 4)))
        state.emit_inline(Bold(Range(3, 4)))
        state.emit_inline(Bold(Range(4, 7)))
        assert state.operations == [Bold(Range(1, 7)), Italic(Range(3, 4))]

    def test_gap_prevents_coalescing(self):
        state = CompileState(base_index=1)
        state.append("abcdef")
        state.emit_inline(Bold(Range(1, 3)))
        state.emit_inline(Bold(Range(4, 6)))
        assert state.operations == [Bold(Range(1, 3)), Bold(Range(4, 6))]

    def test_links_with_different_urls_stay_separate(self):
        state = CompileState(base_index=1)
        state.append("abcd")
        state.emit_inline(Link(Range(1, 3), url="https://a.example"))
        state.emit_inline(Link(Range(3, 5), url="https://b.example"))
        assert len(state.operations) == 2

    def test_links_with_same_url_are_coalesced(self):
        state = CompileState(base_index=1)
        state.append("abcd")
        state.emit_inline(Link(Range(1, 3), url="https://a.example"))
        state.emit_inline(Link(Range(3, 5), url="https://a.example"))
        assert state.operations == [Link(Range(1, 5), url="https://a.example")]

    def test_empty_inline_range_is_dropped(self):
        state = CompileState(base_index=1)
        assert state.emit_inline(Bold(Range(1, 1))) is False
        assert state.operations == []


class TestToResult:
    def test_appends_missing_trailing_newline(self):
        state = CompileState(base_index=1)
        state.append("text")
        result = state.to_result()
        assert result.plain_text == "text\n"

    def test_keeps_existing_trailing_newline(self):
        state = CompileState(base_index=1)
        state.append("text\n")
        assert state.to_result().plain_text == "text\n"

    def test_trailing_blank_lines_collapse_to_one_newline(self):
        state = CompileState(base_index=1)
        state.append("text")
        state.emit(Bold(Range(1, 5)))
        state.append("\n\n\n")
        result = state.to_result()
        assert result.plain_text == "text\n"
        assert result.operations == (Bold(Range(1, 5)),)

    def test_newlines_only_become_empty_text(self):
        state = CompileState(base_index=1)
        state.append("\n\n")
        assert state.to_result().plain_text == ""

    def test_empty_buffer_stays_empty(self):
        result = CompileState(base_index=1).to_result()
        assert result.plain_text == ""
        assert result.operations == ()

    def test_result_carries_base_index(self):
        state = CompileState(base_index=42)
        state.append("x")
        result = state.to_result()
        assert result.base_index == 42
        assert result.end_index == 44
