"""
Unit tests for reading plain text and the append index back from documents.get responses.
"""

from docs_markdown.reading import document_end_index, document_plain_text


def _paragraph(*runs, end_index=None):
    element = {"paragraph": {"elements": [{"textRun": {"content": run}} for run in runs]}}
    if end_index is not None:
        element["endIndex"] = end_index
    return element


def _table(rows):
    return {
        "table": {
            "tableRows": [
                {"tableCells": [{"content": [_paragraph(cell)]} for cell in row]}
                for row in rows
            ]
        }
    }


def _document(*content):
    return {"body": {"content": list(content)}}


class TestDocumentPlainText:
    def test_missing_document(self):
        assert document_plain_text(None) == ""
        assert document_plain_text({}) == ""

    def test_paragraph_runs_are_concatenated(self):
        doc = _document(_paragraph("Hello ", "World\n"), _paragraph("Second\n"))
        assert document_plain_text(doc) == "Hello World\nSecond\n"

    def test_elements_without_text_runs_are_skipped(self):
        doc = _document({"paragraph": {"elements": [{"inlineObjectElement": {}}, {"textRun": {"content": "x\n"}}]}})
        assert document_plain_text(doc) == "x\n"

    def test_table_is_flattened_with_tabs_and_newlines(self):
        doc = _document(_table([["a", "b"], ["c", "d"]]))
        assert document_plain_text(doc) == "a\tb\nc\td"

    def test_table_of_contents_is_included(self):
        doc = _document({"tableOfContents": {"content": [_paragraph("Contents\n")]}})
        assert document_plain_text(doc) == "Contents\n"

    def test_section_breaks_are_ignored(self):
        doc = _document({"sectionBreak": {}}, _paragraph("body\n"))
        assert document_plain_text(doc) == "body\n"

    def test_max_bytes_truncates(self):
        doc = _document(_paragraph("Hello World\n"))
        assert document_plain_text(doc, max_bytes=5) == "Hello"

    def test_max_bytes_stops_across_elements(self):
        doc = _document(_paragraph("abc\n"), _paragraph("def\n"))
        assert document_plain_text(doc, max_bytes=6) == "abc\nde"

    def test_max_bytes_never_splits_a_character(self):
        # "日" is three bytes, so a 5-byte budget fits "a" plus one character
        doc = _document(_paragraph("a日本\n"))
        assert document_plain_text(doc, max_bytes=5) == "a日"

    def test_zero_max_bytes_is_unlimited(self):
        doc = _document(_paragraph("x" * 100))
        assert document_plain_text(doc, max_bytes=0) == "x" * 100


class TestDocumentEndIndex:
    def test_missing_document(self):
        assert document_end_index(None) == 1

    def test_empty_body(self):
        assert document_end_index(_document()) == 1

    def test_before_trailing_newline(self):
        doc = _document(_paragraph("Hello\n", end_index=7))
        assert document_end_index(doc) == 6

    def test_uses_last_element(self):
        doc = _document(_paragraph("a\n", end_index=3), _paragraph("bc\n", end_index=6))
        assert document_end_index(doc) == 5

    def test_minimal_document(self):
        doc = _document(_paragraph("\n", end_index=1))
        assert document_end_index(doc) == 1
