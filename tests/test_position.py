"""Tests for span resolution and context snippets."""
import pytest

from ja_prose_lint.core.linter import Document, lint_text
from ja_prose_lint.core.position import (
    ELLIPSIS,
    Snippet,
    TextSpan,
    extract_context,
    resolve_span,
    select_span,
)


# ---------------------------------------------------------------------------
# resolve_span
# ---------------------------------------------------------------------------


class TestResolveSpan:
    def test_boundary_character_gives_one_char_span(self):
        assert resolve_span("これはすごい！", 1, 7) == TextSpan(offset=6, length=1)

    def test_offset_counts_preceding_lines(self):
        text = "一行目\nこれはテスト です"
        span = resolve_span(text, 2, 4)

        assert span == TextSpan(offset=7, length=3)
        assert text[span.offset:span.end] == "テスト"

    def test_span_stops_at_punctuation(self):
        assert resolve_span("これは、あれ", 1, 1).length == 3

    def test_span_stops_at_full_width_space(self):
        assert resolve_span("あい　うえ", 1, 1).length == 2

    def test_span_runs_to_end_of_line(self):
        assert resolve_span("あいう\nえお", 1, 2) == TextSpan(offset=1, length=2)

    @pytest.mark.parametrize("line,column", [(0, 1), (3, 1), (1, 0), (1, 99)])
    def test_out_of_range_is_empty(self, line, column):
        span = resolve_span("あいう\nえお", line, column)

        assert not span
        assert span == TextSpan.empty()

    def test_accepts_document(self):
        document = Document.from_text("一行目\n二行目")
        assert resolve_span(document, 2, 1) == TextSpan(offset=4, length=3)


def test_select_span_returns_selected_text():
    text = "まず最初に、説明します。\n彼は彼は行った"
    span, selected = select_span(text, 2, 2)

    assert span.offset == text.index("は彼は")
    assert selected == "は彼は行った"


def test_select_span_outside_document():
    assert select_span("あ", 5, 1) == (TextSpan.empty(), "")


# ---------------------------------------------------------------------------
# extract_context
# ---------------------------------------------------------------------------


class TestExtractContext:
    def test_truncated_on_both_sides(self):
        line = "あ" * 30 + "、テスト、" + "い" * 30
        snippet = extract_context(line, 1, 32)

        assert snippet.error_text == "テスト"
        assert snippet.before == ELLIPSIS + "あ" * 19 + "、"
        assert snippet.after == "、" + "い" * 19 + ELLIPSIS

    def test_short_line_not_truncated(self):
        snippet = extract_context("彼は彼は行った", 1, 2)

        assert snippet == Snippet(before="彼", error_text="は彼は行った", after="")

    def test_custom_context_length(self):
        snippet = extract_context("あいうえお、かきくけこ", 1, 6, context_length=2)

        assert snippet == Snippet(
            before=ELLIPSIS + "えお",
            error_text="、",
            after="かき" + ELLIPSIS,
        )

    def test_invalid_position_gives_empty_snippet(self):
        snippet = extract_context("あいう", 2, 1)

        assert snippet == Snippet()
        assert not snippet

    def test_matches_selected_text(self):
        text = "一行目です。\nこれは画期的な方法、だと思う"
        span, selected = select_span(text, 2, 4)

        assert extract_context(text, 2, 4).error_text == selected

    def test_to_dict(self):
        assert extract_context("これはすごい！", 1, 7).to_dict() == {
            "before": "これはすごい",
            "errorText": "！",
            "after": "",
        }


def _strip_markers(snippet: Snippet) -> str:
    before = snippet.before
    if before.startswith(ELLIPSIS):
        before = before[len(ELLIPSIS):]
    after = snippet.after
    if after.endswith(ELLIPSIS):
        after = after[:-len(ELLIPSIS)]
    return before + snippet.error_text + after


def test_snippets_are_substrings_of_their_line():
    text = "\n".join([
        "まず最初に、このツールの使い方を説明します。長い説明が続くかもしれない。",
        "これは革命的な製品だと思う！本当にそうだろうか？",
        "**注意**: 彼は彼は行った",
        "✅ テストテストを実行することができる",
        "い" * 150,
    ])
    document = Document.from_text(text)

    for d in lint_text(text).diagnostics:
        snippet = extract_context(document, d.line, d.column)
        assert snippet
        assert _strip_markers(snippet) in document.line_text(d.line)
