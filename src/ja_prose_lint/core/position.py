"""Map diagnostic line/column positions back onto the original text.

The same span logic drives both the context snippet shown next to a
diagnostic and the text selected in an editor, so the highlighted text
and the displayed context always agree.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ja_prose_lint.core.linter.models import Document

ELLIPSIS = "..."
DEFAULT_CONTEXT_LENGTH = 20

# Whitespace (including U+3000) also ends a span; see _is_boundary
SPAN_BOUNDARY_CHARS = frozenset("、。，．！？!?,.")


@dataclass(frozen=True)
class TextSpan:
    """A character range in the document (absolute 0-based offset)."""
    offset: int
    length: int

    @classmethod
    def empty(cls) -> TextSpan:
        return cls(offset=0, length=0)

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __bool__(self) -> bool:
        return self.length > 0


@dataclass(frozen=True)
class Snippet:
    """Display context around a diagnostic."""
    before: str = ""
    error_text: str = ""
    after: str = ""

    def __bool__(self) -> bool:
        return bool(self.error_text)

    def to_dict(self) -> dict[str, Any]:
        return {"before": self.before, "errorText": self.error_text, "after": self.after}


def _is_boundary(char: str) -> bool:
    return char.isspace() or char in SPAN_BOUNDARY_CHARS


def _word_length(line_text: str, start: int) -> int:
    """Length of the token starting at start, at least 1 if a character exists."""
    if start >= len(line_text):
        return 0
    if _is_boundary(line_text[start]):
        return 1
    end = start
    while end < len(line_text) and not _is_boundary(line_text[end]):
        end += 1
    return end - start


def _coerce(document: Document | str) -> Document:
    if isinstance(document, Document):
        return document
    return Document.from_text(document)


def resolve_span(document: Document | str, line: int, column: int) -> TextSpan:
    """
    Resolve a 1-based line/column into an absolute span of the text.

    The span runs from the column to the next whitespace or punctuation
    boundary (or end of line). A boundary character at the column itself
    gives a one-character span.

    Args:
        document: Document or raw text
        line: 1-based line number
        column: 1-based column number

    Returns:
        TextSpan; empty when the position is outside the document
    """
    document = _coerce(document)
    if not document.has_line(line) or column < 1:
        return TextSpan.empty()

    line_text = document.line_text(line)
    start = column - 1
    length = _word_length(line_text, start)
    if length == 0:
        return TextSpan.empty()

    return TextSpan(offset=document.line_start(line) + start, length=length)


def select_span(text: str, line: int, column: int) -> tuple[TextSpan, str]:
    """
    Selection range and selected text for placing the caret on a diagnostic.

    Returns:
        Tuple of (span, selected_text); selected_text is "" for an empty span
    """
    span = resolve_span(text, line, column)
    if not span:
        return span, ""
    return span, text[span.offset:span.end]


def extract_context(
    document: Document | str,
    line: int,
    column: int,
    context_length: int = DEFAULT_CONTEXT_LENGTH
) -> Snippet:
    """
    Build a before/error/after snippet for a diagnostic.

    Up to context_length characters are taken on each side of the
    resolved span, within the same line. Truncated sides are marked
    with "...".

    Args:
        document: Document or raw text
        line: 1-based line number
        column: 1-based column number
        context_length: Characters of context on each side

    Returns:
        Snippet; empty when the position cannot be resolved
    """
    document = _coerce(document)
    span = resolve_span(document, line, column)
    if not span:
        return Snippet()

    line_text = document.line_text(line)
    error_start = column - 1
    error_end = error_start + span.length

    before_start = max(0, error_start - context_length)
    before = line_text[before_start:error_start]
    if before_start > 0:
        before = ELLIPSIS + before

    after_end = min(len(line_text), error_end + context_length)
    after = line_text[error_end:after_end]
    if after_end < len(line_text):
        after = after + ELLIPSIS

    return Snippet(
        before=before,
        error_text=line_text[error_start:error_end],
        after=after,
    )
