"""Rules for phrasing and formatting typical of AI-generated Japanese text."""
import re
from typing import Iterator

from ..models import RuleMatch

AI_PATTERN_MESSAGE = "AI生成文書に見られる表現パターンです"

HYPE_EXPRESSIONS = (
    "革命的な",
    "画期的な",
    "圧倒的な",
    "究極の",
    "驚くべき",
)

_CHECKMARK_MARKER = re.compile(r'[✅✔☑]️?')
_BOLD_COLON = re.compile(r'\*\*[^*]+\*\*[:：]')


def hype_expressions(line: str) -> Iterator[RuleMatch]:
    """Flag exaggerated promotional wording."""
    for word in HYPE_EXPRESSIONS:
        for match in re.finditer(re.escape(word), line):
            yield RuleMatch(offset=match.start(), text=word, message=AI_PATTERN_MESSAGE)


def list_formatting(line: str) -> Iterator[RuleMatch]:
    """Flag checkmark glyphs used as list markers."""
    for match in _CHECKMARK_MARKER.finditer(line):
        yield RuleMatch(offset=match.start(), text=match.group(), message=AI_PATTERN_MESSAGE)


def emphasis_patterns(line: str) -> Iterator[RuleMatch]:
    """Flag markdown bold labels followed by a colon (**項目**:)."""
    for match in _BOLD_COLON.finditer(line):
        yield RuleMatch(offset=match.start(), text=match.group(), message=AI_PATTERN_MESSAGE)


def colon_continuation(line: str) -> Iterator[RuleMatch]:
    """
    Flag colons used to continue a sentence.

    Reports once per line. When both an ASCII and a full-width colon
    are present, the later of their first occurrences is reported.
    """
    if ':' not in line and '：' not in line:
        return
    index = max(line.find(':'), line.find('：'))
    yield RuleMatch(offset=index, text=line[index], message="コロンの使用は避けてください")
