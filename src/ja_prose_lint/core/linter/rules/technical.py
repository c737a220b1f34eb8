"""Technical writing rules for Japanese prose."""
import re
from typing import Iterator

from ..models import RuleMatch

MAX_SENTENCE_LENGTH = 100
MAX_KANJI_CONTINUOUS_LEN = 6

# (phrase, suggested replacement)
REDUNDANT_EXPRESSIONS = (
    ("まず最初に", "「まず」または「最初に」"),
    ("することができる", "「できる」"),
    ("することが可能", "「可能」"),
    ("一番最初", "「最初」"),
    ("後で後悔", "「後悔」"),
    ("頭痛が痛い", "「頭痛がする」"),
)

WEAK_PHRASES = (
    "かもしれない",
    "かもしれません",
    "思う",
    "だろう",
    "気がする",
)

# Ra-nuki forms and their standard forms
RANUKI_FORMS = (
    ("食べれる", "食べられる"),
    ("見れる", "見られる"),
    ("着れる", "着られる"),
    ("考えれる", "考えられる"),
    ("来れる", "来られる"),
    ("出れる", "出られる"),
    ("寝れる", "寝られる"),
)

_EXCLAMATION = re.compile(r'[！!？?]+')
_SENTENCE_DELIMITER = re.compile(r'[。．]')
_DOUBLED_JOSHI = re.compile(r'([はがをに])[^はがをに]{0,10}\1')

# Kanji and katakana only; hiragana reduplication (ますます, いろいろ) is normal prose
_SUCCESSIVE_CJK = re.compile(r'([ァ-ヺー一-龯]{2,})\1')
_SUCCESSIVE_LATIN = re.compile(r'([A-Za-z]{3,})\1')
_SUCCESSIVE_LATIN_SPACED = re.compile(
    r'(?<![A-Za-z])([A-Za-z]{2,})[ \t　]+\1(?![A-Za-z])'
)

_KANJI_RUN = re.compile(r'[一-龯]{%d,}' % (MAX_KANJI_CONTINUOUS_LEN + 1))


def _find_phrase(line: str, phrase: str) -> Iterator[int]:
    """Yield the start of every non-overlapping occurrence of phrase."""
    for match in re.finditer(re.escape(phrase), line):
        yield match.start()


def exclamation_question_mark(line: str) -> Iterator[RuleMatch]:
    """Flag exclamation and question marks."""
    for match in _EXCLAMATION.finditer(line):
        yield RuleMatch(
            offset=match.start(),
            text=match.group(),
            message="文末に感嘆符や疑問符を使用しないでください",
        )


def sentence_length(line: str) -> Iterator[RuleMatch]:
    """
    Flag sentences longer than 100 characters.

    Sentences are split on 。 and ．; the column of each over-length
    sentence is its start within the line.
    """
    offset = 0
    for segment in _SENTENCE_DELIMITER.split(line):
        if len(segment) > MAX_SENTENCE_LENGTH:
            yield RuleMatch(
                offset=offset,
                text=segment,
                message=(
                    f"文が長すぎます。{MAX_SENTENCE_LENGTH}文字以内にしてください。"
                    f"現在の文字数: {len(segment)}"
                ),
            )
        offset += len(segment) + 1


def redundant_expression(line: str) -> Iterator[RuleMatch]:
    """Flag redundant expressions and suggest a shorter form."""
    for phrase, suggestion in REDUNDANT_EXPRESSIONS:
        for start in _find_phrase(line, phrase):
            yield RuleMatch(
                offset=start,
                text=phrase,
                message=f"冗長な表現です。{suggestion}を使用してください",
            )


def weak_phrase(line: str) -> Iterator[RuleMatch]:
    """Flag hedging phrases that weaken a statement."""
    for phrase in WEAK_PHRASES:
        for start in _find_phrase(line, phrase):
            yield RuleMatch(
                offset=start,
                text=phrase,
                message="弱い表現を使用しています。より明確な表現を検討してください",
            )


def doubled_joshi(line: str) -> Iterator[RuleMatch]:
    """
    Flag a particle (は, が, を, に) repeated within a short distance.

    Up to 10 non-particle characters may separate the two occurrences.
    """
    for match in _DOUBLED_JOSHI.finditer(line):
        particle = match.group(1)
        yield RuleMatch(
            offset=match.start(),
            text=match.group(),
            message=f"助詞「{particle}」が連続して使用されています",
        )


def successive_word(line: str) -> Iterator[RuleMatch]:
    """
    Flag a word immediately repeated.

    Covers kanji/katakana runs, Latin runs written back to back,
    and Latin words repeated across whitespace.
    """
    for pattern in (_SUCCESSIVE_CJK, _SUCCESSIVE_LATIN, _SUCCESSIVE_LATIN_SPACED):
        for match in pattern.finditer(line):
            word = match.group(1)
            yield RuleMatch(
                offset=match.start(),
                text=match.group(),
                message=f"「{word}」が連続しています",
            )


def abusage(line: str) -> Iterator[RuleMatch]:
    """Flag ra-nuki verb forms."""
    for form, correct in RANUKI_FORMS:
        for start in _find_phrase(line, form):
            yield RuleMatch(
                offset=start,
                text=form,
                message=f"ら抜き言葉を使用しています（「{correct}」）",
            )


def max_kanji_continuous_len(line: str) -> Iterator[RuleMatch]:
    """Flag the first run of 7 or more consecutive kanji."""
    match = _KANJI_RUN.search(line)
    if match:
        yield RuleMatch(
            offset=match.start(),
            text=match.group(),
            message=(
                f"連続する漢字が長すぎます（{len(match.group())}文字）。"
                f"{MAX_KANJI_CONTINUOUS_LEN}文字以内にしてください"
            ),
        )
