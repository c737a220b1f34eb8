"""Tests for individual lint rules and the reference scenarios."""
from ja_prose_lint.core.linter import Severity, lint_text


def _by_rule(text: str, rule_id: str):
    return [d for d in lint_text(text).diagnostics if d.rule_id == rule_id]


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------


def test_exclamation_scenario():
    result = lint_text("これはすごい！")

    assert len(result.diagnostics) == 1
    d = result.diagnostics[0]
    assert d.rule_id == "no-exclamation-question-mark"
    assert d.severity == Severity.ERROR
    assert d.column == "これはすごい！".index("！") + 1


def test_doubled_joshi_scenario():
    result = lint_text("彼は彼は行った")

    assert len(result.diagnostics) == 1
    d = result.diagnostics[0]
    assert d.rule_id == "no-doubled-joshi"
    assert "「は」" in d.message


def test_sentence_length_scenario():
    result = lint_text("あ" * 101)

    assert len(result.diagnostics) == 1
    d = result.diagnostics[0]
    assert d.rule_id == "sentence-length"
    assert d.column == 1
    assert "101" in d.message


def test_successive_word_scenario():
    result = lint_text("テストテスト")

    assert len(result.diagnostics) == 1
    d = result.diagnostics[0]
    assert d.rule_id == "ja-no-successive-word"
    assert d.severity == Severity.ERROR
    assert "「テスト」" in d.message


def test_colon_scenario_reports_later_colon():
    text = "abcde:fghi：jk"
    assert text.index(":") == 5
    assert text.index("：") == 10

    result = lint_text(text)

    assert len(result.diagnostics) == 1
    d = result.diagnostics[0]
    assert d.rule_id == "no-ai-colon-continuation"
    assert d.column == 11


# ---------------------------------------------------------------------------
# Technical writing rules
# ---------------------------------------------------------------------------


class TestExclamationQuestionMark:
    def test_every_run_is_reported(self):
        found = _by_rule("本当？すごい！！", "no-exclamation-question-mark")
        assert [d.column for d in found] == [3, 7]

    def test_ascii_marks(self):
        found = _by_rule("Really?! yes", "no-exclamation-question-mark")
        assert len(found) == 1
        assert found[0].column == 7


class TestSentenceLength:
    def test_exactly_limit_is_fine(self):
        assert _by_rule("あ" * 100, "sentence-length") == []

    def test_column_of_second_sentence(self):
        text = "い" * 50 + "。" + "う" * 120 + "。"
        found = _by_rule(text, "sentence-length")
        assert len(found) == 1
        assert found[0].column == 52
        assert "120" in found[0].message

    def test_full_width_period_splits(self):
        text = "え" * 60 + "．" + "お" * 60
        assert _by_rule(text, "sentence-length") == []

    def test_one_per_long_sentence(self):
        text = "か" * 101 + "。" + "き" * 101
        found = _by_rule(text, "sentence-length")
        assert [d.column for d in found] == [1, 103]


class TestRedundantExpression:
    def test_suggestion_in_message(self):
        found = _by_rule("まず最初に、することができる。", "ja-no-redundant-expression")
        assert [d.column for d in found] == [1, 7]
        assert "「まず」または「最初に」" in found[0].message
        assert "「できる」" in found[1].message
        assert all(d.severity == Severity.WARNING for d in found)

    def test_all_occurrences(self):
        found = _by_rule("まず最初に読む。まず最初に書く。", "ja-no-redundant-expression")
        assert [d.column for d in found] == [1, 9]


class TestWeakPhrase:
    def test_each_phrase_found(self):
        found = _by_rule("雨が降るだろうと思う", "ja-no-weak-phrase")
        assert sorted(d.column for d in found) == [5, 9]

    def test_clear_statement(self):
        assert _by_rule("雨が降る。", "ja-no-weak-phrase") == []


class TestDoubledJoshi:
    def test_multiple_matches(self):
        found = _by_rule("私は本は好きだが金がない", "no-doubled-joshi")
        assert [d.column for d in found] == [2, 8]
        assert "「は」" in found[0].message
        assert "「が」" in found[1].message

    def test_ten_characters_apart(self):
        assert len(_by_rule("彼は" + "あいうえおかきくけこ" + "は", "no-doubled-joshi")) == 1

    def test_eleven_characters_apart(self):
        assert _by_rule("彼は" + "あいうえおかきくけこさ" + "は", "no-doubled-joshi") == []

    def test_different_particles(self):
        assert _by_rule("彼が本を読む", "no-doubled-joshi") == []


class TestSuccessiveWord:
    def test_latin_adjacent(self):
        found = _by_rule("testtest", "ja-no-successive-word")
        assert len(found) == 1
        assert "「test」" in found[0].message

    def test_short_latin_adjacent_ignored(self):
        assert _by_rule("abab", "ja-no-successive-word") == []

    def test_latin_space_separated(self):
        found = _by_rule("this is is a pen", "ja-no-successive-word")
        assert len(found) == 1
        assert found[0].column == 6

    def test_word_boundary_required(self):
        assert _by_rule("the theory", "ja-no-successive-word") == []

    def test_hiragana_reduplication_allowed(self):
        assert _by_rule("ますます良くなる", "ja-no-successive-word") == []

    def test_kanji_repetition(self):
        found = _by_rule("会議会議を開く", "ja-no-successive-word")
        assert len(found) == 1
        assert found[0].column == 1


class TestAbusage:
    def test_ranuki(self):
        found = _by_rule("これは見れる", "ja-no-abusage")
        assert len(found) == 1
        assert found[0].column == 4
        assert "見られる" in found[0].message

    def test_standard_form(self):
        assert _by_rule("これは見られる", "ja-no-abusage") == []


class TestMaxKanjiContinuousLen:
    def test_long_run(self):
        found = _by_rule("国際連合安全保障理事会の決議", "max-kanji-continuous-len")
        assert len(found) == 1
        assert found[0].column == 1
        assert "11文字" in found[0].message

    def test_first_run_only(self):
        found = _by_rule("国際連合安全保障理事会と地方自治体行政機関", "max-kanji-continuous-len")
        assert len(found) == 1
        assert found[0].column == 1

    def test_six_kanji_allowed(self):
        assert _by_rule("東京都庁舎前", "max-kanji-continuous-len") == []


# ---------------------------------------------------------------------------
# AI writing rules
# ---------------------------------------------------------------------------


class TestAiWriting:
    def test_hype_expression(self):
        found = _by_rule("これは革命的な製品です", "no-ai-hype-expressions")
        assert len(found) == 1
        assert found[0].column == 4

    def test_checkmark_marker(self):
        found = _by_rule("✅ 完了", "no-ai-list-formatting")
        assert len(found) == 1
        assert found[0].column == 1

    def test_bold_colon_emphasis(self):
        text = "**注意**: 重要"
        assert len(_by_rule(text, "no-ai-emphasis-patterns")) == 1
        colon = _by_rule(text, "no-ai-colon-continuation")
        assert [d.column for d in colon] == [7]

    def test_full_width_colon_only(self):
        found = _by_rule("理由：簡単", "no-ai-colon-continuation")
        assert [d.column for d in found] == [3]

    def test_one_colon_diagnostic_per_line(self):
        found = _by_rule("a:b:c", "no-ai-colon-continuation")
        assert [d.column for d in found] == [2]
