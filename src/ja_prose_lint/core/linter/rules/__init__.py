"""Lint rules for Japanese prose."""
from ..models import Rule, RuleCategory, Severity
from . import technical, ai_writing

_TECH = RuleCategory.TECHNICAL_WRITING
_AI = RuleCategory.AI_WRITING

# Registry of all rules, in the order they run on each line
RULES: tuple[Rule, ...] = (
    # Technical writing rules
    Rule("no-exclamation-question-mark", "感嘆符・疑問符の禁止", _TECH, Severity.ERROR,
         technical.exclamation_question_mark),
    Rule("sentence-length", "文の長さ", _TECH, Severity.ERROR,
         technical.sentence_length),
    Rule("ja-no-redundant-expression", "冗長な表現", _TECH, Severity.WARNING,
         technical.redundant_expression),
    Rule("ja-no-weak-phrase", "弱い表現", _TECH, Severity.WARNING,
         technical.weak_phrase),
    Rule("no-doubled-joshi", "二重助詞", _TECH, Severity.WARNING,
         technical.doubled_joshi),
    Rule("ja-no-successive-word", "連続する単語", _TECH, Severity.ERROR,
         technical.successive_word),
    Rule("ja-no-abusage", "ら抜き言葉", _TECH, Severity.WARNING,
         technical.abusage),
    Rule("max-kanji-continuous-len", "連続する漢字", _TECH, Severity.WARNING,
         technical.max_kanji_continuous_len),

    # AI writing rules
    Rule("no-ai-hype-expressions", "AI的な誇張表現", _AI, Severity.WARNING,
         ai_writing.hype_expressions),
    Rule("no-ai-list-formatting", "AI的なリスト書式", _AI, Severity.WARNING,
         ai_writing.list_formatting),
    Rule("no-ai-emphasis-patterns", "AI的な強調パターン", _AI, Severity.WARNING,
         ai_writing.emphasis_patterns),
    Rule("no-ai-colon-continuation", "コロンの使用", _AI, Severity.WARNING,
         ai_writing.colon_continuation),
)

RULES_BY_ID: dict[str, Rule] = {rule.rule_id: rule for rule in RULES}

__all__ = ["RULES", "RULES_BY_ID", "technical", "ai_writing"]
