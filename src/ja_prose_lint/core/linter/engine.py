"""Lint engine - runs rules line by line and collects diagnostics."""
import logging
from pathlib import Path
from typing import Iterable, Optional

from .models import Diagnostic, Document, LintResult, Rule
from .rules import RULES

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Runs an ordered set of rules over every line of a document.

    Linting is deterministic and total: the same text always yields the
    same ordered diagnostics, and a rule that finds nothing contributes
    nothing.
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None, strict: bool = False):
        """
        Args:
            rules: Rules to run, in order (default: all registered rules)
            strict: Re-raise rule failures instead of logging and skipping them
        """
        self.rules: tuple[Rule, ...] = tuple(rules) if rules is not None else RULES
        self.strict = strict

    def lint(self, text: str) -> LintResult:
        """
        Lint a text.

        Args:
            text: The document text (lines separated by newlines)

        Returns:
            LintResult with diagnostics in rule-emission order per line
        """
        document = Document.from_text(text)
        diagnostics: list[Diagnostic] = []

        for index, line_text in enumerate(document.lines):
            line_num = index + 1
            for rule in self.rules:
                diagnostics.extend(self._run_rule(rule, line_text, line_num))

        result = LintResult(diagnostics=tuple(diagnostics))
        logger.debug(
            f"Linted {document.line_count} lines: "
            f"{result.error_count} errors, {result.warning_count} warnings"
        )
        return result

    def _run_rule(self, rule: Rule, line_text: str, line_num: int) -> list[Diagnostic]:
        try:
            return [
                Diagnostic(
                    rule_id=rule.rule_id,
                    message=match.message,
                    line=line_num,
                    column=match.offset + 1,
                    severity=rule.severity,
                )
                for match in rule.match(line_text)
            ]
        except Exception:
            if self.strict:
                raise
            logger.exception(f"Rule {rule.rule_id} failed on line {line_num}")
            return []


_default_engine = RuleEngine()


def lint_text(text: str) -> LintResult:
    """Lint text with the default rule set."""
    return _default_engine.lint(text)


def lint_file(path: Path) -> LintResult:
    """
    Lint a UTF-8 text file with the default rule set.

    Args:
        path: Path to the text or markdown file

    Returns:
        LintResult for the file contents
    """
    content = path.read_text(encoding='utf-8')
    return lint_text(content)


def get_available_rules() -> dict[str, str]:
    """
    Get list of available rules with descriptions.

    Returns:
        Dict mapping rule id to the first line of its docstring
    """
    return {rule.rule_id: rule.description for rule in RULES}
