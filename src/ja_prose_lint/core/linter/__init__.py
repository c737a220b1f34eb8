"""Japanese prose linter."""
from .engine import RuleEngine, lint_text, lint_file, get_available_rules
from .models import (
    Diagnostic,
    Document,
    LintResult,
    Rule,
    RuleCategory,
    RuleMatch,
    Severity,
)

__all__ = [
    "RuleEngine",
    "lint_text",
    "lint_file",
    "get_available_rules",
    "Diagnostic",
    "Document",
    "LintResult",
    "Rule",
    "RuleCategory",
    "RuleMatch",
    "Severity",
]
