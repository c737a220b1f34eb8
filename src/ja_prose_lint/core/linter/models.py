"""Data models for the linter."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Iterator


class Severity(IntEnum):
    """Severity levels for diagnostics (wire values)."""
    WARNING = 1
    ERROR = 2


class RuleCategory(Enum):
    """Rule groups shown in the rule settings panel."""
    TECHNICAL_WRITING = "technical-writing"
    AI_WRITING = "ai-writing"


@dataclass(frozen=True)
class RuleMatch:
    """A raw match produced by a rule on a single line."""
    offset: int  # 0-based within the line
    text: str
    message: str


@dataclass(frozen=True)
class Rule:
    """A statically registered pattern rule."""
    rule_id: str
    name: str
    category: RuleCategory
    severity: Severity
    match: Callable[[str], Iterator[RuleMatch]]

    @property
    def description(self) -> str:
        return (self.match.__doc__ or "No description").strip().split('\n')[0]


@dataclass(frozen=True)
class Document:
    """Text split into lines, rebuilt for every lint pass."""
    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> Document:
        return cls(lines=tuple(text.split('\n')))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def has_line(self, line: int) -> bool:
        """True if the 1-based line number exists."""
        return 1 <= line <= len(self.lines)

    def line_text(self, line: int) -> str:
        return self.lines[line - 1]

    def line_start(self, line: int) -> int:
        """Absolute 0-based offset of the first character of a 1-based line."""
        return sum(len(text) + 1 for text in self.lines[:line - 1])


@dataclass(frozen=True)
class Diagnostic:
    """A single issue found in the document."""
    rule_id: str
    message: str
    line: int    # 1-based
    column: int  # 1-based
    severity: Severity

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "lint",
            "ruleId": self.rule_id,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "severity": int(self.severity),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Diagnostic:
        """Create from a wire dict. Raises KeyError/ValueError on bad input."""
        return cls(
            rule_id=data["ruleId"],
            message=data["message"],
            line=int(data["line"]),
            column=int(data["column"]),
            severity=Severity(int(data["severity"])),
        )


@dataclass(frozen=True)
class LintResult:
    """Diagnostics for a document; counts are always derived."""
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> LintResult:
        return cls()

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARNING)

    def to_dict(self) -> dict[str, Any]:
        return {
            "messages": [d.to_dict() for d in self.diagnostics],
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LintResult:
        """Create from a wire dict. Counts in the dict are ignored and re-derived."""
        return cls(diagnostics=tuple(
            Diagnostic.from_dict(m) for m in data.get("messages", [])
        ))
