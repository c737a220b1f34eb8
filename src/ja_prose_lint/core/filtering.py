"""Rule toggles and severity filtering for diagnostic lists."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable, Mapping

from ja_prose_lint.core.linter.models import Diagnostic, LintResult, Severity


class SeverityFilter(Enum):
    """Which severities to show."""
    ALL = "all"
    ERROR = "error"
    WARNING = "warning"

    @classmethod
    def parse(cls, value: SeverityFilter | str) -> SeverityFilter:
        """Accept an enum member or its string value. Raises ValueError otherwise."""
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


_SEVERITY_FOR_FILTER = {
    SeverityFilter.ERROR: Severity.ERROR,
    SeverityFilter.WARNING: Severity.WARNING,
}


@dataclass(frozen=True)
class RuleSetting:
    """One entry of the rule toggle panel."""
    id: str
    name: str
    category: str
    enabled: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "category": self.category, "enabled": self.enabled}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RuleSetting:
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            category=data.get("category", ""),
            enabled=bool(data.get("enabled", True)),
        )


class RuleConfiguration:
    """
    Enabled state of user-toggleable rules, keyed by rule id.

    Rules missing from the configuration are treated as enabled.
    """

    def __init__(self, settings: Iterable[RuleSetting] = ()):
        self._settings: dict[str, RuleSetting] = {s.id: s for s in settings}

    @classmethod
    def from_mapping(cls, enabled: Mapping[str, bool]) -> RuleConfiguration:
        return cls(
            RuleSetting(id=rule_id, name=rule_id, category="", enabled=bool(flag))
            for rule_id, flag in enabled.items()
        )

    @property
    def settings(self) -> list[RuleSetting]:
        """Settings in registration order."""
        return list(self._settings.values())

    def is_enabled(self, rule_id: str) -> bool:
        setting = self._settings.get(rule_id)
        return setting is None or setting.enabled

    def set_enabled(self, rule_id: str, enabled: bool) -> None:
        """Set a rule's state; unknown ids are added as a bare entry."""
        setting = self._settings.get(rule_id)
        if setting is None:
            setting = RuleSetting(id=rule_id, name=rule_id, category="")
        self._settings[rule_id] = replace(setting, enabled=enabled)

    def toggle(self, rule_id: str) -> bool:
        """Flip a rule's state and return the new value."""
        enabled = not self.is_enabled(rule_id)
        self.set_enabled(rule_id, enabled)
        return enabled

    def as_mapping(self) -> dict[str, bool]:
        return {rule_id: s.enabled for rule_id, s in self._settings.items()}

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._settings


def filter_diagnostics(
    diagnostics: Iterable[Diagnostic],
    rule_configuration: RuleConfiguration | Mapping[str, bool] | None = None,
    severity_filter: SeverityFilter | str = SeverityFilter.ALL,
) -> list[Diagnostic]:
    """
    Drop diagnostics of disabled rules, then apply the severity filter.

    Args:
        diagnostics: Diagnostics in engine order
        rule_configuration: Rule toggles (None keeps every rule)
        severity_filter: "all", "error" or "warning"

    Returns:
        Filtered diagnostics, original order preserved
    """
    if isinstance(rule_configuration, Mapping):
        rule_configuration = RuleConfiguration.from_mapping(rule_configuration)
    severity_filter = SeverityFilter.parse(severity_filter)

    kept = [
        d for d in diagnostics
        if rule_configuration is None or rule_configuration.is_enabled(d.rule_id)
    ]

    wanted = _SEVERITY_FOR_FILTER.get(severity_filter)
    if wanted is not None:
        kept = [d for d in kept if d.severity == wanted]

    return kept


def filter_result(
    result: LintResult,
    rule_configuration: RuleConfiguration | Mapping[str, bool] | None = None,
    severity_filter: SeverityFilter | str = SeverityFilter.ALL,
) -> LintResult:
    """Filter a LintResult; counts of the returned result follow the filtered list."""
    return LintResult(diagnostics=tuple(
        filter_diagnostics(result.diagnostics, rule_configuration, severity_filter)
    ))
