"""Configuration management with environment variable overrides."""
from dataclasses import dataclass
from pathlib import Path
import logging
import os

import yaml

from ja_prose_lint.core.filtering import RuleConfiguration, RuleSetting, SeverityFilter

logger = logging.getLogger(__name__)

# Rules shown in the toggle panel. Rules not listed here (sentence-length,
# max-kanji-continuous-len) cannot be switched off.
DEFAULT_RULE_SETTINGS: tuple[RuleSetting, ...] = (
    # Technical writing rules
    RuleSetting("no-exclamation-question-mark", "感嘆符・疑問符の禁止", "technical-writing"),
    RuleSetting("ja-no-successive-word", "連続する単語", "technical-writing"),
    RuleSetting("ja-no-redundant-expression", "冗長な表現", "technical-writing"),
    RuleSetting("ja-no-weak-phrase", "弱い表現", "technical-writing"),
    RuleSetting("no-doubled-joshi", "二重助詞", "technical-writing"),
    RuleSetting("ja-no-abusage", "ら抜き言葉", "technical-writing"),
    # AI writing rules
    RuleSetting("no-ai-hype-expressions", "AI的な誇張表現", "ai-writing"),
    RuleSetting("no-ai-list-formatting", "AI的なリスト書式", "ai-writing"),
    RuleSetting("no-ai-emphasis-patterns", "AI的な強調パターン", "ai-writing"),
    RuleSetting("no-ai-colon-continuation", "コロンの使用", "ai-writing"),
)


@dataclass
class Config:
    """Configuration for the Japanese prose linter."""

    # Pipeline
    debounce_delay: float = 0.3   # seconds
    engine: str = "local"         # "local" or "worker"
    engine_latency: float = 0.0   # simulated local engine delay, seconds

    # Presentation
    context_length: int = 20
    severity_filter: str = SeverityFilter.ALL.value

    # Rule toggles (YAML); defaults apply when unset
    rules_file: Path | None = None

    version: str = "0.1.0"

    @classmethod
    def load(cls) -> "Config":
        """Load config with environment variable overrides."""
        config = cls()

        if val := os.environ.get("JA_PROSE_LINT_DEBOUNCE_MS"):
            config.debounce_delay = int(val) / 1000

        if val := os.environ.get("JA_PROSE_LINT_ENGINE"):
            if val in ("local", "worker"):
                config.engine = val
            else:
                logger.warning(f"Ignoring unknown engine backend: {val}")

        if val := os.environ.get("JA_PROSE_LINT_ENGINE_LATENCY_MS"):
            config.engine_latency = int(val) / 1000

        if val := os.environ.get("JA_PROSE_LINT_CONTEXT_LENGTH"):
            config.context_length = int(val)

        if val := os.environ.get("JA_PROSE_LINT_SEVERITY"):
            if val.lower() in {f.value for f in SeverityFilter}:
                config.severity_filter = val.lower()

        if val := os.environ.get("JA_PROSE_LINT_RULES_FILE"):
            config.rules_file = Path(val).expanduser()

        return config

    def get_rule_configuration(self) -> RuleConfiguration:
        """Rule toggles from rules_file, or the default panel."""
        if self.rules_file is None:
            return default_rule_configuration()
        return load_rule_configuration(self.rules_file)


def default_rule_configuration() -> RuleConfiguration:
    return RuleConfiguration(DEFAULT_RULE_SETTINGS)


def load_rule_configuration(path: Path) -> RuleConfiguration:
    """
    Load rule toggles from a YAML file.

    Two shapes are accepted::

        rules:
          - {id: ja-no-weak-phrase, name: 弱い表現, category: technical-writing, enabled: false}

    or a flat map::

        ja-no-weak-phrase: false

    Entries of the flat map are applied on top of the default panel.

    Raises:
        ValueError: The file does not have one of the shapes above
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Rule configuration must be a mapping: {path}")

    if "rules" in data:
        entries = data["rules"]
        if not isinstance(entries, list):
            raise ValueError(f"'rules' must be a list: {path}")
        try:
            return RuleConfiguration(RuleSetting.from_dict(e) for e in entries)
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid rule entry in {path}: {e}") from e

    rule_config = default_rule_configuration()
    for rule_id, enabled in data.items():
        if not isinstance(enabled, bool):
            raise ValueError(f"Rule '{rule_id}' must map to true/false: {path}")
        rule_config.set_enabled(str(rule_id), enabled)

    logger.debug(f"Loaded {len(data)} rule toggles from {path}")
    return rule_config


def save_rule_configuration(rule_config: RuleConfiguration, path: Path) -> None:
    """Write rule toggles as YAML (the list shape)."""
    path.write_text(
        yaml.dump(
            {"rules": [s.to_dict() for s in rule_config.settings]},
            allow_unicode=True,
            sort_keys=False,
        ),
        encoding='utf-8'
    )
