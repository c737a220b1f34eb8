"""Lint tools for the MCP server."""
import logging

from ja_prose_lint.config import Config
from ja_prose_lint.core.filtering import filter_result
from ja_prose_lint.core.linter import engine
from ja_prose_lint.core.position import extract_context, select_span
from ja_prose_lint.report import render_markdown_report

logger = logging.getLogger(__name__)


def register(mcp, config: Config):
    """Register lint tools with MCP server."""

    @mcp.tool()
    async def lint_text(
        text: str,
        severity: str | None = None,
        disabled_rules: list[str] | None = None,
        report: bool = False
    ) -> dict:
        """
        Lint Japanese prose for stylistic issues.

        Technical writing rules:
        - no-exclamation-question-mark: ！ ？ ! ? (error)
        - sentence-length: sentences over 100 characters (error)
        - ja-no-redundant-expression: まず最初に, することができる, ... (warning)
        - ja-no-weak-phrase: かもしれない, 思う, だろう, ... (warning)
        - no-doubled-joshi: は/が/を/に repeated within a short span (warning)
        - ja-no-successive-word: the same word twice in a row (error)
        - ja-no-abusage: ra-nuki forms such as 見れる (warning)
        - max-kanji-continuous-len: 7+ kanji in a row (warning)

        AI writing rules:
        - no-ai-hype-expressions, no-ai-list-formatting,
          no-ai-emphasis-patterns, no-ai-colon-continuation (warning)

        Args:
            text: The text to lint
            severity: "all", "error" or "warning" (default: from config)
            disabled_rules: Rule ids to switch off
            report: Include a markdown review report

        Returns:
            Dictionary with:
            - messages (list): Diagnostics ({type, ruleId, message, line, column, severity})
            - errorCount (int): Errors after filtering
            - warningCount (int): Warnings after filtering
            - report (str): Markdown report (if report=True)
        """
        try:
            rule_config = config.get_rule_configuration()
            for rule_id in disabled_rules or []:
                rule_config.set_enabled(rule_id, False)

            result = filter_result(
                engine.lint_text(text),
                rule_config,
                severity or config.severity_filter,
            )
        except (OSError, ValueError) as e:
            logger.error(f"Lint failed: {e}", exc_info=True)
            return {"error": str(e)}

        logger.info(
            f"Lint complete: {result.error_count} errors, {result.warning_count} warnings"
        )

        response = result.to_dict()
        if report:
            response["report"] = render_markdown_report(
                result, text, context_length=config.context_length
            )
        return response

    @mcp.tool()
    async def get_diagnostic_context(
        text: str,
        line: int,
        column: int,
        context_length: int | None = None
    ) -> dict:
        """
        Get the text around a diagnostic position.

        Args:
            text: The linted text
            line: 1-based line of the diagnostic
            column: 1-based column of the diagnostic
            context_length: Characters of context on each side (default: 20)

        Returns:
            Dictionary with:
            - before (str), errorText (str), after (str): Snippet parts
            - offset (int), length (int): Absolute span for selecting the text
            - selectedText (str): Text covered by the span
            All empty when the position is outside the text.
        """
        snippet = extract_context(
            text, line, column,
            context_length if context_length is not None else config.context_length
        )
        span, selected = select_span(text, line, column)
        return {
            **snippet.to_dict(),
            "offset": span.offset,
            "length": span.length,
            "selectedText": selected,
        }

    @mcp.tool()
    async def get_lint_rules() -> dict:
        """
        Get list of available lint rules with descriptions and toggle state.

        Example response:
            {
                "rules": {
                    "no-exclamation-question-mark": "Flag exclamation and question marks.",
                    ...
                },
                "settings": [
                    {"id": "no-exclamation-question-mark", "name": "感嘆符・疑問符の禁止",
                     "category": "technical-writing", "enabled": true},
                    ...
                ]
            }
        """
        try:
            settings = [s.to_dict() for s in config.get_rule_configuration().settings]
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load rule configuration: {e}")
            return {"error": str(e)}

        return {"rules": engine.get_available_rules(), "settings": settings}
