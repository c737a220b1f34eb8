"""Export lint results as JSON or as a markdown review report."""
from datetime import date
from pathlib import Path
import json
import logging

from ja_prose_lint.core.linter.models import Diagnostic, Document, LintResult, Severity
from ja_prose_lint.core.position import DEFAULT_CONTEXT_LENGTH, extract_context

logger = logging.getLogger(__name__)


def export_json(result: LintResult) -> str:
    """Serialize a result in the wire shape (messages, errorCount, warningCount)."""
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)


def export_filename(day: date | None = None) -> str:
    """Default file name for a JSON export, e.g. textlint-result-2026-10-19.json."""
    day = day or date.today()
    return f"textlint-result-{day.isoformat()}.json"


def write_json_export(result: LintResult, output_dir: Path, day: date | None = None) -> Path:
    """
    Write a JSON export into output_dir.

    Returns:
        Path of the written file
    """
    out_path = output_dir / export_filename(day)
    out_path.write_text(export_json(result), encoding="utf-8")
    logger.info(f"Exported {len(result.diagnostics)} diagnostics to {out_path}")
    return out_path


def render_markdown_report(
    result: LintResult,
    text: str,
    title: str = "document",
    context_length: int = DEFAULT_CONTEXT_LENGTH
) -> str:
    """
    Render a markdown report for manual review.

    Diagnostics are grouped by rule, each with its position and the
    surrounding text (the flagged span in bold).
    """
    document = Document.from_text(text)

    lines = [
        f"# Lint Report: {title}",
        "",
        f"**Errors:** {result.error_count}",
        f"**Warnings:** {result.warning_count}",
        "",
        "---",
        "",
    ]

    # Group by rule
    by_rule: dict[str, list[Diagnostic]] = {}
    for diagnostic in result.diagnostics:
        by_rule.setdefault(diagnostic.rule_id, []).append(diagnostic)

    for rule_id, diagnostics in sorted(by_rule.items()):
        marker = "❌" if diagnostics[0].severity == Severity.ERROR else "⚠️"
        lines.append(f"## {marker} {rule_id} ({len(diagnostics)} issues)")
        lines.append("")

        for d in diagnostics:
            entry = f"- **{d.line}:{d.column}** {d.message}"
            snippet = extract_context(document, d.line, d.column, context_length)
            if snippet:
                entry += f" ({snippet.before}**{snippet.error_text}**{snippet.after})"
            lines.append(entry)

        lines.append("")

    if not result.diagnostics:
        lines.append("問題は見つかりませんでした")
        lines.append("")

    return "\n".join(lines)
