"""Terminal rendering of lint results and the rule panel."""
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ja_prose_lint.core.filtering import RuleConfiguration
from ja_prose_lint.core.linter.models import Diagnostic, Document, LintResult, Rule, Severity
from ja_prose_lint.core.position import DEFAULT_CONTEXT_LENGTH, Snippet, extract_context

ERROR_STYLE = "bold red"
WARNING_STYLE = "bold yellow"


def severity_label(severity: Severity) -> Text:
    if severity == Severity.ERROR:
        return Text("エラー", style=ERROR_STYLE)
    return Text("警告", style=WARNING_STYLE)


def format_snippet(snippet: Snippet) -> Text:
    """Context text with the flagged span highlighted."""
    text = Text()
    text.append(snippet.before, style="dim")
    text.append(snippet.error_text, style="bold red on grey23")
    text.append(snippet.after, style="dim")
    return text


def format_diagnostic(
    diagnostic: Diagnostic,
    document: Document,
    context_length: int = DEFAULT_CONTEXT_LENGTH
) -> Group:
    header = Text()
    header.append(f"{diagnostic.line}:{diagnostic.column} ", style="cyan")
    header.append_text(severity_label(diagnostic.severity))
    header.append(f" {diagnostic.message} ")
    header.append(diagnostic.rule_id, style="dim")

    snippet = extract_context(document, diagnostic.line, diagnostic.column, context_length)
    if not snippet:
        return Group(header)
    return Group(header, Text("    ").append_text(format_snippet(snippet)))


def render_result(
    console: Console,
    result: LintResult,
    text: str,
    title: str = "チェック結果",
    context_length: int = DEFAULT_CONTEXT_LENGTH
) -> None:
    """Print counts and every diagnostic with its context."""
    counts = Text()
    counts.append(f"{result.error_count} エラー", style=ERROR_STYLE)
    counts.append("  ")
    counts.append(f"{result.warning_count} 警告", style=WARNING_STYLE)

    if not result.diagnostics:
        body = Group(counts, Text("問題は見つかりませんでした", style="green"))
    else:
        document = Document.from_text(text)
        body = Group(
            counts,
            Text(""),
            *(format_diagnostic(d, document, context_length) for d in result.diagnostics),
        )

    console.print(Panel(body, title=title, border_style="#5f8787"))


def render_rules_table(
    console: Console,
    rules: tuple[Rule, ...],
    rule_config: RuleConfiguration
) -> None:
    """Print every registered rule with its toggle state."""
    table = Table(title="ルール設定")
    table.add_column("ID", style="cyan")
    table.add_column("名前")
    table.add_column("カテゴリ")
    table.add_column("重大度")
    table.add_column("状態")

    for rule in rules:
        if rule.rule_id not in rule_config:
            state = Text("常に有効", style="dim")
        elif rule_config.is_enabled(rule.rule_id):
            state = Text("有効", style="green")
        else:
            state = Text("無効", style="red")

        table.add_row(
            rule.rule_id,
            rule.name,
            rule.category.value,
            severity_label(rule.severity),
            state,
        )

    console.print(table)
