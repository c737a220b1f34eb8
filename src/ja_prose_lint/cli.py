"""CLI for ja-prose-lint.

Provides direct terminal access to the linter without MCP.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console

from ja_prose_lint import __version__
from ja_prose_lint.config import Config, load_rule_configuration
from ja_prose_lint.core.filtering import RuleConfiguration, SeverityFilter, filter_result
from ja_prose_lint.core.linter.engine import lint_text
from ja_prose_lint.core.linter.models import LintResult
from ja_prose_lint.core.linter.rules import RULES
from ja_prose_lint.core.pipeline import LintPipeline, LintPipelineError, create_backend
from ja_prose_lint.display import render_result, render_rules_table
from ja_prose_lint.report import export_json, render_markdown_report, write_json_export

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ja-prose-lint",
        description="Check Japanese prose for stylistic issues"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # lint command
    lint = subparsers.add_parser("lint", help="Lint a text file (or - for stdin)")
    lint.add_argument("path", help="Path to a UTF-8 text file, or - for stdin")
    _add_filter_arguments(lint)
    lint.add_argument(
        "-f", "--format",
        choices=["text", "json", "markdown"],
        default="text",
        help="Output format (default: text)"
    )
    lint.add_argument(
        "-o", "--output", type=Path,
        help="Write the report to a file (or, for json, into a directory) instead of stdout"
    )

    # rules command
    r = subparsers.add_parser("rules", help="List rules and their toggle state")
    r.add_argument(
        "--rules-file", type=Path,
        help="YAML rule toggles (default: from config)"
    )

    # watch command
    w = subparsers.add_parser("watch", help="Re-lint a file whenever it changes")
    w.add_argument("path", type=Path, help="Path to a UTF-8 text file")
    _add_filter_arguments(w)
    w.add_argument(
        "--interval", type=float, default=0.2,
        help="Seconds between file checks (default: 0.2)"
    )
    w.add_argument(
        "--engine", choices=["local", "worker"],
        help="Engine backend (default: from config)"
    )

    return parser


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-s", "--severity",
        choices=[f.value for f in SeverityFilter],
        help="Show only errors or only warnings (default: all)"
    )
    parser.add_argument(
        "-d", "--disable", action="append", default=[], metavar="RULE_ID",
        help="Disable a rule (repeatable)"
    )
    parser.add_argument(
        "--rules-file", type=Path,
        help="YAML rule toggles (default: from config)"
    )
    parser.add_argument(
        "-c", "--context", type=int,
        help="Characters of context around each issue (default: 20)"
    )


def main(argv: list[str] | None = None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    config = Config.load()

    if args.command == "lint":
        sys.exit(lint_command(args, config))
    elif args.command == "rules":
        rules_command(args, config)
    elif args.command == "watch":
        watch_command(args, config)


def _rule_configuration(args, config: Config) -> RuleConfiguration:
    try:
        if args.rules_file:
            rule_config = load_rule_configuration(args.rules_file.expanduser())
        else:
            rule_config = config.get_rule_configuration()
    except (OSError, ValueError) as e:
        print(f"Error: Failed to load rule configuration: {e}", file=sys.stderr)
        sys.exit(1)

    for rule_id in getattr(args, "disable", []):
        rule_config.set_enabled(rule_id, False)
    return rule_config


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()

    file_path = Path(path).expanduser()
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        sys.exit(1)
    return file_path.read_text(encoding="utf-8")


def lint_command(args, config: Config) -> int:
    """
    Execute the lint command.

    Returns:
        Exit code: 1 if errors remain after filtering, else 0
    """
    text = _read_input(args.path)
    rule_config = _rule_configuration(args, config)
    severity = args.severity or config.severity_filter
    context_length = args.context if args.context is not None else config.context_length

    result = filter_result(lint_text(text), rule_config, severity)
    title = "stdin" if args.path == "-" else Path(args.path).name

    if args.format == "json":
        output = export_json(result)
    elif args.format == "markdown":
        output = render_markdown_report(result, text, title=title, context_length=context_length)
    else:
        output = None

    if args.format == "json" and args.output and args.output.is_dir():
        out_path = write_json_export(result, args.output)
        print(f"Report written to {out_path}")
    elif output is not None:
        if args.output:
            args.output.write_text(output + "\n", encoding="utf-8")
            print(f"Report written to {args.output}")
        else:
            print(output)
    elif args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            render_result(Console(file=f), result, text, title=title, context_length=context_length)
    else:
        render_result(Console(), result, text, title=title, context_length=context_length)

    return 1 if result.error_count > 0 else 0


def rules_command(args, config: Config):
    """Execute the rules command."""
    rule_config = _rule_configuration(args, config)
    render_rules_table(Console(), RULES, rule_config)


def watch_command(args, config: Config):
    """Execute the watch command."""
    path = args.path.expanduser()
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)

    print(f"Watching {path} (Ctrl-C to stop)")

    try:
        asyncio.run(_watch(path, args, config))
    except KeyboardInterrupt:
        print("\nStopped watching.")
    except LintPipelineError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


async def _watch(path: Path, args, config: Config):
    console = Console()
    rule_config = _rule_configuration(args, config)
    severity = args.severity or config.severity_filter
    context_length = args.context if args.context is not None else config.context_length
    backend = create_backend(args.engine or config.engine, latency=config.engine_latency)

    latest_text = ""

    def show(result: LintResult) -> None:
        render_result(
            console,
            filter_result(result, rule_config, severity),
            latest_text,
            title=path.name,
            context_length=context_length,
        )

    def show_error(error: LintPipelineError) -> None:
        console.print(f"[bold red]Lint failed:[/] {error}")

    async with LintPipeline(
        backend, delay=config.debounce_delay, on_result=show, on_error=show_error
    ) as pipeline:
        while True:
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                logger.warning(f"Failed to read {path}: {e}")
                text = latest_text

            if text != latest_text or pipeline.latest_request_id == 0:
                latest_text = text
                pipeline.submit(text)

            await asyncio.sleep(args.interval)


if __name__ == "__main__":
    main()
