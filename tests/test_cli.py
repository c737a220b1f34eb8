"""Tests for the command line interface."""
import json

import pytest

from ja_prose_lint.cli import build_parser, main


@pytest.fixture
def sample(tmp_path, monkeypatch):
    monkeypatch.delenv("JA_PROSE_LINT_RULES_FILE", raising=False)
    monkeypatch.delenv("JA_PROSE_LINT_SEVERITY", raising=False)
    monkeypatch.setenv("COLUMNS", "200")
    path = tmp_path / "sample.txt"
    path.write_text("これはすごい！\n彼は彼は行った\n", encoding="utf-8")
    return path


def test_lint_exits_with_error_code(sample):
    with pytest.raises(SystemExit) as exc_info:
        main(["lint", str(sample)])

    assert exc_info.value.code == 1


def test_lint_disabled_rule_exits_cleanly(sample):
    with pytest.raises(SystemExit) as exc_info:
        main(["lint", str(sample), "-d", "no-exclamation-question-mark"])

    assert exc_info.value.code == 0


def test_lint_json_output(sample, capsys):
    with pytest.raises(SystemExit):
        main(["lint", str(sample), "-f", "json", "-s", "warning"])

    data = json.loads(capsys.readouterr().out)
    assert data["errorCount"] == 0
    assert [m["ruleId"] for m in data["messages"]] == ["no-doubled-joshi"]


def test_lint_markdown_to_file(sample, tmp_path):
    out_path = tmp_path / "report.md"

    with pytest.raises(SystemExit):
        main(["lint", str(sample), "-f", "markdown", "-o", str(out_path)])

    report = out_path.read_text(encoding="utf-8")
    assert "# Lint Report: sample.txt" in report
    assert "no-doubled-joshi" in report


def test_lint_text_output(sample, capsys):
    with pytest.raises(SystemExit):
        main(["lint", str(sample)])

    out = capsys.readouterr().out
    assert "1 エラー" in out
    assert "no-exclamation-question-mark" in out


def test_lint_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["lint", str(tmp_path / "missing.txt")])

    assert exc_info.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_lint_with_rules_file(sample, tmp_path, capsys):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text("no-exclamation-question-mark: false\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main(["lint", str(sample), "--rules-file", str(rules_file), "-f", "json"])

    assert exc_info.value.code == 0
    assert json.loads(capsys.readouterr().out)["errorCount"] == 0


def test_rules_command(sample, capsys):
    main(["rules"])

    out = capsys.readouterr().out
    assert "no-ai-colon-continuation" in out
    assert "常に有効" in out


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_lint_json_into_directory(sample, tmp_path):
    out_dir = tmp_path / "exports"
    out_dir.mkdir()

    with pytest.raises(SystemExit):
        main(["lint", str(sample), "-f", "json", "-o", str(out_dir)])

    exported = list(out_dir.glob("textlint-result-*.json"))
    assert len(exported) == 1
    assert json.loads(exported[0].read_text(encoding="utf-8"))["errorCount"] == 1
