"""Out-of-process lint worker.

Reads one JSON request per line on stdin and writes one JSON response per
line on stdout:

    request:  {"id": 1, "command": "lint", "text": "..."}
    response: {"id": 1, "results": {"messages": [...], "errorCount": 0, "warningCount": 0}}
              {"id": 1, "error": "..."}

Run with ``python -m ja_prose_lint.worker``.
"""
import json
import logging
import sys
from typing import Any, TextIO

from ja_prose_lint.core.linter.engine import RuleEngine

logger = logging.getLogger(__name__)


def handle_request(request: Any, engine: RuleEngine) -> dict[str, Any]:
    """
    Answer a single decoded request.

    Args:
        request: Decoded JSON request
        engine: Engine used for lint commands

    Returns:
        Response dict carrying either "results" or "error"
    """
    if not isinstance(request, dict):
        return {"id": None, "error": "Request must be a JSON object"}

    request_id = request.get("id")
    command = request.get("command")

    if command != "lint":
        return {"id": request_id, "error": f"Unknown command: {command!r}"}

    text = request.get("text")
    if not isinstance(text, str):
        return {"id": request_id, "error": "Missing 'text' for lint command"}

    result = engine.lint(text)
    return {"id": request_id, "results": result.to_dict()}


def serve(stdin: TextIO, stdout: TextIO, engine: RuleEngine | None = None) -> int:
    """
    Process requests until stdin closes.

    Returns:
        Number of requests answered
    """
    engine = engine or RuleEngine()
    answered = 0

    for line_num, line in enumerate(stdin, 1):
        line = line.strip()
        if not line:
            continue

        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed request at line {line_num}: {e}")
            response: dict[str, Any] = {"id": None, "error": f"Malformed request: {e}"}
        else:
            response = handle_request(request, engine)

        stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
        stdout.flush()
        answered += 1

    return answered


def main():
    """Main entry point for the worker process."""
    # Logs go to stderr; stdout carries responses
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    sys.stdin.reconfigure(encoding="utf-8")
    sys.stdout.reconfigure(encoding="utf-8")
    logger.info("Lint worker ready")
    count = serve(sys.stdin, sys.stdout)
    logger.info(f"Lint worker exiting after {count} requests")


if __name__ == "__main__":
    main()
