"""ja-prose-lint MCP Server - Main entry point."""
import logging
import sys

from mcp.server.fastmcp import FastMCP

from ja_prose_lint.config import Config
from ja_prose_lint.core.linter.rules import RULES
from ja_prose_lint.tools import lint

logger = logging.getLogger(__name__)

TOOL_NAMES = ("lint_text", "get_diagnostic_context", "get_lint_rules")


def create_server(config: Config) -> FastMCP:
    """
    Build the MCP server with the lint tools registered.

    Args:
        config: Settings shared by every tool call

    Returns:
        FastMCP instance ready to run
    """
    mcp = FastMCP("ja-prose-lint")
    lint.register(mcp, config)
    logger.info(f"Tools registered: {', '.join(TOOL_NAMES)}")
    return mcp


def main():
    """Main entry point for the MCP server."""
    # Logs go to stderr (CRITICAL: stdout is reserved for JSON-RPC)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    config = Config.load()
    logger.info(f"ja-prose-lint v{config.version} starting with {len(RULES)} rules")
    logger.info(
        f"Severity filter: {config.severity_filter}, "
        f"context: {config.context_length} chars"
    )

    try:
        rule_config = config.get_rule_configuration()
        disabled = [s.id for s in rule_config.settings if not s.enabled]
        logger.info(
            f"Rule toggles: {config.rules_file or 'defaults'} "
            f"(disabled: {', '.join(disabled) or 'none'})"
        )

        mcp = create_server(config)

        logger.info("Starting MCP server on stdio...")
        mcp.run(transport="stdio")

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
