"""
MCP server for exploring offline benchmark results.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from benchmark_center.config import get_config, Transport
from benchmark_center.packages.explorer import ExplorerSession, LoggingNotifier, RecordingNotifier
from benchmark_center.tools.tools import build_tools

# Configure logging
logger = logging.getLogger(__name__)

# Load .env.local from project root (must run from project root)
env_local_path = Path('.env.local')
if env_local_path.exists():
    load_dotenv(env_local_path)
    logger.info("Loaded .env.local for local development")
else:
    logger.info("No .env.local file found")


def create_session(results_path: str, export_dir: str):
    """Create an explorer session and load the evaluation results once."""
    notifier = RecordingNotifier(delegate=LoggingNotifier())
    session = ExplorerSession(notifier=notifier, export_dir=export_dir)
    count = session.load_file(results_path)
    logger.info(f"Loaded {count} benchmarks from {results_path}")
    return session, notifier


def main():
    # Load configuration from environment variables and command-line arguments
    config = get_config()

    # Configure logging
    logging.basicConfig(level=config.log_level)

    # Create MCP server with configuration
    mcp = FastMCP(host=config.host, port=config.port)

    session, notifier = create_session(config.results_path, config.export_dir)

    # Register tools
    tools = build_tools(session, notifier)

    for tool in tools:
        mcp.add_tool(tool.execute,
                     name=tool.name,
                     title=tool.title,
                     description=tool.description,
                     annotations=tool.annotations,
                     structured_output=getattr(tool, 'structured_output', None))

    # Run server with configured transport
    if config.transport == Transport.STDIO:
        logger.info("Running server with stdio transport")
        mcp.run(transport="stdio")
    elif config.transport == Transport.STREAMABLE_HTTP:
        logger.info(
            f"Running server with Streamable HTTP transport, address http://{config.host}:{config.port}/mcp.")
        mcp.run(transport="streamable-http")
    else:
        logger.error(f"Unexpected transport: {config.transport}")
        raise ValueError(f"Unknown transport: {config.transport}")


if __name__ == "__main__":
    main()
