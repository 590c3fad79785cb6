import os
import sys
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
import logging
from typing import Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .client import ZephyrClient
from .config import ZephyrConfig
from .dependencies import CLIENT_KEY
from .tools import ToolRegistry, build_registry
from .utils.errors import ConfigurationError

LOG_FORMAT = '%(asctime)s - SERVER - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


@asynccontextmanager
async def zephyr_lifespan(server: FastMCP) -> AsyncIterator[dict]:
    """
    Manages the ZephyrClient lifecycle: builds the configuration from the
    environment, creates one shared client and closes it on shutdown.
    """
    try:
        config = ZephyrConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Invalid Zephyr configuration: {e.message}")
        # Let the lifespan fail, preventing server start without a token
        raise

    zephyr_client = ZephyrClient(config)
    logger.info(f"Zephyr client ready (region: {config.region}, base URL: {config.base_url})")
    try:
        yield {CLIENT_KEY: zephyr_client}
    finally:
        zephyr_client.close()
        logger.info("Zephyr lifespan context manager exiting.")


def register_tools(server: FastMCP, registry: ToolRegistry) -> None:
    """Add every registered tool to the MCP server."""
    for spec in registry.list_tools():
        server.add_tool(
            spec.handler,
            name=spec.name,
            description=spec.description,
            annotations=ToolAnnotations(readOnlyHint=spec.read_only),
            structured_output=False,
        )
    logger.debug(f"Registered {len(registry)} tools with the MCP server")


def create_server(registry: Optional[ToolRegistry] = None) -> FastMCP:
    """Instantiate the FastMCP server with the lifespan manager and the Zephyr tools."""
    server = FastMCP(
        "Zephyr Scale MCP Server",
        lifespan=zephyr_lifespan,
    )
    register_tools(server, build_registry() if registry is None else registry)
    return server


mcp = create_server()


def configure_logging() -> None:
    """Send log lines to stderr; stdout carries the MCP stdio transport."""
    level = os.environ.get("ZEPHYR_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT, stream=sys.stderr)


def main():
    """Entry point for the zephyr-mcp-server script."""
    load_dotenv()
    configure_logging()
    logger.info("Starting Zephyr Scale MCP server...")

    if not os.environ.get("ZEPHYR_API_TOKEN"):
        logger.error("ZEPHYR_API_TOKEN environment variable is not set.")
        print("\nERROR: ZEPHYR_API_TOKEN environment variable is not set.", file=sys.stderr)
        print("Generate an API access token in Zephyr Scale and set ZEPHYR_API_TOKEN,", file=sys.stderr)
        print("optionally with ZEPHYR_REGION (us or eu) or ZEPHYR_BASE_URL.", file=sys.stderr)
        sys.exit(1)

    # Run the MCP server over stdio
    mcp.run()


if __name__ == "__main__":
    # This allows running the server directly with `python -m zephyr_mcp_server.server`
    main()
