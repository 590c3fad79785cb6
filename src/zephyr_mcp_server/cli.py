"""Command-line harness for calling a single Zephyr tool without an MCP client.

Usage:
    zephyr-mcp-tool --list
    zephyr-mcp-tool get_test_case '{"test_case_key": "PROJ-T1"}'
"""
import asyncio
import json
import logging
import sys
from types import SimpleNamespace

import click
from dotenv import load_dotenv

from .client import ZephyrClient
from .config import ZephyrConfig
from .dependencies import CLIENT_KEY
from .server import configure_logging
from .tools import build_registry
from .utils.errors import ZephyrError

logger = logging.getLogger(__name__)


def local_context(client: ZephyrClient) -> SimpleNamespace:
    """Build the minimal context a tool handler reads its client from."""
    return SimpleNamespace(
        request_context=SimpleNamespace(lifespan_context={CLIENT_KEY: client})
    )


def _pretty(text: str) -> str:
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        return text


def _print_tools(registry) -> None:
    for spec in registry.list_tools():
        access = "read" if spec.read_only else "write"
        click.echo(f"{spec.name} [{access}]: {spec.description}")
        if spec.parameters:
            required = set(spec.required_parameters)
            params = ", ".join(f"{name}*" if name in required else name for name in spec.parameters)
            click.echo(f"    parameters: {params}")


@click.command()
@click.argument("tool_name", required=False)
@click.argument("json_args", required=False, default="{}")
@click.option("--list", "list_tools", is_flag=True, help="List available tools and exit.")
def main(tool_name, json_args, list_tools):
    """Call TOOL_NAME with JSON_ARGS and print the result."""
    load_dotenv()
    configure_logging()
    registry = build_registry()

    if list_tools or not tool_name:
        _print_tools(registry)
        return

    if tool_name not in registry:
        click.echo(f"Unknown tool: {tool_name}", err=True)
        click.echo(f"Available tools: {', '.join(registry.names())}", err=True)
        sys.exit(1)

    try:
        arguments = json.loads(json_args)
    except json.JSONDecodeError as e:
        click.echo(f"Invalid JSON arguments: {e}", err=True)
        sys.exit(1)
    if not isinstance(arguments, dict):
        click.echo("JSON arguments must be an object", err=True)
        sys.exit(1)

    try:
        client = ZephyrClient(ZephyrConfig.from_env())
    except ZephyrError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    try:
        result = asyncio.run(registry.call(tool_name, local_context(client), arguments))
    finally:
        client.close()

    for block in result.content:
        click.echo(_pretty(getattr(block, "text", "")), err=result.isError)

    if result.isError:
        sys.exit(1)


if __name__ == "__main__":
    main()
