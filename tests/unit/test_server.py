"""Unit tests for the MCP server front-end and the CLI harness."""
import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from mcp.server.fastmcp.exceptions import ToolError

from zephyr_mcp_server import cli
from zephyr_mcp_server.client import ZephyrClient
from zephyr_mcp_server.dependencies import CLIENT_KEY, get_zephyr_client
from zephyr_mcp_server.server import create_server, main, mcp, zephyr_lifespan
from zephyr_mcp_server.utils.errors import ConfigurationError
from zephyr_mcp_server.utils.responses import success_result


@pytest.mark.asyncio
async def test_server_lists_every_tool():
    tools = {tool.name: tool for tool in await mcp.list_tools()}

    assert len(tools) == 18
    assert tools["get_test_case"].annotations.readOnlyHint is True
    assert tools["append_test_steps"].annotations.readOnlyHint is False


@pytest.mark.asyncio
async def test_tool_schema_excludes_context():
    tools = {tool.name: tool for tool in await mcp.list_tools()}
    schema = tools["get_test_case"].inputSchema

    assert list(schema["properties"]) == ["test_case_key"]
    assert schema["required"] == ["test_case_key"]
    assert schema["properties"]["test_case_key"]["pattern"] == r"^.+-T[0-9]+$"


@pytest.mark.asyncio
async def test_tool_schema_carries_constraints():
    tools = {tool.name: tool for tool in await mcp.list_tools()}
    steps = tools["append_test_steps"].inputSchema["properties"]["steps"]

    assert steps["minItems"] == 1
    assert steps["maxItems"] == 100


@pytest.mark.asyncio
async def test_call_unknown_tool():
    with pytest.raises(ToolError, match="Unknown tool: drop_project"):
        await mcp.call_tool("drop_project", {})


@pytest.mark.asyncio
async def test_call_rejected_by_wire_schema():
    """Schema violations are reported by FastMCP before the handler runs."""
    with pytest.raises(ToolError, match=r"(?s)Error executing tool append_test_steps: .*at most 100 items"):
        await mcp.call_tool(
            "append_test_steps", {"test_case_key": "PROJ-T1", "steps": [{"description": "x"}] * 101}
        )


@pytest.mark.asyncio
async def test_create_server_registers_catalog():
    server = create_server()

    assert server.name == "Zephyr Scale MCP Server"
    assert len(await server.list_tools()) == 18


@pytest.mark.asyncio
async def test_lifespan_provides_client():
    async with zephyr_lifespan(mcp) as context:
        client = context[CLIENT_KEY]
        assert isinstance(client, ZephyrClient)
        assert client.config.api_token == "test_api_token"


@pytest.mark.asyncio
async def test_lifespan_fails_without_token(monkeypatch):
    monkeypatch.delenv("ZEPHYR_API_TOKEN")

    with pytest.raises(ConfigurationError):
        async with zephyr_lifespan(mcp):
            pass


def test_get_zephyr_client_missing(mcp_context):
    mcp_context.request_context.lifespan_context = {}

    with pytest.raises(ValueError, match="ZephyrClient not found in context"):
        get_zephyr_client(mcp_context)


def test_main_exits_without_token(monkeypatch):
    monkeypatch.delenv("ZEPHYR_API_TOKEN")

    with patch("zephyr_mcp_server.server.load_dotenv"), patch.object(mcp, "run") as mock_run:
        with pytest.raises(SystemExit) as exc_info:
            main()

    assert exc_info.value.code == 1
    mock_run.assert_not_called()


def test_main_runs_server():
    with patch("zephyr_mcp_server.server.load_dotenv"), patch.object(mcp, "run") as mock_run:
        main()

    mock_run.assert_called_once_with()


def test_cli_lists_tools():
    with patch("zephyr_mcp_server.cli.load_dotenv"):
        result = CliRunner().invoke(cli.main, ["--list"])

    assert result.exit_code == 0
    assert "create_bdd_test_script [write]" in result.output
    assert "get_test_case [read]" in result.output
    assert "test_case_key*" in result.output


def test_cli_unknown_tool():
    with patch("zephyr_mcp_server.cli.load_dotenv"):
        result = CliRunner().invoke(cli.main, ["drop_project", "{}"])

    assert result.exit_code == 1


def test_cli_invalid_json():
    with patch("zephyr_mcp_server.cli.load_dotenv"):
        result = CliRunner().invoke(cli.main, ["get_test_case", "{not json"])

    assert result.exit_code == 1


def test_cli_calls_tool():
    response = success_result({"key": "PROJ-T1"})

    with patch("zephyr_mcp_server.cli.load_dotenv"), \
            patch("zephyr_mcp_server.tools.registry.ToolRegistry.call", return_value=response) as mock_call:
        result = CliRunner().invoke(cli.main, ["get_test_case", '{"test_case_key": "PROJ-T1"}'])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"key": "PROJ-T1"}
    name, context, arguments = mock_call.call_args.args
    assert name == "get_test_case"
    assert arguments == {"test_case_key": "PROJ-T1"}
    assert isinstance(context.request_context.lifespan_context[CLIENT_KEY], ZephyrClient)


def test_cli_error_result_exits_nonzero():
    with patch("zephyr_mcp_server.cli.load_dotenv"):
        result = CliRunner().invoke(cli.main, ["get_test_case", '{"test_case_key": "bad"}'])

    assert result.exit_code == 1
