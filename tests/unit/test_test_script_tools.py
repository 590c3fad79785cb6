"""Unit tests for Zephyr test script tools."""
import json

import pytest

from zephyr_mcp_server.tools.test_script_tools import create_bdd_test_script, create_test_script, get_test_script
from fixtures import zephyr_responses

STEPS_REMOVED_WARNING = (
    "If this test case had existing test steps, they have been implicitly removed "
    "as test scripts and steps are mutually exclusive"
)


def payload(result):
    return json.loads(result.content[0].text)


@pytest.mark.asyncio
async def test_get_test_script(mcp_context, mock_zephyr_client):
    data = payload(await get_test_script(ctx=mcp_context, test_case_key="PROJ-T1"))

    assert data["testCaseKey"] == "PROJ-T1"
    assert data["testScript"] == zephyr_responses.MOCK_TEST_SCRIPT
    mock_zephyr_client.get_test_script.assert_called_once_with("PROJ-T1")


@pytest.mark.asyncio
async def test_create_test_script_warns_about_steps(mcp_context, mock_zephyr_client):
    """Creating a script surfaces the implicit removal of existing steps."""
    result = await create_test_script(
        ctx=mcp_context, test_case_key="PROJ-T1", text="  Given I am logged in\n  "
    )

    assert result.isError is False
    data = payload(result)
    assert data["warning"] == STEPS_REMOVED_WARNING
    assert data["scriptType"] == "bdd"
    assert data["result"] == zephyr_responses.MOCK_CREATED_SCRIPT
    mock_zephyr_client.create_test_script.assert_called_once_with(
        "PROJ-T1", {"type": "bdd", "text": "Given I am logged in"}
    )


@pytest.mark.asyncio
async def test_create_plain_test_script(mcp_context, mock_zephyr_client):
    data = payload(await create_test_script(
        ctx=mcp_context, test_case_key="PROJ-T1", text="Open the app and log in", type="PLAIN"
    ))

    assert data["scriptType"] == "plain"
    assert data["note"] == "Plain text script format"
    assert mock_zephyr_client.create_test_script.call_args.args[1]["type"] == "plain"


@pytest.mark.asyncio
@pytest.mark.parametrize("kwargs,message", [
    ({"text": ""}, "text (script content) is required"),
    ({"text": "   "}, "text must be a non-empty string"),
    ({"text": "Given x", "type": "cucumber"}, 'type must be either "bdd" (Gherkin) or "plain"'),
])
async def test_create_test_script_validation(mcp_context, mock_zephyr_client, kwargs, message):
    result = await create_test_script(ctx=mcp_context, test_case_key="PROJ-T1", **kwargs)

    assert result.isError is True
    assert message in result.content[0].text
    mock_zephyr_client.create_test_script.assert_not_called()


@pytest.mark.asyncio
async def test_create_bdd_test_script_renders_gherkin(mcp_context, mock_zephyr_client):
    result = await create_bdd_test_script(
        ctx=mcp_context,
        test_case_key="PROJ-T1",
        feature="Login",
        scenario="Valid credentials",
        steps=["Given I am on the login page", "when I submit valid credentials", "Then I see the dashboard"]
    )

    assert result.isError is False
    data = payload(result)
    generated = (
        "Feature: Login\n\n"
        "Scenario: Valid credentials\n"
        "    Given I am on the login page\n"
        "    when I submit valid credentials\n"
        "    Then I see the dashboard\n"
    )
    assert data["bddHelper"] == {
        "feature": "Login",
        "scenario": "Valid credentials",
        "stepsCount": 3,
        "generatedScript": generated
    }
    assert data["warning"] == STEPS_REMOVED_WARNING
    mock_zephyr_client.create_test_script.assert_called_once_with(
        "PROJ-T1", {"type": "bdd", "text": generated.strip()}
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("kwargs,message", [
    ({}, "Either steps array or feature/scenario text must be provided"),
    ({"steps": []}, "At least one step must be provided"),
    ({"steps": ["Given ok", "  "]}, "Step 2 must be a non-empty string"),
    ({"steps": ["Click the button"]}, "Step 1 must start with a Gherkin keyword: Given, When, Then, And, or But"),
])
async def test_create_bdd_test_script_validation(mcp_context, mock_zephyr_client, kwargs, message):
    result = await create_bdd_test_script(ctx=mcp_context, test_case_key="PROJ-T1", **kwargs)

    assert result.isError is True
    assert message in result.content[0].text
    mock_zephyr_client.create_test_script.assert_not_called()
