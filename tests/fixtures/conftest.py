"""Pytest fixtures for Zephyr MCP Server tests.

Common fixtures for mocking the Zephyr client and responses.
"""

import pytest
from unittest.mock import MagicMock

from zephyr_mcp_server.client import ZephyrClient
from zephyr_mcp_server.config import ZephyrConfig
from fixtures import zephyr_responses


@pytest.fixture
def zephyr_config():
    """Configuration pointing at a fake base URL."""
    return ZephyrConfig(
        base_url="https://zephyr.test.example.com/v2",
        api_token="test_api_token",
    )


@pytest.fixture
def mock_zephyr_client(zephyr_config):
    """Mock Zephyr client with common methods."""
    client = MagicMock(spec=ZephyrClient)
    client.config = zephyr_config

    # Configure default return values for common methods
    client.get_projects.return_value = zephyr_responses.MOCK_PROJECTS_PAGE
    client.get_project.return_value = zephyr_responses.MOCK_PROJECT_1
    client.get_folders.return_value = zephyr_responses.MOCK_FOLDERS_PAGE
    client.get_folder.return_value = zephyr_responses.MOCK_FOLDER_1
    client.create_folder.return_value = zephyr_responses.MOCK_CREATED_FOLDER
    client.get_test_cases.return_value = zephyr_responses.MOCK_TEST_CASES_PAGE
    client.get_test_case.return_value = zephyr_responses.MOCK_TEST_CASE_1
    client.create_test_case.return_value = zephyr_responses.MOCK_CREATED_TEST_CASE
    client.update_test_case.return_value = None
    client.append_test_steps.return_value = zephyr_responses.MOCK_CREATED_STEPS
    client.get_test_script.return_value = zephyr_responses.MOCK_TEST_SCRIPT
    client.create_test_script.return_value = zephyr_responses.MOCK_CREATED_SCRIPT
    client.get_statuses.return_value = zephyr_responses.MOCK_STATUSES_PAGE
    client.get_priorities.return_value = zephyr_responses.MOCK_PRIORITIES_PAGE

    return client


@pytest.fixture
def mock_test_case():
    """Mock test case data."""
    return zephyr_responses.MOCK_TEST_CASE_1.copy()


@pytest.fixture
def sample_steps():
    """Sample steps as a caller would pass them to append_test_steps."""
    return [
        {"description": "Open the login page", "expectedResult": "Login form is shown"},
        {"description": "Submit valid credentials", "data": "user=alice", "expectedResult": "Dashboard is shown"}
    ]


@pytest.fixture(autouse=True)
def reset_environment_for_tests(monkeypatch):
    """Reset environment variables for each test.

    This fixture automatically runs before each test to ensure
    a clean environment state.
    """
    for name in (
        "ZEPHYR_REGION",
        "ZEPHYR_BASE_URL",
        "ZEPHYR_TIMEOUT",
        "ZEPHYR_MAX_RETRIES",
        "ZEPHYR_RETRY_DELAY",
        "ZEPHYR_DEFAULT_MAX_RESULTS",
        "ZEPHYR_MAX_MAX_RESULTS",
        "ZEPHYR_INTEGRATION",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ZEPHYR_API_TOKEN", "test_api_token")


@pytest.fixture
def mcp_context(mock_zephyr_client):
    """Mock MCP context with Zephyr client."""
    context = MagicMock()
    context.request_context.lifespan_context = {"zephyr_client": mock_zephyr_client}
    return context
