"""Zephyr Scale Cloud API Client

Thin wrapper around a requests session with:
- Bearer token authentication
- Fixed per-request timeout
- Normalized error capture (RemoteCallError)
- Opt-in retries for idempotent GET requests
"""

import json
import logging
from typing import Any, Dict, Optional

import requests
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
    before_sleep_log,
)

from .config import ZephyrConfig
from .utils.errors import RemoteCallError, ServerError, remote_error_for_status

logger = logging.getLogger(__name__)


def _is_retryable(error: BaseException) -> bool:
    """Transport failures and 5xx responses are worth retrying."""
    if isinstance(error, ServerError):
        return True
    return isinstance(error, RemoteCallError) and error.status is None


class ZephyrClient:
    """Client for the Zephyr Scale Cloud REST API (v2).

    One instance is created at process start and shared by every tool
    handler. It holds no per-call state.
    """

    def __init__(self, config: Optional[ZephyrConfig] = None):
        """Initialize the Zephyr client.

        Args:
            config: Optional configuration (loaded from environment if not provided)

        Raises:
            ConfigurationError: If configuration is loaded from the environment and is invalid
        """
        self.config = config or ZephyrConfig.from_env()
        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {self.config.api_token}',
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })
        logger.info(f"Initialized Zephyr client for {self.config.base_url} (timeout: {self.config.timeout}s)")

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Perform a single API call.

        Args:
            method: HTTP method (GET, POST, PUT)
            path: API path relative to the base URL (e.g. '/testcases')
            body: Optional JSON body
            params: Optional query parameters; None values are dropped

        Returns:
            Parsed JSON response, or None if the response has no content

        Raises:
            RemoteCallError: On non-2xx status or transport failure
        """
        method = method.upper()
        query = {key: value for key, value in (params or {}).items() if value is not None}

        if method == "GET" and self.config.max_retries > 0:
            send = retry(
                stop=stop_after_attempt(self.config.max_retries + 1),
                wait=wait_fixed(self.config.retry_delay),
                retry=retry_if_exception(_is_retryable),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True
            )(self._send)
            return send(method, path, body, query)

        return self._send(method, path, body, query)

    def _send(self, method: str, path: str, body: Any, query: Dict[str, Any]) -> Any:
        url = f"{self.config.base_url}/{path.lstrip('/')}"
        logger.debug(f"[Zephyr API] {method} {url} params={query}")

        try:
            response = self.session.request(
                method,
                url,
                json=body,
                params=query,
                timeout=self.config.timeout
            )
        except requests.exceptions.RequestException as e:
            error = remote_error_for_status(
                None,
                str(e),
                url=url,
                method=method,
                request_data=body,
                params=query
            )
            logger.error(f"[Zephyr API] Request error: {error.to_dict()}")
            raise error

        logger.debug(f"[Zephyr API] Response {response.status_code} from {url}")

        if not response.ok:
            response_data = None
            if response.content:
                try:
                    response_data = response.json()
                except ValueError:
                    response_data = response.text
            error = remote_error_for_status(
                response.status_code,
                f"Request failed with status code {response.status_code}",
                status_text=response.reason,
                url=url,
                method=method,
                request_data=body,
                params=query,
                response_data=response_data
            )
            logger.error(f"[Zephyr API] Response error: {json.dumps(error.to_dict(), default=str)}")
            raise error

        if response.content:
            return response.json()
        return None

    # Projects

    def get_projects(self, params: Optional[Dict[str, Any]] = None):
        """List Zephyr-enabled projects."""
        return self.request('GET', '/projects', params=params)

    def get_project(self, project_id_or_key: str):
        """Get project by ID or key."""
        return self.request('GET', f'/projects/{project_id_or_key}')

    # Folders

    def get_folders(self, params: Optional[Dict[str, Any]] = None):
        """List folders."""
        return self.request('GET', '/folders', params=params)

    def get_folder(self, folder_id):
        """Get folder by ID."""
        return self.request('GET', f'/folders/{folder_id}')

    def create_folder(self, folder_data: Dict[str, Any]):
        """Create a folder."""
        return self.request('POST', '/folders', body=folder_data)

    # Test cases

    def get_test_cases(self, params: Optional[Dict[str, Any]] = None):
        """List test cases."""
        return self.request('GET', '/testcases', params=params)

    def get_test_case(self, test_case_key: str):
        """Get test case by key."""
        return self.request('GET', f'/testcases/{test_case_key}')

    def create_test_case(self, test_case_data: Dict[str, Any]):
        """Create a test case."""
        return self.request('POST', '/testcases', body=test_case_data)

    def update_test_case(self, test_case_key: str, test_case_data: Dict[str, Any]):
        """Replace a test case (full record)."""
        return self.request('PUT', f'/testcases/{test_case_key}', body=test_case_data)

    # Test steps

    def get_test_steps(self, test_case_key: str, params: Optional[Dict[str, Any]] = None):
        """Get one page of test steps."""
        return self.request('GET', f'/testcases/{test_case_key}/teststeps', params=params)

    def append_test_steps(self, test_case_key: str, steps_data: Dict[str, Any]):
        """Post test steps to a test case."""
        return self.request('POST', f'/testcases/{test_case_key}/teststeps', body=steps_data)

    # Test script

    def get_test_script(self, test_case_key: str):
        """Get the test script of a test case."""
        return self.request('GET', f'/testcases/{test_case_key}/testscript')

    def create_test_script(self, test_case_key: str, script_data: Dict[str, Any]):
        """Create or replace the test script of a test case."""
        return self.request('POST', f'/testcases/{test_case_key}/testscript', body=script_data)

    # Reference data

    def get_statuses(self, params: Optional[Dict[str, Any]] = None):
        """List statuses."""
        return self.request('GET', '/statuses', params=params)

    def get_priorities(self, params: Optional[Dict[str, Any]] = None):
        """List priorities."""
        return self.request('GET', '/priorities', params=params)
