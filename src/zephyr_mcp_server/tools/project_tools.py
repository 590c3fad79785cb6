"""Zephyr MCP Server - Project Tools

MCP tools for Zephyr-enabled Jira projects:
- List projects with pagination
- Get a single project by ID or key
"""
from typing import Annotated, Optional, Dict, Any
import logging

from mcp.server.fastmcp import Context
from pydantic import Field

from ..dependencies import get_zephyr_client
from ..utils.responses import enveloped
from ..utils.validation import resolve_page, validate_project_id_or_key, PROJECT_ID_OR_KEY_PATTERN
from .registry import ToolSpec

logger = logging.getLogger(__name__)

MaxResults = Annotated[
    Optional[int],
    Field(description="Maximum number of results to return (default: 50, max: 1000)", ge=1, le=1000)
]
StartAt = Annotated[
    Optional[int],
    Field(description="Starting position for pagination (default: 0)", ge=0)
]


def page_summary(response: Any, key: str, page: Dict[str, int]) -> Dict[str, Any]:
    """Restate a paged response with the pagination echo an agent needs.

    Works for enveloped responses ({"values", "total", ...}) and bare lists.
    """
    if isinstance(response, dict):
        values = response.get("values", [])
        return {
            key: values,
            "total": response.get("total") or len(values),
            "startAt": response.get("startAt", page["startAt"]),
            "maxResults": response.get("maxResults", page["maxResults"]),
            "isLast": response.get("isLast"),
        }
    values = response or []
    return {
        key: values,
        "total": len(values),
        "startAt": page["startAt"],
        "maxResults": page["maxResults"],
    }


@enveloped("fetching projects")
async def list_projects(
    ctx: Context,
    max_results: MaxResults = None,
    start_at: StartAt = None
) -> Dict[str, Any]:
    """List all Zephyr-integrated Jira projects.

    Args:
        ctx: MCP context with Zephyr client
        max_results: Page size (default: 50, max: 1000)
        start_at: Pagination offset (default: 0)

    Returns:
        {"projects": [...], "total", "startAt", "maxResults", "isLast"}
    """
    logger.info(f"Listing projects: start_at={start_at}, max_results={max_results}")
    client = get_zephyr_client(ctx)

    page = resolve_page(max_results, start_at, client.config.default_max_results, client.config.max_max_results)
    response = client.get_projects(page)
    return page_summary(response, "projects", page)


@enveloped("fetching project {project_id}")
async def get_project(
    ctx: Context,
    project_id: Annotated[str, Field(description="Project ID or key to retrieve", pattern=PROJECT_ID_OR_KEY_PATTERN)]
) -> Dict[str, Any]:
    """Get detailed information about a specific Zephyr project.

    Args:
        ctx: MCP context with Zephyr client
        project_id: Numeric project ID or Jira project key

    Returns:
        Project data
    """
    logger.info(f"Getting project: project_id={project_id}")
    validate_project_id_or_key(project_id)
    client = get_zephyr_client(ctx)

    return client.get_project(project_id)


TOOLS = [
    ToolSpec(
        name="list_projects",
        description="List all Zephyr-integrated Jira projects",
        handler=list_projects,
    ),
    ToolSpec(
        name="get_project",
        description="Get detailed information about a specific Zephyr project",
        handler=get_project,
    ),
]
