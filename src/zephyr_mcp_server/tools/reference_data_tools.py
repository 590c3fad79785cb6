"""Zephyr MCP Server - Reference Data Tools

MCP tools for the statuses and priorities a test case can reference.
"""
from typing import Annotated, Optional, Dict, Any
import logging

from mcp.server.fastmcp import Context
from pydantic import Field

from ..dependencies import get_zephyr_client
from ..utils.pagination import paginate
from ..utils.responses import enveloped
from ..utils.validation import resolve_page, validate_project_key, PROJECT_KEY_PATTERN
from .project_tools import MaxResults, StartAt
from .registry import ToolSpec

logger = logging.getLogger(__name__)

ProjectKeyFilter = Annotated[
    Optional[str], Field(description="Jira project key to restrict the results to", pattern=PROJECT_KEY_PATTERN)
]


def _listing(response: Any, key: str, note: str) -> Dict[str, Any]:
    if isinstance(response, dict):
        values = response.get("values", [])
        total = response.get("total") or len(values)
    else:
        values = response or []
        total = len(values)
    return {key: values, "total": total, "note": note}


@enveloped("fetching statuses")
async def list_statuses(
    ctx: Context,
    project_key: ProjectKeyFilter = None,
    max_results: MaxResults = None,
    start_at: StartAt = None
) -> Dict[str, Any]:
    """List test case statuses (e.g. Draft, Approved)."""
    logger.info(f"Listing statuses: project_key={project_key}")
    client = get_zephyr_client(ctx)

    validate_project_key(project_key, required=False)
    page = resolve_page(max_results, start_at, client.config.default_max_results, client.config.max_max_results)

    response = client.get_statuses({"projectKey": project_key, **page})
    return _listing(response, "statuses", "These statuses can be used when creating or updating test cases")


@enveloped("fetching priorities")
async def list_priorities(
    ctx: Context,
    project_key: ProjectKeyFilter = None,
    max_results: MaxResults = None,
    start_at: StartAt = None
) -> Dict[str, Any]:
    """List test case priorities (e.g. High, Normal, Low)."""
    logger.info(f"Listing priorities: project_key={project_key}")
    client = get_zephyr_client(ctx)

    validate_project_key(project_key, required=False)
    page = resolve_page(max_results, start_at, client.config.default_max_results, client.config.max_max_results)

    response = client.get_priorities({"projectKey": project_key, **page})
    return _listing(response, "priorities", "These priorities can be used when creating or updating test cases")


@enveloped("fetching reference data")
async def get_reference_data(ctx: Context, project_key: ProjectKeyFilter = None) -> Dict[str, Any]:
    """Get every status and priority in a single call.

    Both lists are fetched in full, page by page.

    Args:
        ctx: MCP context with Zephyr client
        project_key: Optional project key filter

    Returns:
        {"statuses": [...], "priorities": [...], "summary": {...}, "usage"}
    """
    logger.info(f"Getting reference data: project_key={project_key}")
    validate_project_key(project_key, required=False)
    client = get_zephyr_client(ctx)
    page_size = client.config.max_max_results

    statuses = paginate(
        lambda page: client.get_statuses({"projectKey": project_key, **page}),
        page_size
    )
    priorities = paginate(
        lambda page: client.get_priorities({"projectKey": project_key, **page}),
        page_size
    )
    logger.info(f"Retrieved {len(statuses)} statuses and {len(priorities)} priorities")

    return {
        "statuses": statuses,
        "priorities": priorities,
        "summary": {
            "totalStatuses": len(statuses),
            "totalPriorities": len(priorities)
        },
        "usage": "Use these values for status_name and priority_name when creating test cases, "
                 "and their IDs for status_id and priority_id when updating them"
    }


TOOLS = [
    ToolSpec(
        name="list_statuses",
        description="List all available test case statuses (e.g., Draft, Ready, Approved)",
        handler=list_statuses,
    ),
    ToolSpec(
        name="list_priorities",
        description="List all available test case priorities (e.g., High, Medium, Low)",
        handler=list_priorities,
    ),
    ToolSpec(
        name="get_reference_data",
        description="Get all reference data (statuses and priorities) in a single call",
        handler=get_reference_data,
    ),
]
