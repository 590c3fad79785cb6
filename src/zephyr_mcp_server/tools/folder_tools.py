"""Zephyr MCP Server - Folder Tools

MCP tools for Zephyr folders:
- List folders (optionally by project, parent folder and type)
- Get a folder by ID
- Create a folder
"""
from typing import Annotated, Optional, Dict, Any
import logging

from mcp.server.fastmcp import Context
from pydantic import Field, ValidationError as PydanticValidationError

from ..dependencies import get_zephyr_client
from ..models.folder import NewFolder, FolderType, FOLDER_TYPES
from ..utils.errors import ValidationError
from ..utils.responses import enveloped
from ..utils.validation import (
    first_error,
    require,
    resolve_page,
    validate_numeric_id,
    validate_project_key,
    NUMERIC_ID_PATTERN,
    PROJECT_KEY_PATTERN,
)
from .project_tools import MaxResults, StartAt, page_summary
from .registry import ToolSpec

logger = logging.getLogger(__name__)


def _validate_folder_type(folder_type: Optional[str]) -> None:
    if folder_type is not None and folder_type not in FOLDER_TYPES:
        raise ValidationError(
            f"folder_type must be one of: {', '.join(FOLDER_TYPES)}",
            field="folder_type"
        )


@enveloped("fetching folders")
async def list_folders(
    ctx: Context,
    project_key: Annotated[
        Optional[str], Field(description="Jira project key to filter folders", pattern=PROJECT_KEY_PATTERN)
    ] = None,
    folder_id: Annotated[
        Optional[str], Field(description="Parent folder ID to list subfolders", pattern=NUMERIC_ID_PATTERN)
    ] = None,
    folder_type: Annotated[
        Optional[FolderType], Field(description="Folder type filter: TEST_CASE, TEST_PLAN or TEST_CYCLE")
    ] = None,
    max_results: MaxResults = None,
    start_at: StartAt = None
) -> Dict[str, Any]:
    """List folders in a project or under a specific folder.

    Args:
        ctx: MCP context with Zephyr client
        project_key: Optional project key filter
        folder_id: Optional parent folder ID
        folder_type: Optional folder type filter
        max_results: Page size (default: 50, max: 1000)
        start_at: Pagination offset (default: 0)

    Returns:
        {"folders": [...], "total", "startAt", "maxResults", "isLast"}
    """
    logger.info(f"Listing folders: project_key={project_key}, folder_id={folder_id}, folder_type={folder_type}")
    client = get_zephyr_client(ctx)

    validate_project_key(project_key, required=False)
    validate_numeric_id(folder_id, "folder_id", required=False)
    _validate_folder_type(folder_type)
    page = resolve_page(max_results, start_at, client.config.default_max_results, client.config.max_max_results)

    params = {
        "projectKey": project_key,
        "folderId": folder_id,
        "folderType": folder_type,
        **page
    }
    response = client.get_folders(params)
    return page_summary(response, "folders", page)


@enveloped("fetching folder {folder_id}")
async def get_folder(
    ctx: Context,
    folder_id: Annotated[str, Field(description="Folder ID to retrieve", pattern=NUMERIC_ID_PATTERN)]
) -> Dict[str, Any]:
    """Get detailed information about a specific folder.

    Args:
        ctx: MCP context with Zephyr client
        folder_id: Numeric folder ID

    Returns:
        Folder data
    """
    logger.info(f"Getting folder: folder_id={folder_id}")
    folder_id_value = validate_numeric_id(folder_id, "folder_id")
    client = get_zephyr_client(ctx)

    return client.get_folder(folder_id_value)


@enveloped("creating folder")
async def create_folder(
    ctx: Context,
    name: Annotated[str, Field(description="Name of the folder to create", min_length=1, max_length=255)],
    project_key: Annotated[
        str, Field(description="Jira project key where the folder will be created", pattern=PROJECT_KEY_PATTERN)
    ],
    parent_folder_id: Annotated[
        Optional[str], Field(description="Optional parent folder ID to create a subfolder", pattern=NUMERIC_ID_PATTERN)
    ] = None,
    folder_type: Annotated[
        Optional[FolderType], Field(description="Folder type (default: TEST_CASE)")
    ] = None
) -> Dict[str, Any]:
    """Create a new folder in a project.

    Args:
        ctx: MCP context with Zephyr client
        name: Folder name (1-255 characters)
        project_key: Project key
        parent_folder_id: Optional parent folder ID
        folder_type: TEST_CASE (default), TEST_PLAN or TEST_CYCLE

    Returns:
        {"message": ..., "folder": <created folder reference>}
    """
    logger.info(f"Creating folder: name='{name}', project_key={project_key}, parent={parent_folder_id}")
    require(name, "name", "folder name is required")
    validate_project_key(project_key)
    _validate_folder_type(folder_type)
    parent_id = validate_numeric_id(parent_folder_id, "parent_folder_id", required=False)

    try:
        folder = NewFolder(
            name=name,
            projectKey=project_key,
            folderType=folder_type or "TEST_CASE",
            parentId=parent_id
        )
    except PydanticValidationError as e:
        raise first_error(e)

    client = get_zephyr_client(ctx)
    result = client.create_folder(folder.to_api_dict())
    logger.info(f"Created folder successfully: {result}")

    return {
        "message": "Folder created successfully",
        "folder": result
    }


TOOLS = [
    ToolSpec(
        name="list_folders",
        description="List folders in a project or specific folder",
        handler=list_folders,
    ),
    ToolSpec(
        name="get_folder",
        description="Get detailed information about a specific folder",
        handler=get_folder,
    ),
    ToolSpec(
        name="create_folder",
        description="Create a new folder in a project",
        handler=create_folder,
        read_only=False,
    ),
]
