"""Zephyr Folder Data Model"""

from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, Field

FolderType = Literal["TEST_CASE", "TEST_PLAN", "TEST_CYCLE"]
FOLDER_TYPES = ("TEST_CASE", "TEST_PLAN", "TEST_CYCLE")


class NewFolder(BaseModel):
    """Data required to create a Zephyr folder."""

    name: str = Field(min_length=1, max_length=255, description="Folder name")
    projectKey: str = Field(description="Jira project key")
    folderType: FolderType = Field(default="TEST_CASE", description="Folder type")
    parentId: Optional[int] = Field(default=None, ge=1, description="Parent folder ID")

    def to_api_dict(self) -> Dict[str, Any]:
        """Build the POST /folders body."""
        return self.model_dump(exclude_none=True)
