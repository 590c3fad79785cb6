"""Zephyr MCP Server Tools

This package contains all MCP tool implementations for Zephyr Scale Cloud.
Each module exposes a ``TOOLS`` list of ToolSpecs; ``build_registry`` gathers
them into one registry shared by the MCP server and the CLI.
"""

from . import (
    folder_tools,
    project_tools,
    reference_data_tools,
    test_case_tools,
    test_script_tools,
    test_steps_tools,
)
from .registry import ToolRegistry, ToolSpec

ALL_TOOLS = [
    *project_tools.TOOLS,
    *folder_tools.TOOLS,
    *test_case_tools.TOOLS,
    *test_steps_tools.TOOLS,
    *test_script_tools.TOOLS,
    *reference_data_tools.TOOLS,
]


def build_registry() -> ToolRegistry:
    """Build a registry holding every Zephyr tool."""
    return ToolRegistry(ALL_TOOLS)


__all__ = [
    "ALL_TOOLS",
    "ToolRegistry",
    "ToolSpec",
    "build_registry",
    "folder_tools",
    "project_tools",
    "reference_data_tools",
    "test_case_tools",
    "test_script_tools",
    "test_steps_tools",
]
